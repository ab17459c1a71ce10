from datetime import datetime

from models import db, new_id, enum_column
from models.enums import KycStatus

DEFAULT_BUSINESS_HOURS = {
    "monToSat": {"open": "08:00 AM", "close": "08:00 PM"},
    "sunday": {"open": "09:00 AM", "close": "06:00 PM"},
}


def _default_hours():
    return {day: dict(slot) for day, slot in DEFAULT_BUSINESS_HOURS.items()}


class WholesalerProfile(db.Model):
    __tablename__ = "wholesaler_profile"

    id = db.Column(db.String(32), primary_key=True, default=new_id)
    wholesaler_id = db.Column(db.String(32), db.ForeignKey("account.id"), unique=True, nullable=False)
    shop_name = db.Column(db.String(100), nullable=True)
    shop_number = db.Column(db.String(50), nullable=True)
    shop_address = db.Column(db.String(200), nullable=True)
    mandi_region = db.Column(db.String(100), nullable=True)
    pincode = db.Column(db.String(6), nullable=True)
    business_hours = db.Column(db.JSON, nullable=False, default=_default_hours)
    # NULL until the profile is completed; unique once set
    gst_number = db.Column(db.String(15), unique=True, nullable=True)
    business_certificate_url = db.Column(db.String(500), nullable=True)
    kyc_status = enum_column(KycStatus, nullable=False, default=KycStatus.pending)
    is_verified = db.Column(db.Boolean, default=False, nullable=False)
    is_shop_open = db.Column(db.Boolean, default=True, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    wholesaler = db.relationship("Account", backref=db.backref("shop_profile", uselist=False), lazy=True)

    def to_dict(self):
        return {
            "id": self.id,
            "wholesalerId": self.wholesaler_id,
            "shopName": self.shop_name,
            "shopNumber": self.shop_number,
            "shopAddress": self.shop_address,
            "mandiRegion": self.mandi_region,
            "pincode": self.pincode,
            "businessHours": self.business_hours,
            "gstNumber": self.gst_number,
            "businessCertificateUrl": self.business_certificate_url,
            "kycStatus": self.kyc_status.value,
            "isVerified": self.is_verified,
            "isShopOpen": self.is_shop_open,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }
