# --- models/account.py ---
from datetime import datetime, timedelta

from models import db, new_id, enum_column
from models.enums import Role


# --- Account Model ---

class Account(db.Model):
    __tablename__ = "account"

    id = db.Column(db.String(32), primary_key=True, default=new_id)
    name = db.Column(db.String(50), nullable=False)
    phone_number = db.Column(db.String(10), unique=True, nullable=False)
    email = db.Column(db.String(254), unique=True, nullable=False)
    role = enum_column(Role, nullable=False, default=Role.wholesaler)
    is_phone_verified = db.Column(db.Boolean, default=False, nullable=False)
    has_shop_detail = db.Column(db.Boolean, default=False, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f"<Account id={self.id} role={self.role}>"

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "phoneNumber": self.phone_number,
            "email": self.email,
            "role": self.role.value,
            "isPhoneVerified": self.is_phone_verified,
            "hasShopDetail": self.has_shop_detail,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }


# --- OTP Model ---

class OneTimeCode(db.Model):
    __tablename__ = "phone_otp"
    __table_args__ = (
        db.Index("ix_phone_otp_phone_created", "phone_number", "created_at"),
    )

    id = db.Column(db.Integer, primary_key=True)
    phone_number = db.Column(db.String(10), nullable=False)
    code = db.Column(db.String(6), nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    def __repr__(self):
        return f"<OneTimeCode phone={self.phone_number}>"

    def is_expired(self, now=None, ttl_minutes=5):
        now = now or datetime.utcnow()
        return now - self.created_at > timedelta(minutes=ttl_minutes)
