from datetime import datetime

from models import db, new_id


class RetailerProfile(db.Model):
    __tablename__ = "retailer_profile"

    id = db.Column(db.String(32), primary_key=True, default=new_id)
    account_id = db.Column(db.String(32), db.ForeignKey("account.id"), nullable=True)
    name = db.Column(db.String(100), nullable=False)
    phone_number = db.Column(db.String(10), nullable=False)
    address = db.Column(db.String(200), nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    def summary(self):
        return {
            "id": self.id,
            "name": self.name,
            "phoneNumber": self.phone_number,
            "address": self.address,
        }
