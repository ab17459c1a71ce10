from datetime import datetime

from models import db, new_id, enum_column
from models.enums import OrderStatus


class Order(db.Model):
    __tablename__ = "orders"
    __table_args__ = (
        db.Index("ix_orders_wholesaler_created", "wholesaler_id", "created_at"),
        db.Index("ix_orders_wholesaler_status", "wholesaler_id", "status"),
    )

    id = db.Column(db.String(32), primary_key=True, default=new_id)
    wholesaler_id = db.Column(db.String(32), db.ForeignKey("account.id"), nullable=False)
    retailer_id = db.Column(db.String(32), nullable=False)
    products = db.Column(db.JSON, nullable=False)  # list of line objects as submitted
    delivery_address = db.Column(db.JSON, nullable=False)
    delivery_date = db.Column(db.DateTime, nullable=True)
    order_total = db.Column(db.Float, nullable=False)
    payment_method = db.Column(db.String(30), nullable=False, default="cod")
    status = enum_column(OrderStatus, nullable=False, default=OrderStatus.pending)
    cancellation_reason = db.Column(db.Text, nullable=True)
    notes = db.Column(db.Text, nullable=True)
    vehicle_number = db.Column(db.String(20), nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    retailer = db.relationship(
        "RetailerProfile",
        primaryjoin="foreign(Order.retailer_id) == RetailerProfile.id",
        viewonly=True,
        lazy=True,
    )

    def to_dict(self):
        return {
            "id": self.id,
            "wholesalerId": self.wholesaler_id,
            "retailerId": self.retailer_id,
            "retailer": self.retailer.summary() if self.retailer else None,
            "products": self.products,
            "deliveryAddress": self.delivery_address,
            "deliveryDate": self.delivery_date.isoformat() if self.delivery_date else None,
            "orderTotal": self.order_total,
            "paymentMethod": self.payment_method,
            "status": self.status.value,
            "cancellationReason": self.cancellation_reason,
            "notes": self.notes,
            "vehicleNumber": self.vehicle_number,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }
