# --- models/enums.py ---
import enum


class Role(enum.Enum):
    wholesaler = "Wholesaler"
    retailer = "Retailer"
    admin = "Admin"


class KycStatus(enum.Enum):
    pending = "Pending"
    completed = "Completed"
    rejected = "Rejected"


class OrderStatus(enum.Enum):
    pending = "pending"
    confirmed = "confirmed"
    dispatched = "dispatched"
    delivered = "delivered"
    cancelled = "cancelled"
    rejected = "rejected"


# Statuses a wholesaler may write. ``pending`` is only ever the initial state.
WHOLESALER_SETTABLE_STATUSES = (
    OrderStatus.confirmed,
    OrderStatus.dispatched,
    OrderStatus.delivered,
    OrderStatus.cancelled,
    OrderStatus.rejected,
)
