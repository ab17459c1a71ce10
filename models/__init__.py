import re
import uuid

from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()

ID_PATTERN = re.compile(r"[0-9a-f]{32}")


def new_id() -> str:
    """Primary keys are 32-char lowercase hex strings."""
    return uuid.uuid4().hex


def is_valid_id(value) -> bool:
    return isinstance(value, str) and ID_PATTERN.fullmatch(value) is not None


def enum_column(enum_cls, **kwargs):
    """Store an ``enum.Enum`` by value in a plain VARCHAR column."""
    return db.Column(
        db.Enum(
            enum_cls,
            native_enum=False,
            validate_strings=True,
            length=20,
            values_callable=lambda members: [m.value for m in members],
        ),
        **kwargs,
    )


# Re-export common models for convenience
from .enums import Role, KycStatus, OrderStatus  # noqa: F401,E402
from .account import Account, OneTimeCode  # noqa: F401,E402
from .wholesaler import WholesalerProfile  # noqa: F401,E402
from .retailer import RetailerProfile  # noqa: F401,E402
from .order import Order  # noqa: F401,E402
from .category import Category  # noqa: F401,E402
