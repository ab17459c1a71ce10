from .auth import auth_bp
from .wholesaler import wholesaler_bp
from .orders import orders_bp
from .categories import categories_bp


__all__ = [
    'auth_bp',
    'wholesaler_bp',
    'orders_bp',
    'categories_bp',
]
