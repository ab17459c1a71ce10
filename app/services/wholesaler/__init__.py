from .auth import issue_otp, signup_wholesaler, login_wholesaler
from .profile import create_shop_profile

__all__ = [
    "issue_otp",
    "signup_wholesaler",
    "login_wholesaler",
    "create_shop_profile",
]
