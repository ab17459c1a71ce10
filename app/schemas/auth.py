import re
from pydantic import BaseModel, AfterValidator, BeforeValidator
from typing import Annotated

NAME_PATTERN = re.compile(r"[a-zA-Z\s]{2,50}")
# digits are ASCII only; \d would also accept other scripts' digits
PHONE_PATTERN = re.compile(r"[0-9]{10}")
EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")

NAME_MESSAGE = "Invalid name format (2-50 characters, letters and spaces only)"
PHONE_MESSAGE = "Phone number must be 10 digits"
EMAIL_MESSAGE = "Invalid email format"


def _text(message: str):
    """Accept strings and JSON integers; anything else fails with ``message``."""

    def coerce(value):
        if isinstance(value, str):
            return value
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        raise ValueError(message)

    return coerce


def _matching(pattern, message: str):
    def check(value: str) -> str:
        if not pattern.fullmatch(value):
            raise ValueError(message)
        return value

    return check


def _as_text(value):
    # numeric OTPs arrive as JSON numbers from some clients
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    return value


Name = Annotated[str, BeforeValidator(_text(NAME_MESSAGE)), AfterValidator(_matching(NAME_PATTERN, NAME_MESSAGE))]
PhoneNumber = Annotated[str, BeforeValidator(_text(PHONE_MESSAGE)), AfterValidator(_matching(PHONE_PATTERN, PHONE_MESSAGE))]
Email = Annotated[str, BeforeValidator(_text(EMAIL_MESSAGE)), AfterValidator(_matching(EMAIL_PATTERN, EMAIL_MESSAGE))]
OtpCode = Annotated[str, BeforeValidator(_as_text)]


class SendOTPRequest(BaseModel):
    phoneNumber: PhoneNumber


class SignupRequest(BaseModel):
    name: Name
    phoneNumber: PhoneNumber
    email: Email
    otp: OtpCode


class LoginRequest(BaseModel):
    phoneNumber: PhoneNumber
    otp: OtpCode


class RefreshRequest(BaseModel):
    refreshToken: str
