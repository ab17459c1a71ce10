"""OTP-gated signup and login for wholesaler accounts."""
import logging
import secrets
import string
from datetime import datetime
from flask import current_app
from models import db
from models.account import Account, OneTimeCode
from models.enums import Role
from models.wholesaler import WholesalerProfile
from app.exceptions import Conflict, Expired, Forbidden, NotFound, Unauthorized, ValidationError
from app.schemas.auth import LoginRequest, SignupRequest
from app.tasks.notifications import send_otp_message_task
from app.utils import DuplicateKeyError, has_required_fields, parse_payload, transactional

logger = logging.getLogger(__name__)

SIGNUP_FIELDS = ("name", "phoneNumber", "email", "otp")
LOGIN_FIELDS = ("phoneNumber", "otp")
DUPLICATE_ACCOUNT_MESSAGE = "Phone number or email already exists"


def generate_otp(length: int) -> str:
    return "".join(secrets.choice(string.digits) for _ in range(length))


def issue_otp(phone_number: str) -> None:
    """Store a fresh code for ``phone_number`` and hand it to the SMS task."""
    cfg = current_app.config
    code = generate_otp(cfg["OTP_LENGTH"])
    with transactional("Failed to create OTP"):
        db.session.add(OneTimeCode(phone_number=phone_number, code=code, created_at=datetime.utcnow()))

    ttl = cfg["OTP_EXPIRY_MINUTES"]
    if cfg.get("TESTING"):
        send_otp_message_task(phone_number, code, ttl)
    else:
        # undelivered messages are dropped once the code has expired
        send_otp_message_task.apply_async((phone_number, code, ttl), expires=ttl * 60)


def _verify_otp(phone_number: str, code: str) -> OneTimeCode:
    """Check the most recent code for the phone. Expiry wins over a mismatch."""
    record = (
        OneTimeCode.query.filter_by(phone_number=phone_number)
        .order_by(OneTimeCode.created_at.desc())
        .first()
    )
    if not record:
        # reported as a bad request, not a missing resource
        raise NotFound("OTP not found for this phone number", status=400)
    if record.is_expired(ttl_minutes=current_app.config["OTP_EXPIRY_MINUTES"]):
        raise Expired("OTP has expired")
    if not secrets.compare_digest(record.code.encode(), code.encode()):
        logger.warning("OTP mismatch for phone ending %s", phone_number[-4:])
        raise Unauthorized("Invalid OTP")
    return record


def _consume_otps(phone_number: str) -> None:
    OneTimeCode.query.filter_by(phone_number=phone_number).delete(synchronize_session=False)


def _reject_existing(account: Account) -> None:
    if account.role is not Role.wholesaler:
        raise Forbidden("Phone number registered with a different role")
    if account.has_shop_detail:
        raise Conflict("Wholesaler already exists with profile")
    raise Conflict("Wholesaler profile not created, please create profile")


def signup_wholesaler(data: dict) -> Account:
    """Create a verified wholesaler account and its empty shop profile.

    The account check runs before the OTP lookup, so repeating a successful
    signup reports the account state instead of the consumed code.
    """
    if not has_required_fields(data, SIGNUP_FIELDS):
        raise ValidationError("Name, phone number, email, and OTP are required")
    req = parse_payload(SignupRequest, data)

    existing = Account.query.filter_by(phone_number=req.phoneNumber).first()
    if existing:
        _reject_existing(existing)

    _verify_otp(req.phoneNumber, req.otp)

    if Account.query.filter_by(email=req.email).first():
        raise Conflict(DUPLICATE_ACCOUNT_MESSAGE)

    account = Account(
        name=req.name,
        phone_number=req.phoneNumber,
        email=req.email,
        role=Role.wholesaler,
        is_phone_verified=True,
        has_shop_detail=False,
    )
    try:
        with transactional("Failed to sign up wholesaler"):
            db.session.add(account)
            db.session.flush()
            db.session.add(WholesalerProfile(wholesaler_id=account.id))
            _consume_otps(req.phoneNumber)
    except DuplicateKeyError:
        raise Conflict(DUPLICATE_ACCOUNT_MESSAGE)

    logger.info("Wholesaler %s signed up", account.id)
    return account


def login_wholesaler(data: dict) -> Account:
    if not has_required_fields(data, LOGIN_FIELDS):
        raise ValidationError("Phone number and OTP are required")
    req = parse_payload(LoginRequest, data)

    _verify_otp(req.phoneNumber, req.otp)
    account = Account.query.filter_by(phone_number=req.phoneNumber).first()
    if not account:
        raise NotFound("Wholesaler not found")
    if account.role is not Role.wholesaler:
        raise Forbidden("Phone number registered with a different role")

    with transactional("Failed to log in wholesaler"):
        _consume_otps(req.phoneNumber)
    return account
