from flask import Blueprint, current_app, request
from flask_limiter.util import get_remote_address
from extensions import limiter
from app.version import API_PREFIX
from app.schemas.auth import SendOTPRequest
from app.services import wholesaler as wholesaler_service
from app.utils import created, issue_token_pair, json_body, ok, validate_schema

wholesaler_bp = Blueprint("wholesaler", __name__, url_prefix=f"{API_PREFIX}/wholesaler")


@wholesaler_bp.route("/send-otp", methods=["POST"])
@limiter.limit(
    lambda: current_app.config["OTP_SEND_LIMIT_PER_IP"],
    key_func=get_remote_address,
    error_message="Too many OTP requests from this IP",
)
@limiter.limit(
    lambda: current_app.config["OTP_SEND_LIMIT_PER_PHONE"],
    key_func=lambda: str(json_body().get("phoneNumber", "")),
    error_message="Too many OTP requests for this phone number",
)
@validate_schema(SendOTPRequest)
def send_otp():
    data: SendOTPRequest = request.validated_data
    wholesaler_service.issue_otp(data.phoneNumber)
    return ok(message="OTP sent")


@wholesaler_bp.route("/signup", methods=["POST"])
@limiter.limit(
    lambda: current_app.config["SIGNUP_LIMIT_PER_IP"],
    key_func=get_remote_address,
    error_message="Too many signup attempts from this IP",
)
def signup():
    """Sign up a wholesaler with a phone OTP.
    ---
    tags:
      - Wholesaler
    parameters:
      - in: body
        name: body
        required: true
        schema:
          type: object
          required: [name, phoneNumber, email, otp]
          properties:
            name: {type: string, example: Jane Doe}
            phoneNumber: {type: string, example: "9876543210"}
            email: {type: string, example: jane@example.com}
            otp: {type: string, example: "1234"}
    responses:
      201:
        description: Account created, shop profile still pending
      400:
        description: Validation failure, expired or missing OTP, existing account
      401:
        description: OTP mismatch
      403:
        description: Phone registered with another role
    """
    account = wholesaler_service.signup_wholesaler(json_body())
    data = {"wholesaler": account.to_dict()}
    data.update(issue_token_pair(account.id, account.role.value))
    return created(data, message="Wholesaler signed up successfully, please create shop profile")


@wholesaler_bp.route("/login", methods=["POST"])
@limiter.limit(
    lambda: current_app.config["LOGIN_LIMIT_PER_IP"],
    key_func=get_remote_address,
    error_message="Too many logins from this IP",
)
def login():
    account = wholesaler_service.login_wholesaler(json_body())
    data = issue_token_pair(account.id, account.role.value)
    data["hasShopDetail"] = account.has_shop_detail
    return ok(data, message="Logged in successfully")


@wholesaler_bp.route("/create-shop-profile/<wholesaler_id>", methods=["POST"])
def create_shop_profile(wholesaler_id):
    """Complete the shop profile (multipart, file field ``businessCertificate``)."""
    profile = wholesaler_service.create_shop_profile(
        wholesaler_id,
        request.form.to_dict(),
        request.files.get("businessCertificate"),
        current_app.uploader,
    )
    return created(
        {"shopProfile": profile.to_dict()},
        message="Shop profile updated successfully, awaiting admin verification",
    )
