from flask import Blueprint, request
from app.version import API_PREFIX
from app.schemas.auth import RefreshRequest
from app.utils import decode_token, error, issue_token_pair, ok, TokenError, validate_schema
from models import db
from models.account import Account

auth_bp = Blueprint("auth", __name__, url_prefix=API_PREFIX)


@auth_bp.route("/auth/refresh", methods=["POST"])
@validate_schema(RefreshRequest)
def refresh_tokens():
    data: RefreshRequest = request.validated_data
    try:
        payload = decode_token(data.refreshToken, expected_type="refresh")
    except TokenError as e:
        return error(str(e), status=401)

    account = db.session.get(Account, payload.get("sub"))
    if not account:
        return error("Account not found", status=401)
    return ok(issue_token_pair(account.id, account.role.value), message="Tokens refreshed")
