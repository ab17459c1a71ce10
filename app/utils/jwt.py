"""HS256 access and refresh tokens.

Both carry the account id as ``sub`` and a ``type`` claim; access tokens also
carry the role so route guards can authorise without another lookup.
"""
import datetime as dt
from typing import Dict
import jwt
from flask import current_app

ALGORITHM = "HS256"
ACCESS = "access"
REFRESH = "refresh"


class TokenError(Exception):
    pass


def _encode(claims: Dict, lifetime: dt.timedelta) -> str:
    payload = dict(claims, exp=dt.datetime.now(dt.timezone.utc) + lifetime)
    return jwt.encode(payload, current_app.config["JWT_SECRET"], algorithm=ALGORITHM)


def create_access_token(account_id: str, role: str) -> str:
    minutes = current_app.config["ACCESS_TOKEN_LIFETIME_MIN"]
    return _encode({"sub": account_id, "role": role, "type": ACCESS}, dt.timedelta(minutes=minutes))


def create_refresh_token(account_id: str) -> str:
    days = current_app.config["REFRESH_TOKEN_LIFETIME_DAYS"]
    return _encode({"sub": account_id, "type": REFRESH}, dt.timedelta(days=days))


def issue_token_pair(account_id: str, role: str) -> Dict:
    return {
        "accessToken": create_access_token(account_id, role),
        "refreshToken": create_refresh_token(account_id),
        "expiresIn": current_app.config["ACCESS_TOKEN_LIFETIME_MIN"] * 60,
    }


def decode_token(token: str, expected_type: str = ACCESS) -> Dict:
    try:
        data = jwt.decode(token, current_app.config["JWT_SECRET"], algorithms=[ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise TokenError("token expired")
    except jwt.InvalidTokenError:
        raise TokenError("invalid token")

    if data.get("type") != expected_type:
        raise TokenError(f"expected {expected_type} token")
    return data
