from dataclasses import dataclass
from functools import wraps
from typing import Optional
from flask import request, g
from .responses import error
from app.auth.permissions import role_has_scope
from .jwt import decode_token, TokenError
from models import db
from models.account import Account
from models.enums import Role


@dataclass(frozen=True)
class Identity:
    """The authenticated caller, handed explicitly to every workflow."""

    account_id: str
    role: Role


def current_identity() -> Identity:
    return g.identity


def _bearer_token() -> Optional[str]:
    header = request.headers.get("Authorization", "").strip()
    if not header:
        return None
    scheme, _, token = header.partition(" ")
    return token.strip() if scheme.lower() == "bearer" and token else header


def auth_required(func):
    """Resolve the bearer token to an ``Identity`` on ``g`` or answer 401."""

    @wraps(func)
    def wrapper(*args, **kwargs):
        token = _bearer_token()
        if not token:
            return error("Auth header missing", status=401)
        try:
            payload = decode_token(token, expected_type="access")
        except TokenError as e:
            return error(str(e), status=401)

        account = db.session.get(Account, payload["sub"])
        if not account:
            return error("Account not found", status=401)
        g.identity = Identity(account_id=account.id, role=account.role)
        return func(*args, **kwargs)

    return wrapper


def _allows(role: str, entry: str) -> bool:
    wanted, _, action = entry.partition(":")
    if role != wanted:
        return False
    return not action or role_has_scope(role, action)


def role_required(required):
    """Authorize on account role or a scoped action ("Role:action")."""
    entries = set(required) if isinstance(required, (list, tuple, set)) else {required}

    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            identity = getattr(g, "identity", None)
            if identity is None:
                return error("Role missing", status=403)
            if not any(_allows(identity.role.value, entry) for entry in entries):
                return error("Forbidden", status=403)
            return fn(*args, **kwargs)

        return wrapper

    return decorator
