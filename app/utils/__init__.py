from .responses import ok, created, error
from .auth import Identity, auth_required, role_required, current_identity
from .validation import has_required_fields, parse_payload, validate_schema, json_body
from .db import transactional, DuplicateKeyError
from .jwt import (
    create_access_token,
    create_refresh_token,
    issue_token_pair,
    decode_token,
    TokenError,
)

__all__ = [
    'ok',
    'created',
    'error',
    'Identity',
    'auth_required',
    'role_required',
    'current_identity',
    'create_access_token',
    'create_refresh_token',
    'issue_token_pair',
    'decode_token',
    'TokenError',
    'has_required_fields',
    'parse_payload',
    'validate_schema',
    'json_body',
    'transactional',
    'DuplicateKeyError',
]
