from functools import wraps
from typing import Iterable, Type, TypeVar
from flask import request
from pydantic import BaseModel, ValidationError as PydanticValidationError
from app.exceptions import ValidationError
from .responses import first_error_message, validation_error_response

M = TypeVar("M", bound=BaseModel)


def has_required_fields(data: dict, required: Iterable[str]) -> bool:
    """Return True if every required field is present and non-empty."""
    if not isinstance(data, dict):
        return False
    return all(data.get(field) not in (None, "", [], {}) for field in required)


def parse_payload(schema: Type[M], data: dict) -> M:
    """Build ``schema`` from ``data`` or raise ``ValidationError``."""
    try:
        return schema(**data)
    except PydanticValidationError as ve:
        raise ValidationError(first_error_message(ve.errors())) from ve


def validate_schema(schema):
    """Decorator to validate request JSON against a Pydantic schema."""

    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            try:
                obj = schema(**json_body())
            except PydanticValidationError as ve:
                return validation_error_response(ve.errors())
            request.validated_data = obj
            return fn(*args, **kwargs)
        return wrapper

    return decorator


def json_body() -> dict:
    """Request JSON as a dict; anything else is treated as an empty body."""
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}
