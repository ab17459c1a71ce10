"""Failures a workflow reports back to its caller.

Each carries the HTTP status the errors blueprint answers with.
"""


class ServiceError(Exception):
    status = 400

    def __init__(self, message, status=None):
        super().__init__(message)
        self.message = message
        if status is not None:
            self.status = status


class ValidationError(ServiceError):
    status = 400


class NotFound(ServiceError):
    status = 404


class Unauthorized(ServiceError):
    status = 401


class Forbidden(ServiceError):
    status = 403


class Conflict(ServiceError):
    status = 400


class Expired(ServiceError):
    status = 400


class UploadError(ServiceError):
    status = 400


__all__ = [
    "ServiceError",
    "ValidationError",
    "NotFound",
    "Unauthorized",
    "Forbidden",
    "Conflict",
    "Expired",
    "UploadError",
]
