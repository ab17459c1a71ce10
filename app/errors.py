import logging
from flask import Blueprint, request
from werkzeug.exceptions import HTTPException, RequestEntityTooLarge
from app.exceptions import ServiceError
from app.utils.responses import error

logger = logging.getLogger(__name__)

errors_bp = Blueprint("errors_bp", __name__)


@errors_bp.app_errorhandler(ServiceError)
def handle_service_error(e):
    logger.info("%s %s rejected: %s (%s)", request.method, request.path, e.message, e.status)
    return error(e.message, status=e.status)


@errors_bp.app_errorhandler(RequestEntityTooLarge)
def handle_too_large(e):
    return error("Uploaded file is too large", status=413)


@errors_bp.app_errorhandler(HTTPException)
def handle_http_exception(e):
    return error(e.description or e.name, status=e.code)


@errors_bp.app_errorhandler(Exception)
def handle_unexpected_exception(e):
    logger.exception("Unhandled exception on %s %s", request.method, request.path)
    return error("An unexpected error occurred. Please try again later.", status=500)
