from flask import jsonify


def envelope(status, success, message, data=None):
    payload = {"statusCode": status, "success": success, "message": message}
    if data is not None:
        payload["data"] = data
    return payload


def ok(data=None, message="success", status=200):
    return jsonify(envelope(status, True, message, data)), status


def created(data=None, message="created"):
    return ok(data, message=message, status=201)


def error(message, status=400):
    return jsonify(envelope(status, False, message)), status


def validation_error_response(errors):
    """Answer with the message of the first failing field."""
    return error(first_error_message(errors), status=400)


def first_error_message(errors) -> str:
    if not errors:
        return "Validation error"
    first = errors[0]
    ctx = first.get("ctx") or {}
    if "error" in ctx:
        return str(ctx["error"])
    return first.get("msg", "Validation error")

