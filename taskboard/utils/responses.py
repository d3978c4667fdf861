from flask import jsonify, request

from taskboard.errors import ValidationError


def success(data=None, status=200):
    return jsonify(success=True, data=data), status


def failure(message, status=400):
    return jsonify(success=False, error=message), status


def json_body():
    """The request's JSON object; an absent or unparsable body reads as empty."""
    payload = request.get_json(silent=True)
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise ValidationError("Request body must be a JSON object")
    return payload
