"""Request body helpers."""

from typing import Any

from flask import request

from bizledger.domain.errors import ValidationError


def json_body() -> dict[str, Any]:
    """Return the request body as a JSON object.

    Raises:
        ValidationError: If the body is missing, not JSON, or not an object
    """
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        raise ValidationError("Request body must be a JSON object")
    return body
