"""Map domain errors onto HTTP responses."""

import logging

from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from bizledger.domain import errors

logger = logging.getLogger(__name__)

# Checked in order; subclasses before their bases
ERROR_STATUS: list[tuple[type[Exception], int]] = [
    (errors.AuthenticationError, 401),
    (errors.NoCompanyError, 404),
    (errors.PermissionDeniedError, 403),
    (errors.AccountNotFoundError, 400),
    (errors.DuplicateAccountError, 400),
    (errors.InsufficientFundsError, 400),
    (errors.ValidationError, 400),
    (errors.NotFoundError, 404),
    (errors.ConflictError, 409),
    (errors.DomainError, 400),
]


def status_for(error: Exception) -> int:
    """Return the HTTP status for a domain error."""
    for error_type, status in ERROR_STATUS:
        if isinstance(error, error_type):
            return status
    return 500


def register_error_handlers(app: Flask) -> None:
    """Install JSON error handlers on the application."""

    @app.errorhandler(errors.DomainError)
    def handle_domain_error(error: errors.DomainError):
        body = {"error": str(error)}
        if isinstance(error, errors.ValidationError) and error.fields:
            body["fields"] = error.fields
        if isinstance(error, errors.InsufficientFundsError):
            body["requested"] = float(error.requested)
            body["available"] = float(error.available)
        return jsonify(body), status_for(error)

    @app.errorhandler(errors.CommitFailedError)
    def handle_commit_failed(error: errors.CommitFailedError):
        # Already logged with traceback where the unit of work was rolled back
        return jsonify(error=str(error)), 500

    @app.errorhandler(HTTPException)
    def handle_http_error(error: HTTPException):
        return jsonify(error=error.description), error.code

    @app.errorhandler(Exception)
    def handle_unexpected(error: Exception):
        logger.exception("Unhandled error")
        return jsonify(error="Internal server error"), 500
