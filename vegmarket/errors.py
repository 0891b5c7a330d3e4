"""
Error Types and JSON Error Handlers

Service functions raise MarketError subclasses; the handlers registered here
turn them (and the usual HTTP errors) into JSON responses.
"""

import logging

from flask import jsonify
from werkzeug.exceptions import HTTPException

logger = logging.getLogger(__name__)


class MarketError(Exception):
    """Base class for domain rule violations."""
    status_code = 400

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(MarketError):
    status_code = 400


class PermissionDenied(MarketError):
    status_code = 403


class NotFound(MarketError):
    status_code = 404


class Conflict(MarketError):
    status_code = 409


def error_response(message, status_code):
    return jsonify({'error': message}), status_code


def register_error_handlers(app):
    """Register JSON error handlers on the application."""

    @app.errorhandler(MarketError)
    def handle_market_error(error):
        return error_response(error.message, error.status_code)

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        return error_response(error.description, error.code)

    @app.errorhandler(Exception)
    def handle_unexpected_error(error):
        logger.exception('Unhandled error: %s', error)
        return error_response('Internal server error', 500)
