"""Error kinds, domain exceptions and the HTTP error boundary.

Services raise subclasses of :class:`ServiceError`. Route handlers translate
them into :class:`ApiError` with a deliberately generic message, and the
handlers registered by :func:`register_error_handlers` turn that into a JSON
response. The status code for each kind is decided only in ``STATUS_CODES``.
"""
import enum
import logging

from flask import jsonify
from werkzeug.exceptions import HTTPException

logger = logging.getLogger(__name__)


class ErrorKind(enum.Enum):
    UNAUTHENTICATED = enum.auto()
    VALIDATION_FAILURE = enum.auto()
    NOT_FOUND = enum.auto()
    STORE_FAILURE = enum.auto()


STATUS_CODES = {
    ErrorKind.UNAUTHENTICATED: 401,
    ErrorKind.VALIDATION_FAILURE: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.STORE_FAILURE: 500,
}


class ServiceError(Exception):
    """Base class for failures raised below the API layer."""
    kind = ErrorKind.STORE_FAILURE


class ValidationFailure(ServiceError):
    kind = ErrorKind.VALIDATION_FAILURE


class DuplicateKey(ValidationFailure):
    """A unique field (username, email) is already taken."""


class InvalidCredentials(ValidationFailure):
    """Unknown email or wrong password. The two are never told apart."""


class InvalidToken(ServiceError):
    kind = ErrorKind.UNAUTHENTICATED


class NotFound(ServiceError):
    """No record matches the id for this owner."""
    kind = ErrorKind.NOT_FOUND


class StoreFailure(ServiceError):
    kind = ErrorKind.STORE_FAILURE


class ApiError(Exception):
    def __init__(self, kind, message):
        super().__init__(message)
        self.kind = kind
        self.message = message

    @property
    def status_code(self):
        return STATUS_CODES[self.kind]


def error_response(message, status_code):
    return jsonify({"error": message}), status_code


def register_error_handlers(app):
    @app.errorhandler(ApiError)
    def handle_api_error(error):
        return error_response(error.message, error.status_code)

    @app.errorhandler(HTTPException)
    def handle_http_exception(error):
        return error_response(error.name, error.code)

    @app.errorhandler(Exception)
    def handle_unexpected(error):
        logger.exception("Unhandled error while serving request")
        return error_response("Internal server error", 500)
