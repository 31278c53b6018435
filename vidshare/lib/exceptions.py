"""Error taxonomy and the exception handlers that render the failure envelope.

Every service-level error is a Litestar ``HTTPException`` subclass carrying
its status code, so routes never translate errors by hand. The handlers emit
``{"statusCode": ..., "message": ...}`` with the same code as the HTTP status.
"""

import logging

from litestar import MediaType, Request, Response
from litestar.exceptions import HTTPException
from litestar.status_codes import (
    HTTP_400_BAD_REQUEST,
    HTTP_401_UNAUTHORIZED,
    HTTP_403_FORBIDDEN,
    HTTP_404_NOT_FOUND,
    HTTP_409_CONFLICT,
    HTTP_500_INTERNAL_SERVER_ERROR,
)
from sqlalchemy.exc import IntegrityError

from vidshare.lib import observability

logger = logging.getLogger(__name__)


class ValidationError(HTTPException):
    """Missing or malformed input."""

    status_code = HTTP_400_BAD_REQUEST


class InvalidReference(ValidationError):
    """An entity id that is not a well-formed reference."""


class InvalidOperation(ValidationError):
    """A well-formed request that is not allowed, such as self-subscription."""


class Unauthenticated(HTTPException):
    status_code = HTTP_401_UNAUTHORIZED


class Forbidden(HTTPException):
    status_code = HTTP_403_FORBIDDEN


class NotFound(HTTPException):
    status_code = HTTP_404_NOT_FOUND


class Conflict(HTTPException):
    status_code = HTTP_409_CONFLICT


class InternalError(HTTPException):
    status_code = HTTP_500_INTERNAL_SERVER_ERROR


class UploadError(InternalError):
    """The media store rejected or failed an upload."""


def error_response(status_code: int, message: str, errors: list | None = None, headers=None) -> Response:
    content: dict = {"statusCode": status_code, "message": message}
    if errors:
        content["errors"] = errors
    return Response(
        content=content,
        status_code=status_code,
        media_type=MediaType.JSON,
        headers=headers,
    )


def http_exception_handler(request: Request, exc: HTTPException) -> Response:
    """Render any HTTPException, including framework validation failures."""
    status_code = exc.status_code
    detail = exc.detail if isinstance(exc.detail, str) else str(exc.detail)

    if status_code >= HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error("%s on %s %s: %s", type(exc).__name__, request.method, request.url.path, detail)

    errors = exc.extra if isinstance(exc.extra, list) else None
    return error_response(status_code, detail, errors=errors, headers=exc.headers)


def integrity_error_handler(request: Request, exc: IntegrityError) -> Response:
    """Unique-key violations that slipped past a service pre-check."""
    logger.warning("Integrity conflict on %s %s: %s", request.method, request.url.path, exc.orig)
    return error_response(HTTP_409_CONFLICT, "Resource already exists")


def internal_server_error_handler(request: Request, exc: Exception) -> Response:
    """Log unexpected exceptions and hide their details from the caller."""
    method = request.method
    path = request.url.path
    if not observability.exception("Unhandled exception on {method} {path}", method=method, path=path):
        logger.exception("Unhandled exception on %s %s", method, path, exc_info=exc)

    return error_response(HTTP_500_INTERNAL_SERVER_ERROR, "Something went wrong")
