"""
Error kinds and the FastAPI handlers that turn them into JSON responses.

Services raise these; routes let them propagate. Every response body is
{"detail": "<human readable message>"}, the status code carries the fault class.
"""

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from pymongo.errors import DuplicateKeyError, PyMongoError

from placement_hub.core.logging import get_logger

logger = get_logger("errors")


class PortalError(Exception):
    """Base class for every error surfaced to API callers."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Request failed"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(PortalError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class NotFoundError(PortalError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class ConflictError(PortalError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Already exists"


class AuthError(PortalError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid or expired token"


class PermissionDeniedError(PortalError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Not allowed"


class UpstreamError(PortalError):
    """An external collaborator (stats provider, mail relay) failed."""

    status_code = status.HTTP_502_BAD_GATEWAY
    default_message = "External service call failed"


class StoreError(PortalError):
    """The document store failed. Fatal to the request, not to the process."""

    default_message = "Database operation failed"


def _error_response(exc: PortalError) -> JSONResponse:
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthError) else None
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message},
        headers=headers,
    )


async def portal_error_handler(request: Request, exc: PortalError) -> JSONResponse:
    log = logger.error if exc.status_code >= 500 else logger.warning
    log("%s %s -> %s: %s", request.method, request.url.path, type(exc).__name__, exc.message)
    return _error_response(exc)


async def store_error_handler(request: Request, exc: PyMongoError) -> JSONResponse:
    if isinstance(exc, DuplicateKeyError):
        return await portal_error_handler(request, ConflictError("Duplicate value for a unique field"))
    logger.exception("%s %s -> store failure", request.method, request.url.path)
    return _error_response(StoreError())


def setup_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(PortalError, portal_error_handler)
    app.add_exception_handler(PyMongoError, store_error_handler)
