"""Exception handlers mapping domain errors to JSON responses.

Error Response Format:
    {
        "success": false,
        "error": "Short error title",
        "message": "Human-readable detail"   (optional)
    }

Internal failures (hashing, session binding, anything unhandled) are logged
with full detail and answered with a generic 500.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.security import LOGIN_URL
from domain.model.errors import (
    AccountInactiveError,
    AuthenticationRequiredError,
    ConflictError,
    DomainError,
    DuplicateError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
)

logger = logging.getLogger(__name__)


def _error(status_code: int, error: str, **extra) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": error, **extra},
    )


async def authentication_required_handler(request: Request, exc: AuthenticationRequiredError) -> JSONResponse:
    return _error(
        status.HTTP_401_UNAUTHORIZED,
        "Authentication required",
        message=str(exc),
        loginUrl=LOGIN_URL,
    )


async def account_inactive_handler(request: Request, exc: AccountInactiveError) -> JSONResponse:
    return _error(status.HTTP_403_FORBIDDEN, "Account inactive", message=str(exc))


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    """Map remaining domain errors by type; unknown ones are internal failures."""
    if isinstance(exc, ValidationError):
        return _error(status.HTTP_400_BAD_REQUEST, "Validation failed", details=exc.errors)
    if isinstance(exc, NotFoundError):
        return _error(status.HTTP_404_NOT_FOUND, str(exc))
    if isinstance(exc, (DuplicateError, ConflictError)):
        return _error(status.HTTP_409_CONFLICT, str(exc))
    if isinstance(exc, PermissionDeniedError):
        return _error(status.HTTP_403_FORBIDDEN, "Authorization failed", message=str(exc))

    logger.error(
        "Internal domain error",
        exc_info=exc,
        extra={"error_type": type(exc).__name__, "path": request.url.path},
    )
    return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = []
    for err in exc.errors():
        location = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
        details.append(f"{location}: {err.get('msg')}" if location else err.get("msg"))
    return _error(status.HTTP_400_BAD_REQUEST, "Validation failed", details=details)


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Unknown routes get the route-not-found body; other HTTP errors the common envelope."""
    if exc.status_code == status.HTTP_404_NOT_FOUND and exc.detail == "Not Found":
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={
                "error": "Route not found",
                "message": f"The route {request.url.path} does not exist",
            },
        )
    response = _error(exc.status_code, str(exc.detail))
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "Unhandled exception",
        exc_info=exc,
        extra={"error_type": type(exc).__name__, "path": request.url.path},
    )
    return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


def setup_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the app."""
    app.add_exception_handler(AuthenticationRequiredError, authentication_required_handler)
    app.add_exception_handler(AccountInactiveError, account_inactive_handler)
    app.add_exception_handler(DomainError, domain_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
