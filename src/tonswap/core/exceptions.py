"""Application error types and the handler that renders them.

Services raise one of the classes below; routes let them propagate and the
handler registered in ``main`` answers with ``{"detail", "error_code"}`` and
the class's HTTP status.

    AppException                500
    ├── ValidationError         400  bad rate, referral code, amount or pair
    ├── AuthenticationError     401  wrong credentials
    ├── PermissionDeniedError   403  caller may not touch the resource
    ├── NotFoundError           404  unknown user, wallet or voucher card
    ├── ConflictError           409  email, username or referral code taken
    └── ExternalAPIError        503  transfer gateway rejected, expired or unreachable

Example:
    if rate <= 0:
        raise ValidationError("Exchange rate must be greater than zero")
"""

import logging
from typing import Any

from fastapi import Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class AppException(Exception):
    """Base class carrying an HTTP status, a message and a machine-readable code."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    detail: str = "Internal server error"
    error_code: str | None = None

    def __init__(self, detail: str | None = None, *, error_code: str | None = None) -> None:
        self.detail = detail or type(self).detail
        self.error_code = error_code or type(self).error_code
        super().__init__(self.detail)


class ValidationError(AppException):
    """Input breaks a business rule; nothing has been written."""

    status_code = status.HTTP_400_BAD_REQUEST
    detail = "Validation error"
    error_code = "VALIDATION_ERROR"


class AuthenticationError(AppException):
    status_code = status.HTTP_401_UNAUTHORIZED
    detail = "Authentication failed"
    error_code = "AUTHENTICATION_ERROR"


class PermissionDeniedError(AppException):
    status_code = status.HTTP_403_FORBIDDEN
    detail = "Not enough privileges"
    error_code = "PERMISSION_DENIED"


class NotFoundError(AppException):
    """Requested record does not exist.

    Rate lookups never raise this; they fall back to the pair default.
    """

    status_code = status.HTTP_404_NOT_FOUND
    detail = "Resource not found"
    error_code = "NOT_FOUND"


class ConflictError(AppException):
    status_code = status.HTTP_409_CONFLICT
    detail = "Resource conflict"
    error_code = "CONFLICT"


class ExternalAPIError(AppException):
    """The transfer gateway (or another upstream) did not confirm the call."""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    detail = "External service unavailable"
    error_code = "EXTERNAL_API_ERROR"


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Render an ``AppException`` as JSON.

    Server-side failures (5xx) are logged as errors with the traceback,
    client errors as warnings.
    """
    context = {
        "status_code": exc.status_code,
        "error_code": exc.error_code,
        "request_path": request.url.path,
    }
    message = f"{type(exc).__name__}: {exc.detail}"
    if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error(message, exc_info=exc, extra=context)
    else:
        logger.warning(message, extra=context)

    body: dict[str, Any] = {"detail": exc.detail}
    if exc.error_code:
        body["error_code"] = exc.error_code
    return JSONResponse(status_code=exc.status_code, content=body)
