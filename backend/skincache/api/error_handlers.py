"""Error Handlers — map exceptions raised by skin routes to the error envelope.

Invariants:
    - SkinCacheError renders its own to_response() with the kind's HTTP status
    - Request validation failures are 400 VALIDATION_ERROR with per-field details
    - Anything else is 500 INTERNAL_ERROR and never echoes the exception text
    - Expected user-facing kinds (NOT_PREMIUM, NO_SKIN, UPDATE_DISABLED) log at WARNING
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from skincache.core.errors import ErrorCategory, ErrorSeverity, SkinCacheError

logger = logging.getLogger(__name__)

_QUIET_SEVERITIES = (ErrorSeverity.INFO, ErrorSeverity.WARNING)


def _envelope(
    code: str, message: str, category: str, severity: ErrorSeverity, **extra,
) -> dict:
    return {
        "error": {
            "code": code, "message": message,
            "category": category, "severity": severity.value, **extra,
        },
    }


async def _skin_error(request: Request, exc: SkinCacheError) -> JSONResponse:
    level = logging.WARNING if exc.severity in _QUIET_SEVERITIES else logging.ERROR
    logger.log(
        level, "%s on %s: %s", exc.code, request.url.path, exc.message,
        extra={"error_code": exc.code, "path": request.url.path},
    )
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())


async def _validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = [
        {"field": ".".join(str(loc) for loc in e["loc"]), "message": e["msg"]}
        for e in exc.errors()
    ]
    logger.warning(
        "Rejected request to %s: %d invalid field(s)", request.url.path, len(details),
        extra={"error_code": "VALIDATION_ERROR", "path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_envelope(
            "VALIDATION_ERROR", "Invalid request data",
            ErrorCategory.VALIDATION.value, ErrorSeverity.ERROR, details=details,
        ),
    )


async def _unhandled_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "Unhandled %s on %s", type(exc).__name__, request.url.path,
        exc_info=exc, extra={"path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_envelope(
            "INTERNAL_ERROR", "An unexpected error occurred",
            ErrorCategory.INTERNAL.value, ErrorSeverity.CRITICAL,
        ),
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(SkinCacheError, _skin_error)
    app.add_exception_handler(RequestValidationError, _validation_error)
    app.add_exception_handler(Exception, _unhandled_error)
