"""
Error-handling middleware — maps ops-layer errors to RFC 7807 responses.
"""

from __future__ import annotations

from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse

from warden.api.schemas.common import ErrorDetail, ProblemDetail
from warden.core.errors import (
    AuthenticationError,
    AuthorizationError,
    ErrorCategory,
    WardenError,
)
from warden.core.logging import get_logger
from warden.ops.result import ErrorCode

logger = get_logger(__name__)

# ── Error code → HTTP status mapping ─────────────────────────────────────

ERROR_CODE_TO_STATUS: dict[ErrorCode, int] = {
    ErrorCode.UNAUTHENTICATED: 401,
    ErrorCode.FORBIDDEN: 403,
    ErrorCode.NOT_FOUND: 404,
    ErrorCode.CONFLICT: 409,
    ErrorCode.VALIDATION_FAILED: 422,
    ErrorCode.UNAVAILABLE: 503,
    ErrorCode.INTERNAL: 500,
}

_CATEGORY_TO_CODE: dict[ErrorCategory, ErrorCode] = {
    ErrorCategory.VALIDATION: ErrorCode.VALIDATION_FAILED,
    ErrorCategory.NOT_FOUND: ErrorCode.NOT_FOUND,
    ErrorCategory.CONFLICT: ErrorCode.CONFLICT,
}


def status_for_error_code(code: str) -> int:
    """Resolve an ops error code to HTTP status, defaulting to 500."""
    return ERROR_CODE_TO_STATUS.get(code, 500)


def problem_response(
    *,
    status: int,
    title: str,
    detail: str = "",
    instance: str = "",
    errors: list[dict[str, Any]] | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    """Build a RFC 7807 JSON error response."""
    body = ProblemDetail(
        title=title,
        status=status,
        detail=detail,
        instance=instance,
    )
    if errors:
        body.errors = [ErrorDetail(**e) for e in errors]
    return JSONResponse(status_code=status, content=body.model_dump(), headers=headers)


async def warden_error_handler(request: Request, exc: WardenError) -> JSONResponse:
    """Translate a raised :class:`WardenError` into a Problem Details response."""
    if isinstance(exc, AuthenticationError):
        return problem_response(
            status=401,
            title="Unauthorized",
            detail=exc.message,
            instance=str(request.url),
            headers={"WWW-Authenticate": "Bearer"},
        )
    if isinstance(exc, AuthorizationError):
        return problem_response(
            status=403, title="Forbidden", detail=exc.message, instance=str(request.url)
        )

    code = _CATEGORY_TO_CODE.get(exc.category, ErrorCode.INTERNAL)
    status = status_for_error_code(code)
    if status >= 500:
        logger.error("request_failed", **exc.to_dict())
        return problem_response(
            status=status,
            title="Internal Server Error",
            detail=exc.message if request.app.state.settings.debug else "An unexpected error occurred.",
            instance=str(request.url),
        )
    return problem_response(status=status, title=exc.message, instance=str(request.url))


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all for unhandled exceptions — returns 500 with ProblemDetail."""
    logger.error("unhandled_exception", error=type(exc).__name__, path=request.url.path, exc_info=exc)
    return problem_response(
        status=500,
        title="Internal Server Error",
        detail=str(exc) if request.app.state.settings.debug else "An unexpected error occurred.",
        instance=str(request.url),
    )
