"""
Shared API router utilities.

- ``_dc()`` — convert a dataclass or dict to a plain dict
- ``_handle_error()`` — convert a failed OperationResult to a ``problem_response``
"""

from __future__ import annotations

from dataclasses import asdict
from typing import Any

from fastapi import Request

from warden.api.middleware.errors import problem_response, status_for_error_code


def _dc(obj: Any) -> dict[str, Any]:
    """Convert a dataclass (or dict) to a plain dict.

    Returns an empty dict for objects that are neither dataclasses nor dicts.
    """
    if hasattr(obj, "__dataclass_fields__"):
        return asdict(obj)
    return obj if isinstance(obj, dict) else {}


def _handle_error(result, request: Request | None = None):
    """Convert a failed ``OperationResult`` into a Problem Details response.

    The error code picks the HTTP status and the error message becomes the
    problem title.  A ``field`` detail is surfaced as a field-level error.
    """
    err = result.error
    code = err.code if err else "INTERNAL"
    errors = None
    if err and err.details.get("field"):
        errors = [{"code": code, "message": err.message, "field": err.details["field"]}]
    headers = {"Retry-After": "1"} if err and err.retryable else None
    return problem_response(
        status=status_for_error_code(code),
        title=err.message if err else "Operation failed",
        instance=str(request.url) if request is not None else "",
        errors=errors,
        headers=headers,
    )
