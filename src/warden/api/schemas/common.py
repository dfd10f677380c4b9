"""
Common API schemas — shared envelopes and RFC 7807 errors.

Every endpoint returns either :class:`SuccessResponse` (2xx) or
:class:`ProblemDetail` (4xx/5xx).  Paged endpoints embed :class:`PageMeta`
alongside the item list.

Response Envelope Conventions:
    - All 2xx responses use ``SuccessResponse[T]`` or ``PagedResponse[T]``
    - All 4xx/5xx responses use ``ProblemDetail`` (RFC 7807)
    - ``elapsed_ms`` is the time spent inside the operation
"""

from __future__ import annotations

from typing import Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


# ── RFC 7807 Problem Detail ─────────────────────────────────────────────


class ErrorDetail(BaseModel):
    """Structured error detail for field-level or nested errors."""

    code: str = Field(description="Machine-readable error code (e.g., 'VALIDATION_FAILED')")
    message: str = Field(description="Human-readable error description")
    field: str | None = Field(default=None, description="Field path if error is field-specific")


class ProblemDetail(BaseModel):
    """RFC 7807 «Problem Details for HTTP APIs».

    Error Codes:
        - ``UNAUTHENTICATED`` (401): Missing or unknown bearer token
        - ``FORBIDDEN`` (403): Principal lacks the capability
        - ``NOT_FOUND`` (404): Unknown resource type or key
        - ``CONFLICT`` (409): Key already registered
        - ``VALIDATION_FAILED`` (422): Malformed key
        - ``UNAVAILABLE`` (503): Database unreachable
        - ``INTERNAL`` (500): Store failure, safe to retry

    Example:
        {
            "type": "about:blank",
            "title": "key already registered",
            "status": 409,
            "detail": "",
            "instance": "/api/v1/resources/employee/bob@example.com",
            "errors": []
        }
    """

    type: str = Field(default="about:blank", description="Error type URI (usually 'about:blank')")
    title: str = Field(description="Short human-readable error summary")
    status: int = Field(description="HTTP status code (e.g., 403, 409, 500)")
    detail: str = Field(default="", description="Human-readable explanation of the error")
    instance: str = Field(default="", description="URI of the failing request")
    errors: list[ErrorDetail] = Field(
        default_factory=list,
        description="List of field-level or nested error details",
    )


# ── Success Envelopes ────────────────────────────────────────────────────


class PageMeta(BaseModel):
    total: int = Field(description="Matching resources across all pages")
    limit: int = Field(description="Page size that was requested")
    offset: int = Field(description="Index of the first item on this page")
    has_more: bool = Field(description="Whether another page follows")


class SuccessResponse(BaseModel, Generic[T]):
    """Envelope for single-object responses."""

    data: T
    elapsed_ms: float = Field(default=0.0, description="Time spent in the operation")


class PagedResponse(BaseModel, Generic[T]):
    """Envelope for list responses."""

    data: list[T]
    page: PageMeta
    elapsed_ms: float = Field(default=0.0, description="Time spent in the operation")
