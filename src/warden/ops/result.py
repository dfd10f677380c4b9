"""
Outcome types shared by every operation.

Operations never raise for outcomes a caller is expected to handle
(forbidden, conflict, malformed key, missing record).  They return an
:class:`OperationResult` whose ``error.code`` is one of :class:`ErrorCode`;
the API maps the code to an HTTP status and the CLI to an exit code.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any, Generic, TypeVar

from warden.core.errors import ErrorCategory

T = TypeVar("T")


class ErrorCode(StrEnum):
    """Machine-readable failure codes."""

    UNAUTHENTICATED = "UNAUTHENTICATED"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    VALIDATION_FAILED = "VALIDATION_FAILED"
    UNAVAILABLE = "UNAVAILABLE"
    INTERNAL = "INTERNAL"


@dataclass(frozen=True, slots=True)
class OperationError:
    """Why an operation failed.

    ``retryable`` is only set for store failures, where nothing was
    written and the same request may be sent again.
    """

    code: ErrorCode
    message: str
    category: ErrorCategory | None = None
    details: dict[str, Any] = field(default_factory=dict)
    retryable: bool = False


@dataclass
class OperationResult(Generic[T]):
    """Success payload or :class:`OperationError`, plus timing.

    Build with :meth:`ok` / :meth:`fail`.
    """

    success: bool
    data: T | None = None
    error: OperationError | None = None
    elapsed_ms: float = 0.0

    @classmethod
    def ok(cls, data: T, *, elapsed_ms: float = 0.0) -> OperationResult[T]:
        return cls(success=True, data=data, elapsed_ms=elapsed_ms)

    @classmethod
    def fail(
        cls,
        code: ErrorCode,
        message: str,
        *,
        category: ErrorCategory | None = None,
        details: dict[str, Any] | None = None,
        retryable: bool = False,
        elapsed_ms: float = 0.0,
    ) -> OperationResult[T]:
        error = OperationError(
            code=ErrorCode(code),
            message=message,
            category=category,
            details=details or {},
            retryable=retryable,
        )
        return cls(success=False, error=error, elapsed_ms=elapsed_ms)


@dataclass
class PagedResult(OperationResult[list[T]]):
    """One page of a list operation."""

    total: int = 0
    limit: int = 50
    offset: int = 0
    has_more: bool = False

    @classmethod
    def from_items(
        cls,
        items: list[T],
        total: int,
        *,
        limit: int,
        offset: int,
        elapsed_ms: float = 0.0,
    ) -> PagedResult[T]:
        return cls(
            success=True,
            data=items,
            total=total,
            limit=limit,
            offset=offset,
            has_more=offset + len(items) < total,
            elapsed_ms=elapsed_ms,
        )

    @classmethod
    def from_failure(cls, failed: OperationResult[Any], *, elapsed_ms: float = 0.0) -> PagedResult[T]:
        """Carry the error of *failed* over into a paged envelope."""
        return cls(success=False, error=failed.error, elapsed_ms=elapsed_ms)


class _Timer:
    __slots__ = ("_start",)

    def __init__(self) -> None:
        self._start = time.perf_counter()

    @property
    def elapsed_ms(self) -> float:
        return (time.perf_counter() - self._start) * 1000


def start_timer() -> _Timer:
    """Start a stopwatch; read ``timer.elapsed_ms`` when done."""
    return _Timer()
