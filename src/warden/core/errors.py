"""
Structured error types for warden.

Provides a small hierarchy of typed errors carrying a category, a retry
flag and free-form context.  Operations return expected failures through
:class:`~warden.ops.result.OperationResult`; these exceptions are raised at
the seams where control flow must stop (authentication, configuration,
storage).

Architecture:
    ::

        ┌──────────────────────────────────────────────────────────┐
        │                      WardenError                          │
        │        (category, retryable, context, cause)              │
        ├──────────────────────────────────────────────────────────┤
        │  AuthError           ValidationError     StoreError       │
        │  (AUTH)              (VALIDATION)        (STORAGE)        │
        │     │                                    retryable=True   │
        │  AuthenticationError NotFoundError                        │
        │  AuthorizationError  ConflictError       ConfigError      │
        │                      (CONFLICT)          (CONFIG)         │
        │                                             │             │
        │                                   InvalidConfigError      │
        └──────────────────────────────────────────────────────────┘

Examples:
    >>> error = StoreError("commit failed")
    >>> error.retryable
    True
    >>> ConflictError("key already registered").category.value
    'CONFLICT'

Tags:
    error-handling, exception-hierarchy, warden
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Standard error categories for classification and status mapping."""

    AUTH = "AUTH"                 # Authentication, authorization
    VALIDATION = "VALIDATION"     # Malformed input
    NOT_FOUND = "NOT_FOUND"       # Unknown resource or type
    CONFLICT = "CONFLICT"         # Uniqueness violations
    STORAGE = "STORAGE"           # Backing store failures
    CONFIG = "CONFIG"             # Missing config, invalid settings
    INTERNAL = "INTERNAL"         # Bugs, unexpected state


@dataclass
class ErrorContext:
    """Structured metadata attached to an error.

    Attributes:
        principal: Identifier of the caller, when known.
        resource_type: Resource type involved in the failing action.
        key: Uniqueness key involved in the failing action.
        request_id: Correlation id of the request.
        metadata: Anything else worth logging.
    """

    principal: str | None = None
    resource_type: str | None = None
    key: str | None = None
    request_id: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Return all non-empty fields, with ``metadata`` flattened in."""
        result: dict[str, Any] = {}
        for name in ("principal", "resource_type", "key", "request_id"):
            value = getattr(self, name)
            if value is not None:
                result[name] = value
        result.update(self.metadata)
        return result


class WardenError(Exception):
    """Base class for every warden error.

    Subclasses set ``default_category`` and ``default_retryable``; callers
    may override either per instance.  ``cause`` is chained as
    ``__cause__`` so tracebacks keep the original exception.
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL
    default_retryable: bool = False

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        retryable: bool | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.retryable = retryable if retryable is not None else self.default_retryable
        self.context = context or ErrorContext()
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> WardenError:
        """Add context to this error (fluent API).

        Usage:
            raise AuthorizationError("denied").with_context(
                principal="svc-hr", resource_type="user"
            )
        """
        for key, value in kwargs.items():
            if key != "metadata" and hasattr(self.context, key):
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging."""
        result: dict[str, Any] = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
            "retryable": self.retryable,
        }
        context_dict = self.context.to_dict()
        if context_dict:
            result["context"] = context_dict
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


# =============================================================================
# AUTHENTICATION/AUTHORIZATION ERRORS
# =============================================================================


class AuthError(WardenError):
    """Authentication or authorization error."""

    default_category = ErrorCategory.AUTH
    default_retryable = False


class AuthenticationError(AuthError):
    """No valid principal could be resolved for the request."""

    pass


class AuthorizationError(AuthError):
    """Principal lacks the capability for the requested action."""

    pass


# =============================================================================
# INPUT / STATE ERRORS
# =============================================================================


class ValidationError(WardenError):
    """Input does not satisfy the expected format."""

    default_category = ErrorCategory.VALIDATION
    default_retryable = False

    def __init__(self, message: str, *, field: str | None = None, **kwargs: Any):
        super().__init__(message, **kwargs)
        self.field = field

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        if self.field:
            result["field"] = self.field
        return result


class NotFoundError(WardenError):
    """Referenced resource or resource type does not exist."""

    default_category = ErrorCategory.NOT_FOUND
    default_retryable = False


class ConflictError(WardenError):
    """A resource with the same uniqueness key already exists."""

    default_category = ErrorCategory.CONFLICT
    default_retryable = False


# =============================================================================
# STORAGE ERRORS
# =============================================================================


class StoreError(WardenError):
    """Unexpected backing-store failure.

    Retryable: every write path rolls back before this is surfaced, so a
    repeated call starts from a clean state.
    """

    default_category = ErrorCategory.STORAGE
    default_retryable = True


# =============================================================================
# CONFIGURATION ERRORS
# =============================================================================


class ConfigError(WardenError):
    """Configuration error."""

    default_category = ErrorCategory.CONFIG
    default_retryable = False


class InvalidConfigError(ConfigError):
    """Configuration value is invalid."""

    def __init__(self, key: str, value: Any, message: str | None = None):
        self.config_key = key
        self.config_value = value
        super().__init__(message or f"Invalid configuration for {key}: {value!r}")


__all__ = [
    "ErrorCategory",
    "ErrorContext",
    "WardenError",
    "AuthError",
    "AuthenticationError",
    "AuthorizationError",
    "ValidationError",
    "NotFoundError",
    "ConflictError",
    "StoreError",
    "ConfigError",
    "InvalidConfigError",
]
