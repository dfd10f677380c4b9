"""
Operations layer — transport-agnostic business functions.

Every function takes an :class:`~warden.ops.context.OperationContext` and
returns an :class:`~warden.ops.result.OperationResult`.  The API and the
CLI are thin shells around these functions.
"""

from warden.ops.context import OperationContext
from warden.ops.result import ErrorCode, OperationError, OperationResult, PagedResult

__all__ = [
    "ErrorCode",
    "OperationContext",
    "OperationError",
    "OperationResult",
    "PagedResult",
]
