"""Caller identity operations."""

from __future__ import annotations

from warden.ops.context import OperationContext
from warden.ops.responses import Identity
from warden.ops.result import OperationResult, start_timer


def whoami(ctx: OperationContext) -> OperationResult[Identity]:
    """Return the authenticated principal and its capabilities."""
    timer = start_timer()
    return OperationResult.ok(
        Identity(
            identifier=ctx.principal.identifier,
            capabilities=ctx.principal.capability_strings(),
        ),
        elapsed_ms=timer.elapsed_ms,
    )
