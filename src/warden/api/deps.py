"""
FastAPI dependency injection — shared singletons and per-request factories.

Usage in routers::

    from warden.api.deps import OpContext

    @router.post("/things/{key}")
    def create_thing(ctx: OpContext, key: str):
        ...

Singletons (settings, engine, session factory) are created once per app;
per-request objects (session, principal, OperationContext) carry
request-scoped state through the call chain.
"""

from __future__ import annotations

import uuid
from collections.abc import Generator
from functools import lru_cache
from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from warden.core.errors import AuthenticationError
from warden.core.principal import Principal
from warden.core.settings import WardenSettings
from warden.ops.context import OperationContext

# ── Settings (singleton) ─────────────────────────────────────────────────


@lru_cache(maxsize=1)
def get_settings() -> WardenSettings:
    """Cached settings — loaded once per process."""
    return WardenSettings()


# ── Database session (per-request) ───────────────────────────────────────


def get_session(request: Request) -> Generator[Session, None, None]:
    """Yield a session for the request lifespan.

    Operations commit or roll back; whatever is still open when the
    request ends is rolled back by ``close()``.
    """
    session = request.app.state.session_factory()
    try:
        yield session
    finally:
        session.close()


# ── Principal (per-request) ──────────────────────────────────────────────


def get_principal(request: Request) -> Principal:
    """Return the principal resolved by :class:`AuthMiddleware`.

    Raises:
        AuthenticationError: No principal on the request.
    """
    principal = getattr(request.state, "principal", None)
    if principal is None:
        raise AuthenticationError("Missing or invalid bearer token")
    return principal


# ── Operation context (per-request) ──────────────────────────────────────


def get_operation_context(
    request: Request,
    session: Annotated[Session, Depends(get_session)],
    principal: Annotated[Principal, Depends(get_principal)],
    settings: Annotated[WardenSettings, Depends(get_settings)],
) -> OperationContext:
    """Build an :class:`OperationContext` from the current request."""
    request_id = getattr(request.state, "request_id", str(uuid.uuid4()))
    return OperationContext(
        session=session,
        principal=principal,
        request_id=request_id,
        caller="api",
        secret_bytes=settings.secret_bytes,
    )


# ── Convenience type aliases ─────────────────────────────────────────────

OpContext = Annotated[OperationContext, Depends(get_operation_context)]
