"""
Request-scoped context for operations.

Every operation function receives an :class:`OperationContext` as its first
argument.  The context carries the transaction-scoped session, the
authenticated principal, the dry-run flag and the request id.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field

from sqlalchemy.orm import Session

from warden.core.principal import Principal


@dataclass
class OperationContext:
    """Context passed to every operation function.

    Attributes:
        session: SQLAlchemy session owned by the caller for this request.
            Operations commit or roll it back; the caller closes it.
        principal: Authenticated caller.
        request_id: Unique ID for this operation invocation (auto-generated).
        caller: Origin of the request: ``"api"``, ``"cli"`` or ``"sdk"``.
        dry_run: When ``True``, operations return a preview without side effects.
        secret_bytes: Randomness used for generated secrets.
    """

    session: Session
    principal: Principal
    request_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    caller: str = "sdk"
    dry_run: bool = False
    secret_bytes: int = 24
