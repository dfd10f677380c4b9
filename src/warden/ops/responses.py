"""
Typed response objects for operations.

Each dataclass is the *output* of one operation beyond the generic
:class:`~warden.ops.result.OperationResult` envelope.  Responses carry only
domain data: no HTTP status codes, no CLI formatting.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

# ------------------------------------------------------------------ #
# Resources
# ------------------------------------------------------------------ #


@dataclass(frozen=True, slots=True)
class CreatedResource:
    """Payload of a successful create.

    ``secret`` is only set for types that generate one and is never
    retrievable again.
    """

    id: str
    resource_type: str
    key: str
    secret: str | None = None
    dry_run: bool = False


@dataclass(frozen=True, slots=True)
class ResourceDetail:
    """Public view of a stored resource (no secret material)."""

    id: str
    resource_type: str
    key: str
    display_name: str | None = None
    attributes: dict[str, Any] = field(default_factory=dict)
    created_by: str = ""
    created_at: str | None = None


# ------------------------------------------------------------------ #
# Identity
# ------------------------------------------------------------------ #


@dataclass(frozen=True, slots=True)
class Identity:
    """Who the caller is and what it may do."""

    identifier: str
    capabilities: list[str] = field(default_factory=list)


# ------------------------------------------------------------------ #
# Database
# ------------------------------------------------------------------ #


@dataclass(frozen=True, slots=True)
class DatabaseInitResult:
    """Result payload for :func:`warden.ops.database.initialize_database`."""

    tables_created: list[str]
    dry_run: bool = False


@dataclass(frozen=True, slots=True)
class DatabaseHealth:
    """Result payload for :func:`warden.ops.database.check_database_health`."""

    connected: bool
    backend: str
    resource_count: int = 0
    latency_ms: float = 0.0
