"""
Typed request objects for operations.

Each dataclass is the *input* contract for one operation function.
Requests carry only transport-agnostic data: no raw HTTP bodies, no
Typer params.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True, slots=True)
class CreateResourceRequest:
    """Request for :func:`warden.ops.resources.create_resource`."""

    resource_type: str
    key: str
    display_name: str | None = None
    attributes: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class ListResourcesRequest:
    """Request for :func:`warden.ops.resources.list_resources`."""

    resource_type: str
    limit: int = 50
    offset: int = 0
