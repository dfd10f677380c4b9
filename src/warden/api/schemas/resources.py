"""Request/response schemas for resource and identity endpoints."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ResourceCreateBody(BaseModel):
    """Optional domain fields sent with a create request."""

    display_name: str | None = Field(default=None, max_length=200, description="Human-readable name")
    attributes: dict[str, Any] = Field(default_factory=dict, description="Free-form domain fields")


class CreatedResourceSchema(BaseModel):
    """Result of a successful create.

    ``secret`` is present only for resource types that generate one and
    is shown exactly once.
    """

    id: str = Field(description="Public identifier of the new resource")
    resource_type: str
    key: str = Field(description="Normalised uniqueness key")
    secret: str | None = Field(default=None, description="Generated credential, if any")
    dry_run: bool = False


class ResourceSchema(BaseModel):
    """Stored resource (never includes secret material)."""

    id: str
    resource_type: str
    key: str
    display_name: str | None = None
    attributes: dict[str, Any] = Field(default_factory=dict)
    created_by: str
    created_at: str | None = None


class IdentitySchema(BaseModel):
    """The authenticated caller."""

    identifier: str
    capabilities: list[str] = Field(default_factory=list)
