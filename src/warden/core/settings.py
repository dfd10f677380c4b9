"""
Centralized settings for warden.

All values can be overridden via environment variables prefixed with
``WARDEN_`` or through a ``.env`` file.  Principals are configured as a JSON
list, for example::

    WARDEN_PRINCIPALS='[{"identifier": "svc-hr",
                         "token_sha256": "9f86d0...",
                         "capabilities": ["create:employee", "read:*"]}]'

Use ``warden token issue`` to generate a token and its digest.
"""

from __future__ import annotations

from functools import cached_property

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from warden.core.errors import InvalidConfigError
from warden.core.permissions import Capability
from warden.core.principal import PrincipalDirectory


class PrincipalConfig(BaseModel):
    """A configured caller: who it is, how it authenticates, what it may do."""

    identifier: str = Field(..., min_length=1, description="Stable caller id")
    token_sha256: str = Field(
        ...,
        pattern=r"^[0-9a-fA-F]{64}$",
        description="SHA-256 hex digest of the bearer token",
    )
    capabilities: list[str] = Field(default_factory=list, description="'action:type' grants")

    @field_validator("capabilities")
    @classmethod
    def _check_capabilities(cls, value: list[str]) -> list[str]:
        for cap in value:
            try:
                Capability.parse(cap)
            except InvalidConfigError as exc:
                raise ValueError(exc.message) from exc
        return value


class WardenSettings(BaseSettings):
    """Settings for the warden service.

    Order of precedence (highest → lowest):
        1. Environment variables (``WARDEN_DATABASE_URL``, etc.)
        2. ``.env`` file
        3. Defaults below
    """

    model_config = SettingsConfigDict(
        env_prefix="WARDEN_",
        env_file=".env",
        extra="ignore",
        env_nested_delimiter="__",
    )

    # ── Server ───────────────────────────────────────────────────────────
    host: str = Field(default="0.0.0.0", description="Bind address")
    port: int = Field(default=8080, description="Bind port")
    debug: bool = Field(default=False, description="Expose exception text in 500 responses")
    log_level: str = Field(default="INFO", description="Log level")
    log_json: bool | None = Field(default=None, description="JSON logs (None = auto by TTY)")

    # ── API ──────────────────────────────────────────────────────────────
    api_prefix: str = Field(default="/api/v1", description="URL prefix for all endpoints")
    api_title: str = Field(default="warden API", description="OpenAPI title")
    api_version: str = Field(default="0.1.0", description="OpenAPI version string")

    # ── Database ─────────────────────────────────────────────────────────
    database_url: str = Field(
        default="sqlite:///warden.db",
        description="SQLAlchemy connection URL",
    )
    database_echo: bool = Field(default=False, description="Log all SQL statements")
    init_schema: bool = Field(default=True, description="Create tables on startup")

    # ── CORS ─────────────────────────────────────────────────────────────
    cors_origins: list[str] = Field(default=["*"], description="Allowed CORS origins")

    # ── Auth ─────────────────────────────────────────────────────────────
    principals: list[PrincipalConfig] = Field(
        default_factory=list,
        description="Bearer-token principals and their capabilities",
    )

    # ── Resources ────────────────────────────────────────────────────────
    secret_bytes: int = Field(
        default=24, ge=16, le=64, description="Random bytes in generated secrets"
    )

    @cached_property
    def principal_directory(self) -> PrincipalDirectory:
        return PrincipalDirectory.from_config(self.principals)
