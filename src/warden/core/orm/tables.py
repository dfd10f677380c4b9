"""Table definitions.

Tags:
    orm, sqlalchemy, tables, data-model
"""

from __future__ import annotations

from sqlalchemy import JSON, Index, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from warden.core.orm.base import CreatedAtMixin, WardenBase


class ResourceTable(CreatedAtMixin, WardenBase):
    __tablename__ = "resources"
    __table_args__ = (
        # Storage-level guard for concurrent creates with the same key
        UniqueConstraint("resource_type", "key", name="uq_resources_type_key"),
        Index("ix_resources_type_created", "resource_type", "created_at"),
    )

    id: Mapped[str] = mapped_column(Text, primary_key=True)
    resource_type: Mapped[str] = mapped_column(Text, nullable=False)
    key: Mapped[str] = mapped_column(Text, nullable=False)
    display_name: Mapped[str | None] = mapped_column(Text)
    attributes: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    secret_hash: Mapped[str | None] = mapped_column(Text)
    created_by: Mapped[str] = mapped_column(Text, nullable=False)

    def __repr__(self) -> str:
        return f"ResourceTable(id={self.id!r}, resource_type={self.resource_type!r}, key={self.key!r})"


__all__ = ["ResourceTable"]
