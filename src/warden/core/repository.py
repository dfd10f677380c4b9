"""Data access for resources.

:class:`ResourceRepository` wraps a SQLAlchemy session and exposes the
backing-store primitives the operations layer needs::

    ┌──────────────────────────────────────────────────────────────┐
    │                    ResourceRepository                         │
    │                                                              │
    │   find_by_key(type, key)     → ResourceTable | None          │
    │   count_by_key(type, key)    → int                           │
    │   list_by_type(type, ...)    → (rows, total)                 │
    │   add(row)                   → flush; unique clash → Conflict│
    │   ping()                     → SELECT 1                      │
    └──────────────────────────────────────────────────────────────┘

Driver exceptions never leave this module: unique-constraint violations
become :class:`~warden.core.errors.ConflictError`, anything else becomes
:class:`~warden.core.errors.StoreError`.  The session owner decides when
to commit.

Tags:
    repository, database, sqlalchemy
"""

from __future__ import annotations

from sqlalchemy import func, select, text
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from warden.core.errors import ConflictError, StoreError
from warden.core.orm.tables import ResourceTable


class ResourceRepository:
    """CRUD-less (create and read only) access to the ``resources`` table."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def find_by_key(self, resource_type: str, key: str) -> ResourceTable | None:
        """Return the resource with this key, or ``None``."""
        stmt = select(ResourceTable).where(
            ResourceTable.resource_type == resource_type,
            ResourceTable.key == key,
        )
        try:
            return self.session.scalars(stmt).one_or_none()
        except SQLAlchemyError as exc:
            raise StoreError("Resource lookup failed", cause=exc) from exc

    def count_by_key(self, resource_type: str, key: str) -> int:
        stmt = select(func.count()).select_from(ResourceTable).where(
            ResourceTable.resource_type == resource_type,
            ResourceTable.key == key,
        )
        try:
            return int(self.session.scalar(stmt) or 0)
        except SQLAlchemyError as exc:
            raise StoreError("Resource count failed", cause=exc) from exc

    def count(self) -> int:
        try:
            return int(self.session.scalar(select(func.count()).select_from(ResourceTable)) or 0)
        except SQLAlchemyError as exc:
            raise StoreError("Resource count failed", cause=exc) from exc

    def list_by_type(
        self,
        resource_type: str,
        *,
        limit: int = 50,
        offset: int = 0,
    ) -> tuple[list[ResourceTable], int]:
        """List resources of one type, newest first.  Returns ``(rows, total)``."""
        where = ResourceTable.resource_type == resource_type
        try:
            total = self.session.scalar(
                select(func.count()).select_from(ResourceTable).where(where)
            )
            rows = self.session.scalars(
                select(ResourceTable)
                .where(where)
                .order_by(ResourceTable.created_at.desc(), ResourceTable.id)
                .limit(limit)
                .offset(offset)
            ).all()
        except SQLAlchemyError as exc:
            raise StoreError("Resource listing failed", cause=exc) from exc
        return list(rows), int(total or 0)

    def add(self, row: ResourceTable) -> ResourceTable:
        """Stage *row* and flush so constraint violations surface here.

        Raises:
            ConflictError: The ``(resource_type, key)`` pair already exists.
            StoreError: Any other database failure.
        """
        try:
            self.session.add(row)
            self.session.flush()
        except IntegrityError as exc:
            raise ConflictError("key already registered", cause=exc).with_context(
                resource_type=row.resource_type, key=row.key
            ) from exc
        except SQLAlchemyError as exc:
            raise StoreError("Resource write failed", cause=exc) from exc
        return row

    def ping(self) -> bool:
        """Round-trip ``SELECT 1``."""
        try:
            return self.session.execute(text("SELECT 1")).scalar() == 1
        except SQLAlchemyError as exc:
            raise StoreError("Database ping failed", cause=exc) from exc


__all__ = ["ResourceRepository"]
