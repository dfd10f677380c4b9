"""SQLAlchemy 2.0 ORM layer for warden.

Modules
-------
base        WardenBase (declarative base) + CreatedAtMixin
session     Engine factory, WardenSession, session_scope
tables      Mapped table classes
"""

from __future__ import annotations

from warden.core.orm.base import CreatedAtMixin, WardenBase
from warden.core.orm.session import (
    WardenSession,
    create_warden_engine,
    session_scope,
    warden_session_factory,
)
from warden.core.orm.tables import ResourceTable

__all__ = [
    "WardenBase",
    "CreatedAtMixin",
    "create_warden_engine",
    "WardenSession",
    "warden_session_factory",
    "session_scope",
    "ResourceTable",
]
