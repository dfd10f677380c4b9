"""
Database operations.

Schema creation from ORM metadata and a connectivity check.
"""

from __future__ import annotations

from sqlalchemy.exc import SQLAlchemyError

from warden.core.errors import ErrorCategory, StoreError
from warden.core.logging import get_logger
from warden.core.orm.base import WardenBase
from warden.core.repository import ResourceRepository
from warden.ops.context import OperationContext
from warden.ops.responses import DatabaseHealth, DatabaseInitResult
from warden.ops.result import ErrorCode, OperationResult, start_timer

logger = get_logger(__name__)


def initialize_database(ctx: OperationContext) -> OperationResult[DatabaseInitResult]:
    """Create all warden tables (idempotent)."""
    timer = start_timer()
    table_names = sorted(WardenBase.metadata.tables)

    if ctx.dry_run:
        return OperationResult.ok(
            DatabaseInitResult(tables_created=table_names, dry_run=True),
            elapsed_ms=timer.elapsed_ms,
        )

    try:
        WardenBase.metadata.create_all(ctx.session.get_bind())
    except SQLAlchemyError as exc:
        logger.exception("database_init_failed", error=type(exc).__name__)
        return OperationResult.fail(
            ErrorCode.INTERNAL,
            "Failed to create tables",
            category=ErrorCategory.STORAGE,
            retryable=True,
            elapsed_ms=timer.elapsed_ms,
        )

    logger.info("database_initialized", tables=table_names)
    return OperationResult.ok(
        DatabaseInitResult(tables_created=table_names),
        elapsed_ms=timer.elapsed_ms,
    )


def check_database_health(ctx: OperationContext) -> OperationResult[DatabaseHealth]:
    """``SELECT 1`` round trip plus the number of stored resources."""
    timer = start_timer()
    backend = ctx.session.get_bind().dialect.name

    try:
        repo = ResourceRepository(ctx.session)
        repo.ping()
        count = repo.count()
    except StoreError as exc:
        logger.warning("database_unhealthy", error=exc.message)
        return OperationResult.fail(
            ErrorCode.UNAVAILABLE,
            "Database is not reachable",
            category=ErrorCategory.STORAGE,
            retryable=True,
            details={"backend": backend},
            elapsed_ms=timer.elapsed_ms,
        )

    return OperationResult.ok(
        DatabaseHealth(
            connected=True,
            backend=backend,
            resource_count=count,
            latency_ms=round(timer.elapsed_ms, 2),
        ),
        elapsed_ms=timer.elapsed_ms,
    )
