"""
Resource operations.

``create_resource`` is the guarded create flow::

    Received ─► AuthorizationChecked ─► UniquenessChecked ─► Committed ─► Responded
        │                │                      │
        └────────────────┴──────────────────────┴──────► Responded(error)

Authorization runs first, on the type name as requested; a caller without
the capability never sees a type or key-format error.  Key validation
follows, then the store.  The uniqueness check and the insert share
one session transaction, and the ``(resource_type, key)`` unique
constraint catches the concurrent-insert race: whichever insert loses is
rolled back and reported as ``CONFLICT``.  No failure path leaves a row
behind.
"""

from __future__ import annotations

import uuid

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from warden.core.errors import (
    ConflictError,
    ErrorCategory,
    NotFoundError,
    StoreError,
    ValidationError,
)
from warden.core.hashing import generate_secret, hash_secret
from warden.core.logging import get_logger
from warden.core.orm.tables import ResourceTable
from warden.core.permissions import can_create, can_read
from warden.core.repository import ResourceRepository
from warden.core.resource_types import ResourceType, get_resource_type
from warden.ops.context import OperationContext
from warden.ops.requests import CreateResourceRequest, ListResourcesRequest
from warden.ops.responses import CreatedResource, ResourceDetail
from warden.ops.result import ErrorCode, OperationResult, PagedResult, start_timer

logger = get_logger(__name__)

_KEY_TAKEN = "key already registered"


def _new_id() -> str:
    return f"res_{uuid.uuid4().hex[:12]}"


def _rollback(ctx: OperationContext) -> None:
    try:
        ctx.session.rollback()
    except SQLAlchemyError as exc:
        logger.warning("rollback_failed", error=type(exc).__name__, request_id=ctx.request_id)


def _resolve(
    resource_type: str, key: str | None = None
) -> tuple[ResourceType, str | None, OperationResult | None]:
    """Look up the type and normalise the key; return a failure result instead of raising."""
    try:
        rtype = get_resource_type(resource_type)
    except NotFoundError as exc:
        return None, None, OperationResult.fail(  # type: ignore[return-value]
            ErrorCode.NOT_FOUND, exc.message, category=ErrorCategory.NOT_FOUND
        )
    if key is None:
        return rtype, None, None
    try:
        return rtype, rtype.normalize_key(key), None
    except ValidationError as exc:
        return rtype, None, OperationResult.fail(
            ErrorCode.VALIDATION_FAILED,
            exc.message,
            category=ErrorCategory.VALIDATION,
            details={"field": exc.field} if exc.field else None,
        )


def _row_to_detail(row: ResourceTable) -> ResourceDetail:
    return ResourceDetail(
        id=row.id,
        resource_type=row.resource_type,
        key=row.key,
        display_name=row.display_name,
        attributes=dict(row.attributes or {}),
        created_by=row.created_by,
        created_at=row.created_at.isoformat() if row.created_at else None,
    )


def _forbidden(ctx: OperationContext, action: str, resource_type: str, elapsed_ms: float):
    return OperationResult.fail(
        ErrorCode.FORBIDDEN,
        f"Principal '{ctx.principal.identifier}' is not allowed to {action} "
        f"'{resource_type}' resources",
        category=ErrorCategory.AUTH,
        details={"required_capability": f"{action}:{resource_type}"},
        elapsed_ms=elapsed_ms,
    )


# ------------------------------------------------------------------ #
# Create
# ------------------------------------------------------------------ #


def create_resource(
    ctx: OperationContext,
    request: CreateResourceRequest,
) -> OperationResult[CreatedResource]:
    """Create a resource after authorization and uniqueness checks.

    Failure codes, in the order they are checked: ``FORBIDDEN``,
    ``NOT_FOUND`` (unknown type), ``VALIDATION_FAILED`` (malformed key),
    ``CONFLICT``, ``INTERNAL`` (store failure, retryable).
    """
    timer = start_timer()
    log = logger.bind(
        request_id=ctx.request_id,
        principal=ctx.principal.identifier,
        resource_type=request.resource_type,
    )

    if not can_create(ctx.principal.capabilities, request.resource_type):
        log.info("resource_create_forbidden")
        return _forbidden(ctx, "create", request.resource_type, timer.elapsed_ms)

    rtype, key, failure = _resolve(request.resource_type, request.key)
    if failure is not None:
        log.info("resource_create_rejected", code=failure.error.code)
        failure.elapsed_ms = timer.elapsed_ms
        return failure

    repo = ResourceRepository(ctx.session)
    try:
        if repo.find_by_key(rtype.name, key) is not None:
            _rollback(ctx)
            log.info("resource_create_conflict", key=key)
            return OperationResult.fail(
                ErrorCode.CONFLICT,
                _KEY_TAKEN,
                category=ErrorCategory.CONFLICT,
                details={"key": key},
                elapsed_ms=timer.elapsed_ms,
            )

        if ctx.dry_run:
            _rollback(ctx)
            return OperationResult.ok(
                CreatedResource(id="", resource_type=rtype.name, key=key, dry_run=True),
                elapsed_ms=timer.elapsed_ms,
            )

        secret = generate_secret(ctx.secret_bytes) if rtype.requires_secret else None
        row = ResourceTable(
            id=_new_id(),
            resource_type=rtype.name,
            key=key,
            display_name=request.display_name,
            attributes=dict(request.attributes),
            secret_hash=hash_secret(secret) if secret is not None else None,
            created_by=ctx.principal.identifier,
        )
        repo.add(row)
        ctx.session.commit()
    except (ConflictError, IntegrityError):
        # Lost the race against a concurrent create of the same key
        _rollback(ctx)
        log.info("resource_create_conflict", key=key, race=True)
        return OperationResult.fail(
            ErrorCode.CONFLICT,
            _KEY_TAKEN,
            category=ErrorCategory.CONFLICT,
            details={"key": key},
            elapsed_ms=timer.elapsed_ms,
        )
    except (StoreError, SQLAlchemyError) as exc:
        _rollback(ctx)
        log.exception("resource_create_failed", error=type(exc).__name__)
        return OperationResult.fail(
            ErrorCode.INTERNAL,
            "Failed to create resource",
            category=ErrorCategory.STORAGE,
            retryable=True,
            elapsed_ms=timer.elapsed_ms,
        )

    log.info("resource_created", resource_id=row.id, key=key)
    return OperationResult.ok(
        CreatedResource(id=row.id, resource_type=rtype.name, key=key, secret=secret),
        elapsed_ms=timer.elapsed_ms,
    )


# ------------------------------------------------------------------ #
# Read
# ------------------------------------------------------------------ #


def get_resource(
    ctx: OperationContext,
    resource_type: str,
    key: str,
) -> OperationResult[ResourceDetail]:
    """Get a single resource by its uniqueness key."""
    timer = start_timer()

    if not can_read(ctx.principal.capabilities, resource_type):
        return _forbidden(ctx, "read", resource_type, timer.elapsed_ms)

    rtype, normalized, failure = _resolve(resource_type, key)
    if failure is not None:
        failure.elapsed_ms = timer.elapsed_ms
        return failure

    try:
        row = ResourceRepository(ctx.session).find_by_key(rtype.name, normalized)
    except StoreError as exc:
        logger.exception("resource_get_failed", error=exc.message, request_id=ctx.request_id)
        return OperationResult.fail(
            ErrorCode.INTERNAL,
            "Failed to get resource",
            category=ErrorCategory.STORAGE,
            retryable=True,
            elapsed_ms=timer.elapsed_ms,
        )

    if row is None:
        return OperationResult.fail(
            ErrorCode.NOT_FOUND,
            f"No '{rtype.name}' resource with key '{normalized}'",
            category=ErrorCategory.NOT_FOUND,
            elapsed_ms=timer.elapsed_ms,
        )
    return OperationResult.ok(_row_to_detail(row), elapsed_ms=timer.elapsed_ms)


def list_resources(
    ctx: OperationContext,
    request: ListResourcesRequest,
) -> PagedResult[ResourceDetail]:
    """List resources of one type, newest first."""
    timer = start_timer()

    if not can_read(ctx.principal.capabilities, request.resource_type):
        denied = _forbidden(ctx, "read", request.resource_type, timer.elapsed_ms)
        return PagedResult.from_failure(denied, elapsed_ms=timer.elapsed_ms)

    rtype, _, failure = _resolve(request.resource_type)
    if failure is not None:
        return PagedResult.from_failure(failure, elapsed_ms=timer.elapsed_ms)

    try:
        rows, total = ResourceRepository(ctx.session).list_by_type(
            rtype.name, limit=request.limit, offset=request.offset
        )
    except StoreError as exc:
        logger.exception("resource_list_failed", error=exc.message, request_id=ctx.request_id)
        return PagedResult.from_failure(
            OperationResult.fail(
                ErrorCode.INTERNAL,
                "Failed to list resources",
                category=ErrorCategory.STORAGE,
                retryable=True,
            ),
            elapsed_ms=timer.elapsed_ms,
        )

    return PagedResult.from_items(
        [_row_to_detail(r) for r in rows],
        total=total,
        limit=request.limit,
        offset=request.offset,
        elapsed_ms=timer.elapsed_ms,
    )
