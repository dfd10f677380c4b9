"""
Resources router — guarded creation and lookup.

Endpoints:
    POST /resources/{resource_type}/{key}   Create a resource (create:{type})
    GET  /resources/{resource_type}/{key}   Look up by key (read:{type})
    GET  /resources/{resource_type}         List resources of a type (read:{type})

All three require an authenticated principal.  ``?dry_run=true`` on POST
runs every check without writing.
"""

from __future__ import annotations

from fastapi import APIRouter, Body, Path, Query, Request

from warden.api.deps import OpContext
from warden.api.schemas.common import PagedResponse, PageMeta, ProblemDetail, SuccessResponse
from warden.api.schemas.resources import (
    CreatedResourceSchema,
    ResourceCreateBody,
    ResourceSchema,
)
from warden.api.utils import _dc, _handle_error

router = APIRouter(prefix="/resources")

_ERRORS = {
    403: {"model": ProblemDetail, "description": "Principal lacks the capability"},
    404: {"model": ProblemDetail, "description": "Unknown resource type or key"},
    422: {"model": ProblemDetail, "description": "Malformed key"},
    500: {"model": ProblemDetail, "description": "Store failure; safe to retry"},
}


@router.post(
    "/{resource_type}/{key}",
    response_model=SuccessResponse[CreatedResourceSchema],
    responses={**_ERRORS, 409: {"model": ProblemDetail, "description": "Key already registered"}},
)
def create_resource(
    request: Request,
    ctx: OpContext,
    resource_type: str = Path(..., description="Resource type, e.g. 'user' or 'employee'"),
    key: str = Path(..., description="Uniqueness key (username or email)"),
    body: ResourceCreateBody | None = Body(default=None),
    dry_run: bool = Query(False, description="Run every check without writing"),
):
    """Create a resource.

    Checks the caller's ``create`` capability, then that the key is not
    already registered, then commits.  Types that require a secret return
    it once in ``data.secret``.
    """
    from warden.ops.requests import CreateResourceRequest
    from warden.ops.resources import create_resource as _create

    body = body or ResourceCreateBody()
    ctx.dry_run = dry_run
    result = _create(
        ctx,
        CreateResourceRequest(
            resource_type=resource_type,
            key=key,
            display_name=body.display_name,
            attributes=body.attributes,
        ),
    )

    if not result.success:
        return _handle_error(result, request)

    return SuccessResponse(
        data=CreatedResourceSchema(**_dc(result.data)),
        elapsed_ms=result.elapsed_ms,
    )


@router.get(
    "/{resource_type}/{key}",
    response_model=SuccessResponse[ResourceSchema],
    responses=_ERRORS,
)
def get_resource(
    request: Request,
    ctx: OpContext,
    resource_type: str = Path(..., description="Resource type"),
    key: str = Path(..., description="Uniqueness key"),
):
    """Look up a resource by its key."""
    from warden.ops.resources import get_resource as _get

    result = _get(ctx, resource_type, key)

    if not result.success:
        return _handle_error(result, request)

    return SuccessResponse(data=ResourceSchema(**_dc(result.data)), elapsed_ms=result.elapsed_ms)


@router.get(
    "/{resource_type}",
    response_model=PagedResponse[ResourceSchema],
    responses=_ERRORS,
)
def list_resources(
    request: Request,
    ctx: OpContext,
    resource_type: str = Path(..., description="Resource type"),
    limit: int = Query(50, ge=1, le=500, description="Maximum items to return"),
    offset: int = Query(0, ge=0, description="Pagination offset"),
):
    """List resources of one type, newest first."""
    from warden.ops.requests import ListResourcesRequest
    from warden.ops.resources import list_resources as _list

    result = _list(ctx, ListResourcesRequest(resource_type=resource_type, limit=limit, offset=offset))

    if not result.success:
        return _handle_error(result, request)

    return PagedResponse(
        data=[ResourceSchema(**_dc(r)) for r in (result.data or [])],
        page=PageMeta(
            total=result.total,
            limit=result.limit,
            offset=result.offset,
            has_more=result.has_more,
        ),
        elapsed_ms=result.elapsed_ms,
    )
