"""
Identity router.

Endpoints:
    GET /me    The authenticated principal and its capabilities
"""

from __future__ import annotations

from fastapi import APIRouter

from warden.api.deps import OpContext
from warden.api.schemas.common import SuccessResponse
from warden.api.schemas.resources import IdentitySchema
from warden.api.utils import _dc

router = APIRouter()


@router.get("/me", response_model=SuccessResponse[IdentitySchema])
def whoami(ctx: OpContext):
    """Return who the bearer token belongs to."""
    from warden.ops.identity import whoami as _whoami

    result = _whoami(ctx)
    return SuccessResponse(data=IdentitySchema(**_dc(result.data)), elapsed_ms=result.elapsed_ms)
