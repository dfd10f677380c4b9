"""Pydantic schemas for the HTTP boundary."""

from warden.api.schemas.common import (
    ErrorDetail,
    PagedResponse,
    PageMeta,
    ProblemDetail,
    SuccessResponse,
)
from warden.api.schemas.resources import (
    CreatedResourceSchema,
    IdentitySchema,
    ResourceCreateBody,
    ResourceSchema,
)

__all__ = [
    "ErrorDetail",
    "PagedResponse",
    "PageMeta",
    "ProblemDetail",
    "SuccessResponse",
    "CreatedResourceSchema",
    "IdentitySchema",
    "ResourceCreateBody",
    "ResourceSchema",
]
