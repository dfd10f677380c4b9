"""ASGI middleware for the warden API."""

from warden.api.middleware.auth import AuthMiddleware
from warden.api.middleware.request_id import RequestContextMiddleware

__all__ = ["AuthMiddleware", "RequestContextMiddleware"]
