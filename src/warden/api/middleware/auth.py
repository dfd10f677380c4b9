"""
Bearer-token authentication middleware.

Every request must carry ``Authorization: Bearer <token>``.  The token is
hashed and looked up in the configured
:class:`~warden.core.principal.PrincipalDirectory`; the resulting
principal is stored on ``request.state.principal``.  Unknown or missing
tokens receive a 401 Problem Details response before any router runs.

Public paths (no auth required) are matched exactly:
  - ``/health``, ``/health/ready``, ``/health/live``
  - whatever the app passes as ``public_paths`` (its docs and OpenAPI URLs)
"""

from __future__ import annotations

from collections.abc import Iterable

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from warden.core.logging import get_logger
from warden.core.principal import PrincipalDirectory

logger = get_logger(__name__)

_HEALTH_PATHS = frozenset({"/health", "/health/ready", "/health/live"})


def _bearer_token(request: Request) -> str | None:
    header = request.headers.get("Authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


class AuthMiddleware(BaseHTTPMiddleware):
    """Resolve the caller from its bearer token or reject the request.

    Parameters
    ----------
    app:
        The ASGI application to wrap.
    directory:
        Token digest → principal lookup.
    public_paths:
        Extra paths served without a token, compared verbatim.
    """

    def __init__(
        self,
        app: object,
        directory: PrincipalDirectory,
        public_paths: Iterable[str | None] = (),
    ) -> None:
        super().__init__(app)  # type: ignore[arg-type]
        self._directory = directory
        self._public = _HEALTH_PATHS | {p for p in public_paths if p}

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if request.url.path in self._public:
            return await call_next(request)

        principal = self._directory.resolve(_bearer_token(request))
        if principal is None:
            logger.info("authentication_failed", path=request.url.path)
            return JSONResponse(
                status_code=401,
                headers={"WWW-Authenticate": "Bearer"},
                content={
                    "type": "about:blank",
                    "title": "Unauthorized",
                    "status": 401,
                    "detail": "Missing or invalid bearer token.",
                    "instance": str(request.url),
                    "errors": [],
                },
            )

        request.state.principal = principal
        return await call_next(request)
