"""
FastAPI application factory.

``create_app()`` wires middleware, routers, error handlers, the database
engine and lifespan events into a single ``FastAPI`` instance.  It is the
only place that touches ``FastAPI`` directly.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from functools import partial

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from warden.api.deps import get_settings
from warden.api.middleware.auth import AuthMiddleware
from warden.api.middleware.errors import unhandled_exception_handler, warden_error_handler
from warden.api.middleware.request_id import RequestContextMiddleware
from warden.core.errors import WardenError
from warden.core.health import HealthCheck, check_database, create_health_router
from warden.core.logging import configure_logging, get_logger
from warden.core.orm.base import WardenBase
from warden.core.orm.session import create_warden_engine, warden_session_factory
from warden.core.settings import WardenSettings


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan — startup / shutdown hooks."""
    settings: WardenSettings = app.state.settings
    configure_logging(level=settings.log_level, json_format=settings.log_json, service="warden")
    log = get_logger("warden.api")
    log.info(
        "warden API starting",
        version=app.version,
        principals=len(settings.principal_directory),
    )

    if settings.init_schema:
        try:
            WardenBase.metadata.create_all(app.state.engine)
            log.info("database initialized", backend=app.state.engine.dialect.name)
        except SQLAlchemyError as e:
            log.warning("database auto-init failed", error=type(e).__name__)

    if not len(settings.principal_directory):
        log.warning("no principals configured; every authenticated request will be rejected")

    yield

    app.state.engine.dispose()
    log.info("warden API shutting down")


def create_app(
    *,
    settings: WardenSettings | None = None,
    engine: Engine | None = None,
) -> FastAPI:
    """Build and return a fully-configured FastAPI application.

    Parameters
    ----------
    settings : WardenSettings | None
        Override settings (useful for testing).  When ``None`` the cached
        singleton from :func:`get_settings` is used.
    engine : Engine | None
        Pre-built engine.  When ``None`` one is created from
        ``settings.database_url``.
    """

    settings = settings or get_settings()
    engine = engine or create_warden_engine(settings.database_url, echo=settings.database_echo)

    app = FastAPI(
        title=settings.api_title,
        version=settings.api_version,
        lifespan=lifespan,
        docs_url=f"{settings.api_prefix}/docs",
        redoc_url=f"{settings.api_prefix}/redoc",
        openapi_url=f"{settings.api_prefix}/openapi.json",
    )

    # Stash shared objects on app state for middleware and dependencies
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = warden_session_factory(engine)

    # Override DI so endpoints use the provided settings
    app.dependency_overrides[get_settings] = lambda: settings

    # ── Middleware (innermost → outermost) ────────────────────────────
    app.add_middleware(
        AuthMiddleware,
        directory=settings.principal_directory,
        public_paths=[app.docs_url, app.redoc_url, app.openapi_url],
    )
    app.add_middleware(RequestContextMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ── Exception handlers ───────────────────────────────────────────
    app.add_exception_handler(WardenError, warden_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # ── Routers ──────────────────────────────────────────────────────
    from warden.api.routers import identity, resources

    prefix = settings.api_prefix

    # Health endpoints at root level (no prefix) for container healthchecks
    app.include_router(
        create_health_router(
            "warden",
            version=settings.api_version,
            checks=[HealthCheck("database", partial(check_database, app.state.session_factory))],
        ),
        tags=["health"],
    )

    app.include_router(identity.router, prefix=prefix, tags=["identity"])
    app.include_router(resources.router, prefix=prefix, tags=["resources"])

    return app
