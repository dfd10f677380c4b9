"""Dependency health checks and the ``/health`` router.

A :class:`HealthCheck` wraps an async probe.  Probes run concurrently,
each under its own timeout; a failing *required* probe makes the service
``unhealthy``, a failing optional one only ``degraded``.

Endpoints (no authentication)::

    GET /health         200 unless unhealthy (then 503)
    GET /health/ready   200 only when healthy
    GET /health/live    always 200
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any, Literal

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field
from sqlalchemy.orm import sessionmaker

from warden.core.orm.session import session_scope
from warden.core.repository import ResourceRepository

Status = Literal["healthy", "degraded", "unhealthy"]

_STARTED = time.monotonic()


class CheckResult(BaseModel):
    status: Status
    latency_ms: float | None = None
    error: str | None = None
    details: dict[str, Any] = Field(default_factory=dict)


class HealthResponse(BaseModel):
    """Body of ``/health`` and ``/health/ready``."""

    status: Status = "healthy"
    service: str = ""
    version: str = ""
    uptime_s: float = Field(default_factory=lambda: round(time.monotonic() - _STARTED, 1))
    timestamp: str = Field(default_factory=lambda: datetime.now(UTC).isoformat())
    checks: dict[str, CheckResult] = Field(default_factory=dict)


class LivenessResponse(BaseModel):
    status: str = "alive"


@dataclass
class HealthCheck:
    """One named dependency probe.

    ``probe`` returns (anything) on success and raises on failure.
    """

    name: str
    probe: Callable[[], Awaitable[Any]]
    required: bool = True
    timeout_s: float = 5.0


async def check_database(factory: sessionmaker) -> bool:
    """``SELECT 1`` through a fresh session, off the event loop."""

    def _ping() -> bool:
        with session_scope(factory) as session:
            return ResourceRepository(session).ping()

    return await asyncio.to_thread(_ping)


async def _probe(check: HealthCheck) -> CheckResult:
    start = time.monotonic()
    try:
        await asyncio.wait_for(check.probe(), timeout=check.timeout_s)
    except TimeoutError:
        return CheckResult(status="unhealthy", error="timeout")
    except Exception as exc:  # noqa: BLE001
        return CheckResult(
            status="unhealthy",
            latency_ms=round((time.monotonic() - start) * 1000, 2),
            error=type(exc).__name__,
        )
    return CheckResult(status="healthy", latency_ms=round((time.monotonic() - start) * 1000, 2))


def aggregate_status(results: dict[str, CheckResult], checks: list[HealthCheck]) -> Status:
    """Fold individual results into one service status."""
    required = {c.name for c in checks if c.required}
    failed = {name for name, r in results.items() if r.status != "healthy"}
    if failed & required:
        return "unhealthy"
    return "degraded" if failed else "healthy"


async def run_health_checks(checks: list[HealthCheck]) -> tuple[Status, dict[str, CheckResult]]:
    """Run every probe concurrently; return the aggregate and per-check results."""
    outcomes = await asyncio.gather(*(_probe(c) for c in checks))
    results = {c.name: r for c, r in zip(checks, outcomes, strict=True)}
    return aggregate_status(results, checks), results


def create_health_router(
    service_name: str,
    version: str,
    checks: list[HealthCheck] | None = None,
    prefix: str = "/health",
) -> APIRouter:
    router = APIRouter(tags=["health"])
    registered = list(checks or [])

    async def _report(ok_statuses: tuple[Status, ...]) -> JSONResponse:
        status, results = await run_health_checks(registered)
        body = HealthResponse(status=status, service=service_name, version=version, checks=results)
        code = 200 if status in ok_statuses else 503
        return JSONResponse(content=body.model_dump(), status_code=code)

    @router.get(prefix, response_model=HealthResponse)
    async def health() -> JSONResponse:
        """Run all dependency checks."""
        return await _report(("healthy", "degraded"))

    @router.get(f"{prefix}/ready", response_model=HealthResponse)
    async def readiness() -> JSONResponse:
        """Ready only when every check passes."""
        return await _report(("healthy",))

    @router.get(f"{prefix}/live", response_model=LivenessResponse)
    async def liveness() -> LivenessResponse:
        return LivenessResponse()

    return router
