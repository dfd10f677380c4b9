"""
CLI utility helpers — output formatting and session management.
"""

from __future__ import annotations

import json
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import asdict
from typing import Any

import typer
from rich.console import Console

from warden.core.logging import LogContext
from warden.core.orm.session import create_warden_engine, warden_session_factory
from warden.core.principal import OPERATOR
from warden.core.settings import WardenSettings
from warden.ops.context import OperationContext
from warden.ops.result import OperationResult

console = Console()
err_console = Console(stderr=True)


# ── Context helper ───────────────────────────────────────────────────────


@contextmanager
def operation_context(
    database: str | None = None,
    *,
    dry_run: bool = False,
) -> Iterator[OperationContext]:
    """Yield an ``OperationContext`` running as the operator principal.

    ``database`` is a SQLAlchemy URL; defaults to ``WARDEN_DATABASE_URL``.
    """
    settings = WardenSettings()
    engine = create_warden_engine(database or settings.database_url)
    session = warden_session_factory(engine)()
    ctx = OperationContext(
        session=session,
        principal=OPERATOR,
        caller="cli",
        dry_run=dry_run,
        secret_bytes=settings.secret_bytes,
    )
    try:
        with LogContext(request_id=ctx.request_id, caller="cli"):
            yield ctx
    finally:
        session.close()
        engine.dispose()


# ── Output helpers ───────────────────────────────────────────────────────


def _to_dict(obj: Any) -> dict[str, Any]:
    """Convert dataclass / pydantic model / dict to plain dict."""
    if hasattr(obj, "model_dump"):
        return obj.model_dump()
    if hasattr(obj, "__dataclass_fields__"):
        return asdict(obj)
    if isinstance(obj, dict):
        return obj
    return {"value": str(obj)}


def output_result(
    result: OperationResult,
    *,
    as_json: bool = False,
    title: str = "",
) -> None:
    """Render an ``OperationResult`` to the terminal; exit 1 on failure."""
    if not result.success:
        err = result.error
        msg = err.message if err else "Unknown error"
        code = err.code if err else "ERROR"
        err_console.print(f"[bold red]Error[/bold red] ({code}): {msg}")
        raise typer.Exit(code=1)

    data = _to_dict(result.data)

    if as_json:
        console.print_json(json.dumps(data, default=str))
        return

    if title:
        console.print(f"[bold]{title}[/bold]")
    for k, v in data.items():
        console.print(f"  [cyan]{k}[/cyan]: {v}")
