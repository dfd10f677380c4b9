"""
CLI: ``warden serve`` — start the API server.

Bind address and port default to ``WARDEN_HOST`` / ``WARDEN_PORT``.
"""

from __future__ import annotations

import typer

from warden.cli.utils import console
from warden.core.settings import WardenSettings

app = typer.Typer(no_args_is_help=True)


@app.command("start")
def start(
    host: str | None = typer.Option(None, "--host", "-h", help="Bind address [WARDEN_HOST]"),
    port: int | None = typer.Option(None, "--port", "-p", help="Bind port [WARDEN_PORT]"),
    reload: bool = typer.Option(False, "--reload", help="Auto-reload on changes"),
    workers: int = typer.Option(1, "--workers", "-w", help="Number of workers"),
    log_level: str | None = typer.Option(None, "--log-level", help="[WARDEN_LOG_LEVEL]"),
) -> None:
    """Start the warden REST API server."""
    import uvicorn

    settings = WardenSettings()
    host = host or settings.host
    port = port if port is not None else settings.port
    log_level = (log_level or settings.log_level).lower()

    console.print(f"[bold green]Starting warden API[/bold green] on {host}:{port}")
    uvicorn.run(
        "warden.api:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
        workers=workers,
        log_level=log_level,
    )
