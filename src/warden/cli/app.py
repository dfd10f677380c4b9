"""
Root Typer application for the warden CLI.
"""

from __future__ import annotations

import typer
from typer import Typer

app = Typer(
    name="warden",
    help="warden — guarded resource creation service.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


# ── Version callback ─────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        from warden import __version__

        typer.echo(f"warden {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(  # noqa: UP007
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """warden CLI — serve the API, manage the database, issue tokens."""


# ── Sub-command registration ─────────────────────────────────────────────

from warden.cli.db import app as db_app  # noqa: E402
from warden.cli.resource import app as resource_app  # noqa: E402
from warden.cli.serve import app as serve_app  # noqa: E402
from warden.cli.token import app as token_app  # noqa: E402

app.add_typer(db_app, name="db", help="Database operations.")
app.add_typer(resource_app, name="resource", help="Create and look up resources.")
app.add_typer(serve_app, name="serve", help="Run the API server.")
app.add_typer(token_app, name="token", help="Bearer token helpers.")
