"""
CLI: ``warden db`` — database management commands.
"""

from __future__ import annotations

import typer

from warden.cli.utils import operation_context, output_result

app = typer.Typer(no_args_is_help=True)


@app.command()
def init(
    database: str | None = typer.Option(None, "--database", "-d", help="Database URL"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Preview without changes"),
    json_out: bool = typer.Option(False, "--json", help="JSON output"),
) -> None:
    """Initialise database schema (create tables)."""
    from warden.ops.database import initialize_database

    with operation_context(database, dry_run=dry_run) as ctx:
        result = initialize_database(ctx)
    output_result(result, as_json=json_out, title="Database Init")


@app.command()
def health(
    database: str | None = typer.Option(None, "--database", "-d"),
    json_out: bool = typer.Option(False, "--json"),
) -> None:
    """Check database connectivity and stats."""
    from warden.ops.database import check_database_health

    with operation_context(database) as ctx:
        result = check_database_health(ctx)
    output_result(result, as_json=json_out, title="Database Health")
