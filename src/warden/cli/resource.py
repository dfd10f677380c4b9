"""
CLI: ``warden resource`` — create and look up resources as the operator.
"""

from __future__ import annotations

import json

import typer

from warden.cli.utils import operation_context, output_result

app = typer.Typer(no_args_is_help=True)


@app.command()
def create(
    resource_type: str = typer.Argument(..., help="Resource type (user, employee, ...)"),
    key: str = typer.Argument(..., help="Uniqueness key"),
    display_name: str | None = typer.Option(None, "--name", help="Display name"),
    attributes: str = typer.Option("{}", "--attributes", help="JSON object of domain fields"),
    database: str | None = typer.Option(None, "--database", "-d", help="Database URL"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Check without writing"),
    json_out: bool = typer.Option(False, "--json", help="JSON output"),
) -> None:
    """Create a resource, printing any generated secret once."""
    from warden.ops.requests import CreateResourceRequest
    from warden.ops.resources import create_resource

    try:
        attrs = json.loads(attributes)
    except json.JSONDecodeError as exc:
        raise typer.BadParameter(f"--attributes is not valid JSON: {exc}") from exc
    if not isinstance(attrs, dict):
        raise typer.BadParameter("--attributes must be a JSON object")

    request = CreateResourceRequest(
        resource_type=resource_type,
        key=key,
        display_name=display_name,
        attributes=attrs,
    )
    with operation_context(database, dry_run=dry_run) as ctx:
        result = create_resource(ctx, request)
    output_result(result, as_json=json_out, title="Resource Created")


@app.command()
def get(
    resource_type: str = typer.Argument(...),
    key: str = typer.Argument(...),
    database: str | None = typer.Option(None, "--database", "-d", help="Database URL"),
    json_out: bool = typer.Option(False, "--json", help="JSON output"),
) -> None:
    """Show a resource by key."""
    from warden.ops.resources import get_resource

    with operation_context(database) as ctx:
        result = get_resource(ctx, resource_type, key)
    output_result(result, as_json=json_out, title="Resource")
