"""
CLI: ``warden token`` — bearer token helpers.

Tokens are never stored; only their SHA-256 digest goes into
``WARDEN_PRINCIPALS``.
"""

from __future__ import annotations

import json

import typer

from warden.cli.utils import console, err_console
from warden.core.errors import InvalidConfigError
from warden.core.hashing import generate_secret, hash_secret
from warden.core.permissions import parse_capabilities

app = typer.Typer(no_args_is_help=True)


@app.command()
def issue(
    identifier: str = typer.Argument(..., help="Principal identifier"),
    capability: list[str] = typer.Option(
        [], "--capability", "-c", help="Grant, e.g. create:user (repeatable)"
    ),
    nbytes: int = typer.Option(32, "--bytes", help="Random bytes in the token"),
) -> None:
    """Generate a token and print the principal entry to configure."""
    try:
        parse_capabilities(capability)
    except InvalidConfigError as exc:
        err_console.print(f"[bold red]Error[/bold red]: {exc.message}")
        raise typer.Exit(code=1) from exc

    token = generate_secret(nbytes)
    entry = {
        "identifier": identifier,
        "token_sha256": hash_secret(token),
        "capabilities": capability,
    }
    console.print(f"[bold]Token[/bold] (shown once): {token}")
    console.print("[bold]Principal entry[/bold] for WARDEN_PRINCIPALS:")
    console.print_json(json.dumps(entry))


@app.command("hash")
def hash_token(token: str = typer.Argument(..., help="Existing bearer token")) -> None:
    """Print the SHA-256 digest of an existing token."""
    typer.echo(hash_secret(token))
