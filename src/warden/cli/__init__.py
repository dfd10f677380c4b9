"""
CLI layer for warden.

Provides a Typer application with sub-commands that delegate to the
operations layer (``warden.ops``).  This package handles only terminal
transport: argument parsing and coloured output.

Entry point::

    warden --help
"""

from warden.cli.app import app

__all__ = ["app"]
