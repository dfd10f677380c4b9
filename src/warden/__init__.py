"""
warden — guarded resource creation over HTTP.

Packages:
    warden.core   settings, logging, errors, principals, permissions, ORM
    warden.ops    transport-agnostic operations
    warden.api    FastAPI application
    warden.cli    Typer command line
"""

__version__ = "0.1.0"
