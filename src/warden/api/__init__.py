"""
REST API layer for warden.

Provides a FastAPI application factory with typed endpoints that delegate
to the operations layer (``warden.ops``).  All business logic lives in ops;
this package handles only HTTP transport concerns: serialisation,
authentication, error mapping, and request context.

Quick start::

    from warden.api import create_app

    app = create_app()  # ready for uvicorn
"""

from warden.api.app import create_app

__all__ = ["create_app"]
