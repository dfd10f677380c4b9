"""
Shared pytest fixtures and configuration for warden tests.

This module provides:
- An in-memory SQLite engine with the schema created
- Principals with different capability sets
- An ``OperationContext`` factory for ops-level tests
- A configured FastAPI app and ``TestClient`` for API tests
"""

import sys
from collections.abc import Callable, Generator
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

# Ensure warden package is importable
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from warden.api.app import create_app
from warden.core.hashing import hash_secret
from warden.core.orm.base import WardenBase
from warden.core.orm.session import create_warden_engine, warden_session_factory
from warden.core.principal import Principal
from warden.core.settings import PrincipalConfig, WardenSettings
from warden.ops.context import OperationContext

ADMIN_TOKEN = "admin-token-0123456789"
HR_TOKEN = "hr-token-0123456789"
READER_TOKEN = "reader-token-0123456789"


# =============================================================================
# Test Markers Configuration
# =============================================================================


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Mark every test without an explicit marker as a unit test."""
    for item in items:
        markers = {mark.name for mark in item.iter_markers()}
        if not markers.intersection({"unit", "integration"}):
            item.add_marker(pytest.mark.unit)


# =============================================================================
# Principals
# =============================================================================


@pytest.fixture
def admin() -> Principal:
    return Principal.from_strings("admin", ["*:*"])


@pytest.fixture
def hr() -> Principal:
    """May create and read employees, nothing else."""
    return Principal.from_strings("svc-hr", ["create:employee", "read:employee"])


@pytest.fixture
def reader() -> Principal:
    return Principal.from_strings("auditor", ["read:*"])


# =============================================================================
# Database
# =============================================================================


@pytest.fixture
def engine() -> Generator[Engine, None, None]:
    """In-memory SQLite engine with all tables created."""
    eng = create_warden_engine("sqlite:///:memory:")
    WardenBase.metadata.create_all(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def session_factory(engine: Engine) -> sessionmaker:
    return warden_session_factory(engine)


@pytest.fixture
def session(session_factory: sessionmaker) -> Generator[Session, None, None]:
    s = session_factory()
    yield s
    s.close()


@pytest.fixture
def make_ctx(session_factory: sessionmaker) -> Generator[Callable[..., OperationContext], None, None]:
    """Factory for contexts, each with its own session."""
    sessions: list[Session] = []

    def _make(principal: Principal, *, dry_run: bool = False) -> OperationContext:
        s = session_factory()
        sessions.append(s)
        return OperationContext(session=s, principal=principal, caller="test", dry_run=dry_run)

    yield _make
    for s in sessions:
        s.close()


# =============================================================================
# API
# =============================================================================


@pytest.fixture
def settings() -> WardenSettings:
    return WardenSettings(
        database_url="sqlite:///:memory:",
        log_level="WARNING",
        log_json=True,
        principals=[
            PrincipalConfig(
                identifier="admin", token_sha256=hash_secret(ADMIN_TOKEN), capabilities=["*:*"]
            ),
            PrincipalConfig(
                identifier="svc-hr",
                token_sha256=hash_secret(HR_TOKEN),
                capabilities=["create:employee", "read:employee"],
            ),
            PrincipalConfig(
                identifier="auditor",
                token_sha256=hash_secret(READER_TOKEN),
                capabilities=["read:*"],
            ),
        ],
    )


@pytest.fixture
def app(settings: WardenSettings, engine: Engine):
    return create_app(settings=settings, engine=engine)


@pytest.fixture
def client(app) -> Generator[TestClient, None, None]:
    with TestClient(app) as c:
        yield c


@pytest.fixture
def auth() -> dict[str, dict[str, str]]:
    """Authorization headers keyed by principal identifier."""
    return {
        "admin": {"Authorization": f"Bearer {ADMIN_TOKEN}"},
        "svc-hr": {"Authorization": f"Bearer {HR_TOKEN}"},
        "auditor": {"Authorization": f"Bearer {READER_TOKEN}"},
    }
