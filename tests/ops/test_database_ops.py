"""Tests for database and identity operations."""

from unittest.mock import patch

from sqlalchemy import inspect

from warden.core.errors import StoreError
from warden.core.orm.session import create_warden_engine, warden_session_factory
from warden.core.principal import OPERATOR
from warden.core.repository import ResourceRepository
from warden.ops.context import OperationContext
from warden.ops.database import check_database_health, initialize_database
from warden.ops.identity import whoami


class TestInitializeDatabase:
    def test_creates_tables(self):
        engine = create_warden_engine("sqlite:///:memory:")
        session = warden_session_factory(engine)()
        try:
            result = initialize_database(OperationContext(session=session, principal=OPERATOR))

            assert result.success
            assert "resources" in result.data.tables_created
            assert "resources" in inspect(engine).get_table_names()
        finally:
            session.close()
            engine.dispose()

    def test_is_idempotent(self, make_ctx, admin):
        assert initialize_database(make_ctx(admin)).success
        assert initialize_database(make_ctx(admin)).success

    def test_dry_run_creates_nothing(self):
        engine = create_warden_engine("sqlite:///:memory:")
        session = warden_session_factory(engine)()
        try:
            ctx = OperationContext(session=session, principal=OPERATOR, dry_run=True)
            result = initialize_database(ctx)

            assert result.data.dry_run is True
            assert inspect(engine).get_table_names() == []
        finally:
            session.close()
            engine.dispose()


class TestDatabaseHealth:
    def test_healthy(self, make_ctx, admin):
        result = check_database_health(make_ctx(admin))

        assert result.success
        assert result.data.connected is True
        assert result.data.backend == "sqlite"
        assert result.data.resource_count == 0

    def test_unreachable(self, make_ctx, admin):
        with patch.object(ResourceRepository, "ping", side_effect=StoreError("Database ping failed")):
            result = check_database_health(make_ctx(admin))

        assert not result.success
        assert result.error.code == "UNAVAILABLE"
        assert result.error.retryable is True
        assert result.error.details == {"backend": "sqlite"}


class TestWhoami:
    def test_reports_capabilities(self, make_ctx, hr):
        result = whoami(make_ctx(hr))

        assert result.data.identifier == "svc-hr"
        assert result.data.capabilities == ["create:employee", "read:employee"]

    def test_operator(self, make_ctx):
        assert whoami(make_ctx(OPERATOR)).data.capabilities == ["*:*"]
