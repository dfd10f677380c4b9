"""Tests for warden.cli — commands run via CliRunner against a SQLite file."""

from __future__ import annotations

from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from warden import __version__
from warden.cli.app import app
from warden.core.hashing import hash_secret

runner = CliRunner()


@pytest.fixture
def db_url(tmp_path) -> str:
    url = f"sqlite:///{tmp_path / 'cli.db'}"
    result = runner.invoke(app, ["db", "init", "--database", url])
    assert result.exit_code == 0, result.output
    return url


class TestRoot:
    def test_version(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output


class TestDbCommands:
    def test_init(self, tmp_path):
        url = f"sqlite:///{tmp_path / 'fresh.db'}"
        result = runner.invoke(app, ["db", "init", "--database", url])
        assert result.exit_code == 0
        assert "resources" in result.output
        assert (tmp_path / "fresh.db").exists()

    def test_init_dry_run(self, tmp_path):
        url = f"sqlite:///{tmp_path / 'dry.db'}"
        result = runner.invoke(app, ["db", "init", "--database", url, "--dry-run"])
        assert result.exit_code == 0
        assert "dry_run" in result.output

    def test_health(self, db_url):
        result = runner.invoke(app, ["db", "health", "--database", db_url, "--json"])
        assert result.exit_code == 0
        assert '"connected": true' in result.output


class TestResourceCommands:
    def test_create_and_get(self, db_url):
        result = runner.invoke(
            app,
            ["resource", "create", "employee", "Carol@Example.com", "-d", db_url, "--name", "Carol"],
        )
        assert result.exit_code == 0, result.output
        assert "carol@example.com" in result.output

        result = runner.invoke(app, ["resource", "get", "employee", "carol@example.com", "-d", db_url])
        assert result.exit_code == 0
        assert "Carol" in result.output
        assert "cli" in result.output

    def test_create_user_prints_secret(self, db_url):
        result = runner.invoke(app, ["resource", "create", "user", "grace", "-d", db_url, "--json"])
        assert result.exit_code == 0
        assert '"secret"' in result.output
        assert '"secret": null' not in result.output

    def test_duplicate_exits_nonzero(self, db_url):
        args = ["resource", "create", "employee", "bob@example.com", "-d", db_url]
        assert runner.invoke(app, args).exit_code == 0

        result = runner.invoke(app, args)
        assert result.exit_code == 1

    def test_attributes_must_be_json_object(self, db_url):
        result = runner.invoke(
            app,
            ["resource", "create", "employee", "x@example.com", "-d", db_url, "--attributes", "[1]"],
        )
        assert result.exit_code != 0

    def test_get_missing(self, db_url):
        result = runner.invoke(app, ["resource", "get", "employee", "no@example.com", "-d", db_url])
        assert result.exit_code == 1


class TestTokenCommands:
    def test_hash(self):
        result = runner.invoke(app, ["token", "hash", "abc"])
        assert result.exit_code == 0
        assert result.output.strip() == hash_secret("abc")

    def test_issue(self):
        result = runner.invoke(app, ["token", "issue", "svc-hr", "-c", "create:employee"])
        assert result.exit_code == 0
        assert "svc-hr" in result.output
        assert "token_sha256" in result.output

    def test_issue_rejects_bad_capability(self):
        result = runner.invoke(app, ["token", "issue", "svc-hr", "-c", "delete:user"])
        assert result.exit_code == 1


class TestServeCommand:
    def test_bind_address_from_environment(self, monkeypatch):
        monkeypatch.setenv("WARDEN_HOST", "127.0.0.1")
        monkeypatch.setenv("WARDEN_PORT", "9999")
        with patch("uvicorn.run") as run:
            result = runner.invoke(app, ["serve", "start"])

        assert result.exit_code == 0, result.output
        kwargs = run.call_args.kwargs
        assert kwargs["host"] == "127.0.0.1"
        assert kwargs["port"] == 9999
        assert kwargs["factory"] is True

    def test_options_override_environment(self, monkeypatch):
        monkeypatch.setenv("WARDEN_PORT", "9999")
        with patch("uvicorn.run") as run:
            result = runner.invoke(app, ["serve", "start", "--port", "7000", "--log-level", "DEBUG"])

        assert result.exit_code == 0, result.output
        assert run.call_args.kwargs["port"] == 7000
        assert run.call_args.kwargs["log_level"] == "debug"
