"""Tests for principals, the token directory and principal settings."""

import pytest
from pydantic import ValidationError as PydanticValidationError

from warden.core.hashing import hash_secret
from warden.core.principal import OPERATOR, Principal, PrincipalDirectory
from warden.core.settings import PrincipalConfig, WardenSettings


class TestPrincipal:
    def test_from_strings(self):
        p = Principal.from_strings("svc-hr", ["read:employee", "create:employee"])
        assert p.identifier == "svc-hr"
        assert p.capability_strings() == ["create:employee", "read:employee"]

    def test_is_immutable(self):
        p = Principal.from_strings("svc-hr", [])
        with pytest.raises(AttributeError):
            p.identifier = "other"  # type: ignore[misc]

    def test_operator_has_everything(self):
        assert OPERATOR.capability_strings() == ["*:*"]


class TestPrincipalDirectory:
    def test_resolve(self):
        p = Principal.from_strings("svc-hr", ["create:employee"])
        directory = PrincipalDirectory({hash_secret("tok-1"): p})

        assert directory.resolve("tok-1") is p
        assert directory.resolve("tok-2") is None
        assert directory.resolve("") is None
        assert directory.resolve(None) is None
        assert len(directory) == 1

    def test_uppercase_digest_is_accepted(self):
        p = Principal.from_strings("svc-hr", [])
        directory = PrincipalDirectory({hash_secret("tok").upper(): p})
        assert directory.resolve("tok") is p

    def test_from_config(self):
        entries = [
            PrincipalConfig(
                identifier="svc-hr", token_sha256=hash_secret("tok"), capabilities=["read:*"]
            )
        ]
        resolved = PrincipalDirectory.from_config(entries).resolve("tok")
        assert resolved.identifier == "svc-hr"
        assert resolved.capability_strings() == ["read:*"]


class TestPrincipalConfig:
    def test_rejects_short_digest(self):
        with pytest.raises(PydanticValidationError):
            PrincipalConfig(identifier="x", token_sha256="abc")

    def test_rejects_bad_capability(self):
        with pytest.raises(PydanticValidationError, match="Unknown action"):
            PrincipalConfig(
                identifier="x", token_sha256=hash_secret("t"), capabilities=["delete:user"]
            )


class TestWardenSettings:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("WARDEN_PRINCIPALS", raising=False)
        settings = WardenSettings(_env_file=None)
        assert settings.port == 8080
        assert settings.api_prefix == "/api/v1"
        assert settings.secret_bytes == 24
        assert len(settings.principal_directory) == 0

    def test_principals_from_env(self, monkeypatch):
        digest = hash_secret("env-token")
        monkeypatch.setenv(
            "WARDEN_PRINCIPALS",
            f'[{{"identifier": "svc-env", "token_sha256": "{digest}", '
            f'"capabilities": ["create:user"]}}]',
        )
        settings = WardenSettings(_env_file=None)
        assert settings.principal_directory.resolve("env-token").identifier == "svc-env"

    def test_secret_bytes_bounds(self):
        with pytest.raises(PydanticValidationError):
            WardenSettings(_env_file=None, secret_bytes=8)
