"""Tests for the resource type registry and key normalisation."""

import pytest

from warden.core.errors import NotFoundError, ValidationError
from warden.core.resource_types import (
    KeyKind,
    ResourceType,
    get_resource_type,
    register_resource_type,
    unregister_resource_type,
)


class TestRegistry:
    def test_builtin_types(self):
        assert get_resource_type("user").requires_secret is True
        assert get_resource_type("employee").requires_secret is False

    def test_unknown_type_does_not_list_registered_types(self):
        with pytest.raises(NotFoundError) as exc_info:
            get_resource_type("spaceship")
        assert "spaceship" in exc_info.value.message
        assert "employee" not in exc_info.value.message

    def test_register_and_unregister(self):
        rtype = ResourceType(name="device", key_kind=KeyKind.USERNAME)
        try:
            assert register_resource_type(rtype) is rtype
            assert get_resource_type("device") is rtype
            with pytest.raises(ValueError, match="already registered"):
                register_resource_type(rtype)
        finally:
            unregister_resource_type("device")
        with pytest.raises(NotFoundError):
            get_resource_type("device")


class TestEmailKeys:
    def test_lowercased_and_trimmed(self):
        assert get_resource_type("employee").normalize_key("  Bob@Example.COM ") == "bob@example.com"

    @pytest.mark.parametrize("key", ["", "bob", "bob@", "@example.com", "bob@example", "a b@example.com"])
    def test_rejects(self, key):
        with pytest.raises(ValidationError) as exc_info:
            get_resource_type("employee").normalize_key(key)
        assert exc_info.value.field == "key"

    def test_rejects_overlong(self):
        key = "a" * 250 + "@example.com"
        with pytest.raises(ValidationError):
            get_resource_type("employee").normalize_key(key)


class TestUsernameKeys:
    @pytest.mark.parametrize("key", ["alice", "Alice_01", "a.b-c", "x" * 64])
    def test_accepts(self, key):
        assert get_resource_type("user").normalize_key(key) == key

    def test_case_is_preserved(self):
        assert get_resource_type("user").normalize_key("Alice") == "Alice"

    @pytest.mark.parametrize("key", ["ab", "_alice", "al ice", "x" * 65, "alice@example.com"])
    def test_rejects(self, key):
        with pytest.raises(ValidationError):
            get_resource_type("user").normalize_key(key)
