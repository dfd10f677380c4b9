"""Tests for credential hashing helpers."""

from warden.core.hashing import generate_secret, hash_secret


def test_hash_is_stable_hex():
    digest = hash_secret("s3cr3t")
    assert digest == hash_secret("s3cr3t")
    assert len(digest) == 64
    assert int(digest, 16) >= 0


def test_generated_secrets_are_unique():
    secrets = {generate_secret() for _ in range(50)}
    assert len(secrets) == 50
    assert all(len(s) >= 32 for s in secrets)
