"""
Credential hashing and generation.

Bearer tokens and generated resource secrets are never stored in clear
text.  Both are reduced to a SHA-256 hex digest; lookups hash the
presented value and look its digest up.

Examples:
    >>> digest = hash_secret("s3cr3t")
    >>> len(digest)
    64
    >>> len(generate_secret(24)) >= 24
    True

Tags:
    hashing, credentials, secrets, warden
"""

import hashlib
import secrets


def hash_secret(value: str) -> str:
    """Return the SHA-256 hex digest of *value*."""
    return hashlib.sha256(value.encode("utf-8")).hexdigest()


def generate_secret(nbytes: int = 24) -> str:
    """Generate a URL-safe random credential string.

    Args:
        nbytes: Bytes of randomness (the encoded string is ~1.3x longer)
    """
    return secrets.token_urlsafe(nbytes)
