"""Resource type registry and key validation.

Each resource type declares what its uniqueness key looks like and whether
creation generates a secret.  ``user`` and ``employee`` are registered on
import; other modules may add their own with :func:`register_resource_type`.

Tags:
    registry, resource-types, validation, warden
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

from warden.core.errors import NotFoundError, ValidationError
from warden.core.logging import get_logger

logger = get_logger(__name__)

_USERNAME_RE = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_.-]{2,63}$")
_EMAIL_RE = re.compile(r"^[A-Za-z0-9._%+-]+@[A-Za-z0-9-]+(\.[A-Za-z0-9-]+)*\.[A-Za-z]{2,}$")
_EMAIL_MAX_LEN = 254


class KeyKind(str, Enum):
    """Shape of a resource's uniqueness key."""

    USERNAME = "username"
    EMAIL = "email"


@dataclass(frozen=True, slots=True)
class ResourceType:
    """Definition of a creatable resource type.

    Attributes:
        name: Type name used in paths and capabilities (``user``).
        key_kind: Format the uniqueness key must satisfy.
        requires_secret: Generate and return a credential on creation.
        description: Free text shown in listings.
    """

    name: str
    key_kind: KeyKind
    requires_secret: bool = False
    description: str = ""

    def normalize_key(self, candidate: str) -> str:
        """Validate *candidate* and return its canonical form.

        Email keys are lower-cased; usernames are kept as given.

        Raises:
            ValidationError: If the key is empty or malformed.
        """
        key = (candidate or "").strip()
        if not key:
            raise ValidationError("Key must not be empty", field="key")

        if self.key_kind is KeyKind.EMAIL:
            key = key.lower()
            if len(key) > _EMAIL_MAX_LEN or not _EMAIL_RE.match(key):
                raise ValidationError(f"{candidate!r} is not a valid email address", field="key")
            return key

        if not _USERNAME_RE.match(key):
            raise ValidationError(
                f"{candidate!r} is not a valid username "
                "(3-64 chars: letters, digits, '_', '.', '-')",
                field="key",
            )
        return key


# Global resource type registry
_registry: dict[str, ResourceType] = {}


def register_resource_type(resource_type: ResourceType) -> ResourceType:
    """Add *resource_type* to the registry."""
    if resource_type.name in _registry:
        raise ValueError(f"Resource type '{resource_type.name}' is already registered")
    _registry[resource_type.name] = resource_type
    logger.debug(
        "resource_type_registered",
        name=resource_type.name,
        key_kind=resource_type.key_kind.value,
        requires_secret=resource_type.requires_secret,
    )
    return resource_type


def get_resource_type(name: str) -> ResourceType:
    """Look up a registered resource type.

    Raises:
        NotFoundError: If *name* is not registered.
    """
    try:
        return _registry[name]
    except KeyError:
        raise NotFoundError(f"Unknown resource type '{name}'") from None


def unregister_resource_type(name: str) -> None:
    """Remove a type from the registry (for testing)."""
    _registry.pop(name, None)


register_resource_type(
    ResourceType(
        name="user",
        key_kind=KeyKind.USERNAME,
        requires_secret=True,
        description="Application login; creation returns a one-time password",
    )
)
register_resource_type(
    ResourceType(
        name="employee",
        key_kind=KeyKind.EMAIL,
        description="Employee record keyed by work email",
    )
)
