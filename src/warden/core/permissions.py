"""
Capability-based permission model.

A capability grants one *action* on one *resource type* and is written
``action:type``.  ``*`` matches anything in either position::

    create:user     create users only
    read:*          read every resource type
    *:*             operator access

Checks are pure functions over an explicit capability set; nothing is
looked up at runtime.

Tags:
    permissions, authorization, capabilities, warden
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from warden.core.errors import InvalidConfigError

WILDCARD = "*"


class Action(str, Enum):
    """Actions a principal may be granted on a resource type."""

    CREATE = "create"
    READ = "read"


_VALID_ACTIONS = {a.value for a in Action} | {WILDCARD}


@dataclass(frozen=True, slots=True)
class Capability:
    """A single ``action:resource_type`` grant."""

    action: str
    resource_type: str

    @classmethod
    def parse(cls, value: str) -> Capability:
        """Parse ``"create:user"`` into a :class:`Capability`.

        Raises:
            InvalidConfigError: If the string is not ``action:type`` or the
                action is unknown.
        """
        action, sep, resource_type = value.strip().partition(":")
        if not sep or not action or not resource_type:
            raise InvalidConfigError(
                "capability", value, f"Capability must be 'action:type', got {value!r}"
            )
        if action not in _VALID_ACTIONS:
            raise InvalidConfigError(
                "capability", value, f"Unknown action {action!r} in capability {value!r}"
            )
        return cls(action=action, resource_type=resource_type)

    def matches(self, action: Action | str, resource_type: str) -> bool:
        wanted = action.value if isinstance(action, Action) else action
        return self.action in (WILDCARD, wanted) and self.resource_type in (
            WILDCARD,
            resource_type,
        )

    def __str__(self) -> str:
        return f"{self.action}:{self.resource_type}"


def parse_capabilities(values: Iterable[str]) -> frozenset[Capability]:
    """Parse a list of capability strings into a frozen set."""
    return frozenset(Capability.parse(v) for v in values)


def is_allowed(
    capabilities: Iterable[Capability],
    action: Action | str,
    resource_type: str,
) -> bool:
    """Return True if any capability grants *action* on *resource_type*."""
    return any(c.matches(action, resource_type) for c in capabilities)


def can_create(capabilities: Iterable[Capability], resource_type: str) -> bool:
    return is_allowed(capabilities, Action.CREATE, resource_type)


def can_read(capabilities: Iterable[Capability], resource_type: str) -> bool:
    return is_allowed(capabilities, Action.READ, resource_type)


__all__ = [
    "WILDCARD",
    "Action",
    "Capability",
    "parse_capabilities",
    "is_allowed",
    "can_create",
    "can_read",
]
