"""Principal value object and the bearer-token directory that resolves it.

A :class:`Principal` is built once per request from the presented bearer
token and is immutable afterwards.  :class:`PrincipalDirectory` holds the
configured principals keyed by token digest; it stands in for an external
identity provider.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from warden.core.hashing import hash_secret
from warden.core.permissions import Capability, parse_capabilities


@dataclass(frozen=True, slots=True)
class Principal:
    """Authenticated caller.

    Attributes:
        identifier: Stable caller id (service account or user name).
        capabilities: Granted ``action:type`` capabilities.
    """

    identifier: str
    capabilities: frozenset[Capability] = frozenset()

    @classmethod
    def from_strings(cls, identifier: str, capabilities: Iterable[str]) -> Principal:
        return cls(identifier=identifier, capabilities=parse_capabilities(capabilities))

    def capability_strings(self) -> list[str]:
        return sorted(str(c) for c in self.capabilities)


# Used by CLI commands, which run with operator rights on the local database
OPERATOR = Principal.from_strings("cli", ["*:*"])


class PrincipalDirectory:
    """Lookup table from token digest to :class:`Principal`."""

    def __init__(self, principals: dict[str, Principal] | None = None) -> None:
        self._by_digest: dict[str, Principal] = {
            digest.lower(): p for digest, p in (principals or {}).items()
        }

    @classmethod
    def from_config(cls, entries: Iterable[object]) -> PrincipalDirectory:
        """Build from settings entries exposing ``identifier``,
        ``token_sha256`` and ``capabilities``."""
        principals: dict[str, Principal] = {}
        for entry in entries:
            principals[entry.token_sha256] = Principal.from_strings(  # type: ignore[attr-defined]
                entry.identifier,  # type: ignore[attr-defined]
                entry.capabilities,  # type: ignore[attr-defined]
            )
        return cls(principals)

    def resolve(self, token: str | None) -> Principal | None:
        """Return the principal for a bearer *token*, or ``None``."""
        if not token:
            return None
        return self._by_digest.get(hash_secret(token))

    def __len__(self) -> int:
        return len(self._by_digest)
