"""Authorization Gate — decides whether a caller identity may use the admin surface.

Invariants:
    - is_authorized is true iff an identity is present AND the verifier accepts it
    - Allowlist match is exact and case-sensitive; no trimming, no lowercasing
    - An empty allowlist denies everyone
    - The gate holds no mutable state; the allowlist is frozen at construction

Design Decisions:
    - IdentityVerifier is a Protocol so role tables or group lookups can replace
      the allowlist without touching call sites
    - The gate is constructed explicitly at startup and injected (no module-level
      singleton), so tests build their own gate per case
"""

from dataclasses import dataclass
from typing import Iterable, Protocol

from backoffice.core.errors import AuthorizationError


@dataclass(frozen=True)
class Identity:
    """Verified caller identity supplied by the upstream identity provider."""
    email: str
    name: str | None = None
    subject: str | None = None


class IdentityVerifier(Protocol):
    """Capability that decides whether an identity holds admin rights."""
    def is_admin(self, identity: Identity) -> bool: ...


@dataclass(frozen=True)
class AdminAllowlist:
    """Immutable set of identifiers allowed to administer resources."""
    entries: frozenset[str]

    @classmethod
    def from_iterable(cls, entries: Iterable[str]) -> "AdminAllowlist":
        return cls(frozenset(e for e in entries if e))

    def __contains__(self, identifier: object) -> bool:
        return identifier in self.entries

    def __len__(self) -> int:
        return len(self.entries)


class AllowlistVerifier:
    """IdentityVerifier backed by an AdminAllowlist (exact email match)."""

    def __init__(self, allowlist: AdminAllowlist):
        self._allowlist = allowlist

    def is_admin(self, identity: Identity) -> bool:
        return identity.email in self._allowlist


class AuthorizationGate:
    """Precondition evaluated before every admin operation."""

    def __init__(self, verifier: IdentityVerifier):
        self._verifier = verifier

    def is_authorized(self, identity: Identity | None) -> bool:
        if identity is None:
            return False
        return self._verifier.is_admin(identity)

    def require_authorized(self, identity: Identity | None) -> Identity:
        """Return the identity when authorized, else raise AuthorizationError."""
        if not self.is_authorized(identity):
            raise AuthorizationError()
        return identity


def build_authorization_gate(admin_emails: Iterable[str]) -> AuthorizationGate:
    """Wire the default allowlist-backed gate from configured emails."""
    return AuthorizationGate(
        AllowlistVerifier(AdminAllowlist.from_iterable(admin_emails)),
    )
