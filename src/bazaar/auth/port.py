"""Identity verification port (abstract interface).

The marketplace never parses credentials itself. An adapter turns an opaque
bearer credential into a stable external identity, or raises ``AuthError``.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class VerifiedIdentity:
    """Identity asserted by the provider for a verified credential."""

    external_id: str
    email: str
    name: str | None = None


class IdentityVerifier(ABC):
    """Abstract identity provider interface."""

    @abstractmethod
    def verify(self, credential: str) -> VerifiedIdentity:
        """Verify ``credential`` and return the identity it asserts."""
        ...
