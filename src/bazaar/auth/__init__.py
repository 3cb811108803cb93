"""Identity verifier factory.

Provides get_verifier() / set_verifier() to swap implementations:
- JWTIdentityVerifier by default (HS256 tokens from the identity provider)
- any IdentityVerifier in tests
"""

from bazaar.auth.jwt_adapter import JWTIdentityVerifier
from bazaar.auth.port import IdentityVerifier, VerifiedIdentity

_current_verifier: IdentityVerifier | None = None


def get_verifier() -> IdentityVerifier:
    """Return the current identity verifier. Defaults to JWTIdentityVerifier."""
    global _current_verifier
    if _current_verifier is None:
        _current_verifier = JWTIdentityVerifier()
    return _current_verifier


def set_verifier(verifier: IdentityVerifier) -> None:
    """Override the active identity verifier (useful for tests)."""
    global _current_verifier
    _current_verifier = verifier


def reset_verifier() -> None:
    """Reset to the default verifier."""
    global _current_verifier
    _current_verifier = None


__all__ = [
    "IdentityVerifier",
    "JWTIdentityVerifier",
    "VerifiedIdentity",
    "get_verifier",
    "reset_verifier",
    "set_verifier",
]
