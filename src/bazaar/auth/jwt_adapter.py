"""HS256 JWT identity adapter.

Tokens carry the external identity in ``sub`` plus ``email`` and an optional
``name``. ``issue_token`` exists for local development, the load tests and the
test suite; production deployments point ``BAZAAR_JWT_SECRET`` at the secret
shared with the identity provider.
"""

import os
from datetime import UTC, datetime, timedelta

import jwt
import structlog

from bazaar.auth.port import IdentityVerifier, VerifiedIdentity
from bazaar.shared.exceptions import AuthError

logger = structlog.get_logger(__name__)

ALGORITHM = "HS256"
DEFAULT_TTL = timedelta(days=5)


class JWTIdentityVerifier(IdentityVerifier):
    def __init__(self, secret: str | None = None, issuer: str | None = None, audience: str | None = None) -> None:
        self.secret = secret or os.getenv("BAZAAR_JWT_SECRET", "bazaar-dev-secret")
        self.issuer = issuer or os.getenv("BAZAAR_JWT_ISSUER", "bazaar")
        self.audience = audience or os.getenv("BAZAAR_JWT_AUDIENCE", "bazaar-api")

    def verify(self, credential: str) -> VerifiedIdentity:
        if not credential:
            raise AuthError("Missing credential")

        try:
            claims = jwt.decode(
                credential,
                self.secret,
                algorithms=[ALGORITHM],
                issuer=self.issuer,
                audience=self.audience,
                options={"require": ["sub", "exp"]},
            )
        except jwt.ExpiredSignatureError:
            raise AuthError("Credential expired") from None
        except jwt.InvalidTokenError as exc:
            logger.info("credential_rejected", reason=str(exc))
            raise AuthError("Invalid credential") from None

        email = claims.get("email")
        if not email:
            raise AuthError("Credential carries no email")

        return VerifiedIdentity(external_id=str(claims["sub"]), email=email, name=claims.get("name"))

    def issue_token(self, external_id: str, email: str, name: str | None = None, ttl: timedelta = DEFAULT_TTL) -> str:
        now = datetime.now(UTC)
        claims = {
            "sub": external_id,
            "email": email,
            "iss": self.issuer,
            "aud": self.audience,
            "iat": now,
            "exp": now + ttl,
        }
        if name:
            claims["name"] = name
        return jwt.encode(claims, self.secret, algorithm=ALGORITHM)
