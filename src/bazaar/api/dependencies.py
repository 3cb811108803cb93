"""Authentication dependencies.

The bearer credential is verified through the identity port; the verified
external identity is then resolved to an active marketplace user. Role gates
ask the user's account variant, never the raw role columns.
"""

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from protean.utils.globals import current_domain

from bazaar.auth import VerifiedIdentity, get_verifier
from bazaar.shared.exceptions import AuthError, ForbiddenError
from bazaar.user.accounts import is_admin, is_approved_seller
from bazaar.user.user import User

bearer = HTTPBearer(auto_error=False)


async def verified_identity(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer),
) -> VerifiedIdentity:
    if credentials is None:
        raise AuthError("Missing bearer credential")
    return get_verifier().verify(credentials.credentials)


async def current_user(identity: VerifiedIdentity = Depends(verified_identity)) -> User:
    user = current_domain.repository_for(User).by_external_id(identity.external_id)
    if user is None:
        raise AuthError("User is not registered")
    if not user.is_active:
        raise AuthError("Account is deactivated")
    return user


async def require_admin(user: User = Depends(current_user)) -> User:
    if not is_admin(user.account):
        raise ForbiddenError("Admin access required")
    return user


async def require_approved_seller(user: User = Depends(current_user)) -> User:
    if not is_approved_seller(user.account):
        raise ForbiddenError("Approved seller access required")
    return user
