"""User registration and sign-in: commands and handler.

Sign-in is login-or-create: the verified external identity is looked up
first, then the email (linking users created by email only), and a new
customer is created when neither matches. ``external_id`` and ``email`` are
unique in storage, so a create that loses a race to a concurrent sign-in falls
back to reading the winner.
"""

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import String
from protean.utils.globals import current_domain

from bazaar.domain import bazaar
from bazaar.shared.exceptions import ConflictError
from bazaar.user.user import User

logger = structlog.get_logger(__name__)


@bazaar.command(part_of="User")
class RegisterUser:
    """Create a customer account for a verified identity."""

    external_id: String(required=True, max_length=255)
    email: String(required=True, max_length=254)
    name: String(max_length=200, sanitize=False)
    phone: String(max_length=20)
    address: String(max_length=500, sanitize=False)
    city: String(max_length=100, sanitize=False)
    pincode: String(max_length=10)


@bazaar.command(part_of="User")
class SignIn:
    external_id: String(required=True, max_length=255)
    email: String(required=True, max_length=254)
    name: String(max_length=200, sanitize=False)


@bazaar.command_handler(part_of=User)
class UserRegistrationHandler:
    @handle(RegisterUser)
    def register_user(self, command):
        repo = current_domain.repository_for(User)

        if repo.by_external_id(command.external_id) or repo.by_email(command.email):
            raise ConflictError("User is already registered")

        user = User.register(
            email=command.email,
            external_id=command.external_id,
            name=command.name,
            phone=command.phone,
            address=command.address,
            city=command.city,
            pincode=command.pincode,
        )
        try:
            repo.add(user)
        except ValidationError as exc:
            raise ConflictError("User is already registered") from exc

        logger.info("user_registered", user_id=str(user.id))
        return str(user.id)

    @handle(SignIn)
    def sign_in(self, command):
        repo = current_domain.repository_for(User)

        user = repo.by_external_id(command.external_id)
        if user is None:
            user = repo.by_email(command.email)
            if user is not None:
                user.link_identity(command.external_id)
                logger.info("identity_linked", user_id=str(user.id))

        if user is None:
            user = User.register(email=command.email, external_id=command.external_id, name=command.name)
            try:
                repo.add(user)
            except ValidationError:
                # Lost the race to a concurrent first sign-in for the same identity
                user = repo.by_external_id(command.external_id) or repo.by_email(command.email)
                if user is None:
                    raise
            else:
                logger.info("user_created_on_sign_in", user_id=str(user.id))

        user.record_sign_in()
        repo.add(user)
        return str(user.id)
