"""Administrative user changes: commands and handler."""

from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from bazaar.domain import bazaar
from bazaar.shared.exceptions import NotFoundError
from bazaar.user.user import User


@bazaar.command(part_of="User")
class GrantAdmin:
    email: String(required=True, max_length=254)


@bazaar.command(part_of="User")
class DeactivateUser:
    user_id: Identifier(required=True)


@bazaar.command_handler(part_of=User)
class ManageUserHandler:
    @handle(GrantAdmin)
    def grant_admin(self, command):
        repo = current_domain.repository_for(User)
        user = repo.by_email(command.email)
        if user is None:
            raise NotFoundError(f"No user with email {command.email}")

        user.grant_admin()
        repo.add(user)
        return str(user.id)

    @handle(DeactivateUser)
    def deactivate_user(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        user.deactivate()
        repo.add(user)
