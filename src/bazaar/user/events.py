"""Domain events for the User aggregate."""

from protean.fields import DateTime, Identifier, String

from bazaar.domain import bazaar


@bazaar.event(part_of="User")
class UserRegistered:
    """A user record was created, by registration or first sign-in."""

    __version__ = 1

    user_id: Identifier(required=True)
    external_id: String()
    email: String(required=True)
    name: String(sanitize=False)
    registered_at: DateTime(required=True)


@bazaar.event(part_of="User")
class UserSignedIn:
    __version__ = 1

    user_id: Identifier(required=True)
    signed_in_at: DateTime(required=True)


@bazaar.event(part_of="User")
class UserRoleChanged:
    """A user's role or approval status changed (application, decision or admin grant)."""

    __version__ = 1

    user_id: Identifier(required=True)
    previous_role: String(required=True)
    role: String(required=True)
    approval_status: String()
    changed_at: DateTime(required=True)


@bazaar.event(part_of="User")
class UserDeactivated:
    __version__ = 1

    user_id: Identifier(required=True)
    deactivated_at: DateTime(required=True)
