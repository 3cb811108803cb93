"""Error taxonomy for the marketplace.

Each error extends the Protean exception whose HTTP mapping it shares, so
``register_exception_handlers`` turns validation failures into 400, missing
objects into 404 and conflicts into 409. Authentication, authorization and
internal failures are mapped in ``bazaar.api.errors``.
"""

from protean.exceptions import (
    InvalidStateError,
    ObjectNotFoundError,
    ProteanException,
    ValidationError,
)


class AuthError(ProteanException):
    """Missing, malformed or rejected credential (401)."""


class ForbiddenError(ProteanException):
    """Authenticated caller lacks the role or ownership required (403)."""


class NotFoundError(ObjectNotFoundError):
    """Referenced entity is absent or not owned by the caller (404)."""


class ConflictError(InvalidStateError):
    """Duplicate application, duplicate review or order-number collision (409)."""


class InvalidTransitionError(ValidationError):
    """Illegal status change on an order, seller or delivery partner (400)."""

    def __init__(self, field, current, target):
        self.current = current
        self.target = target
        super().__init__({field: [f"Cannot transition from {current} to {target}"]})


class EmptyCartError(ValidationError):
    """Checkout attempted with no items in the cart (400)."""

    def __init__(self):
        super().__init__({"cart": ["Cart is empty"]})


class InternalError(ProteanException):
    """Storage or unexpected failure; surfaced to callers without detail (500)."""
