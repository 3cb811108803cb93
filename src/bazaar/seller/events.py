"""Domain events for the Seller aggregate."""

from protean.fields import DateTime, Identifier, String

from bazaar.domain import bazaar


@bazaar.event(part_of="Seller")
class SellerApplied:
    """A user applied to sell on the marketplace and awaits an admin decision."""

    __version__ = 1

    seller_id: Identifier(required=True)
    store_name: String(required=True, sanitize=False)
    city: String(sanitize=False)
    pincode: String()
    applied_at: DateTime(required=True)


@bazaar.event(part_of="Seller")
class SellerApproved:
    """An admin approved a pending seller, who may now list products."""

    __version__ = 1

    seller_id: Identifier(required=True)
    decided_by: Identifier(required=True)
    decided_at: DateTime(required=True)


@bazaar.event(part_of="Seller")
class SellerRejected:
    """An admin rejected a pending seller application."""

    __version__ = 1

    seller_id: Identifier(required=True)
    decided_by: Identifier(required=True)
    reason: String(required=True, sanitize=False)
    decided_at: DateTime(required=True)
