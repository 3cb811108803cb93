"""Domain events for delivery partners."""

from protean.fields import DateTime, Identifier, String

from bazaar.domain import bazaar


@bazaar.event(part_of="DeliveryPartner")
class DeliveryPartnerRegistered:
    """A user registered to deliver orders and awaits approval."""

    __version__ = 1

    partner_id: Identifier(required=True)
    vehicle_type: String(required=True)
    registered_at: DateTime(required=True)


@bazaar.event(part_of="DeliveryPartner")
class DeliveryPartnerApproved:
    __version__ = 1

    partner_id: Identifier(required=True)
    decided_by: Identifier(required=True)
    decided_at: DateTime(required=True)


@bazaar.event(part_of="DeliveryPartner")
class DeliveryPartnerRejected:
    __version__ = 1

    partner_id: Identifier(required=True)
    decided_by: Identifier(required=True)
    reason: String(required=True, sanitize=False)
    decided_at: DateTime(required=True)
