"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Decimal, Identifier, Integer, String

from bazaar.domain import bazaar


@bazaar.event(part_of="Order")
class OrderPlaced:
    """A customer checked out their cart into a new order."""

    __version__ = 1

    order_id: Identifier(required=True)
    order_number: String(required=True)
    customer_id: Identifier(required=True)
    subtotal: Decimal(required=True)
    delivery_charge: Decimal(required=True)
    discount: Decimal(required=True)
    total: Decimal(required=True)
    payment_method: String(required=True)
    promo_code: String()
    item_count: Integer(required=True)
    placed_at: DateTime(required=True)


@bazaar.event(part_of="Order")
class OrderStatusChanged:
    """An order moved along its delivery lifecycle or was cancelled."""

    __version__ = 1

    order_id: Identifier(required=True)
    previous_status: String(required=True)
    status: String(required=True)
    recorded_by: Identifier()
    changed_at: DateTime(required=True)


@bazaar.event(part_of="Order")
class DeliveryPartnerAssigned:
    __version__ = 1

    order_id: Identifier(required=True)
    partner_id: Identifier(required=True)
    assigned_by: Identifier()
    assigned_at: DateTime(required=True)


@bazaar.event(part_of="Order")
class OrderPaymentRecorded:
    """The outcome of a payment was recorded against an order."""

    __version__ = 1

    order_id: Identifier(required=True)
    payment_method: String(required=True)
    payment_status: String(required=True)
    recorded_at: DateTime(required=True)
