"""Order aggregate: an immutable snapshot of a checked-out cart plus its delivery lifecycle.

The order is a CQRS aggregate so customers' orders can be queried directly.
Money and line items are fixed at placement; afterwards only status, payment
status, partner assignment and timestamps change.

State machine::

    placed → confirmed → packed → out_for_delivery → delivered
    any non-terminal state → cancelled

``delivered`` and ``cancelled`` are terminal. Every accepted transition
appends a TrackingEntry; a rejected one appends nothing.
"""

from datetime import UTC, datetime
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Decimal, HasMany, Identifier, Integer, String, Text, ValueObject

from bazaar.domain import bazaar
from bazaar.order.events import (
    DeliveryPartnerAssigned,
    OrderPaymentRecorded,
    OrderPlaced,
    OrderStatusChanged,
)
from bazaar.order.tracking import PARTNER_ASSIGNED, default_message
from bazaar.shared.exceptions import InvalidTransitionError
from bazaar.shared.money import ZERO, to_money


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class OrderStatus(Enum):
    PLACED = "placed"
    CONFIRMED = "confirmed"
    PACKED = "packed"
    OUT_FOR_DELIVERY = "out_for_delivery"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class PaymentMethod(Enum):
    COD = "cod"
    ONLINE = "online"
    UPI = "upi"


class PaymentStatus(Enum):
    PENDING = "pending"
    PAID = "paid"
    FAILED = "failed"


_VALID_TRANSITIONS = {
    OrderStatus.PLACED: {OrderStatus.CONFIRMED, OrderStatus.CANCELLED},
    OrderStatus.CONFIRMED: {OrderStatus.PACKED, OrderStatus.CANCELLED},
    OrderStatus.PACKED: {OrderStatus.OUT_FOR_DELIVERY, OrderStatus.CANCELLED},
    OrderStatus.OUT_FOR_DELIVERY: {OrderStatus.DELIVERED, OrderStatus.CANCELLED},
    OrderStatus.DELIVERED: set(),  # Terminal
    OrderStatus.CANCELLED: set(),  # Terminal
}


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@bazaar.value_object(part_of="Order")
class DeliveryAddress:
    """Where the order goes, captured at checkout.

    Later profile edits never change an existing order's address.
    """

    full_name: String(required=True, max_length=200, sanitize=False)
    address_line1: String(required=True, max_length=255, sanitize=False)
    address_line2: String(max_length=255, sanitize=False)
    city: String(required=True, max_length=100, sanitize=False)
    pincode: String(required=True, max_length=6)
    landmark: String(max_length=255, sanitize=False)
    phone: String(required=True, max_length=20)


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@bazaar.entity(part_of="Order")
class OrderItem:
    """A line of the order with its price frozen at checkout."""

    product_id: Identifier(required=True)
    seller_id: Identifier(required=True)
    product_name: String(required=True, max_length=200, sanitize=False)
    quantity: Integer(required=True, min_value=1)
    unit_price: Decimal(required=True, min_value=0, precision=10, scale=2)
    total_price: Decimal(required=True, min_value=0, precision=10, scale=2)

    @invariant.post
    def total_price_must_match_quantity(self):
        if self.total_price != self.unit_price * self.quantity:
            raise ValidationError({"total_price": ["Line total must equal unit price times quantity"]})


@bazaar.entity(part_of="Order")
class TrackingEntry:
    sequence: Integer(required=True, min_value=1)
    status: String(required=True, max_length=30)
    message: Text(sanitize=False)
    message_hindi: Text(sanitize=False)
    location: String(max_length=255, sanitize=False)
    recorded_by: Identifier()
    recorded_at: DateTime(required=True)


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@bazaar.aggregate
class Order:
    order_number: String(required=True, max_length=60, unique=True)
    customer_id: Identifier(required=True)
    items: HasMany(OrderItem)
    tracking: HasMany(TrackingEntry)
    delivery_address: ValueObject(DeliveryAddress, required=True)
    subtotal: Decimal(required=True, min_value=0, precision=10, scale=2)
    delivery_charge: Decimal(default=0, min_value=0, precision=10, scale=2)
    discount: Decimal(default=0, min_value=0, precision=10, scale=2)
    total: Decimal(required=True, min_value=0, precision=10, scale=2)
    payment_method: String(required=True, choices=PaymentMethod)
    payment_status: String(choices=PaymentStatus, default=PaymentStatus.PENDING.value)
    status: String(choices=OrderStatus, default=OrderStatus.PLACED.value)
    delivery_instructions: Text(sanitize=False)
    promo_code: String(max_length=30)
    delivery_partner_id: Identifier()
    estimated_delivery_at: DateTime()
    delivered_at: DateTime()
    placed_at: DateTime()
    updated_at: DateTime()

    @invariant.post
    def total_must_balance(self):
        if self.total != self.subtotal + self.delivery_charge - self.discount:
            raise ValidationError({"total": ["Total must equal subtotal plus delivery charge minus discount"]})

    @invariant.post
    def discount_cannot_exceed_amount_due(self):
        if self.discount > self.subtotal + self.delivery_charge:
            raise ValidationError({"discount": ["Discount cannot exceed subtotal plus delivery charge"]})

    @invariant.post
    def items_must_sum_to_subtotal(self):
        if not self.items:
            return
        if to_money(sum((item.total_price for item in self.items), ZERO)) != self.subtotal:
            raise ValidationError({"subtotal": ["Subtotal must equal the sum of line totals"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def place(
        cls,
        order_number,
        customer_id,
        lines,
        delivery_address,
        payment_method,
        delivery_charge=ZERO,
        discount=ZERO,
        delivery_instructions=None,
        promo_code=None,
    ):
        """Build an order from priced lines.

        Args:
            lines: Dicts with product_id, seller_id, product_name, quantity and
                unit_price. Line totals and the subtotal are computed here.
        """
        if not lines:
            raise ValidationError({"items": ["An order needs at least one item"]})

        items = []
        for line in lines:
            unit_price = to_money(line["unit_price"])
            items.append(
                OrderItem(
                    product_id=line["product_id"],
                    seller_id=line["seller_id"],
                    product_name=line["product_name"],
                    quantity=line["quantity"],
                    unit_price=unit_price,
                    total_price=to_money(unit_price * line["quantity"]),
                )
            )

        subtotal = to_money(sum((item.total_price for item in items), ZERO))
        delivery_charge = to_money(delivery_charge)
        discount = to_money(discount)
        now = datetime.now(UTC)

        order = cls(
            order_number=order_number,
            customer_id=customer_id,
            delivery_address=delivery_address,
            subtotal=subtotal,
            delivery_charge=delivery_charge,
            discount=discount,
            total=to_money(subtotal + delivery_charge - discount),
            payment_method=payment_method,
            payment_status=PaymentStatus.PENDING.value,
            status=OrderStatus.PLACED.value,
            delivery_instructions=delivery_instructions,
            promo_code=promo_code.strip().upper() if promo_code else None,
            placed_at=now,
            updated_at=now,
        )

        with atomic_change(order):
            for item in items:
                order.add_items(item)

        message, message_hindi = default_message(OrderStatus.PLACED.value)
        order._track(OrderStatus.PLACED.value, message, message_hindi, recorded_by=customer_id, at=now)

        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                order_number=order.order_number,
                customer_id=str(customer_id),
                subtotal=order.subtotal,
                delivery_charge=order.delivery_charge,
                discount=order.discount,
                total=order.total,
                payment_method=order.payment_method,
                promo_code=order.promo_code,
                item_count=len(items),
                placed_at=now,
            )
        )
        return order

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    @property
    def is_terminal(self) -> bool:
        return not _VALID_TRANSITIONS[OrderStatus(self.status)]

    def can_transition_to(self, status) -> bool:
        return OrderStatus(status) in _VALID_TRANSITIONS[OrderStatus(self.status)]

    def contains_product(self, product_id) -> bool:
        return any(str(item.product_id) == str(product_id) for item in self.items)

    def seller_ids(self) -> set[str]:
        return {str(item.seller_id) for item in self.items}

    def timeline(self) -> list[TrackingEntry]:
        return sorted(self.tracking, key=lambda entry: entry.sequence)

    # -------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------
    def transition_to(self, status, recorded_by=None, message=None, message_hindi=None, location=None):
        """Move to ``status`` and record it on the timeline.

        Raises ``InvalidTransitionError`` for skips, backward moves and exits
        from a terminal state. Returns the previous status.
        """
        try:
            target = OrderStatus(status)
        except ValueError:
            raise ValidationError({"status": [f"Unknown order status: {status}"]}) from None

        if not self.can_transition_to(target):
            raise InvalidTransitionError("status", self.status, target.value)

        previous = self.status
        now = datetime.now(UTC)

        default_en, default_hi = default_message(target.value)
        self.status = target.value
        self.updated_at = now

        if target == OrderStatus.DELIVERED:
            self.delivered_at = now
            if PaymentMethod(self.payment_method) == PaymentMethod.COD:
                self.payment_status = PaymentStatus.PAID.value

        self._track(
            target.value,
            message or default_en,
            message_hindi or default_hi,
            recorded_by=recorded_by,
            location=location,
            at=now,
        )
        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                previous_status=previous,
                status=self.status,
                recorded_by=str(recorded_by) if recorded_by else None,
                changed_at=now,
            )
        )
        return previous

    def cancel(self, recorded_by=None, reason=None):
        return self.transition_to(OrderStatus.CANCELLED.value, recorded_by=recorded_by, message=reason)

    def assign_partner(self, partner_id, assigned_by=None):
        if self.is_terminal:
            raise ValidationError({"status": [f"Cannot assign a delivery partner to a {self.status} order"]})

        now = datetime.now(UTC)
        self.delivery_partner_id = partner_id
        self.updated_at = now

        message, message_hindi = PARTNER_ASSIGNED
        self._track(self.status, message, message_hindi, recorded_by=assigned_by, at=now)
        self.raise_(
            DeliveryPartnerAssigned(
                order_id=str(self.id),
                partner_id=str(partner_id),
                assigned_by=str(assigned_by) if assigned_by else None,
                assigned_at=now,
            )
        )

    def record_payment(self, payment_status):
        """Record a gateway outcome for a prepaid order."""
        if PaymentMethod(self.payment_method) == PaymentMethod.COD:
            raise ValidationError({"payment_method": ["Cash on delivery orders are settled on delivery"]})

        try:
            target = PaymentStatus(payment_status)
        except ValueError:
            raise ValidationError({"payment_status": [f"Unknown payment status: {payment_status}"]}) from None

        if PaymentStatus(self.payment_status) != PaymentStatus.PENDING or target == PaymentStatus.PENDING:
            raise InvalidTransitionError("payment_status", self.payment_status, target.value)

        now = datetime.now(UTC)
        self.payment_status = target.value
        self.updated_at = now
        self.raise_(
            OrderPaymentRecorded(
                order_id=str(self.id),
                payment_method=self.payment_method,
                payment_status=self.payment_status,
                recorded_at=now,
            )
        )

    def _track(self, status, message, message_hindi, recorded_by=None, location=None, at=None):
        self.add_tracking(
            TrackingEntry(
                sequence=len(self.tracking) + 1,
                status=status,
                message=message,
                message_hindi=message_hindi,
                location=location,
                recorded_by=recorded_by,
                recorded_at=at or datetime.now(UTC),
            )
        )
