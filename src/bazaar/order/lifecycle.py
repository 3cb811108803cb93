"""Order lifecycle after placement: status updates, cancellation, partner
assignment and payment outcomes.

Who may move an order forward:

- an admin, always
- an approved seller with at least one item in the order
- the approved delivery partner assigned to the order
"""

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import DateTime, Identifier, String, Text
from protean.utils.globals import current_domain

from bazaar.delivery.partner import DeliveryPartner
from bazaar.domain import bazaar
from bazaar.order.order import Order, OrderStatus
from bazaar.product.product import Product
from bazaar.shared.exceptions import ForbiddenError, NotFoundError
from bazaar.user.accounts import is_admin, is_approved_delivery_partner, is_approved_seller
from bazaar.user.user import User

logger = structlog.get_logger(__name__)


@bazaar.command(part_of="Order")
class UpdateOrderStatus:
    order_id: Identifier(required=True)
    status: String(required=True, max_length=30)
    actor_id: Identifier(required=True)
    message: Text(sanitize=False)
    message_hindi: Text(sanitize=False)
    location: String(max_length=255, sanitize=False)
    estimated_delivery_at: DateTime()


@bazaar.command(part_of="Order")
class CancelOrder:
    order_id: Identifier(required=True)
    actor_id: Identifier(required=True)
    reason: Text(sanitize=False)


@bazaar.command(part_of="Order")
class AssignDeliveryPartner:
    order_id: Identifier(required=True)
    partner_id: Identifier(required=True)
    actor_id: Identifier()


@bazaar.command(part_of="Order")
class RecordPayment:
    order_id: Identifier(required=True)
    payment_status: String(required=True, max_length=10)


@bazaar.command_handler(part_of=Order)
class OrderLifecycleHandler:
    @handle(UpdateOrderStatus)
    def update_status(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        actor = current_domain.repository_for(User).get(command.actor_id)
        _ensure_can_update(order, actor)

        previous = order.transition_to(
            command.status,
            recorded_by=command.actor_id,
            message=command.message,
            message_hindi=command.message_hindi,
            location=command.location,
        )
        if command.estimated_delivery_at:
            order.estimated_delivery_at = command.estimated_delivery_at

        _apply_side_effects(order)
        repo.add(order)

        logger.info(
            "order_status_changed",
            order_id=str(order.id),
            previous_status=previous,
            status=order.status,
            actor_id=str(command.actor_id),
        )

    @handle(CancelOrder)
    def cancel_order(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        actor = current_domain.repository_for(User).get(command.actor_id)

        if str(order.customer_id) != str(actor.id) and not is_admin(actor.account):
            raise NotFoundError(f"Order {command.order_id} not found")

        order.cancel(recorded_by=command.actor_id, reason=command.reason)
        _apply_side_effects(order)
        repo.add(order)

        logger.info("order_cancelled", order_id=str(order.id), actor_id=str(command.actor_id))

    @handle(AssignDeliveryPartner)
    def assign_partner(self, command):
        partner = current_domain.repository_for(DeliveryPartner).get_or_none(command.partner_id)
        if partner is None or not partner.can_take_orders:
            raise ValidationError({"partner_id": ["Delivery partner is not approved or not available"]})

        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        order.assign_partner(command.partner_id, assigned_by=command.actor_id)
        repo.add(order)

        logger.info("delivery_partner_assigned", order_id=str(order.id), partner_id=str(command.partner_id))

    @handle(RecordPayment)
    def record_payment(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        order.record_payment(command.payment_status)
        repo.add(order)


def _ensure_can_update(order, actor):
    account = actor.account
    if is_admin(account):
        return
    if is_approved_seller(account) and str(actor.id) in order.seller_ids():
        return
    if is_approved_delivery_partner(account) and str(order.delivery_partner_id) == str(actor.id):
        return
    raise ForbiddenError("Not allowed to update this order")


def _apply_side_effects(order):
    """Cross-aggregate effects of reaching a terminal status."""
    status = OrderStatus(order.status)

    if status == OrderStatus.CANCELLED:
        products = current_domain.repository_for(Product)
        for item in order.items:
            product = products.get(item.product_id)
            product.release(item.quantity)
            products.add(product)

    elif status == OrderStatus.DELIVERED and order.delivery_partner_id:
        partners = current_domain.repository_for(DeliveryPartner)
        partner = partners.get_or_none(order.delivery_partner_id)
        if partner is not None:
            partner.record_delivery()
            partners.add(partner)
