import pytest
from protean import current_domain
from protean.exceptions import ValidationError

from bazaar.delivery.management import SetPartnerAvailability
from bazaar.delivery.partner import DeliveryPartner
from bazaar.order.lifecycle import AssignDeliveryPartner, CancelOrder, RecordPayment, UpdateOrderStatus
from bazaar.order.order import Order
from bazaar.product.product import Product
from bazaar.shared.exceptions import ForbiddenError, InvalidTransitionError, NotFoundError


@pytest.fixture()
def order(customer, product, delivery_area, place_order):
    return place_order(customer, [(product, 2)])


def _move(order, actor, status, **fields):
    current_domain.process(
        UpdateOrderStatus(order_id=order.id, status=status, actor_id=actor.id, **fields), asynchronous=False
    )
    return current_domain.repository_for(Order).get(order.id)


def _assign(order, partner, admin):
    current_domain.process(
        AssignDeliveryPartner(order_id=order.id, partner_id=partner.id, actor_id=admin.id), asynchronous=False
    )


class TestStatusUpdates:
    def test_seller_of_an_item_moves_the_order(self, order, seller):
        updated = _move(order, seller, "confirmed", location="Verma General Store")

        assert updated.status == "confirmed"
        assert updated.timeline()[-1].location == "Verma General Store"
        assert updated.timeline()[-1].message == "Order confirmed by the store"

    def test_illegal_transition_leaves_no_trace(self, order, seller):
        with pytest.raises(InvalidTransitionError):
            _move(order, seller, "packed")

        stored = current_domain.repository_for(Order).get(order.id)
        assert stored.status == "placed"
        assert len(stored.tracking) == 1

    def test_customer_cannot_move_the_order(self, order, customer):
        with pytest.raises(ForbiddenError):
            _move(order, customer, "confirmed")

    def test_unrelated_seller_cannot_move_the_order(self, order, make_seller):
        with pytest.raises(ForbiddenError):
            _move(order, make_seller(store_name="Rival Store"), "confirmed")

    def test_assigned_partner_delivers_cod_order(self, order, seller, admin, make_partner):
        partner = make_partner()
        _move(order, seller, "confirmed")
        _move(order, seller, "packed")
        _assign(order, partner, admin)

        _move(order, partner, "out_for_delivery")
        delivered = _move(order, partner, "delivered")

        assert delivered.status == "delivered"
        assert delivered.payment_status == "paid"
        assert delivered.delivered_at is not None
        assert current_domain.repository_for(DeliveryPartner).get(partner.id).total_deliveries == 1

    def test_unassigned_partner_is_forbidden(self, order, make_partner):
        with pytest.raises(ForbiddenError):
            _move(order, make_partner(), "confirmed")

    def test_admin_can_move_any_order(self, order, admin):
        assert _move(order, admin, "confirmed").status == "confirmed"


class TestCancellation:
    def test_cancel_releases_stock(self, order, customer, product):
        assert current_domain.repository_for(Product).get(product.id).stock == 38

        current_domain.process(
            CancelOrder(order_id=order.id, actor_id=customer.id, reason="Ordered twice"), asynchronous=False
        )

        stored = current_domain.repository_for(Order).get(order.id)
        assert stored.status == "cancelled"
        assert stored.timeline()[-1].message == "Ordered twice"
        assert current_domain.repository_for(Product).get(product.id).stock == 40

    def test_another_customer_sees_not_found(self, order, register_user):
        stranger = register_user()
        with pytest.raises(NotFoundError):
            current_domain.process(CancelOrder(order_id=order.id, actor_id=stranger.id), asynchronous=False)

    def test_delivered_order_cannot_be_cancelled(self, order, customer, admin):
        for status in ("confirmed", "packed", "out_for_delivery", "delivered"):
            _move(order, admin, status)

        with pytest.raises(InvalidTransitionError):
            current_domain.process(CancelOrder(order_id=order.id, actor_id=customer.id), asynchronous=False)


class TestAssignment:
    def test_assign_approved_partner(self, order, admin, make_partner):
        partner = make_partner()
        _assign(order, partner, admin)

        stored = current_domain.repository_for(Order).get(order.id)
        assert stored.delivery_partner_id == partner.id
        assert stored.timeline()[-1].message == "Delivery partner assigned"

    def test_pending_partner_is_rejected(self, order, admin, make_partner):
        with pytest.raises(ValidationError) as exc:
            _assign(order, make_partner(approve=False), admin)
        assert "partner_id" in exc.value.messages

    def test_unavailable_partner_is_rejected(self, order, admin, make_partner):
        partner = make_partner()
        current_domain.process(SetPartnerAvailability(partner_id=partner.id, is_available=False), asynchronous=False)

        with pytest.raises(ValidationError):
            _assign(order, partner, admin)


class TestPayments:
    def test_online_payment_outcome(self, customer, product, delivery_area, place_order):
        order = place_order(customer, [(product, 1)], payment_method="upi")
        current_domain.process(RecordPayment(order_id=order.id, payment_status="paid"), asynchronous=False)
        assert current_domain.repository_for(Order).get(order.id).payment_status == "paid"

    def test_cod_payment_is_settled_on_delivery(self, order):
        with pytest.raises(ValidationError):
            current_domain.process(RecordPayment(order_id=order.id, payment_status="paid"), asynchronous=False)
