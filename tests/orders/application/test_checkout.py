from datetime import UTC, datetime, timedelta
from decimal import Decimal

import pytest
from protean import current_domain
from protean.exceptions import ValidationError

from bazaar.cart.cart import Cart
from bazaar.cart.snapshot import cart_snapshot
from bazaar.order.checkout import PlaceOrder
from bazaar.order.history import list_for_user
from bazaar.product.product import Product
from bazaar.promotion.management import CreatePromoCode
from bazaar.promotion.promo_code import PromoCode
from bazaar.shared.exceptions import ConflictError, EmptyCartError


@pytest.fixture()
def promo():
    now = datetime.now(UTC)
    current_domain.process(
        CreatePromoCode(
            code="diwali10",
            description="10% off, up to 30",
            discount_type="percentage",
            discount_value="10",
            max_discount="30",
            valid_from=now - timedelta(days=1),
            valid_until=now + timedelta(days=1),
        ),
        asynchronous=False,
    )
    return current_domain.repository_for(PromoCode).by_code("DIWALI10")


def _stock(product):
    return current_domain.repository_for(Product).get(product.id).stock


class TestPlaceOrder:
    def test_cod_order_totals(self, customer, product, delivery_area, place_order):
        order = place_order(customer, [(product, 2)])

        assert order.subtotal == Decimal("100.00")
        assert order.delivery_charge == Decimal("20.00")
        assert order.discount == Decimal("0.00")
        assert order.total == Decimal("120.00")
        assert order.items[0].total_price == Decimal("100.00")
        assert order.status == "placed"
        assert order.payment_status == "pending"
        assert order.delivery_address.pincode == "493773"

        assert cart_snapshot(customer.id).is_empty
        assert _stock(product) == 38

    def test_price_is_frozen_at_placement(self, customer, seller, product, delivery_area, place_order):
        from bazaar.product.listing import UpdateProductPrice

        order = place_order(customer, [(product, 1)])
        current_domain.process(
            UpdateProductPrice(product_id=product.id, seller_id=seller.id, price="75"), asynchronous=False
        )

        stored = list_for_user(customer.id)[0]
        assert stored.id == order.id
        assert stored.items[0].unit_price == Decimal("50.00")

    def test_free_delivery_strictly_above_threshold(self, customer, list_product, delivery_area, place_order):
        exactly = list_product(name="Ghee", price="499.00")
        assert place_order(customer, [(exactly, 1)]).delivery_charge == Decimal("20.00")

        above = list_product(name="Dry Fruits", price="499.01")
        assert place_order(customer, [(above, 1)]).delivery_charge == Decimal("0.00")

    def test_unknown_pincode_delivers_free(self, customer, product, place_order):
        order = place_order(customer, [(product, 1)], pincode="110001")
        assert order.delivery_charge == Decimal("0.00")
        assert order.total == Decimal("50.00")

    def test_promo_code_discount_is_capped(self, customer, list_product, delivery_area, promo, place_order):
        oil = list_product(name="Mustard Oil", price="400.00")
        order = place_order(customer, [(oil, 1)], promo_code="Diwali10")

        assert order.discount == Decimal("30.00")
        assert order.total == Decimal("390.00")
        assert order.promo_code == "DIWALI10"
        assert current_domain.repository_for(PromoCode).get(promo.id).used_count == 1

    def test_orders_are_listed_newest_first(self, customer, product, delivery_area, place_order):
        first = place_order(customer, [(product, 1)])
        second = place_order(customer, [(product, 1)])
        assert [o.id for o in list_for_user(customer.id)] == [second.id, first.id]


class TestCheckoutFailures:
    def test_empty_cart(self, customer, address_json):
        with pytest.raises(EmptyCartError):
            current_domain.process(
                PlaceOrder(user_id=customer.id, payment_method="cod", delivery_address=address_json()),
                asynchronous=False,
            )
        assert list_for_user(customer.id) == []

    def test_insufficient_stock_leaves_everything_untouched(self, customer, list_product, delivery_area, place_order):
        rice = list_product(name="Basmati Rice", stock=10)
        oil = list_product(name="Mustard Oil", stock=1)

        with pytest.raises(ValidationError) as exc:
            place_order(customer, [(rice, 3), (oil, 2)])
        assert "stock" in exc.value.messages

        assert _stock(rice) == 10
        assert _stock(oil) == 1
        assert len(cart_snapshot(customer.id).lines) == 2
        assert list_for_user(customer.id) == []

    def test_failure_after_writes_rolls_back(self, monkeypatch, customer, product, delivery_area, promo, place_order):
        def fail(self):
            raise RuntimeError("storage unavailable")

        monkeypatch.setattr(Cart, "clear", fail)

        with pytest.raises(RuntimeError):
            place_order(customer, [(product, 2)], promo_code="DIWALI10")

        assert list_for_user(customer.id) == []
        assert _stock(product) == 40
        assert cart_snapshot(customer.id).lines[0].quantity == 2
        assert current_domain.repository_for(PromoCode).get(promo.id).used_count == 0

    def test_invalid_promo_code(self, customer, product, delivery_area, place_order):
        with pytest.raises(ValidationError) as exc:
            place_order(customer, [(product, 1)], promo_code="NOPE")
        assert "promo_code" in exc.value.messages
        assert _stock(product) == 40


class TestOrderNumberCollisions:
    def test_one_retry_with_a_fresh_number(self, monkeypatch, customer, product, delivery_area, place_order):
        numbers = iter(["ORD-FIXED", "ORD-FIXED", "ORD-FRESH"])
        monkeypatch.setattr("bazaar.order.checkout.generate_order_number", lambda user_id: next(numbers))

        first = place_order(customer, [(product, 1)])
        second = place_order(customer, [(product, 1)])

        assert first.order_number == "ORD-FIXED"
        assert second.order_number == "ORD-FRESH"

    def test_repeated_collision_is_a_conflict(self, monkeypatch, customer, product, delivery_area, place_order):
        monkeypatch.setattr("bazaar.order.checkout.generate_order_number", lambda user_id: "ORD-FIXED")
        place_order(customer, [(product, 1)])

        with pytest.raises(ConflictError):
            place_order(customer, [(product, 1)])

        assert len(list_for_user(customer.id)) == 1
        assert _stock(product) == 39


class TestCheckoutRechecksProduct:
    def test_order_bounds_tightened_after_adding(self, customer, product, delivery_area, address_json):
        from bazaar.cart.items import AddToCart

        current_domain.process(AddToCart(user_id=customer.id, product_id=product.id, quantity=3), asynchronous=False)

        products = current_domain.repository_for(Product)
        tightened = products.get(product.id)
        tightened.max_order_qty = 2
        products.add(tightened)

        with pytest.raises(ValidationError) as exc:
            current_domain.process(
                PlaceOrder(user_id=customer.id, payment_method="cod", delivery_address=address_json()),
                asynchronous=False,
            )
        assert "quantity" in exc.value.messages
        assert _stock(product) == 40
        assert cart_snapshot(customer.id).lines[0].quantity == 3
        assert list_for_user(customer.id) == []


class TestFreeTextIsStoredVerbatim:
    def test_address_and_instructions_keep_markup_characters(self, customer, product, delivery_area, address_json):
        from bazaar.cart.items import AddToCart

        current_domain.process(AddToCart(user_id=customer.id, product_id=product.id, quantity=1), asynchronous=False)
        order_id = current_domain.process(
            PlaceOrder(
                user_id=customer.id,
                payment_method="cod",
                delivery_address=address_json(full_name="Asha & Ravi Verma", landmark="Opp. <Gate 2>"),
                delivery_instructions="Leave at gate <back> & ring",
            ),
            asynchronous=False,
        )

        order = list_for_user(customer.id)[0]
        assert order.id == order_id
        assert order.delivery_address.full_name == "Asha & Ravi Verma"
        assert order.delivery_address.landmark == "Opp. <Gate 2>"
        assert order.delivery_instructions == "Leave at gate <back> & ring"
