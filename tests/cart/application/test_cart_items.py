from decimal import Decimal

import pytest
from protean import current_domain
from protean.exceptions import ValidationError

from bazaar.cart.items import AddToCart, ClearCart, RemoveFromCart, UpdateCartItem
from bazaar.cart.snapshot import cart_snapshot
from bazaar.shared.exceptions import NotFoundError


def _add(user, product, quantity):
    return current_domain.process(
        AddToCart(user_id=user.id, product_id=product.id, quantity=quantity), asynchronous=False
    )


class TestAddToCart:
    def test_repeated_add_merges(self, customer, product):
        first = _add(customer, product, 2)
        second = _add(customer, product, 1)

        snapshot = cart_snapshot(customer.id)
        assert first == second
        assert [(line.product_id, line.quantity) for line in snapshot.lines] == [(product.id, 3)]

    def test_merged_quantity_over_max(self, customer, list_product):
        product = list_product(max_order_qty=3)
        _add(customer, product, 2)

        with pytest.raises(ValidationError):
            _add(customer, product, 2)
        assert cart_snapshot(customer.id).lines[0].quantity == 2

    def test_inactive_product_cannot_be_added(self, customer, seller, product):
        from bazaar.product.listing import DeactivateProduct

        current_domain.process(DeactivateProduct(product_id=product.id, seller_id=seller.id), asynchronous=False)
        with pytest.raises(ValidationError):
            _add(customer, product, 1)

    def test_unknown_product(self, customer):
        with pytest.raises(ValidationError) as exc:
            current_domain.process(AddToCart(user_id=customer.id, product_id="missing", quantity=1), asynchronous=False)
        assert "product_id" in exc.value.messages
        assert cart_snapshot(customer.id).is_empty


class TestSnapshot:
    def test_subtotal_uses_live_prices(self, customer, list_product):
        rice = list_product(name="Basmati Rice", price="50.00")
        oil = list_product(name="Mustard Oil", price="145.50")
        _add(customer, rice, 2)
        _add(customer, oil, 1)

        snapshot = cart_snapshot(customer.id)
        assert snapshot.subtotal == Decimal("245.50")
        assert snapshot.item_count == 3
        assert [line.name for line in snapshot.lines] == ["Basmati Rice", "Mustard Oil"]

    def test_no_cart_is_an_empty_snapshot(self, customer):
        snapshot = cart_snapshot(customer.id)
        assert snapshot.is_empty
        assert snapshot.subtotal == Decimal("0.00")


class TestUpdateAndRemove:
    def test_update_quantity(self, customer, product):
        item_id = _add(customer, product, 1)
        current_domain.process(UpdateCartItem(user_id=customer.id, item_id=item_id, quantity=4), asynchronous=False)
        assert cart_snapshot(customer.id).lines[0].quantity == 4

    def test_remove(self, customer, product):
        item_id = _add(customer, product, 1)
        current_domain.process(RemoveFromCart(user_id=customer.id, item_id=item_id), asynchronous=False)
        assert cart_snapshot(customer.id).is_empty

    def test_update_without_cart(self, customer):
        with pytest.raises(NotFoundError):
            current_domain.process(UpdateCartItem(user_id=customer.id, item_id="x", quantity=1), asynchronous=False)

    def test_clear_is_idempotent(self, customer, product):
        _add(customer, product, 1)
        current_domain.process(ClearCart(user_id=customer.id), asynchronous=False)
        current_domain.process(ClearCart(user_id=customer.id), asynchronous=False)
        assert cart_snapshot(customer.id).is_empty


class TestConcurrentAdds:
    def test_stale_add_is_retried_on_fresh_state(self, monkeypatch, customer, product):
        """A second request commits between this handler's read and its write."""
        import threading

        from bazaar.cart.cart import Cart
        from bazaar.domain import bazaar

        _add(customer, product, 1)

        original = Cart.add_item
        calls = []
        errors = []

        def competing_request():
            try:
                with bazaar.domain_context():
                    _add(customer, product, 2)
            except Exception as exc:
                errors.append(exc)

        def add_item(self, *args, **kwargs):
            calls.append(args[1])
            if len(calls) == 1:
                worker = threading.Thread(target=competing_request)
                worker.start()
                worker.join()
            return original(self, *args, **kwargs)

        monkeypatch.setattr(Cart, "add_item", add_item)

        _add(customer, product, 3)

        assert errors == []
        # first attempt, the competing request, then the retry
        assert calls == [3, 2, 3]
        snapshot = cart_snapshot(customer.id)
        assert [(line.product_id, line.quantity) for line in snapshot.lines] == [(product.id, 6)]
