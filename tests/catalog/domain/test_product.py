from decimal import Decimal

import pytest
from protean.exceptions import ValidationError

from bazaar.product.events import ProductListed, ProductPriceChanged, ProductStockAdjusted
from bazaar.product.product import Product


@pytest.fixture()
def rice():
    return Product.create(
        seller_id="seller-1",
        category_id="cat-1",
        name="Basmati Rice",
        price="50",
        stock=10,
        min_order_qty=1,
        max_order_qty=5,
        unit="kg",
    )


class TestCreate:
    def test_price_is_money(self, rice):
        assert rice.price == Decimal("50.00")
        assert rice.is_active is True
        assert isinstance(rice._events[-1], ProductListed)

    def test_default_unit(self):
        product = Product.create(seller_id="s", category_id="c", name="Soap", price="20")
        assert product.unit == "piece"
        assert (product.min_order_qty, product.max_order_qty) == (1, 100)

    def test_min_order_qty_cannot_exceed_max(self):
        with pytest.raises(ValidationError):
            Product.create(seller_id="s", category_id="c", name="Oil", price="120", min_order_qty=5, max_order_qty=2)

    def test_negative_stock_is_rejected(self):
        with pytest.raises(ValidationError):
            Product.create(seller_id="s", category_id="c", name="Oil", price="120", stock=-1)


class TestOrderQuantity:
    @pytest.mark.parametrize("quantity", [1, 3, 5])
    def test_within_bounds(self, rice, quantity):
        rice.check_order_quantity(quantity)

    @pytest.mark.parametrize("quantity", [0, -2, 6])
    def test_outside_bounds(self, rice, quantity):
        with pytest.raises(ValidationError) as exc:
            rice.check_order_quantity(quantity)
        assert "quantity" in exc.value.messages

    def test_below_minimum(self):
        product = Product.create(seller_id="s", category_id="c", name="Eggs", price="6", min_order_qty=6)
        with pytest.raises(ValidationError):
            product.check_order_quantity(4)


class TestStock:
    def test_reserve(self, rice):
        rice.reserve(4)
        assert rice.stock == 6
        event = rice._events[-1]
        assert isinstance(event, ProductStockAdjusted)
        assert (event.previous_stock, event.new_stock, event.reason) == (10, 6, "reserved")

    def test_reserve_more_than_stock(self, rice):
        with pytest.raises(ValidationError) as exc:
            rice.reserve(11)
        assert "stock" in exc.value.messages
        assert rice.stock == 10

    def test_reserve_inactive_product(self, rice):
        rice.deactivate()
        with pytest.raises(ValidationError):
            rice.reserve(1)

    def test_release(self, rice):
        rice.reserve(4)
        rice.release(4)
        assert rice.stock == 10
        assert rice._events[-1].reason == "released"

    def test_restock(self, rice):
        rice.restock(15)
        assert rice.stock == 25

    def test_restock_requires_positive_quantity(self, rice):
        with pytest.raises(ValidationError):
            rice.restock(0)


class TestPrice:
    def test_change_price(self, rice):
        rice.change_price("55.5", original_price="60")
        assert rice.price == Decimal("55.50")
        assert rice.original_price == Decimal("60.00")
        event = rice._events[-1]
        assert isinstance(event, ProductPriceChanged)
        assert event.previous_price == Decimal("50.00")

    def test_negative_price_is_rejected(self, rice):
        with pytest.raises(ValidationError):
            rice.change_price("-1")
