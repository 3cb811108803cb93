"""Shared BDD fixtures and step definitions for checkout and order lifecycle."""

from decimal import Decimal

import pytest
from protean import current_domain
from pytest_bdd import given, parsers, then

from bazaar.cart.items import AddToCart
from bazaar.cart.snapshot import cart_snapshot
from bazaar.delivery.management import AddDeliveryArea
from bazaar.order.order import Order
from bazaar.product.product import Product


@pytest.fixture()
def error():
    """Container for a rejected command."""
    return {"exc": None}


@pytest.fixture()
def listed():
    """Products listed in the scenario, by name."""
    return {}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(
    parsers.cfparse(
        'a delivery area for pincode "{pincode}" charging {charge} with free delivery above {threshold}'
    )
)
def _(pincode, charge, threshold):
    current_domain.process(
        AddDeliveryArea(
            area_name="Ward 12",
            pincode=pincode,
            city="Dhamtari",
            delivery_charge=charge,
            free_delivery_above=threshold,
        ),
        asynchronous=False,
    )


@given(parsers.cfparse('an approved seller listing "{name}" at {price} with {stock:d} in stock'))
def _(list_product, listed, name, price, stock):
    listed[name] = list_product(name=name, price=price, stock=stock)


@given(parsers.cfparse('the customer has {quantity:d} "{name}" in the cart'))
def _(customer, listed, quantity, name):
    current_domain.process(
        AddToCart(user_id=customer.id, product_id=listed[name].id, quantity=quantity), asynchronous=False
    )


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the order status is "{status}"'))
def _(order, status):
    assert current_domain.repository_for(Order).get(order.id).status == status


@then(parsers.cfparse('the payment status is "{status}"'))
def _(order, status):
    assert current_domain.repository_for(Order).get(order.id).payment_status == status


@then(parsers.cfparse('"{name}" has {stock:d} in stock'))
def _(listed, name, stock):
    assert current_domain.repository_for(Product).get(listed[name].id).stock == stock


@then("the cart is empty")
def _(customer):
    assert cart_snapshot(customer.id).is_empty


@then(parsers.cfparse('the cart holds {quantity:d} "{name}"'))
def _(customer, listed, quantity, name):
    lines = {line.product_id: line.quantity for line in cart_snapshot(customer.id).lines}
    assert lines[listed[name].id] == quantity


@then(parsers.re(r"the order (?P<field>subtotal|delivery charge|discount|total) is (?P<amount>\d+\.\d{2})"))
def _(order, field, amount):
    attribute = field.replace(" ", "_")
    assert getattr(order, attribute) == Decimal(amount)


@then(parsers.cfparse("the order timeline has {count:d} entries"))
def _(order, count):
    assert len(current_domain.repository_for(Order).get(order.id).tracking) == count
