import json
import os
from pathlib import Path

import pytest
from faker import Faker
from protean import current_domain
from protean.integrations.pytest import DomainFixture

fake = Faker("en_IN")

PINCODE = "493773"


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Select the config overlay before the domain is imported."""
    os.environ["PROTEAN_ENV"] = session.config.option.env


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = str(Path(item.fspath))

        if "/domain/" in test_path:
            item.add_marker(pytest.mark.domain)
        elif "/application/" in test_path:
            item.add_marker(pytest.mark.application)
        elif "/bdd/" in test_path:
            item.add_marker(pytest.mark.bdd)
        elif "/integration/" in test_path:
            item.add_marker(pytest.mark.integration)
            # Integration tests are often slower
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


@pytest.fixture(scope="session")
def bazaar_bed():
    from bazaar.domain import bazaar

    bed = DomainFixture(bazaar)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(bazaar_bed):
    with bazaar_bed.domain_context():
        yield


# ---------------------------------------------------------------------------
# Credentials
# ---------------------------------------------------------------------------
@pytest.fixture()
def issue_token():
    from bazaar.auth import JWTIdentityVerifier

    verifier = JWTIdentityVerifier()

    def _issue(external_id, email, name=None):
        return verifier.issue_token(external_id, email, name=name)

    return _issue


@pytest.fixture()
def auth_headers(issue_token):
    """Bearer headers for a user registered through the ``register_user`` fixture."""

    def _headers(user):
        return {"Authorization": f"Bearer {issue_token(user.external_id, user.email, user.name)}"}

    return _headers


@pytest.fixture()
def client():
    from fastapi.testclient import TestClient

    from bazaar.app import create_app

    return TestClient(create_app(initialize=False), raise_server_exceptions=False)


# ---------------------------------------------------------------------------
# Marketplace builders
# ---------------------------------------------------------------------------
@pytest.fixture()
def register_user():
    from bazaar.user.registration import RegisterUser
    from bazaar.user.user import User

    def _register(email=None, external_id=None, **fields):
        email = email or fake.unique.email()
        user_id = current_domain.process(
            RegisterUser(external_id=external_id or f"ext-{email}", email=email, **fields),
            asynchronous=False,
        )
        return current_domain.repository_for(User).get(user_id)

    return _register


@pytest.fixture()
def admin(register_user):
    from bazaar.user.management import GrantAdmin
    from bazaar.user.user import User

    user = register_user(email="admin@bazaar.example", name="Admin")
    current_domain.process(GrantAdmin(email=user.email), asynchronous=False)
    return current_domain.repository_for(User).get(user.id)


@pytest.fixture()
def customer(register_user):
    return register_user(email="asha@example.com", name="Asha Verma", pincode=PINCODE)


@pytest.fixture()
def make_seller(register_user, admin):
    """Register a user and take them through seller onboarding."""
    from bazaar.seller.onboarding import ApplyAsSeller, ApproveSeller
    from bazaar.user.user import User

    def _make(store_name="Verma General Store", approve=True):
        user = register_user()
        current_domain.process(ApplyAsSeller(user_id=user.id, store_name=store_name), asynchronous=False)
        if approve:
            current_domain.process(ApproveSeller(seller_id=user.id, admin_id=admin.id), asynchronous=False)
        return current_domain.repository_for(User).get(user.id)

    return _make


@pytest.fixture()
def seller(make_seller):
    return make_seller()


@pytest.fixture()
def category():
    from bazaar.category.category import Category
    from bazaar.category.management import CreateCategory

    category_id = current_domain.process(
        CreateCategory(name="Groceries", name_hindi="किराना", sort_order=1), asynchronous=False
    )
    return current_domain.repository_for(Category).get(category_id)


@pytest.fixture()
def list_product(seller, category):
    from bazaar.product.listing import ListProduct
    from bazaar.product.product import Product

    def _list(name="Basmati Rice", price="50.00", stock=40, owner=None, **fields):
        product_id = current_domain.process(
            ListProduct(
                seller_id=(owner or seller).id,
                category_id=category.id,
                name=name,
                price=price,
                stock=stock,
                **fields,
            ),
            asynchronous=False,
        )
        return current_domain.repository_for(Product).get(product_id)

    return _list


@pytest.fixture()
def product(list_product):
    return list_product()


@pytest.fixture()
def delivery_area():
    from bazaar.delivery.area import DeliveryArea
    from bazaar.delivery.management import AddDeliveryArea

    area_id = current_domain.process(
        AddDeliveryArea(
            area_name="Ward 12",
            pincode=PINCODE,
            city="Dhamtari",
            delivery_charge="20.00",
            free_delivery_above="499.00",
        ),
        asynchronous=False,
    )
    return current_domain.repository_for(DeliveryArea).get(area_id)


@pytest.fixture()
def make_partner(register_user, admin):
    from bazaar.delivery.management import ApproveDeliveryPartner, RegisterDeliveryPartner
    from bazaar.user.user import User

    def _make(approve=True):
        user = register_user()
        current_domain.process(
            RegisterDeliveryPartner(user_id=user.id, vehicle_type="bike", vehicle_number="CG05AB1234"),
            asynchronous=False,
        )
        if approve:
            current_domain.process(ApproveDeliveryPartner(partner_id=user.id, admin_id=admin.id), asynchronous=False)
        return current_domain.repository_for(User).get(user.id)

    return _make


def _address_json(pincode=PINCODE, **overrides):
    address = {
        "full_name": "Asha Verma",
        "address_line1": "12 Station Road",
        "city": "Dhamtari",
        "pincode": pincode,
        "phone": "9876543210",
    }
    address.update(overrides)
    return json.dumps(address)


@pytest.fixture()
def address_json():
    return _address_json


@pytest.fixture()
def place_order():
    """Fill the user's cart with ``lines`` and check out."""
    from bazaar.cart.items import AddToCart
    from bazaar.order.checkout import PlaceOrder
    from bazaar.order.order import Order

    def _place(user, lines, payment_method="cod", promo_code=None, pincode=PINCODE):
        for product, quantity in lines:
            current_domain.process(
                AddToCart(user_id=user.id, product_id=product.id, quantity=quantity), asynchronous=False
            )
        order_id = current_domain.process(
            PlaceOrder(
                user_id=user.id,
                payment_method=payment_method,
                delivery_address=_address_json(pincode=pincode),
                promo_code=promo_code,
            ),
            asynchronous=False,
        )
        return current_domain.repository_for(Order).get(order_id)

    return _place
