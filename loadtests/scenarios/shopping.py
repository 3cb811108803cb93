"""Shopping load test scenarios.

Two journeys: an anonymous browser reading the catalog, and a signed-in
shopper going from product search through the cart to checkout.
"""

import random

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import checkout_data, registration_data, search_term, shopper_token
from loadtests.helpers.response import extract_error_detail
from loadtests.helpers.state import BrowserState, ShopperState


class BrowseJourney(SequentialTaskSet):
    """List categories -> list products by category -> search -> view product -> read reviews."""

    def on_start(self):
        self.state = BrowserState()

    @task
    def list_categories(self):
        with self.client.get("/categories", catch_response=True, name="GET /categories") as resp:
            if resp.status_code == 200:
                self.state.category_ids = [c["id"] for c in resp.json()]
            else:
                resp.failure(f"List categories failed: {resp.status_code} {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def list_products(self):
        params = {"category_id": random.choice(self.state.category_ids)} if self.state.category_ids else {}
        with self.client.get("/products", params=params, catch_response=True, name="GET /products") as resp:
            if resp.status_code == 200:
                self.state.product_ids = [p["id"] for p in resp.json()]
            else:
                resp.failure(f"List products failed: {resp.status_code} {extract_error_detail(resp)}")

    @task
    def search(self):
        with self.client.get(
            "/products", params={"search": search_term()}, catch_response=True, name="GET /products?search"
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Search failed: {resp.status_code} {extract_error_detail(resp)}")

    @task
    def view_product(self):
        if not self.state.product_ids:
            self.interrupt()
        product_id = random.choice(self.state.product_ids)
        with self.client.get(f"/products/{product_id}", catch_response=True, name="GET /products/{id}") as resp:
            if resp.status_code != 200:
                resp.failure(f"View product failed: {resp.status_code} {extract_error_detail(resp)}")

    @task
    def read_reviews(self):
        product_id = random.choice(self.state.product_ids)
        with self.client.get(
            f"/products/{product_id}/reviews", catch_response=True, name="GET /products/{id}/reviews"
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Read reviews failed: {resp.status_code} {extract_error_detail(resp)}")

    @task
    def done(self):
        self.interrupt()


class CheckoutJourney(SequentialTaskSet):
    """Register -> browse -> add two lines to cart -> view cart -> place order -> view order.

    Requires a seeded catalog and a delivery area for the pincodes in
    LOADTEST_PINCODES.
    """

    def on_start(self):
        self.state = ShopperState(token=shopper_token())

    def _headers(self):
        return {"Authorization": f"Bearer {self.state.token}"}

    @task
    def register(self):
        with self.client.post(
            "/auth/register",
            json=registration_data(),
            headers=self._headers(),
            catch_response=True,
            name="POST /auth/register",
        ) as resp:
            if resp.status_code == 201:
                self.state.user_id = resp.json()["id"]
            else:
                resp.failure(f"Register failed: {resp.status_code} {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def browse(self):
        with self.client.get("/products", catch_response=True, name="GET /products") as resp:
            if resp.status_code == 200:
                self.state.product_ids = [p["id"] for p in resp.json() if p["stock"] > 0]
            else:
                resp.failure(f"List products failed: {resp.status_code} {extract_error_detail(resp)}")
        if not self.state.product_ids:
            self.interrupt()

    @task
    def add_to_cart(self):
        picks = random.sample(self.state.product_ids, k=min(2, len(self.state.product_ids)))
        for product_id in picks:
            with self.client.post(
                "/cart/items",
                json={"product_id": product_id, "quantity": 1},
                headers=self._headers(),
                catch_response=True,
                name="POST /cart/items",
            ) as resp:
                if resp.status_code == 200:
                    self.state.cart_item_ids.append(resp.json()["item_id"])
                else:
                    resp.failure(f"Add to cart failed: {resp.status_code} {extract_error_detail(resp)}")

    @task
    def view_cart(self):
        with self.client.get("/cart", headers=self._headers(), catch_response=True, name="GET /cart") as resp:
            if resp.status_code != 200:
                resp.failure(f"View cart failed: {resp.status_code} {extract_error_detail(resp)}")
            elif not resp.json()["items"]:
                resp.failure("Cart is empty after adding items")
                self.interrupt()

    @task
    def place_order(self):
        with self.client.post(
            "/orders",
            json=checkout_data(),
            headers=self._headers(),
            catch_response=True,
            name="POST /orders",
        ) as resp:
            if resp.status_code == 201:
                body = resp.json()
                self.state.order_id = body["id"]
                self.state.order_number = body["order_number"]
            else:
                resp.failure(f"Checkout failed: {resp.status_code} {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def view_order(self):
        with self.client.get(
            f"/orders/{self.state.order_id}", headers=self._headers(), catch_response=True, name="GET /orders/{id}"
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"View order failed: {resp.status_code} {extract_error_detail(resp)}")

    @task
    def done(self):
        self.interrupt()


class BrowsingUser(HttpUser):
    wait_time = between(1, 3)
    tasks = [BrowseJourney]


class ShoppingUser(HttpUser):
    wait_time = between(2, 5)
    tasks = {CheckoutJourney: 1, BrowseJourney: 3}
