class TestReviewRoutes:
    def test_submit_and_list(self, client, customer, product, delivered_order, auth_headers):
        response = client.post(
            "/reviews",
            json={"product_id": product.id, "order_id": delivered_order.id, "rating": 5, "comment": "Fresh stock"},
            headers=auth_headers(customer),
        )
        assert response.status_code == 201
        assert response.json()["rating"] == 5

        listing = client.get(f"/products/{product.id}/reviews").json()
        assert listing["summary"] == {
            "average_rating": 5.0,
            "total_reviews": 1,
            "rating_distribution": {"1": 0, "2": 0, "3": 0, "4": 0, "5": 1},
        }
        assert [r["comment"] for r in listing["reviews"]] == ["Fresh stock"]

    def test_duplicate_is_409(self, client, customer, product, delivered_order, auth_headers):
        payload = {"product_id": product.id, "order_id": delivered_order.id, "rating": 4}
        headers = auth_headers(customer)
        assert client.post("/reviews", json=payload, headers=headers).status_code == 201
        assert client.post("/reviews", json=payload, headers=headers).status_code == 409

    def test_undelivered_order_is_400(self, client, customer, product, delivery_area, place_order, auth_headers):
        order = place_order(customer, [(product, 1)])
        response = client.post(
            "/reviews",
            json={"product_id": product.id, "order_id": order.id, "rating": 4},
            headers=auth_headers(customer),
        )
        assert response.status_code == 400

    def test_reviews_of_unreviewed_product(self, client, product):
        listing = client.get(f"/products/{product.id}/reviews").json()
        assert listing["summary"]["total_reviews"] == 0
        assert listing["reviews"] == []
