class TestCartRoutes:
    def test_requires_authentication(self, client):
        assert client.get("/cart").status_code == 401

    def test_add_merge_and_view(self, client, customer, product, auth_headers):
        headers = auth_headers(customer)

        first = client.post("/cart/items", json={"product_id": product.id, "quantity": 2}, headers=headers)
        assert first.status_code == 200
        assert first.json()["line_total"] == "100.00"

        second = client.post("/cart/items", json={"product_id": product.id, "quantity": 1}, headers=headers)
        assert second.json()["item_id"] == first.json()["item_id"]
        assert second.json()["quantity"] == 3

        cart = client.get("/cart", headers=headers).json()
        assert cart["item_count"] == 3
        assert cart["subtotal"] == "150.00"
        assert len(cart["items"]) == 1

    def test_invalid_quantity_is_400(self, client, customer, product, auth_headers):
        response = client.post(
            "/cart/items", json={"product_id": product.id, "quantity": 0}, headers=auth_headers(customer)
        )
        assert response.status_code == 400
        assert "quantity" in response.json()["error"]

    def test_unknown_product_is_400(self, client, customer, auth_headers):
        response = client.post(
            "/cart/items", json={"product_id": "no-such-product", "quantity": 1}, headers=auth_headers(customer)
        )
        assert response.status_code == 400
        assert "product_id" in response.json()["error"]

    def test_update_remove_and_clear(self, client, customer, list_product, auth_headers):
        headers = auth_headers(customer)
        rice = list_product(name="Basmati Rice")
        oil = list_product(name="Mustard Oil", price="145.00")

        item_id = client.post("/cart/items", json={"product_id": rice.id}, headers=headers).json()["item_id"]
        client.post("/cart/items", json={"product_id": oil.id}, headers=headers)

        updated = client.put(f"/cart/items/{item_id}", json={"quantity": 4}, headers=headers)
        assert updated.json()["quantity"] == 4

        removed = client.delete(f"/cart/items/{item_id}", headers=headers)
        assert [line["name"] for line in removed.json()["items"]] == ["Mustard Oil"]

        cleared = client.delete("/cart", headers=headers)
        assert cleared.json() == {"items": [], "item_count": 0, "subtotal": "0.00"}

    def test_unknown_item_is_404(self, client, customer, product, auth_headers):
        headers = auth_headers(customer)
        client.post("/cart/items", json={"product_id": product.id}, headers=headers)
        assert client.delete("/cart/items/missing", headers=headers).status_code == 404
