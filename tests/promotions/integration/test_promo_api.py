def _payload(**overrides):
    payload = {
        "code": "diwali10",
        "description": "10% off, up to 50",
        "discount_type": "percentage",
        "discount_value": "10",
        "max_discount": "50.00",
        "valid_from": "2026-10-01T00:00:00Z",
        "valid_until": "2026-11-15T23:59:59Z",
    }
    payload.update(overrides)
    return payload


class TestPromoCodeRoutes:
    def test_admin_creates_code(self, client, admin, auth_headers):
        response = client.post("/admin/promo-codes", json=_payload(), headers=auth_headers(admin))
        assert response.status_code == 201
        assert response.json()["code"] == "DIWALI10"

    def test_duplicate_is_409(self, client, admin, auth_headers):
        headers = auth_headers(admin)
        client.post("/admin/promo-codes", json=_payload(), headers=headers)
        assert client.post("/admin/promo-codes", json=_payload(), headers=headers).status_code == 409

    def test_inverted_window_is_400(self, client, admin, auth_headers):
        response = client.post(
            "/admin/promo-codes",
            json=_payload(valid_from="2026-12-01T00:00:00Z", valid_until="2026-11-01T00:00:00Z"),
            headers=auth_headers(admin),
        )
        assert response.status_code == 400

    def test_customer_is_forbidden(self, client, customer, auth_headers):
        response = client.post("/admin/promo-codes", json=_payload(), headers=auth_headers(customer))
        assert response.status_code == 403
