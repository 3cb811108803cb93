class TestRegister:
    def test_register_returns_201(self, client, issue_token):
        token = issue_token("ext-api-1", "api@example.com", "Api User")
        response = client.post(
            "/auth/register",
            json={"phone": "9876543210", "city": "Dhamtari", "pincode": "493773"},
            headers={"Authorization": f"Bearer {token}"},
        )
        assert response.status_code == 201
        body = response.json()
        assert body["email"] == "api@example.com"
        assert body["name"] == "Api User"
        assert body["role"] == "customer"

    def test_register_twice_conflicts(self, client, issue_token):
        headers = {"Authorization": f"Bearer {issue_token('ext-api-2', 'twice@example.com')}"}
        assert client.post("/auth/register", json={}, headers=headers).status_code == 201
        assert client.post("/auth/register", json={}, headers=headers).status_code == 409

    def test_missing_credential_is_401(self, client):
        response = client.post("/auth/register", json={})
        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"] == "Bearer"

    def test_bad_credential_is_401(self, client):
        response = client.post("/auth/register", json={}, headers={"Authorization": "Bearer not-a-jwt"})
        assert response.status_code == 401


class TestLogin:
    def test_login_creates_or_returns_user(self, client, issue_token):
        headers = {"Authorization": f"Bearer {issue_token('ext-login', 'login@example.com')}"}
        first = client.post("/auth/login", headers=headers)
        second = client.post("/auth/login", headers=headers)
        assert first.status_code == 200
        assert first.json()["id"] == second.json()["id"]


class TestMe:
    def test_me_returns_account_variant(self, client, seller, auth_headers):
        response = client.get("/me", headers=auth_headers(seller))
        assert response.status_code == 200
        account = response.json()["account"]
        assert account == {"kind": "seller", "approval_status": "approved", "can_sell": True, "can_deliver": False}

    def test_unregistered_identity_is_401(self, client, issue_token):
        headers = {"Authorization": f"Bearer {issue_token('ext-ghost', 'ghost@example.com')}"}
        assert client.get("/me", headers=headers).status_code == 401
