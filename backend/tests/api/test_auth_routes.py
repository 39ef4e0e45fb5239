"""Tests for /auth/login and /auth/me."""

from urllib.parse import urlsplit

from tests.conftest import TEST_PASSWORD


def login(client, username: str, subdomain=None, password: str = TEST_PASSWORD, **kwargs):
    body = {"username": username, "password": password}
    if subdomain is not None:
        body["subdomain"] = subdomain
    return client.post("/auth/login", json=body, **kwargs)


class TestLogin:
    def test_success_uses_camel_case(self, client, seeded):
        response = login(client, "op1", "acme")

        assert response.status_code == 200
        data = response.json()
        assert set(data) == {"sessionCredential", "user", "requiresBiometric", "redirectUrl"}
        assert data["redirectUrl"] is None
        assert data["requiresBiometric"] is True
        assert data["user"]["tenantRef"] == seeded.acme.id
        assert "passwordHash" not in data["user"]
        assert "biometricRecord" not in data["user"]

    def test_host_header_fallback(self, client, seeded):
        response = login(client, "op2", headers={"host": "globex.barida.xyz"})
        assert response.status_code == 200
        assert response.json()["redirectUrl"] is None

    def test_wrong_password(self, client, seeded):
        response = login(client, "op1", "acme", password="nope")

        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"] == "Bearer"
        assert response.json() == {
            "error": "INVALID_CREDENTIALS",
            "message": "Invalid credentials",
            "details": {},
        }

    def test_unknown_user_same_body(self, client, seeded):
        unknown = login(client, "ghost", "acme")
        wrong = login(client, "op1", "acme", password="nope")
        assert unknown.status_code == wrong.status_code == 401
        assert unknown.json() == wrong.json()

    def test_unknown_workspace(self, client, seeded):
        response = login(client, "op1", "nope")
        assert response.status_code == 404
        assert response.json()["error"] == "TENANT_NOT_FOUND"
        assert response.json()["message"] == "Workspace not found"

    def test_other_workspace(self, client, seeded):
        response = login(client, "op1", "globex")
        assert response.status_code == 403
        assert response.json()["error"] == "WORKSPACE_ACCESS_DENIED"

    def test_inactive_workspace(self, client, seeded):
        response = login(client, "idle", "dormant")
        assert response.status_code == 403
        assert response.json()["error"] == "TENANT_INACTIVE"

    def test_central_login_redirects_tenant_user(self, client, seeded):
        response = login(client, "op1", "")

        assert response.status_code == 200
        redirect = urlsplit(response.json()["redirectUrl"])
        assert redirect.netloc == "acme.barida.xyz"
        assert redirect.path == "/auth/callback"

    def test_admin_on_central(self, client, seeded):
        response = login(client, "admin", "www")
        assert response.status_code == 200
        assert response.json()["redirectUrl"] is None
        assert response.json()["requiresBiometric"] is False

    def test_empty_username_is_422(self, client, seeded):
        response = client.post("/auth/login", json={"username": "", "password": "x"})
        assert response.status_code == 422


class TestMe:
    def test_me(self, client, seeded, auth_headers):
        response = client.get("/auth/me", headers=auth_headers(seeded.viewer1))

        assert response.status_code == 200
        data = response.json()
        assert data["username"] == "viewer1"
        assert data["role"] == "viewer"
        assert data["verificationState"] == "unverified"

    def test_session_from_login_works(self, client, seeded):
        token = login(client, "sub1", "acme").json()["sessionCredential"]
        response = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert response.json()["username"] == "sub1"

    def test_missing_session(self, client, seeded):
        response = client.get("/auth/me")
        assert response.status_code == 401
        assert response.json()["error"] == "MISSING_SESSION"
        assert response.headers["WWW-Authenticate"] == "Bearer"

    def test_invalid_session(self, client, seeded):
        response = client.get("/auth/me", headers={"Authorization": "Bearer garbage"})
        assert response.status_code == 401
        assert response.json()["error"] == "INVALID_SESSION"
