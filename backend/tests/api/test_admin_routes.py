"""Tests for the /admin/users endpoints."""

from tests.conftest import TEST_PASSWORD


class TestCreateUser:
    def test_sub_admin_creates_in_own_workspace(self, client, seeded, auth_headers):
        response = client.post(
            "/admin/users",
            json={"username": "new-op", "password": "initial-pass", "role": "viewer"},
            headers=auth_headers(seeded.sub1),
        )

        assert response.status_code == 201
        data = response.json()
        assert data["tenantRef"] == seeded.acme.id
        assert data["role"] == "viewer"
        assert data["requiresVerificationOnNextLogin"] is True

    def test_quota_exceeded_is_403(self, client, seeded, auth_headers):
        headers = auth_headers(seeded.sub1)
        for name in ("op-3", "op-4"):
            assert client.post(
                "/admin/users", json={"username": name, "password": "p"}, headers=headers
            ).status_code == 201

        response = client.post(
            "/admin/users", json={"username": "op-5", "password": "p"}, headers=headers
        )
        assert response.status_code == 403
        assert response.json()["error"] == "QUOTA_EXCEEDED"

    def test_other_tenant_is_403(self, client, seeded, auth_headers):
        response = client.post(
            "/admin/users",
            json={"username": "spy", "password": "p", "tenantRef": seeded.globex.id},
            headers=auth_headers(seeded.sub1),
        )
        assert response.status_code == 403
        assert response.json()["error"] == "TENANT_BOUNDARY_VIOLATION"

    def test_duplicate_username_is_409(self, client, seeded, auth_headers):
        response = client.post(
            "/admin/users",
            json={"username": "op1", "password": "p"},
            headers=auth_headers(seeded.sub1),
        )
        assert response.status_code == 409

    def test_over_long_password_is_422(self, client, seeded, auth_headers):
        response = client.post(
            "/admin/users",
            json={"username": "longpw", "password": "x" * 100},
            headers=auth_headers(seeded.sub1),
        )
        assert response.status_code == 422
        assert client.get("/admin/users", headers=auth_headers(seeded.sub1)).json()["total"] == 3

    def test_requires_session(self, client, seeded):
        response = client.post("/admin/users", json={"username": "x", "password": "p"})
        assert response.status_code == 401


class TestManageUsers:
    def test_list_scoped_to_tenant(self, client, seeded, auth_headers):
        response = client.get("/admin/users", headers=auth_headers(seeded.sub2))
        data = response.json()
        assert data["total"] == 2
        assert {u["username"] for u in data["users"]} == {"sub2", "op2"}

    def test_operator_cannot_list(self, client, seeded, auth_headers):
        response = client.get("/admin/users", headers=auth_headers(seeded.op1))
        assert response.status_code == 403
        assert response.json()["error"] == "INSUFFICIENT_PERMISSIONS"

    def test_change_role(self, client, seeded, auth_headers):
        response = client.put(
            f"/admin/users/{seeded.op1.id}/role",
            json={"role": "viewer"},
            headers=auth_headers(seeded.sub1),
        )
        assert response.status_code == 200
        assert response.json()["role"] == "viewer"

    def test_invalid_role_is_422(self, client, seeded, auth_headers):
        response = client.put(
            f"/admin/users/{seeded.op1.id}/role",
            json={"role": "superuser"},
            headers=auth_headers(seeded.admin),
        )
        assert response.status_code == 422

    def test_change_tenant(self, client, seeded, auth_headers):
        response = client.put(
            f"/admin/users/{seeded.op1.id}/tenant",
            json={"tenantRef": seeded.globex.id},
            headers=auth_headers(seeded.admin),
        )
        assert response.status_code == 200
        assert response.json()["tenantRef"] == seeded.globex.id

    def test_delete_self_is_403(self, client, seeded, auth_headers):
        response = client.delete(
            f"/admin/users/{seeded.admin.id}", headers=auth_headers(seeded.admin)
        )
        assert response.status_code == 403
        assert response.json()["error"] == "SELF_ACTION_FORBIDDEN"

    def test_delete(self, client, seeded, auth_headers):
        response = client.delete(f"/admin/users/{seeded.op1.id}", headers=auth_headers(seeded.sub1))
        assert response.status_code == 204
        missing = client.delete(f"/admin/users/{seeded.op1.id}", headers=auth_headers(seeded.sub1))
        assert missing.status_code == 404

    def test_reset_password(self, client, seeded, auth_headers):
        response = client.put(
            f"/admin/users/{seeded.op1.id}/reset-password",
            json={"password": "brand-new"},
            headers=auth_headers(seeded.sub1),
        )
        assert response.status_code == 200

        login = client.post(
            "/auth/login",
            json={"username": "op1", "password": "brand-new", "subdomain": "acme"},
        )
        assert login.status_code == 200

    def test_reset_biometric(self, client, seeded, auth_headers):
        response = client.put(
            f"/admin/users/{seeded.viewer1.id}/reset-biometric",
            headers=auth_headers(seeded.sub1),
        )
        assert response.status_code == 200
        assert response.json()["verificationState"] == "unverified"
        assert response.json()["hasBiometric"] is False

    def test_reset_to_over_long_password_is_422(self, client, seeded, auth_headers):
        response = client.put(
            f"/admin/users/{seeded.op1.id}/reset-password",
            json={"password": "é" * 40},
            headers=auth_headers(seeded.sub1),
        )
        assert response.status_code == 422

        login = client.post(
            "/auth/login",
            json={"username": "op1", "password": TEST_PASSWORD, "subdomain": "acme"},
        )
        assert login.status_code == 200
