"""
Tests for the sign-in endpoints with Supabase Auth mocked
"""
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from storefront.api.auth import get_auth_service
from storefront.main import app
from storefront.services.auth_service import AuthService
from tests.factories import AGENT_ID, CUSTOMER_ID, auth_headers


def auth_response(user_id, email, access_token="session-token"):
    return SimpleNamespace(
        user=SimpleNamespace(id=user_id, email=email),
        session=SimpleNamespace(access_token=access_token, refresh_token="refresh-token", expires_in=3600),
    )


@pytest.fixture
def supabase_auth(seeded_db):
    """Supabase Auth client double injected into AuthService"""
    auth_client = MagicMock()
    app.dependency_overrides[get_auth_service] = lambda: AuthService(
        seeded_db, auth_client_factory=lambda: auth_client
    )
    yield auth_client.auth
    app.dependency_overrides.pop(get_auth_service, None)


class TestStaffLogin:

    def test_agent_can_sign_in(self, client, supabase_auth):
        supabase_auth.sign_in_with_password.return_value = auth_response(AGENT_ID, "agent@jradianceco.com")

        response = client.post("/admin/login", json={"email": "agent@jradianceco.com", "password": "pw"})

        assert response.status_code == 200
        body = response.json()
        assert body["data"]["role"] == "agent"
        assert body["data"]["access_token"] == "session-token"
        assert "sb-access-token=session-token" in response.headers["set-cookie"]
        assert "HttpOnly" in response.headers["set-cookie"]

    def test_customer_is_refused(self, client, supabase_auth):
        supabase_auth.sign_in_with_password.return_value = auth_response(CUSTOMER_ID, "ada@example.com")

        response = client.post("/admin/login", json={"email": "ada@example.com", "password": "pw"})

        assert response.status_code == 403
        assert response.json()["error"] == "This account does not have admin access"
        assert "set-cookie" not in response.headers

    def test_bad_credentials(self, client, supabase_auth):
        supabase_auth.sign_in_with_password.side_effect = Exception("Invalid login credentials")

        response = client.post("/admin/login", json={"email": "agent@jradianceco.com", "password": "nope"})

        assert response.status_code == 401
        assert response.json()["error"] == "Invalid login credentials"


class TestCustomerAuth:

    def test_sign_up_passes_full_name(self, client, supabase_auth):
        supabase_auth.sign_up.return_value = SimpleNamespace(
            user=SimpleNamespace(id="new-user", email="new@example.com"), session=None
        )

        response = client.post(
            "/shop/auth/signup",
            json={"email": "new@example.com", "password": "pw123456", "full_name": "Ngozi Eze"},
        )

        assert response.status_code == 201
        assert response.json()["message"] == "Check your email to confirm your account"
        sent = supabase_auth.sign_up.call_args[0][0]
        assert sent["options"]["data"]["full_name"] == "Ngozi Eze"

    def test_invalid_email(self, client, supabase_auth):
        response = client.post("/shop/auth", json={"email": "not-an-email", "password": "pw"})
        assert response.status_code == 422

    def test_logout_clears_cookie(self, client):
        response = client.post("/auth/logout")

        assert response.status_code == 200
        assert 'sb-access-token=""' in response.headers["set-cookie"]

    def test_me(self, client):
        response = client.get("/auth/me", headers=auth_headers(CUSTOMER_ID))

        assert response.status_code == 200
        assert response.json()["data"]["full_name"] == "Ada Obi"

    def test_me_requires_token(self, client):
        assert client.get("/auth/me").status_code == 401
