"""API tests for login, lockout, token refresh, logout and the auth guard."""

from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import select, update

from eassyevent_identity.infrastructure.persistence.sqlalchemy.models import (
    AccountModel,
)
from eassyevent_identity.services import JWTService

pytestmark = pytest.mark.integration

TEST_PASSWORD = "SecurePass123"


def _login(client, auth_url, email, password=TEST_PASSWORD):
    return client.post(f"{auth_url}/login", json={"email": email, "password": password})


@pytest.fixture
def jwt_service(api_settings) -> JWTService:
    return JWTService(
        secret_key=api_settings.jwt_secret_key.get_secret_value(),
        refresh_secret_key=api_settings.jwt_refresh_secret_key.get_secret_value(),
    )


class TestLogin:
    """Tests for POST /auth/login."""

    def test_login_success(self, test_client, auth_url, verified_account):
        response = _login(test_client, auth_url, verified_account["email"])

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "success"
        assert body["message"] == "Login successful"
        assert body["data"]["token"]
        assert body["data"]["user"]["email"] == "owner@example.com"

    def test_login_sets_refresh_cookie(self, test_client, auth_url, verified_account):
        response = _login(test_client, auth_url, verified_account["email"])

        set_cookie = response.headers["set-cookie"]
        assert set_cookie.startswith("refreshToken=")
        assert "HttpOnly" in set_cookie
        assert "SameSite=strict" in set_cookie
        assert "Max-Age=2592000" in set_cookie
        # Development settings allow the cookie over plain HTTP
        attributes = [part.strip().lower() for part in set_cookie.split(";")]
        assert "secure" not in attributes
        assert response.cookies["refreshToken"]

    def test_login_email_is_case_insensitive(self, test_client, auth_url, verified_account):
        response = _login(test_client, auth_url, "Owner@Example.com")

        assert response.status_code == 200

    def test_wrong_password(self, test_client, auth_url, verified_account):
        response = _login(test_client, auth_url, verified_account["email"], "Wrong1234")

        assert response.status_code == 401
        body = response.json()
        assert body["code"] == "INVALID_CREDENTIALS"
        assert body["message"] == "Invalid email or password"
        assert response.headers["www-authenticate"] == "Bearer"

    def test_unknown_email_has_same_message(self, test_client, auth_url):
        response = _login(test_client, auth_url, "nobody@example.com")

        assert response.status_code == 401
        assert response.json()["message"] == "Invalid email or password"

    def test_unknown_address_with_apostrophe_is_invalid_credentials(
        self, test_client, auth_url
    ):
        response = _login(test_client, auth_url, "o'brien@example.com", "x")

        assert response.status_code == 401
        body = response.json()
        assert body["code"] == "INVALID_CREDENTIALS"
        assert body["message"] == "Invalid email or password"

    def test_five_failures_lock_the_account(self, test_client, auth_url, verified_account):
        email = verified_account["email"]
        for _ in range(5):
            response = _login(test_client, auth_url, email, "Wrong1234")
            assert response.status_code == 401

        response = _login(test_client, auth_url, email)

        assert response.status_code == 423
        body = response.json()
        assert body["code"] == "ACCOUNT_LOCKED"
        assert "locked" in body["message"]

    def test_success_resets_failure_count(self, test_client, auth_url, verified_account):
        email = verified_account["email"]
        for _ in range(4):
            _login(test_client, auth_url, email, "Wrong1234")
        assert _login(test_client, auth_url, email).status_code == 200

        for _ in range(4):
            _login(test_client, auth_url, email, "Wrong1234")

        assert _login(test_client, auth_url, email).status_code == 200

    def test_correct_password_after_lock_expiry(
        self, test_client, auth_url, verified_account, run_statement
    ):
        email = verified_account["email"]
        for _ in range(5):
            _login(test_client, auth_url, email, "Wrong1234")
        assert _login(test_client, auth_url, email).status_code == 423

        run_statement(
            update(AccountModel)
            .where(AccountModel.email == email)
            .values(lock_until=datetime.now(timezone.utc) - timedelta(seconds=1))
        )
        response = _login(test_client, auth_url, email)

        assert response.status_code == 200
        rows = run_statement(
            select(AccountModel.login_attempts, AccountModel.lock_until).where(
                AccountModel.email == email
            )
        )
        login_attempts, lock_until = rows[0]
        assert login_attempts == 0
        assert lock_until is None


class TestRefreshToken:
    """Tests for POST /auth/refresh-token."""

    def test_refresh_with_cookie(self, test_client, auth_url, verified_account):
        _login(test_client, auth_url, verified_account["email"])

        response = test_client.post(f"{auth_url}/refresh-token")

        assert response.status_code == 200
        token = response.json()["data"]["token"]
        me = test_client.get(
            f"{auth_url}/me", headers={"Authorization": f"Bearer {token}"}
        )
        assert me.status_code == 200

    def test_refresh_with_body(self, test_client, auth_url, verified_account):
        login = _login(test_client, auth_url, verified_account["email"])
        refresh_token = login.cookies["refreshToken"]
        test_client.cookies.clear()

        response = test_client.post(
            f"{auth_url}/refresh-token", json={"refreshToken": refresh_token}
        )

        assert response.status_code == 200
        assert response.json()["data"]["token"]

    def test_refresh_without_token(self, test_client, auth_url):
        response = test_client.post(f"{auth_url}/refresh-token")

        assert response.status_code == 401
        body = response.json()
        assert body["code"] == "AUTHENTICATION_REQUIRED"
        assert body["message"] == "Refresh token not found"

    def test_refresh_with_garbage(self, test_client, auth_url):
        response = test_client.post(
            f"{auth_url}/refresh-token", json={"refreshToken": "not.a.token"}
        )

        assert response.status_code == 401
        assert response.json()["message"] == "Invalid refresh token"

    def test_access_token_cannot_refresh(self, test_client, auth_url, access_token):
        test_client.cookies.clear()

        response = test_client.post(
            f"{auth_url}/refresh-token", json={"refreshToken": access_token}
        )

        assert response.status_code == 401
        assert response.json()["message"] == "Invalid refresh token"

    def test_expired_refresh_token(
        self, test_client, auth_url, jwt_service, make_account
    ):
        token = jwt_service.create_refresh_token(
            make_account(), expires_delta=timedelta(seconds=-1)
        )

        response = test_client.post(
            f"{auth_url}/refresh-token", json={"refreshToken": token}
        )

        assert response.status_code == 401
        body = response.json()
        assert body["code"] == "TOKEN_EXPIRED"
        assert body["message"] == "Refresh token expired"

    def test_refresh_for_unknown_account(
        self, test_client, auth_url, jwt_service, make_account
    ):
        token = jwt_service.create_refresh_token(make_account())

        response = test_client.post(
            f"{auth_url}/refresh-token", json={"refreshToken": token}
        )

        assert response.status_code == 401
        assert response.json()["message"] == "User not found"


class TestLogout:
    """Tests for POST /auth/logout."""

    def test_logout_clears_cookie(self, test_client, auth_url, auth_headers):
        response = test_client.post(f"{auth_url}/logout", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["message"] == "Logged out successfully"
        set_cookie = response.headers["set-cookie"]
        assert set_cookie.startswith("refreshToken=")
        assert "Max-Age=0" in set_cookie

    def test_logout_requires_authentication(self, test_client, auth_url):
        response = test_client.post(f"{auth_url}/logout")

        assert response.status_code == 401


class TestAuthGuard:
    """Tests for bearer-token protection of account routes."""

    def test_me_returns_current_account(self, test_client, auth_url, auth_headers):
        response = test_client.get(f"{auth_url}/me", headers=auth_headers)

        assert response.status_code == 200
        user = response.json()["data"]["user"]
        assert user["email"] == "owner@example.com"
        assert user["isEmailVerified"] is True
        assert user["seatingCapacity"] == 250

    def test_missing_token(self, test_client, auth_url):
        response = test_client.get(f"{auth_url}/me")

        assert response.status_code == 401
        body = response.json()
        assert body["code"] == "AUTHENTICATION_REQUIRED"
        assert body["message"] == "Access token is required"
        assert response.headers["www-authenticate"] == "Bearer"

    def test_non_bearer_scheme(self, test_client, auth_url, access_token):
        response = test_client.get(
            f"{auth_url}/me", headers={"Authorization": f"Token {access_token}"}
        )

        assert response.status_code == 401
        assert response.json()["message"] == "Access token is required"

    def test_malformed_token(self, test_client, auth_url):
        response = test_client.get(
            f"{auth_url}/me", headers={"Authorization": "Bearer garbage"}
        )

        assert response.status_code == 401
        body = response.json()
        assert body["code"] == "TOKEN_INVALID"
        assert body["message"] == "Invalid token"

    def test_expired_token(self, test_client, auth_url, jwt_service, make_account):
        token = jwt_service.create_access_token(
            make_account(), expires_delta=timedelta(seconds=-1)
        )

        response = test_client.get(
            f"{auth_url}/me", headers={"Authorization": f"Bearer {token}"}
        )

        assert response.status_code == 401
        body = response.json()
        assert body["code"] == "TOKEN_EXPIRED"
        assert body["message"] == "Token expired"

    def test_refresh_token_is_not_an_access_token(
        self, test_client, auth_url, verified_account
    ):
        login = _login(test_client, auth_url, verified_account["email"])
        refresh_token = login.cookies["refreshToken"]

        response = test_client.get(
            f"{auth_url}/me", headers={"Authorization": f"Bearer {refresh_token}"}
        )

        assert response.status_code == 401
        assert response.json()["code"] == "TOKEN_INVALID"

    def test_token_for_unknown_account(
        self, test_client, auth_url, jwt_service, make_account
    ):
        token = jwt_service.create_access_token(make_account())

        response = test_client.get(
            f"{auth_url}/me", headers={"Authorization": f"Bearer {token}"}
        )

        assert response.status_code == 401
        assert response.json()["message"] == "User not found"
