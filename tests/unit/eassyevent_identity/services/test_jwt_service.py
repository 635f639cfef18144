"""Unit tests for JWTService."""

from datetime import timedelta

import jwt
import pytest

from eassyevent_identity.exceptions import (
    InvalidTokenError,
    TokenExpiredError,
    TokenInvalidError,
)
from eassyevent_identity.services import JWTService

ACCESS_SECRET = "test-access-secret-12345"
REFRESH_SECRET = "test-refresh-secret-67890"


class TestJWTServiceInit:
    """Tests for JWTService initialization."""

    def test_init_with_valid_secrets(self):
        service = JWTService(secret_key=ACCESS_SECRET, refresh_secret_key=REFRESH_SECRET)
        assert service is not None

    def test_init_with_empty_secret_raises(self):
        """Test that empty secret raises ValueError."""
        with pytest.raises(ValueError, match="cannot be empty"):
            JWTService(secret_key="", refresh_secret_key=REFRESH_SECRET)
        with pytest.raises(ValueError, match="cannot be empty"):
            JWTService(secret_key=ACCESS_SECRET, refresh_secret_key="")

    def test_init_with_identical_secrets_raises(self):
        with pytest.raises(ValueError, match="must be different"):
            JWTService(secret_key="same", refresh_secret_key="same")

    def test_refresh_token_max_age(self):
        service = JWTService(
            secret_key=ACCESS_SECRET,
            refresh_secret_key=REFRESH_SECRET,
            refresh_token_expire_days=30,
        )
        assert service.refresh_token_max_age == 30 * 24 * 60 * 60


class TestAccessTokens:
    """Tests for access token creation and verification."""

    @pytest.fixture(autouse=True)
    def _setup(self, make_account):
        self.service = JWTService(
            secret_key=ACCESS_SECRET, refresh_secret_key=REFRESH_SECRET
        )
        self.account = make_account()

    def test_verify_valid_access_token(self):
        """Test that valid access token is verified correctly."""
        token = self.service.create_access_token(self.account)

        payload = self.service.verify_token(token, "access")

        assert payload.account_id == self.account.id
        assert payload.email == "owner@example.com"
        assert payload.role == "venue_owner"
        assert payload.is_access_token()
        assert not payload.is_refresh_token()
        assert not payload.is_expired()

    def test_access_token_expires_after_seven_days_by_default(self):
        token = self.service.create_access_token(self.account)

        claims = jwt.decode(token, ACCESS_SECRET, algorithms=["HS256"])

        assert claims["exp"] - claims["iat"] == 7 * 24 * 60 * 60

    def test_verify_expired_token_raises(self):
        token = self.service.create_access_token(
            self.account,
            expires_delta=timedelta(seconds=-1),  # Already expired
        )

        with pytest.raises(TokenExpiredError, match="Token expired"):
            self.service.verify_token(token)

    def test_verify_garbage_token_raises(self):
        with pytest.raises(TokenInvalidError, match="Invalid token"):
            self.service.verify_token("invalid.token.string")

    def test_verify_empty_token_raises(self):
        with pytest.raises(TokenInvalidError):
            self.service.verify_token("")

    def test_verify_tampered_token_raises(self):
        token = self.service.create_access_token(self.account)

        # Tamper with the token
        tampered = token[:-5] + "xxxxx"

        with pytest.raises(InvalidTokenError):
            self.service.verify_token(tampered)

    def test_verify_wrong_secret_raises(self):
        other_service = JWTService(
            secret_key="different-secret", refresh_secret_key="other-refresh"
        )
        token = other_service.create_access_token(self.account)

        with pytest.raises(TokenInvalidError):
            self.service.verify_token(token)

    def test_token_without_type_claim_is_rejected(self):
        token = jwt.encode(
            {"sub": str(self.account.id), "exp": 9999999999},
            ACCESS_SECRET,
            algorithm="HS256",
        )

        with pytest.raises(TokenInvalidError):
            self.service.verify_token(token)


class TestRefreshTokens:
    """Tests for refresh token creation and verification."""

    @pytest.fixture(autouse=True)
    def _setup(self, make_account):
        self.service = JWTService(
            secret_key=ACCESS_SECRET, refresh_secret_key=REFRESH_SECRET
        )
        self.account = make_account()

    def test_verify_valid_refresh_token(self):
        token = self.service.create_refresh_token(self.account)

        payload = self.service.verify_token(token, "refresh")

        assert payload.account_id == self.account.id
        assert payload.is_refresh_token()
        assert payload.email is None
        assert payload.role is None

    def test_refresh_token_expires_after_thirty_days_by_default(self):
        token = self.service.create_refresh_token(self.account)

        claims = jwt.decode(token, REFRESH_SECRET, algorithms=["HS256"])

        assert claims["exp"] - claims["iat"] == 30 * 24 * 60 * 60

    def test_refresh_token_rejected_as_access_token(self):
        """A refresh token must never authenticate a request."""
        token = self.service.create_refresh_token(self.account)

        with pytest.raises(TokenInvalidError):
            self.service.verify_token(token, "access")

    def test_access_token_rejected_as_refresh_token(self):
        token = self.service.create_access_token(self.account)

        with pytest.raises(TokenInvalidError):
            self.service.verify_token(token, "refresh")

    def test_token_signed_with_right_secret_but_wrong_type_rejected(self):
        token = jwt.encode(
            {"sub": str(self.account.id), "exp": 9999999999, "type": "access"},
            REFRESH_SECRET,
            algorithm="HS256",
        )

        with pytest.raises(TokenInvalidError):
            self.service.verify_token(token, "refresh")

    def test_expired_refresh_token_raises(self):
        token = self.service.create_refresh_token(
            self.account, expires_delta=timedelta(seconds=-1)
        )

        with pytest.raises(TokenExpiredError):
            self.service.verify_token(token, "refresh")
