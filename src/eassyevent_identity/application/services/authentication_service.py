"""Authentication service for signup, login and token handling."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING
from uuid import UUID

from eassyevent_identity.domain.account import Account, AccountNotFoundError
from eassyevent_identity.exceptions import (
    AccountDeactivatedError,
    AccountLockedError,
    AuthenticationRequiredError,
    EmailNotVerifiedError,
    IncorrectPasswordError,
    InvalidCredentialsError,
    TokenExpiredError,
    TokenInvalidError,
)
from eassyevent_identity.services import JWTService

if TYPE_CHECKING:
    from eassyevent_identity.application.services.credential_store import (
        CredentialStore,
    )
    from eassyevent_identity.application.services.email_verification_service import (
        EmailVerificationService,
    )
    from eassyevent_identity.domain.account import VenueProfile

logger = logging.getLogger(__name__)


class AuthenticationService:
    """
    Application service for account authentication.

    Orchestrates the credential store, JWT tokens and the email
    verification flow to provide:
    - Signup with verification email
    - Login with lockout bookkeeping
    - Access token refresh
    - Password change
    """

    def __init__(
        self,
        credential_store: CredentialStore,
        jwt_service: JWTService,
        email_verification_service: EmailVerificationService,
    ):
        self._store = credential_store
        self._jwt_service = jwt_service
        self._verification = email_verification_service

    def _create_token_pair(self, account: Account) -> tuple[str, str]:
        access_token = self._jwt_service.create_access_token(account)
        refresh_token = self._jwt_service.create_refresh_token(account)
        return access_token, refresh_token

    async def signup(
        self,
        email: str,
        password: str,
        profile: VenueProfile,
    ) -> Account:
        """Register an account and send its verification email.

        The account is kept when delivery fails; only the token is revoked
        and ``EmailDeliveryError`` propagates.
        """
        account = await self._store.create_account(email, password, profile)
        await self._verification.send_verification(account)

        logger.info("Account signed up: %s", account.id)
        return account

    async def login(
        self,
        email: str,
        password: str,
    ) -> tuple[Account, str, str]:
        account = await self._store.find_by_email(email, with_password=True)
        if account is None:
            raise InvalidCredentialsError

        if self._store.is_locked(account):
            locked_until = account.lock_until.isoformat() if account.lock_until else None
            raise AccountLockedError(locked_until=locked_until)

        if not self._store.verify_password(password, account.password_hash):
            attempts = await self._store.record_failed_login(account)
            logger.info(
                "Failed login for account %s (%d attempts)", account.id, attempts
            )
            raise InvalidCredentialsError

        if not account.is_email_verified:
            raise EmailNotVerifiedError

        if not account.is_active:
            raise AccountDeactivatedError

        await self._store.upgrade_password_hash(account, password)
        await self._store.record_successful_login(account)
        access_token, refresh_token = self._create_token_pair(account)

        logger.info("Account logged in: %s", account.id)
        return account, access_token, refresh_token

    async def refresh_access_token(self, refresh_token: str | None) -> str:
        """Return a new access token; the refresh token itself is not rotated."""
        if not refresh_token:
            msg = "Refresh token not found"
            raise AuthenticationRequiredError(msg)

        try:
            payload = self._jwt_service.verify_token(refresh_token, "refresh")
        except TokenExpiredError as e:
            msg = "Refresh token expired"
            raise TokenExpiredError(msg) from e
        except TokenInvalidError as e:
            msg = "Invalid refresh token"
            raise TokenInvalidError(msg) from e

        account = await self._store.find_by_id(payload.account_id)
        if account is None:
            msg = "User not found"
            raise TokenInvalidError(msg)

        logger.debug("Access token refreshed for account: %s", account.id)
        return self._jwt_service.create_access_token(account)

    async def change_password(
        self,
        account_id: UUID,
        current_password: str,
        new_password: str,
    ) -> str:
        """Replace the password and return a fresh access token."""
        account = await self._store.find_by_id(account_id, with_password=True)
        if account is None:
            raise AccountNotFoundError(str(account_id))

        if not self._store.verify_password(current_password, account.password_hash):
            raise IncorrectPasswordError

        updated = await self._store.change_password(account, new_password)
        return self._jwt_service.create_access_token(updated)
