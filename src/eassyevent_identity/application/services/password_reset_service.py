import logging

from eassyevent_identity.application.services.credential_store import (
    CredentialStore,
)
from eassyevent_identity.domain.account import AccountNotFoundError, TokenKind
from eassyevent_identity.exceptions import EmailDeliveryError
from eassyevent_identity.infrastructure.email import EmailService
from eassyevent_identity.services import JWTService

logger = logging.getLogger(__name__)


class PasswordResetService:
    """Service for handling password reset requests and token consumption."""

    def __init__(
        self,
        credential_store: CredentialStore,
        jwt_service: JWTService,
        email_service: EmailService,
        frontend_base_url: str,
    ):
        self._store = credential_store
        self._jwt_service = jwt_service
        self._email_service = email_service
        self._frontend_base_url = frontend_base_url.rstrip("/")

    async def forgot_password(self, email: str) -> None:
        # Unknown emails are reported as 404, unlike login
        account = await self._store.find_by_email(email)
        if account is None:
            raise AccountNotFoundError(email)

        raw_token = await self._store.issue_password_reset_token(account)
        reset_url = f"{self._frontend_base_url}/reset-password?token={raw_token}"

        try:
            self._email_service.send_password_reset_email(
                to_email=account.email.value,
                name=account.profile.business_name,
                reset_url=reset_url,
            )
        except EmailDeliveryError as e:
            logger.warning(
                "Password reset email to account %s failed, revoking token",
                account.id,
            )
            await self._store.revoke_password_reset_token(account)
            raise EmailDeliveryError("Error sending password reset email") from e

        logger.info("Password reset requested for account: %s", account.id)

    async def reset_password(self, token: str, new_password: str) -> str:
        """Consume a reset token, set the new password and return an access token."""
        account = await self._store.consume_token(TokenKind.PASSWORD_RESET, token)
        updated = await self._store.reset_password(account, new_password)
        return self._jwt_service.create_access_token(updated)
