"""Email verification flow."""

import logging

from eassyevent_identity.application.services.credential_store import (
    CredentialStore,
)
from eassyevent_identity.domain.account import (
    Account,
    AccountNotFoundError,
    AccountValidationError,
    EmailAlreadyVerifiedError,
    TokenKind,
)
from eassyevent_identity.exceptions import EmailDeliveryError
from eassyevent_identity.infrastructure.email import EmailService

logger = logging.getLogger(__name__)


class EmailVerificationService:
    """Issues, sends and consumes email verification tokens.

    Parameters
    ----------
    credential_store
        Account state transitions
    email_service
        Outbound email delivery
    verification_url
        Absolute URL of the verify-email endpoint; the plaintext token is
        appended as the ``token`` query parameter
    """

    def __init__(
        self,
        credential_store: CredentialStore,
        email_service: EmailService,
        verification_url: str,
    ):
        self._store = credential_store
        self._email_service = email_service
        self._verification_url = verification_url

    async def send_verification(self, account: Account) -> None:
        """Issue a fresh token and email the link to ``account``.

        If delivery fails the token is revoked again before the
        ``EmailDeliveryError`` propagates.
        """
        raw_token = await self._store.issue_email_verification_token(account)
        url = f"{self._verification_url}?token={raw_token}"

        try:
            self._email_service.send_verification_email(
                to_email=account.email.value,
                name=account.profile.business_name,
                verification_url=url,
            )
        except EmailDeliveryError as e:
            logger.warning(
                "Verification email to account %s failed, revoking token",
                account.id,
            )
            await self._store.revoke_email_verification_token(account)
            raise EmailDeliveryError(
                "Error sending verification email. Please try again later."
            ) from e

    async def verify_email(self, token: str | None) -> Account:
        if not token:
            msg = "Verification token is required"
            raise AccountValidationError(msg, field="token")

        account = await self._store.consume_token(TokenKind.EMAIL_VERIFICATION, token)
        return await self._store.mark_email_verified(account)

    async def resend_verification(self, email: str) -> None:
        account = await self._store.find_by_email(email)
        if account is None:
            raise AccountNotFoundError(email)

        if account.is_email_verified:
            raise EmailAlreadyVerifiedError

        await self.send_verification(account)
        logger.info("Verification email re-sent for account: %s", account.id)
