"""Application services for identity management."""

from eassyevent_identity.application.services.account_service import AccountService
from eassyevent_identity.application.services.authentication_service import (
    AuthenticationService,
)
from eassyevent_identity.application.services.credential_store import (
    CredentialStore,
)
from eassyevent_identity.application.services.email_verification_service import (
    EmailVerificationService,
)
from eassyevent_identity.application.services.password_reset_service import (
    PasswordResetService,
)

__all__ = [
    "AccountService",
    "AuthenticationService",
    "CredentialStore",
    "EmailVerificationService",
    "PasswordResetService",
]
