"""EassyEvent Identity - venue-owner accounts, authentication and credentials.

This package handles all identity-related concerns:
- Account management (signup, profile, soft deactivation)
- Authentication (login, lockout, access and refresh tokens)
- Email verification and password reset
- Email notifications
"""

from eassyevent_identity.application.services import (
    AccountService,
    AuthenticationService,
    CredentialStore,
    EmailVerificationService,
    PasswordResetService,
)
from eassyevent_identity.domain.account import (
    Account,
    AccountNotFoundError,
    AccountRepository,
    AccountRole,
    AccountValidationError,
    Email,
    EmailAlreadyExistsError,
    EmailAlreadyVerifiedError,
    VenueProfile,
)
from eassyevent_identity.exceptions import (
    AccountDeactivatedError,
    AccountLockedError,
    AuthenticationRequiredError,
    EmailDeliveryError,
    EmailNotVerifiedError,
    ErrorCode,
    IdentityError,
    IncorrectPasswordError,
    InvalidCredentialsError,
    InvalidOrExpiredTokenError,
    InvalidTokenError,
    PermissionDeniedError,
    TokenExpiredError,
    TokenInvalidError,
    WeakPasswordError,
)
from eassyevent_identity.schemas import TokenPayload
from eassyevent_identity.services import (
    JWTService,
    PasswordHashingService,
)

__all__ = [
    # Domain - Account
    "Account",
    "AccountNotFoundError",
    "AccountRepository",
    "AccountRole",
    "AccountValidationError",
    "Email",
    "EmailAlreadyExistsError",
    "EmailAlreadyVerifiedError",
    "VenueProfile",
    # Exceptions
    "AccountDeactivatedError",
    "AccountLockedError",
    "AuthenticationRequiredError",
    "EmailDeliveryError",
    "EmailNotVerifiedError",
    "ErrorCode",
    "IdentityError",
    "IncorrectPasswordError",
    "InvalidCredentialsError",
    "InvalidOrExpiredTokenError",
    "InvalidTokenError",
    "PermissionDeniedError",
    "TokenExpiredError",
    "TokenInvalidError",
    "WeakPasswordError",
    # Schemas
    "TokenPayload",
    # Services
    "JWTService",
    "PasswordHashingService",
    # Application Services
    "AccountService",
    "AuthenticationService",
    "CredentialStore",
    "EmailVerificationService",
    "PasswordResetService",
]
