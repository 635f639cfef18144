"""Identity and authentication exceptions.

These exceptions are raised by the eassyevent_identity package and carry a
stable error code. The presentation layer maps codes to HTTP responses in
one place, so services never build HTTP errors themselves.
"""

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Stable error codes for API clients.

    These codes are part of the public API contract. Should not be changed.
    """

    # Validation Errors (400)
    VALIDATION_ERROR = "VALIDATION_ERROR"
    WEAK_PASSWORD = "WEAK_PASSWORD"
    DUPLICATE_EMAIL = "DUPLICATE_EMAIL"
    INCORRECT_PASSWORD = "INCORRECT_PASSWORD"
    INVALID_OR_EXPIRED_TOKEN = "INVALID_OR_EXPIRED_TOKEN"
    EMAIL_ALREADY_VERIFIED = "EMAIL_ALREADY_VERIFIED"

    # Authentication Errors (401)
    AUTHENTICATION_REQUIRED = "AUTHENTICATION_REQUIRED"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    EMAIL_NOT_VERIFIED = "EMAIL_NOT_VERIFIED"
    ACCOUNT_DEACTIVATED = "ACCOUNT_DEACTIVATED"
    TOKEN_EXPIRED = "TOKEN_EXPIRED"
    TOKEN_INVALID = "TOKEN_INVALID"

    # Authorization Errors (403)
    PERMISSION_DENIED = "PERMISSION_DENIED"

    # Not Found Errors (404)
    ACCOUNT_NOT_FOUND = "ACCOUNT_NOT_FOUND"

    # Locked (423)
    ACCOUNT_LOCKED = "ACCOUNT_LOCKED"

    # Too Many Requests (429)
    RATE_LIMITED = "RATE_LIMITED"

    # External Services (500)
    DELIVERY_FAILED = "DELIVERY_FAILED"

    # General Errors
    INTERNAL_ERROR = "INTERNAL_ERROR"


class IdentityError(Exception):
    """Base exception for all identity-related errors.

    Attributes
    ----------
    message
        Human-readable error message (safe for end users)
    code
        Stable error code for programmatic handling
    details
        Optional additional context (logged, and exposed only for
        validation errors)
    """

    default_message = "Authentication error"
    default_code = ErrorCode.INTERNAL_ERROR

    def __init__(
        self,
        message: str | None = None,
        code: ErrorCode | None = None,
        details: dict[str, Any] | None = None,
    ):
        self.message = message or self.default_message
        self.code = code or self.default_code
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"code={self.code.value!r}, "
            f"details={self.details!r})"
        )


class AuthenticationRequiredError(IdentityError):
    """Raised when a protected endpoint is called without a bearer token."""

    default_message = "Access token is required"
    default_code = ErrorCode.AUTHENTICATION_REQUIRED


class InvalidTokenError(IdentityError):
    """Raised when a JWT token cannot be accepted."""

    default_message = "Invalid or expired token"
    default_code = ErrorCode.TOKEN_INVALID


class TokenExpiredError(InvalidTokenError):
    """Raised when a JWT token is well-formed but past its expiry."""

    default_message = "Token expired"
    default_code = ErrorCode.TOKEN_EXPIRED


class TokenInvalidError(InvalidTokenError):
    """Raised when a JWT token is malformed, tampered or of the wrong kind."""

    default_message = "Invalid token"
    default_code = ErrorCode.TOKEN_INVALID


class WeakPasswordError(IdentityError):
    """Raised when a password doesn't meet strength requirements."""

    default_message = "Password does not meet requirements"
    default_code = ErrorCode.WEAK_PASSWORD


class InvalidCredentialsError(IdentityError):
    """Raised when email or password is incorrect during login.

    The message is identical for both cases to avoid account enumeration.
    """

    default_message = "Invalid email or password"
    default_code = ErrorCode.INVALID_CREDENTIALS


class IncorrectPasswordError(IdentityError):
    """Raised when the current password does not match on password change."""

    default_message = "Current password is incorrect"
    default_code = ErrorCode.INCORRECT_PASSWORD


class AccountLockedError(IdentityError):
    """Raised when an account is locked due to too many failed login attempts."""

    default_message = (
        "Account temporarily locked due to too many failed login attempts"
    )
    default_code = ErrorCode.ACCOUNT_LOCKED

    def __init__(self, locked_until: str | None = None):
        self.locked_until = locked_until
        super().__init__(details={"locked_until": locked_until})


class EmailNotVerifiedError(IdentityError):
    """Raised when an unverified account tries to log in or use the API."""

    default_message = "Please verify your email before logging in"
    default_code = ErrorCode.EMAIL_NOT_VERIFIED


class AccountDeactivatedError(IdentityError):
    """Raised when a deactivated account tries to log in or use the API."""

    default_message = "Your account has been deactivated. Please contact support."
    default_code = ErrorCode.ACCOUNT_DEACTIVATED


class PermissionDeniedError(IdentityError):
    """Raised when an authenticated account lacks the required role."""

    default_message = "Not authorized to access this route"
    default_code = ErrorCode.PERMISSION_DENIED


class InvalidOrExpiredTokenError(IdentityError):
    """Raised when a verification or reset token is unknown or expired."""

    default_message = "Invalid or expired token"
    default_code = ErrorCode.INVALID_OR_EXPIRED_TOKEN


class EmailDeliveryError(IdentityError):
    """Raised when an outgoing email could not be delivered."""

    default_message = "Error sending email. Please try again later."
    default_code = ErrorCode.DELIVERY_FAILED
