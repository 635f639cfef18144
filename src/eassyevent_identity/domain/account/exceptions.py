"""Account domain exceptions.

Custom exceptions for the account domain, used for validation
and business rule violations.
"""

from eassyevent_identity.exceptions import ErrorCode, IdentityError


class AccountValidationError(IdentityError, ValueError):
    """Raised when an account field violates its constraints."""

    default_message = "Invalid account data"
    default_code = ErrorCode.VALIDATION_ERROR

    def __init__(self, message: str, field: str | None = None) -> None:
        self.field = field
        super().__init__(message, details={"field": field} if field else None)


class InvalidEmailError(AccountValidationError):
    """Raised when email format is invalid."""

    def __init__(self, message: str) -> None:
        super().__init__(message, field="email")


class EmailAlreadyExistsError(IdentityError):
    """Email already registered."""

    default_message = "User with this email already exists"
    default_code = ErrorCode.DUPLICATE_EMAIL

    def __init__(self, email: str) -> None:
        self.email = email
        super().__init__()


class AccountNotFoundError(IdentityError):
    """Account not found."""

    default_message = "User not found"
    default_code = ErrorCode.ACCOUNT_NOT_FOUND

    def __init__(self, identifier: str) -> None:
        self.identifier = identifier
        super().__init__()


class EmailAlreadyVerifiedError(IdentityError):
    """Verification requested for an account that is already verified."""

    default_message = "Email is already verified"
    default_code = ErrorCode.EMAIL_ALREADY_VERIFIED
