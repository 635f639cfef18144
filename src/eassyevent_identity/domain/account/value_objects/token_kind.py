from enum import Enum


class TokenKind(str, Enum):
    """Purpose of a one-time token sent by email."""

    EMAIL_VERIFICATION = "email_verification"
    PASSWORD_RESET = "password_reset"
