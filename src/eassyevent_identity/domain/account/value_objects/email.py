"""Email value object.

Provides validated, normalized email addresses for account identification.
Syntax is checked with email-validator, the same check pydantic's
``EmailStr`` applies to request bodies.
"""

from dataclasses import dataclass

from email_validator import EmailNotValidError, validate_email

from eassyevent_identity.domain.account.exceptions import InvalidEmailError


@dataclass(frozen=True)
class Email:
    """Value object representing a validated email address."""

    value: str

    def __post_init__(self) -> None:
        if not self.value or not self.value.strip():
            msg = "Email is required"
            raise InvalidEmailError(msg)

        try:
            validated = validate_email(
                self.value.strip(),
                check_deliverability=False,
            )
        except EmailNotValidError as e:
            msg = "Please provide a valid email"
            raise InvalidEmailError(msg) from e

        # Replace value with normalized version (frozen dataclass workaround)
        object.__setattr__(self, "value", validated.normalized.lower())

    def __str__(self) -> str:
        return self.value

    def __repr__(self) -> str:
        return f"Email('{self.value}')"
