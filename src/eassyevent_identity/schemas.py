"""Identity schemas and data structures.

These are simple data classes used for transferring identity
data between components.
"""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class TokenPayload:
    """Decoded JWT token payload.

    Attributes
    ----------
    account_id
        The unique identifier of the account (``sub`` claim)
    exp
        Token expiration timestamp
    token_type
        Either "access" or "refresh"
    email
        The account's email address (access tokens only)
    role
        The account's role (access tokens only)
    """

    account_id: UUID
    exp: datetime
    token_type: str  # "access" or "refresh"
    email: str | None = None
    role: str | None = None

    def is_expired(self) -> bool:
        """Check if the token has expired."""
        return datetime.now(tz=self.exp.tzinfo) > self.exp

    def is_access_token(self) -> bool:
        """Check if this is an access token."""
        return self.token_type == "access"

    def is_refresh_token(self) -> bool:
        """Check if this is a refresh token."""
        return self.token_type == "refresh"
