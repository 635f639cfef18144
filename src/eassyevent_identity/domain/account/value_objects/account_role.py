from enum import Enum


class AccountRole(str, Enum):
    """Roles an account can hold."""

    VENUE_OWNER = "venue_owner"
    ADMIN = "admin"
