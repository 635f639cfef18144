"""Account domain manages venue-owner identity and credential state.

This domain handles:
- Account aggregate (identity, venue profile, credential state)
- Lockout and public serialization helpers
- Repository interface for persistence
"""

from eassyevent_identity.domain.account.aggregates import (
    LOCK_DURATION_HOURS,
    MAX_LOGIN_ATTEMPTS,
    Account,
    is_locked,
    serialize_account,
)
from eassyevent_identity.domain.account.exceptions import (
    AccountNotFoundError,
    AccountValidationError,
    EmailAlreadyExistsError,
    EmailAlreadyVerifiedError,
    InvalidEmailError,
)
from eassyevent_identity.domain.account.repositories import AccountRepository
from eassyevent_identity.domain.account.value_objects import (
    AccountRole,
    Address,
    Amenity,
    BusinessType,
    Email,
    SubscriptionPlan,
    TokenKind,
    VenueProfile,
)

__all__ = [
    "LOCK_DURATION_HOURS",
    "MAX_LOGIN_ATTEMPTS",
    "Account",
    "AccountNotFoundError",
    "AccountRepository",
    "AccountRole",
    "AccountValidationError",
    "Address",
    "Amenity",
    "BusinessType",
    "Email",
    "EmailAlreadyExistsError",
    "EmailAlreadyVerifiedError",
    "InvalidEmailError",
    "SubscriptionPlan",
    "TokenKind",
    "VenueProfile",
    "is_locked",
    "serialize_account",
]
