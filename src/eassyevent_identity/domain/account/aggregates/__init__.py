from eassyevent_identity.domain.account.aggregates.account import (
    LOCK_DURATION_HOURS,
    MAX_LOGIN_ATTEMPTS,
    Account,
    is_locked,
    serialize_account,
)

__all__ = [
    "LOCK_DURATION_HOURS",
    "MAX_LOGIN_ATTEMPTS",
    "Account",
    "is_locked",
    "serialize_account",
]
