"""Account aggregate.

An account is a plain immutable value. State transitions produce a new
``Account`` via :func:`dataclasses.replace` and are persisted through the
repository, so no hashing or other side effect ever happens implicitly.
"""

from dataclasses import asdict, dataclass, field, replace
from datetime import datetime
from typing import Any
from uuid import UUID, uuid4

from eassyevent_identity.domain.account.value_objects import (
    AccountRole,
    Email,
    SubscriptionPlan,
    VenueProfile,
)
from eassyevent_identity.domain.shared.time import utc_now

MAX_LOGIN_ATTEMPTS = 5
LOCK_DURATION_HOURS = 2


@dataclass(frozen=True)
class Account:
    """Venue-owner account with its credential state.

    ``password_hash`` is ``None`` unless the account was loaded with
    ``with_password=True``. Token fields hold sha256 digests only.
    """

    email: Email
    profile: VenueProfile
    id: UUID = field(default_factory=uuid4)
    password_hash: str | None = None
    role: AccountRole = AccountRole.VENUE_OWNER
    is_email_verified: bool = False
    is_active: bool = True
    email_verification_token: str | None = None
    email_verification_expires: datetime | None = None
    password_reset_token: str | None = None
    password_reset_expires: datetime | None = None
    login_attempts: int = 0
    lock_until: datetime | None = None
    subscription_plan: SubscriptionPlan = SubscriptionPlan.FREE
    subscription_expires: datetime | None = None
    last_login: datetime | None = None
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)

    def __post_init__(self) -> None:
        if not isinstance(self.email, Email):
            object.__setattr__(self, "email", Email(self.email))
        if not isinstance(self.role, AccountRole):
            object.__setattr__(self, "role", AccountRole(self.role))
        if not isinstance(self.subscription_plan, SubscriptionPlan):
            object.__setattr__(
                self, "subscription_plan", SubscriptionPlan(self.subscription_plan)
            )

    def evolve(self, **changes: Any) -> "Account":
        """Return a copy with ``changes`` applied and ``updated_at`` stamped."""
        changes.setdefault("updated_at", utc_now())
        return replace(self, **changes)

    def __repr__(self) -> str:
        return f"Account(id={self.id}, email={self.email.value})"


def is_locked(account: Account, now: datetime | None = None) -> bool:
    """True iff a lock is set and still in the future."""
    if account.lock_until is None:
        return False
    return account.lock_until > (now or utc_now())


def serialize_account(account: Account) -> dict[str, Any]:
    """Public view of an account.

    Built from an explicit whitelist, so credential state (password hash,
    token digests and expiries, login attempts, lock) is never exposed.
    """
    profile = account.profile
    return {
        "id": str(account.id),
        "email": account.email.value,
        "business_name": profile.business_name,
        "address": asdict(profile.address),
        "seating_capacity": profile.seating_capacity,
        "business_type": (
            profile.business_type.value if profile.business_type else None
        ),
        "amenities": [amenity.value for amenity in profile.amenities],
        "phone_number": profile.phone_number,
        "profile_image": profile.profile_image,
        "role": account.role.value,
        "is_email_verified": account.is_email_verified,
        "is_active": account.is_active,
        "subscription_plan": account.subscription_plan.value,
        "subscription_expires": account.subscription_expires,
        "last_login": account.last_login,
        "created_at": account.created_at,
        "updated_at": account.updated_at,
    }
