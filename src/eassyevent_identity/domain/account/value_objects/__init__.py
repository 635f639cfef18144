"""Value objects for the account domain."""

from eassyevent_identity.domain.account.value_objects.account_role import AccountRole
from eassyevent_identity.domain.account.value_objects.address import Address
from eassyevent_identity.domain.account.value_objects.amenity import Amenity
from eassyevent_identity.domain.account.value_objects.business_type import (
    BusinessType,
)
from eassyevent_identity.domain.account.value_objects.email import Email
from eassyevent_identity.domain.account.value_objects.subscription_plan import (
    SubscriptionPlan,
)
from eassyevent_identity.domain.account.value_objects.token_kind import TokenKind
from eassyevent_identity.domain.account.value_objects.venue_profile import (
    VenueProfile,
)

__all__ = [
    "AccountRole",
    "Address",
    "Amenity",
    "BusinessType",
    "Email",
    "SubscriptionPlan",
    "TokenKind",
    "VenueProfile",
]
