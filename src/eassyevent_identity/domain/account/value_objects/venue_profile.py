"""Venue profile value object.

Holds the business data a venue owner registers with. All constraints are
checked on construction, so an existing ``VenueProfile`` is always valid.
"""

import re
from collections.abc import Iterable
from dataclasses import dataclass, field

from eassyevent_identity.domain.account.exceptions import AccountValidationError
from eassyevent_identity.domain.account.value_objects.address import Address
from eassyevent_identity.domain.account.value_objects.amenity import Amenity
from eassyevent_identity.domain.account.value_objects.business_type import (
    BusinessType,
)

# Indian mobile numbers: 10 digits starting with 6-9
PHONE_NUMBER_PATTERN = re.compile(r"^[6-9]\d{9}$")

MAX_BUSINESS_NAME_LENGTH = 100
MIN_SEATING_CAPACITY = 1
MAX_SEATING_CAPACITY = 10000


def _to_enum(enum_cls, value, field_name: str):
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError as e:
        msg = f"'{value}' is not a valid {field_name.replace('_', ' ')}"
        raise AccountValidationError(msg, field=field_name) from e


@dataclass(frozen=True)
class VenueProfile:
    """Business details of a venue-owner account.

    Attributes
    ----------
    business_name
        Display name of the venue business (max 100 characters)
    address
        Postal address of the venue
    seating_capacity
        Number of guests the venue seats (1-10000)
    business_type
        Kind of venue, optional
    amenities
        Advertised facilities, duplicates removed in order
    phone_number
        Indian mobile number, optional
    profile_image
        Opaque reference to an uploaded image, optional
    """

    business_name: str
    address: Address
    seating_capacity: int
    business_type: BusinessType | None = None
    amenities: tuple[Amenity, ...] = field(default_factory=tuple)
    phone_number: str | None = None
    profile_image: str | None = None

    def __post_init__(self) -> None:
        name = (self.business_name or "").strip()
        if not name:
            msg = "Business name is required"
            raise AccountValidationError(msg, field="business_name")
        if len(name) > MAX_BUSINESS_NAME_LENGTH:
            msg = (
                f"Business name cannot exceed {MAX_BUSINESS_NAME_LENGTH} "
                "characters"
            )
            raise AccountValidationError(msg, field="business_name")
        object.__setattr__(self, "business_name", name)

        if not isinstance(self.address, Address):
            msg = "Address is required"
            raise AccountValidationError(msg, field="address")

        capacity = self.seating_capacity
        if isinstance(capacity, bool) or not isinstance(capacity, int):
            msg = "Seating capacity must be a whole number"
            raise AccountValidationError(msg, field="seating_capacity")
        if not MIN_SEATING_CAPACITY <= capacity <= MAX_SEATING_CAPACITY:
            msg = (
                f"Seating capacity must be between {MIN_SEATING_CAPACITY} "
                f"and {MAX_SEATING_CAPACITY}"
            )
            raise AccountValidationError(msg, field="seating_capacity")

        if self.business_type is not None:
            object.__setattr__(
                self,
                "business_type",
                _to_enum(BusinessType, self.business_type, "business_type"),
            )

        object.__setattr__(self, "amenities", self._normalize_amenities(self.amenities))

        phone = self.phone_number.strip() if self.phone_number else None
        if phone and not PHONE_NUMBER_PATTERN.match(phone):
            msg = "Please provide a valid Indian phone number"
            raise AccountValidationError(msg, field="phone_number")
        object.__setattr__(self, "phone_number", phone or None)

    @staticmethod
    def _normalize_amenities(values: Iterable | None) -> tuple[Amenity, ...]:
        result: list[Amenity] = []
        for value in values or ():
            amenity = _to_enum(Amenity, value, "amenities")
            if amenity not in result:
                result.append(amenity)
        return tuple(result)
