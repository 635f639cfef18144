"""Unit tests for account value objects."""

import pytest

from eassyevent_identity.domain.account import (
    AccountValidationError,
    Address,
    Amenity,
    BusinessType,
    Email,
    InvalidEmailError,
    VenueProfile,
)


def _address(**overrides) -> Address:
    values = {
        "line1": "12 MG Road",
        "city": "Pune",
        "state": "Maharashtra",
        "pin_code": "411001",
    }
    values.update(overrides)
    return Address(**values)


def _profile(**overrides) -> VenueProfile:
    values = {
        "business_name": "Royal Banquets",
        "address": _address(),
        "seating_capacity": 250,
    }
    values.update(overrides)
    return VenueProfile(**values)


class TestEmail:
    """Tests for the Email value object."""

    def test_email_is_normalized(self):
        """Email is lower-cased and trimmed."""
        assert Email("  Owner@Example.COM ").value == "owner@example.com"

    @pytest.mark.parametrize("value", ["", "   ", "not-an-email", "a@b", "@x.com"])
    def test_invalid_email_raises(self, value):
        with pytest.raises(InvalidEmailError):
            Email(value)

    def test_invalid_email_is_a_validation_error_on_the_email_field(self):
        with pytest.raises(AccountValidationError) as exc_info:
            Email("nope")
        assert exc_info.value.field == "email"

    def test_equal_after_normalization(self):
        assert Email("A@Example.com") == Email("a@example.com")

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("O'Brien@Example.com", "o'brien@example.com"),
            ("first+tag@sub.example.co.in", "first+tag@sub.example.co.in"),
        ],
    )
    def test_accepts_apostrophes_and_plus_tags(self, value, expected):
        assert Email(value).value == expected


class TestAddress:
    """Tests for the Address value object."""

    def test_fields_are_trimmed(self):
        address = _address(line1="  12 MG Road ", city=" Pune ")
        assert address.line1 == "12 MG Road"
        assert address.city == "Pune"

    def test_blank_line2_becomes_none(self):
        assert _address(line2="   ").line2 is None

    @pytest.mark.parametrize("pin_code", ["41100", "4110011", "41100a", ""])
    def test_invalid_pin_code_raises(self, pin_code):
        with pytest.raises(AccountValidationError) as exc_info:
            _address(pin_code=pin_code)
        assert exc_info.value.field == "address.pin_code"

    def test_missing_city_raises(self):
        with pytest.raises(AccountValidationError, match="City is required"):
            _address(city="")


class TestVenueProfile:
    """Tests for the VenueProfile value object."""

    def test_business_name_is_trimmed(self):
        assert _profile(business_name="  Royal  ").business_name == "Royal"

    def test_business_name_max_length(self):
        _profile(business_name="x" * 100)
        with pytest.raises(AccountValidationError) as exc_info:
            _profile(business_name="x" * 101)
        assert exc_info.value.field == "business_name"

    def test_business_name_required(self):
        with pytest.raises(AccountValidationError, match="Business name is required"):
            _profile(business_name="   ")

    @pytest.mark.parametrize("capacity", [1, 10000])
    def test_capacity_bounds_accepted(self, capacity):
        assert _profile(seating_capacity=capacity).seating_capacity == capacity

    @pytest.mark.parametrize("capacity", [0, 10001, -5])
    def test_capacity_out_of_range_raises(self, capacity):
        with pytest.raises(AccountValidationError) as exc_info:
            _profile(seating_capacity=capacity)
        assert exc_info.value.field == "seating_capacity"

    @pytest.mark.parametrize("capacity", [True, "250", 12.5, None])
    def test_capacity_must_be_an_integer(self, capacity):
        with pytest.raises(AccountValidationError):
            _profile(seating_capacity=capacity)

    def test_business_type_is_coerced_from_its_value(self):
        profile = _profile(business_type="Wedding Hall")
        assert profile.business_type is BusinessType.WEDDING_HALL

    def test_unknown_business_type_raises(self):
        with pytest.raises(AccountValidationError) as exc_info:
            _profile(business_type="Spaceport")
        assert exc_info.value.field == "business_type"

    def test_amenities_are_coerced_and_deduplicated_in_order(self):
        profile = _profile(amenities=["WiFi", "Parking", Amenity.WIFI])
        assert profile.amenities == (Amenity.WIFI, Amenity.PARKING)

    def test_unknown_amenity_raises(self):
        with pytest.raises(AccountValidationError) as exc_info:
            _profile(amenities=["Helipad"])
        assert exc_info.value.field == "amenities"

    def test_none_amenities_become_empty(self):
        assert _profile(amenities=None).amenities == ()

    @pytest.mark.parametrize("phone", ["9876543210", "6000000000"])
    def test_valid_phone_numbers(self, phone):
        assert _profile(phone_number=phone).phone_number == phone

    @pytest.mark.parametrize("phone", ["5876543210", "98765", "98765432101", "abcdefghij"])
    def test_invalid_phone_numbers_raise(self, phone):
        with pytest.raises(AccountValidationError) as exc_info:
            _profile(phone_number=phone)
        assert exc_info.value.field == "phone_number"

    def test_blank_phone_number_becomes_none(self):
        assert _profile(phone_number="").phone_number is None

    def test_address_is_required(self):
        with pytest.raises(AccountValidationError, match="Address is required"):
            _profile(address=None)
