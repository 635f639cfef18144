"""Authentication schemas for request/response models."""

from datetime import datetime

from pydantic import ConfigDict, EmailStr, Field

from eassyevent.presentation.api.schemas.common import CamelModel


class AddressSchema(CamelModel):
    line1: str
    line2: str | None = None
    city: str
    state: str
    pin_code: str = Field(..., description="6-digit PIN code")


class SignupRequest(CamelModel):
    """Request schema for venue-owner signup.

    Field constraints (PIN code, phone number, capacity range, enum values)
    are enforced by the domain value objects.
    """

    email: EmailStr = Field(..., description="Account email address")
    password: str = Field(
        ...,
        description="8-72 bytes with upper case, lower case and a digit",
    )
    business_name: str
    address: AddressSchema
    seating_capacity: int
    business_type: str | None = None
    amenities: list[str] = Field(default_factory=list)
    phone_number: str | None = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "email": "owner@example.com",
                "password": "SecurePass123",
                "businessName": "Royal Banquets",
                "address": {
                    "line1": "12 MG Road",
                    "city": "Pune",
                    "state": "Maharashtra",
                    "pinCode": "411001",
                },
                "seatingCapacity": 250,
                "businessType": "Banquet Hall",
                "amenities": ["Parking", "WiFi"],
                "phoneNumber": "9876543210",
            },
        },
    )


class LoginRequest(CamelModel):
    """Request schema for login."""

    email: EmailStr
    password: str


class RefreshRequest(CamelModel):
    """Request schema for token refresh.

    The refresh_token field is optional - the HttpOnly cookie takes
    precedence when both are present.
    """

    refresh_token: str | None = Field(
        default=None,
        description="Refresh token (optional - normally sent via HttpOnly cookie)",
    )


class VerifyEmailRequest(CamelModel):
    token: str | None = None


class EmailRequest(CamelModel):
    """Request schema for endpoints that only take an email address."""

    email: EmailStr


class ResetPasswordRequest(CamelModel):
    token: str
    password: str


class ChangePasswordRequest(CamelModel):
    """Request schema for changing the current account's password."""

    current_password: str
    new_password: str


class UpdateProfileRequest(CamelModel):
    """Profile fields an account may change; omitted fields are untouched."""

    business_name: str | None = None
    address: AddressSchema | None = None
    seating_capacity: int | None = None
    business_type: str | None = None
    amenities: list[str] | None = None
    phone_number: str | None = None


class AccountResponse(CamelModel):
    """Public view of an account."""

    id: str
    email: str
    business_name: str
    address: AddressSchema
    seating_capacity: int
    business_type: str | None = None
    amenities: list[str] = Field(default_factory=list)
    phone_number: str | None = None
    profile_image: str | None = None
    role: str
    is_email_verified: bool
    is_active: bool
    subscription_plan: str
    subscription_expires: datetime | None = None
    last_login: datetime | None = None
    created_at: datetime
    updated_at: datetime


class UserData(CamelModel):
    user: AccountResponse


class TokenData(CamelModel):
    token: str


class LoginData(CamelModel):
    token: str
    user: AccountResponse
