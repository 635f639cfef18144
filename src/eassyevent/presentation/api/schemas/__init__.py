"""Request and response schemas for the API."""

from eassyevent.presentation.api.schemas.auth import (
    AccountResponse,
    AddressSchema,
    ChangePasswordRequest,
    EmailRequest,
    LoginData,
    LoginRequest,
    RefreshRequest,
    ResetPasswordRequest,
    SignupRequest,
    TokenData,
    UpdateProfileRequest,
    UserData,
    VerifyEmailRequest,
)
from eassyevent.presentation.api.schemas.common import (
    ApiResponse,
    CamelModel,
    ErrorResponse,
    FieldError,
    HealthResponse,
)

__all__ = [
    "AccountResponse",
    "AddressSchema",
    "ApiResponse",
    "CamelModel",
    "ChangePasswordRequest",
    "EmailRequest",
    "ErrorResponse",
    "FieldError",
    "HealthResponse",
    "LoginData",
    "LoginRequest",
    "RefreshRequest",
    "ResetPasswordRequest",
    "SignupRequest",
    "TokenData",
    "UpdateProfileRequest",
    "UserData",
    "VerifyEmailRequest",
]
