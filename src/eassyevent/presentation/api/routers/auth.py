"""Authentication router for signup, login, tokens and the account profile."""

import logging
from typing import Annotated

from fastapi import APIRouter, Cookie, Query, Request, Response, status

from eassyevent.presentation.api.dependencies import (
    AccountServiceDep,
    AuthService,
    CurrentAccount,
    DBSession,
    JWTServiceDep,
    ResetService,
    SettingsDep,
    VerificationService,
)
from eassyevent.presentation.api.rate_limit import (
    auth_rate_limit,
    password_reset_rate_limit,
)
from eassyevent.presentation.api.schemas import (
    AccountResponse,
    ApiResponse,
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
from eassyevent_config.settings import Settings
from eassyevent_identity.domain.account import (
    Account,
    Address,
    VenueProfile,
    serialize_account,
)
from eassyevent_identity.exceptions import (
    AccountLockedError,
    EmailDeliveryError,
    InvalidCredentialsError,
)

logger = logging.getLogger(__name__)

router = APIRouter()

# Cookie name for refresh token
REFRESH_TOKEN_COOKIE = "refreshToken"  # NOQA: S105


def _set_refresh_token_cookie(
    response: Response,
    token: str,
    settings: Settings,
    max_age: int,
) -> None:
    """Set the refresh token as an HttpOnly cookie.

    This cookie is:
    - HttpOnly: Not accessible to JavaScript
    - Secure: Only sent over HTTPS outside local development
    - SameSite=strict: Never sent on cross-site requests
    """
    response.set_cookie(
        key=REFRESH_TOKEN_COOKIE,
        value=token,
        httponly=True,
        secure=settings.cookie_secure,
        samesite="strict",
        max_age=max_age,
    )


def _clear_refresh_token_cookie(response: Response, settings: Settings) -> None:
    """Clear the refresh token cookie (for logout)."""
    response.delete_cookie(
        key=REFRESH_TOKEN_COOKIE,
        httponly=True,
        secure=settings.cookie_secure,
        samesite="strict",
    )


def _account_response(account: Account) -> AccountResponse:
    return AccountResponse.model_validate(serialize_account(account))


def _profile_from_request(body: SignupRequest) -> VenueProfile:
    return VenueProfile(
        business_name=body.business_name,
        address=Address(**body.address.model_dump()),
        seating_capacity=body.seating_capacity,
        business_type=body.business_type,
        amenities=tuple(body.amenities),
        phone_number=body.phone_number,
    )


@router.post(
    "/signup",
    status_code=status.HTTP_201_CREATED,
    summary="Register a new venue owner",
    responses={
        201: {"description": "Account created, verification email sent"},
        400: {"description": "Invalid input, weak password or email taken"},
        500: {"description": "Verification email could not be sent"},
        429: {"description": "Too many authentication attempts"},
    },
)
@auth_rate_limit
async def signup(
    request: Request,
    body: SignupRequest,
    auth_service: AuthService,
    session: DBSession,
) -> ApiResponse[UserData]:
    """
    Register a venue-owner account.

    The account starts unverified; a verification link is emailed. If the
    email cannot be delivered the account is kept and the verification
    token is discarded, so the owner can use resend-verification.
    """
    profile = _profile_from_request(body)

    try:
        account = await auth_service.signup(
            email=body.email,
            password=body.password,
            profile=profile,
        )
    except EmailDeliveryError:
        await session.commit()  # Keep the account and the revoked token
        raise

    await session.commit()

    return ApiResponse(
        message=(
            "User registered successfully. "
            "Please check your email to verify your account."
        ),
        data=UserData(user=_account_response(account)),
    )


@router.post(
    "/login",
    summary="Authenticate venue owner",
    responses={
        200: {"description": "Login successful"},
        401: {"description": "Invalid credentials, unverified or deactivated"},
        423: {"description": "Account locked"},
        429: {"description": "Too many authentication attempts"},
    },
)
@auth_rate_limit
async def login(
    request: Request,
    body: LoginRequest,
    response: Response,
    auth_service: AuthService,
    jwt_service: JWTServiceDep,
    session: DBSession,
    settings: SettingsDep,
) -> ApiResponse[LoginData]:
    """
    Authenticate with email and password.

    Returns an access token; the refresh token is set as an HttpOnly
    cookie. The account is locked for two hours after five consecutive
    failed attempts.
    """
    try:
        account, access_token, refresh_token = await auth_service.login(
            email=body.email,
            password=body.password,
        )
    except (InvalidCredentialsError, AccountLockedError):
        await session.commit()  # Commit failed attempt count
        raise

    await session.commit()

    _set_refresh_token_cookie(
        response, refresh_token, settings, jwt_service.refresh_token_max_age
    )

    return ApiResponse(
        message="Login successful",
        data=LoginData(token=access_token, user=_account_response(account)),
    )


@router.post("/logout", summary="Logout")
async def logout(
    response: Response,
    account: CurrentAccount,
    settings: SettingsDep,
) -> ApiResponse[None]:
    """Clear the refresh token cookie. Issued access tokens stay valid until expiry."""
    _clear_refresh_token_cookie(response, settings)
    logger.debug("Account %s logged out (refresh token cookie cleared)", account.id)
    return ApiResponse(message="Logged out successfully")


@router.post(
    "/refresh-token",
    summary="Refresh access token",
    responses={
        200: {"description": "New access token issued"},
        401: {"description": "Missing, invalid or expired refresh token"},
    },
)
async def refresh_token(
    auth_service: AuthService,
    body: RefreshRequest | None = None,
    refresh_token_cookie: Annotated[
        str | None,
        Cookie(alias=REFRESH_TOKEN_COOKIE),
    ] = None,
) -> ApiResponse[TokenData]:
    """
    Get a new access token using a valid refresh token.

    The refresh token is read from the HttpOnly cookie, falling back to
    the request body. It is not rotated.
    """
    token = refresh_token_cookie or (body.refresh_token if body else None)

    access_token = await auth_service.refresh_access_token(token)
    return ApiResponse(data=TokenData(token=access_token))


@router.post(
    "/verify-email",
    summary="Verify email address",
    responses={
        200: {"description": "Email verified"},
        400: {"description": "Missing, invalid or expired token"},
    },
)
async def verify_email(
    verification_service: VerificationService,
    session: DBSession,
    token: Annotated[str | None, Query()] = None,
    body: VerifyEmailRequest | None = None,
) -> ApiResponse[None]:
    """Consume the verification token from the query string or the body."""
    await verification_service.verify_email(
        token or (body.token if body else None)
    )
    await session.commit()
    return ApiResponse(message="Email verified successfully")


@router.post(
    "/resend-verification",
    summary="Resend verification email",
    responses={
        200: {"description": "Verification email sent"},
        400: {"description": "Email already verified"},
        404: {"description": "No account with this email"},
        429: {"description": "Too many authentication attempts"},
    },
)
@auth_rate_limit
async def resend_verification(
    request: Request,
    body: EmailRequest,
    verification_service: VerificationService,
    session: DBSession,
) -> ApiResponse[None]:
    try:
        await verification_service.resend_verification(body.email)
    except EmailDeliveryError:
        await session.commit()
        raise

    await session.commit()
    return ApiResponse(message="Verification email sent successfully")


@router.post(
    "/forgot-password",
    summary="Request password reset",
    responses={
        200: {"description": "Reset email sent"},
        404: {"description": "No account with this email"},
        429: {"description": "Too many password reset attempts"},
    },
)
@password_reset_rate_limit
async def forgot_password(
    request: Request,
    body: EmailRequest,
    reset_service: ResetService,
    session: DBSession,
) -> ApiResponse[None]:
    """Email a password reset link valid for 10 minutes."""
    try:
        await reset_service.forgot_password(body.email)
    except EmailDeliveryError:
        await session.commit()
        raise

    await session.commit()
    return ApiResponse(message="Password reset email sent successfully")


@router.post(
    "/reset-password",
    summary="Reset password",
    responses={
        200: {"description": "Password reset, new access token issued"},
        400: {"description": "Invalid or expired token, or weak password"},
        429: {"description": "Too many password reset attempts"},
    },
)
@password_reset_rate_limit
async def reset_password(
    request: Request,
    body: ResetPasswordRequest,
    reset_service: ResetService,
    session: DBSession,
) -> ApiResponse[TokenData]:
    access_token = await reset_service.reset_password(body.token, body.password)
    await session.commit()
    return ApiResponse(
        message="Password reset successfully",
        data=TokenData(token=access_token),
    )


@router.get(
    "/me",
    summary="Get current account",
    responses={
        200: {"description": "Current account data"},
        401: {"description": "Not authenticated"},
    },
)
async def get_me(
    account: CurrentAccount,
    account_service: AccountServiceDep,
) -> ApiResponse[UserData]:
    current = await account_service.get_me(account.id)
    return ApiResponse(data=UserData(user=_account_response(current)))


@router.put(
    "/update-profile",
    summary="Update venue profile",
    responses={
        200: {"description": "Profile updated"},
        400: {"description": "Invalid profile data"},
    },
)
async def update_profile(
    body: UpdateProfileRequest,
    account: CurrentAccount,
    account_service: AccountServiceDep,
    session: DBSession,
) -> ApiResponse[UserData]:
    """
    Update the venue profile.

    Only business name, address, seating capacity, business type,
    amenities and phone number can be changed; omitted fields are kept.
    """
    updated = await account_service.update_profile(
        account.id,
        body.model_dump(exclude_unset=True),
    )
    await session.commit()
    return ApiResponse(
        message="Profile updated successfully",
        data=UserData(user=_account_response(updated)),
    )


@router.put(
    "/change-password",
    summary="Change password",
    responses={
        200: {"description": "Password changed, new access token issued"},
        400: {"description": "Current password incorrect or new password weak"},
    },
)
async def change_password(
    body: ChangePasswordRequest,
    account: CurrentAccount,
    auth_service: AuthService,
    session: DBSession,
) -> ApiResponse[TokenData]:
    access_token = await auth_service.change_password(
        account_id=account.id,
        current_password=body.current_password,
        new_password=body.new_password,
    )
    await session.commit()
    return ApiResponse(
        message="Password changed successfully",
        data=TokenData(token=access_token),
    )


@router.delete(
    "/delete-account",
    summary="Deactivate account",
    responses={200: {"description": "Account deactivated"}},
)
async def delete_account(
    account: CurrentAccount,
    account_service: AccountServiceDep,
    session: DBSession,
) -> ApiResponse[None]:
    """Soft-delete: the account is deactivated, never removed."""
    await account_service.deactivate(account.id)
    await session.commit()
    return ApiResponse(message="Account deactivated successfully")
