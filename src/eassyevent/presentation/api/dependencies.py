"""FastAPI dependency injection for the EassyEvent API.

Provides dependencies for:
- Database sessions
- Identity services (JWT, password hashing, email, flows)
- Authentication (current account from the bearer token)
- Role-based authorization
"""

import logging
from typing import Annotated, AsyncGenerator

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from eassyevent.presentation.api.config import API_V1_PREFIX, get_api_settings
from eassyevent_config.settings import Settings
from eassyevent_identity.application.services import (
    AccountService,
    AuthenticationService,
    CredentialStore,
    EmailVerificationService,
    PasswordResetService,
)
from eassyevent_identity.domain.account import Account, AccountRole
from eassyevent_identity.exceptions import (
    AccountDeactivatedError,
    AuthenticationRequiredError,
    EmailNotVerifiedError,
    PermissionDeniedError,
    TokenInvalidError,
)
from eassyevent_identity.infrastructure.email import EmailService
from eassyevent_identity.infrastructure.persistence.sqlalchemy import (
    AccountRepositorySQLAlchemy,
)
from eassyevent_identity.services import JWTService, PasswordHashingService

logger = logging.getLogger(__name__)

# Security scheme for JWT Bearer tokens
security = HTTPBearer(auto_error=False)

SettingsDep = Annotated[Settings, Depends(get_api_settings)]


# -----------------------------------------------------------------------------
# Database Engine & Session (one per application)
# -----------------------------------------------------------------------------


def create_engine(settings: Settings) -> AsyncEngine:
    """
    Create the async database engine for an application.

    Parameters
    ----------
    settings
        Settings the application was built with

    Returns
    -------
    AsyncEngine instance
    """
    return create_async_engine(
        settings.database_url,
        echo=False,
        pool_pre_ping=True,  # Verify connections before use
    )


def create_session_maker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    Database session dependency.

    Creates an async session for the request from the application's
    session maker (see ``create_app``).

    Yields
    ------
    AsyncSession for database operations
    """
    async with request.app.state.session_maker() as session:
        yield session


# Type alias for injected session
DBSession = Annotated[AsyncSession, Depends(get_db_session)]


# -----------------------------------------------------------------------------
# Identity Services
# -----------------------------------------------------------------------------


def get_jwt_service(settings: SettingsDep) -> JWTService:
    """Get JWT service configured with API settings."""
    return JWTService(
        secret_key=settings.jwt_secret_key.get_secret_value(),
        refresh_secret_key=settings.jwt_refresh_secret_key.get_secret_value(),
        access_token_expire_days=settings.jwt_access_token_expire_days,
        refresh_token_expire_days=settings.jwt_refresh_token_expire_days,
    )


def get_password_service(settings: SettingsDep) -> PasswordHashingService:
    """Get password hashing service."""
    return PasswordHashingService(rounds=settings.bcrypt_rounds)


def get_email_service(settings: SettingsDep) -> EmailService:
    return EmailService(settings)


JWTServiceDep = Annotated[JWTService, Depends(get_jwt_service)]
EmailServiceDep = Annotated[EmailService, Depends(get_email_service)]


def get_credential_store(
    session: DBSession,
    password_service: PasswordHashingService = Depends(get_password_service),
) -> CredentialStore:
    return CredentialStore(
        account_repository=AccountRepositorySQLAlchemy(session),
        password_service=password_service,
    )


CredentialStoreDep = Annotated[CredentialStore, Depends(get_credential_store)]


def get_email_verification_service(
    store: CredentialStoreDep,
    email_service: EmailServiceDep,
    settings: SettingsDep,
) -> EmailVerificationService:
    verification_url = (
        f"{settings.api_public_url.rstrip('/')}{API_V1_PREFIX}/auth/verify-email"
    )
    return EmailVerificationService(
        credential_store=store,
        email_service=email_service,
        verification_url=verification_url,
    )


VerificationService = Annotated[
    EmailVerificationService,
    Depends(get_email_verification_service),
]


def get_authentication_service(
    store: CredentialStoreDep,
    jwt_service: JWTServiceDep,
    verification_service: VerificationService,
) -> AuthenticationService:
    """
    Get authentication service with all dependencies.

    This service orchestrates signup, login, and token management.
    """
    return AuthenticationService(
        credential_store=store,
        jwt_service=jwt_service,
        email_verification_service=verification_service,
    )


# Type alias for injected auth service
AuthService = Annotated[AuthenticationService, Depends(get_authentication_service)]


def get_password_reset_service(
    store: CredentialStoreDep,
    jwt_service: JWTServiceDep,
    email_service: EmailServiceDep,
    settings: SettingsDep,
) -> PasswordResetService:
    return PasswordResetService(
        credential_store=store,
        jwt_service=jwt_service,
        email_service=email_service,
        frontend_base_url=settings.frontend_base_url,
    )


ResetService = Annotated[PasswordResetService, Depends(get_password_reset_service)]


def get_account_service(store: CredentialStoreDep) -> AccountService:
    return AccountService(credential_store=store)


AccountServiceDep = Annotated[AccountService, Depends(get_account_service)]


# -----------------------------------------------------------------------------
# Current Account (JWT Authentication)
# -----------------------------------------------------------------------------


async def get_current_account(
    request: Request,
    store: CredentialStoreDep,
    jwt_service: JWTServiceDep,
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> Account:
    """
    FastAPI dependency to get the current authenticated account.

    Extracts and validates the access token from the Authorization header,
    then loads the account and checks that it may use the API. The account
    is also stored on ``request.state.account``.

    Raises
    ------
    AuthenticationRequiredError
        If no bearer token was sent
    TokenExpiredError, TokenInvalidError
        If the token is expired or cannot be accepted
    AccountDeactivatedError, EmailNotVerifiedError
        If the account may not use the API
    """
    if credentials is None or not credentials.credentials:
        raise AuthenticationRequiredError

    payload = jwt_service.verify_token(credentials.credentials, "access")

    account = await store.find_by_id(payload.account_id)
    if account is None:
        logger.warning("Account not found for token: %s", payload.account_id)
        msg = "User not found"
        raise TokenInvalidError(msg)

    if not account.is_active:
        msg = "User account is deactivated"
        raise AccountDeactivatedError(msg)

    if not account.is_email_verified:
        msg = "Email not verified"
        raise EmailNotVerifiedError(msg)

    request.state.account = account
    return account


# Type alias for injected current account
CurrentAccount = Annotated[Account, Depends(get_current_account)]


def authorize(*roles: AccountRole | str):
    """Build a dependency that admits only accounts holding one of ``roles``."""
    allowed = frozenset(AccountRole(role) for role in roles)

    async def require_role(account: CurrentAccount) -> Account:
        if account.role not in allowed:
            logger.warning(
                "Account %s with role %s denied access to %s",
                account.id,
                account.role.value,
                sorted(role.value for role in allowed),
            )
            raise PermissionDeniedError
        return account

    return require_role

