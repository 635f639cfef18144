"""JWT token service.

Provides JWT token creation and verification for authentication.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING, Literal
from uuid import UUID

import jwt

from eassyevent_identity.exceptions import TokenExpiredError, TokenInvalidError
from eassyevent_identity.schemas import TokenPayload

if TYPE_CHECKING:
    from eassyevent_identity.domain.account import Account

TokenType = Literal["access", "refresh"]


class JWTService:
    """Service for JWT token creation and verification.

    Access tokens carry the account's id, email and role. Refresh tokens
    carry only the id and are signed with a separate secret, so one kind
    can never be accepted in place of the other.

    Examples
    --------
    >>> service = JWTService(secret_key="access-secret", refresh_secret_key="refresh-secret")
    >>> token = service.create_access_token(account)
    >>> payload = service.verify_token(token, "access")
    >>> print(payload.account_id)
    """

    DEFAULT_ACCESS_EXPIRE_DAYS = 7
    DEFAULT_REFRESH_EXPIRE_DAYS = 30
    ALGORITHM = "HS256"

    def __init__(
        self,
        secret_key: str,
        refresh_secret_key: str,
        access_token_expire_days: int = DEFAULT_ACCESS_EXPIRE_DAYS,
        refresh_token_expire_days: int = DEFAULT_REFRESH_EXPIRE_DAYS,
    ):
        """Initialize the JWT service.

        Parameters
        ----------
        secret_key
            Secret key for signing access tokens. Must be kept secure.
        refresh_secret_key
            Secret key for signing refresh tokens. Must differ from
            ``secret_key``.
        access_token_expire_days
            Days until access token expires (default 7)
        refresh_token_expire_days
            Days until refresh token expires (default 30)
        """
        if not secret_key or not refresh_secret_key:
            msg = "JWT secret keys cannot be empty"
            raise ValueError(msg)
        if secret_key == refresh_secret_key:
            msg = "Access and refresh token secrets must be different"
            raise ValueError(msg)

        self._secrets: dict[str, str] = {
            "access": secret_key,
            "refresh": refresh_secret_key,
        }
        self._access_expire = timedelta(days=access_token_expire_days)
        self._refresh_expire = timedelta(days=refresh_token_expire_days)

    @property
    def refresh_token_max_age(self) -> int:
        """Lifetime of a refresh token in seconds."""
        return int(self._refresh_expire.total_seconds())

    def create_access_token(
        self,
        account: Account,
        expires_delta: timedelta | None = None,
    ) -> str:
        """Create an access token for ``account``.

        Parameters
        ----------
        account
            The authenticated account
        expires_delta
            Custom expiration time (optional)

        Returns
        -------
        The encoded JWT token string
        """
        return self._create_token(
            account_id=account.id,
            token_type="access",
            expires_delta=expires_delta or self._access_expire,
            extra_claims={"email": account.email.value, "role": account.role.value},
        )

    def create_refresh_token(
        self,
        account: Account,
        expires_delta: timedelta | None = None,
    ) -> str:
        """Create a long-lived refresh token.

        Refresh tokens are used to obtain new access tokens without
        requiring the account to log in again.
        """
        return self._create_token(
            account_id=account.id,
            token_type="refresh",
            expires_delta=expires_delta or self._refresh_expire,
        )

    def verify_token(self, token: str, kind: TokenType = "access") -> TokenPayload:
        """Verify and decode a JWT token of the given kind.

        Parameters
        ----------
        token
            The JWT token string to verify
        kind
            Expected token kind, "access" or "refresh"

        Returns
        -------
        TokenPayload containing the decoded data

        Raises
        ------
        TokenExpiredError
            If the signature is valid but the token is past its expiry
        TokenInvalidError
            If the token is malformed, tampered or of another kind
        """
        if not token:
            raise TokenInvalidError

        try:
            payload = jwt.decode(
                token,
                self._secrets[kind],
                algorithms=[self.ALGORITHM],
                options={"require": ["sub", "exp", "type"]},
            )

            if payload["type"] != kind:
                raise TokenInvalidError

            return TokenPayload(
                account_id=UUID(payload["sub"]),
                exp=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
                token_type=payload["type"],
                email=payload.get("email"),
                role=payload.get("role"),
            )

        except jwt.ExpiredSignatureError as e:
            raise TokenExpiredError from e
        except jwt.InvalidTokenError as e:
            raise TokenInvalidError from e
        except (KeyError, ValueError, TypeError) as e:
            raise TokenInvalidError from e

    def _create_token(
        self,
        account_id: UUID,
        token_type: TokenType,
        expires_delta: timedelta,
        extra_claims: dict[str, str] | None = None,
    ) -> str:
        now = datetime.now(tz=timezone.utc)
        expire = now + expires_delta

        payload = {
            "sub": str(account_id),
            "type": token_type,
            "iat": now,
            "exp": expire,
            **(extra_claims or {}),
        }

        return jwt.encode(payload, self._secrets[token_type], algorithm=self.ALGORITHM)
