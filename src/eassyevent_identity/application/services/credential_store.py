"""Credential store.

Owns every state transition of an account's credentials. Password hashing
is an explicit step of ``create_account``, ``change_password`` and
``reset_password`` only; no other write path touches the hash.
"""

import logging
from collections.abc import Callable, Mapping
from dataclasses import replace
from datetime import datetime
from typing import Any, Union
from uuid import UUID

from eassyevent_identity.domain.account import (
    Account,
    AccountRepository,
    AccountRole,
    Address,
    Email,
    EmailAlreadyExistsError,
    TokenKind,
    VenueProfile,
    is_locked,
    serialize_account,
)
from eassyevent_identity.domain.shared.time import utc_now
from eassyevent_identity.exceptions import InvalidOrExpiredTokenError
from eassyevent_identity.services import (
    PasswordHashingService,
    generate_token,
    hash_token,
    token_expiry,
)

logger = logging.getLogger(__name__)

UPDATABLE_PROFILE_FIELDS = frozenset(
    {
        "business_name",
        "address",
        "seating_capacity",
        "business_type",
        "amenities",
        "phone_number",
    }
)


class CredentialStore:
    """Application service over the account repository.

    Parameters
    ----------
    account_repository
        Persistence for accounts
    password_service
        bcrypt hashing and strength validation
    clock
        Source of the current time, ``utc_now`` by default
    """

    def __init__(
        self,
        account_repository: AccountRepository,
        password_service: PasswordHashingService,
        clock: Callable[[], datetime] = utc_now,
    ):
        self._repo = account_repository
        self._password_service = password_service
        self._clock = clock

    def now(self) -> datetime:
        return self._clock()

    # Lookup

    async def find_by_email(
        self,
        email: Union[str, Email],
        with_password: bool = False,
    ) -> Account | None:
        return await self._repo.find_by_email(email, with_password=with_password)

    async def find_by_id(
        self,
        account_id: UUID,
        with_password: bool = False,
    ) -> Account | None:
        return await self._repo.find_by_id(account_id, with_password=with_password)

    # Passwords

    def hash_password(self, plaintext: str) -> str:
        return self._password_service.hash(plaintext)

    def verify_password(self, plaintext: str, password_hash: str | None) -> bool:
        return self._password_service.verify(plaintext, password_hash)

    # Lifecycle

    async def create_account(
        self,
        email: Union[str, Email],
        password: str,
        profile: VenueProfile,
        role: AccountRole = AccountRole.VENUE_OWNER,
    ) -> Account:
        """Register a new, unverified account.

        Raises
        ------
        AccountValidationError
            If the email is malformed
        EmailAlreadyExistsError
            If the email is already registered
        WeakPasswordError
            If the password doesn't meet requirements
        """
        email_obj = email if isinstance(email, Email) else Email(email)

        # Check-then-insert; the unique index catches the concurrent case
        if await self._repo.exists_by_email(email_obj):
            raise EmailAlreadyExistsError(email_obj.value)

        now = self._clock()
        account = Account(
            email=email_obj,
            profile=profile,
            password_hash=self.hash_password(password),
            role=role,
            created_at=now,
            updated_at=now,
        )
        created = await self._repo.add(account)
        logger.info("Account registered: %s", created.id)
        return created

    def is_locked(self, account: Account) -> bool:
        return is_locked(account, self._clock())

    async def record_failed_login(self, account: Account) -> int:
        return await self._repo.record_failed_login(account.id, self._clock())

    async def record_successful_login(self, account: Account) -> None:
        await self._repo.record_successful_login(account.id, self._clock())

    async def upgrade_password_hash(self, account: Account, plaintext: str) -> bool:
        """Re-hash a verified password stored with a different work factor.

        Returns True when the stored hash was replaced.
        """
        if not self._password_service.needs_rehash(account.password_hash or ""):
            return False

        await self._repo.save(
            account.evolve(
                password_hash=self._password_service.rehash(plaintext),
                updated_at=self._clock(),
            )
        )
        logger.info("Password hash upgraded for account: %s", account.id)
        return True

    # One-time tokens

    async def issue_email_verification_token(self, account: Account) -> str:
        """Store a fresh verification digest and return the plaintext token."""
        return await self._issue_token(account, TokenKind.EMAIL_VERIFICATION)

    async def issue_password_reset_token(self, account: Account) -> str:
        """Store a fresh reset digest and return the plaintext token."""
        return await self._issue_token(account, TokenKind.PASSWORD_RESET)

    async def revoke_email_verification_token(self, account: Account) -> None:
        await self._repo.save(
            account.evolve(
                email_verification_token=None,
                email_verification_expires=None,
                updated_at=self._clock(),
            )
        )

    async def revoke_password_reset_token(self, account: Account) -> None:
        await self._repo.save(
            account.evolve(
                password_reset_token=None,
                password_reset_expires=None,
                updated_at=self._clock(),
            )
        )

    async def consume_token(self, kind: TokenKind, plaintext: str) -> Account:
        """Resolve an unexpired one-time token to its account.

        Raises
        ------
        InvalidOrExpiredTokenError
            If no account holds an unexpired token matching ``plaintext``
        """
        if not plaintext:
            raise InvalidOrExpiredTokenError

        account = await self._repo.find_by_token_hash(
            kind, hash_token(plaintext), self._clock()
        )
        if account is None:
            raise InvalidOrExpiredTokenError
        return account

    # State transitions

    async def mark_email_verified(self, account: Account) -> Account:
        updated = await self._repo.save(
            account.evolve(
                is_email_verified=True,
                email_verification_token=None,
                email_verification_expires=None,
                updated_at=self._clock(),
            )
        )
        logger.info("Email verified for account: %s", account.id)
        return updated

    async def reset_password(self, account: Account, new_password: str) -> Account:
        updated = await self._repo.save(
            account.evolve(
                password_hash=self.hash_password(new_password),
                password_reset_token=None,
                password_reset_expires=None,
                login_attempts=0,
                lock_until=None,
                updated_at=self._clock(),
            )
        )
        logger.info("Password reset for account: %s", account.id)
        return updated

    async def change_password(self, account: Account, new_password: str) -> Account:
        updated = await self._repo.save(
            account.evolve(
                password_hash=self.hash_password(new_password),
                updated_at=self._clock(),
            )
        )
        logger.info("Password changed for account: %s", account.id)
        return updated

    async def update_profile(
        self,
        account: Account,
        changes: Mapping[str, Any],
    ) -> Account:
        """Apply whitelisted profile changes; other keys are ignored."""
        allowed = {
            key: value
            for key, value in changes.items()
            if key in UPDATABLE_PROFILE_FIELDS
        }
        if isinstance(allowed.get("address"), Mapping):
            allowed["address"] = Address(**allowed["address"])
        if "amenities" in allowed and allowed["amenities"] is None:
            allowed["amenities"] = ()

        profile = replace(account.profile, **allowed)
        return await self._repo.save(
            account.evolve(profile=profile, updated_at=self._clock())
        )

    async def deactivate(self, account: Account) -> Account:
        updated = await self._repo.save(
            account.evolve(is_active=False, updated_at=self._clock())
        )
        logger.info("Account deactivated: %s", account.id)
        return updated

    @staticmethod
    def serialize_account(account: Account) -> dict[str, Any]:
        return serialize_account(account)

    async def _issue_token(self, account: Account, kind: TokenKind) -> str:
        now = self._clock()
        raw_token = generate_token()

        if kind is TokenKind.EMAIL_VERIFICATION:
            changes = {
                "email_verification_token": hash_token(raw_token),
                "email_verification_expires": token_expiry(kind, now),
            }
        else:
            changes = {
                "password_reset_token": hash_token(raw_token),
                "password_reset_expires": token_expiry(kind, now),
            }

        await self._repo.save(account.evolve(updated_at=now, **changes))
        return raw_token
