"""Account repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Union
from uuid import UUID

from eassyevent_identity.domain.account.aggregates.account import Account
from eassyevent_identity.domain.account.value_objects import Email, TokenKind


class AccountRepository(ABC):
    """Repository interface for Account aggregates."""

    @abstractmethod
    async def find_by_id(
        self,
        account_id: UUID,
        with_password: bool = False,
    ) -> Account | None:
        """Find an account by its ID."""

    @abstractmethod
    async def find_by_email(
        self,
        email: Union[str, Email],
        with_password: bool = False,
    ) -> Account | None:
        """Find an account by its email address."""

    @abstractmethod
    async def exists_by_email(self, email: Union[str, Email]) -> bool:
        """Check if an account exists with the given email."""

    @abstractmethod
    async def find_by_token_hash(
        self,
        kind: TokenKind,
        token_hash: str,
        now: datetime,
    ) -> Account | None:
        """Find the account holding an unexpired token digest of ``kind``."""

    @abstractmethod
    async def add(self, account: Account) -> Account:
        """Insert a new account.

        Raises
        ------
        EmailAlreadyExistsError
            If the email is already taken
        """

    @abstractmethod
    async def save(self, account: Account) -> Account:
        """Persist the state of an existing account.

        The stored password hash is only overwritten when
        ``account.password_hash`` is set.
        """

    @abstractmethod
    async def record_failed_login(self, account_id: UUID, now: datetime) -> int:
        """Atomically count a failed login and lock when the limit is hit.

        Returns the attempt counter after the update.
        """

    @abstractmethod
    async def record_successful_login(self, account_id: UUID, now: datetime) -> None:
        """Reset the attempt counter, clear any lock and stamp the login time."""
