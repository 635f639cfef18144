"""Profile operations for the authenticated account."""

from collections.abc import Mapping
from typing import Any
from uuid import UUID

from eassyevent_identity.application.services.credential_store import (
    CredentialStore,
)
from eassyevent_identity.domain.account import Account, AccountNotFoundError


class AccountService:
    def __init__(self, credential_store: CredentialStore):
        self._store = credential_store

    async def get_me(self, account_id: UUID) -> Account:
        account = await self._store.find_by_id(account_id)
        if account is None:
            raise AccountNotFoundError(str(account_id))
        return account

    async def update_profile(
        self,
        account_id: UUID,
        changes: Mapping[str, Any],
    ) -> Account:
        account = await self.get_me(account_id)
        return await self._store.update_profile(account, changes)

    async def deactivate(self, account_id: UUID) -> Account:
        """Soft-delete the account; the row is kept."""
        account = await self.get_me(account_id)
        return await self._store.deactivate(account)
