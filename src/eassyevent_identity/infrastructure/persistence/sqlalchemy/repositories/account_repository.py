"""SQLAlchemy implementation of AccountRepository."""

import logging
from datetime import datetime, timedelta
from typing import Union
from uuid import UUID

from sqlalchemy import and_, case, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from eassyevent_identity.domain.account import (
    LOCK_DURATION_HOURS,
    MAX_LOGIN_ATTEMPTS,
    Account,
    AccountNotFoundError,
    AccountRepository,
    Address,
    Email,
    EmailAlreadyExistsError,
    InvalidEmailError,
    TokenKind,
    VenueProfile,
)
from eassyevent_identity.domain.shared.time import ensure_tz_aware
from eassyevent_identity.infrastructure.persistence.sqlalchemy.models import (
    AccountModel,
)

logger = logging.getLogger(__name__)


def _aware(value: datetime | None) -> datetime | None:
    return ensure_tz_aware(value) if value is not None else None


class AccountRepositorySQLAlchemy(AccountRepository):
    """SQLAlchemy implementation of the AccountRepository interface.

    Lockout bookkeeping is done with conditional UPDATE statements so
    concurrent failed logins cannot lose increments.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def find_by_id(
        self,
        account_id: UUID,
        with_password: bool = False,
    ) -> Account | None:
        model = await self._find_model(AccountModel.id == account_id)
        return self._map_to_domain(model, with_password) if model else None

    async def find_by_email(
        self,
        email: Union[str, Email],
        with_password: bool = False,
    ) -> Account | None:
        if isinstance(email, Email):
            email_value = email.value
        else:
            try:
                email_value = Email(email).value
            except InvalidEmailError:
                # No account can be stored under an invalid address
                return None
        model = await self._find_model(AccountModel.email == email_value)
        return self._map_to_domain(model, with_password) if model else None

    async def exists_by_email(self, email: Union[str, Email]) -> bool:
        account = await self.find_by_email(email)
        return account is not None

    async def find_by_token_hash(
        self,
        kind: TokenKind,
        token_hash: str,
        now: datetime,
    ) -> Account | None:
        if kind is TokenKind.EMAIL_VERIFICATION:
            token_col = AccountModel.email_verification_token
            expires_col = AccountModel.email_verification_expires
        else:
            token_col = AccountModel.password_reset_token
            expires_col = AccountModel.password_reset_expires

        model = await self._find_model(token_col == token_hash, expires_col > now)
        return self._map_to_domain(model) if model else None

    async def add(self, account: Account) -> Account:
        if not account.password_hash:
            msg = "Cannot insert an account without a password hash"
            raise ValueError(msg)

        model = AccountModel(id=account.id, password_hash=account.password_hash)
        self._apply_to_model(model, account)
        model.created_at = account.created_at

        try:
            self._session.add(model)
            await self._session.flush()
        except IntegrityError as e:
            if "UNIQUE constraint failed" in str(e) or "unique" in str(e).lower():
                raise EmailAlreadyExistsError(account.email.value) from e
            raise

        logger.info("Created account: %s (email: %s)", account.id, account.email)
        return self._map_to_domain(model)

    async def save(self, account: Account) -> Account:
        model = await self._find_model(AccountModel.id == account.id)
        if model is None:
            raise AccountNotFoundError(str(account.id))

        self._apply_to_model(model, account)
        if account.password_hash:
            model.password_hash = account.password_hash

        await self._session.flush()
        logger.debug("Updated account: %s", account.id)
        return self._map_to_domain(model)

    async def record_failed_login(self, account_id: UUID, now: datetime) -> int:
        # An expired lock restarts the count at 1
        restart = (
            update(AccountModel)
            .where(
                AccountModel.id == account_id,
                AccountModel.lock_until.is_not(None),
                AccountModel.lock_until <= now,
            )
            .values(login_attempts=1, lock_until=None, updated_at=now)
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(restart)

        if result.rowcount == 0:
            attempts = AccountModel.login_attempts + 1
            increment = (
                update(AccountModel)
                .where(AccountModel.id == account_id)
                .values(
                    login_attempts=attempts,
                    lock_until=case(
                        (
                            and_(
                                attempts >= MAX_LOGIN_ATTEMPTS,
                                AccountModel.lock_until.is_(None),
                            ),
                            now + timedelta(hours=LOCK_DURATION_HOURS),
                        ),
                        else_=AccountModel.lock_until,
                    ),
                    updated_at=now,
                )
                .execution_options(synchronize_session=False)
            )
            await self._session.execute(increment)

        stmt = select(AccountModel.login_attempts, AccountModel.lock_until).where(
            AccountModel.id == account_id,
        )
        row = (await self._session.execute(stmt)).one_or_none()
        if row is None:
            return 0

        if row.lock_until is not None and ensure_tz_aware(row.lock_until) > now:
            logger.warning(
                "Account %s locked until %s after %d failed login attempts",
                account_id,
                row.lock_until,
                row.login_attempts,
            )
        return row.login_attempts

    async def record_successful_login(self, account_id: UUID, now: datetime) -> None:
        stmt = (
            update(AccountModel)
            .where(AccountModel.id == account_id)
            .values(login_attempts=0, lock_until=None, last_login=now, updated_at=now)
            .execution_options(synchronize_session=False)
        )
        await self._session.execute(stmt)

    async def _find_model(self, *criteria) -> AccountModel | None:
        # Bulk UPDATEs above bypass the identity map, so always refresh
        stmt = (
            select(AccountModel)
            .where(*criteria)
            .execution_options(populate_existing=True)
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    def _map_to_domain(
        self,
        model: AccountModel,
        with_password: bool = False,
    ) -> Account:
        profile = VenueProfile(
            business_name=model.business_name,
            address=Address(
                line1=model.address_line1,
                line2=model.address_line2,
                city=model.address_city,
                state=model.address_state,
                pin_code=model.address_pin_code,
            ),
            seating_capacity=model.seating_capacity,
            business_type=model.business_type,
            amenities=tuple(model.amenities or ()),
            phone_number=model.phone_number,
            profile_image=model.profile_image,
        )
        return Account(
            id=model.id,
            email=Email(model.email),
            profile=profile,
            password_hash=model.password_hash if with_password else None,
            role=model.role,
            is_email_verified=model.is_email_verified,
            is_active=model.is_active,
            email_verification_token=model.email_verification_token,
            email_verification_expires=_aware(model.email_verification_expires),
            password_reset_token=model.password_reset_token,
            password_reset_expires=_aware(model.password_reset_expires),
            login_attempts=model.login_attempts,
            lock_until=_aware(model.lock_until),
            subscription_plan=model.subscription_plan,
            subscription_expires=_aware(model.subscription_expires),
            last_login=_aware(model.last_login),
            created_at=ensure_tz_aware(model.created_at),
            updated_at=ensure_tz_aware(model.updated_at),
        )

    def _apply_to_model(self, model: AccountModel, account: Account) -> None:
        profile = account.profile
        model.email = account.email.value
        model.business_name = profile.business_name
        model.address_line1 = profile.address.line1
        model.address_line2 = profile.address.line2
        model.address_city = profile.address.city
        model.address_state = profile.address.state
        model.address_pin_code = profile.address.pin_code
        model.seating_capacity = profile.seating_capacity
        model.business_type = (
            profile.business_type.value if profile.business_type else None
        )
        model.amenities = [amenity.value for amenity in profile.amenities]
        model.phone_number = profile.phone_number
        model.profile_image = profile.profile_image
        model.role = account.role.value
        model.is_email_verified = account.is_email_verified
        model.is_active = account.is_active
        model.email_verification_token = account.email_verification_token
        model.email_verification_expires = account.email_verification_expires
        model.password_reset_token = account.password_reset_token
        model.password_reset_expires = account.password_reset_expires
        model.login_attempts = account.login_attempts
        model.lock_until = account.lock_until
        model.subscription_plan = account.subscription_plan.value
        model.subscription_expires = account.subscription_expires
        model.last_login = account.last_login
        model.updated_at = account.updated_at
