"""Unit tests for the Account aggregate and its helpers."""

from datetime import timedelta

from eassyevent_identity.domain.account import (
    Account,
    AccountRole,
    Email,
    SubscriptionPlan,
    is_locked,
    serialize_account,
)

PUBLIC_FIELDS = {
    "id",
    "email",
    "business_name",
    "address",
    "seating_capacity",
    "business_type",
    "amenities",
    "phone_number",
    "profile_image",
    "role",
    "is_email_verified",
    "is_active",
    "subscription_plan",
    "subscription_expires",
    "last_login",
    "created_at",
    "updated_at",
}


class TestAccountDefaults:
    """Tests for a freshly created account."""

    def test_new_account_defaults(self, venue_profile):
        account = Account(email="Owner@Example.com", profile=venue_profile)

        assert account.email == Email("owner@example.com")
        assert account.role is AccountRole.VENUE_OWNER
        assert account.is_email_verified is False
        assert account.is_active is True
        assert account.login_attempts == 0
        assert account.lock_until is None
        assert account.subscription_plan is SubscriptionPlan.FREE
        assert account.password_hash is None

    def test_role_and_plan_are_coerced_from_strings(self, venue_profile):
        account = Account(
            email="owner@example.com",
            profile=venue_profile,
            role="admin",
            subscription_plan="premium",
        )
        assert account.role is AccountRole.ADMIN
        assert account.subscription_plan is SubscriptionPlan.PREMIUM

    def test_evolve_returns_copy_and_stamps_updated_at(self, make_account, fixed_now):
        account = make_account(updated_at=fixed_now - timedelta(days=1))

        changed = account.evolve(is_active=False)

        assert account.is_active is True
        assert changed.is_active is False
        assert changed.id == account.id
        assert changed.updated_at > account.updated_at


class TestIsLocked:
    """Tests for the is_locked helper."""

    def test_not_locked_without_lock_until(self, make_account, fixed_now):
        assert is_locked(make_account(), fixed_now) is False

    def test_locked_when_lock_in_future(self, make_account, fixed_now):
        account = make_account(lock_until=fixed_now + timedelta(minutes=1))
        assert is_locked(account, fixed_now) is True

    def test_not_locked_when_lock_expired(self, make_account, fixed_now):
        account = make_account(lock_until=fixed_now - timedelta(seconds=1))
        assert is_locked(account, fixed_now) is False

    def test_not_locked_at_exact_expiry(self, make_account, fixed_now):
        assert is_locked(make_account(lock_until=fixed_now), fixed_now) is False


class TestSerializeAccount:
    """Tests for the public account view."""

    def test_only_public_fields_are_exposed(self, make_account, fixed_now):
        account = make_account(
            password_hash="$2b$12$secret",
            email_verification_token="a" * 64,
            email_verification_expires=fixed_now,
            password_reset_token="b" * 64,
            password_reset_expires=fixed_now,
            login_attempts=3,
            lock_until=fixed_now,
        )

        data = serialize_account(account)

        assert set(data) == PUBLIC_FIELDS
        assert "$2b$12$secret" not in str(data)
        assert "a" * 64 not in str(data)

    def test_values_are_plain_types(self, make_account):
        account = make_account()

        data = serialize_account(account)

        assert data["id"] == str(account.id)
        assert data["email"] == "owner@example.com"
        assert data["role"] == "venue_owner"
        assert data["business_type"] == "Banquet Hall"
        assert data["amenities"] == ["Parking", "WiFi"]
        assert data["subscription_plan"] == "free"
        assert data["address"] == {
            "line1": "12 MG Road",
            "line2": None,
            "city": "Pune",
            "state": "Maharashtra",
            "pin_code": "411001",
        }
