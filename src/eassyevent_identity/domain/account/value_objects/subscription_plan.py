from enum import Enum


class SubscriptionPlan(str, Enum):
    """Subscription tiers for venue owners."""

    FREE = "free"
    BASIC = "basic"
    PREMIUM = "premium"
    ENTERPRISE = "enterprise"
