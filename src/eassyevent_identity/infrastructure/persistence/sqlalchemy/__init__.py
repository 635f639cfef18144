"""SQLAlchemy persistence for the identity package."""

from eassyevent_identity.infrastructure.persistence.sqlalchemy.base import (
    IdentityBase,
)
from eassyevent_identity.infrastructure.persistence.sqlalchemy.models import (
    AccountModel,
)
from eassyevent_identity.infrastructure.persistence.sqlalchemy.repositories import (
    AccountRepositorySQLAlchemy,
)

__all__ = [
    "AccountModel",
    "AccountRepositorySQLAlchemy",
    "IdentityBase",
]
