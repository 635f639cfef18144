"""One-time tokens for email verification and password reset.

The plaintext token only ever leaves the process inside an email link.
Storage and lookup use its sha256 digest.
"""

import hashlib
import secrets
from datetime import datetime, timedelta

from eassyevent_identity.domain.account import TokenKind

TOKEN_BYTES = 32

TOKEN_TTL = {
    TokenKind.EMAIL_VERIFICATION: timedelta(hours=24),
    TokenKind.PASSWORD_RESET: timedelta(minutes=10),
}


def generate_token() -> str:
    """Return a fresh random token as 64 hex characters."""
    return secrets.token_hex(TOKEN_BYTES)


def hash_token(raw_token: str) -> str:
    """Return the sha256 hex digest stored in place of ``raw_token``."""
    return hashlib.sha256(raw_token.encode()).hexdigest()


def token_expiry(kind: TokenKind, now: datetime) -> datetime:
    return now + TOKEN_TTL[kind]
