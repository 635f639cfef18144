"""Per-client rate limits for the authentication endpoints.

Uses SlowAPI with in-memory storage, so counters are per process.
Limits are read from the settings the application was built with.

Two shared buckets exist:
- ``auth``: signup, login and resend-verification
- ``password_reset``: forgot-password and reset-password

Every request counts, whatever its outcome.
"""

import logging

from fastapi import FastAPI
from slowapi import Limiter
from slowapi.util import get_remote_address

from eassyevent_config.settings import Settings

logger = logging.getLogger(__name__)

AUTH_LIMIT_MESSAGE = "Too many authentication attempts, please try again later."
PASSWORD_RESET_LIMIT_MESSAGE = (
    "Too many password reset attempts, please try again later."
)

# Client address comes from the ASGI scope; run uvicorn with
# --proxy-headers behind a reverse proxy.
limiter = Limiter(key_func=get_remote_address)

_limits = {
    "auth": "5 per 15 minutes",
    "password_reset": "3 per hour",
}


def _auth_limit() -> str:
    return _limits["auth"]


def _password_reset_limit() -> str:
    return _limits["password_reset"]


auth_rate_limit = limiter.shared_limit(
    _auth_limit,
    scope="auth",
    error_message=AUTH_LIMIT_MESSAGE,
)

password_reset_rate_limit = limiter.shared_limit(
    _password_reset_limit,
    scope="password_reset",
    error_message=PASSWORD_RESET_LIMIT_MESSAGE,
)


def setup_rate_limiting(app: FastAPI, settings: Settings) -> None:
    """Apply the rate limit settings and attach the limiter to ``app``."""
    limiter.enabled = settings.rate_limit_enabled
    _limits["auth"] = settings.rate_limit_auth
    _limits["password_reset"] = settings.rate_limit_password_reset
    app.state.limiter = limiter

    if settings.rate_limit_enabled:
        logger.info(
            "Rate limiting enabled (auth: %s, password reset: %s)",
            settings.rate_limit_auth,
            settings.rate_limit_password_reset,
        )
