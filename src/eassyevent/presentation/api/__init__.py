"""HTTP API built with FastAPI."""

from eassyevent.presentation.api.app import create_app

__all__ = ["create_app"]
