"""Configuration, persistence helpers, credentials and the auth guard chain."""

from remix.core.config import get_settings, settings
from remix.core.database import get_db

__all__ = ["get_settings", "settings", "get_db"]
