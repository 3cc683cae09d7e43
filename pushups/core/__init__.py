"""Core app configuration, database and schema migrations."""

from pushups.core.config import get_settings, settings
from pushups.core.database import get_db

__all__ = ["get_settings", "settings", "get_db"]
