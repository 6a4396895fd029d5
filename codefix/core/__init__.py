"""Settings and database session helpers shared by the API, CLI and migrations."""

from codefix.core.config import Settings, get_settings, settings
from codefix.core.database import SessionLocal, get_db

__all__ = ["Settings", "SessionLocal", "get_db", "get_settings", "settings"]
