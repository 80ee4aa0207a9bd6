"""Core app configuration, database, and access rules."""

from showcase.core.config import get_settings, settings
from showcase.core.database import get_db
from showcase.core.permissions import can_manage_user, has_permission

__all__ = ["get_settings", "settings", "get_db", "can_manage_user", "has_permission"]
