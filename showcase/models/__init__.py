"""SQLAlchemy ORM models."""

from showcase.models.base import Base
from showcase.models.user import User
from showcase.models.website import Website, WebsiteComment, WebsiteLike, WebsiteTag

__all__ = ["Base", "User", "Website", "WebsiteComment", "WebsiteLike", "WebsiteTag"]
