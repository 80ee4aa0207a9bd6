"""ORM model for application users (auth and RBAC)."""

from sqlalchemy import Boolean, Column, DateTime, Integer, String, func
from sqlalchemy.orm import relationship

from showcase.models.base import Base, utcnow


class User(Base):
    """
    User account for session tokens and role-based access control.

    role: 'user', 'moderator' or 'admin'. Deleting a user removes the websites,
    likes and comments they own; websites they reviewed keep existing with
    reviewed_by cleared.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=False, unique=True, index=True)
    email_verified = Column(Boolean, nullable=False, default=False)
    image = Column(String(2048), nullable=True)
    role = Column(String(32), nullable=False, default="user", index=True)
    password_hash = Column(String(255), nullable=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
        server_default=func.now(),
    )

    websites = relationship(
        "Website",
        back_populates="submitter",
        foreign_keys="Website.submitted_by",
        cascade="all, delete-orphan",
    )
    # No delete cascade: the ORM nulls reviewed_by when the reviewer goes away.
    reviewed_websites = relationship(
        "Website",
        back_populates="reviewer",
        foreign_keys="Website.reviewed_by",
    )
    likes = relationship(
        "WebsiteLike",
        back_populates="user",
        cascade="all, delete-orphan",
    )
    comments = relationship(
        "WebsiteComment",
        back_populates="user",
        cascade="all, delete-orphan",
    )
