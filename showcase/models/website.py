"""ORM models for website submissions, their tags, likes and comments."""

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
    func,
)
from sqlalchemy.ext.associationproxy import association_proxy
from sqlalchemy.orm import relationship

from showcase.models.base import Base, utcnow


class Website(Base):
    """
    A submitted website. Starts as 'pending'; moderators approve or reject it.

    published_at is set the first time (and every time) the website is approved
    and is never cleared. view_count only ever grows.
    """

    __tablename__ = "website"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    image_url = Column(String(2048), nullable=False)
    source_url = Column(String(2048), nullable=True)
    live_url = Column(String(2048), nullable=False)
    category = Column(String(32), nullable=False)
    is_popular = Column(Boolean, nullable=False, default=False)
    status = Column(String(32), nullable=False, default="pending")

    submitted_by = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    reviewed_by = Column(
        Integer,
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )

    view_count = Column(Integer, nullable=False, default=0)
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
        server_default=func.now(),
    )
    published_at = Column(DateTime(timezone=True), nullable=True)

    __table_args__ = (
        Index("website_status_idx", "status"),
        Index("website_category_idx", "category"),
        Index("website_popular_idx", "is_popular"),
        Index("website_created_at_idx", "created_at"),
    )

    submitter = relationship(
        "User",
        back_populates="websites",
        foreign_keys=[submitted_by],
    )
    reviewer = relationship(
        "User",
        back_populates="reviewed_websites",
        foreign_keys=[reviewed_by],
    )
    tag_rows = relationship(
        "WebsiteTag",
        back_populates="website",
        cascade="all, delete-orphan",
        order_by="WebsiteTag.position",
    )
    likes = relationship(
        "WebsiteLike",
        back_populates="website",
        cascade="all, delete-orphan",
    )
    comments = relationship(
        "WebsiteComment",
        back_populates="website",
        cascade="all, delete-orphan",
    )

    # Read-only list of tag names in position order; writers build tag_rows.
    tags = association_proxy("tag_rows", "name")

    def __repr__(self) -> str:
        return f"<Website {self.id} {self.title!r} {self.status}>"


class WebsiteTag(Base):
    """One tag of a website; position keeps the submitted order."""

    __tablename__ = "website_tag"

    id = Column(Integer, primary_key=True, autoincrement=True)
    website_id = Column(
        Integer,
        ForeignKey("website.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name = Column(String(64), nullable=False, index=True)
    position = Column(Integer, nullable=False, default=0)

    website = relationship("Website", back_populates="tag_rows")


class WebsiteLike(Base):
    """A user's like on a website. At most one row per (website, user)."""

    __tablename__ = "website_like"

    id = Column(Integer, primary_key=True, autoincrement=True)
    website_id = Column(
        Integer,
        ForeignKey("website.id", ondelete="CASCADE"),
        nullable=False,
    )
    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
    )

    __table_args__ = (
        UniqueConstraint("website_id", "user_id", name="uq_website_like_website_user"),
    )

    website = relationship("Website", back_populates="likes")
    user = relationship("User", back_populates="likes")


class WebsiteComment(Base):
    """Append-only comment on a website."""

    __tablename__ = "website_comment"

    id = Column(Integer, primary_key=True, autoincrement=True)
    website_id = Column(
        Integer,
        ForeignKey("website.id", ondelete="CASCADE"),
        nullable=False,
    )
    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    content = Column(Text, nullable=False)
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
        server_default=func.now(),
    )

    __table_args__ = (
        Index("website_comment_website_idx", "website_id"),
        Index("website_comment_created_at_idx", "created_at"),
    )

    website = relationship("Website", back_populates="comments")
    user = relationship("User", back_populates="comments")
