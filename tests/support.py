"""Shared builders for tests: in-memory SQLite sessions, users and websites."""

from datetime import UTC, datetime, timedelta

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from showcase.core.database import enforce_sqlite_foreign_keys
from showcase.core.security import hash_password
from showcase.models import Base, User, Website, WebsiteTag

# Lowest bcrypt cost keeps hashing fast in tests.
TEST_BCRYPT_ROUNDS = 4
BASE_TIME = datetime(2025, 3, 1, 12, 0, tzinfo=UTC)


def make_session_factory() -> sessionmaker:
    """Fresh in-memory database with every table; one shared connection."""
    engine = enforce_sqlite_foreign_keys(
        create_engine(
            "sqlite://",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    )
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


def make_user(
    db: Session,
    email: str = "john@example.com",
    name: str = "John Doe",
    role: str = "user",
    password: str | None = None,
) -> User:
    user = User(
        name=name,
        email=email,
        role=role,
        password_hash=hash_password(password, rounds=TEST_BCRYPT_ROUNDS) if password else None,
        created_at=BASE_TIME,
        updated_at=BASE_TIME,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def make_website(
    db: Session,
    submitter: User,
    title: str = "Modern Dashboard",
    description: str = "A dashboard built with a component library.",
    tags: list[str] | None = None,
    category: str = "dashboard",
    status: str = "approved",
    is_popular: bool = False,
    view_count: int = 0,
    age_minutes: int = 0,
    published_at: datetime | None = None,
) -> Website:
    """Website created age_minutes before BASE_TIME."""
    created = BASE_TIME - timedelta(minutes=age_minutes)
    website = Website(
        title=title,
        description=description,
        image_url="https://images.unsplash.com/photo-1?w=800",
        source_url=None,
        live_url="https://example.com",
        category=category,
        status=status,
        is_popular=is_popular,
        view_count=view_count,
        submitted_by=submitter.id,
        created_at=created,
        updated_at=created,
        published_at=published_at,
    )
    website.tag_rows = [
        WebsiteTag(name=tag, position=i) for i, tag in enumerate(tags or ["react"])
    ]
    db.add(website)
    db.commit()
    db.refresh(website)
    return website
