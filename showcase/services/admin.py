"""Moderation dashboard: headline statistics, recent submissions, and the moderation table."""

from datetime import UTC, datetime, timedelta

from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload, selectinload

from showcase.core.constants import ALL_CATEGORIES, WebsiteCategory, WebsiteStatus
from showcase.models import User, Website, WebsiteLike
from showcase.schemas.admin import (
    AdminWebsiteItem,
    AdminWebsiteList,
    DashboardStats,
    RecentSubmission,
)
from showcase.schemas.common import page_info
from showcase.schemas.website import UserSummary
from showcase.services.websites import build_filter_conditions

# Window used for the submission growth rate.
GROWTH_WINDOW_DAYS = 30
UNKNOWN_SUBMITTER = "Unknown User"


def _count(db: Session, *conditions) -> int:
    return db.query(func.count(Website.id)).filter(*conditions).scalar() or 0


def growth_rate(recent: int, previous: int) -> float:
    """Percent change from previous to recent, rounded to 1 decimal; 0 when previous is 0."""
    if previous <= 0:
        return 0.0
    return round((recent - previous) / previous * 100, 1)


def get_dashboard_stats(db: Session, now: datetime | None = None) -> DashboardStats:
    """
    Headline numbers. "Today" starts at midnight UTC; approvals are dated by
    published_at and rejections by updated_at.
    """
    now = now or datetime.now(UTC)
    today = now.replace(hour=0, minute=0, second=0, microsecond=0)
    window_start = now - timedelta(days=GROWTH_WINDOW_DAYS)
    previous_start = now - timedelta(days=2 * GROWTH_WINDOW_DAYS)

    recent = _count(db, Website.created_at >= window_start)
    previous = _count(
        db,
        Website.created_at >= previous_start,
        Website.created_at < window_start,
    )

    return DashboardStats(
        total_websites=_count(db),
        total_users=db.query(func.count(User.id)).scalar() or 0,
        pending_reviews=_count(db, Website.status == WebsiteStatus.PENDING.value),
        approved_today=_count(
            db,
            Website.status == WebsiteStatus.APPROVED.value,
            Website.published_at >= today,
        ),
        rejected_today=_count(
            db,
            Website.status == WebsiteStatus.REJECTED.value,
            Website.updated_at >= today,
        ),
        total_views=int(db.query(func.coalesce(func.sum(Website.view_count), 0)).scalar() or 0),
        total_likes=db.query(func.count(WebsiteLike.id)).scalar() or 0,
        growth_rate=growth_rate(recent, previous),
    )


def get_recent_submissions(db: Session, limit: int = 5) -> list[RecentSubmission]:
    """Latest submissions in any status."""
    rows = (
        db.query(Website, User.name)
        .outerjoin(User, Website.submitted_by == User.id)
        .order_by(Website.created_at.desc(), Website.id.desc())
        .limit(limit)
        .all()
    )
    return [
        RecentSubmission(
            id=w.id,
            title=w.title,
            submitted_by=name or UNKNOWN_SUBMITTER,
            submitted_at=w.created_at,
            status=w.status,
            category=w.category,
        )
        for w, name in rows
    ]


def list_admin_websites(
    db: Session,
    search: str | None = None,
    status: str | None = None,
    category: str | None = None,
    page: int = 1,
    limit: int = 10,
) -> AdminWebsiteList:
    """
    Moderation table: every status unless one is given, newest first.

    Search covers title and description only (tags are not searched here).
    """
    page = max(page, 1)
    offset = (page - 1) * limit
    if category == ALL_CATEGORIES:
        category = None
    conditions = build_filter_conditions(
        search=search.strip() if search else None,
        category=WebsiteCategory(category).value if category else None,
        status=WebsiteStatus(status).value if status else None,
        include_tags=False,
    )
    websites = (
        db.query(Website)
        .options(joinedload(Website.submitter), selectinload(Website.tag_rows))
        .filter(*conditions)
        .order_by(Website.created_at.desc(), Website.id.desc())
        .offset(offset)
        .limit(limit)
        .all()
    )
    total = _count(db, *conditions)
    items = [
        AdminWebsiteItem(
            id=w.id,
            title=w.title,
            description=w.description,
            image_url=w.image_url,
            source_url=w.source_url,
            live_url=w.live_url,
            tags=list(w.tags),
            category=w.category,
            is_popular=w.is_popular,
            status=w.status,
            view_count=w.view_count,
            created_at=w.created_at,
            updated_at=w.updated_at,
            published_at=w.published_at,
            submitted_by=(
                UserSummary(
                    id=w.submitter.id,
                    name=w.submitter.name,
                    email=w.submitter.email,
                    image=w.submitter.image,
                )
                if w.submitter is not None
                else None
            ),
        )
        for w in websites
    ]
    info = page_info(total, limit, offset)
    return AdminWebsiteList(websites=items, **info.model_dump())
