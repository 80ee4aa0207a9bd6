"""
Website queries and mutations: filtered listing, submission, moderation, likes, views, comments.

Knows about models and schemas, not about HTTP statuses. Functions return None
when the target website does not exist.
"""

import logging
from collections.abc import Sequence
from datetime import UTC, datetime

from sqlalchemy import func, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Query, Session, contains_eager, joinedload, selectinload

from showcase.core.constants import SortOption, WebsiteStatus
from showcase.models import User, Website, WebsiteComment, WebsiteLike, WebsiteTag
from showcase.schemas.common import page_info
from showcase.schemas.website import (
    CommentOut,
    LikeToggleResult,
    UserSummary,
    WebsiteFilters,
    WebsiteListResult,
    WebsiteSubmission,
    WebsiteWithDetails,
)

logger = logging.getLogger(__name__)


def _like_counts(db: Session):
    return (
        db.query(
            WebsiteLike.website_id.label("website_id"),
            func.count(WebsiteLike.id).label("like_count"),
        )
        .group_by(WebsiteLike.website_id)
        .subquery()
    )


def _comment_counts(db: Session):
    return (
        db.query(
            WebsiteComment.website_id.label("website_id"),
            func.count(WebsiteComment.id).label("comment_count"),
        )
        .group_by(WebsiteComment.website_id)
        .subquery()
    )


def build_filter_conditions(
    search: str | None = None,
    category: str | None = None,
    is_popular: bool | None = None,
    status: str | None = None,
    include_tags: bool = True,
) -> list:
    """
    Conjunctive predicates for a website listing.

    status and category are exact matches, search is a case-insensitive
    substring of title or description, or (with include_tags) a tag equal to
    the search term.
    """
    conditions = []
    if status is not None:
        conditions.append(Website.status == status)
    if search:
        matches = [
            Website.title.icontains(search, autoescape=True),
            Website.description.icontains(search, autoescape=True),
        ]
        if include_tags:
            matches.append(
                Website.tag_rows.any(func.lower(WebsiteTag.name) == search.lower())
            )
        conditions.append(or_(*matches))
    if category:
        conditions.append(Website.category == category)
    if is_popular is not None:
        conditions.append(Website.is_popular == is_popular)
    return conditions


def _order_by(sort_by: SortOption, like_count_column) -> tuple:
    """ORDER BY clauses for a sort key; id is always the final tiebreak."""
    orders = {
        SortOption.NEWEST: (Website.created_at.desc(), Website.id.desc()),
        SortOption.OLDEST: (Website.created_at.asc(), Website.id.asc()),
        SortOption.POPULAR: (
            Website.is_popular.desc(),
            Website.created_at.desc(),
            Website.id.desc(),
        ),
        SortOption.VIEWS: (Website.view_count.desc(), Website.id.desc()),
        SortOption.LIKES: (like_count_column.desc(), Website.id.desc()),
    }
    return orders[SortOption(sort_by)]


def _summary(user: User | None, with_email: bool = True) -> UserSummary | None:
    if user is None:
        return None
    return UserSummary(
        id=user.id,
        name=user.name,
        email=user.email if with_email else None,
        image=user.image,
    )


def _to_details(
    website: Website,
    like_count: int,
    comment_count: int,
    liked: bool = False,
) -> WebsiteWithDetails:
    return WebsiteWithDetails(
        id=website.id,
        title=website.title,
        description=website.description,
        image_url=website.image_url,
        source_url=website.source_url,
        live_url=website.live_url,
        tags=list(website.tags),
        category=website.category,
        is_popular=website.is_popular,
        status=website.status,
        view_count=website.view_count,
        like_count=int(like_count or 0),
        comment_count=int(comment_count or 0),
        liked=liked,
        created_at=website.created_at,
        updated_at=website.updated_at,
        published_at=website.published_at,
        submitted_by=_summary(website.submitter),
        reviewed_by=_summary(website.reviewer),
    )


def _enriched_query(db: Session) -> tuple[Query, object]:
    """Websites with submitter, reviewer, tags, like count and comment count in one query."""
    likes = _like_counts(db)
    comments = _comment_counts(db)
    like_count = func.coalesce(likes.c.like_count, 0)
    query = (
        db.query(
            Website,
            like_count.label("like_count"),
            func.coalesce(comments.c.comment_count, 0).label("comment_count"),
        )
        .join(Website.submitter)
        .outerjoin(likes, likes.c.website_id == Website.id)
        .outerjoin(comments, comments.c.website_id == Website.id)
        .options(
            contains_eager(Website.submitter),
            joinedload(Website.reviewer),
            selectinload(Website.tag_rows),
        )
    )
    return query, like_count


def _liked_ids(db: Session, website_ids: Sequence[int], viewer_id: int | None) -> set[int]:
    if viewer_id is None or not website_ids:
        return set()
    rows = (
        db.query(WebsiteLike.website_id)
        .filter(
            WebsiteLike.user_id == viewer_id,
            WebsiteLike.website_id.in_(list(website_ids)),
        )
        .all()
    )
    return {row[0] for row in rows}


def list_websites(
    db: Session,
    filters: WebsiteFilters,
    viewer_id: int | None = None,
) -> WebsiteListResult:
    """
    Return one page of websites matching the filters, enriched, plus the total.

    total is counted with the same predicates as the page, so
    total_pages = ceil(total / limit) is consistent with what can be paged.
    """
    conditions = build_filter_conditions(
        search=filters.search,
        category=filters.category,
        is_popular=filters.is_popular,
        status=filters.status,
    )
    query, like_count = _enriched_query(db)
    rows = (
        query.filter(*conditions)
        .order_by(*_order_by(filters.sort_by, like_count))
        .offset(filters.offset)
        .limit(filters.limit)
        .all()
    )
    total = db.query(func.count(Website.id)).filter(*conditions).scalar() or 0

    liked = _liked_ids(db, [w.id for w, _, _ in rows], viewer_id)
    websites = [
        _to_details(w, likes, comments, liked=w.id in liked)
        for w, likes, comments in rows
    ]
    info = page_info(total, filters.limit, filters.offset)
    return WebsiteListResult(websites=websites, **info.model_dump())


def get_website(
    db: Session,
    website_id: int,
    viewer_id: int | None = None,
) -> WebsiteWithDetails | None:
    """Return one enriched website regardless of status, or None."""
    query, _ = _enriched_query(db)
    row = query.filter(Website.id == website_id).first()
    if row is None:
        return None
    website, likes, comments = row
    liked = website.id in _liked_ids(db, [website.id], viewer_id)
    return _to_details(website, likes, comments, liked=liked)


def create_website(
    db: Session,
    submission: WebsiteSubmission,
    submitter_id: int,
) -> Website:
    """Persist a new submission as pending, not popular, with zero views."""
    now = datetime.now(UTC)
    website = Website(
        title=submission.title,
        description=submission.description,
        image_url=submission.image_url,
        source_url=submission.source_url or None,
        live_url=submission.live_url,
        category=str(submission.category),
        status=WebsiteStatus.PENDING.value,
        is_popular=False,
        view_count=0,
        submitted_by=submitter_id,
        created_at=now,
        updated_at=now,
    )
    website.tag_rows = [
        WebsiteTag(name=tag, position=i) for i, tag in enumerate(submission.tags)
    ]
    db.add(website)
    db.commit()
    db.refresh(website)
    logger.info(
        "Website submitted",
        extra={"website_id": website.id, "submitted_by": submitter_id},
    )
    return website


def update_website_status(
    db: Session,
    website_id: int,
    status: str,
    reviewer_id: int | None,
) -> Website | None:
    """
    Move a website to approved or rejected and record the reviewer.

    Approving (again) stamps published_at with now; rejecting leaves
    published_at untouched. Any status can follow any other.
    """
    status = WebsiteStatus(status)
    if status == WebsiteStatus.PENDING:
        raise ValueError("Status can only be changed to approved or rejected")

    website = db.query(Website).filter(Website.id == website_id).first()
    if website is None:
        return None

    now = datetime.now(UTC)
    website.status = status.value
    website.reviewed_by = reviewer_id
    website.updated_at = now
    if status == WebsiteStatus.APPROVED:
        website.published_at = now
    db.commit()
    db.refresh(website)
    logger.info(
        "Website status updated",
        extra={"website_id": website_id, "status": status.value, "reviewed_by": reviewer_id},
    )
    return website


def toggle_website_popular(db: Session, website_id: int, is_popular: bool) -> Website | None:
    """Set the curated popularity flag."""
    website = db.query(Website).filter(Website.id == website_id).first()
    if website is None:
        return None
    website.is_popular = is_popular
    website.updated_at = datetime.now(UTC)
    db.commit()
    db.refresh(website)
    return website


def increment_website_views(db: Session, website_id: int) -> int | None:
    """Atomically add one view; return the new count, or None for an unknown id."""
    updated = (
        db.query(Website)
        .filter(Website.id == website_id)
        .update(
            {Website.view_count: Website.view_count + 1},
            synchronize_session=False,
        )
    )
    db.commit()
    if not updated:
        return None
    return db.query(Website.view_count).filter(Website.id == website_id).scalar()


def toggle_like(db: Session, website_id: int, user_id: int) -> LikeToggleResult | None:
    """
    Flip the (website, user) like and report the resulting state.

    The unlike branch is one conditional DELETE; its row count picks the
    branch. The like branch relies on the unique constraint, so a concurrent
    toggle that already inserted the row reads as liked.
    """
    exists = db.query(Website.id).filter(Website.id == website_id).first()
    if exists is None:
        return None

    deleted = (
        db.query(WebsiteLike)
        .filter(WebsiteLike.website_id == website_id, WebsiteLike.user_id == user_id)
        .delete(synchronize_session=False)
    )
    if deleted:
        db.commit()
        return LikeToggleResult(website_id=website_id, liked=False)

    db.add(WebsiteLike(website_id=website_id, user_id=user_id))
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.info(
            "Concurrent like already recorded",
            extra={"website_id": website_id, "user_id": user_id},
        )
    return LikeToggleResult(website_id=website_id, liked=True)


def delete_website(db: Session, website_id: int) -> bool:
    """Delete a website with its tags, likes and comments. False if it did not exist."""
    website = db.query(Website).filter(Website.id == website_id).first()
    if website is None:
        return False
    db.delete(website)
    db.commit()
    logger.info("Website deleted", extra={"website_id": website_id})
    return True


def list_website_comments(db: Session, website_id: int) -> list[CommentOut]:
    """Comments on a website, newest first, with author identity (no email)."""
    comments = (
        db.query(WebsiteComment)
        .options(joinedload(WebsiteComment.user))
        .filter(WebsiteComment.website_id == website_id)
        .order_by(WebsiteComment.created_at.desc(), WebsiteComment.id.desc())
        .all()
    )
    return [
        CommentOut(
            id=c.id,
            website_id=c.website_id,
            content=c.content,
            created_at=c.created_at,
            updated_at=c.updated_at,
            user=_summary(c.user, with_email=False),
        )
        for c in comments
    ]


def add_website_comment(
    db: Session,
    website_id: int,
    user_id: int,
    content: str,
) -> WebsiteComment | None:
    """Append a comment; None if the website does not exist."""
    exists = db.query(Website.id).filter(Website.id == website_id).first()
    if exists is None:
        return None
    now = datetime.now(UTC)
    comment = WebsiteComment(
        website_id=website_id,
        user_id=user_id,
        content=content,
        created_at=now,
        updated_at=now,
    )
    db.add(comment)
    db.commit()
    db.refresh(comment)
    return comment
