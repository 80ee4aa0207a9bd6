"""Public gallery endpoints: browse, submit, like, count views, comment."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError
from sqlalchemy.orm import Session

from showcase.api.v1.auth import get_current_user, get_current_user_optional
from showcase.core.constants import SortOption, UserRole, WebsiteStatus
from showcase.core.database import get_db
from showcase.core.permissions import has_permission
from showcase.schemas.auth import CurrentUser
from showcase.schemas.common import ActionResponse
from showcase.schemas.website import (
    MAX_PAGE_SIZE,
    CommentCreate,
    CommentOut,
    LikeToggleResult,
    UserSummary,
    ViewCountResult,
    WebsiteCreated,
    WebsiteFilters,
    WebsiteListResult,
    WebsiteSubmission,
    WebsiteWithDetails,
)
from showcase.services.websites import (
    add_website_comment,
    create_website,
    get_website,
    increment_website_views,
    list_website_comments,
    list_websites,
    toggle_like,
)

router = APIRouter()


def _is_moderator(user: CurrentUser | None) -> bool:
    return user is not None and has_permission(user.role, UserRole.MODERATOR)


def _can_see(website: WebsiteWithDetails, user: CurrentUser | None) -> bool:
    """Approved websites are public; others only to their submitter and moderators."""
    if website.status == WebsiteStatus.APPROVED:
        return True
    if user is None:
        return False
    return _is_moderator(user) or website.submitted_by.id == user.id


def _visible(db: Session, website_id: int, user: CurrentUser | None) -> bool:
    website = get_website(db, website_id)
    return website is not None and _can_see(website, user)


@router.get("", response_model=WebsiteListResult)
def get_websites(
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[CurrentUser | None, Depends(get_current_user_optional)],
    search: Annotated[str | None, Query(max_length=200)] = None,
    category: str | None = None,
    is_popular: bool | None = None,
    status_filter: Annotated[WebsiteStatus, Query(alias="status")] = WebsiteStatus.APPROVED,
    sort_by: SortOption = SortOption.NEWEST,
    limit: Annotated[int, Query(ge=1, le=MAX_PAGE_SIZE)] = 12,
    offset: Annotated[int, Query(ge=0)] = 0,
) -> WebsiteListResult:
    """
    One page of websites with submitter, tags, like and comment counts.

    Visitors see approved websites only; moderators may list other statuses.
    """
    if status_filter != WebsiteStatus.APPROVED and not _is_moderator(current_user):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")
    try:
        filters = WebsiteFilters(
            search=search,
            category=category,
            is_popular=is_popular,
            status=status_filter,
            sort_by=sort_by,
            limit=limit,
            offset=offset,
        )
    except ValidationError as e:
        raise RequestValidationError(e.errors()) from e
    return list_websites(
        db,
        filters,
        viewer_id=current_user.id if current_user else None,
    )


@router.post(
    "",
    response_model=ActionResponse[WebsiteCreated],
    status_code=status.HTTP_201_CREATED,
)
def submit_website(
    body: WebsiteSubmission,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> ActionResponse[WebsiteCreated]:
    """Submit a website for review. It stays hidden until a moderator approves it."""
    website = create_website(db, body, submitter_id=current_user.id)
    return ActionResponse[WebsiteCreated](data=WebsiteCreated.model_validate(website))


@router.get("/{website_id}", response_model=ActionResponse[WebsiteWithDetails])
def get_website_detail(
    website_id: int,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[CurrentUser | None, Depends(get_current_user_optional)],
) -> ActionResponse[WebsiteWithDetails]:
    website = get_website(db, website_id, viewer_id=current_user.id if current_user else None)
    if website is None or not _can_see(website, current_user):
        return ActionResponse[WebsiteWithDetails](data=None)
    return ActionResponse[WebsiteWithDetails](data=website)


@router.post("/{website_id}/like", response_model=ActionResponse[LikeToggleResult])
def like_website(
    website_id: int,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> ActionResponse[LikeToggleResult]:
    """Like the website, or remove the like if the current user already liked it."""
    if not _visible(db, website_id, current_user):
        return ActionResponse[LikeToggleResult](data=None)
    result = toggle_like(db, website_id, current_user.id)
    return ActionResponse[LikeToggleResult](data=result)


@router.post("/{website_id}/views", response_model=ActionResponse[ViewCountResult])
def record_view(
    website_id: int,
    db: Annotated[Session, Depends(get_db)],
) -> ActionResponse[ViewCountResult]:
    view_count = increment_website_views(db, website_id)
    if view_count is None:
        return ActionResponse[ViewCountResult](data=None)
    return ActionResponse[ViewCountResult](
        data=ViewCountResult(website_id=website_id, view_count=view_count)
    )


@router.get("/{website_id}/comments", response_model=list[CommentOut])
def get_comments(
    website_id: int,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[CurrentUser | None, Depends(get_current_user_optional)],
) -> list[CommentOut]:
    """Newest first; empty for missing websites and ones the caller cannot see."""
    if not _visible(db, website_id, current_user):
        return []
    return list_website_comments(db, website_id)


@router.post(
    "/{website_id}/comments",
    response_model=ActionResponse[CommentOut],
    status_code=status.HTTP_201_CREATED,
)
def post_comment(
    website_id: int,
    body: CommentCreate,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> ActionResponse[CommentOut]:
    if not _visible(db, website_id, current_user):
        return ActionResponse[CommentOut](data=None)
    comment = add_website_comment(db, website_id, current_user.id, body.content)
    if comment is None:
        return ActionResponse[CommentOut](data=None)
    return ActionResponse[CommentOut](
        data=CommentOut(
            id=comment.id,
            website_id=comment.website_id,
            content=comment.content,
            created_at=comment.created_at,
            updated_at=comment.updated_at,
            user=UserSummary(
                id=current_user.id,
                name=current_user.name,
                image=current_user.image,
            ),
        )
    )
