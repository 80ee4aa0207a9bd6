"""Moderation and user administration API. Moderator or higher; user management is admin only."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from showcase.api.v1.auth import require_admin, require_moderator
from showcase.core.config import get_settings
from showcase.core.constants import UserRole, WebsiteStatus
from showcase.core.database import get_db
from showcase.core.permissions import can_manage_user
from showcase.schemas.admin import AdminWebsiteList, DashboardStats, RecentSubmission
from showcase.schemas.auth import (
    CurrentUser,
    RoleUpdateRequest,
    UserListItem,
    UsersListResponse,
)
from showcase.schemas.common import ActionResponse
from showcase.schemas.website import (
    PopularUpdateRequest,
    StatusUpdateRequest,
    WebsiteStatusResult,
)
from showcase.services.admin import (
    get_dashboard_stats,
    get_recent_submissions,
    list_admin_websites,
)
from showcase.services.users import (
    UserManagementError,
    delete_user,
    get_user_by_id,
    get_users,
    update_user_role,
)
from showcase.services.websites import (
    delete_website,
    toggle_website_popular,
    update_website_status,
)

logger = logging.getLogger(__name__)
router = APIRouter()

Moderator = Annotated[CurrentUser, Depends(require_moderator)]
Admin = Annotated[CurrentUser, Depends(require_admin)]


@router.get("/stats", response_model=DashboardStats)
def stats(
    db: Annotated[Session, Depends(get_db)],
    _user: Moderator,
) -> DashboardStats:
    return get_dashboard_stats(db)


@router.get("/submissions/recent", response_model=list[RecentSubmission])
def recent_submissions(
    db: Annotated[Session, Depends(get_db)],
    _user: Moderator,
    limit: Annotated[int, Query(ge=1, le=50)] = 5,
) -> list[RecentSubmission]:
    return get_recent_submissions(db, limit=limit)


@router.get("/websites", response_model=AdminWebsiteList)
def admin_websites(
    db: Annotated[Session, Depends(get_db)],
    _user: Moderator,
    search: Annotated[str | None, Query(max_length=200)] = None,
    status_filter: Annotated[WebsiteStatus | None, Query(alias="status")] = None,
    category: str | None = None,
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int | None, Query(ge=1, le=100)] = None,
) -> AdminWebsiteList:
    """Moderation table in every status unless one is given, newest first."""
    try:
        return list_admin_websites(
            db,
            search=search,
            status=status_filter,
            category=category,
            page=page,
            limit=limit or get_settings().ADMIN_PAGE_SIZE,
        )
    except ValueError as e:
        raise HTTPException(status_code=422, detail=f"Unknown category {category!r}") from e


@router.patch(
    "/websites/{website_id}/status",
    response_model=ActionResponse[WebsiteStatusResult],
)
def set_website_status(
    website_id: int,
    body: StatusUpdateRequest,
    db: Annotated[Session, Depends(get_db)],
    current_user: Moderator,
) -> ActionResponse[WebsiteStatusResult]:
    """Approve or reject a website; the caller is recorded as reviewer."""
    website = update_website_status(db, website_id, body.status, reviewer_id=current_user.id)
    if website is None:
        return ActionResponse[WebsiteStatusResult](data=None)
    return ActionResponse[WebsiteStatusResult](data=WebsiteStatusResult.model_validate(website))


@router.patch(
    "/websites/{website_id}/popular",
    response_model=ActionResponse[WebsiteStatusResult],
)
def set_website_popular(
    website_id: int,
    body: PopularUpdateRequest,
    db: Annotated[Session, Depends(get_db)],
    _user: Moderator,
) -> ActionResponse[WebsiteStatusResult]:
    website = toggle_website_popular(db, website_id, body.is_popular)
    if website is None:
        return ActionResponse[WebsiteStatusResult](data=None)
    return ActionResponse[WebsiteStatusResult](data=WebsiteStatusResult.model_validate(website))


@router.delete("/websites/{website_id}", response_model=ActionResponse[bool])
def remove_website(
    website_id: int,
    db: Annotated[Session, Depends(get_db)],
    current_user: Moderator,
) -> ActionResponse[bool]:
    deleted = delete_website(db, website_id)
    if deleted:
        logger.info(
            "Website removed by moderator",
            extra={"website_id": website_id, "user_id": current_user.id},
        )
    return ActionResponse[bool](data=True if deleted else None)


@router.get("/users", response_model=UsersListResponse)
def list_users(
    db: Annotated[Session, Depends(get_db)],
    _user: Admin,
    search: Annotated[str | None, Query(max_length=200)] = None,
    role: UserRole | None = None,
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int | None, Query(ge=1, le=100)] = None,
) -> UsersListResponse:
    return get_users(
        db,
        page=page,
        limit=limit or get_settings().ADMIN_PAGE_SIZE,
        search=search,
        role=role,
    )


def _managed_user_or_none(db: Session, actor: CurrentUser, user_id: int):
    target = get_user_by_id(db, user_id)
    if target is not None and not can_manage_user(actor.role, target.role):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")
    return target


@router.patch("/users/{user_id}/role", response_model=ActionResponse[UserListItem])
def set_user_role(
    user_id: int,
    body: RoleUpdateRequest,
    db: Annotated[Session, Depends(get_db)],
    current_user: Admin,
) -> ActionResponse[UserListItem]:
    """Change a user's role. Admins cannot change their own role."""
    if _managed_user_or_none(db, current_user, user_id) is None:
        return ActionResponse[UserListItem](data=None)
    try:
        user = update_user_role(db, user_id, body.role, acting_user_id=current_user.id)
    except UserManagementError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message) from e
    return ActionResponse[UserListItem](data=UserListItem.model_validate(user))


@router.delete("/users/{user_id}", response_model=ActionResponse[bool])
def remove_user(
    user_id: int,
    db: Annotated[Session, Depends(get_db)],
    current_user: Admin,
) -> ActionResponse[bool]:
    """Delete a user with their websites, likes and comments. Admins cannot delete themselves."""
    if _managed_user_or_none(db, current_user, user_id) is None:
        return ActionResponse[bool](data=None)
    try:
        deleted = delete_user(db, user_id, acting_user_id=current_user.id)
    except UserManagementError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message) from e
    return ActionResponse[bool](data=True if deleted else None)
