"""Pydantic request/response schemas."""

from showcase.schemas.admin import (
    AdminWebsiteItem,
    AdminWebsiteList,
    DashboardStats,
    RecentSubmission,
)
from showcase.schemas.auth import (
    CurrentUser,
    LoginRequest,
    RegisterRequest,
    RoleUpdateRequest,
    TokenResponse,
    UserListItem,
    UsersListResponse,
    UserStats,
)
from showcase.schemas.common import ActionResponse, FieldError, PageInfo
from showcase.schemas.health import HealthResponse
from showcase.schemas.website import (
    CommentCreate,
    CommentOut,
    LikeToggleResult,
    UserSummary,
    WebsiteFilters,
    WebsiteListResult,
    WebsiteSubmission,
    WebsiteWithDetails,
)

__all__ = [
    "ActionResponse",
    "AdminWebsiteItem",
    "AdminWebsiteList",
    "CommentCreate",
    "CommentOut",
    "CurrentUser",
    "DashboardStats",
    "FieldError",
    "HealthResponse",
    "LikeToggleResult",
    "LoginRequest",
    "PageInfo",
    "RecentSubmission",
    "RegisterRequest",
    "RoleUpdateRequest",
    "TokenResponse",
    "UserListItem",
    "UserStats",
    "UserSummary",
    "UsersListResponse",
    "WebsiteFilters",
    "WebsiteListResult",
    "WebsiteSubmission",
    "WebsiteWithDetails",
]
