"""Request/response schemas for auth endpoints and user administration."""

from datetime import datetime

from pydantic import BaseModel, EmailStr, Field

from showcase.core.constants import UserRole
from showcase.schemas.common import PageInfo


class LoginRequest(BaseModel):
    """Credentials for login."""

    email: EmailStr = Field(..., description="Account email")
    password: str = Field(..., min_length=6, max_length=128, description="Password")


class RegisterRequest(BaseModel):
    """Sign-up form; new accounts always start with the 'user' role."""

    name: str = Field(..., min_length=2, max_length=100, description="Display name")
    email: EmailStr = Field(..., description="Account email")
    password: str = Field(..., min_length=6, max_length=128, description="Password")
    image: str | None = Field(default=None, max_length=2048, description="Avatar URL")


class TokenResponse(BaseModel):
    """JWT session token returned after successful login or registration."""

    access_token: str = Field(..., description="JWT access token")
    token_type: str = Field(default="bearer", description="Token type")


class CurrentUser(BaseModel):
    """Authenticated user (id, name, email, role) resolved for one request."""

    model_config = {"from_attributes": True}

    id: int
    name: str
    email: str
    role: UserRole
    image: str | None = None


class UserListItem(BaseModel):
    """User entry for admin list (no password)."""

    model_config = {"from_attributes": True}

    id: int
    name: str
    email: str
    image: str | None = None
    role: UserRole
    email_verified: bool
    created_at: datetime


class UsersListResponse(PageInfo):
    """Response for GET /admin/users (admin only)."""

    users: list[UserListItem]


class RoleUpdateRequest(BaseModel):
    role: UserRole


class UserStats(BaseModel):
    """Total users and a count per role (every role present, zero if none)."""

    total: int
    by_role: dict[UserRole, int]
