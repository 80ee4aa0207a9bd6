"""Schemas for the moderation dashboard."""

from datetime import datetime

from pydantic import BaseModel, Field

from showcase.schemas.common import PageInfo
from showcase.schemas.website import UserSummary


class DashboardStats(BaseModel):
    """Headline numbers for the admin dashboard."""

    total_websites: int = Field(..., ge=0)
    total_users: int = Field(..., ge=0)
    pending_reviews: int = Field(..., ge=0)
    approved_today: int = Field(..., ge=0)
    rejected_today: int = Field(..., ge=0)
    total_views: int = Field(..., ge=0)
    total_likes: int = Field(..., ge=0)
    growth_rate: float = Field(
        ...,
        description="Percent change in submissions, last 30 days vs the 30 before",
    )


class RecentSubmission(BaseModel):
    id: int
    title: str
    submitted_by: str
    submitted_at: datetime
    status: str
    category: str


class AdminWebsiteItem(BaseModel):
    """Website row in the moderation table (no counts)."""

    id: int
    title: str
    description: str
    image_url: str
    source_url: str | None
    live_url: str
    tags: list[str]
    category: str
    is_popular: bool
    status: str
    view_count: int
    created_at: datetime
    updated_at: datetime
    published_at: datetime | None
    submitted_by: UserSummary | None


class AdminWebsiteList(PageInfo):
    websites: list[AdminWebsiteItem]
