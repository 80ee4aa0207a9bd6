"""Pydantic schemas for website submissions, listing filters and enriched listing rows."""

import re
from datetime import datetime
from typing import Literal
from urllib.parse import urlparse

from pydantic import BaseModel, Field, field_validator

from showcase.core.constants import ALL_CATEGORIES, SortOption, WebsiteCategory, WebsiteStatus
from showcase.schemas.common import PageInfo

TITLE_MIN_LENGTH = 3
TITLE_MAX_LENGTH = 100
DESCRIPTION_MIN_LENGTH = 20
DESCRIPTION_MAX_LENGTH = 500
TAG_MAX_LENGTH = 20
MAX_TAGS = 10
COMMENT_MAX_LENGTH = 2000
MAX_PAGE_SIZE = 100

_TITLE_RE = re.compile(r"^[a-zA-Z0-9\s\-_.()&]+$")
_IMAGE_EXT_RE = re.compile(r"\.(jpg|jpeg|png|gif|webp|svg)$", re.IGNORECASE)
# Image hosts accepted even when the URL has no file extension.
IMAGE_HOSTS = ("unsplash.com", "imgur.com")

# Moderation outcomes; "pending" is only ever the initial state.
ReviewDecision = Literal["approved", "rejected"]


def _validate_http_url(value: str) -> str:
    """Require an absolute http(s) URL with a host."""
    value = (value or "").strip()
    parsed = urlparse(value)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValueError("URL must start with http:// or https://")
    return value


class WebsiteSubmission(BaseModel):
    """Validated website submission from the /submit form or POST /websites."""

    model_config = {"extra": "ignore"}

    title: str = Field(..., description="Website title")
    description: str = Field(..., description="What the website is and what it uses")
    live_url: str = Field(..., description="Public URL of the live website")
    source_url: str | None = Field(default=None, description="Repository URL")
    image_url: str = Field(..., description="Screenshot URL")
    category: WebsiteCategory
    tags: list[str] = Field(default_factory=list)

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        v = (v or "").strip()
        if len(v) < TITLE_MIN_LENGTH:
            raise ValueError(f"Title must be at least {TITLE_MIN_LENGTH} characters")
        if len(v) > TITLE_MAX_LENGTH:
            raise ValueError(f"Title must be less than {TITLE_MAX_LENGTH} characters")
        if not _TITLE_RE.match(v):
            raise ValueError("Title contains invalid characters")
        return v

    @field_validator("description")
    @classmethod
    def validate_description(cls, v: str) -> str:
        v = (v or "").strip()
        if len(v) < DESCRIPTION_MIN_LENGTH:
            raise ValueError(
                f"Description must be at least {DESCRIPTION_MIN_LENGTH} characters"
            )
        if len(v) > DESCRIPTION_MAX_LENGTH:
            raise ValueError(
                f"Description must be less than {DESCRIPTION_MAX_LENGTH} characters"
            )
        return v

    @field_validator("live_url")
    @classmethod
    def validate_live_url(cls, v: str) -> str:
        return _validate_http_url(v)

    @field_validator("source_url")
    @classmethod
    def validate_source_url(cls, v: str | None) -> str | None:
        if v is None or not v.strip():
            return None
        return _validate_http_url(v)

    @field_validator("image_url")
    @classmethod
    def validate_image_url(cls, v: str) -> str:
        v = _validate_http_url(v)
        path = urlparse(v).path
        if _IMAGE_EXT_RE.search(path) or any(host in v for host in IMAGE_HOSTS):
            return v
        raise ValueError(
            "Image URL must be a valid image file or from a supported image service"
        )

    @field_validator("tags")
    @classmethod
    def validate_tags(cls, v: list[str]) -> list[str]:
        tags = [t.strip() for t in v if t and t.strip()]
        if not tags:
            raise ValueError("Please add at least one tag")
        if len(tags) > MAX_TAGS:
            raise ValueError(f"Maximum {MAX_TAGS} tags allowed")
        for tag in tags:
            if len(tag) > TAG_MAX_LENGTH:
                raise ValueError(f"Tags must be at most {TAG_MAX_LENGTH} characters")
        if len({t.lower() for t in tags}) != len(tags):
            raise ValueError("Duplicate tags are not allowed")
        return tags


class WebsiteFilters(BaseModel):
    """Listing filters. status is always applied; the rest only when set."""

    search: str | None = None
    category: str | None = None
    is_popular: bool | None = None
    status: WebsiteStatus = WebsiteStatus.APPROVED
    sort_by: SortOption = SortOption.NEWEST
    limit: int = Field(default=12, ge=1, le=MAX_PAGE_SIZE)
    offset: int = Field(default=0, ge=0)

    @field_validator("search")
    @classmethod
    def normalize_search(cls, v: str | None) -> str | None:
        if v is None or not v.strip():
            return None
        return v.strip()

    @field_validator("category")
    @classmethod
    def validate_category(cls, v: str | None) -> str | None:
        if v is None or not v.strip() or v.strip() == ALL_CATEGORIES:
            return None
        v = v.strip()
        if v not in {c.value for c in WebsiteCategory}:
            raise ValueError(f"Unknown category {v!r}")
        return v


class UserSummary(BaseModel):
    """Public identity of a submitter, reviewer or commenter."""

    model_config = {"from_attributes": True}

    id: int
    name: str
    email: str | None = None
    image: str | None = None


class WebsiteWithDetails(BaseModel):
    """A website row enriched with people and counts."""

    model_config = {"from_attributes": True}

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
    like_count: int = 0
    comment_count: int = 0
    liked: bool = Field(default=False, description="Whether the viewing user liked it")
    created_at: datetime
    updated_at: datetime
    published_at: datetime | None
    submitted_by: UserSummary
    reviewed_by: UserSummary | None = None


class WebsiteListResult(PageInfo):
    """One page of websites plus pagination numbers."""

    websites: list[WebsiteWithDetails]


class WebsiteCreated(BaseModel):
    """Minimal view of a freshly created submission."""

    model_config = {"from_attributes": True}

    id: int
    title: str
    status: str
    created_at: datetime


class LikeToggleResult(BaseModel):
    """State of the (website, user) like after a toggle."""

    website_id: int
    liked: bool


class ViewCountResult(BaseModel):
    website_id: int
    view_count: int


class StatusUpdateRequest(BaseModel):
    status: ReviewDecision


class PopularUpdateRequest(BaseModel):
    is_popular: bool


class WebsiteStatusResult(BaseModel):
    """Moderation fields after a status or popularity change."""

    model_config = {"from_attributes": True}

    id: int
    status: str
    is_popular: bool
    reviewed_by: int | None
    published_at: datetime | None
    updated_at: datetime


class CommentCreate(BaseModel):
    content: str = Field(..., min_length=1, max_length=COMMENT_MAX_LENGTH)

    @field_validator("content")
    @classmethod
    def strip_content(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Comment cannot be empty")
        return v


class CommentOut(BaseModel):
    model_config = {"from_attributes": True}

    id: int
    website_id: int
    content: str
    created_at: datetime
    updated_at: datetime
    user: UserSummary
