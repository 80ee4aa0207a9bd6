"""Response envelope shared by mutating endpoints: {success, data?, error?, details?}."""

from typing import Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class FieldError(BaseModel):
    """One validation failure tied to an input field."""

    field: str = Field(..., description="Dotted path of the offending field")
    message: str = Field(..., description="Human-readable validation message")


class ActionResponse(BaseModel, Generic[T]):
    """Outcome of an action. data is null when the target does not exist."""

    success: bool = True
    data: T | None = None
    error: str | None = None
    details: list[FieldError] | None = None


class PageInfo(BaseModel):
    """Pagination numbers derived from total and limit."""

    total: int = Field(..., ge=0)
    page: int = Field(..., ge=1)
    limit: int = Field(..., ge=1)
    total_pages: int = Field(..., ge=0)


def page_info(total: int, limit: int, offset: int) -> PageInfo:
    """Build PageInfo; total_pages = ceil(total / limit), page is 1-based."""
    total_pages = -(-total // limit) if limit else 0
    return PageInfo(
        total=total,
        page=offset // limit + 1,
        limit=limit,
        total_pages=total_pages,
    )
