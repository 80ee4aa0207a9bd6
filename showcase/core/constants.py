"""Closed value domains (categories, statuses, roles, sort keys) and their display labels."""

from enum import StrEnum


class WebsiteCategory(StrEnum):
    ECOMMERCE = "e-commerce"
    PORTFOLIO = "portfolio"
    BLOG = "blog"
    LANDING_PAGE = "landing-page"
    DASHBOARD = "dashboard"
    SAAS = "saas"
    MARKETING = "marketing"
    EDUCATION = "education"
    FINANCE = "finance"
    HEALTHCARE = "healthcare"
    ENTERTAINMENT = "entertainment"
    SOCIAL = "social"
    PRODUCTIVITY = "productivity"
    OTHER = "other"


class WebsiteStatus(StrEnum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class UserRole(StrEnum):
    USER = "user"
    MODERATOR = "moderator"
    ADMIN = "admin"


class SortOption(StrEnum):
    NEWEST = "newest"
    OLDEST = "oldest"
    POPULAR = "popular"
    VIEWS = "views"
    LIKES = "likes"


# Category value accepted by the listing filters meaning "no category filter".
ALL_CATEGORIES = "all"

CATEGORY_LABELS: dict[WebsiteCategory, str] = {
    WebsiteCategory.ECOMMERCE: "E-commerce",
    WebsiteCategory.PORTFOLIO: "Portfolio",
    WebsiteCategory.BLOG: "Blog",
    WebsiteCategory.LANDING_PAGE: "Landing Page",
    WebsiteCategory.DASHBOARD: "Dashboard",
    WebsiteCategory.SAAS: "SaaS",
    WebsiteCategory.MARKETING: "Marketing",
    WebsiteCategory.EDUCATION: "Education",
    WebsiteCategory.FINANCE: "Finance",
    WebsiteCategory.HEALTHCARE: "Healthcare",
    WebsiteCategory.ENTERTAINMENT: "Entertainment",
    WebsiteCategory.SOCIAL: "Social",
    WebsiteCategory.PRODUCTIVITY: "Productivity",
    WebsiteCategory.OTHER: "Other",
}

STATUS_LABELS: dict[WebsiteStatus, str] = {
    WebsiteStatus.PENDING: "Pending Review",
    WebsiteStatus.APPROVED: "Approved",
    WebsiteStatus.REJECTED: "Rejected",
}

ROLE_LABELS: dict[UserRole, str] = {
    UserRole.USER: "User",
    UserRole.MODERATOR: "Moderator",
    UserRole.ADMIN: "Admin",
}

SORT_LABELS: dict[SortOption, str] = {
    SortOption.NEWEST: "Newest",
    SortOption.OLDEST: "Oldest",
    SortOption.POPULAR: "Most Popular",
    SortOption.VIEWS: "Most Viewed",
    SortOption.LIKES: "Most Liked",
}

# Every enum member must have a label; fail at import rather than at render time.
for _enum, _labels in (
    (WebsiteCategory, CATEGORY_LABELS),
    (WebsiteStatus, STATUS_LABELS),
    (UserRole, ROLE_LABELS),
    (SortOption, SORT_LABELS),
):
    if set(_labels) != set(_enum):
        raise RuntimeError(f"Label table for {_enum.__name__} is not exhaustive")


def _label(labels: dict, value: str) -> str:
    for member, label in labels.items():
        if member.value == value:
            return label
    return value


def get_category_label(value: str) -> str:
    """Display label for a category value; unknown values are returned as-is."""
    return _label(CATEGORY_LABELS, value)


def get_status_label(value: str) -> str:
    """Display label for a status value; unknown values are returned as-is."""
    return _label(STATUS_LABELS, value)


def get_role_label(value: str) -> str:
    """Display label for a role value; unknown values are returned as-is."""
    return _label(ROLE_LABELS, value)
