"""Server-rendered pages: gallery, submission form, sign-in, and the admin area."""

import logging
from pathlib import Path
from typing import Annotated
from urllib.parse import urlencode, urlsplit

from fastapi import APIRouter, Depends, Form, Query, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates
from pydantic import ValidationError
from sqlalchemy.orm import Session

from showcase.api.v1.auth import (
    authenticate,
    clear_session_cookie,
    get_current_user_optional,
    issue_token,
    set_session_cookie,
)
from showcase.core.config import get_settings
from showcase.core.constants import (
    ALL_CATEGORIES,
    CATEGORY_LABELS,
    ROLE_LABELS,
    SORT_LABELS,
    STATUS_LABELS,
    SortOption,
    UserRole,
    WebsiteCategory,
    WebsiteStatus,
    get_category_label,
    get_role_label,
    get_status_label,
)
from showcase.core.database import get_db
from showcase.core.errors import field_errors
from showcase.core.permissions import can_manage_user, has_permission
from showcase.core.security import hash_password
from showcase.schemas.auth import CurrentUser, RegisterRequest
from showcase.schemas.website import WebsiteFilters, WebsiteSubmission
from showcase.services.admin import (
    get_dashboard_stats,
    get_recent_submissions,
    list_admin_websites,
)
from showcase.services.users import (
    UserManagementError,
    create_or_update_user,
    delete_user,
    get_user_by_email,
    get_user_by_id,
    get_user_stats,
    get_users,
    update_user_role,
)
from showcase.services.websites import (
    create_website,
    delete_website,
    list_websites,
    toggle_website_popular,
    update_website_status,
)

logger = logging.getLogger(__name__)
router = APIRouter(include_in_schema=False)

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent.parent / "templates"))
templates.env.globals.update(
    category_label=get_category_label,
    status_label=get_status_label,
    role_label=get_role_label,
    CATEGORY_LABELS=CATEGORY_LABELS,
    STATUS_LABELS=STATUS_LABELS,
    ROLE_LABELS=ROLE_LABELS,
    SORT_LABELS=SORT_LABELS,
)

PageUser = Annotated[CurrentUser | None, Depends(get_current_user_optional)]
DB = Annotated[Session, Depends(get_db)]


class PageRedirect(Exception):
    """Raised by page gates; turned into a 303 redirect by the app."""

    def __init__(self, location: str) -> None:
        self.location = location
        super().__init__(location)


async def page_redirect_handler(request: Request, exc: PageRedirect) -> RedirectResponse:
    return RedirectResponse(exc.location, status_code=status.HTTP_303_SEE_OTHER)


def safe_next(target: str | None, default: str = "/") -> str:
    """Only same-site absolute paths are followed after sign-in or a form post."""
    if not target or not target.startswith("/") or target.startswith("//"):
        return default
    # Browsers treat backslashes as slashes and drop tabs and newlines.
    if "\\" in target or any(ord(ch) < 0x20 for ch in target):
        return default
    parts = urlsplit(target)
    if parts.scheme or parts.netloc:
        return default
    return target


def _login_url(request: Request) -> str:
    path = request.url.path
    if request.url.query:
        path = f"{path}?{request.url.query}"
    return "/login?" + urlencode({"next": path})


def require_page_role(required_role: UserRole):
    """Page gate: /login without a session, / below required_role."""

    def dependency(request: Request, current_user: PageUser) -> CurrentUser:
        if current_user is None:
            raise PageRedirect(_login_url(request))
        if not has_permission(current_user.role, required_role):
            logger.info(
                "Page access denied",
                extra={"path": request.url.path, "user_id": current_user.id},
            )
            raise PageRedirect("/")
        return current_user

    return dependency


def require_page_user(request: Request, current_user: PageUser) -> CurrentUser:
    if current_user is None:
        raise PageRedirect(_login_url(request))
    return current_user


PageModerator = Annotated[CurrentUser, Depends(require_page_role(UserRole.MODERATOR))]
PageAdmin = Annotated[CurrentUser, Depends(require_page_role(UserRole.ADMIN))]


def render(
    request: Request,
    name: str,
    current_user: CurrentUser | None,
    status_code: int = 200,
    **context,
) -> HTMLResponse:
    """Render a template with the viewer and a has_role helper bound to them."""

    def has_role(required_role: str) -> bool:
        return current_user is not None and has_permission(current_user.role, required_role)

    return templates.TemplateResponse(
        request,
        name,
        {"current_user": current_user, "has_role": has_role, **context},
        status_code=status_code,
    )


def _redirect(location: str) -> RedirectResponse:
    return RedirectResponse(location, status_code=status.HTTP_303_SEE_OTHER)


def _with_notice(location: str, notice: str) -> str:
    sep = "&" if "?" in location else "?"
    return f"{location}{sep}{urlencode({'notice': notice})}"


def _split_tags(raw: str) -> list[str]:
    return [t.strip() for t in (raw or "").split(",") if t.strip()]


@router.get("/", response_class=HTMLResponse)
def index(
    request: Request,
    db: DB,
    current_user: PageUser,
    search: str | None = None,
    category: str = ALL_CATEGORIES,
    sort_by: str = SortOption.NEWEST.value,
    popular: bool = False,
    page: int = 1,
) -> HTMLResponse:
    """Gallery of approved websites with search, category filter and sort."""
    page_size = get_settings().PAGE_SIZE
    page = max(page, 1)
    try:
        filters = WebsiteFilters(
            search=search,
            category=category,
            is_popular=True if popular else None,
            sort_by=sort_by,
            limit=page_size,
            offset=(page - 1) * page_size,
        )
    except ValidationError:
        filters = WebsiteFilters(limit=page_size)
    result = list_websites(db, filters, viewer_id=current_user.id if current_user else None)
    return render(
        request,
        "index.html",
        current_user,
        result=result,
        filters=filters,
        search=filters.search or "",
        category=filters.category or ALL_CATEGORIES,
        popular=popular,
        categories=list(WebsiteCategory),
        sort_options=list(SortOption),
        notice=request.query_params.get("notice"),
    )


@router.get("/submit", response_class=HTMLResponse)
def submit_form(
    request: Request,
    current_user: Annotated[CurrentUser, Depends(require_page_user)],
) -> HTMLResponse:
    return render(
        request,
        "submit.html",
        current_user,
        form={},
        errors={},
        categories=list(WebsiteCategory),
    )


@router.post("/submit", response_class=HTMLResponse)
def submit_website(
    request: Request,
    db: DB,
    current_user: Annotated[CurrentUser, Depends(require_page_user)],
    title: Annotated[str, Form()] = "",
    description: Annotated[str, Form()] = "",
    live_url: Annotated[str, Form()] = "",
    source_url: Annotated[str, Form()] = "",
    image_url: Annotated[str, Form()] = "",
    category: Annotated[str, Form()] = "",
    tags: Annotated[str, Form()] = "",
):
    form = {
        "title": title,
        "description": description,
        "live_url": live_url,
        "source_url": source_url,
        "image_url": image_url,
        "category": category,
        "tags": tags,
    }
    try:
        submission = WebsiteSubmission(
            title=title,
            description=description,
            live_url=live_url,
            source_url=source_url or None,
            image_url=image_url,
            category=category,
            tags=_split_tags(tags),
        )
    except ValidationError as e:
        errors = {d["field"]: d["message"] for d in field_errors(e.errors())}
        return render(
            request,
            "submit.html",
            current_user,
            status_code=422,
            form=form,
            errors=errors,
            categories=list(WebsiteCategory),
        )
    create_website(db, submission, submitter_id=current_user.id)
    return _redirect(_with_notice("/", "Thanks! Your website was submitted for review."))


@router.get("/login", response_class=HTMLResponse)
def login_form(request: Request, current_user: PageUser, next: str | None = None):
    if current_user is not None:
        return _redirect(safe_next(next))
    return render(request, "login.html", None, next=safe_next(next), error=None, errors={})


@router.post("/login", response_class=HTMLResponse)
def login(
    request: Request,
    db: DB,
    email: Annotated[str, Form()] = "",
    password: Annotated[str, Form()] = "",
    next: Annotated[str, Form()] = "/",
):
    user = authenticate(db, email, password) if email and password else None
    if user is None:
        logger.info("Failed page login attempt")
        return render(
            request,
            "login.html",
            None,
            status_code=401,
            next=safe_next(next),
            error="Invalid email or password.",
            errors={},
            email=email,
        )
    response = _redirect(safe_next(next))
    set_session_cookie(response, issue_token(user))
    return response


@router.post("/register", response_class=HTMLResponse)
def register(
    request: Request,
    db: DB,
    name: Annotated[str, Form()] = "",
    email: Annotated[str, Form()] = "",
    password: Annotated[str, Form()] = "",
    next: Annotated[str, Form()] = "/",
):
    def fail(errors: dict[str, str], error: str | None = None) -> HTMLResponse:
        return render(
            request,
            "login.html",
            None,
            status_code=422,
            next=safe_next(next),
            error=error,
            errors=errors,
            register_name=name,
            register_email=email,
        )

    try:
        body = RegisterRequest(name=name.strip(), email=email, password=password)
    except ValidationError as e:
        return fail({d["field"]: d["message"] for d in field_errors(e.errors())})
    if get_user_by_email(db, body.email) is not None:
        return fail({}, "An account with this email already exists.")
    user, _ = create_or_update_user(
        db,
        name=body.name,
        email=body.email,
        password_hash=hash_password(body.password),
    )
    response = _redirect(safe_next(next))
    set_session_cookie(response, issue_token(user))
    return response


@router.get("/logout")
def logout() -> RedirectResponse:
    response = _redirect("/")
    clear_session_cookie(response)
    return response


@router.get("/admin", response_class=HTMLResponse)
def admin_dashboard(request: Request, db: DB, current_user: PageModerator) -> HTMLResponse:
    """Dashboard; the user breakdown is only rendered for admins."""
    user_stats = get_user_stats(db) if has_permission(current_user.role, UserRole.ADMIN) else None
    return render(
        request,
        "admin/dashboard.html",
        current_user,
        stats=get_dashboard_stats(db),
        recent=get_recent_submissions(db),
        user_stats=user_stats,
    )


@router.get("/admin/websites", response_class=HTMLResponse)
def admin_websites(
    request: Request,
    db: DB,
    current_user: PageModerator,
    search: str | None = None,
    status_filter: Annotated[str | None, Query(alias="status")] = None,
    category: str | None = None,
    page: int = 1,
) -> HTMLResponse:
    status_value = status_filter or None
    if status_value not in {s.value for s in WebsiteStatus}:
        status_value = None
    if category not in {c.value for c in WebsiteCategory}:
        category = None
    result = list_admin_websites(
        db,
        search=search,
        status=status_value,
        category=category,
        page=page,
        limit=get_settings().ADMIN_PAGE_SIZE,
    )
    return render(
        request,
        "admin/websites.html",
        current_user,
        result=result,
        search=search or "",
        status=status_value or "",
        category=category or ALL_CATEGORIES,
        statuses=list(WebsiteStatus),
        categories=list(WebsiteCategory),
        back=str(request.url.path) + (f"?{request.url.query}" if request.url.query else ""),
        notice=request.query_params.get("notice"),
    )


@router.post("/admin/websites/{website_id}/status")
def admin_set_status(
    website_id: int,
    db: DB,
    current_user: PageModerator,
    status_value: Annotated[str, Form(alias="status")],
    next: Annotated[str, Form()] = "/admin/websites",
) -> RedirectResponse:
    back = safe_next(next, "/admin/websites")
    if status_value not in (WebsiteStatus.APPROVED, WebsiteStatus.REJECTED):
        return _redirect(_with_notice(back, "Status can only be approved or rejected."))
    website = update_website_status(db, website_id, status_value, reviewer_id=current_user.id)
    if website is None:
        return _redirect(_with_notice(back, "Website not found."))
    return _redirect(_with_notice(back, f"Website {get_status_label(website.status).lower()}."))


@router.post("/admin/websites/{website_id}/popular")
def admin_set_popular(
    website_id: int,
    db: DB,
    _user: PageModerator,
    is_popular: Annotated[bool, Form()] = False,
    next: Annotated[str, Form()] = "/admin/websites",
) -> RedirectResponse:
    back = safe_next(next, "/admin/websites")
    if toggle_website_popular(db, website_id, is_popular) is None:
        return _redirect(_with_notice(back, "Website not found."))
    return _redirect(back)


@router.post("/admin/websites/{website_id}/delete")
def admin_delete_website(
    website_id: int,
    db: DB,
    _user: PageModerator,
    next: Annotated[str, Form()] = "/admin/websites",
) -> RedirectResponse:
    back = safe_next(next, "/admin/websites")
    notice = "Website deleted." if delete_website(db, website_id) else "Website not found."
    return _redirect(_with_notice(back, notice))


@router.get("/admin/users", response_class=HTMLResponse)
def admin_users(
    request: Request,
    db: DB,
    current_user: PageAdmin,
    search: str | None = None,
    role: str | None = None,
    page: int = 1,
) -> HTMLResponse:
    if role not in {r.value for r in UserRole}:
        role = None
    result = get_users(
        db,
        page=page,
        limit=get_settings().ADMIN_PAGE_SIZE,
        search=search,
        role=role,
    )
    return render(
        request,
        "admin/users.html",
        current_user,
        result=result,
        user_stats=get_user_stats(db),
        search=search or "",
        role=role or "",
        roles=list(UserRole),
        back=str(request.url.path) + (f"?{request.url.query}" if request.url.query else ""),
        notice=request.query_params.get("notice"),
    )


def _manageable(db: Session, actor: CurrentUser, user_id: int) -> bool:
    target = get_user_by_id(db, user_id)
    return target is not None and can_manage_user(actor.role, target.role)


@router.post("/admin/users/{user_id}/role")
def admin_set_role(
    user_id: int,
    db: DB,
    current_user: PageAdmin,
    role: Annotated[str, Form()],
    next: Annotated[str, Form()] = "/admin/users",
) -> RedirectResponse:
    back = safe_next(next, "/admin/users")
    if role not in {r.value for r in UserRole}:
        return _redirect(_with_notice(back, "Unknown role."))
    if not _manageable(db, current_user, user_id):
        return _redirect(_with_notice(back, "User not found."))
    try:
        update_user_role(db, user_id, role, acting_user_id=current_user.id)
    except UserManagementError as e:
        return _redirect(_with_notice(back, e.message))
    return _redirect(_with_notice(back, "Role updated."))


@router.post("/admin/users/{user_id}/delete")
def admin_delete_user(
    user_id: int,
    db: DB,
    current_user: PageAdmin,
    next: Annotated[str, Form()] = "/admin/users",
) -> RedirectResponse:
    back = safe_next(next, "/admin/users")
    if not _manageable(db, current_user, user_id):
        return _redirect(_with_notice(back, "User not found."))
    try:
        delete_user(db, user_id, acting_user_id=current_user.id)
    except UserManagementError as e:
        return _redirect(_with_notice(back, e.message))
    return _redirect(_with_notice(back, "User deleted."))
