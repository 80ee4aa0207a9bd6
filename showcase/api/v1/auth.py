"""Email/password sign-in, sign-up and the session dependencies (current user, role gates)."""

import logging
from collections.abc import Callable
from typing import Annotated

import jwt
from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from showcase.core.config import get_settings
from showcase.core.constants import UserRole
from showcase.core.database import get_db
from showcase.core.permissions import has_permission
from showcase.core.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)
from showcase.models.user import User
from showcase.schemas.auth import (
    CurrentUser,
    LoginRequest,
    RegisterRequest,
    TokenResponse,
)
from showcase.schemas.common import ActionResponse
from showcase.services.users import create_or_update_user, get_user_by_email

logger = logging.getLogger(__name__)
router = APIRouter()
security = HTTPBearer(auto_error=False)

INVALID_CREDENTIALS = "Invalid email or password."


def set_session_cookie(response: Response, token: str) -> None:
    """Store the session token in an HTTP-only cookie for page requests."""
    settings = get_settings()
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=token,
        max_age=settings.JWT_EXPIRE_MINUTES * 60,
        httponly=True,
        secure=settings.SESSION_COOKIE_SECURE,
        samesite="lax",
    )


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(key=get_settings().SESSION_COOKIE_NAME)


def authenticate(db: Session, email: str, password: str) -> User | None:
    """Return the user for valid credentials, else None."""
    user = get_user_by_email(db, email)
    if user is None or not verify_password(password, user.password_hash):
        return None
    return user


def issue_token(user: User) -> str:
    return create_access_token(sub=user.id, role=user.role)


@router.post("", response_model=TokenResponse)
def login(
    body: LoginRequest,
    response: Response,
    db: Annotated[Session, Depends(get_db)],
) -> TokenResponse:
    """
    Authenticate with email and password; returns a JWT access token.
    Include the token in the Authorization header as: Bearer <access_token>.
    The same token is set as the session cookie.
    """
    user = authenticate(db, body.email, body.password)
    if user is None:
        logger.info("Failed login attempt")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=INVALID_CREDENTIALS,
        )
    token = issue_token(user)
    set_session_cookie(response, token)
    return TokenResponse(access_token=token, token_type="bearer")


@router.post("/register", response_model=TokenResponse, status_code=201)
def register(
    body: RegisterRequest,
    response: Response,
    db: Annotated[Session, Depends(get_db)],
) -> TokenResponse:
    """Create an account with the 'user' role and sign it in."""
    if get_user_by_email(db, body.email) is not None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="An account with this email already exists.",
        )
    user, _ = create_or_update_user(
        db,
        name=body.name.strip(),
        email=body.email,
        image=body.image,
        password_hash=hash_password(body.password),
    )
    token = issue_token(user)
    set_session_cookie(response, token)
    return TokenResponse(access_token=token, token_type="bearer")


@router.post("/logout", response_model=ActionResponse[None])
def logout(response: Response) -> ActionResponse[None]:
    clear_session_cookie(response)
    return ActionResponse[None](success=True)


def _token_from_request(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None,
) -> str | None:
    if credentials is not None and credentials.credentials:
        return credentials.credentials
    return request.cookies.get(get_settings().SESSION_COOKIE_NAME) or None


def resolve_user(db: Session, token: str | None) -> CurrentUser | None:
    """Map a session token to the user it belongs to; None for any invalid token."""
    if not token:
        return None
    try:
        payload = decode_access_token(token)
    except jwt.PyJWTError:
        return None
    try:
        user_id = int(payload.get("sub"))
    except (TypeError, ValueError):
        return None
    user = db.query(User).filter(User.id == user_id).first()
    if user is None:
        return None
    # Role comes from the database so promotions and demotions apply immediately.
    return CurrentUser.model_validate(user)


def get_current_user_optional(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[Session, Depends(get_db)],
) -> CurrentUser | None:
    """Dependency: the signed-in user, or None for anonymous visitors."""
    return resolve_user(db, _token_from_request(request, credentials))


def get_current_user(
    current_user: Annotated[CurrentUser | None, Depends(get_current_user_optional)],
) -> CurrentUser:
    """Dependency: require a valid session. Raises 401 if missing or invalid."""
    if current_user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return current_user


def require_role(required_role: UserRole) -> Callable[..., CurrentUser]:
    """Dependency factory: 401 without a session, 403 below required_role."""

    def dependency(
        current_user: Annotated[CurrentUser, Depends(get_current_user)],
    ) -> CurrentUser:
        if not has_permission(current_user.role, required_role):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Forbidden",
            )
        return current_user

    return dependency


require_moderator = require_role(UserRole.MODERATOR)
require_admin = require_role(UserRole.ADMIN)


@router.get("/me", response_model=CurrentUser)
def me(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> CurrentUser:
    return current_user
