"""User queries and mutations: pagination, roles, registration upsert, statistics, deletion."""

import logging
from datetime import UTC, datetime

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from showcase.core.constants import UserRole
from showcase.models import User
from showcase.schemas.auth import UserListItem, UsersListResponse, UserStats
from showcase.schemas.common import page_info

logger = logging.getLogger(__name__)


class UserManagementError(Exception):
    """Raised when an admin action on a user is not allowed (e.g. demoting yourself)."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


def get_users(
    db: Session,
    page: int = 1,
    limit: int = 10,
    search: str | None = None,
    role: str | None = None,
) -> UsersListResponse:
    """Users newest first; search matches name or email (case-insensitive substring)."""
    page = max(page, 1)
    offset = (page - 1) * limit
    conditions = []
    if search and search.strip():
        term = search.strip()
        conditions.append(
            or_(
                User.name.icontains(term, autoescape=True),
                User.email.icontains(term, autoescape=True),
            )
        )
    if role:
        conditions.append(User.role == UserRole(role).value)

    users = (
        db.query(User)
        .filter(*conditions)
        .order_by(User.created_at.desc(), User.id.desc())
        .offset(offset)
        .limit(limit)
        .all()
    )
    total = db.query(func.count(User.id)).filter(*conditions).scalar() or 0
    info = page_info(total, limit, offset)
    return UsersListResponse(
        users=[UserListItem.model_validate(u) for u in users],
        **info.model_dump(),
    )


def get_user_by_id(db: Session, user_id: int) -> User | None:
    return db.query(User).filter(User.id == user_id).first()


def get_user_by_email(db: Session, email: str) -> User | None:
    return db.query(User).filter(func.lower(User.email) == email.strip().lower()).first()


def get_users_by_role(db: Session, role: str) -> list[User]:
    return (
        db.query(User)
        .filter(User.role == UserRole(role).value)
        .order_by(User.created_at.desc(), User.id.desc())
        .all()
    )


def create_or_update_user(
    db: Session,
    *,
    name: str,
    email: str,
    image: str | None = None,
    email_verified: bool = False,
    password_hash: str | None = None,
) -> tuple[User, bool]:
    """
    Upsert the account for an authenticated identity, keyed by email.

    New accounts get the 'user' role. Existing accounts keep their role and
    verified flag (it never goes back to False). Returns (user, created).
    """
    user = get_user_by_email(db, email)
    now = datetime.now(UTC)
    if user is not None:
        user.name = name
        user.image = image or None
        user.email_verified = email_verified or user.email_verified
        if password_hash:
            user.password_hash = password_hash
        user.updated_at = now
        db.commit()
        db.refresh(user)
        return user, False

    user = User(
        name=name,
        email=email.strip().lower(),
        image=image or None,
        email_verified=email_verified,
        password_hash=password_hash,
        role=UserRole.USER.value,
        created_at=now,
        updated_at=now,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("User created", extra={"user_id": user.id})
    return user, True


def update_user_role(
    db: Session,
    user_id: int,
    new_role: str,
    acting_user_id: int | None = None,
) -> User | None:
    """Change a user's role. Admins cannot change their own role."""
    role = UserRole(new_role)
    user = get_user_by_id(db, user_id)
    if user is None:
        return None
    if acting_user_id is not None and user.id == acting_user_id:
        raise UserManagementError("You cannot change your own role.")
    user.role = role.value
    user.updated_at = datetime.now(UTC)
    db.commit()
    db.refresh(user)
    logger.info(
        "User role updated",
        extra={"user_id": user_id, "role": role.value, "acting_user_id": acting_user_id},
    )
    return user


def get_user_stats(db: Session) -> UserStats:
    """Total users and per-role counts; roles without users report zero."""
    rows = db.query(User.role, func.count(User.id)).group_by(User.role).all()
    by_role = {role: 0 for role in UserRole}
    for role, count in rows:
        try:
            by_role[UserRole(role)] = count
        except ValueError:
            logger.warning("User with unknown role", extra={"role": role})
    total = db.query(func.count(User.id)).scalar() or 0
    return UserStats(total=total, by_role=by_role)


def delete_user(
    db: Session,
    user_id: int,
    acting_user_id: int | None = None,
) -> bool:
    """
    Delete a user with their websites, likes and comments.

    Websites the user reviewed stay, with reviewed_by cleared. Admins cannot
    delete themselves. Returns False if the user did not exist.
    """
    user = get_user_by_id(db, user_id)
    if user is None:
        return False
    if acting_user_id is not None and user.id == acting_user_id:
        raise UserManagementError("You cannot delete yourself.")
    db.delete(user)
    db.commit()
    logger.info("User deleted", extra={"user_id": user_id, "acting_user_id": acting_user_id})
    return True
