"""Role hierarchy checks shared by the API dependencies, page gates and templates."""

from showcase.core.constants import UserRole

# Higher level subsumes every lower one.
ROLE_LEVELS: dict[UserRole, int] = {
    UserRole.USER: 1,
    UserRole.MODERATOR: 2,
    UserRole.ADMIN: 3,
}

if set(ROLE_LEVELS) != set(UserRole):
    raise RuntimeError("ROLE_LEVELS must assign a level to every UserRole")


def role_level(role: str | None) -> int:
    """Level of a role; 0 for a missing or unknown role (fails every check)."""
    if not role:
        return 0
    try:
        return ROLE_LEVELS[UserRole(role)]
    except ValueError:
        return 0


def has_permission(user_role: str | None, required_role: str) -> bool:
    """True if user_role is at or above required_role in the hierarchy."""
    return role_level(user_role) >= ROLE_LEVELS[UserRole(required_role)]


def can_manage_user(current_user_role: str | None, target_user_role: str) -> bool:
    """Admins manage everyone; moderators manage regular users only; users manage nobody."""
    if current_user_role == UserRole.ADMIN:
        return True
    if current_user_role == UserRole.MODERATOR and target_user_role == UserRole.USER:
        return True
    return False
