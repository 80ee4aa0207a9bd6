"""Unit tests for showcase.core.permissions: role hierarchy and user management rules."""

import unittest

from showcase.core.constants import UserRole
from showcase.core.permissions import (
    ROLE_LEVELS,
    can_manage_user,
    has_permission,
    role_level,
)


class TestHasPermission(unittest.TestCase):
    """A role passes every gate at or below its level and none above."""

    def test_hierarchy_is_monotonic(self) -> None:
        for role in UserRole:
            for required in UserRole:
                expected = ROLE_LEVELS[role] >= ROLE_LEVELS[required]
                with self.subTest(role=role, required=required):
                    self.assertEqual(has_permission(role, required), expected)

    def test_admin_passes_moderator_gate(self) -> None:
        self.assertTrue(has_permission("admin", "moderator"))

    def test_user_fails_moderator_gate(self) -> None:
        self.assertFalse(has_permission("user", "moderator"))

    def test_missing_role_fails_every_gate(self) -> None:
        for required in UserRole:
            self.assertFalse(has_permission(None, required))
            self.assertFalse(has_permission("", required))

    def test_unknown_role_fails_every_gate(self) -> None:
        self.assertEqual(role_level("superuser"), 0)
        self.assertFalse(has_permission("superuser", "user"))


class TestCanManageUser(unittest.TestCase):
    def test_admin_manages_everyone(self) -> None:
        for target in UserRole:
            self.assertTrue(can_manage_user("admin", target))

    def test_moderator_manages_only_users(self) -> None:
        self.assertTrue(can_manage_user("moderator", "user"))
        self.assertFalse(can_manage_user("moderator", "moderator"))
        self.assertFalse(can_manage_user("moderator", "admin"))

    def test_user_manages_nobody(self) -> None:
        for target in UserRole:
            self.assertFalse(can_manage_user("user", target))
        self.assertFalse(can_manage_user(None, "user"))
