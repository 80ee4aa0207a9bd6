"""Unit tests for showcase.core.constants labels."""

import unittest

from showcase.core.constants import (
    CATEGORY_LABELS,
    WebsiteCategory,
    get_category_label,
    get_role_label,
    get_status_label,
)


class TestLabels(unittest.TestCase):
    def test_every_category_has_label(self) -> None:
        self.assertEqual(set(CATEGORY_LABELS), set(WebsiteCategory))
        self.assertEqual(len(WebsiteCategory), 14)

    def test_known_labels(self) -> None:
        self.assertEqual(get_category_label("e-commerce"), "E-commerce")
        self.assertEqual(get_category_label("saas"), "SaaS")
        self.assertEqual(get_status_label("pending"), "Pending Review")
        self.assertEqual(get_role_label("moderator"), "Moderator")

    def test_unknown_value_returned_as_is(self) -> None:
        self.assertEqual(get_category_label("gaming"), "gaming")
        self.assertEqual(get_status_label("archived"), "archived")
