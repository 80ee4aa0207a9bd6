"""Unit tests for WebsiteSubmission and WebsiteFilters validation."""

import unittest

from pydantic import ValidationError

from showcase.core.constants import SortOption, WebsiteStatus
from showcase.core.errors import field_errors
from showcase.schemas.website import MAX_TAGS, WebsiteFilters, WebsiteSubmission


def _submission(**overrides: object) -> dict:
    data = {
        "title": "Modern Dashboard",
        "description": "A dashboard built with Next.js and a component library.",
        "live_url": "https://dashboard.example.com",
        "source_url": "https://github.com/example/dashboard",
        "image_url": "https://example.com/shot.png",
        "category": "dashboard",
        "tags": ["react", "tailwind"],
    }
    data.update(overrides)
    return data


def _errors(**overrides: object) -> dict[str, str]:
    try:
        WebsiteSubmission(**_submission(**overrides))
    except ValidationError as e:
        return {d["field"]: d["message"] for d in field_errors(e.errors())}
    return {}


class TestWebsiteSubmission(unittest.TestCase):
    def test_valid_submission(self) -> None:
        s = WebsiteSubmission(**_submission(title="  Modern Dashboard  "))
        self.assertEqual(s.title, "Modern Dashboard")
        self.assertEqual(s.tags, ["react", "tailwind"])

    def test_title_too_short(self) -> None:
        self.assertEqual(_errors(title="ab"), {"title": "Title must be at least 3 characters"})

    def test_title_invalid_characters(self) -> None:
        self.assertIn("title", _errors(title="Hello <script>"))

    def test_title_allowed_punctuation(self) -> None:
        self.assertEqual(_errors(title="Shop & Co. (v2) - beta_1"), {})

    def test_description_length(self) -> None:
        self.assertIn("description", _errors(description="too short"))
        self.assertIn("description", _errors(description="x" * 501))

    def test_live_url_requires_http(self) -> None:
        self.assertIn("live_url", _errors(live_url="ftp://example.com"))
        self.assertIn("live_url", _errors(live_url="example.com"))

    def test_blank_source_url_becomes_none(self) -> None:
        self.assertIsNone(WebsiteSubmission(**_submission(source_url="  ")).source_url)

    def test_image_url_extension_or_known_host(self) -> None:
        self.assertEqual(_errors(image_url="https://images.unsplash.com/photo-1?w=800"), {})
        self.assertEqual(_errors(image_url="https://i.imgur.com/abc"), {})
        self.assertEqual(_errors(image_url="https://example.com/a.WEBP"), {})
        self.assertIn("image_url", _errors(image_url="https://example.com/page"))

    def test_unknown_category(self) -> None:
        self.assertIn("category", _errors(category="gaming"))

    def test_tags_required(self) -> None:
        self.assertEqual(_errors(tags=[]), {"tags": "Please add at least one tag"})
        self.assertEqual(_errors(tags=["  "]), {"tags": "Please add at least one tag"})

    def test_too_many_tags(self) -> None:
        tags = [f"tag{i}" for i in range(MAX_TAGS + 1)]
        self.assertIn("tags", _errors(tags=tags))

    def test_tag_too_long(self) -> None:
        self.assertIn("tags", _errors(tags=["x" * 21]))

    def test_duplicate_tags_case_insensitive(self) -> None:
        self.assertEqual(_errors(tags=["React", "react"]), {"tags": "Duplicate tags are not allowed"})


class TestWebsiteFilters(unittest.TestCase):
    def test_defaults(self) -> None:
        f = WebsiteFilters()
        self.assertEqual(f.status, WebsiteStatus.APPROVED)
        self.assertEqual(f.sort_by, SortOption.NEWEST)
        self.assertEqual((f.limit, f.offset), (12, 0))
        self.assertIsNone(f.category)

    def test_all_category_means_no_filter(self) -> None:
        self.assertIsNone(WebsiteFilters(category="all").category)

    def test_blank_search_is_none(self) -> None:
        self.assertIsNone(WebsiteFilters(search="   ").search)

    def test_unknown_category_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            WebsiteFilters(category="gaming")

    def test_limit_bounds(self) -> None:
        with self.assertRaises(ValidationError):
            WebsiteFilters(limit=0)
        with self.assertRaises(ValidationError):
            WebsiteFilters(limit=101)
