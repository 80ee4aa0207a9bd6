"""Integration tests for showcase.services.websites listing against in-memory SQLite."""

import unittest

from support import make_session_factory, make_user, make_website

from showcase.core.constants import SortOption
from showcase.models import WebsiteComment, WebsiteLike
from showcase.schemas.website import WebsiteFilters
from showcase.services.websites import get_website, list_websites


class WebsiteQueryTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.db = make_session_factory()()
        self.john = make_user(self.db, "john@example.com", "John Doe")
        self.jane = make_user(self.db, "jane@example.com", "Jane Smith")

    def tearDown(self) -> None:
        self.db.close()

    def _ids(self, **filters: object) -> list[int]:
        result = list_websites(self.db, WebsiteFilters(**filters))
        return [w.id for w in result.websites]


class TestListFilters(WebsiteQueryTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.dashboard = make_website(
            self.db, self.john, title="Finance Dashboard", category="finance",
            tags=["charts", "dashboard"], is_popular=True, age_minutes=1,
        )
        self.portfolio = make_website(
            self.db, self.jane, title="Developer Portfolio", category="portfolio",
            description="Portfolio with 100% handmade animations and a blog.",
            tags=["Animations"], age_minutes=2,
        )
        self.pending = make_website(
            self.db, self.jane, title="Pending Dashboard", category="finance",
            status="pending", age_minutes=3,
        )
        self.rejected = make_website(
            self.db, self.john, title="Rejected Blog", category="blog",
            status="rejected", age_minutes=4,
        )

    def test_default_lists_only_approved(self) -> None:
        result = list_websites(self.db, WebsiteFilters())
        self.assertEqual([w.id for w in result.websites], [self.dashboard.id, self.portfolio.id])
        self.assertEqual(result.total, 2)
        for w in result.websites:
            self.assertEqual(w.status, "approved")

    def test_status_filter(self) -> None:
        self.assertEqual(self._ids(status="pending"), [self.pending.id])
        self.assertEqual(self._ids(status="rejected"), [self.rejected.id])

    def test_search_title_case_insensitive(self) -> None:
        self.assertEqual(self._ids(search="finance DASH"), [self.dashboard.id])

    def test_search_matches_description(self) -> None:
        self.assertEqual(self._ids(search="handmade"), [self.portfolio.id])

    def test_search_matches_whole_tag_ignoring_case(self) -> None:
        self.assertEqual(self._ids(search="animations"), [self.portfolio.id])
        # Tags match exactly, not by substring.
        self.assertEqual(self._ids(search="chart"), [])

    def test_search_escapes_like_wildcards(self) -> None:
        self.assertEqual(self._ids(search="100%"), [self.portfolio.id])
        self.assertEqual(self._ids(search="%"), [self.portfolio.id])
        self.assertEqual(self._ids(search="_"), [])

    def test_category_filter(self) -> None:
        self.assertEqual(self._ids(category="finance"), [self.dashboard.id])
        self.assertEqual(len(self._ids(category="all")), 2)

    def test_popular_filter(self) -> None:
        self.assertEqual(self._ids(is_popular=True), [self.dashboard.id])
        self.assertEqual(self._ids(is_popular=False), [self.portfolio.id])

    def test_every_returned_row_satisfies_filters(self) -> None:
        result = list_websites(
            self.db, WebsiteFilters(category="finance", status="approved", search="dashboard")
        )
        for w in result.websites:
            self.assertEqual(w.category, "finance")
            self.assertEqual(w.status, "approved")


class TestPaginationAndSort(WebsiteQueryTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.sites = [
            make_website(
                self.db, self.john, title=f"Site {i}", view_count=v,
                is_popular=(i == 3), age_minutes=10 - i,
            )
            for i, v in enumerate([5, 50, 20, 0, 50])
        ]

    def test_total_counts_unpaginated_set(self) -> None:
        result = list_websites(self.db, WebsiteFilters(limit=2, offset=2))
        self.assertEqual(result.total, 5)
        self.assertEqual(len(result.websites), 2)
        self.assertEqual(result.page, 2)
        self.assertEqual(result.total_pages, 3)

    def test_pages_cover_every_row_once(self) -> None:
        seen = []
        for offset in (0, 2, 4):
            seen.extend(self._ids(limit=2, offset=offset))
        self.assertEqual(sorted(seen), sorted(s.id for s in self.sites))

    def test_newest_and_oldest(self) -> None:
        newest = self._ids(sort_by=SortOption.NEWEST)
        self.assertEqual(newest, [s.id for s in reversed(self.sites)])
        self.assertEqual(self._ids(sort_by=SortOption.OLDEST), list(reversed(newest)))

    def test_views_ties_broken_by_id_desc(self) -> None:
        ids = self._ids(sort_by=SortOption.VIEWS)
        self.assertEqual(ids[:2], [self.sites[4].id, self.sites[1].id])
        self.assertEqual(ids[-1], self.sites[3].id)

    def test_popular_first_then_newest(self) -> None:
        ids = self._ids(sort_by=SortOption.POPULAR)
        self.assertEqual(ids[0], self.sites[3].id)
        self.assertEqual(ids[1:], [self.sites[4].id, self.sites[2].id, self.sites[1].id, self.sites[0].id])

    def test_likes_sort(self) -> None:
        self.db.add_all([
            WebsiteLike(website_id=self.sites[0].id, user_id=self.john.id),
            WebsiteLike(website_id=self.sites[0].id, user_id=self.jane.id),
            WebsiteLike(website_id=self.sites[2].id, user_id=self.jane.id),
        ])
        self.db.commit()
        ids = self._ids(sort_by=SortOption.LIKES)
        self.assertEqual(ids[:2], [self.sites[0].id, self.sites[2].id])


class TestEnrichment(WebsiteQueryTestCase):
    def test_counts_liked_and_people(self) -> None:
        site = make_website(self.db, self.john, tags=["react", "nextjs"])
        self.db.add_all([
            WebsiteLike(website_id=site.id, user_id=self.john.id),
            WebsiteLike(website_id=site.id, user_id=self.jane.id),
            WebsiteComment(website_id=site.id, user_id=self.jane.id, content="Nice"),
        ])
        self.db.commit()

        anonymous = list_websites(self.db, WebsiteFilters()).websites[0]
        self.assertEqual(anonymous.like_count, 2)
        self.assertEqual(anonymous.comment_count, 1)
        self.assertFalse(anonymous.liked)
        self.assertEqual(anonymous.tags, ["react", "nextjs"])
        self.assertEqual(anonymous.submitted_by.name, "John Doe")
        self.assertIsNone(anonymous.reviewed_by)

        viewed = list_websites(self.db, WebsiteFilters(), viewer_id=self.jane.id).websites[0]
        self.assertTrue(viewed.liked)

    def test_get_website_any_status_or_none(self) -> None:
        site = make_website(self.db, self.john, status="pending")
        found = get_website(self.db, site.id)
        self.assertIsNotNone(found)
        self.assertEqual(found.status, "pending")
        self.assertIsNone(get_website(self.db, 9999))

    def test_empty_listing(self) -> None:
        result = list_websites(self.db, WebsiteFilters())
        self.assertEqual(result.websites, [])
        self.assertEqual(result.total, 0)
        self.assertEqual(result.total_pages, 0)
