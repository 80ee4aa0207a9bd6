"""Integration test for the demo dataset loader."""

import unittest

from support import TEST_BCRYPT_ROUNDS, make_session_factory

from showcase.core.security import verify_password
from showcase.models import WebsiteComment, WebsiteLike
from showcase.schemas.website import WebsiteFilters
from showcase.scripts.seed import seed_database
from showcase.services.users import get_user_by_email, get_user_stats
from showcase.services.websites import list_websites


class TestSeedDatabase(unittest.TestCase):
    def setUp(self) -> None:
        self.db = make_session_factory()()

    def tearDown(self) -> None:
        self.db.close()

    def test_demo_dataset(self) -> None:
        counts = seed_database(self.db, rounds=TEST_BCRYPT_ROUNDS)
        self.assertEqual(counts, {"users": 6, "websites": 7, "likes": 11, "comments": 5})

        stats = get_user_stats(self.db)
        self.assertEqual((stats.by_role["admin"], stats.by_role["moderator"]), (1, 1))
        admin = get_user_by_email(self.db, "admin@builtwithcn.com")
        self.assertTrue(verify_password("admin123", admin.password_hash))

        approved = list_websites(self.db, WebsiteFilters(sort_by="views"))
        self.assertEqual(approved.total, 5)
        self.assertEqual(approved.websites[0].title, "SaaS Landing Page Pro")
        self.assertEqual(approved.websites[0].like_count, 3)

    def test_reseeding_replaces_data(self) -> None:
        seed_database(self.db, rounds=TEST_BCRYPT_ROUNDS)
        seed_database(self.db, rounds=TEST_BCRYPT_ROUNDS)
        self.assertEqual(self.db.query(WebsiteLike).count(), 11)
        self.assertEqual(self.db.query(WebsiteComment).count(), 5)
