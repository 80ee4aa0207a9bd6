"""Integration tests for website mutations: submission, moderation, likes, views, comments."""

import unittest

from support import make_session_factory, make_user, make_website

from showcase.models import Website, WebsiteComment, WebsiteLike, WebsiteTag
from showcase.schemas.website import WebsiteFilters, WebsiteSubmission
from showcase.services.websites import (
    add_website_comment,
    create_website,
    delete_website,
    increment_website_views,
    list_website_comments,
    list_websites,
    toggle_like,
    toggle_website_popular,
    update_website_status,
)


class MutationTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.db = make_session_factory()()
        self.john = make_user(self.db, "john@example.com", "John Doe")
        self.sarah = make_user(self.db, "sarah@example.com", "Sarah Johnson", role="moderator")

    def tearDown(self) -> None:
        self.db.close()


class TestCreateWebsite(MutationTestCase):
    def test_new_submission_is_pending_and_hidden(self) -> None:
        submission = WebsiteSubmission(
            title="Shop Front",
            description="An online store built with a component library.",
            live_url="https://shop.example.com",
            image_url="https://example.com/shop.png",
            category="e-commerce",
            tags=["store", "nextjs"],
        )
        website = create_website(self.db, submission, submitter_id=self.john.id)
        self.assertEqual(website.status, "pending")
        self.assertFalse(website.is_popular)
        self.assertEqual(website.view_count, 0)
        self.assertIsNone(website.published_at)
        self.assertEqual(list(website.tags), ["store", "nextjs"])
        self.assertEqual(list_websites(self.db, WebsiteFilters()).total, 0)

    def test_tags_keep_submission_order(self) -> None:
        submission = WebsiteSubmission(
            title="Docs Site",
            description="Documentation site built with a component library.",
            live_url="https://docs.example.com",
            image_url="https://example.com/docs.png",
            category="other",
            tags=["zeta", "alpha", "mid"],
        )
        website_id = create_website(self.db, submission, submitter_id=self.john.id).id
        self.db.expunge_all()

        reloaded = self.db.get(Website, website_id)
        self.assertEqual(list(reloaded.tags), ["zeta", "alpha", "mid"])
        self.assertEqual([t.position for t in reloaded.tag_rows], [0, 1, 2])


class TestStatusTransition(MutationTestCase):
    def test_approve_sets_published_at_and_reviewer(self) -> None:
        site = make_website(self.db, self.john, status="pending")
        self.assertEqual(list_websites(self.db, WebsiteFilters()).total, 0)

        updated = update_website_status(self.db, site.id, "approved", reviewer_id=self.sarah.id)
        self.assertEqual(updated.status, "approved")
        self.assertEqual(updated.reviewed_by, self.sarah.id)
        self.assertIsNotNone(updated.published_at)

        listed = list_websites(self.db, WebsiteFilters()).websites
        self.assertEqual([w.id for w in listed], [site.id])
        self.assertIsNotNone(listed[0].published_at)
        self.assertEqual(listed[0].reviewed_by.name, "Sarah Johnson")

    def test_reject_leaves_published_at_unset(self) -> None:
        site = make_website(self.db, self.john, status="pending")
        updated = update_website_status(self.db, site.id, "rejected", reviewer_id=self.sarah.id)
        self.assertEqual(updated.status, "rejected")
        self.assertIsNone(updated.published_at)

    def test_reject_after_approve_keeps_published_at(self) -> None:
        site = make_website(self.db, self.john, status="pending")
        approved = update_website_status(self.db, site.id, "approved", reviewer_id=self.sarah.id)
        published = approved.published_at
        rejected = update_website_status(self.db, site.id, "rejected", reviewer_id=self.sarah.id)
        self.assertEqual(rejected.published_at, published)

    def test_pending_is_not_a_valid_target(self) -> None:
        site = make_website(self.db, self.john, status="approved")
        with self.assertRaises(ValueError):
            update_website_status(self.db, site.id, "pending", reviewer_id=self.sarah.id)

    def test_missing_website(self) -> None:
        self.assertIsNone(update_website_status(self.db, 9999, "approved", reviewer_id=None))


class TestToggleLike(MutationTestCase):
    def _like_rows(self, website_id: int) -> int:
        return self.db.query(WebsiteLike).filter(WebsiteLike.website_id == website_id).count()

    def test_toggle_once_likes(self) -> None:
        site = make_website(self.db, self.john)
        result = toggle_like(self.db, site.id, self.sarah.id)
        self.assertTrue(result.liked)
        self.assertEqual(self._like_rows(site.id), 1)

    def test_toggle_twice_restores(self) -> None:
        site = make_website(self.db, self.john)
        toggle_like(self.db, site.id, self.sarah.id)
        result = toggle_like(self.db, site.id, self.sarah.id)
        self.assertFalse(result.liked)
        self.assertEqual(self._like_rows(site.id), 0)

    def test_likes_are_per_user(self) -> None:
        site = make_website(self.db, self.john)
        toggle_like(self.db, site.id, self.sarah.id)
        toggle_like(self.db, site.id, self.john.id)
        self.assertEqual(self._like_rows(site.id), 2)
        detail = list_websites(self.db, WebsiteFilters(), viewer_id=self.john.id).websites[0]
        self.assertEqual(detail.like_count, 2)
        self.assertTrue(detail.liked)

    def test_missing_website(self) -> None:
        self.assertIsNone(toggle_like(self.db, 9999, self.sarah.id))


class TestViewsPopularDelete(MutationTestCase):
    def test_increment_views(self) -> None:
        site = make_website(self.db, self.john, view_count=41)
        self.assertEqual(increment_website_views(self.db, site.id), 42)
        self.assertEqual(increment_website_views(self.db, site.id), 43)
        self.assertIsNone(increment_website_views(self.db, 9999))

    def test_toggle_popular(self) -> None:
        site = make_website(self.db, self.john)
        self.assertTrue(toggle_website_popular(self.db, site.id, True).is_popular)
        self.assertFalse(toggle_website_popular(self.db, site.id, False).is_popular)
        self.assertIsNone(toggle_website_popular(self.db, 9999, True))

    def test_delete_removes_children(self) -> None:
        site = make_website(self.db, self.john, tags=["a", "b"])
        toggle_like(self.db, site.id, self.sarah.id)
        add_website_comment(self.db, site.id, self.sarah.id, "Great work")
        site_id = site.id
        self.assertTrue(delete_website(self.db, site_id))
        self.assertEqual(self.db.query(Website).count(), 0)
        self.assertEqual(self.db.query(WebsiteTag).count(), 0)
        self.assertEqual(self.db.query(WebsiteLike).count(), 0)
        self.assertEqual(self.db.query(WebsiteComment).count(), 0)
        self.assertFalse(delete_website(self.db, site_id))


class TestComments(MutationTestCase):
    def test_comments_newest_first_without_email(self) -> None:
        site = make_website(self.db, self.john)
        first = add_website_comment(self.db, site.id, self.sarah.id, "First")
        second = add_website_comment(self.db, site.id, self.john.id, "Second")
        comments = list_website_comments(self.db, site.id)
        self.assertEqual([c.id for c in comments], [second.id, first.id])
        self.assertEqual(comments[1].user.name, "Sarah Johnson")
        self.assertIsNone(comments[1].user.email)

    def test_comment_on_missing_website(self) -> None:
        self.assertIsNone(add_website_comment(self.db, 9999, self.john.id, "Hello"))
