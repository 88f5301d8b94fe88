"""
Integration tests for the rating reminder lifecycle.

Runs the scheduler repeatedly against one in-memory datastore as time
passes, with reviews submitted between runs.

Delivery D1: sender Alice, receiver Bob, confirmed at T0.
"""

import unittest
from datetime import datetime, timedelta, timezone
from unittest.mock import patch

from notifications.rating_reminders import check_and_send_rating_reminders
from reviews.submit import submit_review
from tests.fixtures.delivery_factory import (
    create_test_conversation,
    create_test_delivery,
    create_test_message,
)
from tests.fixtures.mock_helpers import FakeSupabase
from tests.fixtures.user_factory import create_test_user

T0 = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


class TestRatingReminderFlow(unittest.TestCase):
    """End-to-end reminder scenarios."""

    def setUp(self):
        patcher = patch("builtins.print")
        patcher.start()
        self.addCleanup(patcher.stop)

        self.supabase = FakeSupabase(
            tables={
                "deliveries": [
                    create_test_delivery(
                        delivery_id="D1",
                        sender_id="A",
                        receiver_id="B",
                        status="DELIVERED",
                    )
                ],
                "conversations": [create_test_conversation("C1", "D1", "A", "B")],
                "messages": [create_test_message("C1", T0, sender_id="B")],
                "users": [
                    create_test_user(user_id="A", name="Alice"),
                    create_test_user(user_id="B", name="Bob"),
                ],
                "reviews": [],
                "notifications": [],
            },
            unique={"notifications": ("user_id", "type", "related_id", "threshold_hours")},
        )

    def run_at(self, hours: float):
        self.supabase.now = T0 + timedelta(hours=hours)
        return check_and_send_rating_reminders(self.supabase, now=self.supabase.now)

    def reminders(self, user_id=None):
        filters = {"type": "rating_reminder"}
        if user_id:
            filters["user_id"] = user_id
        return self.supabase.rows("notifications", **filters)

    def test_first_step_then_idempotent(self):
        """At T0+4h both users get the 3h reminder; an immediate rerun sends nothing"""
        result = self.run_at(4)

        self.assertEqual(result["reminders_sent"], 2)
        self.assertEqual(
            sorted((r["user_id"], r["threshold_hours"]) for r in self.reminders()),
            [("A", 3), ("B", 3)],
        )
        self.assertIn("Bob", self.reminders("A")[0]["message"])
        self.assertIn("Alice", self.reminders("B")[0]["message"])

        rerun = self.run_at(4)

        self.assertTrue(rerun["success"])
        self.assertEqual(rerun["reminders_sent"], 0)
        self.assertEqual(len(self.reminders()), 2)

    def test_progresses_to_next_step(self):
        """At T0+30h, after the 4h run, both users get the 24h reminder"""
        self.run_at(4)

        result = self.run_at(30)

        self.assertEqual(result["reminders_sent"], 2)
        self.assertEqual(
            sorted(r["threshold_hours"] for r in self.reminders("A")), [3, 24]
        )
        self.assertEqual(self.run_at(31)["reminders_sent"], 0)

    def test_review_stops_reviewer_reminders(self):
        """A rates B at T0+30h; at T0+50h only B is reminded, at the 48h step"""
        self.run_at(4)
        self.run_at(30)

        self.supabase.now = T0 + timedelta(hours=30)
        submit_review(self.supabase, "D1", "A", "B", rating=5, comment="Smooth delivery")

        # Submitting the review clears A's outstanding reminders
        self.assertEqual(self.reminders("A"), [])

        result = self.run_at(50)

        self.assertEqual(result["reminders_sent"], 1)
        self.assertEqual(self.reminders("A"), [])
        self.assertEqual(
            sorted(r["threshold_hours"] for r in self.reminders("B")), [3, 24, 48]
        )

        review_notifications = self.supabase.rows("notifications", type="review")
        self.assertEqual([n["user_id"] for n in review_notifications], ["B"])

    def test_skipped_steps_only_send_latest(self):
        """First run long after confirmation sends only the most advanced step"""
        result = self.run_at(100)

        self.assertEqual(result["reminders_sent"], 2)
        self.assertEqual({r["threshold_hours"] for r in self.reminders()}, {96})

        self.assertEqual(self.run_at(120)["reminders_sent"], 0)
        self.assertEqual(self.run_at(170)["reminders_sent"], 2)


if __name__ == "__main__":
    unittest.main()
