"""
Print a summary of delivered deliveries and rating reminders.

Usage:
    uv run python -m utils.reminder_summary
"""

from collections import Counter, defaultdict
from typing import Any

from dotenv import load_dotenv
from shared.db import fetch_all_rows, get_supabase_client
from models.delivery import DELIVERED_STATUS
from models.notification import RATING_REMINDER

load_dotenv()


def build_summary(supabase: Any) -> dict[str, Any]:
    """
    Count delivered deliveries and rating reminders.

    Returns:
        Dictionary with delivery counts and per-user reminder counts keyed
        by threshold ("untagged" for reminders without threshold_hours)
    """
    deliveries = fetch_all_rows(
        lambda: supabase.table("deliveries")
        .select("id, sender_id, receiver_id")
        .eq("status", DELIVERED_STATUS)
        .order("id")
    )

    self_deliveries = [d for d in deliveries if d["sender_id"] == d.get("receiver_id")]

    reminders = fetch_all_rows(
        lambda: supabase.table("notifications")
        .select("user_id, threshold_hours")
        .eq("type", RATING_REMINDER)
        .order("id")
    )

    by_user: dict[str, Counter] = defaultdict(Counter)
    for reminder in reminders:
        tag = reminder.get("threshold_hours")
        by_user[reminder["user_id"]][f"{tag}h" if tag else "untagged"] += 1

    return {
        "delivered": len(deliveries),
        "self_deliveries": len(self_deliveries),
        "valid_deliveries": len(deliveries) - len(self_deliveries),
        "total_reminders": len(reminders),
        "reminders_by_user": {user_id: dict(counts) for user_id, counts in by_user.items()},
    }


def print_report(summary: dict[str, Any]) -> None:
    print("\n=== Delivery Summary ===")
    print(f"Total DELIVERED: {summary['delivered']}")
    print(f"Same user (sender = receiver): {summary['self_deliveries']} (skipped)")
    print(f"Different users: {summary['valid_deliveries']} (valid for reminders)")

    print("\n=== Notification Summary ===")
    print(f"Total rating reminders: {summary['total_reminders']}")
    print("\nBy user:")
    for user_id, counts in summary["reminders_by_user"].items():
        steps = ", ".join(f"{n} × {step}" for step, n in sorted(counts.items()))
        print(f"  {user_id}: {sum(counts.values())} total ({steps})")


def main():
    supabase = get_supabase_client()
    print_report(build_summary(supabase))


if __name__ == "__main__":
    main()
