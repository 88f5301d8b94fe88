"""
Delete rating reminders attached to self-deliveries (sender is also receiver).

Nobody can rate themselves, so any reminder tied to such a delivery or its
conversation is noise.

Usage:
    # Preview what would be deleted
    uv run python -m utils.cleanup_self_rating_notifications --dry-run

    # Delete
    uv run python -m utils.cleanup_self_rating_notifications
"""

import argparse
from typing import Any

from dotenv import load_dotenv
from shared.db import fetch_all_rows, get_supabase_client
from models.delivery import DELIVERED_STATUS
from models.notification import RATING_REMINDER

load_dotenv()


def find_self_delivery_related_ids(supabase: Any) -> list[str]:
    """Delivery and conversation IDs of delivered self-deliveries."""
    deliveries = fetch_all_rows(
        lambda: supabase.table("deliveries")
        .select("id, sender_id, receiver_id")
        .eq("status", DELIVERED_STATUS)
        .order("id")
    )

    self_delivery_ids = [d["id"] for d in deliveries if d["sender_id"] == d.get("receiver_id")]
    print(f"Found {len(self_delivery_ids)} deliveries where sender = receiver")

    if not self_delivery_ids:
        return []

    conversations = (
        supabase.table("conversations")
        .select("id")
        .in_("delivery_id", self_delivery_ids)
        .execute()
    ).data or []

    return self_delivery_ids + [c["id"] for c in conversations]


def cleanup_self_rating_notifications(supabase: Any, dry_run: bool = False) -> int:
    """
    Delete (or list, in dry-run mode) reminders for self-deliveries.

    Returns:
        Number of notifications deleted (or that would be deleted)
    """
    related_ids = find_self_delivery_related_ids(supabase)
    if not related_ids:
        print("✅ No self-rating notifications to delete")
        return 0

    notifications = (
        supabase.table("notifications")
        .select("id, user_id, message, related_id")
        .eq("type", RATING_REMINDER)
        .in_("related_id", related_ids)
        .execute()
    ).data or []

    print(f"\nFound {len(notifications)} rating reminder notification(s) to delete:\n")
    for notification in notifications:
        print(f"  - Notification {notification['id']} for user {notification['user_id']}")
        print(f"    Message: {(notification.get('message') or '')[:50]}...")
        print(f"    Related: {notification['related_id']}\n")

    if dry_run or not notifications:
        return len(notifications)

    supabase.table("notifications").delete().in_(
        "id", [n["id"] for n in notifications]
    ).execute()
    print(f"✅ Deleted {len(notifications)} self-rating reminder notification(s)")
    return len(notifications)


def main():
    parser = argparse.ArgumentParser(
        description="Delete rating reminders for deliveries where sender = receiver",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="List notifications without deleting them"
    )
    args = parser.parse_args()

    supabase = get_supabase_client()
    cleanup_self_rating_notifications(supabase, dry_run=args.dry_run)


if __name__ == "__main__":
    main()
