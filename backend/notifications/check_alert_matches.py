"""
Diagnostic utility for alert matching.

Runs the alert matcher against recent deliveries and prints which alerts
match, without creating notifications unless asked to.

Usage:
    # Match the 10 most recent deliveries (don't notify)
    uv run python -m notifications.check_alert_matches

    # Match a specific delivery
    uv run python -m notifications.check_alert_matches --delivery-id abc-123

    # Match AND create notifications
    uv run python -m notifications.check_alert_matches --delivery-id abc-123 --notify
"""

import argparse
from typing import Any, Dict, List

from shared.db import get_supabase_client
from notifications.alert_matcher import (
    check_and_notify_alert_matches,
    match_delivery_to_alerts,
)
from notifications.locale import profile_locale_resolver

DELIVERY_COLUMNS = "id, type, sender_id, from_country, from_city, to_country, to_city, deleted_at"


def fetch_deliveries(supabase: Any, delivery_id: str | None, limit: int) -> List[Dict[str, Any]]:
    query = supabase.table("deliveries").select(DELIVERY_COLUMNS).is_("deleted_at", "null")

    if delivery_id:
        query = query.eq("id", delivery_id)
    else:
        query = query.order("created_at", desc=True).limit(limit)

    return query.execute().data or []


def check_matching(delivery_id: str | None = None, limit: int = 10, notify: bool = False) -> int:
    """
    Match deliveries against alerts.

    Returns:
        Total number of matching alerts found
    """
    supabase = get_supabase_client()
    deliveries = fetch_deliveries(supabase, delivery_id, limit)

    if not deliveries:
        print("No deliveries found in database")
        return 0

    total = 0
    for delivery in deliveries:
        print("Testing Alert Matching")
        print("=" * 60)
        print(f"Delivery: {delivery['id']} ({delivery['type']})")
        print(f"Route: {delivery['from_city']}, {delivery['from_country']} → "
              f"{delivery['to_city']}, {delivery['to_country']}")
        print()

        if notify:
            created = check_and_notify_alert_matches(
                supabase, delivery, resolve_locale=profile_locale_resolver(supabase)
            )
            total += len(created)
            continue

        matched = match_delivery_to_alerts(supabase, delivery)
        total += len(matched)
        if not matched:
            print("  No matching alerts")
        for alert in matched:
            print(f"  ✓ Alert '{alert.get('name')}' ({alert['id']}) for user {alert['user_id']}")
        print()

    return total


def main() -> None:
    parser = argparse.ArgumentParser(description="Check alert matches for recent deliveries")
    parser.add_argument("--delivery-id", type=str, help="Match a single delivery")
    parser.add_argument("--limit", type=int, default=10, help="Number of recent deliveries to check")
    parser.add_argument("--notify", action="store_true", help="Create notifications for matches")
    args = parser.parse_args()

    check_matching(delivery_id=args.delivery_id, limit=args.limit, notify=args.notify)


if __name__ == "__main__":
    main()
