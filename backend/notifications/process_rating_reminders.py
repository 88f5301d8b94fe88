"""
CLI script for sending rating reminders.

Meant to be run by a scheduler (cron, GitHub Actions) every few minutes.
Runs must not overlap.

Usage:
    # Send due reminders
    uv run python -m notifications.process_rating_reminders

    # Dry run (report due reminders without creating notifications)
    uv run python -m notifications.process_rating_reminders --dry-run

    # Print the JSON result (for log collectors)
    uv run python -m notifications.process_rating_reminders --json
"""

import argparse
import json
import sys
import time
from typing import Any

from shared.db import get_supabase_client
from shared.utils import print_summary
from notifications.locale import profile_locale_resolver
from notifications.rating_reminders import check_and_send_rating_reminders


def run(dry_run: bool = False) -> dict[str, Any]:
    """Bootstrap the client and run one reminder pass."""
    start = time.monotonic()

    try:
        supabase = get_supabase_client()
    except ValueError as e:
        print(f"❌ {e}")
        return {"success": False, "error": str(e)}

    result = check_and_send_rating_reminders(
        supabase,
        resolve_locale=profile_locale_resolver(supabase),
        dry_run=dry_run,
    )
    result["duration_ms"] = int((time.monotonic() - start) * 1000)
    return result


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Send rating reminders for delivered deliveries"
    )

    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Dry run mode (don't create notifications)",
    )

    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the result as JSON",
    )

    args = parser.parse_args()

    result = run(dry_run=args.dry_run)

    if result["success"]:
        print_summary(
            "Rating Reminders Complete" + (" (dry run)" if args.dry_run else ""),
            {
                "Deliveries": result["processed"],
                "Reminders sent": result["reminders_sent"],
                "Failed": result["failed"],
                "Duration (ms)": result["duration_ms"],
            },
        )

    if args.json:
        print(json.dumps(result, indent=2))

    if not result["success"]:
        sys.exit(1)


if __name__ == "__main__":
    main()
