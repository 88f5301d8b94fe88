from datetime import datetime, timezone
from typing import Any

from dateutil import parser as date_parser


def parse_timestamp(value: Any) -> datetime | None:
    """Parse a datastore timestamp (ISO string or datetime) into an aware UTC datetime."""
    if not value:
        return None
    if isinstance(value, datetime):
        dt = value
    else:
        try:
            dt = date_parser.isoparse(str(value))
        except (ValueError, OverflowError, TypeError):
            return None

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def print_summary(title: str, stats: dict[str, int]) -> None:
    """Print a job summary block."""
    print(f"\n{'=' * 60}")
    print(f"[{datetime.now()}] {title}")
    print(f"{'=' * 60}")
    for label, value in stats.items():
        print(f"{label + ':':<18}{value}")
    print(f"{'=' * 60}\n")
