"""
Supabase client bootstrap.

Workflows take the client as an argument; only entry points (CLI scripts,
the delivery-creation handler) call get_supabase_client().
"""

import os
from typing import Any, Callable

from dotenv import load_dotenv
from supabase import Client, create_client

load_dotenv()

# PostgREST's default max-rows; larger selects are silently truncated
PAGE_SIZE = 1000


def get_supabase_client(url: str | None = None, key: str | None = None) -> Client:
    """Create a Supabase client from explicit credentials or the environment."""
    url = url or os.getenv("SUPABASE_URL")
    key = key or os.getenv("SUPABASE_SERVICE_KEY")

    if not url or not key:
        raise ValueError("SUPABASE_URL and SUPABASE_SERVICE_KEY must be set")

    return create_client(url, key)


def fetch_all_rows(
    build_query: Callable[[], Any], page_size: int | None = None
) -> list[dict[str, Any]]:
    """
    Read every row of a select, one range() page at a time.

    Args:
        build_query: Returns a fresh, ordered select builder on each call
            (builders keep their range params once applied)
        page_size: Rows requested per page (default PAGE_SIZE); must not
            exceed the server's max-rows

    Returns:
        All rows, in query order
    """
    page_size = page_size or PAGE_SIZE
    rows: list[dict[str, Any]] = []
    start = 0

    while True:
        page = build_query().range(start, start + page_size - 1).execute().data or []
        rows.extend(page)
        if len(page) < page_size:
            return rows
        start += page_size
