"""
Recipient locale resolution.

A locale resolver is any callable taking a user ID and returning a locale
tag. Notification workflows accept one as a parameter so the lookup can be
swapped without touching the content generators.
"""

import os
from typing import Any, Callable

from dotenv import load_dotenv

from models.user import UserProfile
from notifications.content import normalize_locale

load_dotenv()

LocaleResolver = Callable[[str], str]

DEFAULT_LOCALE = normalize_locale(os.getenv("DEFAULT_LOCALE", "en"))


def default_locale(user_id: str) -> str:
    """Resolver used until users have a stored locale preference."""
    return DEFAULT_LOCALE


def profile_locale_resolver(supabase: Any) -> LocaleResolver:
    """
    Build a resolver reading users.locale, cached per resolver instance.

    Missing rows, unsupported values and lookup errors fall back to
    DEFAULT_LOCALE.
    """
    cache: dict[str, str] = {}

    def resolve(user_id: str) -> str:
        if user_id in cache:
            return cache[user_id]

        try:
            response = (
                supabase.table("users")
                .select("id, locale")
                .eq("id", user_id)
                .limit(1)
                .execute()
            )
            profile = UserProfile.model_validate(response.data[0]) if response.data else None
        except Exception as e:
            print(f"  ⚠️  Could not fetch locale for user {user_id}: {e}")
            return DEFAULT_LOCALE

        locale = DEFAULT_LOCALE
        if profile and profile.locale:
            locale = normalize_locale(profile.locale)

        cache[user_id] = locale
        return locale

    return resolve
