"""
Localized notification content.

Pure functions: given structured parameters and a locale tag, return the
{"title": ..., "message": ...} pair stored on a notification row.
"""

from typing import Any, Dict

from config.notification_templates import (
    ELAPSED_HOURS_FALLBACK,
    ELAPSED_TIME_LABELS,
    FALLBACK_LOCALE,
    NOTIFICATION_TEMPLATES,
    SUPPORTED_LOCALES,
)
from models.notification import NotificationContent


def normalize_locale(locale: str | None) -> str:
    """Map a locale tag ('fr', 'fr-FR', 'EN') to a supported locale."""
    if not locale:
        return FALLBACK_LOCALE
    base = locale.replace("_", "-").split("-")[0].lower()
    return base if base in SUPPORTED_LOCALES else FALLBACK_LOCALE


def _templates(kind: str, locale: str | None) -> Dict[str, Any]:
    return NOTIFICATION_TEMPLATES[normalize_locale(locale)][kind]


def _content(title: str, message: str) -> Dict[str, str]:
    return NotificationContent(title=title, message=message).model_dump()


def describe_elapsed_hours(hours: int, locale: str | None = FALLBACK_LOCALE) -> str:
    """Human-readable elapsed time for a reminder step (e.g. 48 -> '2 days')."""
    locale = normalize_locale(locale)
    label = ELAPSED_TIME_LABELS[locale].get(hours)
    if label:
        return label
    return ELAPSED_HOURS_FALLBACK[locale].format(hours=hours)


def generate_alert_match_notification(
    delivery_type: str,
    from_city: str,
    from_country: str,
    to_city: str,
    to_country: str,
    locale: str | None = FALLBACK_LOCALE,
) -> Dict[str, str]:
    """
    Build the notification shown to an alert owner when a new delivery matches.

    The title depends only on the delivery type. The message is the route
    and is not translated.
    """
    t = _templates("alert_match", locale)
    title = t["request_title"] if delivery_type == "request" else t["offer_title"]
    message = f"{from_city}, {from_country} → {to_city}, {to_country}"
    return _content(title, message)


def generate_rating_reminder_notification(
    hours_elapsed: int, partner_name: str | None, locale: str | None = FALLBACK_LOCALE
) -> Dict[str, str]:
    """
    Build a rating reminder.

    Args:
        hours_elapsed: Reminder step in hours (3, 24, 48, 96, 168)
        partner_name: Display name of the user to rate; falls back to a
            generic phrase when unknown
        locale: Recipient locale tag

    Returns:
        Dictionary with 'title' and 'message'
    """
    t = _templates("rating_reminder", locale)
    message = t["message"].format(
        time=describe_elapsed_hours(hours_elapsed, locale),
        name=partner_name or t["default_partner_name"],
    )
    return _content(t["title"], message)


def generate_review_notification(
    rating: int,
    reviewer_name: str | None,
    comment: str | None,
    locale: str | None = FALLBACK_LOCALE,
) -> Dict[str, str]:
    """Build the notification telling a user they received a review."""
    t = _templates("review", locale)
    name = reviewer_name or t["default_reviewer_name"]
    title = f"{'⭐' * rating} {t['title']}"
    if comment:
        message = t["with_comment"].format(name=name, rating=rating, comment=comment)
    else:
        message = t["without_comment"].format(name=name, rating=rating)
    return _content(title, message)
