"""
Alert matching for newly created deliveries.

Matches a new delivery against users' saved alerts and creates one
alert_match notification per matching alert.
"""

from typing import Any, Dict, List, Optional

from models.delivery import DeliveryMatching
from models.notification import ALERT_MATCH, NotificationCreate
from notifications.content import generate_alert_match_notification
from notifications.email_sender import send_alert_match_email
from notifications.error_logger import log_notification_error
from notifications.locale import LocaleResolver, default_locale
from shared.db import fetch_all_rows

ALERT_COLUMNS = (
    "id, user_id, name, alert_type, departure_country, departure_city, "
    "destination_country, destination_city, email_notifications, is_active"
)

# Delivery type -> alert_type that subscribes to it
ALERT_TYPE_FOR_DELIVERY = {"request": "requests", "offer": "offers"}


def match_delivery_to_alerts(supabase: Any, delivery: Dict[str, Any]) -> List[Dict[str, Any]]:
    """
    Find all active alerts that match a newly created delivery.

    Args:
        supabase: Supabase client
        delivery: Dictionary containing at least id, type, sender_id,
            from_country, from_city, to_country, to_city

    Returns:
        List of matching alert rows (empty on error)
    """
    try:
        delivery_data = DeliveryMatching.model_validate(delivery).model_dump()

        if delivery_data["deleted_at"] is not None:
            return []

        alert_types = ["all", ALERT_TYPE_FOR_DELIVERY[delivery_data["type"]]]

        # Alert owners never hear about their own posts
        candidates = fetch_all_rows(
            lambda: supabase.table("alerts")
            .select(ALERT_COLUMNS)
            .eq("is_active", True)
            .neq("user_id", delivery_data["sender_id"])
            .in_("alert_type", alert_types)
            .order("id")
        )

        return [
            alert
            for alert in candidates
            if _alert_matches_delivery(alert, delivery_data)
        ]

    except Exception as e:
        error_file = log_notification_error(
            error_type="alert_matching",
            error_message=str(e),
            context={
                "delivery_id": delivery.get("id"),
                "delivery_type": delivery.get("type"),
                "sender_id": delivery.get("sender_id"),
            },
        )
        print(f"  ⚠️  Error matching delivery to alerts. Details logged to: {error_file}")
        # Delivery creation must not fail because of alerts
        return []


def _alert_matches_delivery(alert: Dict[str, Any], delivery_data: Dict[str, Any]) -> bool:
    """
    Check if a single alert matches a delivery.

    All clauses are AND-ed together. A null location field on the alert
    matches anything; a country without a city matches any city in that
    country.
    """
    if not alert.get("is_active", True):
        return False

    if alert.get("user_id") == delivery_data.get("sender_id"):
        return False

    alert_type = alert.get("alert_type")
    if alert_type != "all" and alert_type != ALERT_TYPE_FOR_DELIVERY.get(delivery_data.get("type")):
        return False

    if not _location_matches(
        alert.get("departure_country"),
        alert.get("departure_city"),
        delivery_data.get("from_country"),
        delivery_data.get("from_city"),
    ):
        return False

    if not _location_matches(
        alert.get("destination_country"),
        alert.get("destination_city"),
        delivery_data.get("to_country"),
        delivery_data.get("to_city"),
    ):
        return False

    return True


def _location_matches(
    alert_country: Optional[str],
    alert_city: Optional[str],
    country: Optional[str],
    city: Optional[str],
) -> bool:
    if alert_country is None:
        return True
    if alert_country != country:
        return False
    return alert_city is None or alert_city == city


def create_alert_match_notifications(
    supabase: Any,
    delivery: Dict[str, Any],
    matched_alerts: List[Dict[str, Any]],
    resolve_locale: LocaleResolver = default_locale,
) -> List[Dict[str, Any]]:
    """
    Create one alert_match notification per matched alert.

    Args:
        supabase: Supabase client
        delivery: The delivery that matched
        matched_alerts: Alert rows returned by match_delivery_to_alerts()
        resolve_locale: Locale lookup for the alert owner

    Returns:
        List of created notification rows
    """
    if not matched_alerts:
        return []

    created = []
    failed_notifications = []

    for alert in matched_alerts:
        try:
            content = generate_alert_match_notification(
                delivery["type"],
                delivery["from_city"],
                delivery["from_country"],
                delivery["to_city"],
                delivery["to_country"],
                resolve_locale(alert["user_id"]),
            )
            notification = NotificationCreate(
                user_id=alert["user_id"],
                type=ALERT_MATCH,
                related_id=delivery["id"],
                is_read=False,
                **content,
            ).model_dump(mode="json", exclude_none=True)

            response = supabase.table("notifications").insert(notification).execute()
            created.append(response.data[0] if response.data else notification)

        except Exception as e:
            failed_notifications.append({"alert_id": alert.get("id"), "error": str(e)})
            print(f"  ⚠ Could not notify user {alert.get('user_id')} about alert match: {e}")

    if failed_notifications:
        log_notification_error(
            error_type="alert_matching",
            error_message=f"Failed to create {len(failed_notifications)} alert notification(s)",
            context={
                "delivery_id": delivery.get("id"),
                "failures": failed_notifications,
            },
        )

    return created


def send_alert_match_emails(
    supabase: Any,
    delivery: Dict[str, Any],
    matched_alerts: List[Dict[str, Any]],
    resolve_locale: LocaleResolver = default_locale,
) -> int:
    """
    Email alert owners who opted into email notifications.

    Returns:
        Number of emails sent
    """
    email_alerts = [a for a in matched_alerts if a.get("email_notifications")]
    if not email_alerts:
        return 0

    try:
        user_ids = list({a["user_id"] for a in email_alerts})
        users_response = (
            supabase.table("users").select("id, email").in_("id", user_ids).execute()
        )
        emails = {u["id"]: u.get("email") for u in (users_response.data or [])}
    except Exception as e:
        log_notification_error(
            error_type="email",
            error_message=str(e),
            context={"delivery_id": delivery.get("id"), "user_ids": [a["user_id"] for a in email_alerts]},
        )
        return 0

    sent = 0
    for alert in email_alerts:
        user_email = emails.get(alert["user_id"])
        if not user_email:
            continue

        content = generate_alert_match_notification(
            delivery["type"],
            delivery["from_city"],
            delivery["from_country"],
            delivery["to_city"],
            delivery["to_country"],
            resolve_locale(alert["user_id"]),
        )
        result = send_alert_match_email(
            user_email,
            content["title"],
            content["message"],
            delivery["id"],
            alert_name=alert.get("name"),
        )

        if result["success"]:
            sent += 1
        else:
            log_notification_error(
                error_type="email",
                error_message=result.get("error", "Unknown error"),
                context={"delivery_id": delivery.get("id"), "alert_id": alert.get("id")},
            )

    return sent


def check_and_notify_alert_matches(
    supabase: Any,
    delivery: Dict[str, Any],
    resolve_locale: LocaleResolver = default_locale,
    send_emails: bool = True,
) -> List[Dict[str, Any]]:
    """
    Notify every alert owner interested in a newly created delivery.

    Called once, right after the delivery row is committed. Never raises:
    any failure is logged and yields fewer (or no) notifications.

    Returns:
        List of created notification rows
    """
    print(f"🔔 Checking alert matches for delivery {delivery.get('id')}")

    matched_alerts = match_delivery_to_alerts(supabase, delivery)
    print(f"  Found {len(matched_alerts)} matching alert(s)")

    if not matched_alerts:
        return []

    created = create_alert_match_notifications(supabase, delivery, matched_alerts, resolve_locale)
    print(f"  ✓ Created {len(created)} alert notification(s)")

    if send_emails:
        try:
            emailed = send_alert_match_emails(supabase, delivery, matched_alerts, resolve_locale)
            if emailed:
                print(f"  ✓ Sent {emailed} alert email(s)")
        except Exception as e:
            log_notification_error(
                error_type="email",
                error_message=str(e),
                context={"delivery_id": delivery.get("id")},
            )

    return created
