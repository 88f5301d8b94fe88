"""
Rating reminders for delivered deliveries.

Run periodically. For each delivered delivery, each participant who has not
rated the other gets at most one reminder per step of the reminder ladder
(3h, 24h, 48h, 96h, 168h after the delivery was confirmed).
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

from config.reminders import REMINDER_THRESHOLD_HOURS, REMINDER_WINDOW_SLACK_HOURS
from models.conversation import DELIVERY_CONFIRMATION, Conversation, Message
from models.delivery import DELIVERED_STATUS
from models.notification import RATING_REMINDER, NotificationCreate
from models.user import UserProfile
from notifications.content import generate_rating_reminder_notification
from notifications.error_logger import log_notification_error
from notifications.locale import LocaleResolver, default_locale
from shared.db import fetch_all_rows
from shared.utils import parse_timestamp, utc_now


def select_reminder_threshold(elapsed: timedelta) -> Optional[int]:
    """
    Return the most advanced reminder step already reached, in hours.

    30 hours after confirmation selects 24, not 3 and not 48. Returns None
    before the first step.
    """
    selected = None
    for hours in REMINDER_THRESHOLD_HOURS:
        if elapsed >= timedelta(hours=hours):
            selected = hours
    return selected


def resolve_related_id(
    conversations: List[Dict[str, Any]], delivery_id: str, user_a: str, user_b: str
) -> str:
    """Conversation between the two users for this delivery, else the delivery ID."""
    for row in conversations:
        if Conversation.model_validate(row).links(user_a, user_b):
            return row["id"]
    return delivery_id


def _reminder_covers(
    notification: Dict[str, Any], threshold_hours: int, confirmed_at: datetime
) -> bool:
    """
    True if an existing reminder was sent for this step or a later one.

    Tagged rows compare threshold_hours directly. Rows written before the
    tag existed fall back to the creation-time window.
    """
    tag = notification.get("threshold_hours")
    if tag is not None:
        return int(tag) >= threshold_hours

    created_at = parse_timestamp(notification.get("created_at"))
    if created_at is None:
        return False
    window_start = confirmed_at + timedelta(hours=threshold_hours - REMINDER_WINDOW_SLACK_HOURS)
    return created_at >= window_start


def _is_duplicate_error(error: Exception) -> bool:
    error_str = str(error).lower()
    return "duplicate" in error_str or "unique" in error_str


def _fetch_delivered_deliveries(supabase: Any) -> List[Dict[str, Any]]:
    return fetch_all_rows(
        lambda: supabase.table("deliveries")
        .select("id, sender_id, receiver_id")
        .eq("status", DELIVERED_STATUS)
        .not_.is_("receiver_id", "null")
        .is_("deleted_at", "null")
        .order("id")
    )


def _fetch_user_names(supabase: Any, user_ids: List[str]) -> Dict[str, Optional[str]]:
    """
    Display names by user ID.

    Names only decorate the reminder text, so lookup failures yield {} and
    the template's default partner name is used.
    """
    if not user_ids:
        return {}
    try:
        response = supabase.table("users").select("id, name").in_("id", user_ids).execute()
        users = [UserProfile.model_validate(row) for row in (response.data or [])]
    except Exception as e:
        print(f"  ⚠️  Could not fetch user names: {e}")
        return {}

    return {user.id: user.name for user in users}


def _fetch_conversations(supabase: Any, delivery_id: str) -> List[Dict[str, Any]]:
    response = (
        supabase.table("conversations")
        .select("id, delivery_id, participant1_id, participant2_id")
        .eq("delivery_id", delivery_id)
        .execute()
    )
    return response.data or []


def get_confirmation_time(
    supabase: Any, conversations: List[Dict[str, Any]]
) -> Optional[datetime]:
    """Creation time of the latest deliveryConfirmation message across the conversations."""
    if not conversations:
        return None

    response = (
        supabase.table("messages")
        .select("id, conversation_id, sender_id, message_type, created_at")
        .in_("conversation_id", [c["id"] for c in conversations])
        .eq("message_type", DELIVERY_CONFIRMATION)
        .order("created_at", desc=True)
        .limit(1)
        .execute()
    )

    if not response.data:
        return None
    return parse_timestamp(Message.model_validate(response.data[0]).created_at)


def _has_reviewed(supabase: Any, delivery_id: str, reviewer_id: str, reviewee_id: str) -> bool:
    response = (
        supabase.table("reviews")
        .select("id")
        .eq("delivery_id", delivery_id)
        .eq("reviewer_id", reviewer_id)
        .eq("reviewee_id", reviewee_id)
        .limit(1)
        .execute()
    )
    return bool(response.data)


def _reminder_already_sent(
    supabase: Any,
    user_id: str,
    related_ids: List[str],
    threshold_hours: int,
    confirmed_at: datetime,
) -> bool:
    response = (
        supabase.table("notifications")
        .select("id, threshold_hours, created_at")
        .eq("user_id", user_id)
        .eq("type", RATING_REMINDER)
        .in_("related_id", related_ids)
        .execute()
    )
    return any(
        _reminder_covers(notification, threshold_hours, confirmed_at)
        for notification in (response.data or [])
    )


def _remind_if_due(
    supabase: Any,
    delivery_id: str,
    reviewer_id: str,
    reviewee_id: str,
    reviewee_name: Optional[str],
    conversations: List[Dict[str, Any]],
    confirmed_at: datetime,
    elapsed: timedelta,
    resolve_locale: LocaleResolver,
    dry_run: bool,
) -> bool:
    """
    Send reviewer a reminder to rate reviewee if one is due.

    Returns:
        True if a reminder was sent (or would be, in dry-run mode)
    """
    if _has_reviewed(supabase, delivery_id, reviewer_id, reviewee_id):
        print(f"   → {reviewer_id} already rated {reviewee_id} ✓")
        return False

    threshold = select_reminder_threshold(elapsed)
    if threshold is None:
        print(f"   → No reminder step reached yet for {reviewer_id}")
        return False

    related_id = resolve_related_id(conversations, delivery_id, reviewer_id, reviewee_id)
    related_ids = list(dict.fromkeys([related_id, delivery_id]))

    if _reminder_already_sent(supabase, reviewer_id, related_ids, threshold, confirmed_at):
        print(f"   → {threshold}h reminder already sent to {reviewer_id}")
        return False

    if dry_run:
        print(f"   [DRY RUN] Would send {threshold}h reminder to {reviewer_id}")
        return True

    content = generate_rating_reminder_notification(
        threshold, reviewee_name, resolve_locale(reviewer_id)
    )
    notification = NotificationCreate(
        user_id=reviewer_id,
        type=RATING_REMINDER,
        related_id=related_id,
        is_read=False,
        threshold_hours=threshold,
        **content,
    ).model_dump(mode="json", exclude_none=True)

    try:
        supabase.table("notifications").insert(notification).execute()
    except Exception as e:
        # Unique (user_id, type, related_id, threshold_hours): an overlapping run won
        if _is_duplicate_error(e):
            print(f"   → {threshold}h reminder for {reviewer_id} inserted concurrently, skipping")
            return False
        raise

    print(f"✅ Sent {threshold}h reminder to {reviewer_id}")
    return True


def process_delivery_reminders(
    supabase: Any,
    delivery: Dict[str, Any],
    now: datetime,
    resolve_locale: LocaleResolver = default_locale,
    dry_run: bool = False,
) -> int:
    """
    Send the reminders due for one delivery, in both directions.

    Returns:
        Number of reminders sent (0-2)
    """
    delivery_id = delivery["id"]
    sender_id = delivery["sender_id"]
    receiver_id = delivery.get("receiver_id")

    if not receiver_id:
        return 0

    if sender_id == receiver_id:
        print(f"\n📦 Delivery {delivery_id}: skipped (sender is also receiver)")
        return 0

    conversations = _fetch_conversations(supabase, delivery_id)
    confirmed_at = get_confirmation_time(supabase, conversations)
    if confirmed_at is None:
        print(f"\n⚠️  No confirmation message for delivery {delivery_id}, skipping")
        return 0

    elapsed = now - confirmed_at
    print(f"\n📦 Delivery {delivery_id}: confirmed {confirmed_at.isoformat()}, "
          f"{elapsed.total_seconds() / 3600:.2f}h ago")

    user_names = _fetch_user_names(supabase, [sender_id, receiver_id])

    sent = 0
    for reviewer_id, reviewee_id in ((sender_id, receiver_id), (receiver_id, sender_id)):
        if _remind_if_due(
            supabase,
            delivery_id,
            reviewer_id,
            reviewee_id,
            user_names.get(reviewee_id),
            conversations,
            confirmed_at,
            elapsed,
            resolve_locale,
            dry_run,
        ):
            sent += 1

    return sent


def check_and_send_rating_reminders(
    supabase: Any,
    now: Optional[datetime] = None,
    resolve_locale: LocaleResolver = default_locale,
    dry_run: bool = False,
) -> Dict[str, Any]:
    """
    Check every delivered delivery and send due rating reminders.

    Safe to run repeatedly: a step already reminded (or any later step) is
    never re-sent. Runs must not overlap; the notifications unique
    constraint catches the ones that do.

    Args:
        supabase: Supabase client
        now: Evaluation time (defaults to current UTC time)
        resolve_locale: Locale lookup for reminder recipients
        dry_run: If True, report due reminders without inserting them

    Returns:
        {"success": True, "reminders_sent", "processed", "failed", "errors"}
        or {"success": False, "error"} if the run could not start
    """
    if now is None:
        now = utc_now()
    elif now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    print("🔔 Checking for rating reminders...")
    print(f"⏰ Current time: {now.isoformat()}")

    try:
        deliveries = _fetch_delivered_deliveries(supabase)
        print(f"📦 Found {len(deliveries)} delivered deliveries")
    except Exception as e:
        error_file = log_notification_error(
            error_type="rating_reminder",
            error_message=str(e),
            context={"now": now.isoformat(), "dry_run": dry_run},
        )
        print(f"❌ Error checking rating reminders. Details logged to: {error_file}")
        return {"success": False, "error": str(e)}

    reminders_sent = 0
    errors: List[Dict[str, str]] = []

    for delivery in deliveries:
        try:
            reminders_sent += process_delivery_reminders(
                supabase, delivery, now, resolve_locale, dry_run
            )
        except Exception as e:
            errors.append({"delivery_id": delivery.get("id"), "error": str(e)})
            error_file = log_notification_error(
                error_type="rating_reminder",
                error_message=str(e),
                context={
                    "delivery_id": delivery.get("id"),
                    "sender_id": delivery.get("sender_id"),
                    "receiver_id": delivery.get("receiver_id"),
                },
            )
            print(f"  ✗ Delivery {delivery.get('id')} failed. Details logged to: {error_file}")

    print(f"🎉 Rating reminder check complete. Sent {reminders_sent} reminder(s).")

    return {
        "success": True,
        "reminders_sent": reminders_sent,
        "processed": len(deliveries),
        "failed": len(errors),
        "errors": errors,
    }
