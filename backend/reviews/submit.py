"""
Review submission.

Stores a rating between delivery partners, clears the reviewer's pending
rating reminders for that delivery and notifies the reviewee.
"""

from typing import Any, Dict, Optional

from models.notification import RATING_REMINDER, REVIEW, NotificationCreate
from models.review import Review, ReviewCreate
from notifications.content import generate_review_notification
from notifications.error_logger import log_notification_error
from notifications.locale import LocaleResolver, default_locale
from notifications.rating_reminders import resolve_related_id


def clear_rating_reminders(
    supabase: Any, delivery_id: str, reviewer_id: str, reviewee_id: str
) -> int:
    """
    Delete the reviewer's rating reminders for a delivery.

    Reminders are attached either to the pair's conversation or, when there
    is none, to the delivery itself; both are cleared.

    Returns:
        Number of notifications deleted
    """
    conversations = (
        supabase.table("conversations")
        .select("id, delivery_id, participant1_id, participant2_id")
        .eq("delivery_id", delivery_id)
        .execute()
    ).data or []

    related_ids = list(dict.fromkeys([
        delivery_id,
        resolve_related_id(conversations, delivery_id, reviewer_id, reviewee_id),
    ]))

    response = (
        supabase.table("notifications")
        .delete()
        .eq("user_id", reviewer_id)
        .eq("type", RATING_REMINDER)
        .in_("related_id", related_ids)
        .execute()
    )
    return len(response.data or [])


def submit_review(
    supabase: Any,
    delivery_id: str,
    reviewer_id: str,
    reviewee_id: str,
    rating: int,
    comment: Optional[str] = None,
    resolve_locale: LocaleResolver = default_locale,
) -> Dict[str, Any]:
    """
    Create a review.

    Raises:
        pydantic.ValidationError: rating outside 1-5, missing IDs or self-review
        LookupError: the delivery does not exist

    Returns:
        The created review row
    """
    review = ReviewCreate(
        delivery_id=delivery_id,
        reviewer_id=reviewer_id,
        reviewee_id=reviewee_id,
        rating=rating,
        comment=comment or None,
    )

    delivery = (
        supabase.table("deliveries").select("id").eq("id", review.delivery_id).limit(1).execute()
    )
    if not delivery.data:
        raise LookupError(f"Delivery {review.delivery_id} not found")

    response = supabase.table("reviews").insert(review.model_dump(mode="json")).execute()
    created = Review.model_validate(response.data[0]).model_dump(mode="json")

    # Reminder cleanup and the reviewee notification must not fail the review
    try:
        deleted = clear_rating_reminders(
            supabase, review.delivery_id, review.reviewer_id, review.reviewee_id
        )
        print(f"🗑️ Deleted {deleted} rating reminder(s) for reviewer {review.reviewer_id}")
    except Exception as e:
        log_notification_error(
            error_type="review_cleanup",
            error_message=str(e),
            context={"delivery_id": review.delivery_id, "reviewer_id": review.reviewer_id},
        )

    try:
        reviewer = (
            supabase.table("users").select("id, name").eq("id", review.reviewer_id).limit(1).execute()
        )
        reviewer_name = reviewer.data[0].get("name") if reviewer.data else None

        content = generate_review_notification(
            review.rating, reviewer_name, review.comment, resolve_locale(review.reviewee_id)
        )
        notification = NotificationCreate(
            user_id=review.reviewee_id,
            type=REVIEW,
            related_id=created.get("id"),
            is_read=False,
            **content,
        ).model_dump(mode="json", exclude_none=True)
        supabase.table("notifications").insert(notification).execute()
        print(f"✅ Review notification created for user {review.reviewee_id}")
    except Exception as e:
        log_notification_error(
            error_type="review_notification",
            error_message=str(e),
            context={"delivery_id": review.delivery_id, "reviewee_id": review.reviewee_id},
        )

    return created
