"""
Saved delivery alerts: create, list and delete.

Users save alerts describing the routes they care about; the alert matcher
notifies them when a new delivery fits.
"""

from typing import Any, Dict, List

from models.alert import Alert, AlertCreate


def create_alert(supabase: Any, user_id: str, payload: Dict[str, Any]) -> Dict[str, Any]:
    """
    Create an active alert for a user.

    Raises:
        ValueError: missing user ID
        pydantic.ValidationError: missing name/alert_type or unknown alert_type
    """
    if not user_id:
        raise ValueError("user_id is required")

    alert = AlertCreate.model_validate(payload)
    row = {**alert.model_dump(), "user_id": user_id, "is_active": True}

    response = supabase.table("alerts").insert(row).execute()
    created = response.data[0] if response.data else row
    print(f"🔔 New delivery alert created for user {user_id}: {alert.name}")
    return created


def list_alerts(supabase: Any, user_id: str) -> List[Dict[str, Any]]:
    """Active alerts of a user, newest first."""
    response = (
        supabase.table("alerts")
        .select("*")
        .eq("user_id", user_id)
        .eq("is_active", True)
        .order("created_at", desc=True)
        .execute()
    )
    return [Alert.model_validate(row).model_dump(mode="json") for row in (response.data or [])]


def delete_alert(supabase: Any, user_id: str, alert_id: str) -> None:
    """
    Delete one of the user's alerts.

    Raises:
        LookupError: alert does not exist
        PermissionError: alert belongs to another user
    """
    response = (
        supabase.table("alerts").select("id, user_id").eq("id", alert_id).limit(1).execute()
    )
    if not response.data:
        raise LookupError(f"Alert {alert_id} not found")

    if response.data[0]["user_id"] != user_id:
        raise PermissionError("Unauthorized to delete this alert")

    supabase.table("alerts").delete().eq("id", alert_id).execute()
    print(f"🗑️ Alert deleted: {alert_id}")
