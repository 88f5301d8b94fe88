"""
Notification system for the Bagami delivery marketplace.

This module handles:
- Matching new deliveries against users' saved alerts
- Sending rating reminders after a delivery is confirmed
- Generating localized notification content
- Emailing alert matches via Resend
"""

from .alert_matcher import check_and_notify_alert_matches, match_delivery_to_alerts
from .rating_reminders import check_and_send_rating_reminders

__all__ = [
    'check_and_notify_alert_matches',
    'match_delivery_to_alerts',
    'check_and_send_rating_reminders',
]
