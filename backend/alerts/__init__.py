"""Saved delivery alerts."""

from .manage_alerts import create_alert, delete_alert, list_alerts

__all__ = [
    'create_alert',
    'delete_alert',
    'list_alerts',
]
