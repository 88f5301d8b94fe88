"""Ratings between delivery partners."""

from .submit import clear_rating_reminders, submit_review

__all__ = [
    'clear_rating_reminders',
    'submit_review',
]
