# Rating reminder schedule. Every step is measured from the delivery's
# confirmation message, not from when the delivery was created.
REMINDER_THRESHOLD_HOURS = (3, 24, 48, 96, 168)

# Legacy reminders stored without threshold_hours count as covering step T
# when created at or after confirmation + (T - REMINDER_WINDOW_SLACK_HOURS).
REMINDER_WINDOW_SLACK_HOURS = 1
