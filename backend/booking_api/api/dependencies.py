"""
Request-scoped dependencies that are not tied to the database.
"""

from fastapi import Request

from booking_api.services.interfaces.logging_notification import LoggingNotificationSender
from booking_api.services.interfaces.notification import NotificationSender


def get_notification_sender(request: Request) -> NotificationSender:
    """Sender built in the lifespan; falls back to logging when none was set up."""
    sender = getattr(request.app.state, "notification_sender", None)
    return sender or LoggingNotificationSender()
