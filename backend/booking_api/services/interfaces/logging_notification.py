"""
Logging notification sender - no outbound delivery.
"""

from booking_api.core.logging import get_logger
from booking_api.services.interfaces.notification import BookingOutcome, NotificationSender

logger = get_logger(__name__)


class LoggingNotificationSender(NotificationSender):
    """
    Writes the notification to the log instead of sending it.

    Use when:
    - Local development
    - No SMS gateway credentials are configured
    """

    async def notify(self, contact: dict, outcome: BookingOutcome) -> None:
        logger.info(
            "notification_logged",
            booking_id=outcome.booking_id,
            action=outcome.action,
            phone=contact.get("phone"),
            text=outcome.message,
        )
