"""
SMS notifications for admin actions.

Delivery is best effort:
  The admin action is committed before any notification is attempted, and
  notify_safely() swallows every delivery error after logging it. A gateway
  outage therefore never fails or rolls back a confirmation or cancellation.
  There is no retry or outbox; a lost message is only visible in the logs and
  in the notifications_total{result="failed"} counter.
"""

import httpx

from booking_api.core.config import Settings
from booking_api.core.logging import get_logger
from booking_api.core.metrics import record_notification
from booking_api.services.interfaces.logging_notification import LoggingNotificationSender
from booking_api.services.interfaces.notification import BookingOutcome, NotificationSender

logger = get_logger(__name__)


def normalize_phone(phone: str, country_prefix: str = "+91") -> str:
    """
    Normalize a local phone number to international form.

    "098765 43210" -> "+919876543210"; numbers that already carry the
    country code, with or without a trunk "0" in front, are not prefixed twice.
    """
    digits = "".join(ch for ch in phone if ch.isdigit()).lstrip("0")
    prefix_digits = country_prefix.lstrip("+")
    if len(digits) > 10 and digits.startswith(prefix_digits):
        return f"+{digits}"
    return f"{country_prefix}{digits}"


class SmsGatewaySender(NotificationSender):
    """Sends the outcome as an SMS through an HTTP gateway (JSON POST)."""

    def __init__(
        self,
        gateway_url: str,
        api_key: str,
        sender_id: str,
        country_prefix: str = "+91",
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.gateway_url = gateway_url
        self.api_key = api_key
        self.sender_id = sender_id
        self.country_prefix = country_prefix
        self.timeout = timeout
        self._transport = transport

    async def notify(self, contact: dict, outcome: BookingOutcome) -> None:
        to = normalize_phone(contact["phone"], self.country_prefix)
        payload = {
            "to": to,
            "from": self.sender_id,
            "message": outcome.message,
        }
        headers = {"Authorization": f"Bearer {self.api_key}"}
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            response = await client.post(self.gateway_url, json=payload, headers=headers)
            response.raise_for_status()
        logger.info("sms_sent", booking_id=outcome.booking_id, to=to, action=outcome.action)


async def notify_safely(sender: NotificationSender, contact: dict, outcome: BookingOutcome) -> None:
    """Run a sender, logging and swallowing any failure."""
    try:
        await sender.notify(contact, outcome)
        record_notification(sent=True)
    except Exception as e:
        record_notification(sent=False)
        logger.error(
            "notification_failed",
            booking_id=outcome.booking_id,
            action=outcome.action,
            error=str(e),
        )


def build_notification_sender(settings: Settings) -> NotificationSender:
    """
    Pick the sender for this deployment.

    SMS is used only when enabled and a gateway URL is configured; otherwise
    notifications are just logged.
    """
    if settings.SMS_ENABLED and settings.SMS_GATEWAY_URL:
        logger.info("sms_notifications_enabled", gateway=settings.SMS_GATEWAY_URL)
        return SmsGatewaySender(
            gateway_url=settings.SMS_GATEWAY_URL,
            api_key=settings.SMS_API_KEY,
            sender_id=settings.SMS_SENDER_ID,
            country_prefix=settings.SMS_COUNTRY_PREFIX,
            timeout=settings.SMS_TIMEOUT_SECONDS,
        )
    return LoggingNotificationSender()
