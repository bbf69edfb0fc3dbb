"""
Notification sender interface.
Booking outcomes are reported to the contact through whichever sender is
configured; the booking service never depends on a concrete gateway.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class BookingOutcome:
    """What happened to a booking, as told to its contact."""

    booking_id: str
    action: str  # Confirmed, Canceled
    driver_name: Optional[str] = None
    driver_phone: Optional[str] = None

    @property
    def message(self) -> str:
        if self.action == "Confirmed":
            text = f"Your booking {self.booking_id} has been confirmed."
            if self.driver_name:
                text += f" Driver: {self.driver_name} ({self.driver_phone})."
            return text
        return f"Your booking {self.booking_id} has been canceled."


class NotificationSender(ABC):
    """
    Interface for booking outcome notifications.

    Implementations:
    - LoggingNotificationSender: log only, used when no gateway is configured
    - SmsGatewaySender: SMS through an HTTP gateway
    """

    @abstractmethod
    async def notify(self, contact: dict, outcome: BookingOutcome) -> None:
        """
        Tell the contact about the outcome.

        Args:
            contact: {name, email, phone} of the booking
            outcome: the applied admin action

        Raises whatever the transport raises; callers decide whether a
        failure matters.
        """
        pass
