"""
Service interfaces for dependency inversion.
Allows swapping implementations without changing business logic.
"""

from .notification import BookingOutcome, NotificationSender
from .logging_notification import LoggingNotificationSender

__all__ = ['BookingOutcome', 'NotificationSender', 'LoggingNotificationSender']
