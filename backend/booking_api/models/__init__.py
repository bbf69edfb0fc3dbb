from booking_api.models.booking import Booking, BOOKING_STATUSES, ADMIN_ACTIONS

__all__ = ["Booking", "BOOKING_STATUSES", "ADMIN_ACTIONS"]
