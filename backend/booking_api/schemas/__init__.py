from booking_api.schemas.booking import (
    AdminActionRequest,
    BookingCreate,
    BookingEnvelope,
    BookingListEnvelope,
    BookingResponse,
)

__all__ = [
    "AdminActionRequest", "BookingCreate",
    "BookingEnvelope", "BookingListEnvelope", "BookingResponse",
]
