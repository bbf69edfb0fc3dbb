"""
Booking endpoints: create, admin action, list, get, delete.
"""

from fastapi import APIRouter, BackgroundTasks, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from booking_api.db.session import get_db
from booking_api.api.dependencies import get_notification_sender
from booking_api.schemas.booking import (
    AdminActionRequest,
    BookingCreate,
    BookingEnvelope,
    BookingListEnvelope,
)
from booking_api.services.booking_service import (
    apply_admin_action,
    create_booking,
    delete_booking,
    get_booking,
    list_bookings,
)
from booking_api.services.interfaces.notification import BookingOutcome, NotificationSender
from booking_api.services.notification_service import notify_safely

router = APIRouter(prefix="/bookings", tags=["Bookings"])


@router.post("", response_model=BookingEnvelope, status_code=status.HTTP_201_CREATED)
async def create_booking_endpoint(
    booking_data: BookingCreate,
    db: AsyncSession = Depends(get_db),
):
    """
    Create a booking in Pending status.

    The contact (name, email, 10-digit phone) is required; any status sent by
    the client is ignored.
    """
    booking = await create_booking(db, booking_data)
    return {"message": "Booking created", "booking": booking}


@router.put("/{booking_id}/action", response_model=BookingEnvelope)
async def admin_action_endpoint(
    booking_id: str,
    action_data: AdminActionRequest,
    background_tasks: BackgroundTasks,
    db: AsyncSession = Depends(get_db),
    sender: NotificationSender = Depends(get_notification_sender),
):
    """
    Confirm or cancel a booking. Confirming requires driver name and phone.

    The contact is notified after the change is committed; delivery failures
    do not affect this response.
    """
    booking = await apply_admin_action(db, booking_id, action_data)

    outcome = BookingOutcome(
        booking_id=booking.id,
        action=booking.action,
        driver_name=booking.driver_name,
        driver_phone=booking.driver_phone,
    )
    background_tasks.add_task(notify_safely, sender, booking.contact, outcome)

    return {"message": f"Booking {booking.action}", "booking": booking}


@router.get("", response_model=BookingListEnvelope)
async def list_bookings_endpoint(db: AsyncSession = Depends(get_db)):
    """Every booking, unfiltered and unpaginated."""
    bookings = await list_bookings(db)
    return {"message": "All bookings retrieved", "bookings": bookings}


@router.get("/{booking_id}", response_model=BookingEnvelope)
async def get_booking_endpoint(booking_id: str, db: AsyncSession = Depends(get_db)):
    booking = await get_booking(db, booking_id)
    return {"message": "Booking retrieved", "booking": booking}


@router.delete("/{booking_id}", response_model=BookingEnvelope)
async def delete_booking_endpoint(booking_id: str, db: AsyncSession = Depends(get_db)):
    """Delete a booking and return the removed record."""
    booking = await delete_booking(db, booking_id)
    return {"message": "Booking deleted successfully", "booking": booking}
