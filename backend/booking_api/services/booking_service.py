"""
Booking service: creation, admin actions, reads and deletes.

LIFECYCLE
=========

  create  -> status=Pending, no admin action
  action  -> status=Confirmed|Canceled, admin action stamped with the time
             (and the driver, for confirmations)
  delete  -> row removed

Validation happens before the store is touched. Every store call is wrapped
so driver errors surface as PersistenceError with the driver's message.

Concurrent admin actions on the same booking are not coordinated: each one
is a read followed by a single UPDATE, so the last commit wins.
"""

from datetime import datetime, timezone
from typing import Awaitable, Callable, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from booking_api.core.exceptions import NotFoundError, PersistenceError, ValidationError
from booking_api.core.logging import get_logger
from booking_api.core.metrics import booking_latency, record_admin_action, record_booking_operation
from booking_api.models.booking import Booking
from booking_api.schemas.booking import AdminActionRequest, BookingCreate
from booking_api.services.validation import (
    CONTACT_REQUIRED_MESSAGE,
    DRIVER_INVALID_MESSAGE,
    DRIVER_REQUIRED_MESSAGE,
    FieldError,
    validate_admin_action,
    validate_booking_create,
    validate_contact_presence,
    validate_driver_presence,
)

logger = get_logger(__name__)

T = TypeVar("T")


async def _store_call(
    db: AsyncSession,
    operation: str,
    failure_message: str,
    call: Callable[[], Awaitable[T]],
) -> T:
    try:
        return await call()
    except SQLAlchemyError as e:
        await db.rollback()
        record_booking_operation(operation, "error")
        logger.error("booking_persistence_error", operation=operation, error=str(e))
        raise PersistenceError(failure_message, error=str(e)) from e


async def _find_booking(db: AsyncSession, booking_id: str) -> Booking | None:
    result = await db.execute(select(Booking).where(Booking.id == booking_id))
    return result.scalar_one_or_none()


def _as_utc(value: datetime | None) -> datetime | None:
    """Store instants in UTC; a naive datetime is taken to be UTC already."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _admin_action_message(data: AdminActionRequest, errors: list[FieldError]) -> str:
    if any(e.field == "action" for e in errors):
        return "Invalid action"
    if validate_driver_presence(data):
        return DRIVER_REQUIRED_MESSAGE
    return DRIVER_INVALID_MESSAGE


def _not_found(operation: str, booking_id: str) -> NotFoundError:
    record_booking_operation(operation, "not_found")
    logger.info("booking_not_found", operation=operation, booking_id=booking_id)
    return NotFoundError("Booking not found")


async def create_booking(db: AsyncSession, data: BookingCreate) -> Booking:
    """
    Persist a new Pending booking.
    Raises ValidationError for a missing/partial contact or malformed fields.
    """
    missing = validate_contact_presence(data)
    if missing:
        record_booking_operation("create", "invalid")
        raise ValidationError(CONTACT_REQUIRED_MESSAGE, errors=missing)

    errors = validate_booking_create(data)
    if errors:
        record_booking_operation("create", "invalid")
        logger.info("booking_rejected", errors=[e.field for e in errors])
        raise ValidationError("Invalid booking data", errors=errors)

    booking = Booking(
        service_type=data.service_type,
        sub_service_type=data.sub_service_type,
        source_city=data.source_city,
        route=[stop.model_dump(include={"pickup", "drop"}) for stop in data.route or []],
        pickup_datetime=_as_utc(data.pickup_date_time),
        drop_datetime=_as_utc(data.drop_date_time),
        distance=data.distance,
        status="Pending",
        contact_name=data.contact.name.strip(),
        contact_email=data.contact.email.strip(),
        contact_phone=data.contact.phone,
    )

    async def _save() -> Booking:
        db.add(booking)
        await db.commit()
        await db.refresh(booking)
        return booking

    with booking_latency.labels(operation="create").time():
        await _store_call(db, "create", "Failed to create booking", _save)

    record_booking_operation("create", "success")
    logger.info(
        "booking_created",
        booking_id=booking.id,
        service_type=booking.service_type,
        stops=len(booking.route),
    )
    return booking


async def apply_admin_action(
    db: AsyncSession,
    booking_id: str,
    data: AdminActionRequest,
) -> Booking:
    """
    Confirm or cancel a booking.

    Status and admin action are written in one commit. A confirmation records
    the driver; a cancellation clears any driver from an earlier confirmation.
    Re-applying an action is allowed.
    """
    errors = validate_admin_action(data)
    if errors:
        record_booking_operation("action", "invalid")
        raise ValidationError(_admin_action_message(data, errors), errors=errors)

    async def _apply() -> Booking | None:
        booking = await _find_booking(db, booking_id)
        if booking is None:
            return None

        booking.status = data.action
        booking.action = data.action
        booking.action_datetime = datetime.now(timezone.utc)
        if data.action == "Confirmed":
            booking.driver_name = data.driver.name.strip()
            booking.driver_phone = data.driver.phone
            booking.driver_photo = data.driver.photo
        else:
            booking.driver_name = None
            booking.driver_phone = None
            booking.driver_photo = None

        await db.commit()
        await db.refresh(booking)
        return booking

    with booking_latency.labels(operation="action").time():
        booking = await _store_call(db, "action", "Failed to update booking", _apply)

    if booking is None:
        raise _not_found("action", booking_id)

    record_booking_operation("action", "success")
    record_admin_action(data.action)
    logger.info(
        "booking_action_applied",
        booking_id=booking.id,
        action=data.action,
        driver=booking.driver_name,
    )
    return booking


async def list_bookings(db: AsyncSession) -> list[Booking]:
    """All bookings, oldest first. No filtering or pagination."""

    async def _query() -> list[Booking]:
        result = await db.execute(select(Booking).order_by(Booking.created_at.asc()))
        return list(result.scalars().all())

    with booking_latency.labels(operation="list").time():
        bookings = await _store_call(db, "list", "Failed to retrieve bookings", _query)

    record_booking_operation("list", "success")
    return bookings


async def get_booking(db: AsyncSession, booking_id: str) -> Booking:
    with booking_latency.labels(operation="get").time():
        booking = await _store_call(
            db, "get", "Failed to retrieve booking", lambda: _find_booking(db, booking_id)
        )

    if booking is None:
        raise _not_found("get", booking_id)

    record_booking_operation("get", "success")
    return booking


async def delete_booking(db: AsyncSession, booking_id: str) -> Booking:
    """Remove a booking and return it as it was before deletion."""

    async def _delete() -> Booking | None:
        booking = await _find_booking(db, booking_id)
        if booking is None:
            return None
        await db.delete(booking)
        await db.commit()
        return booking

    with booking_latency.labels(operation="delete").time():
        booking = await _store_call(db, "delete", "Failed to delete booking", _delete)

    if booking is None:
        raise _not_found("delete", booking_id)

    record_booking_operation("delete", "success")
    logger.info("booking_deleted", booking_id=booking_id)
    return booking
