"""
Booking model: one transport-service request.

Key design decisions:
- String UUID primary key so identifiers stay opaque to clients
- Contact and driver are flattened into columns; the route keeps its stop
  order as a JSON list of {pickup, drop}
- Status is guarded by a CHECK constraint as well as by the service layer
- Free-text fields are unbounded Text; only the validated phone columns
  carry a length
"""

import uuid

from sqlalchemy import Column, String, Text, DateTime, Float, JSON, CheckConstraint, Index

from booking_api.db.base import Base, TimestampMixin

BOOKING_STATUSES = ("Pending", "Confirmed", "Canceled")
ADMIN_ACTIONS = ("Confirmed", "Canceled")


def _new_booking_id() -> str:
    return str(uuid.uuid4())


class Booking(Base, TimestampMixin):
    __tablename__ = "bookings"

    id = Column(String(36), primary_key=True, default=_new_booking_id)

    service_type = Column(Text, nullable=True)
    sub_service_type = Column(Text, nullable=True)
    source_city = Column(Text, nullable=True)
    route = Column(JSON, nullable=False, default=list)
    pickup_datetime = Column(DateTime(timezone=True), nullable=True)
    drop_datetime = Column(DateTime(timezone=True), nullable=True)
    distance = Column(Float, nullable=True)

    status = Column(String(20), nullable=False, default="Pending")

    contact_name = Column(Text, nullable=False)
    contact_email = Column(Text, nullable=False)
    contact_phone = Column(String(10), nullable=False)

    # Admin action; action and action_datetime are always written together
    action = Column(String(20), nullable=True)
    action_datetime = Column(DateTime(timezone=True), nullable=True)
    driver_name = Column(Text, nullable=True)
    driver_phone = Column(String(10), nullable=True)
    driver_photo = Column(Text, nullable=True)

    __table_args__ = (
        CheckConstraint(
            "status IN ('Pending', 'Confirmed', 'Canceled')", name="check_booking_status"
        ),
        CheckConstraint(
            "action IS NULL OR action IN ('Confirmed', 'Canceled')", name="check_booking_action"
        ),
        Index("ix_bookings_created_at", "created_at"),
    )

    @property
    def contact(self) -> dict:
        return {
            "name": self.contact_name,
            "email": self.contact_email,
            "phone": self.contact_phone,
        }

    @property
    def driver(self) -> dict | None:
        if not self.driver_name:
            return None
        return {
            "name": self.driver_name,
            "phone": self.driver_phone,
            "photo": self.driver_photo,
        }

    @property
    def admin_action(self) -> dict | None:
        if self.action is None:
            return None
        return {
            "action": self.action,
            "action_datetime": self.action_datetime,
            "driver": self.driver,
        }

    def __repr__(self) -> str:
        return f"<Booking(id={self.id}, status={self.status}, contact={self.contact_email})>"
