"""
Pydantic schemas for booking request/response validation.

Wire names are camelCase; snake_case is accepted on input as well. Request
models are deliberately permissive about presence so that missing contact or
driver data is reported by the validation rules with the service's own
messages instead of a generic schema error.
"""

from datetime import datetime, timezone
from typing import Annotated, Optional

from pydantic import AfterValidator, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


def _assume_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes; everything is stored in UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


UtcDatetime = Annotated[datetime, AfterValidator(_assume_utc)]


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class RouteStop(CamelModel):
    pickup: Optional[str] = None
    drop: Optional[str] = None


class ContactIn(CamelModel):
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None


class DriverIn(CamelModel):
    name: Optional[str] = None
    phone: Optional[str] = None
    photo: Optional[str] = None


class BookingCreate(CamelModel):
    service_type: Optional[str] = None
    sub_service_type: Optional[str] = None
    source_city: Optional[str] = None
    route: Optional[list[RouteStop]] = None
    pickup_date_time: Optional[datetime] = None
    drop_date_time: Optional[datetime] = None
    distance: Optional[float] = None
    contact: Optional[ContactIn] = None


class AdminActionRequest(CamelModel):
    action: Optional[str] = None
    driver: Optional[DriverIn] = None


class ContactResponse(CamelModel):
    name: str
    email: str
    phone: str


class DriverResponse(CamelModel):
    name: str
    phone: Optional[str] = None
    photo: Optional[str] = None


class AdminActionResponse(CamelModel):
    action: str
    action_date_time: UtcDatetime = Field(validation_alias="action_datetime")
    driver: Optional[DriverResponse] = None


class BookingResponse(CamelModel):
    id: str
    service_type: Optional[str] = None
    sub_service_type: Optional[str] = None
    source_city: Optional[str] = None
    route: list[RouteStop] = []
    pickup_date_time: Optional[UtcDatetime] = Field(default=None, validation_alias="pickup_datetime")
    drop_date_time: Optional[UtcDatetime] = Field(default=None, validation_alias="drop_datetime")
    distance: Optional[float] = None
    status: str
    contact: ContactResponse
    admin_action: Optional[AdminActionResponse] = None
    created_at: Optional[UtcDatetime] = None
    updated_at: Optional[UtcDatetime] = None


class BookingEnvelope(CamelModel):
    message: str
    booking: BookingResponse


class BookingListEnvelope(CamelModel):
    message: str
    bookings: list[BookingResponse]
