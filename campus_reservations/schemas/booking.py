from pydantic import BaseModel
from datetime import date, time, datetime
from typing import Optional

from campus_reservations.models.enums import BookingStatus, BookingType


class BookingBase(BaseModel):
    venue_id: int
    booking_date: date
    start_time: time
    end_time: time


class BookingCreate(BookingBase):
    purpose: str
    booking_type: BookingType = BookingType.CLASSROOM
    event_name: Optional[str] = None


class BookingOut(BookingBase):
    id: int
    owner_id: str
    owner_name: Optional[str] = None
    purpose: str
    event_name: Optional[str] = None
    booking_type: BookingType
    status: BookingStatus

    created_at: datetime
    cancelled_at: Optional[datetime] = None
    cancelled_by: Optional[str] = None

    model_config = {"from_attributes": True}
