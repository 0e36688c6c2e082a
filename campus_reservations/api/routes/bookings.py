from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from campus_reservations.core.dependencies import get_current_actor
from campus_reservations.db.session import get_db
from campus_reservations.models.enums import BookingStatus
from campus_reservations.schemas.actor import Actor
from campus_reservations.schemas.booking import BookingCreate, BookingOut
from campus_reservations.services import ledger

router = APIRouter(prefix="/bookings", tags=["Bookings"])


# =====================================================================
# CREATE BOOKING
# =====================================================================
@router.post("/", response_model=BookingOut)
def create_booking(
    data: BookingCreate,
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    return ledger.reserve(
        db,
        actor,
        venue_id=data.venue_id,
        booking_date=data.booking_date,
        start_time=data.start_time,
        end_time=data.end_time,
        purpose=data.purpose,
        booking_type=data.booking_type,
        event_name=data.event_name,
    )


# =====================================================================
# CANCEL BOOKING (owner or Admin / Office)
# =====================================================================
@router.put("/{booking_id}/cancel", response_model=BookingOut)
def cancel_booking(
    booking_id: int,
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    return ledger.cancel(db, actor, booking_id)


# =====================================================================
# MY BOOKINGS
# =====================================================================
@router.get("/my", response_model=list[BookingOut])
def my_bookings(
    upcoming_only: bool = False,
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    return ledger.list_mine(db, actor, upcoming_only=upcoming_only)


# =====================================================================
# ALL BOOKINGS (Admin / Office oversight)
# =====================================================================
@router.get("/", response_model=list[BookingOut])
def all_bookings(
    booking_date: Optional[date] = None,
    venue_id: Optional[int] = None,
    status: Optional[BookingStatus] = None,
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    return ledger.list_all(db, actor, booking_date=booking_date, venue_id=venue_id, status=status)
