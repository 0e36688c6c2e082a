"""Read-only availability queries.

Two intervals ``[a0, a1)`` and ``[b0, b1)`` conflict iff ``a0 < b1`` and
``b0 < a1``; touching intervals (one ends when the other starts) do not.
"""
from datetime import date, time
from typing import Optional

from sqlalchemy import and_, exists
from sqlalchemy.orm import Session

from campus_reservations.core.access import can_book, require
from campus_reservations.core.errors import InvalidRange
from campus_reservations.models.booking import Booking
from campus_reservations.models.enums import BookingStatus, VenueType
from campus_reservations.models.venue import Venue
from campus_reservations.schemas.actor import Actor


def intervals_overlap(a_start, a_end, b_start, b_end) -> bool:
    return a_start < b_end and b_start < a_end


def validate_interval(start_time: time, end_time: time):
    if end_time <= start_time:
        raise InvalidRange(
            "End time must be after start time",
            start_time=start_time.isoformat(),
            end_time=end_time.isoformat(),
        )


def _conflict_clause(venue_id_column, booking_date: date, start_time: time, end_time: time):
    return and_(
        Booking.venue_id == venue_id_column,
        Booking.booking_date == booking_date,
        Booking.status == BookingStatus.CONFIRMED.value,
        Booking.start_time < end_time,
        Booking.end_time > start_time,
    )


def find_conflicts(
    db: Session, venue_id: int, booking_date: date, start_time: time, end_time: time
) -> list[Booking]:
    """CONFIRMED bookings on the venue and date that overlap the interval."""
    return (
        db.query(Booking)
        .filter(_conflict_clause(venue_id, booking_date, start_time, end_time))
        .order_by(Booking.start_time, Booking.id)
        .all()
    )


def find_available(
    db: Session,
    booking_date: date,
    start_time: time,
    end_time: time,
    min_capacity: int = 1,
    venue_type: Optional[VenueType] = None,
) -> list[Venue]:
    """Active venues big enough, of the right type, with no conflicting booking.

    Ordered by venue id.
    """
    validate_interval(start_time, end_time)
    if min_capacity < 1:
        raise InvalidRange("Capacity must be at least 1", min_capacity=min_capacity)

    query = db.query(Venue).filter(
        Venue.active == True,
        Venue.capacity >= min_capacity,
        ~exists().where(_conflict_clause(Venue.id, booking_date, start_time, end_time)),
    )
    if venue_type is not None:
        query = query.filter(Venue.type == VenueType(venue_type).value)

    return query.order_by(Venue.id).all()


def search_available(
    db: Session,
    actor: Actor,
    booking_date: date,
    start_time: time,
    end_time: time,
    min_capacity: int = 1,
    venue_type: Optional[VenueType] = None,
) -> list[Venue]:
    """``find_available`` for callers that are allowed to book."""
    require(can_book(actor.role), "search venues for booking", role=actor.role.value)
    return find_available(db, booking_date, start_time, end_time, min_capacity, venue_type)
