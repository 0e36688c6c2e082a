"""Booking ledger: the only writer of venue bookings.

``reserve`` runs check-then-insert inside one transaction that first bumps
the venue-day guard row (``VenueDayLock``). Reservations for the same venue
and date therefore commit one at a time; reservations for anything else
never wait on each other. Storage-level races (the guard row being created
twice, the PostgreSQL exclusion constraint, serialization failures, a busy
SQLite file) roll back and replay the whole request, so ``SlotTaken`` is
only reported after a conflicting booking has been read from committed data.
"""
import random
import time as time_module
from datetime import date, datetime, time
from typing import Optional

from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.orm import Session

from campus_reservations.core.access import (
    can_book, can_cancel_booking, can_view_all_bookings, require
)
from campus_reservations.core.config import BOOKING_MAX_RETRIES, BOOKING_RETRY_BACKOFF_MS
from campus_reservations.core.errors import (
    NotFound, ReservationError, SlotTaken, VenueInactive
)
from campus_reservations.core.logging_config import booking_logger
from campus_reservations.models.booking import Booking
from campus_reservations.models.enums import BookingStatus, BookingType
from campus_reservations.models.venue import Venue
from campus_reservations.models.venue_day_lock import VenueDayLock
from campus_reservations.schemas.actor import Actor
from campus_reservations.services.availability import find_conflicts, validate_interval

# serialization_failure, deadlock_detected, lock_not_available
RETRYABLE_SQLSTATES = {"40001", "40P01", "55P03"}
RETRYABLE_MESSAGES = ("database is locked", "deadlock detected", "could not serialize")

# Constraints a concurrent reservation can trip; SQLite reports the columns, not the name
RACE_CONSTRAINTS = {"uq_venue_day_lock", "bookings_no_overlap_per_venue"}
RACE_MESSAGES = ("uq_venue_day_lock", "bookings_no_overlap_per_venue", "venue_day_locks.venue_id")


def _is_retryable(exc: OperationalError) -> bool:
    orig = getattr(exc, "orig", None)
    pgcode = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
    if pgcode in RETRYABLE_SQLSTATES:
        return True
    message = str(exc).lower()
    return any(text in message for text in RETRYABLE_MESSAGES)


def _is_reservation_race(exc: IntegrityError) -> bool:
    diag = getattr(getattr(exc, "orig", None), "diag", None)
    if getattr(diag, "constraint_name", None) in RACE_CONSTRAINTS:
        return True
    message = str(getattr(exc, "orig", exc))
    return any(text in message for text in RACE_MESSAGES)


def _backoff(attempt: int):
    base = BOOKING_RETRY_BACKOFF_MS / 1000
    time_module.sleep(base * attempt + random.uniform(0, base))


# ---------------------------------------------------------------------
# VENUE-DAY GUARD
# ---------------------------------------------------------------------
def _claim_venue_day(db: Session, venue_id: int, booking_date: date):
    bumped = (
        db.query(VenueDayLock)
        .filter(
            VenueDayLock.venue_id == venue_id,
            VenueDayLock.booking_date == booking_date,
        )
        .update({VenueDayLock.version: VenueDayLock.version + 1}, synchronize_session=False)
    )
    if not bumped:
        # A concurrent first booking of this venue-day makes this flush fail
        db.add(VenueDayLock(venue_id=venue_id, booking_date=booking_date, version=1))
        db.flush()


def _slot_taken(conflict: Booking) -> SlotTaken:
    return SlotTaken(
        "This venue is already booked for the selected time slot",
        venue_id=conflict.venue_id,
        booking_date=conflict.booking_date.isoformat(),
        conflicting_booking_id=conflict.id,
        conflicting_start_time=conflict.start_time.isoformat(),
        conflicting_end_time=conflict.end_time.isoformat(),
    )


def _reserve_once(
    db: Session,
    actor: Actor,
    venue_id: int,
    booking_date: date,
    start_time: time,
    end_time: time,
    purpose: str,
    booking_type: BookingType,
    event_name: Optional[str],
) -> Booking:
    if not db.query(Venue.id).filter(Venue.id == venue_id).first():
        raise NotFound("Venue not found", venue_id=venue_id)

    _claim_venue_day(db, venue_id, booking_date)

    # Read under the guard so a concurrent deactivation is seen
    active = db.query(Venue.active).filter(Venue.id == venue_id).scalar()
    if not active:
        raise VenueInactive("Venue is inactive", venue_id=venue_id)

    conflicts = find_conflicts(db, venue_id, booking_date, start_time, end_time)
    if conflicts:
        raise _slot_taken(conflicts[0])

    booking = Booking(
        venue_id=venue_id,
        owner_id=actor.user_id,
        owner_name=actor.name,
        booking_date=booking_date,
        start_time=start_time,
        end_time=end_time,
        purpose=purpose,
        event_name=event_name,
        booking_type=booking_type.value,
        status=BookingStatus.CONFIRMED.value,
    )
    db.add(booking)
    db.commit()
    db.refresh(booking)
    return booking


# =====================================================================
# RESERVE
# =====================================================================
def reserve(
    db: Session,
    actor: Actor,
    venue_id: int,
    booking_date: date,
    start_time: time,
    end_time: time,
    purpose: str,
    booking_type: BookingType = BookingType.CLASSROOM,
    event_name: Optional[str] = None,
) -> Booking:
    require(can_book(actor.role), "book venues", role=actor.role.value)
    validate_interval(start_time, end_time)
    booking_type = BookingType(booking_type)
    log = booking_logger(actor.user_id, venue_id)

    attempt = 0
    while True:
        attempt += 1
        try:
            booking = _reserve_once(
                db, actor, venue_id, booking_date, start_time, end_time,
                purpose, booking_type, event_name,
            )
            break
        except ReservationError as e:
            db.rollback()
            log.info(
                f"Booking Rejected | {booking_date} {start_time}-{end_time} | {e.kind}"
            )
            raise
        except IntegrityError as e:
            db.rollback()
            if not _is_reservation_race(e):
                log.error(f"Booking rejected by storage | {e.orig}")
                raise
            if attempt >= BOOKING_MAX_RETRIES:
                log.error(f"Booking gave up after {attempt} constraint retries")
                raise
            log.warning(
                f"Booking Retry | {booking_date} | constraint race, attempt {attempt}"
            )
        except OperationalError as e:
            db.rollback()
            if not _is_retryable(e) or attempt >= BOOKING_MAX_RETRIES:
                log.error(f"Booking storage failure | {e}")
                raise
            log.warning(
                f"Booking Retry | {booking_date} | contention, attempt {attempt}"
            )
        _backoff(attempt)

    log.bind(booking_id=booking.id).info(
        f"Booking Created | {booking_date} {start_time}-{end_time}"
    )
    return booking


# =====================================================================
# CANCEL
# =====================================================================
def get_booking(db: Session, booking_id: int) -> Booking:
    booking = db.query(Booking).filter(Booking.id == booking_id).first()
    if not booking:
        raise NotFound("Booking not found", booking_id=booking_id)
    return booking


def cancel(db: Session, actor: Actor, booking_id: int) -> Booking:
    """CONFIRMED -> CANCELLED. Cancelling twice returns the cancelled booking."""
    booking = get_booking(db, booking_id)
    require(
        can_cancel_booking(actor.user_id, booking, actor.role),
        "cancel this booking",
        booking_id=booking_id,
    )

    updated = (
        db.query(Booking)
        .filter(Booking.id == booking_id, Booking.status == BookingStatus.CONFIRMED.value)
        .update(
            {
                Booking.status: BookingStatus.CANCELLED.value,
                Booking.cancelled_at: datetime.utcnow(),
                Booking.cancelled_by: actor.user_id,
            },
            synchronize_session=False,
        )
    )
    db.commit()
    db.refresh(booking)

    if updated:
        booking_logger(actor.user_id, booking.venue_id, booking.id).info("Booking Cancelled")
    return booking


# =====================================================================
# LISTINGS
# =====================================================================
def list_mine(
    db: Session,
    actor: Actor,
    owner_id: Optional[str] = None,
    upcoming_only: bool = False,
    now: Optional[datetime] = None,
) -> list[Booking]:
    owner_id = owner_id or actor.user_id
    if owner_id != actor.user_id:
        require(can_view_all_bookings(actor.role), "view other users' bookings")

    query = db.query(Booking).filter(Booking.owner_id == owner_id)

    if upcoming_only:
        now = now or datetime.now()
        query = query.filter(
            Booking.status == BookingStatus.CONFIRMED.value,
            (Booking.booking_date > now.date())
            | ((Booking.booking_date == now.date()) & (Booking.end_time > now.time())),
        )

    return query.order_by(Booking.created_at.desc(), Booking.id.desc()).all()


def list_all(
    db: Session,
    actor: Actor,
    booking_date: Optional[date] = None,
    venue_id: Optional[int] = None,
    status: Optional[BookingStatus] = None,
) -> list[Booking]:
    require(can_view_all_bookings(actor.role), "view all bookings", role=actor.role.value)

    query = db.query(Booking)
    if booking_date is not None:
        query = query.filter(Booking.booking_date == booking_date)
    if venue_id is not None:
        query = query.filter(Booking.venue_id == venue_id)
    if status is not None:
        query = query.filter(Booking.status == BookingStatus(status).value)

    return query.order_by(Booking.booking_date.desc(), Booking.start_time, Booking.id).all()
