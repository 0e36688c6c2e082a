from datetime import date, time
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from campus_reservations.core.dependencies import get_current_actor
from campus_reservations.db.session import get_db
from campus_reservations.models.enums import VenueType
from campus_reservations.schemas.actor import Actor
from campus_reservations.schemas.venue import VenueCreate, VenueUpdate, VenueOut
from campus_reservations.services import availability, catalog

router = APIRouter(prefix="/venues", tags=["Venues"])


# =====================================================================
# LIST VENUES
# =====================================================================
@router.get("/", response_model=list[VenueOut])
def list_venues(
    include_inactive: bool = False,
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    return catalog.list_venues(db, actor, include_inactive=include_inactive)


# =====================================================================
# VENUE COUNT (stats)
# =====================================================================
@router.get("/count")
def venue_count(actor: Actor = Depends(get_current_actor), db: Session = Depends(get_db)):
    return {"total_venues": catalog.count_active_venues(db)}


# =====================================================================
# SEARCH AVAILABLE VENUES FOR A DATE + TIME SLOT
# =====================================================================
@router.get("/available", response_model=list[VenueOut])
def search_available(
    booking_date: date,
    start_time: time,
    end_time: time,
    capacity: int = Query(1),
    type: Optional[VenueType] = None,
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    return availability.search_available(
        db, actor, booking_date, start_time, end_time, capacity, type
    )


# =====================================================================
# ADD VENUE  (Admin / Office)
# =====================================================================
@router.post("/", response_model=VenueOut)
def add_venue(
    data: VenueCreate,
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    return catalog.add_venue(db, actor, data)


# =====================================================================
# UPDATE VENUE  (Admin / Office)
# =====================================================================
@router.put("/{venue_id}", response_model=VenueOut)
def update_venue(
    venue_id: int,
    data: VenueUpdate,
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    return catalog.update_venue(db, actor, venue_id, data)


# =====================================================================
# DEACTIVATE VENUE  (soft delete)
# =====================================================================
@router.delete("/{venue_id}", response_model=VenueOut)
def deactivate_venue(
    venue_id: int,
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    return catalog.deactivate_venue(db, actor, venue_id)


# =====================================================================
# VENUE DETAILS
# =====================================================================
@router.get("/{venue_id}", response_model=VenueOut)
def get_venue(venue_id: int, actor: Actor = Depends(get_current_actor), db: Session = Depends(get_db)):
    return catalog.get_venue(db, venue_id)
