from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from campus_reservations.core.dependencies import get_current_actor
from campus_reservations.db.session import get_db
from campus_reservations.schemas.actor import Actor
from campus_reservations.schemas.event import EventCreate, EventLinkUpdate, EventOut, EventVisibility
from campus_reservations.services import events

router = APIRouter(prefix="/events", tags=["Events"])


# =====================================================================
# CREATE EVENT  (club faculty / Admin)
# =====================================================================
@router.post("/", response_model=EventOut)
def create_event(
    data: EventCreate,
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    return events.create_event(db, actor, data)


# =====================================================================
# LIST EVENTS
# =====================================================================
@router.get("/", response_model=list[EventOut])
def list_events(
    club_id: Optional[str] = None,
    include_hidden: bool = False,
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    return events.list_events(db, actor, club_id=club_id, include_hidden=include_hidden)


# =====================================================================
# EVENT DETAILS
# =====================================================================
@router.get("/{event_id}", response_model=EventOut)
def get_event(event_id: int, actor: Actor = Depends(get_current_actor), db: Session = Depends(get_db)):
    return events.get_event(db, event_id)


# =====================================================================
# VISIBILITY TOGGLE
# =====================================================================
@router.put("/{event_id}/visibility", response_model=EventOut)
def set_visibility(
    event_id: int,
    data: EventVisibility,
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    return events.set_visibility(db, actor, event_id, data.hidden)


# =====================================================================
# REGISTRATION LINK (switches the intake flow)
# =====================================================================
@router.put("/{event_id}/link", response_model=EventOut)
def update_link(
    event_id: int,
    data: EventLinkUpdate,
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    return events.update_event_link(db, actor, event_id, data.registration_form_link)
