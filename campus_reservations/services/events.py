from typing import Optional

from sqlalchemy.orm import Session

from campus_reservations.core.access import can_manage_events, require
from campus_reservations.core.errors import NotFound
from campus_reservations.core.logging_config import admin_logger
from campus_reservations.models.enums import IntakeFlow, INTERNAL_FORM_SENTINEL
from campus_reservations.models.event import Event
from campus_reservations.schemas.actor import Actor
from campus_reservations.schemas.event import EventCreate


def resolve_intake_flow(link: Optional[str]) -> tuple[IntakeFlow, Optional[str]]:
    """Decide the intake flow once, when the link is set.

    No link, a blank one, or the legacy ``club_form_link`` placeholder all
    mean the club's internal form.
    """
    link = (link or "").strip()
    if not link or link == INTERNAL_FORM_SENTINEL:
        return IntakeFlow.INTERNAL_FORM, None
    return IntakeFlow.EXTERNAL_LINK, link


def get_event(db: Session, event_id: int) -> Event:
    event = db.query(Event).filter(Event.id == event_id).first()
    if not event:
        raise NotFound("Event not found", event_id=event_id)
    return event


def create_event(db: Session, actor: Actor, data: EventCreate) -> Event:
    require(
        can_manage_events(actor.role, actor.club_id, data.club_id),
        "create events for this club",
        club_id=data.club_id,
    )
    intake_flow, link = resolve_intake_flow(data.registration_form_link)

    event = Event(
        club_id=data.club_id,
        event_name=data.event_name,
        event_date=data.event_date,
        deadline=data.deadline,
        registration_form_link=link,
        intake_flow=intake_flow.value,
        hidden=data.hidden,
    )
    db.add(event)
    db.commit()
    db.refresh(event)

    admin_logger(actor.user_id).info(
        f"Event Created | Club={event.club_id} | Event={event.id} | Intake={event.intake_flow}"
    )
    return event


def update_event_link(db: Session, actor: Actor, event_id: int, link: Optional[str]) -> Event:
    """Change the registration link; existing registrations keep their data."""
    event = get_event(db, event_id)
    require(
        can_manage_events(actor.role, actor.club_id, event.club_id),
        "edit this event",
        event_id=event_id,
    )
    intake_flow, link = resolve_intake_flow(link)
    event.registration_form_link = link
    event.intake_flow = intake_flow.value
    db.commit()
    db.refresh(event)

    admin_logger(actor.user_id).info(
        f"Event Link Updated | Event={event.id} | Intake={event.intake_flow}"
    )
    return event


def set_visibility(db: Session, actor: Actor, event_id: int, hidden: bool) -> Event:
    event = get_event(db, event_id)
    require(
        can_manage_events(actor.role, actor.club_id, event.club_id),
        "change visibility of this event",
        event_id=event_id,
    )
    event.hidden = hidden
    db.commit()
    db.refresh(event)

    admin_logger(actor.user_id).info(
        f"Event Visibility | Event={event.id} | Hidden={event.hidden}"
    )
    return event


def list_events(
    db: Session,
    actor: Actor,
    club_id: Optional[str] = None,
    include_hidden: bool = False,
) -> list[Event]:
    query = db.query(Event)
    if club_id is not None:
        query = query.filter(Event.club_id == club_id)

    if include_hidden:
        require(
            can_manage_events(actor.role, actor.club_id, club_id),
            "list hidden events",
            club_id=club_id,
        )
    else:
        query = query.filter(Event.hidden == False)

    return query.order_by(Event.event_date, Event.id).all()
