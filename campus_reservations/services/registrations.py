"""Event registration workflow.

A registration starts APPLIED and ends APPROVED or REJECTED; nothing leaves
a terminal state. Internal-form events need a second ``attach_form_data``
call from the registrant; external-link events are complete on creation.
Uniqueness per (user, event) is enforced by the database.
"""
from datetime import date, datetime
from typing import Any, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from campus_reservations.core.access import can_decide, require
from campus_reservations.core.errors import (
    AlreadyDecided, AlreadyRegistered, InvalidDecision, NotFound,
    RegistrationClosed, WrongIntakeFlow,
)
from campus_reservations.core.logging_config import registration_logger
from campus_reservations.models.enums import (
    IntakeFlow, RegistrationStatus, Role, TERMINAL_REGISTRATION_STATUSES
)
from campus_reservations.models.event import Event
from campus_reservations.models.registration import Registration
from campus_reservations.schemas.actor import Actor
from campus_reservations.schemas.registration import RegistrationOut, RegistrationReceipt
from campus_reservations.services.events import get_event


def get_registration(db: Session, reg_id: int) -> Registration:
    registration = db.query(Registration).filter(Registration.id == reg_id).first()
    if not registration:
        raise NotFound("Registration not found", reg_id=reg_id)
    return registration


def _ensure_open(event: Event, today: date):
    if event.hidden:
        raise RegistrationClosed("Event is not open for registration", event_id=event.id)
    if event.deadline is not None and today > event.deadline:
        raise RegistrationClosed(
            "Registration deadline has passed",
            event_id=event.id,
            deadline=event.deadline.isoformat(),
        )


# =====================================================================
# REGISTER
# =====================================================================
def register(db: Session, actor: Actor, event_id: int, today: Optional[date] = None) -> Registration:
    event = get_event(db, event_id)
    _ensure_open(event, today or date.today())

    existing = (
        db.query(Registration.id)
        .filter(Registration.user_id == actor.user_id, Registration.event_id == event_id)
        .first()
    )
    if existing:
        raise AlreadyRegistered(
            "Already registered for this event", event_id=event_id, reg_id=existing.id
        )

    registration = Registration(
        user_id=actor.user_id,
        event_id=event_id,
        status=RegistrationStatus.APPLIED.value,
        form_data=None,
    )
    db.add(registration)
    try:
        db.commit()
    except IntegrityError:
        # Lost the race against a concurrent request for the same pair
        db.rollback()
        raise AlreadyRegistered("Already registered for this event", event_id=event_id)
    db.refresh(registration)

    registration_logger(actor.user_id, event_id, registration.id).info(
        f"Registration Created | Intake={event.intake_flow}"
    )
    return registration


def build_receipt(registration: Registration) -> RegistrationReceipt:
    event = registration.event
    intake_flow = IntakeFlow(event.intake_flow)

    if intake_flow == IntakeFlow.EXTERNAL_LINK:
        next_step = "OPEN_LINK"
    elif registration.form_data is None:
        next_step = "ATTACH_FORM"
    else:
        next_step = "NONE"

    return RegistrationReceipt(
        registration=RegistrationOut.model_validate(registration),
        intake_flow=intake_flow,
        next_step=next_step,
        registration_form_link=event.registration_form_link,
    )


# =====================================================================
# ATTACH FORM DATA (internal-form events only)
# =====================================================================
def attach_form_data(db: Session, actor: Actor, reg_id: int, payload: Any) -> Registration:
    registration = get_registration(db, reg_id)
    require(registration.user_id == actor.user_id, "fill another user's registration", reg_id=reg_id)

    if registration.event.intake_flow != IntakeFlow.INTERNAL_FORM.value:
        raise WrongIntakeFlow(
            "This event collects registration details through an external link",
            reg_id=reg_id,
            event_id=registration.event_id,
        )

    updated = (
        db.query(Registration)
        .filter(
            Registration.id == reg_id,
            Registration.user_id == actor.user_id,
            Registration.status == RegistrationStatus.APPLIED.value,
        )
        .update({Registration.form_data: payload}, synchronize_session=False)
    )
    if not updated:
        db.rollback()
        db.refresh(registration)
        raise AlreadyDecided(
            "Registration has already been decided", reg_id=reg_id, status=registration.status
        )

    db.commit()
    db.refresh(registration)

    registration_logger(actor.user_id, registration.event_id, reg_id).info(
        "Registration Form Attached"
    )
    return registration


# =====================================================================
# DECIDE
# =====================================================================
def _parse_decision(decision) -> RegistrationStatus:
    try:
        decision = RegistrationStatus(decision)
    except ValueError:
        raise InvalidDecision("Decision must be APPROVED or REJECTED", decision=str(decision))
    if decision not in TERMINAL_REGISTRATION_STATUSES:
        raise InvalidDecision("Decision must be APPROVED or REJECTED", decision=decision.value)
    return decision


def decide(db: Session, actor: Actor, reg_id: int, decision) -> Registration:
    registration = get_registration(db, reg_id)
    event_club = registration.event.club_id
    require(
        can_decide(actor.role, actor.club_id, event_club),
        "decide registrations for this club",
        reg_id=reg_id,
        club_id=event_club,
    )
    decision = _parse_decision(decision)

    updated = (
        db.query(Registration)
        .filter(
            Registration.id == reg_id,
            Registration.status == RegistrationStatus.APPLIED.value,
        )
        .update(
            {
                Registration.status: decision.value,
                Registration.decided_by: actor.user_id,
                Registration.decided_at: datetime.utcnow(),
            },
            synchronize_session=False,
        )
    )
    if not updated:
        db.rollback()
        db.refresh(registration)
        raise AlreadyDecided(
            "Registration has already been decided", reg_id=reg_id, status=registration.status
        )

    db.commit()
    db.refresh(registration)

    registration_logger(actor.user_id, registration.event_id, reg_id).info(
        f"Registration Decided | Status={decision.value}"
    )
    return registration


# =====================================================================
# LISTINGS
# =====================================================================
def list_my_registrations(db: Session, actor: Actor, user_id: Optional[str] = None) -> list[Registration]:
    user_id = user_id or actor.user_id
    require(
        user_id == actor.user_id or actor.role == Role.ADMIN,
        "view another user's registrations",
    )
    return (
        db.query(Registration)
        .filter(Registration.user_id == user_id)
        .order_by(Registration.submission_date.desc(), Registration.id.desc())
        .all()
    )


def list_submissions(db: Session, actor: Actor, club_id: str) -> list[Registration]:
    require(
        can_decide(actor.role, actor.club_id, club_id),
        "view this club's submissions",
        club_id=club_id,
    )
    return (
        db.query(Registration)
        .join(Event, Registration.event_id == Event.id)
        .filter(Event.club_id == club_id)
        .order_by(Registration.submission_date.desc(), Registration.id.desc())
        .all()
    )
