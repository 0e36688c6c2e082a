from datetime import date, timedelta

import pytest
from loguru import logger

from campus_reservations.core.errors import (
    AlreadyDecided, AlreadyRegistered, Forbidden, InvalidDecision, NotFound,
    RegistrationClosed, WrongIntakeFlow,
)
from campus_reservations.models.enums import IntakeFlow, RegistrationStatus
from campus_reservations.models.registration import Registration
from campus_reservations.schemas.actor import Actor
from campus_reservations.schemas.event import EventCreate
from campus_reservations.services import events, registrations

FORM = {"name": "Asha", "branch": "CSE", "year": "2", "phone": "555-0101"}


def test_internal_flow_needs_form_data_to_complete(db, student, internal_event):
    registration = registrations.register(db, student, internal_event.id)
    assert registration.status == RegistrationStatus.APPLIED.value
    assert registration.form_data is None
    assert registration.is_complete is False

    receipt = registrations.build_receipt(registration)
    assert receipt.intake_flow == IntakeFlow.INTERNAL_FORM
    assert receipt.next_step == "ATTACH_FORM"
    assert receipt.registration_form_link is None

    filled = registrations.attach_form_data(db, student, registration.id, FORM)
    assert filled.form_data == FORM
    assert filled.is_complete is True
    assert registrations.build_receipt(filled).next_step == "NONE"


def test_external_flow_is_complete_on_register(db, student, external_event):
    registration = registrations.register(db, student, external_event.id)
    assert registration.form_data is None
    assert registration.is_complete is True

    receipt = registrations.build_receipt(registration)
    assert receipt.next_step == "OPEN_LINK"
    assert receipt.registration_form_link == "https://forms.example.org/hackathon"


def test_second_register_is_rejected(db, student, internal_event):
    first = registrations.register(db, student, internal_event.id)

    with pytest.raises(AlreadyRegistered) as exc:
        registrations.register(db, student, internal_event.id)

    assert exc.value.details["reg_id"] == first.id
    assert db.query(Registration).filter_by(user_id="s1", event_id=internal_event.id).count() == 1


def test_register_unknown_event(db, student):
    with pytest.raises(NotFound):
        registrations.register(db, student, 777)


def test_hidden_or_past_deadline_events_are_closed(db, faculty, student, internal_event):
    events.set_visibility(db, faculty, internal_event.id, True)
    with pytest.raises(RegistrationClosed):
        registrations.register(db, student, internal_event.id)

    late = events.create_event(
        db, faculty, EventCreate(club_id="club-a", event_name="Old", deadline=date(2024, 1, 1))
    )
    with pytest.raises(RegistrationClosed):
        registrations.register(db, student, late.id, today=date(2024, 1, 2))
    # the deadline day itself is still open
    registrations.register(db, student, late.id, today=date(2024, 1, 1))


def test_hiding_an_event_keeps_existing_registrations(db, faculty, student, internal_event):
    registration = registrations.register(db, student, internal_event.id)
    events.set_visibility(db, faculty, internal_event.id, True)

    assert [r.id for r in registrations.list_my_registrations(db, student)] == [registration.id]


def test_only_the_registrant_can_attach_form_data(db, student, internal_event):
    registration = registrations.register(db, student, internal_event.id)
    intruder = Actor(user_id="s2", role="STUDENT")

    with pytest.raises(Forbidden):
        registrations.attach_form_data(db, intruder, registration.id, FORM)

    db.refresh(registration)
    assert registration.form_data is None


def test_attaching_to_external_event_is_wrong_flow(db, student, external_event):
    registration = registrations.register(db, student, external_event.id)
    with pytest.raises(WrongIntakeFlow):
        registrations.attach_form_data(db, student, registration.id, FORM)


def test_attaching_after_decision_is_rejected(db, faculty, student, internal_event):
    registration = registrations.register(db, student, internal_event.id)
    registrations.decide(db, faculty, registration.id, RegistrationStatus.REJECTED)

    with pytest.raises(AlreadyDecided):
        registrations.attach_form_data(db, student, registration.id, FORM)


@pytest.mark.parametrize("decision", [RegistrationStatus.APPROVED, RegistrationStatus.REJECTED])
def test_decision_is_terminal(db, faculty, student, internal_event, decision):
    registration = registrations.register(db, student, internal_event.id)

    decided = registrations.decide(db, faculty, registration.id, decision)
    assert decided.status == decision.value
    assert decided.decided_by == "f1"
    assert decided.decided_at is not None

    other = RegistrationStatus.REJECTED if decision == RegistrationStatus.APPROVED else RegistrationStatus.APPROVED
    with pytest.raises(AlreadyDecided) as exc:
        registrations.decide(db, faculty, registration.id, other)
    assert exc.value.details["status"] == decision.value

    db.refresh(registration)
    assert registration.status == decision.value


def test_faculty_from_another_club_cannot_decide(db, other_faculty, student, internal_event):
    registration = registrations.register(db, student, internal_event.id)

    with pytest.raises(Forbidden):
        registrations.decide(db, other_faculty, registration.id, "APPROVED")

    db.refresh(registration)
    assert registration.status == RegistrationStatus.APPLIED.value


def test_admin_can_decide_and_students_cannot(db, admin, student, internal_event):
    registration = registrations.register(db, student, internal_event.id)

    with pytest.raises(Forbidden):
        registrations.decide(db, student, registration.id, "APPROVED")

    assert registrations.decide(db, admin, registration.id, "APPROVED").status == "APPROVED"


def test_applied_is_not_a_decision(db, faculty, student, internal_event):
    registration = registrations.register(db, student, internal_event.id)
    with pytest.raises(InvalidDecision):
        registrations.decide(db, faculty, registration.id, "APPLIED")
    with pytest.raises(InvalidDecision):
        registrations.decide(db, faculty, registration.id, "MAYBE")


def test_list_submissions_is_scoped_to_club(db, faculty, other_faculty, student, internal_event, external_event):
    registrations.register(db, student, internal_event.id)
    registrations.register(db, student, external_event.id)
    club_b_event = events.create_event(
        db, other_faculty,
        EventCreate(club_id="club-b", event_name="Drama", deadline=date.today() + timedelta(days=5)),
    )
    registrations.register(db, student, club_b_event.id)

    club_a = registrations.list_submissions(db, faculty, "club-a")
    assert {r.event_id for r in club_a} == {internal_event.id, external_event.id}

    with pytest.raises(Forbidden):
        registrations.list_submissions(db, faculty, "club-b")


def test_list_my_registrations_for_others_is_admin_only(db, admin, student, internal_event):
    registrations.register(db, student, internal_event.id)
    intruder = Actor(user_id="s2", role="STUDENT")

    with pytest.raises(Forbidden):
        registrations.list_my_registrations(db, intruder, user_id="s1")
    assert len(registrations.list_my_registrations(db, admin, user_id="s1")) == 1


def test_registration_log_records_carry_event_and_registration(db, student, faculty, external_event):
    records = []
    sink_id = logger.add(
        lambda message: records.append(message.record),
        filter=lambda record: record["extra"].get("log_type") == "registration",
    )
    try:
        registration = registrations.register(db, student, external_event.id)
        registrations.decide(db, faculty, registration.id, RegistrationStatus.APPROVED)
    finally:
        logger.remove(sink_id)

    created, decided = records
    assert created["extra"]["actor"] == student.user_id
    assert created["extra"]["event_id"] == external_event.id
    assert created["extra"]["registration_id"] == registration.id
    assert decided["extra"]["actor"] == faculty.user_id
    assert decided["message"] == "Registration Decided | Status=APPROVED"
