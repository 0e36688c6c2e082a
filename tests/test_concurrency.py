import threading
from datetime import date, time

from campus_reservations.core.errors import AlreadyRegistered, SlotTaken
from campus_reservations.models.booking import Booking
from campus_reservations.models.enums import BookingStatus, Role
from campus_reservations.models.registration import Registration
from campus_reservations.schemas.actor import Actor
from campus_reservations.services import ledger, registrations

DAY = date(2024, 3, 1)
RACERS = 8


def _race(session_factory, work):
    """Run ``work(session, i)`` in RACERS threads released together."""
    barrier = threading.Barrier(RACERS)
    outcomes = []
    lock = threading.Lock()

    def run(i):
        session = session_factory()
        try:
            barrier.wait()
            try:
                outcome = ("ok", work(session, i))
            except (SlotTaken, AlreadyRegistered) as e:
                outcome = (e.kind, None)
        finally:
            session.close()
        with lock:
            outcomes.append(outcome)

    threads = [threading.Thread(target=run, args=(i,)) for i in range(RACERS)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    return outcomes


def test_racing_reservations_on_one_slot_have_one_winner(db, session_factory, room_101):
    venue_id = room_101.id
    db.close()

    def reserve(session, i):
        actor = Actor(user_id=f"f{i}", role=Role.FACULTY)
        # every racer overlaps 09:30-10:00
        start = time(9, 0) if i % 2 else time(9, 30)
        return ledger.reserve(session, actor, venue_id, DAY, start, time(10, 30), "Race").id

    outcomes = _race(session_factory, reserve)

    assert len(outcomes) == RACERS
    assert [kind for kind, _ in outcomes].count("ok") == 1
    assert [kind for kind, _ in outcomes].count("SlotTaken") == RACERS - 1

    check = session_factory()
    try:
        confirmed = check.query(Booking).filter(
            Booking.venue_id == venue_id, Booking.status == BookingStatus.CONFIRMED.value
        ).count()
        assert confirmed == 1
    finally:
        check.close()


def test_racing_reservations_on_different_venues_all_win(db, session_factory, office):
    from campus_reservations.models.enums import VenueType
    from campus_reservations.schemas.venue import VenueCreate
    from campus_reservations.services import catalog

    venue_ids = [
        catalog.add_venue(db, office, VenueCreate(name=f"Room {i}", type=VenueType.CLASSROOM, capacity=30)).id
        for i in range(RACERS)
    ]
    db.close()

    def reserve(session, i):
        actor = Actor(user_id=f"f{i}", role=Role.FACULTY)
        return ledger.reserve(session, actor, venue_ids[i], DAY, time(9), time(10), "Parallel").id

    outcomes = _race(session_factory, reserve)
    assert [kind for kind, _ in outcomes].count("ok") == RACERS


def test_racing_duplicate_registrations_create_one_row(db, session_factory, student, internal_event):
    event_id = internal_event.id
    db.close()

    def register(session, i):
        return registrations.register(session, student, event_id).id

    outcomes = _race(session_factory, register)

    assert [kind for kind, _ in outcomes].count("ok") == 1
    assert [kind for kind, _ in outcomes].count("AlreadyRegistered") == RACERS - 1

    check = session_factory()
    try:
        assert check.query(Registration).filter_by(user_id=student.user_id, event_id=event_id).count() == 1
    finally:
        check.close()
