import os
import tempfile

# Settings are read at import time, so pin them before the package loads
_TMP = tempfile.mkdtemp(prefix="campus_reservations_tests_")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_TMP, 'default.db')}"
os.environ["LOG_DIR"] = os.path.join(_TMP, "logs")
os.environ["JWT_SECRET"] = "test-secret"
os.environ["AUTO_CREATE_SCHEMA"] = "false"
os.environ["BOOKING_RETRY_BACKOFF_MS"] = "5"
os.environ.pop("REDIS_URL", None)

from datetime import date, timedelta

import pytest
from sqlalchemy.orm import sessionmaker

import campus_reservations.models  # noqa: F401
from campus_reservations.core.jwt import create_access_token
from campus_reservations.db.session import Base, get_db, make_engine
from campus_reservations.models.enums import Role, VenueType
from campus_reservations.schemas.actor import Actor
from campus_reservations.schemas.event import EventCreate
from campus_reservations.schemas.venue import VenueCreate
from campus_reservations.services import catalog, events


@pytest.fixture
def engine(tmp_path):
    engine = make_engine(f"sqlite:///{tmp_path / 'reservations.db'}")
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


# ---------------- ACTORS ----------------
@pytest.fixture
def office():
    return Actor(user_id="office1", role=Role.OFFICE, name="Front Office")


@pytest.fixture
def admin():
    return Actor(user_id="admin1", role=Role.ADMIN)


@pytest.fixture
def faculty():
    return Actor(user_id="f1", role=Role.FACULTY, club_id="club-a", name="Dr. One")


@pytest.fixture
def other_faculty():
    return Actor(user_id="f2", role=Role.FACULTY, club_id="club-b")


@pytest.fixture
def student():
    return Actor(user_id="s1", role=Role.STUDENT)


# ---------------- DATA ----------------
@pytest.fixture
def room_101(db, office):
    return catalog.add_venue(
        db, office, VenueCreate(name="Room 101", type=VenueType.CLASSROOM, capacity=50)
    )


@pytest.fixture
def auditorium(db, office):
    return catalog.add_venue(
        db,
        office,
        VenueCreate(name="Main Auditorium", type=VenueType.AUDITORIUM, capacity=400, location="Block C"),
    )


@pytest.fixture
def future_deadline():
    return date.today() + timedelta(days=30)


@pytest.fixture
def internal_event(db, faculty, future_deadline):
    return events.create_event(
        db,
        faculty,
        EventCreate(club_id="club-a", event_name="Robotics Intake", deadline=future_deadline),
    )


@pytest.fixture
def external_event(db, faculty, future_deadline):
    return events.create_event(
        db,
        faculty,
        EventCreate(
            club_id="club-a",
            event_name="Hackathon",
            deadline=future_deadline,
            registration_form_link="https://forms.example.org/hackathon",
        ),
    )


# ---------------- HTTP ----------------
@pytest.fixture
def client(session_factory):
    from fastapi.testclient import TestClient
    from campus_reservations.main import app

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_header():
    def _make(user_id, role, club_id=None):
        claims = {"sub": user_id, "role": role}
        if club_id:
            claims["club_id"] = club_id
        return {"Authorization": f"Bearer {create_access_token(claims)}"}

    return _make
