from types import SimpleNamespace

import pytest

from campus_reservations.core.access import (
    can_book, can_cancel_booking, can_decide, can_manage_venues, require
)
from campus_reservations.core.errors import Forbidden
from campus_reservations.models.enums import Role


@pytest.mark.parametrize("role,expected", [
    (Role.FACULTY, True),
    (Role.ADMIN, True),
    (Role.OFFICE, True),
    (Role.STUDENT, False),
    ("UNKNOWN", False),
])
def test_can_book(role, expected):
    assert can_book(role) is expected


def test_can_decide_requires_matching_club_for_faculty():
    assert can_decide(Role.FACULTY, "club-a", "club-a")
    assert not can_decide(Role.FACULTY, "club-a", "club-b")
    assert not can_decide(Role.FACULTY, None, "club-a")


def test_admin_can_decide_any_club_but_office_and_students_cannot():
    assert can_decide(Role.ADMIN, None, "club-b")
    assert not can_decide(Role.OFFICE, "club-a", "club-a")
    assert not can_decide(Role.STUDENT, "club-a", "club-a")


def test_can_cancel_booking_owner_or_oversight_roles():
    booking = SimpleNamespace(owner_id="f1")
    assert can_cancel_booking("f1", booking, Role.FACULTY)
    assert can_cancel_booking("someone", booking, Role.ADMIN)
    assert can_cancel_booking("someone", booking, Role.OFFICE)
    assert not can_cancel_booking("f2", booking, Role.FACULTY)


def test_venue_management_roles():
    assert can_manage_venues(Role.OFFICE)
    assert can_manage_venues(Role.ADMIN)
    assert not can_manage_venues(Role.FACULTY)


def test_require_raises_forbidden_with_action():
    with pytest.raises(Forbidden) as exc:
        require(False, "book venues", role="STUDENT")
    assert exc.value.details == {"action": "book venues", "role": "STUDENT"}
    require(True, "book venues")
