"""Role and ownership predicates consulted by the services.

The predicates never raise; ``require`` turns a false predicate into
``Forbidden`` so callers cannot mistake a denial for an empty result.
"""
from typing import Optional

from campus_reservations.core.errors import Forbidden
from campus_reservations.models.enums import Role

BOOKING_ROLES = {Role.FACULTY, Role.ADMIN, Role.OFFICE}
VENUE_ADMIN_ROLES = {Role.ADMIN, Role.OFFICE}
BOOKING_OVERSIGHT_ROLES = {Role.ADMIN, Role.OFFICE}


def _role(role) -> Optional[Role]:
    try:
        return Role(role)
    except ValueError:
        return None


def can_book(role) -> bool:
    return _role(role) in BOOKING_ROLES


def can_decide(role, club_assignment: Optional[str], event_club: str) -> bool:
    role = _role(role)
    if role == Role.ADMIN:
        return True
    return role == Role.FACULTY and club_assignment is not None and club_assignment == event_club


def can_cancel_booking(actor_id: str, booking, role) -> bool:
    return actor_id == booking.owner_id or _role(role) in BOOKING_OVERSIGHT_ROLES


def can_manage_venues(role) -> bool:
    return _role(role) in VENUE_ADMIN_ROLES


def can_view_all_bookings(role) -> bool:
    return _role(role) in BOOKING_OVERSIGHT_ROLES


# Event editing follows the same club rule as deciding registrations
can_manage_events = can_decide


def require(allowed: bool, action: str, **details):
    if not allowed:
        raise Forbidden(f"Not allowed to {action}", action=action, **details)
