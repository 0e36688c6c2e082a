from campus_reservations.models.venue import Venue
from campus_reservations.models.booking import Booking
from campus_reservations.models.venue_day_lock import VenueDayLock
from campus_reservations.models.event import Event
from campus_reservations.models.registration import Registration

__all__ = ["Venue", "Booking", "VenueDayLock", "Event", "Registration"]
