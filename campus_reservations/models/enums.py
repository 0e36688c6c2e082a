from enum import Enum


class Role(str, Enum):
    STUDENT = "STUDENT"
    FACULTY = "FACULTY"
    ADMIN = "ADMIN"
    OFFICE = "OFFICE"


class VenueType(str, Enum):
    CLASSROOM = "CLASSROOM"
    AUDITORIUM = "AUDITORIUM"
    SEMINAR_HALL = "SEMINAR_HALL"
    COMPUTER_LAB = "COMPUTER_LAB"
    CONFERENCE_ROOM = "CONFERENCE_ROOM"
    OUTDOOR = "OUTDOOR"


class BookingStatus(str, Enum):
    CONFIRMED = "CONFIRMED"
    CANCELLED = "CANCELLED"


class BookingType(str, Enum):
    CLASSROOM = "CLASSROOM"
    EVENT = "EVENT"


class RegistrationStatus(str, Enum):
    APPLIED = "APPLIED"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


TERMINAL_REGISTRATION_STATUSES = (RegistrationStatus.APPROVED, RegistrationStatus.REJECTED)


class IntakeFlow(str, Enum):
    INTERNAL_FORM = "INTERNAL_FORM"
    EXTERNAL_LINK = "EXTERNAL_LINK"


# Link value older clients send to mean "use the club's own form"
INTERNAL_FORM_SENTINEL = "club_form_link"
