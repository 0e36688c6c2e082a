"""Domain errors raised by the reservation and registration services.

Every error is recoverable by the caller. The API layer turns them into
``{"error": kind, "message": ..., "details": {...}}`` responses using
``status_code``.
"""


class ReservationError(Exception):
    kind = "ReservationError"
    status_code = 400

    def __init__(self, message: str, **details):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self):
        return {"error": self.kind, "message": self.message, "details": self.details}


class InvalidRange(ReservationError):
    kind = "InvalidRange"
    status_code = 400


class VenueInactive(ReservationError):
    kind = "VenueInactive"
    status_code = 409


class SlotTaken(ReservationError):
    kind = "SlotTaken"
    status_code = 409


class AlreadyRegistered(ReservationError):
    kind = "AlreadyRegistered"
    status_code = 409


class AlreadyDecided(ReservationError):
    kind = "AlreadyDecided"
    status_code = 409


class RegistrationClosed(ReservationError):
    kind = "RegistrationClosed"
    status_code = 409


class WrongIntakeFlow(ReservationError):
    kind = "WrongIntakeFlow"
    status_code = 409


class InvalidDecision(ReservationError):
    kind = "InvalidDecision"
    status_code = 400


class Forbidden(ReservationError):
    kind = "Forbidden"
    status_code = 403


class NotFound(ReservationError):
    kind = "NotFound"
    status_code = 404
