from loguru import logger
import os

from campus_reservations.core.config import LOG_DIR

# Create folder if missing
if not os.path.exists(LOG_DIR):
    os.makedirs(LOG_DIR)

# Remove default handler
logger.remove()

# Context fields the channel formats below refer to; bind() overrides them per call
logger.configure(extra={
    "log_type": None,
    "actor": "-",
    "venue_id": "-",
    "booking_id": "-",
    "event_id": "-",
    "registration_id": "-",
})

BOOKING_FORMAT = (
    "{time} | {level} | actor={extra[actor]} venue={extra[venue_id]} "
    "booking={extra[booking_id]} | {message}"
)
REGISTRATION_FORMAT = (
    "{time} | {level} | actor={extra[actor]} event={extra[event_id]} "
    "registration={extra[registration_id]} | {message}"
)
ADMIN_FORMAT = "{time} | {level} | actor={extra[actor]} | {message}"


def _channel(name):
    return lambda record: record["extra"].get("log_type") == name


# General application log
logger.add(
    f"{LOG_DIR}/app.log",
    rotation="1 week",
    retention="4 weeks",
    level="INFO",
    enqueue=True,
    format="{time} | {level} | {message}"
)

# Booking ledger logs
logger.add(
    f"{LOG_DIR}/bookings.log",
    rotation="1 week",
    retention="12 weeks",
    level="INFO",
    enqueue=True,
    filter=_channel("booking"),
    format=BOOKING_FORMAT
)

# Registration workflow logs
logger.add(
    f"{LOG_DIR}/registrations.log",
    rotation="1 week",
    retention="12 weeks",
    level="INFO",
    enqueue=True,
    filter=_channel("registration"),
    format=REGISTRATION_FORMAT
)

# Venue catalog and event administration
logger.add(
    f"{LOG_DIR}/admin.log",
    rotation="1 week",
    retention="4 weeks",
    level="INFO",
    enqueue=True,
    filter=_channel("admin"),
    format=ADMIN_FORMAT
)

# Error logs
logger.add(
    f"{LOG_DIR}/errors.log",
    rotation="1 week",
    retention="8 weeks",
    level="ERROR",
    enqueue=True,
)


def get_logger():
    return logger


def booking_logger(actor_id, venue_id, booking_id="-"):
    return logger.bind(log_type="booking", actor=actor_id, venue_id=venue_id, booking_id=booking_id)


def registration_logger(actor_id, event_id, registration_id="-"):
    return logger.bind(
        log_type="registration", actor=actor_id, event_id=event_id, registration_id=registration_id
    )


def admin_logger(actor_id):
    return logger.bind(log_type="admin", actor=actor_id)
