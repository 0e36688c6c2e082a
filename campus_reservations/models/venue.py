from sqlalchemy import Column, Integer, String, Boolean, CheckConstraint
from sqlalchemy.orm import relationship
from campus_reservations.db.session import Base


class Venue(Base):
    __tablename__ = "venues"

    id = Column(Integer, primary_key=True, index=True)

    name = Column(String, nullable=False)
    type = Column(String, nullable=False, index=True)  # VenueType value
    capacity = Column(Integer, nullable=False)
    location = Column(String, nullable=True)  # e.g. "Block A, Floor 2"

    # Soft delete only: bookings keep pointing at deactivated venues
    active = Column(Boolean, nullable=False, default=True)

    bookings = relationship("Booking", back_populates="venue")

    __table_args__ = (
        CheckConstraint("capacity > 0", name="check_venue_capacity_positive"),
    )
