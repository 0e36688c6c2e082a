from datetime import datetime

from sqlalchemy import (
    Column, Integer, String, Date, Time, DateTime, ForeignKey, Index, CheckConstraint
)
from sqlalchemy.orm import relationship
from campus_reservations.db.session import Base


class Booking(Base):
    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True, index=True)
    venue_id = Column(Integer, ForeignKey("venues.id"), nullable=False)

    # Who booked
    owner_id = Column(String, nullable=False, index=True)
    owner_name = Column(String, nullable=True)

    # When
    booking_date = Column(Date, nullable=False)
    start_time = Column(Time, nullable=False)
    end_time = Column(Time, nullable=False)

    # What for
    purpose = Column(String, nullable=False)
    event_name = Column(String, nullable=True)
    booking_type = Column(String, nullable=False)  # BookingType value

    status = Column(String, nullable=False, default="CONFIRMED")  # CONFIRMED | CANCELLED

    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    cancelled_at = Column(DateTime, nullable=True)
    cancelled_by = Column(String, nullable=True)

    venue = relationship("Venue", back_populates="bookings")

    __table_args__ = (
        Index("ix_bookings_venue_date_status", "venue_id", "booking_date", "status"),
        CheckConstraint("end_time > start_time", name="check_booking_interval"),
        CheckConstraint("status IN ('CONFIRMED', 'CANCELLED')", name="check_booking_status"),
    )

    def __repr__(self) -> str:
        return (
            f"<Booking(id={self.id}, venue={self.venue_id}, date={self.booking_date}, "
            f"{self.start_time}-{self.end_time}, status={self.status})>"
        )
