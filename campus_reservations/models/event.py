from sqlalchemy import Column, Integer, String, Boolean, Date
from sqlalchemy.orm import relationship
from campus_reservations.db.session import Base


class Event(Base):
    __tablename__ = "events"

    id = Column(Integer, primary_key=True, index=True)
    club_id = Column(String, nullable=False, index=True)
    event_name = Column(String, nullable=False)

    event_date = Column(Date, nullable=True)
    deadline = Column(Date, nullable=True)

    registration_form_link = Column(String, nullable=True)
    intake_flow = Column(String, nullable=False)  # IntakeFlow value, set with the link

    hidden = Column(Boolean, nullable=False, default=False)

    registrations = relationship("Registration", back_populates="event")
