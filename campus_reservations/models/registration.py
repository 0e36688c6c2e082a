from datetime import datetime

from sqlalchemy import (
    Column, Integer, String, DateTime, JSON, ForeignKey, UniqueConstraint, CheckConstraint
)
from sqlalchemy.orm import relationship
from campus_reservations.db.session import Base
from campus_reservations.models.enums import IntakeFlow


class Registration(Base):
    __tablename__ = "registrations"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String, nullable=False, index=True)
    event_id = Column(Integer, ForeignKey("events.id"), nullable=False, index=True)

    status = Column(String, nullable=False, default="APPLIED")  # APPLIED | APPROVED | REJECTED

    # Only filled for internal-form events
    form_data = Column(JSON, nullable=True)

    submission_date = Column(DateTime, nullable=False, default=datetime.utcnow)
    decided_by = Column(String, nullable=True)
    decided_at = Column(DateTime, nullable=True)

    event = relationship("Event", back_populates="registrations")

    __table_args__ = (
        UniqueConstraint("user_id", "event_id", name="uq_user_event_registration"),
        CheckConstraint(
            "status IN ('APPLIED', 'APPROVED', 'REJECTED')", name="check_registration_status"
        ),
    )

    @property
    def is_complete(self) -> bool:
        """Internal-form registrations are complete once the form payload is attached."""
        return self.event.intake_flow == IntakeFlow.EXTERNAL_LINK.value or self.form_data is not None
