from sqlalchemy import Column, Integer, Date, ForeignKey, UniqueConstraint
from campus_reservations.db.session import Base


class VenueDayLock(Base):
    """Guard row for one venue on one date.

    Every reservation bumps ``version`` before checking for conflicts, so
    writers on the same venue and date queue behind each other while writers
    on other venues or dates never touch this row.
    """

    __tablename__ = "venue_day_locks"

    id = Column(Integer, primary_key=True, index=True)
    venue_id = Column(Integer, ForeignKey("venues.id"), nullable=False)
    booking_date = Column(Date, nullable=False)
    version = Column(Integer, nullable=False, default=0)

    __table_args__ = (
        UniqueConstraint("venue_id", "booking_date", name="uq_venue_day_lock"),
    )
