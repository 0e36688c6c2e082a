from pydantic import BaseModel, Field
from datetime import date
from typing import Optional

from campus_reservations.models.enums import IntakeFlow


class EventBase(BaseModel):
    club_id: str
    event_name: str = Field(min_length=1)
    event_date: Optional[date] = None
    deadline: Optional[date] = None
    # Leave empty for the club's internal form
    registration_form_link: Optional[str] = None


class EventCreate(EventBase):
    hidden: bool = False


class EventLinkUpdate(BaseModel):
    registration_form_link: Optional[str] = None


class EventVisibility(BaseModel):
    hidden: bool


class EventOut(EventBase):
    id: int
    intake_flow: IntakeFlow
    hidden: bool

    model_config = {"from_attributes": True}
