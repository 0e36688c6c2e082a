from pydantic import BaseModel, Field, PositiveInt
from typing import Optional

from campus_reservations.models.enums import VenueType


class VenueBase(BaseModel):
    name: str = Field(min_length=1)
    type: VenueType
    capacity: PositiveInt
    location: Optional[str] = None  # e.g. "Block A, Floor 2"


class VenueCreate(VenueBase):
    pass


class VenueUpdate(VenueBase):
    active: Optional[bool] = None


class VenueOut(VenueBase):
    id: int
    active: bool

    model_config = {
        "from_attributes": True
    }
