from pydantic import BaseModel
from datetime import datetime
from typing import Any, Dict, Optional

from campus_reservations.models.enums import IntakeFlow, RegistrationStatus


class RegistrationCreate(BaseModel):
    event_id: int


class FormDataIn(BaseModel):
    form_data: Dict[str, Any]


class DecisionIn(BaseModel):
    status: RegistrationStatus


class RegistrationOut(BaseModel):
    id: int
    user_id: str
    event_id: int
    status: RegistrationStatus
    form_data: Optional[Dict[str, Any]] = None
    submission_date: datetime
    decided_by: Optional[str] = None
    decided_at: Optional[datetime] = None
    is_complete: bool

    model_config = {"from_attributes": True}


class RegistrationReceipt(BaseModel):
    """What the caller needs to finish intake after ``register``."""

    registration: RegistrationOut
    intake_flow: IntakeFlow
    next_step: str  # ATTACH_FORM | OPEN_LINK | NONE
    registration_form_link: Optional[str] = None
