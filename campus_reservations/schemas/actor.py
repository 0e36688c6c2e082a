from typing import Optional

from pydantic import BaseModel

from campus_reservations.models.enums import Role


class Actor(BaseModel):
    """Authenticated caller, as supplied by the session layer."""

    user_id: str
    role: Role
    club_id: Optional[str] = None
    name: Optional[str] = None
