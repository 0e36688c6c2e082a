from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from campus_reservations.core.dependencies import get_current_actor
from campus_reservations.db.session import get_db
from campus_reservations.schemas.actor import Actor
from campus_reservations.schemas.registration import (
    DecisionIn, FormDataIn, RegistrationCreate, RegistrationOut, RegistrationReceipt
)
from campus_reservations.services import registrations

router = APIRouter(prefix="/registrations", tags=["Registrations"])


# =====================================================================
# REGISTER FOR AN EVENT
# =====================================================================
@router.post("/", response_model=RegistrationReceipt)
def register(
    data: RegistrationCreate,
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    registration = registrations.register(db, actor, data.event_id)
    return registrations.build_receipt(registration)


# =====================================================================
# ATTACH INTERNAL FORM DATA
# =====================================================================
@router.put("/{reg_id}/form-data", response_model=RegistrationOut)
def attach_form_data(
    reg_id: int,
    data: FormDataIn,
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    return registrations.attach_form_data(db, actor, reg_id, data.form_data)


# =====================================================================
# FACULTY DECISION
# =====================================================================
@router.put("/{reg_id}/decision", response_model=RegistrationOut)
def decide(
    reg_id: int,
    data: DecisionIn,
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    return registrations.decide(db, actor, reg_id, data.status)


# =====================================================================
# MY REGISTRATIONS
# =====================================================================
@router.get("/my", response_model=list[RegistrationOut])
def my_registrations(actor: Actor = Depends(get_current_actor), db: Session = Depends(get_db)):
    return registrations.list_my_registrations(db, actor)


# =====================================================================
# CLUB SUBMISSIONS (club faculty / Admin)
# =====================================================================
@router.get("/club/{club_id}", response_model=list[RegistrationOut])
def club_submissions(
    club_id: str,
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    return registrations.list_submissions(db, actor, club_id)
