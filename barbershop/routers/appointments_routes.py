# barbershop/routers/appointments_routes.py

from typing import Optional

from fastapi import APIRouter, Depends
from sqlmodel import Session

from barbershop.auth import get_current_user, get_optional_user
from barbershop.deps import get_session, get_shop
from barbershop.schemas import AppointmentCreate, AppointmentPublic, UserPublic

router = APIRouter(
    prefix="/appointments",
    tags=["appointments"],
)


@router.post("", response_model=AppointmentPublic, status_code=201)
def book_appointment(
    appt: AppointmentCreate,
    session: Session = Depends(get_session),
    current_user: Optional[UserPublic] = Depends(get_optional_user),
    shop=Depends(get_shop),
):
    return shop.ledger.book(
        session, appt.barber_id, appt.service_id, appt.date, appt.time, current_user
    )


@router.get("/{appt_id}", response_model=AppointmentPublic)
def get_appointment(
    appt_id: int,
    session: Session = Depends(get_session),
    current_user: UserPublic = Depends(get_current_user),
    shop=Depends(get_shop),
):
    return shop.ledger.get(session, appt_id, current_user)


@router.patch("/{appt_id}/cancel", response_model=AppointmentPublic)
def cancel_appointment(
    appt_id: int,
    session: Session = Depends(get_session),
    current_user: Optional[UserPublic] = Depends(get_optional_user),
    shop=Depends(get_shop),
):
    return shop.ledger.cancel(session, appt_id, current_user)
