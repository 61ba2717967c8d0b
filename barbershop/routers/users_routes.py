# barbershop/routers/users_routes.py

from typing import List

from fastapi import APIRouter, Depends
from sqlmodel import Session

from barbershop.auth import get_current_user
from barbershop.deps import get_session, get_shop
from barbershop.schemas import AppointmentPublic, AppointmentWindow, UserPublic

router = APIRouter(
    prefix="/me",
    tags=["users"],
)


@router.get("", response_model=UserPublic)
def me(current_user: UserPublic = Depends(get_current_user)):
    return current_user


@router.get("/appointments", response_model=List[AppointmentPublic])
def my_appointments(
    when: AppointmentWindow = AppointmentWindow.all,
    session: Session = Depends(get_session),
    current_user: UserPublic = Depends(get_current_user),
    shop=Depends(get_shop),
):
    return shop.ledger.for_user(session, current_user.id, when)
