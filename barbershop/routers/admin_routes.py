# barbershop/routers/admin_routes.py

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends
from sqlmodel import Session

from barbershop.auth import get_current_user
from barbershop.catalog import barbers_by_status
from barbershop.deps import get_session, get_shop, require_admin
from barbershop.schemas import AppointmentPublic, AppointmentStatus, Overview, UserPublic

router = APIRouter(
    prefix="/admin",
    tags=["admin"],
)


@router.get("/appointments", response_model=List[AppointmentPublic])
def all_appointments(
    status: Optional[AppointmentStatus] = None,
    on_date: Optional[date] = None,
    barber_id: Optional[int] = None,
    session: Session = Depends(get_session),
    current_user: UserPublic = Depends(get_current_user),
    shop=Depends(get_shop),
):
    require_admin(current_user)
    return shop.ledger.list_all(session, status=status, on_date=on_date, barber_id=barber_id)


@router.get("/overview", response_model=Overview)
def overview(
    session: Session = Depends(get_session),
    current_user: UserPublic = Depends(get_current_user),
    shop=Depends(get_shop),
):
    require_admin(current_user)
    counts = shop.ledger.counts(session, shop.today())
    return {**counts, "barbers_by_status": barbers_by_status(session)}
