# barbershop/routers/barbers_routes.py

from datetime import date
from typing import List

from fastapi import APIRouter, Depends
from sqlmodel import Session

from barbershop.auth import get_current_user
from barbershop.catalog import barber_public, get_barber, list_barbers, set_barber_status
from barbershop.deps import get_session, get_shop, require_admin
from barbershop.schemas import AvailabilityResponse, BarberPublic, BarberStatusUpdate, UserPublic

router = APIRouter(
    prefix="/barbers",
    tags=["barbers"],
)


@router.get("", response_model=List[BarberPublic])
def barbers(session: Session = Depends(get_session)):
    # the shop floor: every chair with its status and position
    return [barber_public(b) for b in list_barbers(session)]


@router.get("/{barber_id}", response_model=BarberPublic)
def barber(barber_id: int, session: Session = Depends(get_session)):
    return barber_public(get_barber(session, barber_id))


@router.get("/{barber_id}/availability", response_model=AvailabilityResponse)
def barber_availability(
    barber_id: int,
    date: date,
    session: Session = Depends(get_session),
    shop=Depends(get_shop),
):
    get_barber(session, barber_id)
    slots = shop.compute_slots(session, barber_id, date)
    return {"barber_id": barber_id, "date": date, "slots": slots}


@router.patch("/{barber_id}/status", response_model=BarberPublic)
def update_barber_status(
    barber_id: int,
    update: BarberStatusUpdate,
    session: Session = Depends(get_session),
    current_user: UserPublic = Depends(get_current_user),
):
    require_admin(current_user)
    return barber_public(set_barber_status(session, barber_id, update.status))
