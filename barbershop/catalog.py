# barbershop/catalog.py

import logging
from collections import Counter
from typing import Dict, List

from sqlmodel import Session, select

from barbershop.errors import NotFound
from barbershop.models import Barber, Service
from barbershop.schemas import BarberPublic, BarberStatus, Position

logger = logging.getLogger(__name__)


def barber_public(barber: Barber) -> BarberPublic:
    return BarberPublic(
        id=barber.id,
        name=barber.name,
        avatar=barber.avatar,
        specialties=list(barber.specialties or []),
        bio=barber.bio,
        status=barber.status,
        position=Position(x=barber.position_x, y=barber.position_y),
    )


def list_barbers(session: Session) -> List[Barber]:
    return session.exec(select(Barber).order_by(Barber.id)).all()


def get_barber(session: Session, barber_id: int) -> Barber:
    barber = session.get(Barber, barber_id)
    if barber is None:
        raise NotFound("Barber not found")
    return barber


def set_barber_status(session: Session, barber_id: int, status: BarberStatus) -> Barber:
    """Manual status change from the admin dashboard."""
    barber = get_barber(session, barber_id)
    old = barber.status
    barber.status = status.value
    session.add(barber)
    session.commit()
    session.refresh(barber)
    logger.info("Barber %s status set %s -> %s by admin", barber_id, old, barber.status)
    return barber


def barbers_by_status(session: Session) -> Dict[str, int]:
    counts = Counter(b.status for b in list_barbers(session))
    return {s.value: counts.get(s.value, 0) for s in BarberStatus}


def list_services(session: Session) -> List[Service]:
    return session.exec(select(Service).order_by(Service.id)).all()


def get_service(session: Session, service_id: int) -> Service:
    service = session.get(Service, service_id)
    if service is None:
        raise NotFound("Service not found")
    return service
