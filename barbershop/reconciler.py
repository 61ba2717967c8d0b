# barbershop/reconciler.py

import logging
from collections import defaultdict
from datetime import datetime
from typing import Dict, Iterable, Tuple

from sqlmodel import Session, select

from barbershop.models import Appointment, Barber
from barbershop.schemas import AppointmentStatus, BarberStatus, MANUAL_STATUSES

logger = logging.getLogger(__name__)


def derive_status(
    current_status: str,
    appointments: Iterable[Appointment],
    now: datetime,
) -> str:
    """
    Display status of one barber at `now`.

    Break and off are manual overrides and win over everything. Otherwise the
    barber is occupied once a confirmed appointment of today has started.
    """
    if current_status in MANUAL_STATUSES:
        return current_status

    for appt in appointments:
        if appt.status != AppointmentStatus.confirmed.value or appt.date != now.date():
            continue
        if appt.starts_at <= now:
            return BarberStatus.occupied.value

    return BarberStatus.available.value


def reconcile_barbers(session: Session, now: datetime) -> Dict[int, Tuple[str, str]]:
    """Recompute every barber's status; returns {barber_id: (old, new)} for the ones that moved."""
    todays = session.exec(
        select(Appointment)
        .where(Appointment.date == now.date())
        .where(Appointment.status == AppointmentStatus.confirmed.value)
    ).all()
    by_barber = defaultdict(list)
    for appt in todays:
        by_barber[appt.barber_id].append(appt)

    changes = {}
    for barber in session.exec(select(Barber)).all():
        new_status = derive_status(barber.status, by_barber[barber.id], now)
        if new_status != barber.status:
            changes[barber.id] = (barber.status, new_status)
            barber.status = new_status
            session.add(barber)

    if changes:
        session.commit()
        for barber_id, (old, new) in changes.items():
            logger.info("Barber %s status %s -> %s", barber_id, old, new)

    return changes
