# barbershop/availability.py

import random
from datetime import date, datetime, time, timedelta
from typing import Iterable, List, Optional, Protocol, Union

from sqlmodel import Session, select

from barbershop.models import Appointment
from barbershop.schemas import AppointmentStatus, TimeSlot


class AvailabilitySource(Protocol):
    """Base availability of a slot, before the ledger is consulted."""

    def is_open(self, barber_id: int, day: date, slot: time) -> bool:
        ...


class RandomAvailability:
    """Each slot is open with probability `ratio`, drawn independently per query."""

    def __init__(self, ratio: float = 0.7, seed: Optional[int] = None):
        self.ratio = ratio
        self._rng = random.Random(seed)

    def is_open(self, barber_id: int, day: date, slot: time) -> bool:
        return self._rng.random() < self.ratio


class FixedAvailability:
    """Every slot is open except the listed times."""

    def __init__(self, closed: Iterable[Union[str, time]] = ()):
        self.closed = {hhmm(t) if isinstance(t, time) else t for t in closed}

    def is_open(self, barber_id: int, day: date, slot: time) -> bool:
        return hhmm(slot) not in self.closed


def hhmm(value: time) -> str:
    return value.strftime("%H:%M")


def slot_times(open_time: time, close_time: time, slot_minutes: int) -> List[time]:
    """Slot starts from opening time, every slot_minutes, up to closing time."""
    anchor = date.today()
    current = datetime.combine(anchor, open_time)
    end = datetime.combine(anchor, close_time)
    step = timedelta(minutes=slot_minutes)

    times = []
    while current + step <= end:
        times.append(current.time())
        current += step
    return times


def taken_times(session: Session, barber_id: int, day: date) -> set:
    rows = session.exec(
        select(Appointment.time)
        .where(Appointment.barber_id == barber_id)
        .where(Appointment.date == day)
        .where(Appointment.status != AppointmentStatus.cancelled.value)
    ).all()
    return set(rows)


def compute_slots(
    session: Session,
    barber_id: int,
    day: date,
    *,
    source: AvailabilitySource,
    open_time: time,
    close_time: time,
    slot_minutes: int,
) -> List[TimeSlot]:
    """
    Slots for one barber on one day.
    Never fails: an unknown barber simply gets the full window.
    """
    taken = taken_times(session, barber_id, day)

    slots = []
    for start in slot_times(open_time, close_time, slot_minutes):
        available = source.is_open(barber_id, day, start) and start not in taken
        slots.append(TimeSlot(time=hhmm(start), available=available))
    return slots
