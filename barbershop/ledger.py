# barbershop/ledger.py

import logging
from datetime import date, datetime, time
from typing import Callable, List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy import func
from sqlmodel import Session, select

from barbershop.availability import hhmm
from barbershop.catalog import get_barber, get_service
from barbershop.errors import Forbidden, NotFound, SlotUnavailable, Unauthenticated
from barbershop.models import Appointment
from barbershop.schemas import AppointmentStatus, AppointmentWindow, TimeSlot, UserPublic

logger = logging.getLogger(__name__)

SlotsFn = Callable[[Session, int, date], List[TimeSlot]]
Listener = Callable[[Session], None]


class Ledger:
    """
    Appointment records: appended on booking, status mutated on cancel,
    never deleted. Listeners run after every change.
    """

    def __init__(self, compute_slots: SlotsFn, clock: Callable[[], datetime]):
        self._compute_slots = compute_slots
        self._clock = clock
        self._listeners: List[Listener] = []

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def _changed(self, session: Session) -> None:
        for listener in self._listeners:
            listener(session)

    def book(
        self,
        session: Session,
        barber_id: int,
        service_id: int,
        day: date,
        at: time,
        acting_user: Optional[UserPublic],
    ) -> Appointment:
        if acting_user is None:
            raise Unauthenticated("You must be logged in to book an appointment")

        get_barber(session, barber_id)
        get_service(session, service_id)

        # 1) The slot must be on the grid and currently open
        requested = hhmm(at)
        slot = None
        if at.second == 0 and at.microsecond == 0:
            for s in self._compute_slots(session, barber_id, day):
                if s.time == requested:
                    slot = s
                    break
        if slot is None or not slot.available:
            logger.info("Rejected booking barber=%s %s %s: slot unavailable", barber_id, day, requested)
            raise SlotUnavailable()

        # 2) Reserve; the partial unique index settles concurrent bookings
        appt = Appointment(
            user_id=acting_user.id,
            barber_id=barber_id,
            service_id=service_id,
            date=day,
            time=at.replace(tzinfo=None),
            status=AppointmentStatus.confirmed.value,
            created_at=self._clock(),
        )
        session.add(appt)
        try:
            session.commit()
        except IntegrityError:
            session.rollback()
            logger.info("Rejected booking barber=%s %s %s: lost the slot race", barber_id, day, requested)
            raise SlotUnavailable()

        session.refresh(appt)
        logger.info(
            "Booked appointment %s: user=%s barber=%s service=%s %s %s",
            appt.id, appt.user_id, barber_id, service_id, day, requested,
        )
        self._changed(session)
        return appt

    def cancel(
        self,
        session: Session,
        appointment_id: int,
        acting_user: Optional[UserPublic],
    ) -> Appointment:
        if acting_user is None:
            raise Unauthenticated()

        appt = session.get(Appointment, appointment_id)
        if appt is None:
            raise NotFound("Appointment not found")

        if appt.user_id != acting_user.id and not acting_user.is_admin:
            raise Forbidden("You are not authorized to cancel this appointment")

        # cancelling twice is a no-op
        if appt.status == AppointmentStatus.cancelled.value:
            return appt

        appt.status = AppointmentStatus.cancelled.value
        session.add(appt)
        session.commit()
        session.refresh(appt)
        logger.info("Cancelled appointment %s by user %s", appt.id, acting_user.id)
        self._changed(session)
        return appt

    def get(self, session: Session, appointment_id: int, acting_user: UserPublic) -> Appointment:
        appt = session.get(Appointment, appointment_id)
        if appt is None:
            raise NotFound("Appointment not found")
        if appt.user_id != acting_user.id and not acting_user.is_admin:
            raise Forbidden()
        return appt

    def for_user(
        self,
        session: Session,
        user_id: int,
        window: AppointmentWindow = AppointmentWindow.all,
    ) -> List[Appointment]:
        """A user's appointments; upcoming = still ahead and not cancelled, past = the rest."""
        appts = session.exec(
            select(Appointment)
            .where(Appointment.user_id == user_id)
            .order_by(Appointment.date, Appointment.time)
        ).all()
        if window == AppointmentWindow.all:
            return appts

        now = self._clock()
        upcoming = [
            a for a in appts
            if a.starts_at > now and a.status != AppointmentStatus.cancelled.value
        ]
        if window == AppointmentWindow.upcoming:
            return upcoming
        upcoming_ids = {a.id for a in upcoming}
        return [a for a in appts if a.id not in upcoming_ids]

    def list_all(
        self,
        session: Session,
        status: Optional[AppointmentStatus] = None,
        on_date: Optional[date] = None,
        barber_id: Optional[int] = None,
    ) -> List[Appointment]:
        stmt = select(Appointment)
        if status is not None:
            stmt = stmt.where(Appointment.status == status.value)
        if on_date is not None:
            stmt = stmt.where(Appointment.date == on_date)
        if barber_id is not None:
            stmt = stmt.where(Appointment.barber_id == barber_id)
        stmt = stmt.order_by(Appointment.date, Appointment.time, Appointment.id)
        return session.exec(stmt).all()

    def counts(self, session: Session, today: date) -> dict:
        by_status = dict(
            session.exec(
                select(Appointment.status, func.count(Appointment.id)).group_by(Appointment.status)
            ).all()
        )
        on_today = session.exec(
            select(func.count(Appointment.id)).where(Appointment.date == today)
        ).one()
        return {
            "total_appointments": sum(by_status.values()),
            "confirmed": by_status.get(AppointmentStatus.confirmed.value, 0),
            "pending": by_status.get(AppointmentStatus.pending.value, 0),
            "cancelled": by_status.get(AppointmentStatus.cancelled.value, 0),
            "today": on_today,
        }
