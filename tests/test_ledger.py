# tests/test_ledger.py

from datetime import date, datetime, time

import pytest

from barbershop.errors import Forbidden, NotFound, SlotUnavailable, Unauthenticated
from barbershop.ledger import Ledger
from barbershop.models import Appointment
from barbershop.schemas import AppointmentStatus, AppointmentWindow, TimeSlot, UserPublic

from conftest import NOW

DAY = NOW.date()
TOMORROW = date(2030, 6, 4)

JOHN = UserPublic(id=1, name="John Doe", email="john@example.com")
JANE = UserPublic(id=2, name="Jane Smith", email="jane@example.com")
ADMIN = UserPublic(id=3, name="Admin User", email="admin@studio316.com", is_admin=True)


def snapshot(shop, db):
    return [(a.id, a.status) for a in shop.ledger.list_all(db)]


def test_book_creates_confirmed_record(shop, db):
    appt = shop.ledger.book(db, 2, 3, TOMORROW, time(14, 30), JOHN)

    assert appt.id is not None
    assert appt.status == AppointmentStatus.confirmed.value
    assert appt.created_at == NOW
    stored = shop.ledger.list_all(db, barber_id=2, on_date=TOMORROW)
    assert [(a.user_id, a.time, a.status) for a in stored] == [(1, time(14, 30), "confirmed")]


def test_created_at_is_stored_as_local_time(shop):
    # the shop clock is naive local time; it must be written and read back unchanged
    with shop.session() as db:
        booked_id = shop.ledger.book(db, 2, 3, TOMORROW, time(15, 0), JOHN).id
    with shop.session() as db:
        stored = db.get(Appointment, booked_id)
        assert stored.created_at == NOW
        assert stored.created_at.tzinfo is None


@pytest.mark.parametrize("status", ["pending", "completed"])
def test_any_live_status_holds_the_slot(shop, db, status):
    db.add(Appointment(
        user_id=2, barber_id=1, service_id=1, date=TOMORROW, time=time(12, 0),
        status=status, created_at=NOW,
    ))
    db.commit()

    slots = {s.time: s.available for s in shop.compute_slots(db, 1, TOMORROW)}
    assert slots["12:00"] is False
    with pytest.raises(SlotUnavailable):
        shop.ledger.book(db, 1, 1, TOMORROW, time(12, 0), JOHN)
    assert [a.status for a in shop.ledger.list_all(db, barber_id=1)] == [status]


def test_book_requires_identity(shop, db):
    with pytest.raises(Unauthenticated):
        shop.ledger.book(db, 1, 1, TOMORROW, time(10, 0), None)
    assert snapshot(shop, db) == []


def test_book_unknown_barber_or_service(shop, db):
    with pytest.raises(NotFound):
        shop.ledger.book(db, 99, 1, TOMORROW, time(10, 0), JOHN)
    with pytest.raises(NotFound):
        shop.ledger.book(db, 1, 99, TOMORROW, time(10, 0), JOHN)


@pytest.mark.parametrize("at", [time(8, 30), time(18, 0), time(10, 15), time(10, 0, 30)])
def test_book_outside_the_grid_is_refused(shop, db, at):
    with pytest.raises(SlotUnavailable):
        shop.ledger.book(db, 1, 1, TOMORROW, at, JOHN)


def test_book_closed_slot_is_refused(shop, db):
    shop.availability.closed = {"10:00"}
    with pytest.raises(SlotUnavailable):
        shop.ledger.book(db, 1, 1, TOMORROW, time(10, 0), JOHN)


def test_same_slot_cannot_be_booked_twice(shop, db):
    shop.ledger.book(db, 1, 1, TOMORROW, time(10, 0), JOHN)
    with pytest.raises(SlotUnavailable):
        shop.ledger.book(db, 1, 2, TOMORROW, time(10, 0), JANE)
    # another barber at the same time is fine
    shop.ledger.book(db, 2, 2, TOMORROW, time(10, 0), JANE)


def test_reservation_is_atomic_even_when_slot_check_is_stale(shop, db):
    # a slot source that never sees existing bookings, like a racing request
    stale = Ledger(lambda session, barber_id, day: [TimeSlot(time="10:00", available=True)], shop.clock)

    stale.book(db, 1, 1, TOMORROW, time(10, 0), JOHN)
    with pytest.raises(SlotUnavailable):
        stale.book(db, 1, 1, TOMORROW, time(10, 0), JANE)

    assert len(shop.ledger.list_all(db, barber_id=1, on_date=TOMORROW)) == 1


def test_cancelled_slot_can_be_booked_again(shop, db):
    first = shop.ledger.book(db, 1, 1, TOMORROW, time(10, 0), JOHN)
    shop.ledger.cancel(db, first.id, JOHN)
    second = shop.ledger.book(db, 1, 1, TOMORROW, time(10, 0), JANE)

    assert second.id != first.id
    statuses = sorted(a.status for a in shop.ledger.list_all(db))
    assert statuses == ["cancelled", "confirmed"]


def test_cancel_by_other_user_is_forbidden(shop, db):
    appt = shop.ledger.book(db, 1, 1, TOMORROW, time(10, 0), JOHN)
    before = snapshot(shop, db)

    with pytest.raises(Forbidden):
        shop.ledger.cancel(db, appt.id, JANE)

    assert snapshot(shop, db) == before


def test_admin_can_cancel_any_appointment(shop, db):
    appt = shop.ledger.book(db, 1, 1, TOMORROW, time(10, 0), JOHN)
    assert shop.ledger.cancel(db, appt.id, ADMIN).status == "cancelled"


def test_cancel_twice_keeps_the_record(shop, db):
    appt = shop.ledger.book(db, 1, 1, TOMORROW, time(10, 0), JOHN)

    assert shop.ledger.cancel(db, appt.id, JOHN).status == "cancelled"
    assert shop.ledger.cancel(db, appt.id, JOHN).status == "cancelled"
    assert snapshot(shop, db) == [(appt.id, "cancelled")]


def test_cancel_unknown_and_anonymous(shop, db):
    with pytest.raises(NotFound):
        shop.ledger.cancel(db, 12345, JOHN)
    with pytest.raises(Unauthenticated):
        shop.ledger.cancel(db, 12345, None)


def test_listeners_run_on_every_change(shop, db):
    calls = []
    shop.ledger.subscribe(lambda session: calls.append("changed"))

    appt = shop.ledger.book(db, 1, 1, TOMORROW, time(10, 0), JOHN)
    shop.ledger.cancel(db, appt.id, JOHN)
    shop.ledger.cancel(db, appt.id, JOHN)

    assert calls == ["changed", "changed"]


def test_for_user_splits_upcoming_and_past(shop, db):
    earlier = shop.ledger.book(db, 1, 1, DAY, time(9, 0), JOHN)
    later = shop.ledger.book(db, 1, 1, DAY, time(15, 0), JOHN)
    dropped = shop.ledger.book(db, 2, 1, TOMORROW, time(9, 0), JOHN)
    shop.ledger.cancel(db, dropped.id, JOHN)
    shop.ledger.book(db, 3, 1, TOMORROW, time(9, 0), JANE)

    def ids(window):
        return [a.id for a in shop.ledger.for_user(db, JOHN.id, window)]

    assert ids(AppointmentWindow.upcoming) == [later.id]
    assert ids(AppointmentWindow.past) == [earlier.id, dropped.id]
    assert ids(AppointmentWindow.all) == [earlier.id, later.id, dropped.id]


def test_counts(shop, db):
    shop.ledger.book(db, 1, 1, DAY, time(16, 0), JOHN)
    appt = shop.ledger.book(db, 1, 1, TOMORROW, time(16, 0), JANE)
    shop.ledger.cancel(db, appt.id, JANE)

    assert shop.ledger.counts(db, DAY) == {
        "total_appointments": 2,
        "confirmed": 1,
        "pending": 0,
        "cancelled": 1,
        "today": 1,
    }
