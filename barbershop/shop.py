# barbershop/shop.py
# Owns all mutable state; routes reach it through app.state.

import logging
import random
from datetime import date, datetime
from typing import Callable, List, Optional

from sqlmodel import Session

from barbershop.auth import make_password_context
from barbershop.availability import AvailabilitySource, RandomAvailability, compute_slots
from barbershop.config import Settings
from barbershop.data import seed_catalog, seed_mock_appointments
from barbershop.db import init_db, make_engine
from barbershop.identity import FileSlots, IdentityStore, MemorySlots, SessionRegistry, SnapshotSlots
from barbershop.ledger import Ledger
from barbershop.reconciler import reconcile_barbers
from barbershop.schemas import TimeSlot

logger = logging.getLogger(__name__)


class Shop:
    def __init__(
        self,
        settings: Settings,
        *,
        availability: Optional[AvailabilitySource] = None,
        clock: Optional[Callable[[], datetime]] = None,
        slots: Optional[SnapshotSlots] = None,
        engine=None,
    ):
        self.settings = settings
        self.clock = clock or datetime.now
        self.rng = random.Random(settings.RANDOM_SEED)
        self.availability = availability or RandomAvailability(
            settings.AVAILABILITY_RATIO, settings.RANDOM_SEED
        )
        self.engine = engine if engine is not None else make_engine(settings.DATABASE_URL)
        self.pwd_context = make_password_context(settings.BCRYPT_ROUNDS)

        if slots is None:
            slots = FileSlots(settings.SNAPSHOT_DIR) if settings.SNAPSHOT_DIR else MemorySlots()
        self.sessions = SessionRegistry(
            slots, settings.ACCESS_TOKEN_EXPIRE_MINUTES, self.clock
        )
        self.identity = IdentityStore(self.sessions, self.pwd_context, settings.VERIFY_PASSWORDS)

        self.ledger = Ledger(self.compute_slots, self.clock)
        self.ledger.subscribe(self.reconcile)

    def session(self) -> Session:
        return Session(self.engine)

    def today(self) -> date:
        return self.clock().date()

    def compute_slots(self, session: Session, barber_id: int, day: date) -> List[TimeSlot]:
        return compute_slots(
            session,
            barber_id,
            day,
            source=self.availability,
            open_time=self.settings.OPEN_TIME,
            close_time=self.settings.CLOSE_TIME,
            slot_minutes=self.settings.SLOT_MINUTES,
        )

    def reconcile(self, session: Session):
        return reconcile_barbers(session, self.clock())

    def start(self):
        """Create tables, seed the catalog and mock ledger, settle barber statuses."""
        init_db(self.engine)
        with self.session() as session:
            seed_catalog(session, self.pwd_context, self.settings.DEMO_PASSWORD)
            if self.settings.MOCK_APPOINTMENTS > 0:
                seed_mock_appointments(
                    session,
                    self.rng,
                    today=self.today(),
                    now=self.clock(),
                    count=self.settings.MOCK_APPOINTMENTS,
                    days_ahead=self.settings.MOCK_DAYS_AHEAD,
                )
            self.reconcile(session)
        logger.info("Shop ready (%s)", self.settings.DATABASE_URL)
