# barbershop/data.py

import logging
import random
from datetime import date, datetime, time, timedelta

from passlib.context import CryptContext
from sqlmodel import Session, select

from barbershop.models import Appointment, Barber, Service, User
from barbershop.schemas import AppointmentStatus

logger = logging.getLogger(__name__)

USERS = [
    {
        "name": "John Doe",
        "email": "john@example.com",
        "phone": "555-123-4567",
        "is_admin": False,
    },
    {
        "name": "Jane Smith",
        "email": "jane@example.com",
        "phone": "555-987-6543",
        "is_admin": False,
        "preferred_barber_id": 1,
    },
    {
        "name": "Admin User",
        "email": "admin@studio316.com",
        "phone": "555-111-2222",
        "is_admin": True,
    },
]

BARBERS = [
    {
        "name": "Mike Johnson",
        "avatar": "https://images.unsplash.com/photo-1618077360395-f3068be8e001?auto=format&fit=crop&w=300&q=80",
        "specialties": ["Classic Cuts", "Fades", "Beard Trims"],
        "bio": "With 10 years of experience, Mike specializes in classic cuts and modern fades.",
        "status": "available",
        "position_x": 20,
        "position_y": 30,
    },
    {
        "name": "Sarah Williams",
        "avatar": "https://images.unsplash.com/photo-1580489944761-15a19d654956?auto=format&fit=crop&w=300&q=80",
        "specialties": ["Modern Styles", "Hair Coloring", "Skin Fades"],
        "bio": "Sarah brings creativity and precision to every haircut with 8 years in the industry.",
        "status": "occupied",
        "position_x": 60,
        "position_y": 30,
    },
    {
        "name": "David Martinez",
        "avatar": "https://images.unsplash.com/photo-1531384441138-2736e62e0919?auto=format&fit=crop&w=300&q=80",
        "specialties": ["Razor Cuts", "Hot Towel Shaves", "Beard Styling"],
        "bio": "David is our beard and shaving expert with over 12 years of experience.",
        "status": "break",
        "position_x": 20,
        "position_y": 70,
    },
    {
        "name": "Lisa Chen",
        "avatar": "https://images.unsplash.com/photo-1567532939604-b6b5b0db2604?auto=format&fit=crop&w=300&q=80",
        "specialties": ["Textured Cuts", "Pompadours", "Kids Cuts"],
        "bio": "Lisa specializes in creating the perfect cut for any hair type and age.",
        "status": "available",
        "position_x": 60,
        "position_y": 70,
    },
]

SERVICES = [
    {"name": "Classic Haircut", "description": "Traditional haircut with scissors and clippers", "duration": 30, "price": 25},
    {"name": "Fade", "description": "Modern fade haircut with precise blending", "duration": 45, "price": 35},
    {"name": "Beard Trim", "description": "Shape and trim your beard to perfection", "duration": 20, "price": 15},
    {"name": "Haircut & Beard Combo", "description": "Complete haircut and beard trim service", "duration": 60, "price": 45},
    {"name": "Hot Towel Shave", "description": "Luxurious hot towel straight razor shave", "duration": 45, "price": 30},
    {"name": "Kids Haircut", "description": "Haircut for children under 12", "duration": 20, "price": 18},
]


def seed_catalog(session: Session, pwd_context: CryptContext, demo_password: str):
    """Barbers, services and demo identities; skipped if already seeded."""
    if session.exec(select(Barber)).first() is not None:
        return

    for row in BARBERS:
        session.add(Barber(**row))
    for row in SERVICES:
        session.add(Service(**row))
    session.commit()

    password_hash = pwd_context.hash(demo_password)
    for row in USERS:
        session.add(User(**row, password_hash=password_hash))
    session.commit()
    logger.info("Seeded %d barbers, %d services, %d users", len(BARBERS), len(SERVICES), len(USERS))


def seed_mock_appointments(
    session: Session,
    rng: random.Random,
    today: date,
    now: datetime,
    count: int = 20,
    days_ahead: int = 7,
):
    """Random appointments for the demo customers, on the hour or half hour between 09:00 and 17:30."""
    customers = session.exec(select(User).where(User.is_admin == False)).all()  # noqa: E712
    barbers = session.exec(select(Barber)).all()
    services = session.exec(select(Service)).all()
    if not (customers and barbers and services):
        return

    taken = {
        (a.barber_id, a.date, a.time)
        for a in session.exec(
            select(Appointment).where(Appointment.status != AppointmentStatus.cancelled.value)
        ).all()
    }

    added = 0
    for _ in range(count):
        day = today + timedelta(days=rng.randrange(max(days_ahead, 1)))
        at = time(9 + rng.randrange(9), 0 if rng.random() > 0.5 else 30)
        barber = rng.choice(barbers)
        key = (barber.id, day, at)
        if key in taken:
            continue
        taken.add(key)
        session.add(Appointment(
            user_id=rng.choice(customers[:2]).id,
            barber_id=barber.id,
            service_id=rng.choice(services).id,
            date=day,
            time=at,
            status=(AppointmentStatus.pending.value if rng.random() > 0.8
                    else AppointmentStatus.confirmed.value),
            created_at=now,
        ))
        added += 1

    session.commit()
    logger.info("Seeded %d mock appointments", added)
