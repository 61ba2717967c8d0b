# barbershop/models.py

from typing import Optional, List
from datetime import datetime, date as Date, time as Time

from sqlalchemy import DateTime, Index, text
from sqlalchemy.types import JSON
from sqlmodel import SQLModel, Field, Column


class User(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str
    email: str = Field(index=True, unique=True)
    phone: Optional[str] = None
    is_admin: bool = False
    preferred_barber_id: Optional[int] = Field(default=None, foreign_key="barber.id")
    password_hash: Optional[str] = None


class Barber(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str
    avatar: str = ""
    specialties: List[str] = Field(default_factory=list, sa_column=Column(JSON))
    bio: str = ""
    status: str = "available"  # available, occupied, break, off
    # position on the shop floor, in percent
    position_x: float = 0
    position_y: float = 0


class Service(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str
    description: str = ""
    duration: int  # minutes
    price: float


class Appointment(SQLModel, table=True):
    # one live appointment per barber slot; cancelled rows free the slot again
    __table_args__ = (
        Index(
            "uq_barber_slot_active",
            "barber_id",
            "date",
            "time",
            unique=True,
            sqlite_where=text("status != 'cancelled'"),
            postgresql_where=text("status != 'cancelled'"),
        ),
    )

    id: Optional[int] = Field(default=None, primary_key=True)

    user_id: int = Field(foreign_key="user.id", index=True)
    barber_id: int = Field(foreign_key="barber.id", index=True)
    service_id: int = Field(foreign_key="service.id")
    date: Date = Field(index=True)
    time: Time
    status: str = "confirmed"  # pending, confirmed, completed, cancelled
    # naive local time, as produced by the shop clock
    created_at: datetime = Field(
        default_factory=datetime.now,
        sa_column=Column(DateTime(timezone=False), nullable=False),
    )

    @property
    def starts_at(self) -> datetime:
        return datetime.combine(self.date, self.time)
