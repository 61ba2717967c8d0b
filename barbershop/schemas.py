# barbershop/schemas.py

from pydantic import BaseModel, ConfigDict, Field, field_serializer
from enum import Enum
from datetime import datetime, date, time
from typing import Dict, List, Optional


class BarberStatus(str, Enum):
    available = "available"
    occupied = "occupied"
    on_break = "break"
    off = "off"


# statuses an admin sets by hand; the reconciler leaves them alone
MANUAL_STATUSES = (BarberStatus.on_break.value, BarberStatus.off.value)


class AppointmentStatus(str, Enum):
    pending = "pending"
    confirmed = "confirmed"
    completed = "completed"
    cancelled = "cancelled"


# statuses that hold a slot
ACTIVE_STATUSES = (AppointmentStatus.pending.value, AppointmentStatus.confirmed.value)


class AppointmentWindow(str, Enum):
    upcoming = "upcoming"
    past = "past"
    all = "all"


class UserPublic(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    phone: Optional[str] = None
    is_admin: bool = False
    preferred_barber_id: Optional[int] = None


class UserCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    email: str = Field(min_length=3, max_length=254)
    password: str = Field(min_length=1, max_length=72)
    phone: Optional[str] = None


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserPublic


class Position(BaseModel):
    x: float
    y: float


class BarberPublic(BaseModel):
    id: int
    name: str
    avatar: str
    specialties: List[str]
    bio: str
    status: BarberStatus
    position: Position


class BarberStatusUpdate(BaseModel):
    status: BarberStatus


class ServicePublic(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str
    duration: int
    price: float


class TimeSlot(BaseModel):
    time: str  # "HH:MM"
    available: bool


class AvailabilityResponse(BaseModel):
    barber_id: int
    date: date
    slots: List[TimeSlot]


class AppointmentCreate(BaseModel):
    barber_id: int
    service_id: int
    date: date
    time: time


class AppointmentPublic(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    barber_id: int
    service_id: int
    date: date
    time: time
    status: AppointmentStatus
    created_at: datetime

    @field_serializer("time")
    def serialize_time(self, value: time) -> str:
        return value.strftime("%H:%M")


class Overview(BaseModel):
    total_appointments: int
    confirmed: int
    pending: int
    cancelled: int
    today: int
    barbers_by_status: Dict[str, int]
