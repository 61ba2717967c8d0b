# barbershop/identity.py

import logging
import re
import uuid
from datetime import datetime, timedelta
from pathlib import Path
from typing import Callable, Dict, Iterable, Optional, Protocol, Tuple

from passlib.context import CryptContext
from pydantic import BaseModel
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from barbershop.errors import EmailTaken, InvalidCredentials
from barbershop.models import User
from barbershop.schemas import UserPublic

logger = logging.getLogger(__name__)

# key of the identity snapshot, namespaced per session
CURRENT_USER_KEY = "currentUser"


class SnapshotSlots(Protocol):
    """Key-value slots holding serialized identities."""

    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...

    def delete(self, key: str) -> None:
        ...

    def keys(self) -> Iterable[str]:
        ...


class MemorySlots:
    def __init__(self):
        self._data: Dict[str, str] = {}

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> Iterable[str]:
        return list(self._data)


class FileSlots:
    """One JSON file per key, so sessions survive a server reload."""

    def __init__(self, directory: Path):
        self.directory = Path(directory)
        self.directory.mkdir(parents=True, exist_ok=True)

    def _path(self, key: str) -> Path:
        return self.directory / (re.sub(r"[^A-Za-z0-9_.-]", "_", key) + ".json")

    def get(self, key: str) -> Optional[str]:
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set(self, key: str, value: str) -> None:
        self._path(key).write_text(value, encoding="utf-8")

    def delete(self, key: str) -> None:
        self._path(key).unlink(missing_ok=True)

    def keys(self) -> Iterable[str]:
        return [path.stem for path in self.directory.glob("*.json")]


class SessionSnapshot(BaseModel):
    user: UserPublic
    expires_at: datetime


class SessionRegistry:
    """Binds at most one identity to each session id, for ttl_minutes."""

    def __init__(
        self,
        slots: SnapshotSlots,
        ttl_minutes: int = 30,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.slots = slots
        self.ttl = timedelta(minutes=ttl_minutes)
        self._clock = clock

    @staticmethod
    def _key(session_id: str) -> str:
        return f"{CURRENT_USER_KEY}:{session_id}"

    def _load(self, key: str) -> Optional[SessionSnapshot]:
        raw = self.slots.get(key)
        if raw is None:
            return None
        snapshot = SessionSnapshot.model_validate_json(raw)
        if snapshot.expires_at <= self._clock():
            self.slots.delete(key)
            return None
        return snapshot

    def open(self, user: UserPublic) -> str:
        self.prune()
        session_id = uuid.uuid4().hex
        snapshot = SessionSnapshot(user=user, expires_at=self._clock() + self.ttl)
        self.slots.set(self._key(session_id), snapshot.model_dump_json())
        return session_id

    def restore(self, session_id: str) -> Optional[UserPublic]:
        snapshot = self._load(self._key(session_id))
        return snapshot.user if snapshot is not None else None

    def close(self, session_id: str) -> None:
        self.slots.delete(self._key(session_id))

    def prune(self) -> int:
        """Drop expired snapshots; returns how many were removed."""
        removed = 0
        for key in list(self.slots.keys()):
            if key.startswith(CURRENT_USER_KEY) and self._load(key) is None:
                removed += 1
        if removed:
            logger.info("Pruned %d expired sessions", removed)
        return removed


def normalize_email(email: str) -> str:
    return email.strip().lower()


class IdentityStore:
    def __init__(
        self,
        sessions: SessionRegistry,
        pwd_context: CryptContext,
        verify_passwords: bool = False,
    ):
        self.sessions = sessions
        self.pwd_context = pwd_context
        self.verify_passwords = verify_passwords

    def find(self, session: Session, email: str) -> Optional[User]:
        return session.exec(
            select(User).where(User.email == normalize_email(email))
        ).first()

    def login(self, session: Session, email: str, password: str) -> Tuple[UserPublic, str]:
        """Look the identity up by email and bind it to a new session."""
        user = self.find(session, email)
        if user is None:
            logger.info("Login failed for unknown email %s", email)
            raise InvalidCredentials()

        if self.verify_passwords and not (
            user.password_hash and self.pwd_context.verify(password, user.password_hash)
        ):
            logger.info("Login failed for %s: wrong password", user.email)
            raise InvalidCredentials()

        identity = UserPublic.model_validate(user)
        logger.info("User %s logged in", user.id)
        return identity, self.sessions.open(identity)

    def register(
        self,
        session: Session,
        name: str,
        email: str,
        password: str,
        phone: Optional[str] = None,
    ) -> Tuple[UserPublic, str]:
        email = normalize_email(email)
        if self.find(session, email) is not None:
            raise EmailTaken()

        user = User(
            name=name,
            email=email,
            phone=phone,
            is_admin=False,
            password_hash=self.pwd_context.hash(password),
        )
        session.add(user)
        try:
            session.commit()
        except IntegrityError:
            session.rollback()
            raise EmailTaken()
        session.refresh(user)

        identity = UserPublic.model_validate(user)
        logger.info("Registered user %s", user.id)
        return identity, self.sessions.open(identity)

    def current(self, session_id: str) -> Optional[UserPublic]:
        return self.sessions.restore(session_id)

    def logout(self, session_id: str) -> None:
        self.sessions.close(session_id)
