# barbershop/auth.py

from datetime import datetime, timedelta, timezone
from typing import Optional, Tuple

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from jose import jwt, JWTError
from passlib.context import CryptContext

from barbershop.config import Settings
from barbershop.deps import get_shop
from barbershop.errors import Unauthenticated
from barbershop.schemas import UserPublic

# auto_error off: routes decide whether a missing identity is an error
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/login", auto_error=False)


def make_password_context(rounds: int = 12) -> CryptContext:
    return CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)


def create_access_token(settings: Settings, user_id: int, session_id: str) -> str:
    expire = datetime.now(timezone.utc) + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode = {"sub": str(user_id), "sid": session_id, "exp": expire}
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(settings: Settings, token: str) -> Tuple[str, str]:
    """Returns (user_id, session_id)."""
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        raise Unauthenticated("Invalid token")

    user_id = payload.get("sub")
    session_id = payload.get("sid")
    if user_id is None or session_id is None:
        raise Unauthenticated("Invalid token")
    return user_id, session_id


def get_session_id(
    token: Optional[str] = Depends(oauth2_scheme),
    shop=Depends(get_shop),
) -> Optional[str]:
    if token is None:
        return None
    _, session_id = decode_access_token(shop.settings, token)
    return session_id


def get_optional_user(
    session_id: Optional[str] = Depends(get_session_id),
    shop=Depends(get_shop),
) -> Optional[UserPublic]:
    if session_id is None:
        return None
    user = shop.identity.current(session_id)
    if user is None:
        # logged out, or the snapshot is gone
        raise Unauthenticated("Session expired")
    return user


def get_current_user(user: Optional[UserPublic] = Depends(get_optional_user)) -> UserPublic:
    if user is None:
        raise Unauthenticated()
    return user
