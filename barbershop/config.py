# barbershop/config.py

from datetime import time
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Shop settings, read from BARBERSHOP_* environment variables or .env."""

    # Database (in-memory by default, nothing survives a restart)
    DATABASE_URL: str = "sqlite://"

    # Security
    SECRET_KEY: str = "change-me-later"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 30
    BCRYPT_ROUNDS: int = 12
    # login only looks the email up unless this is switched on
    VERIFY_PASSWORDS: bool = False
    DEMO_PASSWORD: str = "password123"

    # Opening hours
    OPEN_TIME: time = time(9, 0)
    CLOSE_TIME: time = time(18, 0)
    SLOT_MINUTES: int = Field(default=30, gt=0)

    # Availability
    AVAILABILITY_RATIO: float = Field(default=0.7, ge=0, le=1)
    # seeds availability draws and mock appointments; None is non-reproducible
    RANDOM_SEED: Optional[int] = None

    # Mock data
    MOCK_APPOINTMENTS: int = 20
    MOCK_DAYS_AHEAD: int = 7

    # Session snapshots: None keeps them in memory
    SNAPSHOT_DIR: Optional[Path] = None

    LOG_LEVEL: str = "INFO"

    class Config:
        env_prefix = "BARBERSHOP_"
        env_file = ".env"
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    return Settings()
