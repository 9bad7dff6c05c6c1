# backend/salon_booking/config.py

import json
from functools import lru_cache
from pathlib import Path
from typing import Annotated

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from .services.slots.config import BusinessHours

BASE_DIR = Path(__file__).resolve().parents[2]  # repo root

SENDGRID_API_URL = "https://api.sendgrid.com/v3/mail/send"


class Settings(BaseSettings):
    # ===== Database =====
    database_url: str = "sqlite:///./salon.db"
    db_pool_size: int = 20
    db_max_overflow: int = 0
    db_pool_timeout: float = 2.0  # seconds to wait for a free connection

    # ===== Business =====
    business_name: str = "Peluquería"
    open_hour: int = 10
    close_hour: int = 19  # exclusive
    slot_minutes: int = 30
    closed_weekday: int = 6  # date.weekday(): 0 = Monday, 6 = Sunday
    slot_times: Annotated[list[str] | None, NoDecode] = None

    # ===== Admin =====
    admin_user: str = "admin"
    admin_password: str | None = None

    # ===== Mail =====
    mail_api_url: str = SENDGRID_API_URL
    mail_api_key: str | None = None
    mail_from: str | None = None
    mail_timeout: float = 10.0

    # ===== Web =====
    host: str = "0.0.0.0"
    port: int = 3000
    static_dir: Path | None = None
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=BASE_DIR / ".env",
        extra="ignore",
    )

    @field_validator("slot_times", mode="before")
    @classmethod
    def split_slot_times(cls, v):
        """SLOT_TIMES=10:00,10:30,... or a JSON list."""
        if isinstance(v, str):
            v = v.strip()
            if not v:
                return None
            if v.startswith("["):
                return json.loads(v)
            return [part.strip() for part in v.split(",") if part.strip()]
        return v

    @model_validator(mode="after")
    def check_business_hours(self):
        # Fail at startup, not on the first request
        self.business_hours.slot_grid
        return self

    @property
    def business_hours(self) -> BusinessHours:
        return BusinessHours(
            open_hour=self.open_hour,
            close_hour=self.close_hour,
            slot_minutes=self.slot_minutes,
            closed_weekday=self.closed_weekday,
            slot_times=tuple(self.slot_times) if self.slot_times is not None else None,
        )

    @property
    def resolved_database_url(self) -> str:
        url = self.database_url
        if url.startswith("postgres://"):
            url = url.replace("postgres://", "postgresql+psycopg://", 1)
        elif url.startswith("postgresql://"):
            url = url.replace("postgresql://", "postgresql+psycopg://", 1)
        if url.startswith("sqlite:///./"):
            # Relative path → absolute, anchored at the repo root
            relative_path = url.replace("sqlite:///./", "")
            absolute_path = BASE_DIR / relative_path
            return f"sqlite:///{absolute_path}"
        return url

    @property
    def mail_enabled(self) -> bool:
        return bool(self.mail_api_key and self.mail_from)


@lru_cache
def get_settings() -> Settings:
    return Settings()
