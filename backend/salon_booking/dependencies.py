"""FastAPI dependencies shared by the routers."""
from datetime import datetime

from fastapi import Request

from .config import Settings
from .services.notifications import Notifier
from .services.slots.config import BusinessHours


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_business_hours(request: Request) -> BusinessHours:
    return request.app.state.business_hours


def get_now() -> datetime:
    """Local wall-clock time. Overridden in tests to pin "today"."""
    return datetime.now()


def get_notifier(request: Request) -> Notifier:
    return request.app.state.notifier
