import logging
import secrets

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from .config import Settings
from .dependencies import get_app_settings

logger = logging.getLogger(__name__)

security = HTTPBasic(realm="admin", auto_error=False)


def _challenge() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Authentication required",
        headers={"WWW-Authenticate": 'Basic realm="admin"'},
    )


def require_admin(
    credentials: HTTPBasicCredentials | None = Depends(security),
    settings: Settings = Depends(get_app_settings),
) -> str:
    """Shared admin credential. No password configured → admin API locked."""
    if credentials is None:
        raise _challenge()

    if not settings.admin_password:
        logger.warning("Admin request rejected: ADMIN_PASSWORD not set")
        raise _challenge()

    user_ok = secrets.compare_digest(
        credentials.username.encode(), settings.admin_user.encode()
    )
    password_ok = secrets.compare_digest(
        credentials.password.encode(), settings.admin_password.encode()
    )
    if not (user_ok and password_ok):
        logger.warning(f"Admin auth failed for user '{credentials.username}'")
        raise _challenge()

    return credentials.username
