import logging
import secrets

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.core.exceptions import UnauthorizedError
from app.db.session import get_db
from app.services.settings_store import SettingsStore

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer()

__all__ = ["get_db", "get_settings_store", "require_auth"]


async def require_auth(
    request: Request,
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
) -> str:
    if not secrets.compare_digest(credentials.credentials.encode(), settings.API_TOKEN.encode()):
        logger.warning(
            "Rejected API token for %s %s (request %s)",
            request.method,
            request.url.path,
            getattr(request.state, "request_id", "-"),
        )
        raise UnauthorizedError("Invalid API token")
    return credentials.credentials


async def get_settings_store(db: AsyncSession = Depends(get_db)) -> SettingsStore:
    return SettingsStore(db)
