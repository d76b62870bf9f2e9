import logging
from collections.abc import AsyncIterator

from fastapi import HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.engine import async_session_factory

logger = logging.getLogger(__name__)


async def get_db() -> AsyncIterator[AsyncSession]:
    """Request-scoped session: commit on success, roll back on any error.

    Services flush rather than commit, so a request that ends in an error
    response leaves nothing behind. Bulk updates are the exception: they
    commit per asset on this same session.
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except HTTPException as e:
            logger.debug("Rolling back request session (%d %s)", e.status_code, e.detail)
            await session.rollback()
            raise
        except Exception:
            logger.warning("Rolling back request session after unexpected error", exc_info=True)
            await session.rollback()
            raise
