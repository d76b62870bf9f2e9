import logging
import time

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from app.config import settings

logger = logging.getLogger(__name__)


def install_query_timing(engine: AsyncEngine, threshold: float) -> None:
    """Log every statement on ``engine`` that runs for ``threshold`` seconds or longer."""

    @event.listens_for(engine.sync_engine, "before_cursor_execute")
    def _before_cursor_execute(conn, cursor, statement, parameters, context, executemany):
        conn.info.setdefault("query_start_time", []).append(time.monotonic())

    @event.listens_for(engine.sync_engine, "after_cursor_execute")
    def _after_cursor_execute(conn, cursor, statement, parameters, context, executemany):
        starts = conn.info.get("query_start_time")
        if not starts:
            return
        elapsed = time.monotonic() - starts.pop()
        if elapsed >= threshold:
            logger.warning(
                "SLOW QUERY (%.3fs): %s | params=%s",
                elapsed,
                statement[:500],
                str(parameters)[:200] if parameters else None,
            )


def build_engine(url: str) -> AsyncEngine:
    # Pgbouncer in transaction mode can't share asyncpg's prepared statements
    connect_args = {"statement_cache_size": 0} if url.startswith("postgresql+asyncpg://") else {}
    new_engine = create_async_engine(
        url,
        echo=settings.APP_DEBUG,
        pool_pre_ping=True,
        pool_recycle=300,
        connect_args=connect_args,
    )
    install_query_timing(new_engine, settings.SLOW_QUERY_THRESHOLD)
    return new_engine


engine = build_engine(settings.DATABASE_URL)

async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)
