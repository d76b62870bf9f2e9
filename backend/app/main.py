import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from app.config import settings
from app.core.middleware import setup_middleware

logger = logging.getLogger(__name__)


async def ensure_tables():
    """Create DB tables that don't exist yet. Alembic owns schema changes after that."""
    from app.db.engine import engine
    from app.db.base import Base
    import app.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables ensured")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    try:
        await ensure_tables()
    except (SQLAlchemyError, OSError) as e:
        logger.warning("Table creation skipped: %s", e)

    yield

    from app.db.engine import engine
    await engine.dispose()


async def _database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    request_id = getattr(request.state, "request_id", "-")
    logger.error("[%s] Unhandled database error: %s", request_id, exc, exc_info=True)
    return JSONResponse(status_code=500, content={"detail": "Database error"})


def create_app() -> FastAPI:
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(
        title="Asset Inventory API",
        version="0.1.0",
        description="Asset inventory: lookups, saved filters, bulk updates and labels",
        debug=settings.APP_DEBUG,
        lifespan=lifespan,
    )

    setup_middleware(app)
    app.add_exception_handler(SQLAlchemyError, _database_error_handler)

    @app.get("/health")
    async def health_check():
        return {"status": "ok"}

    # Register API routers
    from app.api.v1 import router as api_v1_router
    app.include_router(api_v1_router, prefix="/api/v1")

    return app


app = create_app()
