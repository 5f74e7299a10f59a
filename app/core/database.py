from sqlmodel import SQLModel
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine, AsyncSession
from sqlalchemy.orm import sessionmaker
from app.core.config import settings
import logging
from sqlalchemy import event

logger = logging.getLogger(__name__)


def _engine_options() -> dict:
    options = {
        "echo": settings.db_echo or settings.log_level == "DEBUG",
        "future": True,
    }
    # SQLite uses a single-connection pool that rejects sizing arguments
    if not settings.is_sqlite:
        options["pool_size"] = settings.db_pool_size
        options["max_overflow"] = settings.db_max_overflow
    return options


engine: AsyncEngine = create_async_engine(settings.database_url, **_engine_options())


@event.listens_for(engine.sync_engine, "connect")
def set_search_path(dbapi_connection, connection_record):
    if engine.dialect.name != "postgresql":
        return
    logger.info("Setting search path to %s", settings.db_schema)
    cursor = dbapi_connection.cursor()
    cursor.execute(f"SET search_path TO {settings.db_schema}")
    cursor.close()


async_session_maker = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False
)


async def get_async_session() -> AsyncSession:
    """FastAPI dependency for getting database session"""
    async with async_session_maker() as session:
        try:
            yield session
        except Exception as e:
            await session.rollback()
            logger.error(f"Database session error: {type(e).__name__}: {e}")
            raise
        finally:
            await session.close()


async def create_db_and_tables():
    # Import models so their tables are registered on the metadata
    import app.models  # noqa: F401

    logger.info("Creating database tables")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)


async def close_db():
    await engine.dispose()
