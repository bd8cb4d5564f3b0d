import logging
from collections.abc import AsyncGenerator

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from practice_tracker.config import settings
from practice_tracker.db.base import Base

logger = logging.getLogger(__name__)

engine_args = {}
if settings.async_database_url.startswith("sqlite"):
    # Local runs and tests: one file, no connections shared between event loops
    engine_args["poolclass"] = NullPool
else:
    engine_args.update({
        "pool_size": 5,
        "max_overflow": 10,
        "pool_pre_ping": True,
    })

engine = create_async_engine(
    settings.async_database_url,
    echo=settings.debug,
    **engine_args,
)
async_session_maker = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

if engine.dialect.name == "sqlite":
    # pysqlite defers BEGIN until the first write, so SELECT ... FOR UPDATE locks nothing.
    # Take the database write lock when the transaction starts instead.

    @event.listens_for(engine.sync_engine, "connect")
    def _disable_pysqlite_begin(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine.sync_engine, "begin")
    def _begin_immediate(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")


async def init_db() -> None:
    """Create missing tables. Alembic owns schema changes after the first deploy."""
    import practice_tracker.models  # noqa: F401 - register models on Base.metadata

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database schema ready (%s)", engine.url.render_as_string(hide_password=True))


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """One session (and one transaction) per request: commit on success, roll back on error."""
    async with async_session_maker() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()
