"""
Episode Parts Database Configuration
"""
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.orm import DeclarativeBase
from loguru import logger
from tenacity import retry, stop_after_attempt, wait_exponential

from episode_parts.config import settings


def build_engine(database_url: str, **kwargs) -> AsyncEngine:
    """Create an async engine, applying pool sizing only where the driver supports it"""
    options = {"echo": settings.sql_echo, "pool_pre_ping": True}
    if not database_url.startswith("sqlite"):
        options.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
        )
    options.update(kwargs)
    return create_async_engine(database_url, **options)


# Create async engine
engine = build_engine(settings.database_url)

# Session factory
async_session = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    """Base class for all database models"""
    pass


def _log_connect_retry(retry_state):
    logger.warning(
        f"Database not reachable (attempt {retry_state.attempt_number}): "
        f"{retry_state.outcome.exception()}"
    )


@retry(
    stop=stop_after_attempt(settings.db_connect_attempts),
    wait=wait_exponential(multiplier=1, min=1, max=10),
    before_sleep=_log_connect_retry,
    reraise=True,
)
async def init_db(bind: AsyncEngine = engine):
    """Initialize database tables"""
    async with bind.begin() as conn:
        # Import models to register them
        from episode_parts.models import episode, part  # noqa: F401
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables created")


async def get_db() -> AsyncSession:
    """Dependency for getting database session"""
    async with async_session() as session:
        try:
            yield session
        finally:
            await session.close()
