"""
Transaction helpers
"""
import contextlib
from typing import AsyncIterator

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from episode_parts.services.errors import ServiceError, TransactionFailure, InternalError


@contextlib.asynccontextmanager
async def atomic(session: AsyncSession, action: str) -> AsyncIterator[AsyncSession]:
    """
    Run a block as one transaction.
    Commits on success. Any failure rolls back; unknown failures surface as TransactionFailure.
    """
    try:
        yield session
        await session.commit()
    except ServiceError:
        await session.rollback()
        raise
    except Exception as e:
        await session.rollback()
        logger.error(f"{action} failed, transaction rolled back: {e}")
        raise TransactionFailure() from e


@contextlib.asynccontextmanager
async def reading(action: str) -> AsyncIterator[None]:
    """Translate failures on read paths into InternalError"""
    try:
        yield
    except ServiceError:
        raise
    except Exception as e:
        logger.error(f"{action} failed: {e}")
        raise InternalError() from e
