import tempfile
from pathlib import Path
from typing import Dict, List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import NullPool

from episode_parts.database import build_engine, init_db
from episode_parts.models import Episode, Part


class TemporaryDatabase:
    """A throwaway SQLite file with the application schema"""

    def __init__(self):
        self._dir = tempfile.TemporaryDirectory()
        url = f"sqlite+aiosqlite:///{Path(self._dir.name) / 'test.db'}"
        # NullPool: every session opens its own connection on the running loop
        self.engine: AsyncEngine = build_engine(url, poolclass=NullPool)
        self.sessionmaker = async_sessionmaker(self.engine, class_=AsyncSession, expire_on_commit=False)

    async def create(self):
        await init_db(self.engine)

    async def dispose(self):
        await self.engine.dispose()
        self._dir.cleanup()


async def make_episode(session: AsyncSession, title: str, part_count: int = 0) -> Episode:
    """Episode with parts titled '<title> P<i>' at positions 0..part_count-1"""
    episode = Episode(
        title=title,
        description=f"{title} description",
        parts=[
            Part(title=f"{title} P{index}", description=f"part {index}", position=index)
            for index in range(part_count)
        ],
    )
    session.add(episode)
    await session.commit()
    return episode


async def positions_by_title(db: TemporaryDatabase, episode_id: int) -> Dict[str, int]:
    """Read positions through a fresh session so nothing comes from an identity map"""
    async with db.sessionmaker() as session:
        result = await session.execute(
            select(Part.title, Part.position).where(Part.episode_id == episode_id)
        )
        return {title: position for title, position in result.all()}


async def ordered_titles(db: TemporaryDatabase, episode_id: int) -> List[str]:
    async with db.sessionmaker() as session:
        result = await session.execute(
            select(Part.title).where(Part.episode_id == episode_id).order_by(Part.position, Part.id)
        )
        return list(result.scalars().all())
