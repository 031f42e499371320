"""
Sample data
Run with: python -m episode_parts.seed
"""
import asyncio
from loguru import logger
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from episode_parts.database import async_session, init_db
from episode_parts.models import Episode, Part

PARTS_PER_EPISODE = 5


async def seed_episodes(session: AsyncSession, count: int = 2) -> int:
    """Create sample episodes with parts at positions 0..4; existing titles are skipped"""
    created = 0
    for number in range(1, count + 1):
        title = f"Episode {number}"
        existing = await session.scalar(select(Episode.id).where(Episode.title == title))
        if existing is not None:
            logger.info(f"Skipping {title}, already present")
            continue

        episode = Episode(
            title=title,
            description=f"This is the content for Episode {number}.",
            parts=[
                Part(
                    title=f"Episode {number} Part {index} Title",
                    description=f"Episode {number} Part {index} description.",
                    position=index,
                )
                for index in range(PARTS_PER_EPISODE)
            ],
        )
        session.add(episode)
        created += 1

    await session.commit()
    return created


async def main():
    await init_db()
    async with async_session() as session:
        created = await seed_episodes(session)
    logger.info(f"Seeded {created} episodes")


if __name__ == "__main__":
    asyncio.run(main())
