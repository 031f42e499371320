"""
Episode Service
CRUD for episodes; parts are loaded with their episode and deleted with it
"""
from typing import List, Optional
from loguru import logger
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from episode_parts.models import Episode
from episode_parts.services.errors import NotFound, ValidationError
from episode_parts.services.transaction import atomic, reading


TITLE_TAKEN = "The title has already been taken."


class EpisodeService:
    """Service for episode records"""

    async def list_episodes(self, session: AsyncSession) -> List[Episode]:
        async with reading("Listing episodes"):
            result = await session.execute(select(Episode).order_by(Episode.id))
            return list(result.scalars().all())

    async def get_episode(self, session: AsyncSession, episode_id: int) -> Episode:
        async with reading(f"Fetching episode {episode_id}"):
            episode = await self._find(session, episode_id)
        if episode is None:
            raise NotFound("Episode not found.")
        return episode

    async def create_episode(
        self,
        session: AsyncSession,
        title: str,
        description: Optional[str] = None,
    ) -> Episode:
        async with atomic(session, "Creating episode"):
            await self._ensure_title_free(session, title)
            episode = Episode(title=title, description=description, parts=[])
            session.add(episode)

        logger.info(f"Created episode {episode.id}: {episode.title}")
        return episode

    async def update_episode(
        self,
        session: AsyncSession,
        episode_id: int,
        title: str,
        description: Optional[str] = None,
    ) -> Episode:
        async with atomic(session, f"Updating episode {episode_id}"):
            episode = await self._find(session, episode_id)
            if episode is None:
                raise NotFound("Episode not found.")

            await self._ensure_title_free(session, title, exclude_id=episode_id)
            episode.title = title
            episode.description = description

        logger.info(f"Updated episode {episode_id}")
        return episode

    async def delete_episode(self, session: AsyncSession, episode_id: int) -> None:
        """Delete an episode together with all of its parts"""
        async with atomic(session, f"Deleting episode {episode_id}"):
            episode = await self._find(session, episode_id)
            if episode is None:
                raise NotFound("Episode not found.")

            part_count = len(episode.parts)
            await session.delete(episode)

        logger.info(f"Deleted episode {episode_id} and {part_count} parts")

    async def _find(self, session: AsyncSession, episode_id: int) -> Optional[Episode]:
        result = await session.execute(select(Episode).where(Episode.id == episode_id))
        return result.scalar_one_or_none()

    async def _ensure_title_free(
        self,
        session: AsyncSession,
        title: str,
        exclude_id: Optional[int] = None,
    ):
        query = select(Episode.id).where(Episode.title == title)
        if exclude_id is not None:
            query = query.where(Episode.id != exclude_id)

        if await session.scalar(query) is not None:
            raise ValidationError.field("title", TITLE_TAKEN)


# Singleton instance
episode_service = EpisodeService()
