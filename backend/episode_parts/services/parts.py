"""
Part Service
Applies reconciler plans to the parts table inside one transaction per request
"""
from typing import List, Optional, Tuple
from loguru import logger
from sqlalchemy import select, update, func
from sqlalchemy.ext.asyncio import AsyncSession

from episode_parts.core.positions import position_reconciler, Shift, MovePlan, is_contiguous
from episode_parts.models import Episode, Part
from episode_parts.services.errors import NotFound, ValidationError
from episode_parts.services.transaction import atomic, reading


TITLE_TAKEN = "The title has already been taken."


class PartService:
    """
    Orchestrates position changes for the parts of an episode.

    Every mutation follows the same sequence inside `atomic`:
    lock the episode row, load the full sibling set, ask the reconciler
    for a plan, then apply shifts and the primary write together.
    """

    async def list_parts(
        self,
        session: AsyncSession,
        episode_id: int,
        page: int = 1,
        page_size: int = 10,
    ) -> Tuple[List[Part], int]:
        """Get one page of an episode's parts ordered by position, plus the total count"""
        async with reading(f"Listing parts of episode {episode_id}"):
            exists = await session.scalar(select(Episode.id).where(Episode.id == episode_id))
            if exists is None:
                raise NotFound("Episode not found.")

            total = await session.scalar(
                select(func.count(Part.id)).where(Part.episode_id == episode_id)
            ) or 0

            result = await session.execute(
                select(Part)
                .where(Part.episode_id == episode_id)
                .order_by(Part.position, Part.id)
                .offset((page - 1) * page_size)
                .limit(page_size)
            )
            return list(result.scalars().all()), total

    async def add_part(
        self,
        session: AsyncSession,
        episode_id: int,
        position: int,
        title: str,
        description: Optional[str],
    ) -> Part:
        """
        Insert a part at `position`, or at the end when position >= count.
        Siblings at or after the assigned slot move up by one.
        """
        self._check_position(position)

        async with atomic(session, f"Adding part to episode {episode_id}"):
            await self._lock_episode(session, episode_id)

            taken = await session.scalar(select(Part.id).where(Part.title == title))
            if taken is not None:
                raise ValidationError.field("title", TITLE_TAKEN)

            siblings = await self._load_siblings(session, episode_id)
            plan = position_reconciler.insert(siblings, position)

            await self._apply_shift(session, episode_id, plan.shift)

            part = Part(
                episode_id=episode_id,
                position=plan.position,
                title=title,
                description=description,
            )
            session.add(part)

        await session.refresh(part)
        logger.info(f"Added part {part.id} to episode {episode_id} at position {part.position}")
        return part

    async def delete_part(self, session: AsyncSession, episode_id: int, part_id: int) -> None:
        """Delete a part and close the gap behind it"""
        async with atomic(session, f"Deleting part {part_id} from episode {episode_id}"):
            await self._lock_episode(session, episode_id)
            part = await self._get_part(session, part_id)

            if part is None:
                raise NotFound("Part not found.")
            if part.episode_id != episode_id:
                raise NotFound("Part does not belong to the episode.")

            siblings = await self._load_siblings(session, episode_id)
            shift = position_reconciler.remove(siblings, part.id)

            await session.delete(part)
            await session.flush()
            await self._apply_shift(session, episode_id, shift)

        logger.info(f"Deleted part {part_id} from episode {episode_id}")

    async def set_part_position(
        self,
        session: AsyncSession,
        episode_id: int,
        part_id: int,
        position: int,
    ) -> MovePlan:
        """
        Move a part to `position` (clamped to the last slot).
        Returns the plan; `plan.unchanged` means nothing was written.
        """
        self._check_position(position)

        async with atomic(session, f"Moving part {part_id} in episode {episode_id}"):
            await self._lock_episode(session, episode_id)
            part = await self._get_part(session, part_id)

            if part is None:
                raise ValidationError.field("id", "The selected id is invalid.")
            if part.episode_id != episode_id:
                raise NotFound("Part not found")

            siblings = await self._load_siblings(session, episode_id)
            plan = position_reconciler.move(siblings, part.id, position)

            if plan.unchanged:
                return plan

            await self._apply_shift(session, episode_id, plan.shift)
            part.position = plan.new_position

        logger.info(
            f"Moved part {part_id} in episode {episode_id}: "
            f"{plan.old_position} -> {plan.new_position}"
        )
        return plan

    async def reorder_parts(self, session: AsyncSession, episode_id: int) -> int:
        """
        Renumber all parts to 0..N-1 keeping their relative order.
        Returns how many parts changed position.
        """
        async with atomic(session, f"Reordering parts of episode {episode_id}"):
            await self._lock_episode(session, episode_id)

            siblings = await self._load_siblings(session, episode_id)
            by_id = {part.id: part for part in siblings}

            changed = 0
            for assignment in position_reconciler.renumber(siblings):
                if assignment.changed:
                    by_id[assignment.part_id].position = assignment.new_position
                    changed += 1

        logger.info(f"Reordered episode {episode_id}: {changed} of {len(siblings)} parts renumbered")
        return changed

    def _check_position(self, position: int):
        if position < 0:
            raise ValidationError.field("position", "The position field must be at least 0.")

    async def _lock_episode(self, session: AsyncSession, episode_id: int):
        """Lock the episode row so concurrent writers on its parts serialize"""
        locked = await session.scalar(
            select(Episode.id).where(Episode.id == episode_id).with_for_update()
        )
        if locked is None:
            raise NotFound("Episode not found.")

    async def _get_part(self, session: AsyncSession, part_id: int) -> Optional[Part]:
        result = await session.execute(
            select(Part)
            .where(Part.id == part_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def _load_siblings(self, session: AsyncSession, episode_id: int) -> List[Part]:
        result = await session.execute(
            select(Part)
            .where(Part.episode_id == episode_id)
            .order_by(Part.position, Part.id)
            .execution_options(populate_existing=True)
        )
        siblings = list(result.scalars().all())

        if not is_contiguous(part.position for part in siblings):
            logger.warning(
                f"Episode {episode_id} positions are not contiguous: "
                f"{[part.position for part in siblings]}"
            )
        return siblings

    async def _apply_shift(self, session: AsyncSession, episode_id: int, shift: Shift):
        stmt = update(Part).where(
            Part.episode_id == episode_id,
            Part.position >= shift.start,
        )
        if shift.stop is not None:
            stmt = stmt.where(Part.position < shift.stop)

        await session.execute(stmt.values(position=Part.position + shift.delta))


# Singleton instance
part_service = PartService()
