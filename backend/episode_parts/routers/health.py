"""
Health Check Router
"""
from fastapi import APIRouter, Depends
from datetime import datetime
from sqlalchemy import select, func, distinct
from sqlalchemy.ext.asyncio import AsyncSession

from episode_parts import __version__
from episode_parts.database import get_db
from episode_parts.models import Episode, Part

router = APIRouter()


@router.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "timestamp": datetime.utcnow().isoformat(),
        "version": __version__,
    }


@router.get("/stats")
async def get_stats(db: AsyncSession = Depends(get_db)):
    """Get record counts and how many episodes need a reorder"""
    episodes = await db.scalar(select(func.count(Episode.id))) or 0
    
    result = await db.execute(
        select(
            Part.episode_id,
            func.count(Part.id),
            func.count(distinct(Part.position)),
            func.min(Part.position),
            func.max(Part.position),
        ).group_by(Part.episode_id)
    )
    
    parts = 0
    needs_reorder = 0
    for _, count, distinct_positions, lowest, highest in result.all():
        parts += count
        # Contiguous means exactly 0..count-1
        if distinct_positions != count or lowest != 0 or highest != count - 1:
            needs_reorder += 1
    
    return {
        "counts": {
            "episodes": episodes,
            "parts": parts,
        },
        "episodes_needing_reorder": needs_reorder,
    }
