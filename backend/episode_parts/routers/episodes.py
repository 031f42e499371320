"""
Episodes Router
CRUD operations for episodes
"""
from typing import Optional, List
from fastapi import APIRouter, Depends, Response
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession
from datetime import datetime

from episode_parts.database import get_db
from episode_parts.models import Episode
from episode_parts.routers.parts import PartResponse, RowId, serialize_part
from episode_parts.services import episode_service

router = APIRouter()


# Pydantic schemas
class EpisodeResponse(BaseModel):
    id: int
    title: str
    description: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    parts: List[PartResponse] = []
    
    class Config:
        from_attributes = True


class EpisodeIn(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None


def serialize_episode(episode: Episode) -> dict:
    """Convert Episode to response dict with its ordered parts"""
    return {
        "id": episode.id,
        "title": episode.title,
        "description": episode.description,
        "created_at": episode.created_at,
        "updated_at": episode.updated_at,
        "parts": [serialize_part(part) for part in episode.parts],
    }


@router.get("/episodes", response_model=List[EpisodeResponse])
async def list_episodes(db: AsyncSession = Depends(get_db)):
    """List all episodes with their parts"""
    episodes = await episode_service.list_episodes(db)
    return [serialize_episode(episode) for episode in episodes]


@router.post("/episodes", response_model=EpisodeResponse, status_code=201)
async def create_episode(data: EpisodeIn, db: AsyncSession = Depends(get_db)):
    """Create a new episode"""
    episode = await episode_service.create_episode(db, data.title, data.description)
    return serialize_episode(episode)


@router.get("/episodes/{episode_id}", response_model=EpisodeResponse)
async def get_episode(episode_id: RowId, db: AsyncSession = Depends(get_db)):
    """Get a single episode by ID"""
    episode = await episode_service.get_episode(db, episode_id)
    return serialize_episode(episode)


@router.put("/episodes/{episode_id}", response_model=EpisodeResponse)
async def update_episode(episode_id: RowId, data: EpisodeIn, db: AsyncSession = Depends(get_db)):
    """Update an episode's title and description"""
    episode = await episode_service.update_episode(db, episode_id, data.title, data.description)
    return serialize_episode(episode)


@router.delete("/episodes/{episode_id}", status_code=204)
async def delete_episode(episode_id: RowId, db: AsyncSession = Depends(get_db)):
    """Delete an episode and all of its parts"""
    await episode_service.delete_episode(db, episode_id)
    return Response(status_code=204)
