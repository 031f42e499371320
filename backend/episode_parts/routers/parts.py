"""
Parts Router
Ordered parts within an episode
"""
from typing import Optional, List, Annotated
from fastapi import APIRouter, Depends, Path, Query
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession
from datetime import datetime

from episode_parts.config import settings
from episode_parts.database import get_db
from episode_parts.models import Part
from episode_parts.services import part_service

router = APIRouter()

# Largest value an INTEGER key column holds
MAX_ID = 2**31 - 1

RowId = Annotated[int, Path(le=MAX_ID)]


# Pydantic schemas
class PartResponse(BaseModel):
    id: int
    episode_id: int
    title: str
    description: Optional[str] = None
    position: int
    created_at: datetime
    updated_at: datetime
    
    class Config:
        from_attributes = True


class PartCreate(BaseModel):
    position: int = Field(..., ge=0)
    title: str = Field(..., min_length=1, max_length=255)
    description: str


class PositionUpdate(BaseModel):
    id: int = Field(..., le=MAX_ID)
    position: int = Field(..., ge=0)


class PaginatedPartsResponse(BaseModel):
    items: List[PartResponse]
    total: int
    page: int
    page_size: int
    total_pages: int


class MessageResponse(BaseModel):
    message: str


class PositionResponse(MessageResponse):
    id: int
    position: int


class ReorderResponse(MessageResponse):
    changed: int


def serialize_part(part: Part) -> dict:
    """Convert Part to response dict"""
    return {
        "id": part.id,
        "episode_id": part.episode_id,
        "title": part.title,
        "description": part.description,
        "position": part.position,
        "created_at": part.created_at,
        "updated_at": part.updated_at,
    }


@router.get("/episode/{episode_id}/parts", response_model=PaginatedPartsResponse)
async def list_parts(
    episode_id: RowId,
    page: int = Query(1, ge=1, le=MAX_ID),
    db: AsyncSession = Depends(get_db)
):
    """Get an episode's parts ordered by position, one page at a time"""
    page_size = settings.parts_page_size
    parts, total = await part_service.list_parts(db, episode_id, page=page, page_size=page_size)
    
    return {
        "items": [serialize_part(part) for part in parts],
        "total": total,
        "page": page,
        "page_size": page_size,
        "total_pages": (total + page_size - 1) // page_size,
    }


@router.post("/episode/{episode_id}/part", response_model=PartResponse, status_code=201)
async def add_part(episode_id: RowId, data: PartCreate, db: AsyncSession = Depends(get_db)):
    """
    Add a part at the requested position.
    Positions beyond the current count append at the end.
    """
    part = await part_service.add_part(
        db,
        episode_id,
        position=data.position,
        title=data.title,
        description=data.description,
    )
    return serialize_part(part)


@router.delete("/episode/{episode_id}/parts/{part_id}", response_model=MessageResponse)
async def delete_part(episode_id: RowId, part_id: RowId, db: AsyncSession = Depends(get_db)):
    """Delete a part; later parts move up to close the gap"""
    await part_service.delete_part(db, episode_id, part_id)
    return {"message": "Part deleted successfully"}


@router.post("/episode/{episode_id}/parts/update/positions", response_model=PositionResponse)
async def update_part_position(
    episode_id: RowId,
    data: PositionUpdate,
    db: AsyncSession = Depends(get_db)
):
    """Move one part to a new position, shifting the parts in between"""
    plan = await part_service.set_part_position(db, episode_id, data.id, data.position)
    
    if plan.unchanged:
        message = "Position is already set to the requested value"
    else:
        message = "Position updated successfully"
    
    return {"message": message, "id": plan.part_id, "position": plan.new_position}


@router.post("/episode/{episode_id}/parts/reorder", response_model=ReorderResponse)
async def reorder_parts(episode_id: RowId, db: AsyncSession = Depends(get_db)):
    """Renumber all parts to 0..N-1 in their current order"""
    changed = await part_service.reorder_parts(db, episode_id)
    return {"message": "Parts reordered successfully", "changed": changed}
