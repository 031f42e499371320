"""
Episode Model
An episode owns an ordered sequence of parts
"""
from datetime import datetime
from typing import Optional, List
from sqlalchemy import String, Integer, DateTime, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from episode_parts.database import Base


class Episode(Base):
    """
    Top-level container for parts.
    Deleting an episode deletes its parts.
    """
    __tablename__ = "episodes"
    
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    
    title: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    
    # Timestamps
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    
    # Relationships (eager, so nested parts are safe to read outside the session's greenlet)
    parts: Mapped[List["Part"]] = relationship(
        "Part",
        back_populates="episode",
        cascade="all, delete-orphan",
        order_by="Part.position",
        lazy="selectin",
    )
    
    def __repr__(self):
        return f"<Episode(id={self.id}, title='{self.title}')>"


# Import Part so the relationship target is registered
from episode_parts.models.part import Part  # noqa: E402, F401
