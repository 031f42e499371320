"""
Part Model
Ordered sub-entity of an episode
"""
from datetime import datetime
from typing import Optional, TYPE_CHECKING
from sqlalchemy import String, Integer, DateTime, Text, ForeignKey, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship

from episode_parts.database import Base

if TYPE_CHECKING:
    from episode_parts.models.episode import Episode


class Part(Base):
    """
    A part of an episode.
    Positions within one episode are always 0..N-1 once a write commits.
    """
    __tablename__ = "parts"
    __table_args__ = (
        Index("ix_parts_episode_id_position", "episode_id", "position"),
    )
    
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    
    # Owning episode (never reassigned)
    episode_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("episodes.id", ondelete="CASCADE"), nullable=False, index=True
    )
    episode: Mapped["Episode"] = relationship("Episode", back_populates="parts")
    
    # Titles are unique across all parts, not per episode
    title: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")
    
    # Timestamps
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    
    def __repr__(self):
        return f"<Part(id={self.id}, episode_id={self.episode_id}, position={self.position})>"
