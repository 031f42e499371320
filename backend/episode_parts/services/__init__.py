"""
Services Package
"""
from episode_parts.services.episodes import episode_service, EpisodeService
from episode_parts.services.parts import part_service, PartService
from episode_parts.services.errors import (
    ServiceError,
    ValidationError,
    NotFound,
    TransactionFailure,
    InternalError,
)

__all__ = [
    # Orchestration
    "episode_service",
    "EpisodeService",
    "part_service",
    "PartService",
    # Errors
    "ServiceError",
    "ValidationError",
    "NotFound",
    "TransactionFailure",
    "InternalError",
]
