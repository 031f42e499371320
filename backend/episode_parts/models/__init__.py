"""
Episode Parts Models Package
"""
from episode_parts.models.episode import Episode
from episode_parts.models.part import Part

__all__ = [
    "Episode",
    "Part",
]
