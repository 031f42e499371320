"""
Routers Package
"""
from episode_parts.routers import health, episodes, parts

__all__ = ["health", "episodes", "parts"]
