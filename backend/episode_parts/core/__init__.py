"""
Core Package
"""
from episode_parts.core.positions import (
    position_reconciler,
    PositionReconciler,
    PositionError,
    Shift,
    InsertPlan,
    MovePlan,
    Assignment,
    is_contiguous,
)

__all__ = [
    "position_reconciler",
    "PositionReconciler",
    "PositionError",
    "Shift",
    "InsertPlan",
    "MovePlan",
    "Assignment",
    "is_contiguous",
]
