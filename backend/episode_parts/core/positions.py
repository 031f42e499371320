"""
Position Reconciler
Computes how sibling positions shift when parts are inserted, removed or moved
"""
from dataclasses import dataclass
from typing import Iterable, List, Optional, Protocol, Sequence


class Positioned(Protocol):
    """Anything with an id and a position (ORM parts, test doubles)"""
    id: int
    position: int


class PositionError(ValueError):
    """A reconciler precondition does not hold for the given sibling set"""
    pass


@dataclass(frozen=True)
class Shift:
    """
    Bulk position change for a range of siblings.
    Applies to positions in [start, stop); stop=None means unbounded.
    """
    start: int
    stop: Optional[int]
    delta: int

    def applies_to(self, position: int) -> bool:
        if position < self.start:
            return False
        return self.stop is None or position < self.stop

    def apply(self, position: int) -> int:
        return position + self.delta if self.applies_to(position) else position


@dataclass(frozen=True)
class InsertPlan:
    position: int
    shift: Shift


@dataclass(frozen=True)
class MovePlan:
    part_id: int
    old_position: int
    new_position: int
    shift: Optional[Shift] = None

    @property
    def unchanged(self) -> bool:
        return self.old_position == self.new_position


@dataclass(frozen=True)
class Assignment:
    part_id: int
    old_position: int
    new_position: int

    @property
    def changed(self) -> bool:
        return self.old_position != self.new_position


def is_contiguous(positions: Iterable[int]) -> bool:
    """True when positions are exactly 0..N-1 with no gaps or duplicates"""
    ordered = sorted(positions)
    return ordered == list(range(len(ordered)))


class PositionReconciler:
    """
    Pure position arithmetic for the parts of one episode.

    Every method takes the full sibling set so the contiguity of
    0..N-1 is decided over the whole episode, never from a single part.
    Nothing here touches storage; callers apply the returned plans.
    """

    def clamp(self, requested: int, upper: int) -> int:
        if requested < 0:
            raise PositionError(f"Position must be non-negative, got {requested}")
        return min(requested, upper)

    def insert(self, parts: Sequence[Positioned], requested_position: int) -> InsertPlan:
        """
        Make room for a new part.
        Positions past the end append at N; existing parts at or after the
        assigned slot move up by one.
        """
        position = self.clamp(requested_position, len(parts))
        return InsertPlan(position=position, shift=Shift(start=position, stop=None, delta=1))

    def remove(self, parts: Sequence[Positioned], part_id: int) -> Shift:
        """Close the gap left by a removed part"""
        removed = self._find(parts, part_id)
        return Shift(start=removed.position + 1, stop=None, delta=-1)

    def move(self, parts: Sequence[Positioned], part_id: int, requested_position: int) -> MovePlan:
        """
        Move one part to a new slot among its siblings.

        Moving earlier shifts [new, old) up by one.
        Moving later shifts (old, new] down by one.
        The moved part itself is never inside the shifted range.
        """
        moving = self._find(parts, part_id)
        old = moving.position
        new = self.clamp(requested_position, len(parts) - 1)

        if new == old:
            return MovePlan(part_id=part_id, old_position=old, new_position=new)

        if new < old:
            shift = Shift(start=new, stop=old, delta=1)
        else:
            shift = Shift(start=old + 1, stop=new + 1, delta=-1)

        return MovePlan(part_id=part_id, old_position=old, new_position=new, shift=shift)

    def renumber(self, parts: Sequence[Positioned]) -> List[Assignment]:
        """Assign 0..N-1 following the current relative order (ties broken by id)"""
        ordered = sorted(parts, key=lambda p: (p.position, p.id))
        return [
            Assignment(part_id=part.id, old_position=part.position, new_position=index)
            for index, part in enumerate(ordered)
        ]

    def _find(self, parts: Sequence[Positioned], part_id: int) -> Positioned:
        for part in parts:
            if part.id == part_id:
                return part
        raise PositionError(f"Part {part_id} is not among the episode's parts")


# Singleton instance
position_reconciler = PositionReconciler()
