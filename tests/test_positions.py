import unittest
from dataclasses import dataclass

from episode_parts.core.positions import (
    PositionReconciler,
    PositionError,
    Shift,
    is_contiguous,
)


@dataclass
class FakePart:
    id: int
    position: int


def make_parts(count):
    # ids start at 100 so they never collide with positions
    return [FakePart(id=100 + index, position=index) for index in range(count)]


def apply_move(parts, plan):
    for part in parts:
        if part.id == plan.part_id:
            continue
        if plan.shift is not None:
            part.position = plan.shift.apply(part.position)
    for part in parts:
        if part.id == plan.part_id:
            part.position = plan.new_position


def order(parts):
    return [part.id for part in sorted(parts, key=lambda p: p.position)]


class TestShift(unittest.TestCase):
    def test_bounded_range_is_half_open(self):
        shift = Shift(start=1, stop=3, delta=1)
        self.assertEqual([shift.apply(p) for p in range(5)], [0, 2, 3, 3, 4])

    def test_unbounded_range(self):
        shift = Shift(start=2, stop=None, delta=-1)
        self.assertFalse(shift.applies_to(1))
        self.assertTrue(shift.applies_to(2))
        self.assertTrue(shift.applies_to(1000))


class TestInsert(unittest.TestCase):
    def setUp(self):
        self.reconciler = PositionReconciler()

    def test_insert_in_middle_shifts_tail(self):
        parts = make_parts(3)
        plan = self.reconciler.insert(parts, 1)

        self.assertEqual(plan.position, 1)
        shifted = [plan.shift.apply(p.position) for p in parts]
        self.assertEqual(shifted, [0, 2, 3])
        self.assertTrue(is_contiguous(shifted + [plan.position]))

    def test_insert_past_end_appends_at_count(self):
        parts = make_parts(3)
        plan = self.reconciler.insert(parts, 50)

        self.assertEqual(plan.position, 3)
        self.assertEqual([plan.shift.apply(p.position) for p in parts], [0, 1, 2])

    def test_insert_at_count_appends(self):
        self.assertEqual(self.reconciler.insert(make_parts(2), 2).position, 2)

    def test_insert_into_empty_episode(self):
        plan = self.reconciler.insert([], 7)
        self.assertEqual(plan.position, 0)

    def test_negative_position_rejected(self):
        with self.assertRaises(PositionError):
            self.reconciler.insert(make_parts(2), -1)


class TestRemove(unittest.TestCase):
    def setUp(self):
        self.reconciler = PositionReconciler()

    def test_remove_middle_of_three(self):
        parts = make_parts(3)
        removed = parts[1]
        shift = self.reconciler.remove(parts, removed.id)

        remaining = [p for p in parts if p.id != removed.id]
        self.assertEqual([shift.apply(p.position) for p in remaining], [0, 1])

    def test_remove_last_touches_nothing(self):
        parts = make_parts(3)
        shift = self.reconciler.remove(parts, parts[2].id)
        self.assertEqual([shift.apply(p.position) for p in parts[:2]], [0, 1])

    def test_remove_unknown_part_is_integrity_error(self):
        with self.assertRaises(PositionError):
            self.reconciler.remove(make_parts(3), 999)

    def test_insert_then_remove_restores_positions(self):
        parts = make_parts(4)
        before = {p.id: p.position for p in parts}

        plan = self.reconciler.insert(parts, 2)
        for part in parts:
            part.position = plan.shift.apply(part.position)
        new_part = FakePart(id=1, position=plan.position)
        parts.append(new_part)

        shift = self.reconciler.remove(parts, new_part.id)
        parts.remove(new_part)
        for part in parts:
            part.position = shift.apply(part.position)

        self.assertEqual({p.id: p.position for p in parts}, before)


class TestMove(unittest.TestCase):
    def setUp(self):
        self.reconciler = PositionReconciler()

    def test_move_second_of_two_to_front(self):
        a, b = make_parts(2)
        plan = self.reconciler.move([a, b], b.id, 0)
        apply_move([a, b], plan)

        self.assertEqual((a.position, b.position), (1, 0))

    def test_move_earlier_shifts_range_up(self):
        parts = make_parts(5)
        plan = self.reconciler.move(parts, parts[3].id, 1)

        self.assertEqual(plan.shift, Shift(start=1, stop=3, delta=1))
        apply_move(parts, plan)
        self.assertEqual(order(parts), [100, 103, 101, 102, 104])

    def test_move_later_shifts_range_down(self):
        parts = make_parts(5)
        plan = self.reconciler.move(parts, parts[1].id, 3)

        self.assertEqual(plan.shift, Shift(start=2, stop=4, delta=-1))
        apply_move(parts, plan)
        self.assertEqual(order(parts), [100, 102, 103, 101, 104])

    def test_move_past_end_clamps_to_last_slot(self):
        parts = make_parts(3)
        plan = self.reconciler.move(parts, parts[0].id, 10)

        self.assertEqual(plan.new_position, 2)
        apply_move(parts, plan)
        self.assertEqual(order(parts), [101, 102, 100])

    def test_move_to_current_position_is_unchanged(self):
        parts = make_parts(3)
        plan = self.reconciler.move(parts, parts[1].id, 1)

        self.assertTrue(plan.unchanged)
        self.assertIsNone(plan.shift)

    def test_clamped_move_of_last_part_is_unchanged(self):
        parts = make_parts(3)
        self.assertTrue(self.reconciler.move(parts, parts[2].id, 9).unchanged)

    def test_every_move_keeps_positions_contiguous(self):
        for count in range(1, 6):
            for source in range(count):
                for target in range(count + 2):
                    parts = make_parts(count)
                    moving = parts[source]
                    others = [p.id for p in parts if p.id != moving.id]

                    apply_move(parts, self.reconciler.move(parts, moving.id, target))

                    self.assertTrue(is_contiguous(p.position for p in parts))
                    self.assertEqual([pid for pid in order(parts) if pid != moving.id], others)
                    self.assertEqual(moving.position, min(target, count - 1))

    def test_move_unknown_part(self):
        with self.assertRaises(PositionError):
            self.reconciler.move(make_parts(2), 999, 0)


class TestRenumber(unittest.TestCase):
    def setUp(self):
        self.reconciler = PositionReconciler()

    def test_closes_gaps_in_relative_order(self):
        parts = [FakePart(id=1, position=7), FakePart(id=2, position=0), FakePart(id=3, position=3)]
        assignments = self.reconciler.renumber(parts)

        self.assertEqual([(a.part_id, a.new_position) for a in assignments], [(2, 0), (3, 1), (1, 2)])
        self.assertEqual([a.changed for a in assignments], [False, True, True])

    def test_duplicates_broken_by_id(self):
        parts = [FakePart(id=9, position=0), FakePart(id=4, position=0)]
        assignments = self.reconciler.renumber(parts)
        self.assertEqual([a.part_id for a in assignments], [4, 9])

    def test_renumber_is_idempotent(self):
        parts = [FakePart(id=1, position=5), FakePart(id=2, position=2), FakePart(id=3, position=2)]
        first = self.reconciler.renumber(parts)
        for assignment in first:
            next(p for p in parts if p.id == assignment.part_id).position = assignment.new_position

        second = self.reconciler.renumber(parts)
        self.assertEqual(
            [(a.part_id, a.new_position) for a in first],
            [(a.part_id, a.new_position) for a in second],
        )
        self.assertFalse(any(a.changed for a in second))


class TestContiguity(unittest.TestCase):
    def test_is_contiguous(self):
        self.assertTrue(is_contiguous([]))
        self.assertTrue(is_contiguous([2, 0, 1]))
        self.assertFalse(is_contiguous([0, 2]))
        self.assertFalse(is_contiguous([0, 0, 1]))
        self.assertFalse(is_contiguous([1, 2]))


if __name__ == '__main__':
    unittest.main()
