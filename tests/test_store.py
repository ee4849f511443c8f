import unittest

from result_analyzer.domain.errors import (
    CapacityError,
    DuplicateRollError,
    EmptyStoreError,
    InvalidRollError,
    StudentNotFoundError,
)
from result_analyzer.domain.logic.analysis import analyze_class
from result_analyzer.services.store import KEEP, ResultStore


class ResultStoreTests(unittest.TestCase):
    def setUp(self):
        self.store = ResultStore(capacity=3, max_name=59)

    def test_add_and_find(self):
        self.store.add(10, "Asha", [88, 76, 92, 85, 79])
        self.store.add(20, "Ben", [50, 50, 50, 50, 50])
        self.assertEqual(self.store.count(), 2)
        self.assertEqual(self.store.find(20), 1)
        self.assertEqual(self.store.get(10).total, 420)

    def test_duplicate_roll_leaves_store_unchanged(self):
        self.store.add(1, "Asha", [88, 76, 92, 85, 79])
        before = self.store.list()
        with self.assertRaises(DuplicateRollError):
            self.store.add(1, "Other", [0, 0, 0, 0, 0])
        self.assertEqual(self.store.list(), before)

    def test_capacity_is_enforced(self):
        for roll in (1, 2, 3):
            self.store.add(roll, f"S{roll}", [60] * 5)
        self.assertTrue(self.store.is_full())
        with self.assertRaises(CapacityError):
            self.store.add(4, "S4", [60] * 5)
        self.assertEqual(self.store.count(), 3)

    def test_unknown_roll(self):
        with self.assertRaises(StudentNotFoundError):
            self.store.find(99)
        with self.assertRaises(StudentNotFoundError):
            self.store.modify(99, [KEEP] * 5)
        with self.assertRaises(StudentNotFoundError):
            self.store.delete(99)

    def test_modify_keeps_out_of_range_values(self):
        self.store.add(1, "Asha", [88, 76, 92, 85, 79])
        updated = self.store.modify(1, [None, 101, -5, 0, 95])
        self.assertEqual(updated.marks, (88, 76, 92, 0, 95))
        self.assertEqual(updated.name, "Asha")
        self.assertEqual(updated.total, 351)

    def test_delete_preserves_order(self):
        for roll in (1, 2, 3):
            self.store.add(roll, f"S{roll}", [60] * 5)
        removed = self.store.delete(2)
        self.assertEqual(removed.roll, 2)
        self.assertEqual([r.roll for r in self.store.list()], [1, 3])

    def test_roll_must_fit_int32(self):
        with self.assertRaises(InvalidRollError):
            self.store.add(2**31, "Big", [50] * 5)
        with self.assertRaises(InvalidRollError):
            self.store.add(-(2**31) - 1, "Small", [50] * 5)
        self.assertEqual(self.store.count(), 0)
        self.store.add(2**31 - 1, "Max", [50] * 5)
        self.store.add(-(2**31), "Min", [50] * 5)
        self.assertEqual(self.store.count(), 2)

    def test_asha_scenario(self):
        s = self.store.add(1, "Asha", [88, 76, 92, 85, 79])
        self.assertEqual((s.total, s.grade), (420, "B"))
        self.assertAlmostEqual(s.percentage, 84.0)

        s = self.store.modify(1, [-1, -1, -1, -1, 95])
        self.assertEqual(s.marks, (88, 76, 92, 85, 95))
        self.assertEqual((s.total, s.grade), (436, "A"))
        self.assertAlmostEqual(s.percentage, 87.2)

        self.store.delete(1)
        self.assertEqual(self.store.count(), 0)
        with self.assertRaises(EmptyStoreError):
            analyze_class(self.store.list())


if __name__ == "__main__":
    unittest.main()
