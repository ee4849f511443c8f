import unittest

from result_analyzer.config.settings import settings
from result_analyzer.domain.errors import EmptyStoreError
from result_analyzer.domain.logic.analysis import (
    analyze_class,
    bar_length,
    grade_bar_lengths,
    student_bar_lengths,
    subject_bar_lengths,
)
from result_analyzer.services.demo import DEMO_STUDENTS, load_demo
from result_analyzer.services.ranking import sort_by_percentage_desc
from result_analyzer.services.store import ResultStore


class ClassAnalysisTests(unittest.TestCase):
    def setUp(self):
        self.store = ResultStore(capacity=200)
        load_demo(self.store)

    def test_subject_averages(self):
        analysis = analyze_class(self.store.list())
        expected = [70.6, 69.6, 69.8, 71.2, 69.4]
        for got, want in zip(analysis.subject_averages, expected):
            self.assertAlmostEqual(got, want)

    def test_grade_distribution(self):
        analysis = analyze_class(self.store.list())
        self.assertEqual(list(analysis.grade_distribution), ["A", "B", "C", "D", "F"])
        self.assertEqual(analysis.grade_distribution, {"A": 1, "B": 2, "C": 1, "D": 1, "F": 0})

    def test_class_average_is_grand_mean_mark(self):
        analysis = analyze_class(self.store.list())
        all_marks = [m for r in self.store.list() for m in r.marks]
        self.assertAlmostEqual(analysis.class_average, sum(all_marks) / len(all_marks))
        self.assertAlmostEqual(analysis.class_average, 70.12)

    def test_empty_store(self):
        with self.assertRaises(EmptyStoreError):
            analyze_class([])

    def test_bar_lengths(self):
        analysis = analyze_class(self.store.list())
        self.assertEqual(subject_bar_lengths(analysis, 40), [28, 28, 28, 28, 28])
        self.assertEqual(grade_bar_lengths(analysis, 40), {"A": 20, "B": 40, "C": 20, "D": 20, "F": 0})
        self.assertEqual(student_bar_lengths(self.store.get(4), 40), [37, 38, 36, 38, 36])

    def test_default_width_follows_settings(self):
        self.assertEqual(bar_length(100, 100), settings.bar_width)
        self.assertEqual(bar_length(0, 100), 0)

    def test_bar_length_rounding_and_clamping(self):
        self.assertEqual(bar_length(50, 100, 40), 20)
        self.assertEqual(bar_length(1, 4, 2), 1)
        self.assertEqual(bar_length(150, 100, 40), 40)
        self.assertEqual(bar_length(-5, 100, 40), 0)
        self.assertEqual(bar_length(0, 0, 40), 0)


class RankingTests(unittest.TestCase):
    def test_sort_descending(self):
        store = ResultStore()
        load_demo(store)
        self.assertTrue(sort_by_percentage_desc(store))
        records = store.list()
        self.assertEqual([r.roll for r in records], [4, 1, 2, 3, 5])
        for a, b in zip(records, records[1:]):
            self.assertGreaterEqual(a.percentage, b.percentage)

    def test_small_store_is_noop(self):
        store = ResultStore()
        self.assertFalse(sort_by_percentage_desc(store))
        store.add(1, "Solo", [10, 20, 30, 40, 50])
        self.assertFalse(sort_by_percentage_desc(store))
        self.assertEqual(store.count(), 1)


class DemoTests(unittest.TestCase):
    def test_demo_skips_existing_rolls(self):
        store = ResultStore()
        store.add(3, "Already Here", [0, 0, 0, 0, 0])
        self.assertEqual(load_demo(store), len(DEMO_STUDENTS) - 1)
        self.assertEqual(store.get(3).name, "Already Here")

    def test_demo_stops_at_capacity(self):
        store = ResultStore(capacity=2)
        self.assertEqual(load_demo(store), 2)
        self.assertEqual([r.roll for r in store.list()], [1, 2])


if __name__ == "__main__":
    unittest.main()
