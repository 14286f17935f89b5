import unittest

from sheet_InsightDashboard.core.aggregate import build_series
from sheet_InsightDashboard.core.classify import classify_field, classify_rows, configure_from_config
from sheet_InsightDashboard.core.model import FieldDescriptor, FieldType


def _metric(name):
    return FieldDescriptor(name=name, type=FieldType.NUMBER, is_metric=True)


def _dimension(name):
    return FieldDescriptor(name=name, type=FieldType.CATEGORY, is_dimension=True)


class BuildSeriesTests(unittest.TestCase):
    def setUp(self):
        configure_from_config({})

    def test_groups_sums_and_ranks(self):
        rows = [{"region": "A", "amt": 10}, {"region": "B", "amt": 30}, {"region": "A", "amt": 5}]
        series = build_series(rows, classify_rows(rows))
        self.assertIsNotNone(series)
        self.assertEqual("amt by region", series.title)
        self.assertEqual("region", series.dimension_field)
        self.assertEqual("amt", series.metric_field)
        self.assertEqual((("B", 30.0), ("A", 15.0)), series.points)
        self.assertEqual(45.0, series.total)

    def test_points_capped_but_total_covers_all_groups(self):
        rows = [{"cat": f"c{i}", "val": i} for i in range(1, 13)]
        series = build_series(rows, [_dimension("cat"), _metric("val")])
        self.assertEqual(10, len(series.points))
        self.assertEqual(("c12", 12.0), series.points[0])
        self.assertEqual(("c3", 3.0), series.points[-1])
        self.assertEqual(78.0, series.total)

    def test_top_n_is_configurable(self):
        rows = [{"cat": f"c{i}", "val": i} for i in range(1, 6)]
        series = build_series(rows, [_dimension("cat"), _metric("val")], top_n=2)
        self.assertEqual((("c5", 5.0), ("c4", 4.0)), series.points)
        self.assertEqual(15.0, series.total)

    def test_unparsable_metric_counts_as_zero_but_is_ignored_by_classifier(self):
        # documented quirk: the classifier averages over 2 values, the chart sums 3 cells
        values = ["10", "oops", "$5"]
        fd = classify_field(values, "amt")
        self.assertEqual(15.0, fd.total)
        self.assertEqual(7.5, fd.average)

        rows = [{"r": "A", "amt": values[0]}, {"r": "A", "amt": values[1]}, {"r": "B", "amt": values[2]}]
        series = build_series(rows, [_dimension("r"), fd])
        self.assertEqual((("A", 10.0), ("B", 5.0)), series.points)
        self.assertEqual(15.0, series.total)

    def test_missing_dimension_value_is_unknown(self):
        rows = [{"r": None, "v": 1}, {"r": "", "v": 2}, {"r": "X", "v": 1}]
        series = build_series(rows, [_dimension("r"), _metric("v")])
        self.assertEqual((("Unknown", 3.0), ("X", 1.0)), series.points)

    def test_ties_keep_first_seen_order(self):
        rows = [{"r": "late", "v": 2}, {"r": "early", "v": 2}, {"r": "mid", "v": 2}]
        series = build_series(rows, [_dimension("r"), _metric("v")])
        self.assertEqual(["late", "early", "mid"], [c for c, _ in series.points])

    def test_first_metric_and_dimension_in_field_order(self):
        rows = [{"a": "x", "b": "y", "m1": 1, "m2": 100}]
        fields = [_dimension("a"), _dimension("b"), _metric("m1"), _metric("m2")]
        series = build_series(rows, fields)
        self.assertEqual("m1 by a", series.title)

    def test_explicit_field_choice(self):
        rows = [{"a": "x", "b": "y", "m1": 1, "m2": 100}]
        fields = [_dimension("a"), _dimension("b"), _metric("m1"), _metric("m2")]
        series = build_series(rows, fields, metric="m2", dimension="b")
        self.assertEqual((("y", 100.0),), series.points)

    def test_no_metric_or_no_dimension_gives_none(self):
        rows = [{"a": "x", "m": 1}]
        self.assertIsNone(build_series(rows, [_dimension("a")]))
        self.assertIsNone(build_series(rows, [_metric("m")]))
        self.assertIsNone(build_series(rows, []))
