import unittest

from sheet_InsightDashboard.core.classify import classify_field, classify_rows, configure_from_config
from sheet_InsightDashboard.core.model import FieldType


class StatisticalClassificationTests(unittest.TestCase):
    def setUp(self):
        configure_from_config({})

    def test_dollar_strings_are_currency_metric_with_summary(self):
        fd = classify_field(["$100.00", "$250.50", "$75.25"], "Value")
        self.assertEqual(FieldType.CURRENCY, fd.type)
        self.assertTrue(fd.is_metric)
        self.assertFalse(fd.is_dimension)
        self.assertAlmostEqual(425.75, fd.total)
        self.assertAlmostEqual(141.92, fd.average, places=2)
        self.assertAlmostEqual(75.25, fd.minimum)
        self.assertAlmostEqual(250.50, fd.maximum)

    def test_mostly_numeric_column_is_number_metric(self):
        fd = classify_field([1, 2, 3, 4, "x"], "Col")
        self.assertEqual(FieldType.NUMBER, fd.type)
        self.assertTrue(fd.is_metric)
        self.assertEqual(10.0, fd.total)
        self.assertEqual(2.5, fd.average)

    def test_below_numeric_share_and_not_category_stays_text(self):
        # 3 of 4 numeric: too many numbers for a category, too few for a number
        fd = classify_field([1, 2, 3, "x"], "Col")
        self.assertEqual(FieldType.TEXT, fd.type)
        self.assertFalse(fd.is_metric)
        self.assertFalse(fd.is_dimension)
        self.assertIsNone(fd.total)

    def test_few_distinct_text_values_are_category(self):
        fd = classify_field(["North", "South", "North", "East"], "Region")
        self.assertEqual(FieldType.CATEGORY, fd.type)
        self.assertTrue(fd.is_dimension)
        self.assertEqual(3, fd.unique_value_count)

    def test_category_ceiling_is_at_least_twenty(self):
        fd = classify_field([f"v{i}" for i in range(21)] + ["v0"] * 9, "Col")
        self.assertEqual(FieldType.CATEGORY, fd.type)
        self.assertEqual(21, fd.unique_value_count)
        fd = classify_field([f"v{i}" for i in range(22)] + ["v0"] * 8, "Col")
        self.assertEqual(FieldType.TEXT, fd.type)
        self.assertFalse(fd.is_dimension)

    def test_category_ceiling_grows_with_row_count(self):
        fd = classify_field([f"v{i}" for i in range(35)] + ["v0"] * 15, "Col")
        self.assertEqual(FieldType.CATEGORY, fd.type)
        fd = classify_field([f"v{i}" for i in range(36)] + ["v0"] * 14, "Col")
        self.assertEqual(FieldType.TEXT, fd.type)

    def test_trailing_newline_is_not_currency(self):
        fd = classify_field(["100\n", "abc", "def", "ghi", "jkl"], "Col")
        self.assertNotEqual(FieldType.CURRENCY, fd.type)
        self.assertFalse(fd.is_metric)

    def test_single_distinct_value_is_not_category(self):
        fd = classify_field(["same"] * 4, "Col")
        self.assertEqual(FieldType.TEXT, fd.type)
        self.assertFalse(fd.is_dimension)

    def test_empty_column_is_plain_text(self):
        fd = classify_field([None, "", "N/A", float("nan")], "Total Amount")
        self.assertEqual(FieldType.TEXT, fd.type)
        self.assertFalse(fd.is_metric)
        self.assertFalse(fd.is_dimension)
        self.assertEqual(0, fd.unique_value_count)
        self.assertEqual((), fd.sample_values)

    def test_samples_are_distinct_values_of_first_five_entries(self):
        fd = classify_field(["a", "a", "b", "c", "d", "e", "f"], "Col")
        self.assertEqual(("a", "b", "c", "d"), fd.sample_values)

    def test_classification_is_repeatable(self):
        values = ["$1.00", "x", None, "2", "N/A"]
        self.assertEqual(classify_field(values, "Col"), classify_field(values, "Col"))


class NameOverrideTests(unittest.TestCase):
    def setUp(self):
        configure_from_config({})

    def test_status_column_is_dimension(self):
        values = ["Operasi", "Tidak Operasi", "Rencana"] * 3 + ["Operasi"]
        fd = classify_field(values, "Status Operasi")
        self.assertEqual(FieldType.CATEGORY, fd.type)
        self.assertTrue(fd.is_dimension)
        self.assertFalse(fd.is_metric)

    def test_dimension_keyword_discards_numeric_classification(self):
        fd = classify_field([1, 2, 3, 4], "Status Code")
        self.assertEqual(FieldType.CATEGORY, fd.type)
        self.assertTrue(fd.is_dimension)
        self.assertFalse(fd.is_metric)
        self.assertIsNone(fd.total)

    def test_metric_keyword_wins_over_dimension_keyword(self):
        fd = classify_field([1, 2, 3], "Total Type")
        self.assertEqual(FieldType.NUMBER, fd.type)
        self.assertTrue(fd.is_metric)
        self.assertFalse(fd.is_dimension)
        self.assertEqual(6.0, fd.total)

    def test_money_keyword_forces_currency(self):
        fd = classify_field([1000, 2500], "Harga Satuan")
        self.assertEqual(FieldType.CURRENCY, fd.type)
        self.assertTrue(fd.is_metric)

    def test_metric_keyword_needs_numeric_values(self):
        fd = classify_field(["late", "ok", "late"], "Total Remarks")
        self.assertEqual(FieldType.CATEGORY, fd.type)
        self.assertTrue(fd.is_dimension)
        self.assertFalse(fd.is_metric)

    def test_keywords_from_config(self):
        try:
            configure_from_config({"classification": {"dimension_keywords": ["kode"]}})
            self.assertTrue(classify_field([10, 20, 30], "Kode Unit").is_dimension)
            # default dimension keywords are replaced, not extended
            self.assertTrue(classify_field([10, 20, 30], "Machine Name").is_metric)
        finally:
            configure_from_config({})
        self.assertTrue(classify_field([10, 20, 30], "Machine Name").is_dimension)


class ClassifyRowsTests(unittest.TestCase):
    def test_one_descriptor_per_column_in_order(self):
        configure_from_config({})
        rows = [
            {"Region": "A", "Sales": 10.0, "Comment": None},
            {"Region": "B", "Sales": 30.0, "Comment": None},
        ]
        fields = classify_rows(rows)
        self.assertEqual(["Region", "Sales", "Comment"], [f.name for f in fields])
        self.assertTrue(fields[0].is_dimension)
        self.assertTrue(fields[1].is_metric)
        self.assertEqual(FieldType.TEXT, fields[2].type)
        for f in fields:
            self.assertFalse(f.is_metric and f.is_dimension)

    def test_no_rows_no_fields(self):
        self.assertEqual([], classify_rows([]))
