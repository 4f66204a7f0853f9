# tests/test_months.py
import unittest
from datetime import date

from budget_manager.core import months


class MonthKeyTests(unittest.TestCase):

    def test_validation(self):
        self.assertTrue(months.is_month_key("2024-03"))
        for bad in ("2024-3", "2024-13", "2024-00", "March", "", None):
            self.assertFalse(months.is_month_key(bad), bad)
        with self.assertRaises(ValueError):
            months.parse_month_key("2024/03")

    def test_bounds(self):
        self.assertEqual(months.month_bounds("2024-02"), (date(2024, 2, 1), date(2024, 3, 1)))
        self.assertEqual(months.month_bounds("2024-12"), (date(2024, 12, 1), date(2025, 1, 1)))

    def test_shift_across_years(self):
        self.assertEqual(months.shift_month("2024-01", -1), "2023-12")
        self.assertEqual(months.shift_month("2024-12", 1), "2025-01")
        self.assertEqual(months.shift_month("2024-03", -15), "2022-12")

    def test_recent_months(self):
        self.assertEqual(months.recent_months(3, start="2024-02"), ["2024-02", "2024-01", "2023-12"])
        self.assertEqual(months.current_month(date(2024, 7, 19)), "2024-07")

    def test_format(self):
        self.assertEqual(months.format_month("2024-03"), "March 2024")


if __name__ == "__main__":
    unittest.main()
