from __future__ import annotations

from decimal import Decimal
import importlib.util
import unittest

import numpy as np

from lineplot import InvalidInput, SeriesStore
from lineplot.colors import DEFAULT_PALETTE
from lineplot.scales import AxisRange


class SeriesStoreTests(unittest.TestCase):
    def test_add_keeps_insertion_order_and_palette_colors(self) -> None:
        store = SeriesStore()
        store.add("a", [1, 2, 3])
        store.add("b", [3, 2, 1])
        store.add("c", [0, 0, 0], color="#00ff00")
        self.assertEqual([ds.name for ds in store], ["a", "b", "c"])
        self.assertEqual(store.datasets[0].color, DEFAULT_PALETTE[0])
        self.assertEqual(store.datasets[1].color, DEFAULT_PALETTE[1])
        self.assertEqual(store.datasets[2].color, (0, 255, 0, 255))

    def test_equal_length_xy_is_accepted(self) -> None:
        store = SeriesStore()
        ds = store.add("xy", [1, 2, 3], x_values=[10, 20, 30])
        self.assertTrue(ds.has_x_points)
        np.testing.assert_array_equal(ds.x_points, np.asarray([10.0, 20.0, 30.0]))

    def test_mismatched_lengths_raise_without_mutation(self) -> None:
        store = SeriesStore()
        with self.assertRaises(InvalidInput):
            store.add("bad", [1, 2, 3], x_values=[1, 2])
        with self.assertRaises(InvalidInput):
            store.add_xy("bad", [1, 2, 3], [1, 2])
        self.assertEqual(len(store), 0)

    def test_invalid_input_is_a_value_error(self) -> None:
        with self.assertRaises(ValueError):
            SeriesStore().add("bad", [1], x_values=[1, 2])

    def test_empty_x_with_y_values_raises(self) -> None:
        store = SeriesStore()
        with self.assertRaises(InvalidInput):
            store.add("bad", [1, 2], x_values=[])
        with self.assertRaises(InvalidInput):
            store.add_xy("bad", [], [1, 2])

    def test_add_xy_transposes_pairs(self) -> None:
        store = SeriesStore()
        ds = store.add_xy("pairs", [[1, 1], [2, 3], [3, 4]])
        np.testing.assert_array_equal(ds.x_points, np.asarray([1.0, 2.0, 3.0]))
        np.testing.assert_array_equal(ds.y_points, np.asarray([1.0, 3.0, 4.0]))

    def test_add_xy_pairs_take_precedence_over_y_values(self) -> None:
        store = SeriesStore()
        ds = store.add_xy("pairs", [[1, 5], [2, 6]], [9, 9])
        np.testing.assert_array_equal(ds.x_points, np.asarray([1.0, 2.0]))
        np.testing.assert_array_equal(ds.y_points, np.asarray([5.0, 6.0]))

    def test_duplicate_names_are_rejected(self) -> None:
        store = SeriesStore()
        store.add("a", [1])
        with self.assertRaises(InvalidInput):
            store.add("a", [2])

    def test_non_numeric_values_are_rejected(self) -> None:
        with self.assertRaises(InvalidInput):
            SeriesStore().add("a", [1, "two", 3])

    def test_none_and_decimal_values_are_coerced(self) -> None:
        ds = SeriesStore().add("a", [Decimal("1.5"), None, 3])
        self.assertEqual(ds.y_points[0], 1.5)
        self.assertTrue(np.isnan(ds.y_points[1]))
        self.assertEqual(ds.y_points[2], 3.0)

    def test_aggregates_skip_absent_values(self) -> None:
        store = SeriesStore()
        store.add("a", [5, None, 7])
        store.add("b", [-2, 4])
        self.assertEqual(store.max_y, 7.0)
        self.assertEqual(store.min_y, -2.0)
        self.assertEqual(store.column_count, 3)

    def test_x_aggregates_only_cover_xy_datasets(self) -> None:
        store = SeriesStore()
        store.add("indexed", [100, 200, 300, 400, 500])
        self.assertFalse(store.has_x_data)
        self.assertIsNone(store.max_x)
        store.add_xy("xy", [3, 8], [1, 2])
        self.assertTrue(store.has_x_data)
        self.assertEqual(store.min_x, 3.0)
        self.assertEqual(store.max_x, 8.0)

    def test_singleton_series_detection(self) -> None:
        store = SeriesStore()
        single = store.add("single", [None, 4, None])
        multi = store.add("multi", [1, 2])
        self.assertTrue(single.is_singleton)
        self.assertFalse(multi.is_singleton)

    def test_normalize_preserves_absent_markers(self) -> None:
        store = SeriesStore()
        store.add("a", [0, None, 10])
        store.add_xy("b", [0, 5, 10], [5, 5, 5])
        series = store.normalize(AxisRange(0.0, 10.0), AxisRange(0.0, 10.0))
        self.assertEqual(list(series[0].coordinates), [(None, 0.0), (None, None), (None, 1.0)])
        self.assertEqual(list(series[1].coordinates), [(0.0, 0.5), (0.5, 0.5), (1.0, 0.5)])

    def test_degenerate_range_normalizes_to_center(self) -> None:
        store = SeriesStore()
        store.add("flat", [4, 4, 4])
        (series,) = store.normalize(AxisRange(4.0, 4.0))
        self.assertEqual([y for _, y in series.coordinates], [0.5, 0.5, 0.5])

    def test_numpy_input_is_accepted(self) -> None:
        ds = SeriesStore().add("np", np.asarray([1, 2, 3], dtype=np.int32))
        self.assertEqual(ds.y_points.dtype, np.float64)

    @unittest.skipUnless(importlib.util.find_spec("pandas") is not None, "pandas not installed")
    def test_pandas_series_input(self) -> None:
        import pandas as pd

        ds = SeriesStore().add("pd", pd.Series([1.0, None, 3.0]))
        self.assertEqual(ds.size, 3)
        self.assertTrue(np.isnan(ds.y_points[1]))


if __name__ == "__main__":
    unittest.main()
