from __future__ import annotations

import unittest

import numpy as np

from lineplot import AxisRange, ReferenceLine, SeriesStore
from lineplot.scales import format_ticks_for_axis, generate_nice_ticks, resolve_x_range, resolve_y_range, round_up


class ScalesTests(unittest.TestCase):
    def test_normalize_round_trip(self) -> None:
        axis = AxisRange(2.0, 12.0)
        for value in (2.0, 3.3, 7.25, 12.0):
            self.assertAlmostEqual(axis.denormalize(axis.normalize(value)), value, places=9)

    def test_zero_spread_normalizes_to_half(self) -> None:
        axis = AxisRange(5.0, 5.0)
        self.assertTrue(axis.is_degenerate)
        self.assertEqual(axis.normalize(5.0), 0.5)
        out = axis.normalize_array(np.asarray([5.0, np.nan]))
        self.assertEqual(out[0], 0.5)
        self.assertTrue(np.isnan(out[1]))

    def test_reference_line_extends_y_range(self) -> None:
        store = SeriesStore()
        store.add("a", [1, 2, 3])
        lines = [ReferenceLine(value=10), ReferenceLine(value=-4), ReferenceLine(index=1)]
        axis = resolve_y_range(store, lines)
        self.assertEqual(axis.maximum, 10.0)
        self.assertEqual(axis.minimum, -4.0)

    def test_y_overrides_replace_data_bounds(self) -> None:
        store = SeriesStore()
        store.add("a", [1, 2, 3])
        axis = resolve_y_range(store, (), minimum=0.0, maximum=5.0)
        self.assertEqual((axis.minimum, axis.maximum), (0.0, 5.0))

    def test_x_range_skipped_without_xy_data(self) -> None:
        store = SeriesStore()
        store.add("a", [1, 2, 3])
        self.assertIsNone(resolve_x_range(store))

    def test_x_range_defaults_and_overrides(self) -> None:
        store = SeriesStore()
        store.add_xy("a", [2, 9], [1, 1])
        self.assertEqual(resolve_x_range(store), AxisRange(2.0, 9.0))
        self.assertEqual(resolve_x_range(store, minimum=0.0), AxisRange(0.0, 9.0))

    def test_round_up_to_leading_magnitude(self) -> None:
        self.assertEqual(round_up(15), 20.0)
        self.assertEqual(round_up(100), 100.0)
        self.assertEqual(round_up(230), 300.0)
        self.assertEqual(round_up(7.3), 8.0)
        self.assertEqual(round_up(-2.5), -2.0)

    def test_nice_ticks_stay_inside_range(self) -> None:
        ticks = generate_nice_ticks(1.0, 3.0, 5)
        self.assertGreaterEqual(float(ticks.min()), 1.0)
        self.assertLessEqual(float(ticks.max()), 3.0)
        self.assertEqual(format_ticks_for_axis(ticks), ["1", "1.5", "2", "2.5", "3"])


if __name__ == "__main__":
    unittest.main()
