from __future__ import annotations

import unittest

from lineplot import ChartStyle, InvalidInput
from lineplot.colors import CAP_MARKER_COLOR, coerce_color


class ColorTests(unittest.TestCase):
    def test_named_hex_and_tuple_colors(self) -> None:
        self.assertEqual(coerce_color("red"), (255, 0, 0, 255))
        self.assertEqual(coerce_color("#D3D3D3"), CAP_MARKER_COLOR)
        self.assertEqual(coerce_color((1, 2, 3)), (1, 2, 3, 255))
        self.assertEqual(coerce_color([1, 2, 3, 4]), (1, 2, 3, 4))

    def test_bad_colors_raise(self) -> None:
        with self.assertRaises(InvalidInput):
            coerce_color("not-a-color")
        with self.assertRaises(InvalidInput):
            coerce_color((300, 0, 0))
        with self.assertRaises(InvalidInput):
            coerce_color(42)  # type: ignore[arg-type]


class ChartStyleTests(unittest.TestCase):
    def test_from_mapping_coerces_colors(self) -> None:
        style = ChartStyle.from_mapping({"marker_color": "black", "palette": ["red", "blue"], "hide_dots": True})
        self.assertEqual(style.marker_color, (0, 0, 0, 255))
        self.assertEqual(style.palette, ((255, 0, 0, 255), (0, 0, 255, 255)))
        self.assertTrue(style.hide_dots)

    def test_unknown_fields_are_rejected(self) -> None:
        with self.assertRaises(InvalidInput):
            ChartStyle.from_mapping({"hide_everything": True})

    def test_invalid_values_are_rejected(self) -> None:
        with self.assertRaises(InvalidInput):
            ChartStyle(dot_style="triangle")  # type: ignore[arg-type]
        with self.assertRaises(InvalidInput):
            ChartStyle(line_width=0)

    def test_style_is_immutable(self) -> None:
        style = ChartStyle()
        with self.assertRaises(AttributeError):
            style.hide_dots = True  # type: ignore[misc]


if __name__ == "__main__":
    unittest.main()
