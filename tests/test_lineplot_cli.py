from __future__ import annotations

import json
from pathlib import Path
import tempfile
import unittest

from PIL import Image

from lineplot import InvalidInput
from lineplot.cli import build_chart, main


CHART = {
    "title": "Fries vs Hamburgers",
    "width": 320,
    "height": 240,
    "series": [
        {"name": "Fries", "y": [20, 23, 19, 8]},
        {"name": "Hamburgers", "y": [50, 19, None, 29], "color": "#216bc6"},
    ],
    "labels": {"0": "Q1", "3": "Q4"},
    "reference_lines": {"target": {"value": 30, "color": "green", "width": 2}},
    "baseline_value": 10,
    "custom_markers": {"10": "blue", "40": "orange"},
    "style": {"hide_dots": True},
}


class CliTests(unittest.TestCase):
    def test_build_chart_applies_description(self) -> None:
        chart = build_chart(CHART)
        self.assertEqual((chart.width, chart.height), (320, 240))
        self.assertEqual([ds.name for ds in chart.store], ["Fries", "Hamburgers"])
        self.assertEqual(chart.labels, {0: "Q1", 3: "Q4"})
        self.assertEqual(chart.baseline_value, 10.0)
        self.assertEqual(sorted(chart.reference_lines), ["baseline", "target"])
        self.assertEqual(sorted(chart.custom_markers or {}), [10.0, 40.0])
        self.assertTrue(chart.style.hide_dots)

    def test_build_chart_rejects_bad_series(self) -> None:
        with self.assertRaises(InvalidInput):
            build_chart({"series": [{"name": "a", "y": [1, 2], "x": [1]}]})
        with self.assertRaises(InvalidInput):
            build_chart({"series": [{"y": [1, 2]}]})

    def test_build_chart_rejects_malformed_overlays(self) -> None:
        series = [{"name": "a", "y": [1, 2]}]
        for extra in (
            {"custom_markers": {"ten": "blue"}},
            {"labels": {"first": "Q1"}},
            {"reference_lines": {"goal": {"value": "abc"}}},
            {"baseline_value": "abc"},
            {"width": "wide"},
        ):
            with self.subTest(extra=extra):
                with self.assertRaises(InvalidInput):
                    build_chart({"series": series, **extra})

    def test_main_writes_png_of_requested_size(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            src = Path(tmp) / "chart.json"
            out = Path(tmp) / "out" / "chart.png"
            src.write_text(json.dumps(CHART), encoding="utf-8")
            code = main([str(src), "--out", str(out), "--width", "300", "--height", "200"])
            self.assertEqual(code, 0)
            with Image.open(out) as image:
                self.assertEqual(image.size, (300, 200))

    def test_main_reports_invalid_description(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            src = Path(tmp) / "chart.json"
            src.write_text(json.dumps({"series": [{"name": "a", "y": [1], "x": []}]}), encoding="utf-8")
            with self.assertLogs("lineplot.cli", level="ERROR"):
                code = main([str(src), "--out", str(Path(tmp) / "x.png")])
            self.assertEqual(code, 1)
            self.assertFalse((Path(tmp) / "x.png").exists())

    def test_main_reports_malformed_marker_key(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            src = Path(tmp) / "chart.json"
            src.write_text(
                json.dumps({"series": [{"name": "a", "y": [1, 2]}], "custom_markers": {"ten": "blue"}}),
                encoding="utf-8",
            )
            with self.assertLogs("lineplot.cli", level="ERROR"):
                code = main([str(src), "--out", str(Path(tmp) / "x.png")])
            self.assertEqual(code, 1)


if __name__ == "__main__":
    unittest.main()
