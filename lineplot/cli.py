from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Any, Mapping, Sequence

from lineplot.chart import LineChart
from lineplot.config import ChartStyle
from lineplot.errors import InvalidInput, LinePlotError
from lineplot.surface import RasterSurface


LOGGER = logging.getLogger(__name__)


def build_chart(spec: Mapping[str, Any], *, width: int | None = None, height: int | None = None) -> LineChart:
    """Build a chart from a JSON-style description.

    Keys: `title`, `x_axis_label`, `y_axis_label`, `series` (list of
    `{name, y, x?, color?}`), `labels` (position -> text), `reference_lines`
    (key -> `{value|index, color?, width?}`), `baseline_value`,
    `baseline_color`, `custom_markers` (value -> color), `x_range` / `y_range`
    (`{minimum?, maximum?}`) and `style` (ChartStyle field overrides).
    """
    if not isinstance(spec, Mapping):
        raise InvalidInput("chart description must be a JSON object")
    style = ChartStyle.from_mapping(spec.get("style") or {})
    chart = LineChart(
        width=width or spec.get("width", 800),
        height=height or spec.get("height"),
        style=style,
    )
    chart.title = str(spec.get("title", ""))
    chart.x_axis_label = str(spec.get("x_axis_label", ""))
    chart.y_axis_label = str(spec.get("y_axis_label", ""))

    for raw in spec.get("series", []):
        if "name" not in raw:
            raise InvalidInput("every series needs a name")
        chart.add(raw["name"], raw.get("y"), color=raw.get("color"), x_values=raw.get("x"))

    if "labels" in spec:
        chart.set_labels({_label_key(k): v for k, v in spec["labels"].items()})
    for key, raw in spec.get("reference_lines", {}).items():
        chart.reference_lines[key] = raw
    if "baseline_value" in spec:
        chart.baseline_value = spec["baseline_value"]
    if "baseline_color" in spec:
        chart.baseline_color = spec["baseline_color"]
    if "custom_markers" in spec:
        chart.set_custom_markers(dict(spec["custom_markers"]))
    x_range = spec.get("x_range") or {}
    chart.set_x_range(minimum=x_range.get("minimum"), maximum=x_range.get("maximum"))
    y_range = spec.get("y_range") or {}
    chart.set_y_range(minimum=y_range.get("minimum"), maximum=y_range.get("maximum"))
    return chart


def _label_key(raw: str | int | float) -> int | float:
    try:
        value = float(raw)
    except (TypeError, ValueError) as exc:
        raise InvalidInput(f"label position must be numeric: {raw!r}") from exc
    return int(value) if value.is_integer() else value


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="lineplot", description="Render a line chart description (JSON) to PNG.")
    p.add_argument("chart", type=Path, help="Path to the chart description JSON.")
    p.add_argument("--out", type=Path, required=True, help="Output PNG path.")
    p.add_argument("--width", type=int, default=None)
    p.add_argument("--height", type=int, default=None)
    p.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return p.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")
    try:
        spec = json.loads(args.chart.read_text(encoding="utf-8"))
        chart = build_chart(spec, width=args.width, height=args.height)
        surface = RasterSurface(chart.width, chart.height, background=chart.style.background_color)
        chart.render(surface)
    except (OSError, json.JSONDecodeError, LinePlotError) as exc:
        LOGGER.error("failed to render %s: %s", args.chart, exc)
        return 1
    args.out.parent.mkdir(parents=True, exist_ok=True)
    surface.to_image().save(args.out, format="PNG")
    LOGGER.info("wrote %s (%dx%d)", args.out, chart.width, chart.height)
    return 0
