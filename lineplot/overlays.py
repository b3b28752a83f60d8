from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping, MutableMapping
from dataclasses import dataclass
import logging
from typing import Any, Iterator

import numpy as np

from lineplot.colors import CAP_MARKER_COLOR, RGBA, ColorLike, coerce_color
from lineplot.config import ChartStyle
from lineplot.errors import InvalidInput
from lineplot.layout import CoordinateMapper
from lineplot.scales import DEGENERATE_NORM, AxisRange, format_ticks_for_axis, generate_nice_ticks, round_up
from lineplot.surface import Surface


LOGGER = logging.getLogger(__name__)

BASELINE_KEY = "baseline"
CUSTOM_MARKER_WIDTH = 2.0
DEFAULT_MARKER_TARGET = 5


@dataclass
class ReferenceLine:
    """Horizontal line at `value` or vertical line at column `index`.

    `norm_value` is written during normalization and only set for horizontal lines.
    """

    value: float | None = None
    index: int | None = None
    color: RGBA | None = None
    width: float | None = None
    norm_value: float | None = None

    def __post_init__(self) -> None:
        if self.value is not None and self.index is not None:
            raise InvalidInput("reference line takes either a value or an index, not both")
        if self.index is not None and int(self.index) != self.index:
            raise InvalidInput("reference line index must be an integer")
        if self.width is not None and self.width <= 0:
            raise InvalidInput("reference line width must be > 0")

    @property
    def kind(self) -> str | None:
        if self.value is not None:
            return "horizontal"
        if self.index is not None:
            return "vertical"
        return None

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> "ReferenceLine":
        if not isinstance(raw, Mapping):
            raise InvalidInput(f"reference line must be a mapping, got {raw!r}")
        unknown = sorted(set(raw) - {"value", "index", "color", "width"})
        if unknown:
            raise InvalidInput(f"unknown reference line fields: {', '.join(unknown)}")
        color = raw.get("color")
        return cls(
            value=_optional_number(raw, "value", float),
            index=_optional_number(raw, "index", int),
            color=None if color is None else coerce_color(color),
            width=_optional_number(raw, "width", float),
        )


def _optional_number(raw: Mapping[str, Any], field: str, kind: type) -> Any:
    value = raw.get(field)
    if value is None:
        return None
    try:
        return kind(value)
    except (TypeError, ValueError) as exc:
        raise InvalidInput(f"reference line {field} must be numeric: {value!r}") from exc


class ReferenceLines(MutableMapping[str, ReferenceLine]):
    """Reference lines keyed by identifier."""

    def __init__(self, lines: Mapping[str, ReferenceLine | Mapping[str, Any]] | None = None) -> None:
        self._lines: dict[str, ReferenceLine] = {}
        for key, line in (lines or {}).items():
            self[key] = line

    def __getitem__(self, key: str) -> ReferenceLine:
        return self._lines[key]

    def __setitem__(self, key: str, line: ReferenceLine | Mapping[str, Any]) -> None:
        if not isinstance(line, ReferenceLine):
            line = ReferenceLine.from_mapping(line)
        self._lines[key] = line

    def __delitem__(self, key: str) -> None:
        del self._lines[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._lines)

    def __len__(self) -> int:
        return len(self._lines)

    def get_or_insert(self, key: str) -> ReferenceLine:
        """Return the line under `key`, creating an empty one (no value, default style) if missing."""
        line = self._lines.get(key)
        if line is None:
            line = ReferenceLine()
            self._lines[key] = line
        return line


def normalize_reference_lines(lines: ReferenceLines, y_range: AxisRange) -> None:
    for line in lines.values():
        if line.value is not None:
            line.norm_value = y_range.normalize(line.value)


@dataclass(frozen=True)
class OverlayLine:
    x1: float
    y1: float
    x2: float
    y2: float
    color: RGBA
    width: float = 1.0


class ReferenceLineRenderer(ABC):
    @abstractmethod
    def render(self, surface: Surface, line: OverlayLine) -> None:
        raise NotImplementedError


class SolidReferenceLineRenderer(ReferenceLineRenderer):
    def render(self, surface: Surface, line: OverlayLine) -> None:
        surface.draw_line(line.x1, line.y1, line.x2, line.y2, line.color, line.width)


class DashedReferenceLineRenderer(ReferenceLineRenderer):
    def render(self, surface: Surface, line: OverlayLine) -> None:
        surface.draw_dashed_line(line.x1, line.y1, line.x2, line.y2, line.color, line.width)


def plan_reference_lines(lines: ReferenceLines, mapper: CoordinateMapper, style: ChartStyle) -> list[OverlayLine]:
    rect = mapper.rect
    out: list[OverlayLine] = []
    for line in lines.values():
        color = line.color or style.reference_line_default_color
        width = line.width or style.reference_line_default_width
        if line.norm_value is not None and line.value is not None:
            level = mapper.pixel_y(line.norm_value)
            out.append(OverlayLine(rect.left, level, rect.right, level, color, width))
        if line.index is not None:
            x = mapper.column_x(line.index)
            out.append(OverlayLine(x, rect.top, x, rect.bottom, color, width))
    return out


def plan_vertical_markers(mapper: CoordinateMapper, style: ChartStyle) -> list[OverlayLine]:
    rect = mapper.rect
    out: list[OverlayLine] = []
    for column in range(mapper.column_count + 1):
        x = rect.right - column * mapper.column_increment
        out.append(OverlayLine(x, rect.bottom, x, rect.top, style.marker_color))
        if style.marker_shadow_color is not None:
            out.append(OverlayLine(x + 1, rect.bottom, x + 1, rect.top, style.marker_shadow_color))
    return out


def coerce_custom_markers(markers: Mapping[float, ColorLike]) -> dict[float, RGBA]:
    out: dict[float, RGBA] = {}
    for value, color in markers.items():
        try:
            key = float(value)
        except (TypeError, ValueError) as exc:
            raise InvalidInput(f"custom marker value must be numeric: {value!r}") from exc
        out[key] = coerce_color(color)
    return out


def with_cap_marker(markers: Mapping[float, RGBA], maximum_value: float) -> dict[float, RGBA]:
    """Working copy of `markers` plus a neutral marker above the data when it outgrows them."""
    working = dict(markers)
    if working and maximum_value > max(working):
        working[round_up(maximum_value)] = CAP_MARKER_COLOR
    return working


@dataclass(frozen=True)
class MarkerLine:
    value: float
    y: float
    line: OverlayLine
    label: str | None
    label_x: float
    is_cap: bool = False


def plan_custom_markers(
    markers: Mapping[float, RGBA],
    mapper: CoordinateMapper,
    y_range: AxisRange,
    *,
    x_minimum: float,
    style: ChartStyle,
) -> list[MarkerLine]:
    # The zero reference is the X-axis minimum, not the Y minimum.
    rect = mapper.rect
    out: list[MarkerLine] = []
    for value, color in with_cap_marker(markers, y_range.maximum).items():
        norm = (value - x_minimum) / y_range.spread if not y_range.is_degenerate else DEGENERATE_NORM
        y = int(rect.top + rect.height - rect.height * norm)
        if not rect.top <= y <= rect.bottom:
            LOGGER.debug("custom marker %s at y=%d outside plot; skipped", value, y)
            continue
        is_cap = color == CAP_MARKER_COLOR
        label_x = rect.right + style.extra_room_for_long_label if is_cap else rect.left - style.label_margin
        out.append(
            MarkerLine(
                value=value,
                y=y,
                line=OverlayLine(rect.left, y, rect.right, y, color, CUSTOM_MARKER_WIDTH),
                label=None if style.hide_line_numbers else str(int(value)),
                label_x=label_x,
                is_cap=is_cap,
            )
        )
    return out


def plan_default_markers(mapper: CoordinateMapper, y_range: AxisRange, style: ChartStyle) -> list[MarkerLine]:
    rect = mapper.rect
    if y_range.is_degenerate:
        ticks = np.asarray([y_range.minimum], dtype=np.float64)
    else:
        ticks = generate_nice_ticks(y_range.minimum, y_range.maximum, DEFAULT_MARKER_TARGET)
    labels = format_ticks_for_axis(ticks)
    out: list[MarkerLine] = []
    for value, label in zip(ticks.tolist(), labels):
        y = mapper.pixel_y(y_range.normalize(value))
        out.append(
            MarkerLine(
                value=value,
                y=y,
                line=OverlayLine(rect.left, y, rect.right, y, style.marker_color),
                label=None if style.hide_line_numbers else label,
                label_x=rect.left - style.label_margin,
            )
        )
    return out
