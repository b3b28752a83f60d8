from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
import logging
from typing import Any, Mapping

import numpy as np

from lineplot.colors import RGBA, ColorLike, coerce_color
from lineplot.config import ChartStyle
from lineplot.errors import InvalidInput
from lineplot.layout import CoordinateMapper, PlotRect
from lineplot.overlays import (
    BASELINE_KEY,
    MarkerLine,
    ReferenceLineRenderer,
    ReferenceLines,
    SolidReferenceLineRenderer,
    coerce_custom_markers,
    normalize_reference_lines,
    plan_custom_markers,
    plan_default_markers,
    plan_reference_lines,
    plan_vertical_markers,
)
from lineplot.raster import text_size
from lineplot.scales import AxisRange, resolve_x_range, resolve_y_range
from lineplot.store import Dataset, NormalizedSeries, SeriesStore
from lineplot.surface import RasterSurface, Surface


LOGGER = logging.getLogger(__name__)

STROKE_DIVISOR = 4.0
DOT_DIVISOR = 2.5
LEGEND_SWATCH_W = 20
LEGEND_GAP = 16
TITLE_MARGIN = 8


class RenderState(str, Enum):
    NO_DATA = "no_data"
    HAS_DATA = "has_data"
    RANGE_RESOLVED = "range_resolved"
    NORMALIZED = "normalized"
    LAYOUT_COMPUTED = "layout_computed"
    OVERLAYS_DRAWN = "overlays_drawn"
    LEGEND_DRAWN = "legend_drawn"
    MARKERS_DRAWN = "markers_drawn"
    AXIS_LABELS_DRAWN = "axis_labels_drawn"
    TITLE_DRAWN = "title_drawn"
    BACKGROUND_COLUMNS_DRAWN = "background_columns_drawn"
    SERIES_DRAWN = "series_drawn"
    FLUSHED = "flushed"


@dataclass(frozen=True)
class RenderLayout:
    """Everything one render pass computes before drawing series."""

    y_range: AxisRange
    x_range: AxisRange | None
    mapper: CoordinateMapper
    series: tuple[NormalizedSeries, ...]

    @property
    def x_minimum(self) -> float:
        return self.x_range.minimum if self.x_range is not None else 0.0


class LineChart:
    """Line / X-Y chart drawn onto a fixed-size canvas.

    Data is added with `add` / `add_xy`, overlays are configured through
    `reference_lines`, `baseline_value` and `set_custom_markers`, and `render`
    runs the whole pipeline once against a `Surface`.
    """

    def __init__(
        self,
        width: int = 800,
        height: int | None = None,
        *,
        style: ChartStyle | None = None,
        reference_line_renderer: ReferenceLineRenderer | None = None,
    ) -> None:
        if isinstance(width, bool) or not isinstance(width, (int, float)) or width <= 0:
            raise InvalidInput(f"width must be a positive number, got {width!r}")
        if height is None:
            height = int(round(width * 0.75))
        if isinstance(height, bool) or not isinstance(height, (int, float)) or height <= 0:
            raise InvalidInput(f"height must be a positive number, got {height!r}")
        self.width = int(width)
        self.height = int(height)
        self.style = style or ChartStyle()
        self.reference_line_renderer = reference_line_renderer or SolidReferenceLineRenderer()
        self.store = SeriesStore(palette=self.style.palette)
        self.reference_lines = ReferenceLines()
        self.labels: dict[int | float, str] = {}
        self.title = ""
        self.x_axis_label = ""
        self.y_axis_label = ""
        self.minimum_value: float | None = None
        self.maximum_value: float | None = None
        self.minimum_x_value: float | None = None
        self.maximum_x_value: float | None = None
        self._custom_markers: dict[float, RGBA] | None = None
        self.plot_rect: PlotRect | None = None
        self._plot_rect_override: PlotRect | None = None
        self.state = RenderState.NO_DATA
        self._labels_seen: set[int | float] = set()

    # data

    def add(self, name: str, y_values: Any = None, color: ColorLike | None = None, x_values: Any = None) -> Dataset:
        return self.store.add(name, y_values, color=color, x_values=x_values)

    def add_xy(self, name: str, x_values: Any, y_values: Any = None, color: ColorLike | None = None) -> Dataset:
        return self.store.add_xy(name, x_values, y_values, color=color)

    # configuration

    def set_style(self, **overrides: Any) -> "LineChart":
        self.style = self.style.with_overrides(overrides)
        return self

    def set_hide_dots(self, hide: bool) -> "LineChart":
        self.style = replace(self.style, hide_dots=bool(hide))
        return self

    def set_hide_lines(self, hide: bool) -> "LineChart":
        self.style = replace(self.style, hide_lines=bool(hide))
        return self

    def set_hide_line_numbers(self, hide: bool) -> "LineChart":
        self.style = replace(self.style, hide_line_numbers=bool(hide))
        return self

    def set_hide_legend(self, hide: bool) -> "LineChart":
        self.style = replace(self.style, hide_legend=bool(hide))
        return self

    def set_show_vertical_markers(self, show: bool) -> "LineChart":
        self.style = replace(self.style, show_vertical_markers=bool(show))
        return self

    def set_line_width(self, width: float | None) -> "LineChart":
        self.style = replace(self.style, line_width=width)
        return self

    def set_dot_radius(self, radius: float | None) -> "LineChart":
        self.style = replace(self.style, dot_radius=radius)
        return self

    def set_dot_style(self, dot_style: str) -> "LineChart":
        self.style = replace(self.style, dot_style=dot_style)
        return self

    def set_x_range(self, *, minimum: float | None = None, maximum: float | None = None) -> "LineChart":
        self.minimum_x_value = minimum
        self.maximum_x_value = maximum
        return self

    def set_y_range(self, *, minimum: float | None = None, maximum: float | None = None) -> "LineChart":
        self.minimum_value = minimum
        self.maximum_value = maximum
        return self

    def set_labels(self, labels: Mapping[int | float, str]) -> "LineChart":
        self.labels = {k: str(v) for k, v in labels.items()}
        return self

    def set_plot_rect(self, rect: PlotRect | None) -> "LineChart":
        """Pin the plot rectangle instead of deriving it from the canvas gutters."""
        self._plot_rect_override = rect
        return self

    @property
    def custom_markers(self) -> dict[float, RGBA] | None:
        return None if self._custom_markers is None else dict(self._custom_markers)

    def set_custom_markers(self, markers: Mapping[float, ColorLike] | None) -> "LineChart":
        self._custom_markers = None if markers is None else coerce_custom_markers(markers)
        return self

    @property
    def baseline_value(self) -> float | None:
        line = self.reference_lines.get(BASELINE_KEY)
        return None if line is None else line.value

    @baseline_value.setter
    def baseline_value(self, value: float | None) -> None:
        if value is not None:
            try:
                value = float(value)
            except (TypeError, ValueError) as exc:
                raise InvalidInput(f"baseline value must be numeric: {value!r}") from exc
        self.reference_lines.get_or_insert(BASELINE_KEY).value = value

    @property
    def baseline_color(self) -> RGBA | None:
        line = self.reference_lines.get(BASELINE_KEY)
        return None if line is None else line.color

    @baseline_color.setter
    def baseline_color(self, color: ColorLike | None) -> None:
        self.reference_lines.get_or_insert(BASELINE_KEY).color = None if color is None else coerce_color(color)

    # rendering

    def to_rgba(self) -> np.ndarray:
        surface = RasterSurface(self.width, self.height, background=self.style.background_color)
        self.render(surface)
        return surface.to_rgba()

    def render(self, surface: Surface | None = None) -> Surface:
        if surface is None:
            surface = RasterSurface(self.width, self.height, background=self.style.background_color)
        style = self.style
        self._labels_seen = set()

        if not self.store.has_data:
            self._advance(RenderState.NO_DATA)
            self._draw_no_data(surface, style)
            surface.finish()
            self._advance(RenderState.FLUSHED)
            return surface

        self._advance(RenderState.HAS_DATA)
        layout = self._compute_layout(style)

        for line in plan_reference_lines(self.reference_lines, layout.mapper, style):
            self.reference_line_renderer.render(surface, line)
        self._advance(RenderState.OVERLAYS_DRAWN)

        self._draw_legend(surface, style)
        self._advance(RenderState.LEGEND_DRAWN)

        self._draw_line_markers(surface, style, layout)
        self._advance(RenderState.MARKERS_DRAWN)

        self._draw_axis_labels(surface, style, layout.mapper.rect)
        self._advance(RenderState.AXIS_LABELS_DRAWN)

        self._draw_title(surface, style, layout.mapper.rect)
        self._advance(RenderState.TITLE_DRAWN)

        if style.show_vertical_markers:
            # Drawn before the series so the columns sit behind them.
            for line in plan_vertical_markers(layout.mapper, style):
                surface.draw_line(line.x1, line.y1, line.x2, line.y2, line.color, line.width)
        self._advance(RenderState.BACKGROUND_COLUMNS_DRAWN)

        for series in layout.series:
            self._draw_series(surface, style, layout, series)
        self._advance(RenderState.SERIES_DRAWN)

        surface.finish()
        self._advance(RenderState.FLUSHED)
        return surface

    def _advance(self, state: RenderState) -> None:
        self.state = state
        LOGGER.debug("render state -> %s", state.value)

    def _compute_layout(self, style: ChartStyle) -> RenderLayout:
        y_range = resolve_y_range(
            self.store,
            self.reference_lines.values(),
            minimum=self.minimum_value,
            maximum=self.maximum_value,
        )
        x_range = resolve_x_range(self.store, minimum=self.minimum_x_value, maximum=self.maximum_x_value)
        if y_range.is_degenerate:
            LOGGER.debug("y range has zero spread at %s; centering points", y_range.minimum)
        self._advance(RenderState.RANGE_RESOLVED)

        series = tuple(self.store.normalize(y_range, x_range))
        normalize_reference_lines(self.reference_lines, y_range)
        self._advance(RenderState.NORMALIZED)

        self.plot_rect = self._plot_rect_override or PlotRect.from_canvas(
            self.width,
            self.height,
            gutter_left=style.gutter_left,
            gutter_right=style.gutter_right,
            gutter_top=style.gutter_top,
            gutter_bottom=style.gutter_bottom,
        )
        mapper = CoordinateMapper(rect=self.plot_rect, column_count=self.store.column_count)
        self._advance(RenderState.LAYOUT_COMPUTED)
        return RenderLayout(y_range=y_range, x_range=x_range, mapper=mapper, series=series)

    def _draw_no_data(self, surface: Surface, style: ChartStyle) -> None:
        LOGGER.debug("no data given; drawing placeholder")
        surface.draw_text(
            style.no_data_message,
            self.width / 2.0,
            self.height / 2.0,
            "center",
            "center",
            style.font_family,
            style.title_font_size,
            style.font_color,
        )

    def _draw_legend(self, surface: Surface, style: ChartStyle) -> None:
        if style.hide_legend:
            return
        y = style.gutter_top / 2.0 + style.title_font_size / 2.0
        x = float(style.gutter_left)
        for dataset in self.store:
            surface.draw_line(x, y, x + LEGEND_SWATCH_W, y, dataset.color, 3.0)
            surface.draw_text(
                dataset.name,
                x + LEGEND_SWATCH_W + 4,
                y,
                "left",
                "center",
                style.font_family,
                style.legend_font_size,
                style.font_color,
            )
            name_w, _ = text_size(dataset.name, font_family=style.font_family, font_size_px=style.legend_font_size)
            x += LEGEND_SWATCH_W + 4 + name_w + LEGEND_GAP

    def _draw_line_markers(self, surface: Surface, style: ChartStyle, layout: RenderLayout) -> None:
        if self._custom_markers:
            markers = plan_custom_markers(
                self._custom_markers,
                layout.mapper,
                layout.y_range,
                x_minimum=layout.x_minimum,
                style=style,
            )
        else:
            markers = plan_default_markers(layout.mapper, layout.y_range, style)
            if style.marker_shadow_color is not None:
                for marker in markers:
                    line = marker.line
                    surface.draw_line(line.x1, line.y1 + 1, line.x2, line.y2 + 1, style.marker_shadow_color, line.width)
        for marker in markers:
            self._draw_marker(surface, style, marker)

    def _draw_marker(self, surface: Surface, style: ChartStyle, marker: MarkerLine) -> None:
        line = marker.line
        surface.draw_line(line.x1, line.y1, line.x2, line.y2, line.color, line.width)
        if marker.label is None:
            return
        surface.draw_text(
            marker.label,
            marker.label_x,
            marker.y,
            "right",
            "center",
            style.font_family,
            style.marker_font_size,
            style.font_color,
        )

    def _draw_axis_labels(self, surface: Surface, style: ChartStyle, rect: PlotRect) -> None:
        if self.x_axis_label:
            surface.draw_text(
                self.x_axis_label,
                rect.left + rect.width / 2.0,
                float(self.height - TITLE_MARGIN),
                "center",
                "bottom",
                style.font_family,
                style.marker_font_size,
                style.font_color,
            )
        if self.y_axis_label:
            surface.draw_text(
                self.y_axis_label,
                float(TITLE_MARGIN),
                rect.top + rect.height / 2.0,
                "left",
                "center",
                style.font_family,
                style.marker_font_size,
                style.font_color,
                rotate_deg=90,
            )

    def _draw_title(self, surface: Surface, style: ChartStyle, rect: PlotRect) -> None:
        if style.hide_title or not self.title:
            return
        surface.draw_text(
            self.title,
            self.width / 2.0,
            float(TITLE_MARGIN),
            "center",
            "top",
            style.font_family,
            style.title_font_size,
            style.font_color,
        )

    def _draw_label(self, surface: Surface, style: ChartStyle, rect: PlotRect, x: float, position: int | float) -> None:
        if position not in self.labels or position in self._labels_seen:
            return
        surface.draw_text(
            self.labels[position],
            x,
            rect.bottom + style.label_margin,
            "center",
            "top",
            style.font_family,
            style.marker_font_size,
            style.font_color,
        )
        self._labels_seen.add(position)

    def _draw_xy_labels(self, surface: Surface, style: ChartStyle, mapper: CoordinateMapper, x_range: AxisRange) -> None:
        for position in self.labels:
            x = mapper.label_x(float(position), x_range)
            if x is None:
                LOGGER.debug("label at x=%s outside chart range; skipped", position)
                continue
            self._draw_label(surface, style, mapper.rect, x, position)

    def _draw_series(self, surface: Surface, style: ChartStyle, layout: RenderLayout, series: NormalizedSeries) -> None:
        mapper = layout.mapper
        point_count = max(1, layout.series[0].size)
        stroke_width = style.line_width or min(self.width / (point_count * STROKE_DIVISOR), style.max_size_clip)
        dot_radius = style.dot_radius or min(self.width / (point_count * DOT_DIVISOR), style.max_size_clip)
        one_point = series.is_singleton
        xy_labels_pending = series.has_x_points and layout.x_range is not None

        prev: tuple[float, float] | None = None
        for index, (nx, ny) in enumerate(series.coordinates):
            if series.has_x_points:
                if nx is None:
                    prev = None
                    continue
                new_x = mapper.pixel_x(nx)
                if xy_labels_pending:
                    self._draw_xy_labels(surface, style, mapper, layout.x_range)
                    xy_labels_pending = False
            else:
                new_x = mapper.column_x(index)
                self._draw_label(surface, style, mapper.rect, new_x, index)

            if ny is None:
                # No segment crosses a gap; the axis label above still stands.
                prev = None
                continue

            new_y = mapper.pixel_y(ny)
            if not style.hide_lines and prev is not None:
                surface.draw_line(prev[0], prev[1], new_x, new_y, series.color, stroke_width)
            if one_point or not style.hide_dots:
                surface.draw_dot(style.dot_style, new_x, new_y, dot_radius, series.color)
            prev = (new_x, new_y)
