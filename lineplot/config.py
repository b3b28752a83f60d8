from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import Any, Literal, Mapping

from lineplot.colors import DEFAULT_PALETTE, RGBA, coerce_color
from lineplot.errors import InvalidInput
from lineplot.raster.draw_text import DEFAULT_FONT_FAMILY


DotStyle = Literal["circle", "square"]

_COLOR_FIELDS = {
    "background_color",
    "font_color",
    "marker_color",
    "marker_shadow_color",
    "reference_line_default_color",
}


@dataclass(frozen=True)
class ChartStyle:
    """Immutable rendering configuration handed to every planning/drawing step.

    Charts keep one instance and swap it with `dataclasses.replace` whenever a
    setter runs, so a render always sees a single consistent snapshot.
    """

    font_family: str = DEFAULT_FONT_FAMILY
    title_font_size: float = 22.0
    legend_font_size: float = 14.0
    marker_font_size: float = 14.0
    background_color: RGBA = (255, 255, 255, 255)
    font_color: RGBA = (0, 0, 0, 255)
    marker_color: RGBA = (170, 170, 170, 255)
    marker_shadow_color: RGBA | None = None
    palette: tuple[RGBA, ...] = DEFAULT_PALETTE

    hide_line_numbers: bool = False
    hide_legend: bool = False
    hide_title: bool = False
    hide_dots: bool = False
    hide_lines: bool = False

    line_width: float | None = None
    dot_radius: float | None = None
    dot_style: DotStyle = "circle"

    reference_line_default_color: RGBA = (255, 0, 0, 255)
    reference_line_default_width: float = 5.0
    show_vertical_markers: bool = False

    label_margin: int = 10
    extra_room_for_long_label: int = 40
    max_size_clip: float = 5.0
    no_data_message: str = "No Data"

    # plot region gutters
    gutter_left: int = 72
    gutter_right: int = 56
    gutter_top: int = 64
    gutter_bottom: int = 56

    def __post_init__(self) -> None:
        if self.dot_style not in {"circle", "square"}:
            raise InvalidInput(f"unsupported dot style: {self.dot_style}")
        if self.line_width is not None and self.line_width <= 0:
            raise InvalidInput("line_width must be > 0")
        if self.dot_radius is not None and self.dot_radius <= 0:
            raise InvalidInput("dot_radius must be > 0")
        if self.reference_line_default_width <= 0:
            raise InvalidInput("reference_line_default_width must be > 0")
        for name in ("gutter_left", "gutter_right", "gutter_top", "gutter_bottom"):
            if getattr(self, name) < 0:
                raise InvalidInput(f"{name} must be >= 0")

    @classmethod
    def from_mapping(cls, overrides: Mapping[str, Any] | None = None) -> "ChartStyle":
        return cls().with_overrides(overrides or {})

    def with_overrides(self, overrides: Mapping[str, Any]) -> "ChartStyle":
        known = {f.name for f in fields(self)}
        unknown = sorted(set(overrides) - known)
        if unknown:
            raise InvalidInput(f"unknown style fields: {', '.join(unknown)}")
        values: dict[str, Any] = {}
        for key, raw in overrides.items():
            if key in _COLOR_FIELDS and raw is not None:
                values[key] = coerce_color(raw)
            elif key == "palette":
                values[key] = tuple(coerce_color(c) for c in raw)
            else:
                values[key] = raw
        return replace(self, **values)
