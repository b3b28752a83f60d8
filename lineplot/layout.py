from __future__ import annotations

from dataclasses import dataclass

from lineplot.errors import InvalidInput
from lineplot.scales import AxisRange


@dataclass(frozen=True)
class PlotRect:
    left: float
    top: float
    width: float
    height: float

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise InvalidInput("plot rectangle width/height must be > 0")

    @property
    def right(self) -> float:
        return self.left + self.width

    @property
    def bottom(self) -> float:
        return self.top + self.height

    @classmethod
    def from_canvas(
        cls,
        width: int,
        height: int,
        *,
        gutter_left: int,
        gutter_right: int,
        gutter_top: int,
        gutter_bottom: int,
    ) -> "PlotRect":
        left = min(gutter_left, max(8, width // 4))
        right = min(gutter_right, max(8, width // 8))
        top = min(gutter_top, max(8, height // 5))
        bottom = min(gutter_bottom, max(8, height // 4))
        plot_w = width - left - right
        plot_h = height - top - bottom
        if plot_w <= 1 or plot_h <= 1:
            raise InvalidInput("canvas too small for plot area")
        return cls(left=float(left), top=float(top), width=float(plot_w), height=float(plot_h))


@dataclass(frozen=True)
class CoordinateMapper:
    """Maps normalized [0, 1] values into pixel space; pixel Y grows downward."""

    rect: PlotRect
    column_count: int

    @property
    def column_increment(self) -> float:
        if self.column_count > 1:
            return self.rect.width / float(self.column_count - 1)
        return self.rect.width

    def pixel_y(self, ny: float) -> float:
        return self.rect.top + self.rect.height - ny * self.rect.height

    def pixel_x(self, nx: float | None = None, *, index: int | None = None) -> float:
        if nx is not None:
            return self.rect.left + nx * self.rect.width
        if index is None:
            raise ValueError("either a normalized x or a column index is required")
        return self.column_x(index)

    def column_x(self, index: float) -> float:
        return self.rect.left + index * self.column_increment

    def map_point(self, ny: float, nx: float | None = None, *, index: int | None = None) -> tuple[float, float]:
        return self.pixel_x(nx, index=index), self.pixel_y(ny)

    def label_x(self, position: float, x_range: AxisRange) -> float | None:
        """Pixel X of an X/Y-data label, or None when it falls outside the plot."""
        px = self.rect.left + x_range.normalize(position) * self.rect.width
        if px < self.rect.left or px > self.rect.right:
            return None
        return px
