from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Any, Iterator

import numpy as np

from lineplot.adapters import coerce_values, split_xy_pairs
from lineplot.colors import DEFAULT_PALETTE, RGBA, ColorLike, coerce_color, palette_color
from lineplot.errors import InvalidInput
from lineplot.scales import AxisRange


LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class Dataset:
    name: str
    y_points: np.ndarray
    color: RGBA
    x_points: np.ndarray | None = None

    @property
    def size(self) -> int:
        return int(self.y_points.size)

    @property
    def has_x_points(self) -> bool:
        return self.x_points is not None

    @property
    def is_singleton(self) -> bool:
        return int(np.count_nonzero(np.isfinite(self.y_points))) == 1


@dataclass(frozen=True)
class NormalizedSeries:
    """Normalized view of one dataset; NaN entries are absent points."""

    source: Dataset
    norm_y: np.ndarray
    norm_x: np.ndarray | None = None

    @property
    def name(self) -> str:
        return self.source.name

    @property
    def color(self) -> RGBA:
        return self.source.color

    @property
    def y_points(self) -> np.ndarray:
        return self.source.y_points

    @property
    def size(self) -> int:
        return self.source.size

    @property
    def is_singleton(self) -> bool:
        return self.source.is_singleton

    @property
    def has_x_points(self) -> bool:
        return self.norm_x is not None

    @property
    def coordinates(self) -> Iterator[tuple[float | None, float | None]]:
        for i in range(self.norm_y.size):
            ny = self.norm_y[i]
            y = float(ny) if np.isfinite(ny) else None
            x: float | None = None
            if self.norm_x is not None:
                nx = self.norm_x[i]
                x = float(nx) if np.isfinite(nx) else None
            yield x, y


class SeriesStore:
    """Ordered, name-unique collection of datasets for one render."""

    def __init__(self, palette: tuple[RGBA, ...] = DEFAULT_PALETTE) -> None:
        self._palette = palette
        self._datasets: list[Dataset] = []

    def __len__(self) -> int:
        return len(self._datasets)

    def __iter__(self) -> Iterator[Dataset]:
        return iter(self._datasets)

    @property
    def datasets(self) -> tuple[Dataset, ...]:
        return tuple(self._datasets)

    @property
    def has_data(self) -> bool:
        return any(ds.size > 0 for ds in self._datasets)

    @property
    def has_x_data(self) -> bool:
        return any(ds.has_x_points for ds in self._datasets)

    def add(
        self,
        name: str,
        y_values: Any = None,
        color: ColorLike | None = None,
        x_values: Any = None,
    ) -> Dataset:
        if not isinstance(name, str) or not name:
            raise InvalidInput("series name must be a non-empty string")
        if any(ds.name == name for ds in self._datasets):
            raise InvalidInput(f"duplicate series name: {name}")

        if x_values is not None and (y_values is None or _is_empty(y_values)):
            pairs = split_xy_pairs(x_values)
            if pairs is not None:
                x_values, y_values = pairs
        elif x_values is None and y_values is not None:
            pairs = split_xy_pairs(y_values)
            if pairs is not None:
                x_values, y_values = pairs

        y_arr = coerce_values([] if y_values is None else y_values, label="y")
        x_arr: np.ndarray | None = None
        if x_values is not None:
            x_arr = coerce_values(x_values, label="x")
            if x_arr.size == 0 and y_arr.size > 0:
                raise InvalidInput(f"series {name!r}: x values are empty")
            if x_arr.size != y_arr.size:
                raise InvalidInput(f"series {name!r}: x and y length mismatch: {x_arr.size} != {y_arr.size}")

        rgba = coerce_color(color) if color is not None else palette_color(self._palette, len(self._datasets))
        dataset = Dataset(name=name, y_points=y_arr, color=rgba, x_points=x_arr)
        self._datasets.append(dataset)
        LOGGER.debug("added series %r (%d points, xy=%s)", name, dataset.size, dataset.has_x_points)
        return dataset

    def add_xy(
        self,
        name: str,
        x_values: Any,
        y_values: Any = None,
        color: ColorLike | None = None,
    ) -> Dataset:
        if x_values is None or _is_empty(x_values):
            raise InvalidInput(f"series {name!r}: x values are required")
        pairs = split_xy_pairs(x_values)
        if pairs is not None:
            if y_values is not None and not _is_empty(y_values):
                LOGGER.debug("series %r: x values are (x, y) pairs; y values ignored", name)
            x_values, y_values = pairs
        return self.add(name, y_values, color=color, x_values=x_values)

    @property
    def max_y(self) -> float | None:
        return _reduce(np.nanmax, [ds.y_points for ds in self._datasets])

    @property
    def min_y(self) -> float | None:
        return _reduce(np.nanmin, [ds.y_points for ds in self._datasets])

    @property
    def max_x(self) -> float | None:
        return _reduce(np.nanmax, [ds.x_points for ds in self._datasets if ds.x_points is not None])

    @property
    def min_x(self) -> float | None:
        return _reduce(np.nanmin, [ds.x_points for ds in self._datasets if ds.x_points is not None])

    @property
    def column_count(self) -> int:
        return max((ds.size for ds in self._datasets), default=0)

    def normalize(self, y_range: AxisRange, x_range: AxisRange | None = None) -> list[NormalizedSeries]:
        out: list[NormalizedSeries] = []
        for ds in self._datasets:
            norm_x = None
            if ds.x_points is not None and x_range is not None:
                norm_x = x_range.normalize_array(ds.x_points)
            out.append(NormalizedSeries(source=ds, norm_y=y_range.normalize_array(ds.y_points), norm_x=norm_x))
        return out


def _is_empty(values: Any) -> bool:
    try:
        return len(values) == 0
    except TypeError:
        return False


def _reduce(fn, arrays: list[np.ndarray]) -> float | None:
    finite = [arr[np.isfinite(arr)] for arr in arrays]
    finite = [arr for arr in finite if arr.size > 0]
    if not finite:
        return None
    return float(fn(np.concatenate(finite)))
