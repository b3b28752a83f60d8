from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
import math
from typing import TYPE_CHECKING, Iterable

import numpy as np

if TYPE_CHECKING:
    from lineplot.overlays import ReferenceLine
    from lineplot.store import SeriesStore


# Normalized position used when an axis has no spread.
DEGENERATE_NORM = 0.5


@dataclass(frozen=True)
class AxisRange:
    minimum: float
    maximum: float

    @property
    def spread(self) -> float:
        return self.maximum - self.minimum

    @property
    def is_degenerate(self) -> bool:
        return self.spread == 0.0

    def normalize(self, value: float) -> float:
        if self.is_degenerate:
            return DEGENERATE_NORM
        return (float(value) - self.minimum) / self.spread

    def normalize_array(self, values: np.ndarray) -> np.ndarray:
        """Vectorized `normalize`; NaN entries stay NaN."""
        if self.is_degenerate:
            return np.where(np.isfinite(values), DEGENERATE_NORM, np.nan)
        return (values - self.minimum) / self.spread

    def denormalize(self, norm: float) -> float:
        if self.is_degenerate:
            return self.minimum
        return self.minimum + float(norm) * self.spread


def resolve_y_range(
    store: "SeriesStore",
    reference_lines: Iterable["ReferenceLine"] = (),
    *,
    minimum: float | None = None,
    maximum: float | None = None,
) -> AxisRange:
    """Y range from data (or overrides), widened so no horizontal reference line is clipped."""
    lo = float(minimum) if minimum is not None else store.min_y
    hi = float(maximum) if maximum is not None else store.max_y
    if lo is None or hi is None:
        lo = hi = 0.0
    possible_minimums = [lo]
    possible_maximums = [hi]
    for line in reference_lines:
        if line.value is not None:
            possible_minimums.append(float(line.value))
            possible_maximums.append(float(line.value))
    return AxisRange(minimum=min(possible_minimums), maximum=max(possible_maximums))


def resolve_x_range(
    store: "SeriesStore",
    *,
    minimum: float | None = None,
    maximum: float | None = None,
) -> AxisRange | None:
    if not store.has_x_data:
        return None
    lo = float(minimum) if minimum is not None else store.min_x
    hi = float(maximum) if maximum is not None else store.max_x
    if lo is None or hi is None:
        return None
    return AxisRange(minimum=lo, maximum=hi)


def round_up(value: float) -> float:
    """Round up to the next multiple of the value's leading decimal magnitude (15 -> 20, 230 -> 300)."""
    value = float(value)
    if not math.isfinite(value):
        raise ValueError("cannot round a non-finite value")
    if value <= 0.0:
        return float(math.ceil(value))
    magnitude = 10.0 ** math.floor(math.log10(value))
    return float(math.ceil(round(value / magnitude, 9)) * magnitude)


def generate_nice_ticks(vmin: float, vmax: float, target: int) -> np.ndarray:
    if target <= 0:
        raise ValueError("target must be > 0")
    if vmin == vmax:
        return np.asarray([vmin], dtype=np.float64)

    span = _nice_number(vmax - vmin, round_result=False)
    step = _nice_number(span / max(target - 1, 1), round_result=True)
    tick_min = np.floor(vmin / step) * step
    tick_max = np.ceil(vmax / step) * step

    ticks = np.arange(tick_min, tick_max + 0.5 * step, step, dtype=np.float64)
    # Normalize floating-point drift so values like -4.44e-16 become 0.
    ticks = np.rint(ticks / step) * step
    ticks[np.isclose(ticks, 0.0, rtol=0.0, atol=step * 1e-9)] = 0.0
    eps = step * 1e-6
    return ticks[(ticks >= vmin - eps) & (ticks <= vmax + eps)]


def format_tick(value: float, *, step: float | None = None) -> str:
    if not np.isfinite(value):
        return str(value)
    if step is not None and np.isfinite(step) and step > 0 and abs(value) <= step * 1e-9:
        value = 0.0
    abs_v = abs(value)
    decimals = _decimals_from_step(step) if step is not None else 6
    if abs_v != 0 and (abs_v >= 1e6 or abs_v < 1e-6):
        return f"{value:.4e}"

    d = Decimal(str(value))
    quant = Decimal("1").scaleb(-decimals)
    try:
        q = d.quantize(quant)
    except InvalidOperation:
        q = d
    out = format(q, "f")
    # Only trim trailing zeros for fractional values (preserve integer zeros like 30, 40).
    if "." in out:
        out = out.rstrip("0").rstrip(".")
    if out == "-0":
        out = "0"
    return out


def format_ticks_for_axis(ticks: np.ndarray) -> list[str]:
    if ticks.size == 0:
        return []
    if ticks.size == 1:
        return [format_tick(float(ticks[0]))]
    step = float(abs(ticks[1] - ticks[0]))
    return [format_tick(float(v), step=step) for v in ticks]


def _nice_number(value: float, *, round_result: bool) -> float:
    exp = np.floor(np.log10(value))
    frac = value / (10**exp)

    if round_result:
        if frac < 1.5:
            nice_frac = 1.0
        elif frac < 3.0:
            nice_frac = 2.0
        elif frac < 7.0:
            nice_frac = 5.0
        else:
            nice_frac = 10.0
    else:
        if frac <= 1.0:
            nice_frac = 1.0
        elif frac <= 2.0:
            nice_frac = 2.0
        elif frac <= 5.0:
            nice_frac = 5.0
        else:
            nice_frac = 10.0

    return float(nice_frac * (10**exp))


def _decimals_from_step(step: float) -> int:
    if step <= 0 or not np.isfinite(step):
        return 6
    d = Decimal(str(step)).normalize()
    exp = d.as_tuple().exponent
    decimals = max(0, -int(exp))
    return min(12, decimals)
