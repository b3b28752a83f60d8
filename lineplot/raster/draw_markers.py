from __future__ import annotations

import numpy as np

from lineplot.raster.canvas import RGBA, draw_pixel, fill_rect


def draw_dot(dst: np.ndarray, shape: str, x: int, y: int, radius: float, color: RGBA) -> None:
    r = max(0.5, float(radius))
    if shape == "square":
        half = int(round(r))
        fill_rect(dst, x - half, y - half, x + half, y + half, color)
        return
    if shape != "circle":
        raise ValueError(f"unsupported dot shape: {shape}")
    reach = int(np.ceil(r))
    r2 = r * r
    for yy in range(y - reach, y + reach + 1):
        for xx in range(x - reach, x + reach + 1):
            if (xx - x) ** 2 + (yy - y) ** 2 <= r2:
                draw_pixel(dst, xx, yy, color)
