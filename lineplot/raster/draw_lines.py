from __future__ import annotations

import numpy as np

from lineplot.raster.canvas import RGBA, draw_hline, draw_pixel, draw_vline


def draw_line(dst: np.ndarray, x0: int, y0: int, x1: int, y1: int, color: RGBA, width: int = 1) -> None:
    if y0 == y1:
        draw_hline(dst, x0, x1, y0, color, width=width)
        return
    if x0 == x1:
        draw_vline(dst, x0, y0, y1, color, width=width)
        return
    for x, y in _bresenham(x0, y0, x1, y1):
        _draw_square_brush(dst, x, y, color=color, width=width)


def draw_dashed_line(
    dst: np.ndarray,
    x0: int,
    y0: int,
    x1: int,
    y1: int,
    color: RGBA,
    width: int = 1,
    *,
    dash: int = 10,
    gap: int = 20,
) -> None:
    if dash <= 0 or gap < 0:
        raise ValueError("dash must be > 0 and gap >= 0")
    period = dash + gap
    for step, (x, y) in enumerate(_bresenham(x0, y0, x1, y1)):
        if step % period < dash:
            _draw_square_brush(dst, x, y, color=color, width=width)


def _bresenham(x0: int, y0: int, x1: int, y1: int):
    dx = abs(x1 - x0)
    sx = 1 if x0 < x1 else -1
    dy = -abs(y1 - y0)
    sy = 1 if y0 < y1 else -1
    err = dx + dy

    while True:
        yield x0, y0
        if x0 == x1 and y0 == y1:
            break
        e2 = 2 * err
        if e2 >= dy:
            err += dy
            x0 += sx
        if e2 <= dx:
            err += dx
            y0 += sy


def _draw_square_brush(dst: np.ndarray, x: int, y: int, color: RGBA, width: int) -> None:
    if width <= 1:
        draw_pixel(dst, x, y, color)
        return
    radius = width // 2
    for yy in range(y - radius, y + radius + 1):
        for xx in range(x - radius, x + radius + 1):
            draw_pixel(dst, xx, yy, color)
