from __future__ import annotations

from typing import Union

from PIL import ImageColor

from lineplot.errors import InvalidInput


RGBA = tuple[int, int, int, int]
ColorLike = Union[str, tuple[int, int, int], tuple[int, int, int, int]]

# Neutral grey reserved for the synthetic top marker.
CAP_MARKER_COLOR: RGBA = (211, 211, 211, 255)

DEFAULT_PALETTE: tuple[RGBA, ...] = (
    (253, 215, 0, 255),
    (33, 107, 198, 255),
    (250, 112, 0, 255),
    (114, 174, 6, 255),
    (234, 69, 154, 255),
    (134, 93, 213, 255),
    (0, 176, 172, 255),
    (224, 54, 37, 255),
)


def coerce_color(color: ColorLike) -> RGBA:
    if isinstance(color, str):
        try:
            rgb = ImageColor.getcolor(color, "RGBA")
        except ValueError as exc:
            raise InvalidInput(f"unknown color: {color!r}") from exc
        r, g, b, a = rgb
        return (int(r), int(g), int(b), int(a))
    if isinstance(color, (tuple, list)) and len(color) in (3, 4):
        channels = [int(c) for c in color]
        if any(c < 0 or c > 255 for c in channels):
            raise InvalidInput(f"color channels must be in [0, 255]: {color!r}")
        if len(channels) == 3:
            channels.append(255)
        r, g, b, a = channels
        return (r, g, b, a)
    raise InvalidInput(f"unsupported color value: {color!r}")


def palette_color(palette: tuple[RGBA, ...], index: int) -> RGBA:
    if not palette:
        raise InvalidInput("color palette is empty")
    return palette[index % len(palette)]
