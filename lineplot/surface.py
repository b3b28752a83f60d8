from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

import numpy as np
from PIL import Image

from lineplot.colors import RGBA
from lineplot.raster import draw_dashed_line, draw_dot, draw_line, draw_text, new_canvas
from lineplot.raster.draw_text import HAlign, VAlign


class Surface(ABC):
    """Drawing primitives a chart renders through."""

    @abstractmethod
    def draw_line(self, x1: float, y1: float, x2: float, y2: float, color: RGBA, width: float = 1.0) -> None:
        raise NotImplementedError

    @abstractmethod
    def draw_dashed_line(self, x1: float, y1: float, x2: float, y2: float, color: RGBA, width: float = 1.0) -> None:
        raise NotImplementedError

    @abstractmethod
    def draw_dot(self, shape: str, x: float, y: float, radius: float, color: RGBA) -> None:
        raise NotImplementedError

    @abstractmethod
    def draw_text(
        self,
        text: str,
        x: float,
        y: float,
        h_align: HAlign,
        v_align: VAlign,
        font: str,
        size: float,
        color: RGBA,
        *,
        rotate_deg: int = 0,
    ) -> None:
        raise NotImplementedError

    def finish(self) -> None:
        """Optional hook for surfaces that buffer draw calls."""
        return


@dataclass(frozen=True)
class DrawCall:
    op: str
    args: dict[str, Any]


@dataclass
class RecordingSurface(Surface):
    """Keeps an ordered display list instead of drawing pixels."""

    calls: list[DrawCall] = field(default_factory=list)
    finished: int = 0

    def draw_line(self, x1: float, y1: float, x2: float, y2: float, color: RGBA, width: float = 1.0) -> None:
        self.calls.append(DrawCall("line", {"x1": x1, "y1": y1, "x2": x2, "y2": y2, "color": color, "width": width}))

    def draw_dashed_line(self, x1: float, y1: float, x2: float, y2: float, color: RGBA, width: float = 1.0) -> None:
        self.calls.append(DrawCall("dashed_line", {"x1": x1, "y1": y1, "x2": x2, "y2": y2, "color": color, "width": width}))

    def draw_dot(self, shape: str, x: float, y: float, radius: float, color: RGBA) -> None:
        self.calls.append(DrawCall("dot", {"shape": shape, "x": x, "y": y, "radius": radius, "color": color}))

    def draw_text(
        self,
        text: str,
        x: float,
        y: float,
        h_align: HAlign,
        v_align: VAlign,
        font: str,
        size: float,
        color: RGBA,
        *,
        rotate_deg: int = 0,
    ) -> None:
        self.calls.append(
            DrawCall(
                "text",
                {
                    "text": text,
                    "x": x,
                    "y": y,
                    "h_align": h_align,
                    "v_align": v_align,
                    "font": font,
                    "size": size,
                    "color": color,
                    "rotate_deg": rotate_deg,
                },
            )
        )

    def finish(self) -> None:
        self.finished += 1

    def of(self, op: str) -> list[DrawCall]:
        return [call for call in self.calls if call.op == op]

    def replay(self, target: Surface) -> None:
        for call in self.calls:
            if call.op == "line":
                target.draw_line(**call.args)
            elif call.op == "dashed_line":
                target.draw_dashed_line(**call.args)
            elif call.op == "dot":
                target.draw_dot(**call.args)
            elif call.op == "text":
                target.draw_text(**call.args)
        target.finish()


class RasterSurface(Surface):
    """Draws into an RGBA numpy canvas of shape (height, width, 4)."""

    def __init__(self, width: int, height: int, background: RGBA = (255, 255, 255, 255)) -> None:
        self.width = int(width)
        self.height = int(height)
        self.canvas = new_canvas(self.width, self.height, color=background)
        self.finished = False

    def draw_line(self, x1: float, y1: float, x2: float, y2: float, color: RGBA, width: float = 1.0) -> None:
        draw_line(self.canvas, _px(x1), _px(y1), _px(x2), _px(y2), color, width=_stroke(width))

    def draw_dashed_line(self, x1: float, y1: float, x2: float, y2: float, color: RGBA, width: float = 1.0) -> None:
        draw_dashed_line(self.canvas, _px(x1), _px(y1), _px(x2), _px(y2), color, width=_stroke(width))

    def draw_dot(self, shape: str, x: float, y: float, radius: float, color: RGBA) -> None:
        draw_dot(self.canvas, shape, _px(x), _px(y), radius, color)

    def draw_text(
        self,
        text: str,
        x: float,
        y: float,
        h_align: HAlign,
        v_align: VAlign,
        font: str,
        size: float,
        color: RGBA,
        *,
        rotate_deg: int = 0,
    ) -> None:
        draw_text(
            self.canvas,
            _px(x),
            _px(y),
            text,
            color,
            font_family=font,
            font_size_px=size,
            h_align=h_align,
            v_align=v_align,
            rotate_deg=rotate_deg,
        )

    def finish(self) -> None:
        self.finished = True

    def to_rgba(self) -> np.ndarray:
        return self.canvas.copy()

    def to_image(self) -> Image.Image:
        return Image.fromarray(self.canvas)


def _px(value: float) -> int:
    return int(round(float(value)))


def _stroke(width: float) -> int:
    return max(1, int(round(float(width))))
