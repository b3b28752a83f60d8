from __future__ import annotations

from functools import lru_cache
import logging
from pathlib import Path
from typing import Literal

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from lineplot.raster.canvas import RGBA


LOGGER = logging.getLogger(__name__)

HAlign = Literal["left", "center", "right"]
VAlign = Literal["top", "center", "bottom"]

DEFAULT_FONT_FAMILY = "DejaVu Sans"
DEFAULT_FONT_SIZE_PX = 12.0
FONT_FALLBACK_PATTERNS = (
    "dejavusans",
    "dejavu sans",
    "helvetica",
    "arial",
    "liberationsans",
    "menlo",
)


def draw_text(
    dst: np.ndarray,
    x: int,
    y: int,
    text: str,
    color: RGBA,
    *,
    font_family: str = DEFAULT_FONT_FAMILY,
    font_size_px: float = DEFAULT_FONT_SIZE_PX,
    h_align: HAlign = "left",
    v_align: VAlign = "top",
    rotate_deg: int = 0,
) -> None:
    """Draw `text` so that its aligned edge lands on (x, y)."""
    if not text:
        return
    font = _load_font(font_family=font_family, font_size_px=font_size_px)
    mask = _rotate_mask(_render_mask(text=text, font=font), rotate_deg=rotate_deg)
    h, w = mask.shape
    ox = {"left": 0, "center": w // 2, "right": w}[h_align]
    oy = {"top": 0, "center": h // 2, "bottom": h}[v_align]
    _blend_mask(dst, int(x) - ox, int(y) - oy, mask, color)


def text_size(
    text: str,
    *,
    font_family: str = DEFAULT_FONT_FAMILY,
    font_size_px: float = DEFAULT_FONT_SIZE_PX,
    rotate_deg: int = 0,
) -> tuple[int, int]:
    font = _load_font(font_family=font_family, font_size_px=font_size_px)
    if not text:
        ascent, descent = font.getmetrics()
        return (0, max(1, int(ascent + descent)))
    left, top, right, bottom = font.getbbox(text)
    w = max(0, int(right - left))
    h = max(1, int(bottom - top))
    if _normalize_quarter_turns(rotate_deg) % 2 == 1:
        return (h, w)
    return (w, h)


def _blend_mask(dst: np.ndarray, x: int, y: int, mask: np.ndarray, color: RGBA) -> None:
    h, w = mask.shape
    x0 = max(0, x)
    y0 = max(0, y)
    x1 = min(dst.shape[1], x + w)
    y1 = min(dst.shape[0], y + h)
    if x1 <= x0 or y1 <= y0:
        return

    cov = mask[y0 - y : y1 - y, x0 - x : x1 - x].astype(np.float32) / 255.0
    src_alpha = (color[3] / 255.0) * cov
    if not np.any(src_alpha > 0):
        return

    patch = dst[y0:y1, x0:x1]
    dst_rgb = patch[:, :, :3].astype(np.float32)
    dst_alpha = patch[:, :, 3].astype(np.float32) / 255.0
    src_rgb = np.asarray(color[:3], dtype=np.float32).reshape(1, 1, 3)
    out_alpha = src_alpha + dst_alpha * (1.0 - src_alpha)
    out_rgb_num = src_rgb * src_alpha[:, :, None] + dst_rgb * dst_alpha[:, :, None] * (1.0 - src_alpha[:, :, None])
    safe_alpha = np.where(out_alpha > 1e-6, out_alpha, 1.0)

    patch[:, :, :3] = np.clip(out_rgb_num / safe_alpha[:, :, None], 0, 255).astype(np.uint8)
    patch[:, :, 3] = np.clip(out_alpha * 255.0, 0, 255).astype(np.uint8)


@lru_cache(maxsize=256)
def _render_mask(text: str, font: ImageFont.FreeTypeFont | ImageFont.ImageFont) -> np.ndarray:
    left, top, right, bottom = font.getbbox(text)
    width = max(1, int(right - left))
    height = max(1, int(bottom - top))
    image = Image.new("L", (width, height), 0)
    draw = ImageDraw.Draw(image)
    draw.text((-left, -top), text, fill=255, font=font)
    return np.asarray(image, dtype=np.uint8)


@lru_cache(maxsize=64)
def _load_font(font_family: str, font_size_px: float) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    size = max(1, int(round(font_size_px)))
    font_path = _resolve_font_path(font_family)
    if font_path is None:
        LOGGER.debug("no font file matches %r; using Pillow default font", font_family)
        return ImageFont.load_default(size=size)
    try:
        return ImageFont.truetype(str(font_path), size=size)
    except OSError as exc:
        LOGGER.warning("failed to load font %s (%s); using Pillow default font", font_path, exc)
        return ImageFont.load_default(size=size)


def _resolve_font_path(font_family: str) -> Path | None:
    wanted = font_family.strip().lower() if font_family.strip() else DEFAULT_FONT_FAMILY.lower()
    patterns = (wanted,) + FONT_FALLBACK_PATTERNS

    font_dirs = [
        Path.home() / "Library" / "Fonts",
        Path("/Library/Fonts"),
        Path("/System/Library/Fonts"),
        Path("/usr/share/fonts"),
        Path("/usr/local/share/fonts"),
    ]

    candidates: list[Path] = []
    for base in font_dirs:
        if not base.exists():
            continue
        for ext in ("*.ttf", "*.otf"):
            candidates.extend(base.rglob(ext))

    for pattern in patterns:
        p = pattern.replace(" ", "")
        for path in candidates:
            if p in path.stem.lower().replace(" ", ""):
                return path
    return None


def _normalize_quarter_turns(rotate_deg: int) -> int:
    if rotate_deg % 90 != 0:
        raise ValueError("rotate_deg must be a multiple of 90")
    return (rotate_deg // 90) % 4


def _rotate_mask(mask: np.ndarray, *, rotate_deg: int) -> np.ndarray:
    turns = _normalize_quarter_turns(rotate_deg)
    if turns == 0:
        return mask
    return np.rot90(mask, k=turns)
