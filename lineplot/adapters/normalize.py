from __future__ import annotations

from collections.abc import Sequence
from decimal import Decimal
from typing import Any

import numpy as np

from lineplot.errors import InvalidInput


try:
    import pandas as pd
except ImportError:  # pragma: no cover - optional dependency
    pd = None  # type: ignore[assignment]

try:
    import torch
except ImportError:  # pragma: no cover - optional dependency
    torch = None  # type: ignore[assignment]


def coerce_values(value: Any, *, label: str) -> np.ndarray:
    """Coerce a 1-D input into a float64 array; `None`/NaN entries become NaN."""
    if torch is not None and isinstance(value, torch.Tensor):
        tensor = value.detach()
        if tensor.ndim != 1:
            raise InvalidInput(f"{label} must be 1-D")
        if tensor.is_cuda:
            tensor = tensor.cpu()
        return tensor.to(torch.float64).numpy()

    if pd is not None and isinstance(value, pd.Series):
        return _coerce_ndarray(value.to_numpy(), label=label)

    if isinstance(value, np.ndarray):
        if value.ndim != 1:
            raise InvalidInput(f"{label} must be 1-D")
        return _coerce_ndarray(value, label=label)

    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        return _coerce_ndarray(np.asarray(list(value), dtype=object), label=label)

    raise InvalidInput(f"unsupported {label} input type: {type(value)!r}")


def split_xy_pairs(points: Any) -> tuple[list[Any], list[Any]] | None:
    """Transpose `[(x, y), ...]` into `([x, ...], [y, ...])`.

    Returns None unless every element is a 2-element pair.
    """
    if isinstance(points, (str, bytes, bytearray, np.ndarray)) or not isinstance(points, Sequence):
        return None
    if not points:
        return None
    if not all(_is_pair(p) for p in points):
        return None
    xs = [p[0] for p in points]
    ys = [p[1] for p in points]
    return xs, ys


def _is_pair(point: Any) -> bool:
    return isinstance(point, (tuple, list)) and len(point) == 2


def _coerce_ndarray(arr: np.ndarray, *, label: str) -> np.ndarray:
    if arr.ndim != 1:
        raise InvalidInput(f"{label} must be 1-D")
    if arr.dtype.kind in {"i", "u", "f"}:
        return arr.astype(np.float64, copy=True)

    out = np.empty(arr.shape[0], dtype=np.float64)
    for i, raw in enumerate(arr.tolist()):
        if raw is None:
            out[i] = np.nan
            continue
        if isinstance(raw, Decimal):
            out[i] = float(raw)
            continue
        if isinstance(raw, (bool, str, bytes)):
            raise InvalidInput(f"{label} contains non-numeric value at index {i}: {raw!r}")
        try:
            out[i] = float(raw)
        except (TypeError, ValueError) as exc:
            raise InvalidInput(f"{label} contains non-numeric value at index {i}: {raw!r}") from exc
    return out
