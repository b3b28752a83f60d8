from __future__ import annotations


class LinePlotError(Exception):
    pass


class InvalidInput(LinePlotError, ValueError):
    """Raised for bad chart input before any chart state is mutated."""
