from .normalize import coerce_values, split_xy_pairs

__all__ = ["coerce_values", "split_xy_pairs"]
