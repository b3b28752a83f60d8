from .canvas import draw_hline, draw_vline, fill_rect, new_canvas
from .draw_lines import draw_dashed_line, draw_line
from .draw_markers import draw_dot
from .draw_text import draw_text, text_size

__all__ = [
    "draw_dashed_line",
    "draw_dot",
    "draw_hline",
    "draw_line",
    "draw_text",
    "draw_vline",
    "fill_rect",
    "new_canvas",
    "text_size",
]
