from lineplot.chart import LineChart, RenderState
from lineplot.config import ChartStyle
from lineplot.errors import InvalidInput, LinePlotError
from lineplot.layout import CoordinateMapper, PlotRect
from lineplot.overlays import (
    DashedReferenceLineRenderer,
    ReferenceLine,
    ReferenceLineRenderer,
    ReferenceLines,
    SolidReferenceLineRenderer,
)
from lineplot.scales import AxisRange
from lineplot.store import Dataset, NormalizedSeries, SeriesStore
from lineplot.surface import DrawCall, RasterSurface, RecordingSurface, Surface

__all__ = [
    "AxisRange",
    "ChartStyle",
    "CoordinateMapper",
    "DashedReferenceLineRenderer",
    "Dataset",
    "DrawCall",
    "InvalidInput",
    "LineChart",
    "LinePlotError",
    "NormalizedSeries",
    "PlotRect",
    "RasterSurface",
    "RecordingSurface",
    "ReferenceLine",
    "ReferenceLineRenderer",
    "ReferenceLines",
    "RenderState",
    "SeriesStore",
    "SolidReferenceLineRenderer",
    "Surface",
]
