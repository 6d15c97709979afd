"""
Renderable chart data.

Everything the Chart Renderer needs, as plain immutable values. Produced
by the worker tasks and consumed only by the renderer thread.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, TYPE_CHECKING
import numpy as np
from numpy.typing import NDArray

from pytrendline.trendline.models import Style

if TYPE_CHECKING:
    from pytrendline.trendline.design import TrendLineSpec
    from pytrendline.trendline.solution import TrendLine


@dataclass(frozen=True, eq=False)
class PointSeriesData:
    """
    A data series as plotted.

    Attributes:
        title: Legend entry (may be None)
        points: (n, 2) array of (x, y) rows in input order
        style: Line, marker, or both
    """
    title: str | None
    points: NDArray[np.floating[Any]]
    style: Style = Style.LINE_AND_MARKER


@dataclass(frozen=True, eq=False)
class CurveData:
    """
    A sampled curve: a plotted function or a trend line.

    Attributes:
        title: Legend entry
        segments: Polylines, each an (m, 2) array; gaps between them are
            discontinuities and must not be bridged
        style: How to draw the segments
        color: Color hint, or None for the renderer's default
        label_text: On-chart label (empty when nothing is shown)
        trend_line: Source trend line, None for plain functions
    """
    title: str | None
    segments: tuple[NDArray[np.floating[Any]], ...]
    style: Style = Style.LINE
    color: str | None = None
    label_text: str = ''
    trend_line: 'TrendLine | None' = None

    @property
    def n_points(self) -> int:
        return sum(segment.shape[0] for segment in self.segments)


@dataclass(frozen=True, eq=False)
class SkippedTrendLine:
    """A trend line that could not be fitted; its series is still plotted."""
    series_title: str | None
    spec: 'TrendLineSpec'
    error: Exception

    @property
    def reason(self) -> str:
        return str(self.error)


@dataclass(frozen=True)
class ChartData:
    """
    Fully computed chart, ready to hand to a renderer.

    Curves keep the order they were requested in: plotted functions
    first, then each series' trend lines in series order.
    """
    window_title: str
    chart_title: str | None
    x_axis_title: str | None
    y_axis_title: str | None
    series: tuple[PointSeriesData, ...] = ()
    curves: tuple[CurveData, ...] = ()
    skipped: tuple[SkippedTrendLine, ...] = field(default=())

    @property
    def labels(self) -> tuple[str, ...]:
        return tuple(curve.label_text for curve in self.curves if curve.label_text)
