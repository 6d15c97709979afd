"""
Chart layer: turns plot requests into renderable data off the renderer
thread and hands it over through a single-writer queue.

Public API:
    Chart: plot_function / plot_points / build / submit / render
    ChartWorkerPool, RenderQueue: bounded workers and the hand-off queue
    ChartRenderer: protocol implemented by the GUI layer
    format_tick: axis tick labels
"""

from pytrendline.chart.data import ChartData, CurveData, PointSeriesData, SkippedTrendLine
from pytrendline.chart.protocols import ChartRenderer
from pytrendline.chart.tasks import (
    ChartWorkerPool,
    FunctionTask,
    PointsTask,
    RenderQueue,
    TrendLineTask,
    draw,
)
from pytrendline.chart.chart import Chart, render
from pytrendline.chart.ticks import format_tick

__all__ = [
    "Chart",
    "ChartData",
    "ChartRenderer",
    "ChartWorkerPool",
    "CurveData",
    "FunctionTask",
    "PointSeriesData",
    "PointsTask",
    "RenderQueue",
    "SkippedTrendLine",
    "TrendLineTask",
    "draw",
    "format_tick",
    "render",
]
