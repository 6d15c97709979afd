"""
Chart description.

A Chart collects functions, point series and their trend lines, then
computes everything renderable through the worker pool:

    chart = Chart(chart_title='Growth', x_axis_title='t', y_axis_title='N')
    chart.plot_function(math.sin, 0, 2 * math.pi, 'sin')
    chart.plot_points(t, n, 'Colony', EXPONENTIAL, LINEAR.with_options(show_r2=True))
    data = chart.build()
    chart.render(renderer)

A trend line that cannot be fitted is logged and reported in
ChartData.skipped; its series and every other curve are still drawn.
"""

from __future__ import annotations

from concurrent.futures import Future
from typing import Callable
import logging
from numpy.typing import ArrayLike

from pytrendline.chart.data import ChartData, CurveData, SkippedTrendLine
from pytrendline.chart.protocols import ChartRenderer
from pytrendline.chart.tasks import (
    ChartWorkerPool,
    FunctionTask,
    PointsTask,
    RenderQueue,
    TrendLineTask,
    draw,
)
from pytrendline.core.compute.tolerances import DEFAULT_SAMPLING, SamplingConfig
from pytrendline.core.exceptions import PyTrendlineError
from pytrendline.trendline.design import Series, TrendLineSpec
from pytrendline.trendline.models import Style, TrendModel
from pytrendline.trendline.sampling import FunctionSampler

logger = logging.getLogger(__name__)

DEFAULT_WINDOW_TITLE = "Charts"


class Chart:
    """
    Mutable description of one line chart.

    Adding plots only records requests; nothing is fitted or sampled until
    build(), submit() or render().
    """

    def __init__(
        self,
        *,
        window_title: str = DEFAULT_WINDOW_TITLE,
        chart_title: str | None = None,
        x_axis_title: str | None = None,
        y_axis_title: str | None = None,
        config: SamplingConfig = DEFAULT_SAMPLING,
    ):
        self.window_title = window_title
        self.chart_title = chart_title
        self.x_axis_title = x_axis_title
        self.y_axis_title = y_axis_title
        self.config = config
        self._functions: list[FunctionTask] = []
        self._series: list[tuple[PointsTask, tuple[TrendLineSpec, ...]]] = []

    def plot_function(
        self,
        function: Callable[[float], float],
        start: float,
        end: float,
        title: str | None = None,
    ) -> None:
        """
        Plot f over [start, end].

        Raises:
            ValidationError: If f is not callable or the bounds are invalid
        """
        # Reject bad bounds before any task runs
        FunctionSampler(function, start, end, config=self.config)
        self._functions.append(FunctionTask(function, float(start), float(end), title, self.config))

    def plot_points(
        self,
        x: ArrayLike,
        y: ArrayLike,
        title: str | None = None,
        *trend_lines: TrendLineSpec | TrendModel | str,
        style: Style = Style.LINE_AND_MARKER,
    ) -> Series:
        """
        Plot a data series, optionally with trend lines.

        Raises:
            DimensionError: If x and y have different lengths
            ValidationError: If the data or a trend line request is invalid
        """
        series = Series.from_arrays(x, y, title=title)
        specs = tuple(
            spec if isinstance(spec, TrendLineSpec) else TrendLineSpec(model=spec)
            for spec in trend_lines
        )
        self._series.append((PointsTask(series, Style(style)), specs))
        return series

    @property
    def n_plots(self) -> int:
        return len(self._functions) + len(self._series)

    def submit(self, pool: ChartWorkerPool, render_queue: RenderQueue) -> list[Future]:
        """
        Start every task and stream results into `render_queue`.

        Returns immediately; the renderer thread drains the queue as results
        arrive. Failed trend lines are logged and dropped.
        """
        futures: list[Future] = []
        for task in self._functions:
            futures.append(pool.submit(task))
        for points_task, specs in self._series:
            render_queue.post(points_task.run())
            for spec in specs:
                futures.append(pool.submit(self._trend_task(points_task.series, spec)))
        for future in futures:
            render_queue.attach(future)
        return futures

    def build(self, pool: ChartWorkerPool | None = None) -> ChartData:
        """
        Compute all renderable data.

        Args:
            pool: Worker pool to run on; a private pool is used and shut
                down when None

        Returns:
            ChartData in request order, with failed trend lines in `skipped`
        """
        own_pool = pool is None
        if pool is None:
            pool = ChartWorkerPool()
        try:
            function_futures = [pool.submit(task) for task in self._functions]
            trend_futures: list[tuple[Series, TrendLineSpec, Future]] = []
            for points_task, specs in self._series:
                for spec in specs:
                    future = pool.submit(self._trend_task(points_task.series, spec))
                    trend_futures.append((points_task.series, spec, future))

            series = tuple(points_task.run() for points_task, _ in self._series)
            curves: list[CurveData] = []
            for task, future in zip(self._functions, function_futures):
                try:
                    curves.append(future.result())
                except Exception:
                    logger.error("dropping function curve %r", task.title, exc_info=True)
            skipped: list[SkippedTrendLine] = []
            for data_series, spec, future in trend_futures:
                try:
                    curve = future.result()
                except PyTrendlineError as e:
                    logger.warning(
                        "skipping %s trend line for series %r: %s",
                        spec.model.name, data_series.title, e,
                    )
                    skipped.append(SkippedTrendLine(data_series.title, spec, e))
                    continue
                except Exception as e:
                    logger.error(
                        "%s trend line for series %r failed unexpectedly",
                        spec.model.name, data_series.title, exc_info=True,
                    )
                    skipped.append(SkippedTrendLine(data_series.title, spec, e))
                    continue
                if curve is not None:
                    curves.append(curve)
        finally:
            if own_pool:
                pool.shutdown()

        logger.debug(
            "built chart %r: %d series, %d curves, %d skipped",
            self.chart_title, len(series), len(curves), len(skipped),
        )
        return ChartData(
            window_title=self.window_title,
            chart_title=self.chart_title,
            x_axis_title=self.x_axis_title,
            y_axis_title=self.y_axis_title,
            series=series,
            curves=tuple(curves),
            skipped=tuple(skipped),
        )

    def render(self, renderer: ChartRenderer, pool: ChartWorkerPool | None = None) -> ChartData:
        """Build the chart and draw it. Call from the renderer thread."""
        data = self.build(pool)
        render(data, renderer)
        return data

    def _trend_task(self, series: Series, spec: TrendLineSpec) -> TrendLineTask:
        return TrendLineTask(series, spec, self.config)

    def __repr__(self) -> str:
        return (
            f"Chart(title={self.chart_title!r}, functions={len(self._functions)}, "
            f"series={len(self._series)})"
        )


def render(data: ChartData, renderer: ChartRenderer) -> None:
    """Draw computed chart data: titles, series, then curves with their labels."""
    renderer.set_titles(data.window_title, data.chart_title, data.x_axis_title, data.y_axis_title)
    for item in data.series:
        draw(renderer, item)
    for curve in data.curves:
        draw(renderer, curve)
