"""
Units of work for building a chart off the renderer thread.

Each task is a pure function of its inputs and returns renderable data.
Tasks run on a bounded ChartWorkerPool; finished results are posted to a
RenderQueue that the renderer thread drains, so the renderer only ever
has one writer.

Usage:
    with ChartWorkerPool(max_workers=4) as pool:
        render_queue = RenderQueue()
        render_queue.attach(pool.submit(TrendLineTask(series, EXPONENTIAL)))
        ...
        # on the renderer thread
        render_queue.drain(renderer)
"""

from __future__ import annotations

from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Callable, Protocol, TypeVar
import logging
import queue
import threading
import numpy as np
from numpy.typing import NDArray

from pytrendline.chart.data import CurveData, PointSeriesData
from pytrendline.chart.protocols import ChartRenderer
from pytrendline.core.compute.timing import timed
from pytrendline.core.compute.tolerances import DEFAULT_SAMPLING, SamplingConfig
from pytrendline.core.exceptions import PyTrendlineError, ValidationError
from pytrendline.trendline.design import Series, TrendLineSpec
from pytrendline.trendline.models import Style
from pytrendline.trendline.sampling import FunctionSampler
from pytrendline.trendline.solvers import BackendChoice, fit_trend_line

logger = logging.getLogger(__name__)

T = TypeVar('T', covariant=True)

DEFAULT_MAX_WORKERS = 4


class ChartTask(Protocol[T]):
    """A unit of work; `run` must check `cancel_event` between steps."""

    def run(self, cancel_event: threading.Event | None = None) -> T:
        ...


@dataclass(frozen=True, eq=False)
class FunctionTask:
    """Sample a user function over [start, end]."""
    function: Callable[[float], float]
    start: float
    end: float
    title: str | None = None
    config: SamplingConfig = DEFAULT_SAMPLING

    def run(self, cancel_event: threading.Event | None = None) -> CurveData:
        sampler = FunctionSampler(
            self.function, self.start, self.end,
            config=self.config, cancel_event=cancel_event,
        )
        with timed() as timer:
            segments = tuple(sampler.segments())
        logger.debug(
            "sampled %r in %d segments (%.3fs)",
            self.title, len(segments), timer.result()["total_seconds"],
        )
        return CurveData(title=self.title, segments=segments)


@dataclass(frozen=True, eq=False)
class PointsTask:
    """Pass a series through as plottable points."""
    series: Series
    style: Style = Style.LINE_AND_MARKER

    def run(self, cancel_event: threading.Event | None = None) -> PointSeriesData:
        points = self.series.points()
        return PointSeriesData(
            title=self.series.title,
            points=_as_rows(points),
            style=self.style,
        )


@dataclass(frozen=True, eq=False)
class TrendLineTask:
    """
    Fit and sample one trend line.

    `run` returns None for a moving average that does not apply to the
    series and raises the engine's errors unchanged otherwise.
    """
    series: Series
    spec: TrendLineSpec
    config: SamplingConfig = DEFAULT_SAMPLING
    backend: BackendChoice = 'auto'

    def run(self, cancel_event: threading.Event | None = None) -> CurveData | None:
        line = fit_trend_line(self.series, self.spec, backend=self.backend)
        if line is None:
            return None
        segments = line.segments(config=self.config, cancel_event=cancel_event)
        return CurveData(
            title=line.title,
            segments=tuple(segments),
            style=self.spec.style,
            color=self.spec.color,
            label_text=line.label_text,
            trend_line=line,
        )


def _as_rows(points: tuple[tuple[float, float], ...]) -> NDArray[np.floating[Any]]:
    return np.asarray(points, dtype=np.float64).reshape(-1, 2)


class ChartWorkerPool:
    """
    Bounded thread pool for chart tasks.

    All tasks share one cancellation event. After cancel_all() every
    running sampler stops at its next step and tasks submitted later
    return immediately with whatever they computed before sampling.
    """

    def __init__(self, max_workers: int = DEFAULT_MAX_WORKERS):
        if isinstance(max_workers, bool) or not isinstance(max_workers, int) or max_workers < 1:
            raise ValidationError(f"max_workers: must be an integer >= 1, got {max_workers!r}")
        self._max_workers = max_workers
        self._cancel_event = threading.Event()
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix='pytrendline-chart',
        )

    @property
    def max_workers(self) -> int:
        return self._max_workers

    @property
    def cancel_event(self) -> threading.Event:
        return self._cancel_event

    @property
    def cancelled(self) -> bool:
        return self._cancel_event.is_set()

    def submit(self, task: ChartTask[Any]) -> Future:
        return self._executor.submit(task.run, self._cancel_event)

    def cancel_all(self) -> None:
        logger.debug("cancelling chart tasks")
        self._cancel_event.set()

    def shutdown(self, wait: bool = True, *, cancel_futures: bool = False) -> None:
        if cancel_futures:
            self.cancel_all()
        self._executor.shutdown(wait=wait, cancel_futures=cancel_futures)

    def __enter__(self) -> ChartWorkerPool:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.shutdown(wait=True, cancel_futures=exc_type is not None)


class RenderQueue:
    """
    Hand-off from worker threads to the renderer thread.

    Workers (or future callbacks) post results; the renderer thread calls
    drain() and is the only caller of renderer methods.
    """

    def __init__(self):
        self._queue: queue.Queue = queue.Queue()

    def post(self, item: PointSeriesData | CurveData) -> None:
        self._queue.put(item)

    def attach(self, future: Future) -> None:
        """Post the future's result once it completes."""
        future.add_done_callback(self._on_done)

    def _on_done(self, future: Future) -> None:
        if future.cancelled():
            return
        error = future.exception()
        if isinstance(error, PyTrendlineError):
            logger.warning("chart task failed, nothing to draw: %s", error)
            return
        if error is not None:
            logger.error("chart task raised unexpectedly", exc_info=error)
            return
        result = future.result()
        if result is not None:
            self.post(result)

    def empty(self) -> bool:
        return self._queue.empty()

    def drain(self, renderer: ChartRenderer) -> int:
        """
        Apply every queued item to the renderer.

        Returns:
            Number of items drawn
        """
        count = 0
        while True:
            try:
                item = self._queue.get_nowait()
            except queue.Empty:
                return count
            draw(renderer, item)
            count += 1


def draw(renderer: ChartRenderer, item: PointSeriesData | CurveData) -> None:
    """Send one item to the renderer."""
    if isinstance(item, PointSeriesData):
        renderer.add_points(item)
    elif isinstance(item, CurveData):
        renderer.add_curve(item)
        if item.label_text:
            renderer.add_label(item.label_text)
    else:
        raise TypeError(f"Cannot draw {type(item).__name__}")
