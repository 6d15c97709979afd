"""
Tests for chart tasks, the worker pool and the render queue.
"""

import math
import threading
import time
from concurrent.futures import wait

import numpy as np
import pytest

from pytrendline.chart import (
    ChartRenderer,
    ChartWorkerPool,
    CurveData,
    FunctionTask,
    PointSeriesData,
    PointsTask,
    RenderQueue,
    TrendLineTask,
    draw,
)
from pytrendline.core.exceptions import ModelDomainError, ValidationError
from pytrendline.trendline import LINEAR, LOGARITHMIC, MovingAverage, Series, Style, TrendLineSpec


class TestTasks:

    def test_function_task(self):
        curve = FunctionTask(lambda x: 1.0 / x, -1.0, 1.0, 'reciprocal').run()
        assert isinstance(curve, CurveData)
        assert curve.title == 'reciprocal'
        assert len(curve.segments) == 2
        assert curve.trend_line is None

    def test_points_task(self, exact_line):
        data = PointsTask(exact_line, Style.MARKER).run()
        assert isinstance(data, PointSeriesData)
        assert data.title == 'Line'
        assert data.style is Style.MARKER
        np.testing.assert_array_equal(data.points[:, 1], exact_line.y)

    def test_trend_line_task(self, exact_line):
        spec = LINEAR.with_options(show_r2=True, color='red', style='marker')
        curve = TrendLineTask(exact_line, spec).run()
        assert curve.title == "Trend line (Line)"
        assert curve.label_text == 'y = 2·x + 1\nr² = 1'
        assert curve.color == 'red'
        assert curve.style is Style.MARKER
        assert curve.n_points == 2
        assert curve.trend_line.equation_text == 'y = 2·x + 1'

    def test_trend_line_task_not_applicable(self):
        series = Series.from_arrays([1.0, 2.0], [1.0, 2.0])
        assert TrendLineTask(series, TrendLineSpec(MovingAverage(2))).run() is None

    def test_trend_line_task_propagates_errors(self):
        series = Series.from_arrays([-1.0, 1.0, 2.0], [1.0, 2.0, 3.0])
        with pytest.raises(ModelDomainError):
            TrendLineTask(series, LOGARITHMIC).run()

    def test_cancelled_task_returns_partial_curve(self):
        event = threading.Event()
        event.set()
        curve = FunctionTask(math.sin, 0.0, 1.0).run(event)
        assert curve.segments == ()


class TestChartWorkerPool:

    def test_results_through_futures(self, exact_line):
        with ChartWorkerPool(max_workers=2) as pool:
            futures = [pool.submit(TrendLineTask(exact_line, LINEAR)) for _ in range(4)]
            results = [future.result() for future in futures]
        assert all(r.label_text == results[0].label_text for r in results)

    def test_errors_stay_in_their_future(self, exact_line):
        bad = Series.from_arrays([0.0, 1.0, 2.0], [1.0, 2.0, 3.0])
        with ChartWorkerPool(max_workers=2) as pool:
            failing = pool.submit(TrendLineTask(bad, LOGARITHMIC))
            passing = pool.submit(TrendLineTask(exact_line, LINEAR))
            assert isinstance(failing.exception(), ModelDomainError)
            assert passing.result().label_text == 'y = 2·x + 1'

    @pytest.mark.parametrize("max_workers", [0, -1, 2.5, True])
    def test_invalid_size(self, max_workers):
        with pytest.raises(ValidationError, match="max_workers"):
            ChartWorkerPool(max_workers=max_workers)

    def test_cancel_all_stops_sampling(self):
        pool = ChartWorkerPool(max_workers=1)
        pool.cancel_all()
        assert pool.cancelled
        curve = pool.submit(FunctionTask(math.sin, 0.0, 1.0)).result()
        pool.shutdown()
        assert curve.segments == ()

    def test_cancel_running_task(self):
        started = threading.Event()

        def slow(x):
            started.set()
            time.sleep(0.001)
            return 0.0

        pool = ChartWorkerPool(max_workers=1)
        future = pool.submit(FunctionTask(slow, 0.0, 1.0))
        started.wait(timeout=5)
        pool.cancel_all()
        curve = future.result(timeout=5)
        pool.shutdown()
        assert sum(len(s) for s in curve.segments) < 1401

    def test_max_workers(self):
        with ChartWorkerPool(max_workers=3) as pool:
            assert pool.max_workers == 3


class TestRenderQueue:

    def test_drain_dispatches_in_order(self, renderer, exact_line):
        render_queue = RenderQueue()
        render_queue.post(PointsTask(exact_line).run())
        render_queue.post(TrendLineTask(exact_line, LINEAR).run())
        assert render_queue.drain(renderer) == 2
        assert renderer.names() == ['add_points', 'add_curve', 'add_label']
        assert renderer.calls[-1][1] == 'y = 2·x + 1'
        assert render_queue.empty()

    def test_no_label_for_empty_text(self, renderer):
        render_queue = RenderQueue()
        render_queue.post(FunctionTask(math.sin, 0.0, 1.0).run())
        render_queue.drain(renderer)
        assert renderer.names() == ['add_curve']

    def test_attached_futures_posted_from_workers(self, renderer, exact_line):
        render_queue = RenderQueue()
        bad = Series.from_arrays([0.0, 1.0, 2.0], [1.0, 2.0, 3.0])
        with ChartWorkerPool(max_workers=2) as pool:
            futures = [
                pool.submit(TrendLineTask(exact_line, LINEAR)),
                pool.submit(TrendLineTask(bad, LOGARITHMIC)),
                pool.submit(FunctionTask(math.cos, 0.0, 1.0)),
            ]
            for future in futures:
                render_queue.attach(future)
            wait(futures)
        assert render_queue.drain(renderer) == 2
        assert renderer.threads == {threading.get_ident()}

    def test_failed_future_logged(self, caplog):
        render_queue = RenderQueue()
        bad = Series.from_arrays([0.0, 1.0, 2.0], [1.0, 2.0, 3.0])
        with ChartWorkerPool(max_workers=1) as pool:
            future = pool.submit(TrendLineTask(bad, LOGARITHMIC))
            wait([future])
        with caplog.at_level('WARNING', logger='pytrendline.chart.tasks'):
            render_queue.attach(future)
        assert render_queue.empty()
        assert any("x > 0" in record.getMessage() for record in caplog.records)

    def test_draw_rejects_unknown_items(self, renderer):
        with pytest.raises(TypeError):
            draw(renderer, "not chart data")

    def test_recording_renderer_satisfies_protocol(self, renderer):
        assert isinstance(renderer, ChartRenderer)
