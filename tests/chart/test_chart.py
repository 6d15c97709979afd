"""
Tests for the Chart description, ChartData and tick formatting.
"""

import math

import numpy as np
import pytest

from pytrendline.chart import Chart, ChartData, ChartWorkerPool, RenderQueue, format_tick, tasks
from pytrendline.chart.chart import DEFAULT_WINDOW_TITLE
from pytrendline.core.exceptions import DimensionError, ModelDomainError, ValidationError
from pytrendline.trendline import (
    EXPONENTIAL,
    LINEAR,
    LOGARITHMIC,
    MovingAverage,
    Style,
)


@pytest.fixture
def chart():
    chart = Chart(chart_title='Growth', x_axis_title='t', y_axis_title='N')
    chart.plot_function(math.sin, 0.0, 2 * math.pi, 'sin')
    chart.plot_points(
        [1, 2, 3, 4, 5], [2.7, 7.4, 20.1, 54.6, 148.4], 'Colony',
        EXPONENTIAL, LINEAR.with_options(show_r2=True),
    )
    return chart


class TestPlotRequests:

    def test_defaults(self):
        chart = Chart()
        assert chart.window_title == DEFAULT_WINDOW_TITLE
        assert chart.chart_title is None
        assert chart.n_plots == 0

    def test_mismatched_lengths(self):
        with pytest.raises(DimensionError):
            Chart().plot_points([1, 2, 3], [1, 2])

    def test_invalid_function_bounds(self):
        with pytest.raises(ValidationError):
            Chart().plot_function(math.sin, 1.0, 0.0)

    def test_trend_lines_by_name_and_model(self):
        chart = Chart()
        chart.plot_points([1, 2, 3, 4], [1, 2, 3, 4], 'S', 'quadratic', MovingAverage(2))
        data = chart.build()
        assert len(data.curves) == 2

    def test_invalid_trend_line_rejected_early(self):
        with pytest.raises(ValidationError):
            Chart().plot_points([1, 2, 3], [1, 2, 3], 'S', 'spline')

    def test_returns_series(self):
        series = Chart().plot_points([1, 2], [3, 4], 'S')
        assert series.title == 'S'
        assert series.n == 2


class TestBuild:

    def test_request_order(self, chart):
        data = chart.build()
        assert isinstance(data, ChartData)
        assert [curve.title for curve in data.curves] == [
            'sin', 'Trend line (Colony)', 'Trend line (Colony)',
        ]
        assert data.curves[1].trend_line.spec.model == EXPONENTIAL.model
        assert data.series[0].title == 'Colony'
        assert data.series[0].style is Style.LINE_AND_MARKER
        assert data.skipped == ()

    def test_labels(self, chart):
        data = chart.build()
        assert len(data.labels) == 2
        assert data.labels[1].startswith('y = ')
        assert '\nr² = ' in data.labels[1]

    def test_failed_trend_line_skipped(self, caplog):
        chart = Chart()
        chart.plot_points([-1, 1, 2, 3], [1, 2, 3, 4], 'S', LOGARITHMIC, LINEAR)
        with caplog.at_level('WARNING', logger='pytrendline.chart.chart'):
            data = chart.build()
        assert len(data.series) == 1
        assert [curve.title for curve in data.curves] == ['Trend line (S)']
        assert len(data.skipped) == 1
        skipped = data.skipped[0]
        assert skipped.series_title == 'S'
        assert isinstance(skipped.error, ModelDomainError)
        assert "x > 0" in skipped.reason
        assert any("skipping logarithmic" in r.getMessage() for r in caplog.records)

    def test_huge_amplitude_does_not_abort_siblings(self):
        chart = Chart()
        x = np.arange(100.0, 104.0)
        chart.plot_points(x, np.exp(800.0 - x), 'Decay', 'exponential')
        chart.plot_points([1, 2, 3, 4], [2, 4, 6, 8], 'Line', 'linear')
        data = chart.build()
        assert data.skipped == ()
        assert data.labels == ('y = e^{800}·e^{-x}', 'y = 2·x')

    def test_unexpected_trend_line_error_skipped(self, monkeypatch, caplog):
        real_fit = tasks.fit_trend_line

        def fit_or_fail(series, spec, *, backend='auto'):
            if series.title == 'Bad':
                raise RuntimeError('renderer state corrupted')
            return real_fit(series, spec, backend=backend)

        monkeypatch.setattr(tasks, 'fit_trend_line', fit_or_fail)
        chart = Chart()
        chart.plot_points([1, 2, 3], [1, 2, 3], 'Bad', LINEAR)
        chart.plot_points([1, 2, 3], [2, 4, 6], 'Good', LINEAR)
        with caplog.at_level('ERROR', logger='pytrendline.chart.chart'):
            data = chart.build()
        assert len(data.series) == 2
        assert [curve.title for curve in data.curves] == ['Trend line (Good)']
        assert isinstance(data.skipped[0].error, RuntimeError)
        assert data.skipped[0].reason == 'renderer state corrupted'
        assert any(record.exc_info for record in caplog.records)

    def test_failing_function_does_not_abort_siblings(self, caplog):
        def broken(x):
            raise RuntimeError('no value')

        chart = Chart()
        chart.plot_function(lambda x: x ** 0.5, -1.0, 1.0, 'sqrt')
        chart.plot_function(broken, 0.0, 1.0, 'broken')
        chart.plot_function(math.sin, 0.0, 1.0, 'sin')
        with caplog.at_level('ERROR', logger='pytrendline.chart.chart'):
            data = chart.build()
        assert [curve.title for curve in data.curves] == ['sqrt', 'sin']
        assert data.curves[0].n_points > 0
        assert any('broken' in record.getMessage() for record in caplog.records)

    def test_shared_pool(self, chart):
        with ChartWorkerPool(max_workers=2) as pool:
            first = chart.build(pool)
            second = chart.build(pool)
        assert first.labels == second.labels
        for a, b in zip(first.curves, second.curves):
            for seg_a, seg_b in zip(a.segments, b.segments):
                np.testing.assert_array_equal(seg_a, seg_b)


class TestRender:

    def test_render_order(self, chart, renderer):
        data = chart.render(renderer)
        assert renderer.calls[0] == ('set_titles', DEFAULT_WINDOW_TITLE, 'Growth', 't', 'N')
        assert renderer.names()[1:] == [
            'add_points', 'add_curve', 'add_curve', 'add_label', 'add_curve', 'add_label',
        ]
        assert data.chart_title == 'Growth'

    def test_submit_streams_to_queue(self, chart, renderer):
        render_queue = RenderQueue()
        with ChartWorkerPool(max_workers=2) as pool:
            futures = chart.submit(pool, render_queue)
        assert len(futures) == 3
        assert render_queue.drain(renderer) == 4
        assert renderer.names().count('add_curve') == 3
        assert renderer.names().count('add_points') == 1


class TestTicks:

    @pytest.mark.parametrize("value, expected", [
        (0.0, '0'),
        (2.5, '2.5'),
        (1.0 / 3.0, '0.33'),
        (1000.0, '1000'),
        (15000.0, '1.5E4'),
        (-15000.0, '-1.5E4'),
        (1234567.0, '1.23E6'),
        (99999.0, '1E5'),
    ])
    def test_format_tick(self, value, expected):
        assert format_tick(value) == expected
