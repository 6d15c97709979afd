"""
Shared fixtures for chart-layer tests.
"""

import threading

import pytest


class RecordingRenderer:
    """ChartRenderer that records every call and the thread it came from."""

    def __init__(self):
        self.calls = []
        self.threads = set()

    def _record(self, name, *args):
        self.calls.append((name, *args))
        self.threads.add(threading.get_ident())

    def set_titles(self, window, chart, x_axis, y_axis):
        self._record('set_titles', window, chart, x_axis, y_axis)

    def add_points(self, series):
        self._record('add_points', series)

    def add_curve(self, curve):
        self._record('add_curve', curve)

    def add_label(self, text):
        self._record('add_label', text)

    def names(self):
        return [call[0] for call in self.calls]


@pytest.fixture
def renderer():
    return RecordingRenderer()
