"""
Renderer contract.

The GUI layer implements ChartRenderer. Renderer state is not thread-safe,
so only the thread draining a RenderQueue (or calling Chart.render) may
call these methods.
"""

from typing import Protocol, runtime_checkable

from pytrendline.chart.data import CurveData, PointSeriesData


@runtime_checkable
class ChartRenderer(Protocol):
    """Points-in display list of a line chart."""

    def set_titles(
        self,
        window: str,
        chart: str | None,
        x_axis: str | None,
        y_axis: str | None,
    ) -> None:
        ...

    def add_points(self, series: PointSeriesData) -> None:
        ...

    def add_curve(self, curve: CurveData) -> None:
        """Draw every segment of the curve without joining them."""
        ...

    def add_label(self, text: str) -> None:
        ...
