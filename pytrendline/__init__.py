"""
PyTrendline: trend-line regression for line charts.

Fits polynomial, exponential, logarithmic, power-law and moving-average
trend lines to (x, y) series, reports goodness of fit, and prepares
curves and equation labels for a chart renderer.

Submodules:
    trendline: Regression engine (fit, fit_trend_line, moving_average)
    chart: Chart description, worker pool and render queue
    logging_config: Optional logging setup for applications
"""

__version__ = "0.1.0"

from pytrendline import trendline
from pytrendline import chart

__all__ = [
    "__version__",
    "trendline",
    "chart",
]
