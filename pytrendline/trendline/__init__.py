"""
Trend-line regression engine.

Fits polynomial, exponential, logarithmic and power-law models by
linearized least squares, computes moving averages, and prepares the
fitted curves and equation labels for plotting.

Public API:
    fit(series, model=...) -> TrendSolution
    fit_trend_line(series, spec) -> TrendLine | None
    moving_average(series, window) -> points | None
    sample_function(f, start, end) -> FunctionSampler

Example:
    >>> from pytrendline.trendline import Series, TrendLineSpec, Exponential, fit_trend_line
    >>> series = Series.from_arrays([0, 1, 2, 3], [3.0, 8.15, 22.17, 60.26], title='Growth')
    >>> line = fit_trend_line(series, TrendLineSpec(Exponential(), show_r2=True))
    >>> print(line.label_text)
"""

from pytrendline.trendline.models import (
    Polynomial,
    Exponential,
    Logarithmic,
    Power,
    MovingAverage,
    TrendModel,
    RegressionModel,
    Style,
    resolve_model,
)
from pytrendline.trendline.design import (
    Series,
    TrendLineSpec,
    TrendDesign,
    LINEAR,
    QUADRATIC,
    EXPONENTIAL,
    LOGARITHMIC,
    POWER,
)
from pytrendline.trendline.prediction import PredictionFunction
from pytrendline.trendline.sampling import FunctionSampler, sample_function
from pytrendline.trendline.formatting import (
    format_equation,
    format_number,
    label_text,
    superscript,
)
from pytrendline.trendline.statistics import FitStatistics
from pytrendline.trendline.solution import RegressionParams, TrendSolution, TrendLine
from pytrendline.trendline.solvers import fit, fit_trend_line, moving_average

__all__ = [
    # Models
    "Polynomial",
    "Exponential",
    "Logarithmic",
    "Power",
    "MovingAverage",
    "TrendModel",
    "RegressionModel",
    "Style",
    "resolve_model",
    # Designs
    "Series",
    "TrendLineSpec",
    "TrendDesign",
    "LINEAR",
    "QUADRATIC",
    "EXPONENTIAL",
    "LOGARITHMIC",
    "POWER",
    # Results
    "FitStatistics",
    "RegressionParams",
    "TrendSolution",
    "TrendLine",
    "PredictionFunction",
    # Sampling and formatting
    "FunctionSampler",
    "sample_function",
    "format_equation",
    "format_number",
    "label_text",
    "superscript",
    # Entry points
    "fit",
    "fit_trend_line",
    "moving_average",
]
