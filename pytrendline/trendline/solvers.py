"""
Solver dispatch for trend lines.

This module provides the public API: fit() for the bare regression,
fit_trend_line() for a renderable trend line, and moving_average().
"""

from __future__ import annotations

from typing import Literal
import logging
import numpy as np
from numpy.typing import ArrayLike

from pytrendline.core.exceptions import DegenerateVarianceError, ValidationError
from pytrendline.core.protocols import Backend
from pytrendline.core.validation import check_non_negative_int
from pytrendline.trendline.backends.cpu import CPUNormalEquationsBackend
from pytrendline.trendline.design import LINEAR, Series, TrendDesign, TrendLineSpec
from pytrendline.trendline.formatting import label_text
from pytrendline.trendline.models import MovingAverage, RegressionModel, TrendModel
from pytrendline.trendline.solution import RegressionParams, TrendLine, TrendSolution

logger = logging.getLogger(__name__)

# Type alias for backend selection
BackendChoice = Literal['auto', 'cpu']

# Moving averages need at least this many samples
MIN_MOVING_AVERAGE_SAMPLES = 3


def _get_backend(choice: BackendChoice) -> Backend[TrendDesign, RegressionParams]:
    """
    Select and instantiate the appropriate backend.

    Raises:
        ValidationError: If unknown backend specified
    """
    if choice in ('auto', 'cpu'):
        return CPUNormalEquationsBackend()
    raise ValidationError(f"Unknown backend: {choice!r}")


def _ensure_series(data: Series | ArrayLike, y: ArrayLike | None) -> Series:
    """Convert raw arrays to a Series if needed."""
    if isinstance(data, Series):
        if y is not None:
            raise ValidationError("y must not be given together with a Series")
        return data
    if y is None:
        raise ValidationError("y required when x is given as an array")
    return Series.from_arrays(data, y)


def fit(
    data: Series | ArrayLike,
    y: ArrayLike | None = None,
    *,
    model: str | RegressionModel = 'linear',
    fixed_intercept: float | None = None,
    backend: BackendChoice = 'auto',
) -> TrendSolution:
    """
    Fit a regression trend model.

    Linearizes the model, solves the least squares problem and wraps the
    result. Statistics are computed in the linearized space.

    Args:
        data: A Series, or the x samples when y is given
        y: The y samples when data is an array
        model: Model instance or name ('linear', 'quadratic', 'exponential',
            'logarithmic', 'power', ...)
        fixed_intercept: Pin the intercept instead of estimating it
        backend: Computational backend ('auto' or 'cpu')

    Returns:
        TrendSolution with coefficients, statistics and the fitted curve

    Raises:
        ValidationError: If inputs are invalid
        ModelDomainError: If samples fall outside the model's domain
        InsufficientDataError: If there are not more samples than parameters
        SingularSystemError: If the normal equations are singular

    Example:
        >>> from pytrendline.trendline import fit
        >>> result = fit([0, 1, 2, 3], [1, 3, 5, 7], model='linear')
        >>> result.equation()
        'y = 2·x + 1'
    """
    series = _ensure_series(data, y)
    design = TrendDesign.build(series, model, fixed_intercept=fixed_intercept)
    backend_impl = _get_backend(backend)
    result = backend_impl.solve(design)
    return TrendSolution(_result=result, _design=design)


def moving_average(
    series: Series,
    window: int,
) -> tuple[tuple[float, float], ...] | None:
    """
    Trailing moving average.

    Point i is the mean of y[i .. i+window-1], placed at the x of the last
    sample in the window, giving n - window + 1 points.

    Returns:
        The points, or None when the series has fewer than three samples
        or window > n - 1 (the trend line is then not drawn)

    Raises:
        ValidationError: If window is not an integer >= 1
    """
    window = check_non_negative_int(window, 'window')
    if window < 1:
        raise ValidationError(f"window: must be >= 1, got {window}")

    n = series.n
    if n < MIN_MOVING_AVERAGE_SAMPLES or window > n - 1:
        logger.debug(
            "moving average with window %d not applicable to %d samples", window, n,
        )
        return None

    means = np.convolve(series.y, np.ones(window) / window, mode='valid')
    xs = series.x[window - 1:]
    return tuple(zip(xs.tolist(), means.tolist()))


def _as_spec(spec: TrendLineSpec | str | TrendModel) -> TrendLineSpec:
    if isinstance(spec, TrendLineSpec):
        return spec
    return TrendLineSpec(model=spec)


def fit_trend_line(
    series: Series,
    spec: TrendLineSpec | str | TrendModel = LINEAR,
    *,
    backend: BackendChoice = 'auto',
) -> TrendLine | None:
    """
    Fit a trend line and prepare everything the renderer needs.

    Straight lines come back as their two endpoints, other regression
    models as a PredictionFunction to be sampled over [start, end], and
    moving averages as their points.

    r² is only required to exist when the label asks for it: if the fit
    is degenerate and show_r2 is False, r_squared is None instead.

    Returns:
        The TrendLine, or None for a moving average that does not apply

    Raises:
        ValidationError, ModelDomainError, InsufficientDataError,
        SingularSystemError: As for fit()
        DegenerateVarianceError: If show_r2 is set and r² is undefined
    """
    spec = _as_spec(spec)
    title = spec.title_for(series)
    start, end = spec.sample_range(series)

    if isinstance(spec.model, MovingAverage):
        points = moving_average(series, spec.model.window)
        if points is None:
            return None
        return TrendLine(
            spec=spec,
            title=title,
            start=points[0][0],
            end=points[-1][0],
            points=points,
            function=None,
            equation_text=None,
            r_squared=None,
            sigma2=None,
            label_text='',
        )

    solution = fit(
        series, model=spec.model, fixed_intercept=spec.fixed_intercept, backend=backend,
    )
    function = solution.function

    points = None
    if function.is_straight_line:
        points = ((start, function(start)), (end, function(end)))

    if spec.show_r2:
        r_squared = solution.r_squared
    else:
        try:
            r_squared = solution.r_squared
        except DegenerateVarianceError:
            r_squared = None
    sigma2 = solution.sigma2
    equation_text = solution.equation()

    return TrendLine(
        spec=spec,
        title=title,
        start=start,
        end=end,
        points=points,
        function=function,
        equation_text=equation_text,
        r_squared=r_squared,
        sigma2=sigma2,
        label_text=label_text(
            equation_text if spec.show_equation else None,
            r_squared if spec.show_r2 else None,
            sigma2 if spec.show_sigma2 else None,
        ),
        solution=solution,
    )
