"""
Trend-line solution types.

Contains the parameter payload computed by backends, the user-facing
regression solution wrapper, and the renderable TrendLine handed to the
chart layer.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TYPE_CHECKING
import threading
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pytrendline.core.compute.tolerances import DEFAULT_SAMPLING, EQUATION_DECIMALS, SamplingConfig
from pytrendline.core.exceptions import DegenerateVarianceError
from pytrendline.core.result import Result
from pytrendline.trendline.formatting import format_equation
from pytrendline.trendline.models import RegressionModel
from pytrendline.trendline.prediction import PredictionFunction
from pytrendline.trendline.sampling import sample_function
from pytrendline.trendline.statistics import FitStatistics

if TYPE_CHECKING:
    from pytrendline.trendline.design import TrendDesign, TrendLineSpec


@dataclass(frozen=True, eq=False)
class RegressionParams:
    """
    Parameter payload for a trend-line regression.

    This is the immutable data computed by backends.

    Attributes:
        coefficients: 1-indexed coefficients; slot 0 is unused (NaN),
            slot 1 is the intercept b1 (exactly the fixed intercept when
            one was given), slot i multiplies basis function i-1
        fitted_values: Fitted values in the linearized space
        residuals: Linearized target minus fitted values
        statistics: Sums of squares and degrees of freedom
    """
    coefficients: NDArray[np.floating[Any]]
    fitted_values: NDArray[np.floating[Any]]
    residuals: NDArray[np.floating[Any]]
    statistics: FitStatistics

    @property
    def r_squared(self) -> float:
        return self.statistics.r_squared

    @property
    def sigma2(self) -> float:
        return self.statistics.sigma2

    @property
    def df_residual(self) -> int:
        return self.statistics.df_residual


@dataclass
class TrendSolution:
    """
    User-facing regression results.

    Wraps the backend Result and provides convenient accessors for the
    coefficients, fit statistics and the fitted curve.
    """
    _result: Result[RegressionParams]
    _design: 'TrendDesign'

    _function: PredictionFunction | None = None

    @property
    def model(self) -> RegressionModel:
        return self._design.model

    @property
    def fixed_intercept(self) -> float | None:
        return self._design.fixed_intercept

    @property
    def coefficients(self) -> NDArray[np.floating[Any]]:
        """1-indexed coefficients (slot 0 unused)."""
        return self._result.params.coefficients

    @property
    def beta(self) -> NDArray[np.floating[Any]]:
        """Zero-indexed view (b1, b2, ...)."""
        return self._result.params.coefficients[1:]

    @property
    def intercept(self) -> float:
        return float(self._result.params.coefficients[1])

    @property
    def fitted_values(self) -> NDArray[np.floating[Any]]:
        return self._result.params.fitted_values

    @property
    def residuals(self) -> NDArray[np.floating[Any]]:
        return self._result.params.residuals

    @property
    def rss(self) -> float:
        return self._result.params.statistics.rss

    @property
    def tss(self) -> float:
        return self._result.params.statistics.tss

    @property
    def r_squared(self) -> float:
        """r² in the linearized space. Raises DegenerateVarianceError if undefined."""
        return self._result.params.r_squared

    @property
    def sigma2(self) -> float:
        """Residual variance SS_res / (n - p) in the linearized space."""
        return self._result.params.sigma2

    @property
    def df_residual(self) -> int:
        return self._result.params.df_residual

    @property
    def n_parameters(self) -> int:
        return self._result.params.statistics.n_parameters

    @property
    def function(self) -> PredictionFunction:
        if self._function is None:
            self._function = PredictionFunction.from_indexed(self.model, self.coefficients)
        return self._function

    def predict(self, x: float | ArrayLike) -> Any:
        """Evaluate the fitted curve in the original space."""
        return self.function(x)

    def equation(self, decimals: int = EQUATION_DECIMALS) -> str:
        return format_equation(self.model, self.coefficients, decimals=decimals)

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    def summary(self) -> str:
        """Plain-text report of the fit."""
        try:
            r2 = f"{self.r_squared:.6f}"
        except DegenerateVarianceError:
            r2 = "undefined"
        lines = [
            "Trend Line Fit",
            "=" * 60,
            f"Model: {self.model.name}",
            f"Observations: {self._design.n}",
            f"Parameters: {self.n_parameters}",
            f"Equation: {self.equation()}",
            f"R-squared: {r2}",
            f"Sigma-squared: {self.sigma2:.6f} on {self.df_residual} DF",
        ]
        if self.fixed_intercept is not None:
            lines.append(f"Fixed intercept: {self.fixed_intercept:g}")
        lines.append("")
        lines.append("Coefficients:")
        lines.append("-" * 60)
        for i, coef in enumerate(self.beta, start=1):
            lines.append(f"  b[{i}]: {coef:14.6f}")
        lines.append("-" * 60)
        lines.append(f"Backend: {self.backend_name}")
        if self.timing:
            lines.append(f"Time: {self.timing.get('total_seconds', 0):.4f}s")
        for warning in self.warnings:
            lines.append(f"Note: {warning}")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"TrendSolution(model={self.model.name}, n={self._design.n}, "
            f"p={self.n_parameters}, coefficients={self.beta.tolist()})"
        )


@dataclass(frozen=True, eq=False)
class TrendLine:
    """
    A fitted trend line ready for the renderer.

    Exactly one of two shapes:
        - points set: moving averages and straight lines, drawn as given
        - points None: curves, drawn by sampling `function` over [start, end]

    Straight lines (polynomials of degree <= 1) carry both their two
    endpoints and their function.

    Attributes:
        spec: The request this line was produced for
        title: Legend entry
        start, end: Interval the line covers
        points: Fixed polyline, or None for sampled curves
        function: Fitted curve, or None for moving averages
        equation_text: Rendered equation, or None for moving averages
        r_squared: r², or None when not available
        sigma2: σ², or None when not available
        label_text: Text for the on-chart label (may be empty)
        solution: The regression solution, or None for moving averages
    """
    spec: 'TrendLineSpec'
    title: str
    start: float
    end: float
    points: tuple[tuple[float, float], ...] | None
    function: PredictionFunction | None
    equation_text: str | None
    r_squared: float | None
    sigma2: float | None
    label_text: str
    solution: TrendSolution | None = None

    @property
    def is_sampled(self) -> bool:
        return self.points is None

    def segments(
        self,
        *,
        config: SamplingConfig = DEFAULT_SAMPLING,
        cancel_event: threading.Event | None = None,
    ) -> list[NDArray[np.floating[Any]]]:
        """
        Renderable polylines, each an (m, 2) array of (x, y) rows.

        Fixed points form a single polyline; sampled curves are split at
        discontinuities.
        """
        if self.points is not None:
            return [np.asarray(self.points, dtype=np.float64).reshape(-1, 2)]
        sampler = sample_function(
            self.function, self.start, self.end, config=config, cancel_event=cancel_event,
        )
        return sampler.segments()
