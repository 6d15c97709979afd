"""
Trend-line designs.

Series holds the raw samples. TrendLineSpec says which model to fit and
how to present it. TrendDesign is the linearized least squares problem
built from the two: it knows it is building a regression, the Series
doesn't.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, TYPE_CHECKING
import math
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pytrendline.core.exceptions import ValidationError
from pytrendline.core.validation import (
    check_1d,
    check_array,
    check_consistent_length,
    check_finite,
    check_min_samples,
)
from pytrendline.trendline.models import (
    Exponential,
    Logarithmic,
    Polynomial,
    Power,
    RegressionModel,
    REGRESSION_MODELS,
    Style,
    TrendModel,
    resolve_model,
    supports_fixed_intercept,
)
from pytrendline.trendline.transforms import check_domain, design_matrix, linearize_target

if TYPE_CHECKING:
    import pandas as pd


def _frozen(array: NDArray[np.floating[Any]]) -> NDArray[np.floating[Any]]:
    array = np.array(array, dtype=np.float64, copy=True)
    array.setflags(write=False)
    return array


@dataclass(frozen=True, eq=False)
class Series:
    """
    Paired x/y samples. Immutable after construction.

    Construction:
        Series.from_arrays(x, y, title='Measurements')
        Series.from_dataframe(df, x='time', y='value')
    """
    _x: NDArray[np.floating[Any]]
    _y: NDArray[np.floating[Any]]
    _title: str | None = None

    @classmethod
    def from_arrays(cls, x: ArrayLike, y: ArrayLike, *, title: str | None = None) -> Series:
        """
        Build a Series from two array-likes.

        Raises:
            ValidationError: Non-numeric, non-finite or empty input
            DimensionError: x and y are not 1D or have different lengths
        """
        x_arr = check_array(x, 'x')
        y_arr = check_array(y, 'y')
        check_1d(x_arr, 'x')
        check_1d(y_arr, 'y')
        check_consistent_length(x_arr, y_arr, names=('x', 'y'))
        check_min_samples(x_arr, 1, 'x')
        check_finite(x_arr, 'x')
        check_finite(y_arr, 'y')
        return cls(_x=_frozen(x_arr), _y=_frozen(y_arr), _title=title)

    @classmethod
    def from_dataframe(
        cls,
        df: 'pd.DataFrame',
        *,
        x: str,
        y: str,
        title: str | None = None,
    ) -> Series:
        """Build a Series from two DataFrame columns. Title defaults to the y column."""
        for column in (x, y):
            if column not in df.columns:
                raise ValidationError(
                    f"DataFrame has no column {column!r}. Available: {list(df.columns)}"
                )
        return cls.from_arrays(
            df[x].to_numpy(dtype=np.float64),
            df[y].to_numpy(dtype=np.float64),
            title=title if title is not None else str(y),
        )

    # === Properties ===

    @property
    def x(self) -> NDArray[np.floating[Any]]:
        return self._x

    @property
    def y(self) -> NDArray[np.floating[Any]]:
        return self._y

    @property
    def title(self) -> str | None:
        return self._title

    @property
    def n(self) -> int:
        """Number of samples."""
        return int(self._x.shape[0])

    @property
    def x_range(self) -> tuple[float, float]:
        """Smallest and largest x."""
        return float(np.min(self._x)), float(np.max(self._x))

    def __len__(self) -> int:
        return self.n

    def points(self) -> tuple[tuple[float, float], ...]:
        return tuple(zip(self._x.tolist(), self._y.tolist()))


@dataclass(frozen=True)
class TrendLineSpec:
    """
    What trend line to draw for a series and how to label it.

    Attributes:
        model: Trend model instance or name ('linear', 'exponential', ...)
        fixed_intercept: Pin the intercept (polynomial, exponential, power)
        range_override: (start, end) the curve should cover; only ever
            widens the range spanned by the data
        show_equation: Include the fitted equation in the label
        show_r2: Include r² in the label
        show_sigma2: Include σ² in the label
        title: Legend entry; defaults to "Trend line (<series title>)"
        style: How the renderer should draw the curve
        color: Renderer color hint, passed through untouched
    """
    model: TrendModel = field(default_factory=Polynomial)
    fixed_intercept: float | None = None
    range_override: tuple[float, float] | None = None
    show_equation: bool = True
    show_r2: bool = False
    show_sigma2: bool = False
    title: str | None = None
    style: Style = Style.LINE
    color: str | None = None

    def __post_init__(self):
        model = resolve_model(self.model)
        object.__setattr__(self, 'model', model)

        if self.fixed_intercept is not None:
            if not supports_fixed_intercept(model):
                raise ValidationError(
                    f"{model.name} trend lines have no intercept that can be fixed"
                )
            b0 = float(self.fixed_intercept)
            if not math.isfinite(b0):
                raise ValidationError(f"fixed_intercept: must be finite, got {b0}")
            object.__setattr__(self, 'fixed_intercept', b0)

        if self.range_override is not None:
            if len(self.range_override) != 2:
                raise ValidationError(
                    f"range_override: expected (start, end), got {self.range_override!r}"
                )
            start, end = (float(v) for v in self.range_override)
            if not (math.isfinite(start) and math.isfinite(end)):
                raise ValidationError(
                    f"range_override: bounds must be finite, got ({start}, {end})"
                )
            if start > end:
                raise ValidationError(
                    f"range_override: start {start} is greater than end {end}"
                )
            object.__setattr__(self, 'range_override', (start, end))

        if not isinstance(self.style, Style):
            try:
                style = Style(self.style)
            except ValueError as e:
                raise ValidationError(
                    f"style: expected one of {[s.value for s in Style]}, got {self.style!r}"
                ) from e
            object.__setattr__(self, 'style', style)

    def with_options(self, **changes: Any) -> TrendLineSpec:
        """Copy of this spec with some fields replaced (validated again)."""
        return replace(self, **changes)

    def title_for(self, series: Series) -> str:
        """Legend entry for the trend line of `series`."""
        if self.title is not None:
            return self.title
        if series.title is None:
            return "Trend line"
        return f"Trend line ({series.title})"

    def sample_range(self, series: Series) -> tuple[float, float]:
        """Interval the curve covers: data range widened by range_override."""
        start, end = series.x_range
        if self.range_override is not None:
            start = min(start, self.range_override[0])
            end = max(end, self.range_override[1])
        return start, end


LINEAR = TrendLineSpec(Polynomial(1))
QUADRATIC = TrendLineSpec(Polynomial(2))
EXPONENTIAL = TrendLineSpec(Exponential())
LOGARITHMIC = TrendLineSpec(Logarithmic())
POWER = TrendLineSpec(Power())


@dataclass(frozen=True, eq=False)
class TrendDesign:
    """
    Linearized least squares problem for one regression trend line.

    With a fixed intercept b0 the constant column is dropped from X and b0
    is subtracted from the linearized target, so the solver only estimates
    the remaining coefficients.

    Construction:
        TrendDesign.build(series, Polynomial(2))
        TrendDesign.build(series, Exponential(), fixed_intercept=0.0)
    """
    _series: Series
    _model: RegressionModel
    _X: NDArray[np.floating[Any]]
    _target: NDArray[np.floating[Any]]
    _fixed_intercept: float | None = None

    @classmethod
    def build(
        cls,
        series: Series,
        model: str | RegressionModel,
        *,
        fixed_intercept: float | None = None,
    ) -> TrendDesign:
        """
        Build the design, checking the model's domain.

        Raises:
            ValidationError: Moving average model or fixed intercept on a
                model without one
            ModelDomainError: Samples outside the model's domain
        """
        model = resolve_model(model)
        if not isinstance(model, REGRESSION_MODELS):
            raise ValidationError(
                f"{model.name} is not a regression model; use moving_average()"
            )
        if fixed_intercept is not None and not supports_fixed_intercept(model):
            raise ValidationError(
                f"{model.name} trend lines have no intercept that can be fixed"
            )

        check_domain(model, series.x, series.y)
        target = linearize_target(model, series.y)
        X = design_matrix(model, series.x, intercept=fixed_intercept is None)
        X.setflags(write=False)
        target.setflags(write=False)

        return cls(
            _series=series,
            _model=model,
            _X=X,
            _target=target,
            _fixed_intercept=None if fixed_intercept is None else float(fixed_intercept),
        )

    # === Properties ===

    @property
    def series(self) -> Series:
        return self._series

    @property
    def model(self) -> RegressionModel:
        return self._model

    @property
    def fixed_intercept(self) -> float | None:
        return self._fixed_intercept

    @property
    def X(self) -> NDArray[np.floating[Any]]:
        """Design matrix actually solved (n x p)."""
        return self._X

    @property
    def target(self) -> NDArray[np.floating[Any]]:
        """Linearized target, before any fixed intercept is subtracted."""
        return self._target

    @property
    def offset(self) -> float:
        return 0.0 if self._fixed_intercept is None else self._fixed_intercept

    @property
    def y(self) -> NDArray[np.floating[Any]]:
        """Target the solver sees: linearized target minus the fixed intercept."""
        return self._target - self.offset

    @property
    def n(self) -> int:
        """Number of observations."""
        return int(self._X.shape[0])

    @property
    def p(self) -> int:
        """Number of estimated parameters."""
        return int(self._X.shape[1])
