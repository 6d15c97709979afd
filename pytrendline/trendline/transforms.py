"""
Model linearization.

Each regression model is turned into an ordinary least squares problem:

    Model         Domain          Target   Columns besides the constant
    Polynomial(d) none            y        x, x², ..., x^d
    Exponential   y > 0           ln y     x
    Logarithmic   x > 0           y        ln x
    Power         x > 0, y > 0    ln y     ln x

Moving averages are not regressions and are rejected here.
"""

from __future__ import annotations

from typing import Any
import numpy as np
from numpy.typing import NDArray

from pytrendline.core.exceptions import ModelDomainError, ValidationError
from pytrendline.core.validation import first_non_positive
from pytrendline.trendline.models import (
    Exponential,
    Logarithmic,
    MovingAverage,
    Polynomial,
    Power,
    TrendModel,
)


def _require_positive(
    model: TrendModel,
    *columns: tuple[str, NDArray[np.floating[Any]]],
) -> None:
    """Raise for the lowest sample index that is not > 0 in any column."""
    first: tuple[int, str, float] | None = None
    for variable, values in columns:
        index = first_non_positive(values)
        if index is not None and (first is None or index < first[0]):
            first = (index, variable, float(values[index]))
    if first is not None:
        index, variable, value = first
        raise ModelDomainError(
            f"{model.name} trend line requires {variable} > 0 for every sample; "
            f"{variable}[{index}] = {value:g}",
            model=model.name,
            index=index,
            value=value,
            variable=variable,
        )


def check_domain(
    model: TrendModel,
    x: NDArray[np.floating[Any]],
    y: NDArray[np.floating[Any]],
) -> None:
    """
    Verify the samples lie in the model's domain.

    Raises:
        ModelDomainError: Naming the model and the first violating index
    """
    if isinstance(model, Polynomial):
        return
    if isinstance(model, Exponential):
        _require_positive(model, ('y', y))
        return
    if isinstance(model, Logarithmic):
        _require_positive(model, ('x', x))
        return
    if isinstance(model, Power):
        _require_positive(model, ('x', x), ('y', y))
        return
    if isinstance(model, MovingAverage):
        raise ValidationError("moving averages are not fitted by regression")
    raise TypeError(f"Unknown trend model: {model!r}")


def linearize_target(
    model: TrendModel,
    y: NDArray[np.floating[Any]],
) -> NDArray[np.floating[Any]]:
    """Regression target in the space the model is linear in."""
    if isinstance(model, (Polynomial, Logarithmic)):
        return y.copy()
    if isinstance(model, (Exponential, Power)):
        return np.log(y)
    if isinstance(model, MovingAverage):
        raise ValidationError("moving averages are not fitted by regression")
    raise TypeError(f"Unknown trend model: {model!r}")


def design_matrix(
    model: TrendModel,
    x: NDArray[np.floating[Any]],
    *,
    intercept: bool = True,
) -> NDArray[np.floating[Any]]:
    """
    Basis-function evaluations for the model.

    Args:
        model: Regression model
        x: Sample abscissae (n,)
        intercept: If False the constant column is left out

    Returns:
        Design matrix (n x p); column 0 is the constant when intercept=True
    """
    if isinstance(model, Polynomial):
        X = np.vander(x, model.degree + 1, increasing=True)
    elif isinstance(model, Exponential):
        X = np.column_stack([np.ones_like(x), x])
    elif isinstance(model, (Logarithmic, Power)):
        X = np.column_stack([np.ones_like(x), np.log(x)])
    elif isinstance(model, MovingAverage):
        raise ValidationError("moving averages are not fitted by regression")
    else:
        raise TypeError(f"Unknown trend model: {model!r}")

    X = X.astype(np.float64, copy=False)
    if not intercept:
        X = X[:, 1:]
    return X
