"""
Fitted curves in the original (de-linearized) space.

    Polynomial    f(x) = Σ b_i x^(i-1)
    Exponential   f(x) = e^b1 · e^(b2 x)
    Logarithmic   f(x) = b2 ln x + b1
    Power         f(x) = e^b1 · x^b2

Scalar evaluation uses the math module, so points outside a model's
domain raise ValueError or an ArithmeticError instead of returning NaN.
Array evaluation is vectorized and yields NaN/inf there instead.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
import math
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pytrendline.core.exceptions import ValidationError
from pytrendline.trendline.models import (
    Exponential,
    Logarithmic,
    Polynomial,
    Power,
    RegressionModel,
    REGRESSION_MODELS,
)


@dataclass(frozen=True)
class PredictionFunction:
    """
    Pure callable reproducing a fitted trend line.

    Holds no mutable state, so one instance can be evaluated from any
    number of threads.

    Attributes:
        model: The fitted model variant
        coefficients: (b1, b2, ...) with b1 the intercept
    """
    model: RegressionModel
    coefficients: tuple[float, ...]

    def __post_init__(self):
        if not isinstance(self.model, REGRESSION_MODELS):
            raise ValidationError(f"{self.model!r} has no prediction function")
        object.__setattr__(self, 'coefficients', tuple(float(b) for b in self.coefficients))
        if len(self.coefficients) != self.model.n_coefficients:
            raise ValidationError(
                f"{self.model.name} needs {self.model.n_coefficients} coefficients, "
                f"got {len(self.coefficients)}"
            )

    @classmethod
    def from_indexed(
        cls,
        model: RegressionModel,
        coefficients: NDArray[np.floating[Any]],
    ) -> PredictionFunction:
        """Build from a 1-indexed coefficient array (slot 0 unused)."""
        return cls(model=model, coefficients=tuple(coefficients[1:]))

    @property
    def is_straight_line(self) -> bool:
        """True for polynomials of degree 0 or 1."""
        return isinstance(self.model, Polynomial) and self.model.degree <= 1

    def __call__(self, x: float | ArrayLike) -> Any:
        if np.ndim(x) == 0:
            return self._scalar(float(x))
        return self.evaluate(x)

    def _scalar(self, x: float) -> float:
        b = self.coefficients
        model = self.model
        if isinstance(model, Polynomial):
            result = 0.0
            for coefficient in reversed(b):
                result = result * x + coefficient
            return result
        if isinstance(model, Exponential):
            return math.exp(b[0] + b[1] * x)
        if isinstance(model, Logarithmic):
            return b[1] * math.log(x) + b[0]
        if isinstance(model, Power):
            return math.exp(b[0]) * math.pow(x, b[1])
        raise TypeError(f"Unknown trend model: {model!r}")

    def evaluate(self, x: ArrayLike) -> NDArray[np.floating[Any]]:
        """Vectorized evaluation; NaN or inf where the model is undefined."""
        x = np.asarray(x, dtype=np.float64)
        b = self.coefficients
        model = self.model
        with np.errstate(all='ignore'):
            if isinstance(model, Polynomial):
                return np.polyval(np.asarray(b[::-1]), x)
            if isinstance(model, Exponential):
                return np.exp(b[0] + b[1] * x)
            if isinstance(model, Logarithmic):
                return b[1] * np.log(x) + b[0]
            if isinstance(model, Power):
                return np.exp(b[0]) * np.power(x, b[1])
        raise TypeError(f"Unknown trend model: {model!r}")
