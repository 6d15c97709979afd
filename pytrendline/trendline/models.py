"""
Trend-line model specifications.

A trend model is one of a closed set of frozen variants:

    Polynomial(degree)    y = b1 + b2 x + ... + b(d+1) x^d
    Exponential()         y = a e^(b x)
    Logarithmic()         y = b1 + a ln x
    Power()               y = a x^b
    MovingAverage(window) mean of the last `window` samples

Every consumer (design construction, prediction, formatting) dispatches
on the variant with isinstance checks that end in a TypeError, so a new
variant cannot be added without updating each of them.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Union

from pytrendline.core.exceptions import ValidationError
from pytrendline.core.validation import check_non_negative_int


@dataclass(frozen=True)
class Polynomial:
    """Polynomial of the given degree (degree 1 is a straight line)."""
    degree: int = 1

    name: ClassVar[str] = 'polynomial'

    def __post_init__(self):
        check_non_negative_int(self.degree, 'degree')

    @property
    def n_coefficients(self) -> int:
        return self.degree + 1


@dataclass(frozen=True)
class Exponential:
    """Exponential y = a e^(bx), fitted on ln y."""
    name: ClassVar[str] = 'exponential'
    n_coefficients: ClassVar[int] = 2


@dataclass(frozen=True)
class Logarithmic:
    """Logarithmic y = b1 + a ln x, fitted on ln x."""
    name: ClassVar[str] = 'logarithmic'
    n_coefficients: ClassVar[int] = 2


@dataclass(frozen=True)
class Power:
    """Power law y = a x^b, fitted on ln x and ln y."""
    name: ClassVar[str] = 'power'
    n_coefficients: ClassVar[int] = 2


@dataclass(frozen=True)
class MovingAverage:
    """Trailing moving average over `window` samples. Not a regression."""
    window: int = 2

    name: ClassVar[str] = 'moving_average'

    def __post_init__(self):
        check_non_negative_int(self.window, 'window')
        if self.window < 1:
            raise ValidationError(f"window: must be >= 1, got {self.window}")


RegressionModel = Union[Polynomial, Exponential, Logarithmic, Power]
TrendModel = Union[Polynomial, Exponential, Logarithmic, Power, MovingAverage]

REGRESSION_MODELS = (Polynomial, Exponential, Logarithmic, Power)
TREND_MODELS = REGRESSION_MODELS + (MovingAverage,)


class Style(Enum):
    """How a series is drawn."""
    LINE = 'line'
    MARKER = 'marker'
    LINE_AND_MARKER = 'line_and_marker'


# =====================================================================
# Model name → instance mapping
# =====================================================================

_MODEL_FACTORIES = {
    'linear': lambda: Polynomial(1),
    'quadratic': lambda: Polynomial(2),
    'cubic': lambda: Polynomial(3),
    'polynomial': lambda: Polynomial(1),
    'exponential': Exponential,
    'logarithmic': Logarithmic,
    'log': Logarithmic,
    'power': Power,
    'moving_average': MovingAverage,
}


def resolve_model(model: str | TrendModel) -> TrendModel:
    """
    Resolve a model argument to a model instance.

    Accepts a model instance or one of the names 'linear', 'quadratic',
    'cubic', 'polynomial', 'exponential', 'logarithmic' ('log'), 'power',
    'moving_average'.

    Raises:
        ValidationError: For unknown names
        TypeError: For anything that is neither a name nor a model
    """
    if isinstance(model, TREND_MODELS):
        return model
    if isinstance(model, str):
        factory = _MODEL_FACTORIES.get(model.lower())
        if factory is None:
            valid = ', '.join(sorted(_MODEL_FACTORIES))
            raise ValidationError(f"Unknown trend model: {model!r}. Valid models: {valid}")
        return factory()
    raise TypeError(f"model must be str or a trend model, got {type(model).__name__}")


def supports_fixed_intercept(model: TrendModel) -> bool:
    """True if the model has an intercept term that can be pinned."""
    if isinstance(model, (Polynomial, Exponential, Power)):
        return True
    if isinstance(model, (Logarithmic, MovingAverage)):
        return False
    raise TypeError(f"Unknown trend model: {model!r}")
