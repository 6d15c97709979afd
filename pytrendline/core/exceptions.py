"""
Exception hierarchy for PyTrendline.

All exceptions inherit from PyTrendlineError to allow catching any
library-specific error. Domain-specific exceptions should inherit from
the appropriate base class here.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Never catch and re-raise with less information

Every error is local to a single fit request. Chart orchestration skips
the offending trend line and keeps plotting its siblings.
"""


class PyTrendlineError(Exception):
    """Base exception for all PyTrendline errors."""
    pass


class ValidationError(PyTrendlineError):
    """
    Input validation failed.

    Raised when user-provided inputs fail validation checks: negative
    polynomial degree, moving-average window below one, a fixed intercept
    on a model without an intercept term, non-numeric data.
    """
    pass


class DimensionError(ValidationError):
    """
    Array dimensions are incorrect or inconsistent.

    Raised when x and y have different lengths or when an array does not
    have the expected number of dimensions.
    """
    pass


class ModelDomainError(ValidationError):
    """
    Samples fall outside the domain a model can be linearized on.

    Exponential and power fits take the logarithm of y, logarithmic and
    power fits take the logarithm of x, so those values must be strictly
    positive. Callers are expected to skip the trend line and continue
    plotting the base series.

    Attributes:
        model: Name of the model that rejected the data
        index: Index of the first violating sample
        value: The violating value
        variable: Which coordinate was violated ('x' or 'y')
    """

    def __init__(
        self,
        message: str,
        model: str | None = None,
        index: int | None = None,
        value: float | None = None,
        variable: str | None = None,
    ):
        super().__init__(message)
        self.model = model
        self.index = index
        self.value = value
        self.variable = variable


class NumericalError(PyTrendlineError):
    """
    Numerical computation failed.

    Base class for errors arising from numerical issues during computation.
    Failures are deterministic; retrying with the same inputs changes nothing.
    """
    pass


class InsufficientDataError(NumericalError):
    """
    Not enough samples to estimate the requested parameters.

    Least squares needs strictly more samples than parameters.

    Attributes:
        n_samples: Number of samples supplied
        n_parameters: Number of parameters to estimate
    """

    def __init__(
        self,
        message: str,
        n_samples: int | None = None,
        n_parameters: int | None = None,
    ):
        super().__init__(message)
        self.n_samples = n_samples
        self.n_parameters = n_parameters


class SingularSystemError(NumericalError):
    """
    Linear system is singular or nearly singular.

    Raised by Gaussian elimination when a pivot falls below the relative
    tolerance, typically because two design columns are identical or the
    x values do not vary enough for the requested degree.

    Attributes:
        matrix_name: Name/description of the problematic matrix
        pivot_index: Elimination step at which the pivot collapsed
        pivot: Magnitude of the offending pivot
        tolerance: Threshold the pivot was compared against
    """

    def __init__(
        self,
        message: str,
        matrix_name: str | None = None,
        pivot_index: int | None = None,
        pivot: float | None = None,
        tolerance: float | None = None,
    ):
        super().__init__(message)
        self.matrix_name = matrix_name
        self.pivot_index = pivot_index
        self.pivot = pivot
        self.tolerance = tolerance


class DegenerateVarianceError(NumericalError):
    """
    Coefficient of determination is undefined.

    Raised when the target has zero total variance but the fit leaves a
    non-zero residual, which can only happen with a fixed intercept.

    Attributes:
        rss: Residual sum of squares
        tss: Total sum of squares
    """

    def __init__(
        self,
        message: str,
        rss: float | None = None,
        tss: float | None = None,
    ):
        super().__init__(message)
        self.rss = rss
        self.tss = tss
