"""
Core infrastructure for PyTrendline.

This module provides shared abstractions, utilities, and numeric
infrastructure used by the trend-line engine and the chart layer.

Key components:
    protocols: Backend protocol
    result: Generic Result[P] envelope
    exceptions: Exception hierarchy
    validation: Input validators
    compute: Timing, tolerances, linear algebra kernels
"""

from pytrendline.core.protocols import Backend
from pytrendline.core.result import Result
from pytrendline.core.exceptions import (
    PyTrendlineError,
    ValidationError,
    DimensionError,
    ModelDomainError,
    NumericalError,
    InsufficientDataError,
    SingularSystemError,
    DegenerateVarianceError,
)

__all__ = [
    # Protocols
    "Backend",
    # Result
    "Result",
    # Exceptions
    "PyTrendlineError",
    "ValidationError",
    "DimensionError",
    "ModelDomainError",
    "NumericalError",
    "InsufficientDataError",
    "SingularSystemError",
    "DegenerateVarianceError",
]
