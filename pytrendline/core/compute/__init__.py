"""
Shared compute infrastructure for PyTrendline.

This module provides timing utilities, numerical tolerances, and linear
algebra kernels that are shared across all domain-specific backends.

IMPORTANT: This is NOT where domain-specific backends live. Those go in
{domain}/backends/. This module contains shared NUMERIC infrastructure.

Submodules:
    timing: Execution timing utilities
    tolerances: Numerical tolerances and sampling defaults
    linalg: Linear algebra kernels (normal equations, elimination)
"""

from pytrendline.core.compute.timing import Timer, timed
from pytrendline.core.compute.tolerances import SamplingConfig, DEFAULT_SAMPLING

__all__ = [
    # Timing
    "Timer",
    "timed",
    # Tolerances
    "SamplingConfig",
    "DEFAULT_SAMPLING",
]
