"""
Numerical tolerances and sampling defaults.

This module is the single place where the engine's magic numbers live.
Every value can be overridden by keyword arguments at the public API.
"""

from dataclasses import dataclass

from pytrendline.core.exceptions import ValidationError


# Gaussian elimination: a pivot below PIVOT_RTOL times the largest entry
# of the (equilibrated) normal matrix is treated as singular.
PIVOT_RTOL = 1e-10

# Sums of squares below VARIANCE_RTOL times the target's squared scale
# are treated as exactly zero when computing R².
VARIANCE_RTOL = 1e-24

# Number of steps the function sampler divides [start, end] into.
DEFAULT_SAMPLE_STEPS = 1400

# Largest vertical jump between consecutive samples before the sampler
# treats the transition as a vertical asymptote.
JUMP_THRESHOLD = 0.1

# Decimal places shown in equation and statistics labels.
EQUATION_DECIMALS = 4


@dataclass(frozen=True)
class SamplingConfig:
    """
    Sampler settings.

    Attributes:
        steps: Number of intervals between start and end
        jump_threshold: Maximum |f(x) - f(previous x)| accepted
    """
    steps: int = DEFAULT_SAMPLE_STEPS
    jump_threshold: float = JUMP_THRESHOLD

    def __post_init__(self):
        if self.steps < 1:
            raise ValidationError(f"steps must be >= 1, got {self.steps}")
        if not self.jump_threshold > 0:
            raise ValidationError(
                f"jump_threshold must be > 0, got {self.jump_threshold}"
            )


DEFAULT_SAMPLING = SamplingConfig()
