"""
Goodness-of-fit statistics.

All statistics are computed from residuals in the space the regression
was solved in. For exponential and power trend lines that is ln(y), so
r² and σ² describe how well ln(y) is explained, not y itself.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
import numpy as np
from numpy.typing import NDArray

from pytrendline.core.compute.tolerances import VARIANCE_RTOL
from pytrendline.core.exceptions import DegenerateVarianceError, InsufficientDataError


def sums_of_squares(
    target: NDArray[np.floating[Any]],
    fitted: NDArray[np.floating[Any]],
) -> tuple[float, float]:
    """
    Residual and total sums of squares.

    Returns:
        (SS_res, SS_tot) with SS_res = Σ(y - ŷ)², SS_tot = Σ(y - ȳ)²
    """
    residuals = target - fitted
    rss = float(residuals @ residuals)
    centered = target - np.mean(target)
    tss = float(centered @ centered)
    return rss, tss


def r_squared(rss: float, tss: float, *, scale: float = 0.0) -> float:
    """
    Coefficient of determination 1 - SS_res / SS_tot.

    Sums of squares at or below VARIANCE_RTOL * scale count as zero. With
    both sums zero the fit is perfect and r² = 1.

    Args:
        rss: Residual sum of squares
        tss: Total sum of squares
        scale: Σy² of the target, sets the zero threshold

    Raises:
        DegenerateVarianceError: If SS_tot is zero but SS_res is not
    """
    zero = VARIANCE_RTOL * scale
    if tss <= zero:
        if rss <= zero:
            return 1.0
        raise DegenerateVarianceError(
            f"r² is undefined: the target has no variance (SS_tot = {tss:.3e}) "
            f"but the fit leaves SS_res = {rss:.3e}",
            rss=rss,
            tss=tss,
        )
    return 1.0 - rss / tss


def residual_variance(rss: float, n: int, n_parameters: int) -> float:
    """σ² = SS_res / (n - p)."""
    df = n - n_parameters
    if df <= 0:
        raise InsufficientDataError(
            f"σ² needs more samples than parameters: n={n}, p={n_parameters}",
            n_samples=n,
            n_parameters=n_parameters,
        )
    return rss / df


@dataclass(frozen=True)
class FitStatistics:
    """
    Sums of squares of one fit, with r² and σ² derived on demand.

    Attributes:
        rss: Residual sum of squares
        tss: Total sum of squares about the mean
        scale: Σy² of the target
        n: Number of observations
        n_parameters: Parameter count p in the σ² denominator n - p
    """
    rss: float
    tss: float
    scale: float
    n: int
    n_parameters: int

    @classmethod
    def from_fit(
        cls,
        target: NDArray[np.floating[Any]],
        fitted: NDArray[np.floating[Any]],
        n_parameters: int,
    ) -> FitStatistics:
        rss, tss = sums_of_squares(target, fitted)
        return cls(
            rss=rss,
            tss=tss,
            scale=float(target @ target),
            n=int(target.shape[0]),
            n_parameters=n_parameters,
        )

    @property
    def df_residual(self) -> int:
        return self.n - self.n_parameters

    @property
    def r_squared(self) -> float:
        return r_squared(self.rss, self.tss, scale=self.scale)

    @property
    def sigma2(self) -> float:
        return residual_variance(self.rss, self.n, self.n_parameters)
