"""
CPU reference backend for trend-line regression.

Solves the linearized least squares problem through the normal equations
with partial-pivoting Gaussian elimination, then computes fit statistics
in the linearized space.
"""

from typing import Any
import logging
import numpy as np

from pytrendline.core.compute.linalg.elimination import solve_normal_equations
from pytrendline.core.compute.timing import Timer
from pytrendline.core.compute.tolerances import PIVOT_RTOL
from pytrendline.core.result import Result
from pytrendline.trendline.design import TrendDesign
from pytrendline.trendline.models import Exponential, Power
from pytrendline.trendline.solution import RegressionParams
from pytrendline.trendline.statistics import FitStatistics

logger = logging.getLogger(__name__)


class CPUNormalEquationsBackend:
    """
    CPU backend using the normal equations.

    Implements the Backend protocol for TrendDesign -> RegressionParams.
    Stateless, so a single instance can serve every worker thread.
    """

    def __init__(self, rtol: float = PIVOT_RTOL):
        self._rtol = rtol

    @property
    def name(self) -> str:
        return 'cpu_normal_equations'

    def solve(self, design: TrendDesign) -> Result[RegressionParams]:
        """
        Fit the design.

        Algorithm:
            1. Solve X'X b = X'(t - b0) for the free coefficients
            2. Prepend the intercept (estimated or fixed) in slot 1
            3. Residuals and sums of squares against the linearized target t

        Raises:
            InsufficientDataError: If n <= p
            SingularSystemError: If X'X is numerically singular
        """
        timer = Timer()
        timer.start()

        with timer.section('solve'):
            beta = solve_normal_equations(design.X, design.y, rtol=self._rtol)

        with timer.section('residuals'):
            fitted_values = design.X @ beta + design.offset
            residuals = design.target - fitted_values

        with timer.section('statistics'):
            # σ² counts a single parameter whenever the intercept is pinned
            n_parameters = 1 if design.fixed_intercept is not None else design.p
            statistics = FitStatistics.from_fit(design.target, fitted_values, n_parameters)

        timer.stop()

        coefficients = np.empty(design.model.n_coefficients + 1, dtype=np.float64)
        coefficients[0] = np.nan
        if design.fixed_intercept is None:
            coefficients[1:] = beta
        else:
            coefficients[1] = design.fixed_intercept
            coefficients[2:] = beta
        coefficients.setflags(write=False)

        params = RegressionParams(
            coefficients=coefficients,
            fitted_values=fitted_values,
            residuals=residuals,
            statistics=statistics,
        )

        info: dict[str, Any] = {
            'method': 'normal_equations',
            'model': design.model.name,
            'n_parameters': n_parameters,
            'fixed_intercept': design.fixed_intercept,
        }

        warnings: tuple[str, ...] = ()
        if isinstance(design.model, (Exponential, Power)):
            warnings = ("r_squared and sigma2 describe the fit of ln(y), not y",)

        logger.debug(
            "fitted %s trend line: n=%d p=%d coefficients=%s",
            design.model.name, design.n, design.p, coefficients[1:].tolist(),
        )

        return Result(
            params=params,
            info=info,
            timing=timer.result(),
            backend_name=self.name,
            warnings=warnings,
        )
