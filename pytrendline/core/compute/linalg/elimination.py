"""
Least squares via the normal equations.

Solves min_b ||Xb - y||² by forming X'X b = X'y and running Gaussian
elimination with partial pivoting. Near-singular systems are reported
with SingularSystemError instead of being silently regularized.

The normal matrix is symmetrically equilibrated (unit diagonal) before
elimination so the pivot tolerance is relative to a well-defined scale
regardless of how large the x values or their powers are.
"""

from typing import Any
import numpy as np
from numpy.typing import NDArray

from pytrendline.core.compute.tolerances import PIVOT_RTOL
from pytrendline.core.exceptions import InsufficientDataError, SingularSystemError
from pytrendline.core.validation import check_1d, check_2d, check_consistent_length


def gauss_solve(
    A: NDArray[np.floating[Any]],
    b: NDArray[np.floating[Any]],
    *,
    rtol: float = PIVOT_RTOL,
    matrix_name: str = 'A',
) -> NDArray[np.floating[Any]]:
    """
    Solve the square system A x = b by elimination with partial pivoting.

    Forward elimination reduces A to upper triangular form, swapping in
    the row with the largest remaining entry of each column. The
    triangular system is then solved by back substitution.

    Args:
        A: Square matrix (p x p). Not modified.
        b: Right-hand side (p,). Not modified.
        rtol: Pivots at or below rtol * max|A| are treated as zero
        matrix_name: Name used in error messages

    Returns:
        Solution vector x (p,)

    Raises:
        SingularSystemError: If a pivot collapses below the tolerance
    """
    from scipy.linalg import solve_triangular

    U = np.array(A, dtype=np.float64, copy=True)
    c = np.array(b, dtype=np.float64, copy=True)
    p = U.shape[0]

    if U.shape != (p, p):
        raise ValueError(f"{matrix_name} must be square, got shape {U.shape}")
    if p == 0:
        return np.empty(0, dtype=np.float64)

    scale = float(np.max(np.abs(U)))
    tol = rtol * scale

    for k in range(p):
        pivot_row = k + int(np.argmax(np.abs(U[k:, k])))
        pivot = abs(U[pivot_row, k])
        if scale == 0.0 or pivot <= tol:
            raise SingularSystemError(
                f"{matrix_name} is numerically singular: pivot {pivot:.3e} at "
                f"step {k} is below tolerance {tol:.3e}",
                matrix_name=matrix_name,
                pivot_index=k,
                pivot=pivot,
                tolerance=tol,
            )

        if pivot_row != k:
            U[[k, pivot_row]] = U[[pivot_row, k]]
            c[[k, pivot_row]] = c[[pivot_row, k]]

        factors = U[k + 1:, k] / U[k, k]
        U[k + 1:, k:] -= np.outer(factors, U[k, k:])
        c[k + 1:] -= factors * c[k]

    return solve_triangular(U, c, lower=False)


def solve_normal_equations(
    X: NDArray[np.floating[Any]],
    y: NDArray[np.floating[Any]],
    *,
    rtol: float = PIVOT_RTOL,
) -> NDArray[np.floating[Any]]:
    """
    Least squares coefficients from the normal equations.

    Algorithm:
        1. A = X'X, c = X'y
        2. Equilibrate: D = diag(A)^(-1/2), solve (DAD) z = Dc
        3. b = Dz

    Args:
        X: Design matrix (n x p)
        y: Target vector (n,)
        rtol: Relative pivot tolerance passed to gauss_solve

    Returns:
        Coefficient vector b (p,), b[j] multiplies column j of X

    Raises:
        InsufficientDataError: If n <= p
        SingularSystemError: If X'X is numerically singular
    """
    check_2d(X, 'X')
    check_1d(y, 'y')
    check_consistent_length(X, y, names=('X', 'y'))

    n, p = X.shape
    if n <= p:
        raise InsufficientDataError(
            f"Least squares needs more samples than parameters: "
            f"got {n} samples for {p} parameters",
            n_samples=n,
            n_parameters=p,
        )
    if p == 0:
        return np.empty(0, dtype=np.float64)

    A = X.T @ X
    c = X.T @ y

    diag = np.sqrt(np.diag(A))
    zero_cols = np.flatnonzero(diag == 0)
    if len(zero_cols) > 0:
        raise SingularSystemError(
            f"X'X is singular: design columns {zero_cols.tolist()} are identically zero",
            matrix_name="X'X",
            pivot_index=int(zero_cols[0]),
            pivot=0.0,
            tolerance=0.0,
        )

    D = 1.0 / diag
    z = gauss_solve(A * np.outer(D, D), c * D, rtol=rtol, matrix_name="X'X")
    return z * D
