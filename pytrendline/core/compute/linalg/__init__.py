"""
Linear algebra kernels shared by trend-line backends.
"""

from pytrendline.core.compute.linalg.elimination import gauss_solve, solve_normal_equations

__all__ = [
    "gauss_solve",
    "solve_normal_equations",
]
