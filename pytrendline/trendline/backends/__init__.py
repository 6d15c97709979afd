"""
Trend-line backends.

Available backends:
    CPUNormalEquationsBackend: Normal equations solved by Gaussian elimination
"""

from pytrendline.trendline.backends.cpu import CPUNormalEquationsBackend

__all__ = [
    "CPUNormalEquationsBackend",
]
