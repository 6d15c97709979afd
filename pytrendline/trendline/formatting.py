"""
Equation and statistics labels.

Numbers are rounded to four decimals with trailing zeros stripped. Terms
whose rounded coefficient is zero are omitted, a coefficient of 1 is left
implicit, and polynomial exponents of 2 or more are written as
superscripts:

    Polynomial    y = 2·x³ - x² + 0.5·x - 3
    Exponential   y = 3·e^{1.0986·x}
    Logarithmic   y = 2·ln(x) - 1.5
    Power         y = 3·x^{0.5}
"""

from __future__ import annotations

from typing import Any, Sequence
import math
import numpy as np
from numpy.typing import NDArray

from pytrendline.core.compute.tolerances import EQUATION_DECIMALS
from pytrendline.trendline.models import (
    Exponential,
    Logarithmic,
    MovingAverage,
    Polynomial,
    Power,
    TrendModel,
)

_SUPERSCRIPTS = str.maketrans('0123456789-', '⁰¹²³⁴⁵⁶⁷⁸⁹⁻')

MULTIPLY = '·'


def superscript(n: int) -> str:
    """Integer written with Unicode superscript digits, e.g. 12 -> '¹²'."""
    return str(int(n)).translate(_SUPERSCRIPTS)


def format_number(value: float, decimals: int = EQUATION_DECIMALS) -> str:
    """
    Round to `decimals` places and strip trailing zeros.

    Examples:
        >>> format_number(2.50000)
        '2.5'
        >>> format_number(-0.00001)
        '0'
    """
    if not math.isfinite(value):
        return str(value)
    text = f"{value:.{decimals}f}"
    if '.' in text:
        text = text.rstrip('0').rstrip('.')
    if text in ('-0', ''):
        text = '0'
    return text


def _scaled(coefficient: str, factor: str) -> str:
    """coefficient·factor with a coefficient of 1 left implicit."""
    if not factor:
        return coefficient
    if coefficient == '1':
        return factor
    return f"{coefficient}{MULTIPLY}{factor}"


def _join_terms(terms: Sequence[tuple[float, str]], decimals: int) -> str:
    """
    Join (coefficient, factor) terms into a signed sum.

    Zero terms are dropped; the first term carries its own sign, later
    terms are joined with ' + ' or ' - '.
    """
    parts: list[str] = []
    for coefficient, factor in terms:
        magnitude = format_number(abs(coefficient), decimals)
        if magnitude == '0':
            continue
        body = _scaled(magnitude, factor)
        negative = coefficient < 0
        if not parts:
            parts.append(f"-{body}" if negative else body)
        else:
            parts.append(f" - {body}" if negative else f" + {body}")
    if not parts:
        return '0'
    return ''.join(parts)


def _monomial(power: int) -> str:
    if power == 0:
        return ''
    if power == 1:
        return 'x'
    return 'x' + superscript(power)


def format_polynomial(coefficients: Sequence[float], decimals: int = EQUATION_DECIMALS) -> str:
    """
    Polynomial from (b1, b2, ...), highest degree first.

    Example:
        >>> format_polynomial([-3, 0.5, -1, 2])
        'y = 2·x³ - x² + 0.5·x - 3'
    """
    terms = [
        (coefficient, _monomial(power))
        for power, coefficient in reversed(list(enumerate(coefficients)))
    ]
    return f"y = {_join_terms(terms, decimals)}"


def _exponent(b: float, decimals: int) -> str:
    """Linear exponent b·x with b = 1 and b = -1 collapsed."""
    return _join_terms([(b, 'x')], decimals)


def _amplitude(b1: float, decimals: int) -> str:
    """A = e^b1, kept symbolic as e^{b1} when it does not fit in a float."""
    try:
        return format_number(math.exp(b1), decimals)
    except OverflowError:
        return "e^{" + format_number(b1, decimals) + "}"


def format_exponential(b1: float, b2: float, decimals: int = EQUATION_DECIMALS) -> str:
    """y = A·e^{B·x} with A = e^b1, B = b2."""
    amplitude = _amplitude(b1, decimals)
    exponent = _exponent(b2, decimals)
    if amplitude == '0' or exponent == '0':
        return f"y = {amplitude}"
    return f"y = {_scaled(amplitude, 'e^{' + exponent + '}')}"


def format_logarithmic(b1: float, b2: float, decimals: int = EQUATION_DECIMALS) -> str:
    """y = B·ln(x) ± A with A = b1, B = b2."""
    return f"y = {_join_terms([(b2, 'ln(x)'), (b1, '')], decimals)}"


def format_power(b1: float, b2: float, decimals: int = EQUATION_DECIMALS) -> str:
    """y = A·x^{B} with A = e^b1, B = b2."""
    amplitude = _amplitude(b1, decimals)
    exponent = format_number(b2, decimals)
    if amplitude == '0' or exponent == '0':
        return f"y = {amplitude}"
    factor = 'x' if exponent == '1' else 'x^{' + exponent + '}'
    return f"y = {_scaled(amplitude, factor)}"


def format_equation(
    model: TrendModel,
    coefficients: NDArray[np.floating[Any]] | Sequence[float],
    *,
    decimals: int = EQUATION_DECIMALS,
) -> str:
    """
    Equation text for a fitted model.

    Args:
        model: The fitted model variant
        coefficients: 1-indexed coefficients (slot 0 unused)
        decimals: Rounding applied to every number
    """
    b = [float(c) for c in coefficients[1:]]
    if isinstance(model, Polynomial):
        return format_polynomial(b, decimals)
    if isinstance(model, Exponential):
        return format_exponential(b[0], b[1], decimals)
    if isinstance(model, Logarithmic):
        return format_logarithmic(b[0], b[1], decimals)
    if isinstance(model, Power):
        return format_power(b[0], b[1], decimals)
    if isinstance(model, MovingAverage):
        raise TypeError("moving averages have no equation")
    raise TypeError(f"Unknown trend model: {model!r}")


def label_text(
    equation: str | None = None,
    r_squared: float | None = None,
    sigma2: float | None = None,
    *,
    decimals: int = EQUATION_DECIMALS,
) -> str:
    """
    On-chart label: equation, r² and σ², one per line, each only if given.
    """
    lines = []
    if equation is not None:
        lines.append(equation)
    if r_squared is not None:
        lines.append(f"r² = {format_number(r_squared, decimals)}")
    if sigma2 is not None:
        lines.append(f"σ² = {format_number(sigma2, decimals)}")
    return "\n".join(lines)
