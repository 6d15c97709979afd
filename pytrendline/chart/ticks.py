"""Axis tick labels."""

import math

from pytrendline.trendline.formatting import format_number

# Ticks above this magnitude switch to scientific notation
SCIENTIFIC_THRESHOLD = 1e3

TICK_DECIMALS = 2


def format_tick(value: float) -> str:
    """
    Tick label with at most two decimals.

    Magnitudes above 1000 are written in scientific notation with a bare
    exponent.

    Examples:
        >>> format_tick(15000)
        '1.5E4'
        >>> format_tick(-2.5)
        '-2.5'
    """
    value = float(value)
    if not math.isfinite(value) or abs(value) <= SCIENTIFIC_THRESHOLD:
        return format_number(value, TICK_DECIMALS)

    exponent = math.floor(math.log10(abs(value)))
    mantissa = round(value / 10.0 ** exponent, TICK_DECIMALS)
    if abs(mantissa) >= 10:
        mantissa /= 10
        exponent += 1
    return f"{format_number(mantissa, TICK_DECIMALS)}E{exponent}"
