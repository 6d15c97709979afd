"""
Discretization of continuous functions for plotting.

The interval [start, end] is divided into a fixed number of steps. Each
sample is evaluated independently; samples where the function raises a
domain error, returns something that is not a real number, returns a
non-finite value, or jumps by more than the threshold since the previous
evaluation are dropped. Dropped samples leave gaps, so a curve with a
vertical asymptote is drawn as separate segments instead of a line
bridging the pole.
"""

from __future__ import annotations

from typing import Any, Callable, Iterator
import logging
import math
import threading
import numpy as np
from numpy.typing import NDArray

from pytrendline.core.compute.tolerances import DEFAULT_SAMPLING, SamplingConfig
from pytrendline.core.exceptions import ValidationError

logger = logging.getLogger(__name__)

# Errors a function may raise outside its domain
EVALUATION_ERRORS = (ValueError, ArithmeticError)


class FunctionSampler:
    """
    Lazy, restartable sampling of f over [start, end].

    Iterating yields accepted (x, f(x)) pairs. Every iteration re-evaluates
    the function from scratch, so a sampler can be iterated any number of
    times and from several threads.

    Usage:
        sampler = FunctionSampler(lambda x: 1 / x, -1.0, 1.0)
        points = sampler.points()
        left, right = sampler.segments()
    """

    def __init__(
        self,
        function: Callable[[float], float],
        start: float,
        end: float,
        *,
        config: SamplingConfig = DEFAULT_SAMPLING,
        cancel_event: threading.Event | None = None,
    ):
        if not callable(function):
            raise ValidationError(f"function: expected a callable, got {type(function).__name__}")
        start, end = float(start), float(end)
        if not (math.isfinite(start) and math.isfinite(end)):
            raise ValidationError(f"interval bounds must be finite, got [{start}, {end}]")
        if start > end:
            raise ValidationError(f"interval start {start} is greater than end {end}")

        self._function = function
        self._start = start
        self._end = end
        self._config = config
        self._cancel_event = cancel_event

    @property
    def start(self) -> float:
        return self._start

    @property
    def end(self) -> float:
        return self._end

    @property
    def steps(self) -> int:
        return self._config.steps

    @property
    def dx(self) -> float:
        return (self._end - self._start) / self._config.steps

    def grid(self) -> NDArray[np.floating[Any]]:
        """Abscissae at which the function is evaluated."""
        if self._start == self._end:
            return np.array([self._start])
        return np.linspace(self._start, self._end, self._config.steps + 1)

    def _evaluate(self, x: float) -> float | None:
        try:
            value = self._function(x)
        except EVALUATION_ERRORS as e:
            logger.debug("f(%g) undefined (%s); leaving a gap", x, e)
            return None
        try:
            return float(value)
        except (TypeError, ValueError):
            logger.debug("f(%g) = %r is not a real number; leaving a gap", x, value)
            return None

    def _accepted(self) -> Iterator[tuple[int, float, float]]:
        """Yield (sample index, x, f(x)) for every accepted sample."""
        threshold = self._config.jump_threshold
        with np.errstate(all='ignore'):
            previous = self._evaluate(self._start - self.dx)
            if previous is not None and not math.isfinite(previous):
                previous = None

            for k, x in enumerate(self.grid().tolist()):
                if self._cancel_event is not None and self._cancel_event.is_set():
                    logger.debug("sampling cancelled after %d of %d samples", k, self.steps + 1)
                    return
                fx = self._evaluate(x)
                if fx is None:
                    continue
                if not math.isfinite(fx):
                    logger.debug("f(%g) = %s; leaving a gap", x, fx)
                    continue
                jumped = previous is not None and abs(fx - previous) > threshold
                previous = fx
                if jumped:
                    logger.debug("jump at x=%g exceeds %g; treating as asymptote", x, threshold)
                    continue
                yield k, x, fx

    def __iter__(self) -> Iterator[tuple[float, float]]:
        for _, x, fx in self._accepted():
            yield x, fx

    def points(self) -> list[tuple[float, float]]:
        return list(self)

    def to_array(self) -> NDArray[np.floating[Any]]:
        """Accepted samples as an (m, 2) array."""
        return np.asarray(self.points(), dtype=np.float64).reshape(-1, 2)

    def segments(self) -> list[NDArray[np.floating[Any]]]:
        """
        Accepted samples split at gaps.

        Returns:
            List of (m, 2) arrays; consecutive rows of one array come from
            consecutive grid points
        """
        segments: list[list[tuple[float, float]]] = []
        last_index: int | None = None
        for k, x, fx in self._accepted():
            if last_index is None or k != last_index + 1:
                segments.append([])
            segments[-1].append((x, fx))
            last_index = k
        return [np.asarray(segment, dtype=np.float64) for segment in segments]

    def __repr__(self) -> str:
        return f"FunctionSampler(start={self._start:g}, end={self._end:g}, steps={self.steps})"


def sample_function(
    function: Callable[[float], float],
    start: float,
    end: float,
    *,
    config: SamplingConfig = DEFAULT_SAMPLING,
    steps: int | None = None,
    cancel_event: threading.Event | None = None,
) -> FunctionSampler:
    """
    Sample a function over [start, end] for plotting.

    Args:
        function: Scalar function; may raise ValueError/ArithmeticError
            outside its domain
        start: Interval start
        end: Interval end
        config: Step count and jump threshold
        steps: Shortcut overriding config.steps
        cancel_event: When set, iteration stops before the next sample

    Returns:
        A lazy FunctionSampler
    """
    if steps is not None:
        config = SamplingConfig(steps=steps, jump_threshold=config.jump_threshold)
    return FunctionSampler(function, start, end, config=config, cancel_event=cancel_event)
