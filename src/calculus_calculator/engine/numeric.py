"""Numerical definite integration by composite Simpson's rule."""

from __future__ import annotations

import math
import time
from typing import Callable, Optional

from calculus_calculator.engine.backend import ExpressionBackend
from calculus_calculator.engine.errors import CalculusError, EvaluationError, IntegrationError
from calculus_calculator.engine.normalizer import normalize_expression
from calculus_calculator.tools.sympy_backend import SympyExpressionBackend
from calculus_calculator.utils.logger import get_logger

DEFAULT_SUBDIVISIONS = 1000
DEFAULT_DECIMAL_PLACES = 6

logger = get_logger("calculus_calculator.engine.numeric")


def simpson(
    function: Callable[[float], float],
    lower: float,
    upper: float,
    subdivisions: int = DEFAULT_SUBDIVISIONS,
    deadline: Optional[float] = None,
) -> float:
    """Integrates `function` over [lower, upper] with composite Simpson's rule.

    Args:
        function: Integrand sampled at `subdivisions + 1` equally spaced points.
        lower: Lower bound.
        upper: Upper bound.
        subdivisions: Number of subintervals; must be a positive even integer.
        deadline: Optional `time.monotonic()` instant after which sampling stops.

    Returns:
        Approximation of the integral. Error is O(h^4) for integrands with a
        continuous fourth derivative; singularities inside the interval are not
        detected.

    Raises:
        ValueError: If `subdivisions` is not a positive even integer.
        TimeoutError: If `deadline` passes before sampling completes.
    """
    if subdivisions <= 0 or subdivisions % 2 != 0:
        raise ValueError("subdivisions must be a positive even integer, got {}".format(subdivisions))

    h = (upper - lower) / float(subdivisions)
    total = 0.0
    for i in range(subdivisions + 1):
        if deadline is not None and time.monotonic() > deadline:
            raise TimeoutError("Simpson sampling exceeded its deadline at sample {}".format(i))
        fx = function(lower + i * h)
        if i in (0, subdivisions):
            weight = 1
        elif i % 2 == 1:
            weight = 4
        else:
            weight = 2
        total += weight * fx

    return (h / 3.0) * total


def definite_integral(
    expression: str,
    variable: str,
    lower: str,
    upper: str,
    backend: Optional[ExpressionBackend] = None,
    subdivisions: int = DEFAULT_SUBDIVISIONS,
    decimal_places: int = DEFAULT_DECIMAL_PLACES,
    deadline_seconds: Optional[float] = None,
) -> str:
    """Evaluates the definite integral of a canonical expression.

    Args:
        expression: Integrand in canonical notation.
        variable: Integration variable.
        lower: Lower bound as a numeric string (constant expressions like `pi` are accepted).
        upper: Upper bound, same format as `lower`.
        backend: Expression backend used as the function oracle.
        subdivisions: Even number of Simpson subintervals.
        decimal_places: Digits kept in the fixed-point result.
        deadline_seconds: Optional wall-clock budget for the whole evaluation.

    Returns:
        The integral value formatted fixed-point, e.g. `"0.333333"`.

    Raises:
        IntegrationError: If the integrand or a bound cannot be evaluated.
        ValueError: If `subdivisions` is not a positive even integer.
    """
    backend = backend or SympyExpressionBackend()
    deadline = time.monotonic() + deadline_seconds if deadline_seconds else None

    try:
        low = _parse_bound(lower, backend)
        high = _parse_bound(upper, backend)
        function = backend.compile(backend.parse(expression, variable), variable)
        value = simpson(function, low, high, subdivisions=subdivisions, deadline=deadline)
    except (CalculusError, TimeoutError) as exc:
        logger.warning(
            "definite_integral_failed expression=%s variable=%s lower=%s upper=%s error=%s",
            expression,
            variable,
            lower,
            upper,
            exc,
        )
        raise IntegrationError() from exc

    return "{:.{}f}".format(value, decimal_places)


def _parse_bound(text: str, backend: ExpressionBackend) -> float:
    try:
        value = float(text)
    except (TypeError, ValueError):
        value = backend.evaluate(backend.parse(normalize_expression(str(text).strip())))
    if not math.isfinite(value):
        raise EvaluationError("Integration bound must be finite: {}".format(text))
    return value
