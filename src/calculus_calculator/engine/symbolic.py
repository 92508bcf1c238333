"""Rule-table symbolic differentiation and integration used as the fallback path."""

from __future__ import annotations

import re
from typing import Optional

from .rules import DERIVATIVE_RULES, INTEGRAL_RULES, lookup

DERIVATIVE_SENTINEL = "d/d{variable}({expression})"
INTEGRAL_SENTINEL = "∫({expression})d{variable}"

_SENTINEL_PATTERN = re.compile(r"^(d/d[A-Za-z_][A-Za-z0-9_]*\(.*\)|∫\(.*\)d[A-Za-z_][A-Za-z0-9_]*)$", re.DOTALL)


def _power_exponent(expression: str, variable: str) -> Optional[int]:
    """Exponent of `<variable>^<n>` only when that is the whole expression.

    A prefix match would silently drop trailing terms, e.g. the `+1` of `x^5+1`.
    """
    match = re.fullmatch(r"{}\^(\d+)".format(re.escape(variable)), expression)
    if match is None:
        return None
    return int(match.group(1))


def symbolic_derivative(expression: str, variable: str) -> str:
    """Differentiates `expression` using the rule table, the power rule and the constant rule.

    Never raises. When no rule applies the unevaluated `d/d<variable>(<expression>)`
    form is returned; callers must treat it as "no closed form found".
    """
    result = lookup(DERIVATIVE_RULES, expression, variable)
    if result is not None:
        return result

    power = _power_exponent(expression, variable)
    if power is not None:
        if power == 1:
            return "1"
        return "{}*{}^{}".format(power, variable, power - 1)

    if variable not in expression:
        return "0"

    return DERIVATIVE_SENTINEL.format(variable=variable, expression=expression)


def symbolic_integral(expression: str, variable: str) -> str:
    """Integrates `expression` using the rule table, the power rule and the constant rule.

    The constant of integration is not included. Falls back to the unevaluated
    `∫(<expression>)d<variable>` form when no rule applies.
    """
    result = lookup(INTEGRAL_RULES, expression, variable)
    if result is not None:
        return result

    # Only non-negative literal exponents match, so n + 1 is never zero.
    power = _power_exponent(expression, variable)
    if power is not None:
        raised = power + 1
        return "{}^{}/{}".format(variable, raised, raised)

    if variable not in expression:
        return "{}*{}".format(expression, variable)

    return INTEGRAL_SENTINEL.format(variable=variable, expression=expression)


def is_unresolved(result: str) -> bool:
    """Returns True when `result` is one of the unevaluated derivative/integral forms."""
    return bool(_SENTINEL_PATTERN.match(result.strip()))
