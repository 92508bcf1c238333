"""Step-by-step narratives for derivative and integral calculations."""

from __future__ import annotations

from typing import Tuple

from .models import Operation
from .symbolic import symbolic_derivative, symbolic_integral

_DERIVATIVE_INFO = (
    "The derivative represents the rate of change of the function with respect to {variable}. "
    "Geometrically, it gives the slope of the tangent line to the curve at any point."
)
_INTEGRAL_INFO = (
    "The integral represents the area under the curve. For indefinite integrals, "
    "we add a constant of integration (+C). For definite integrals, we get a specific numerical value."
)


def build_steps(operation: Operation, expression: str, variable: str) -> Tuple[str, ...]:
    """Returns the four-step narrative of the rule-table derivation.

    The last step always shows the fallback symbolic result, even when the
    headline answer came from the expression backend or from numeric integration.
    """
    operation = Operation(operation)
    if operation is Operation.DERIVATIVE:
        return (
            "Given function: f({v}) = {e}".format(v=variable, e=expression),
            "Find: f'({v}) = d/d{v}[{e}]".format(v=variable, e=expression),
            "Apply differentiation rules...",
            "Result: f'({v}) = {r}".format(v=variable, r=symbolic_derivative(expression, variable)),
        )
    return (
        "Given function: f({v}) = {e}".format(v=variable, e=expression),
        "Find: ∫f({v})d{v} = ∫{e}d{v}".format(v=variable, e=expression),
        "Apply integration rules...",
        "Result: ∫{e}d{v} = {r} + C".format(v=variable, e=expression, r=symbolic_integral(expression, variable)),
    )


def describe_operation(operation: Operation, variable: str) -> str:
    if Operation(operation) is Operation.DERIVATIVE:
        return _DERIVATIVE_INFO.format(variable=variable)
    return _INTEGRAL_INFO
