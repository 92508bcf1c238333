"""SymPy implementation of the expression backend."""

from __future__ import annotations

import math
import re
from typing import Any, Callable, Dict, Optional

import sympy as sp

from calculus_calculator.engine.errors import DerivativeUnavailableError, EvaluationError, ParseError

_IMAGINARY_TOLERANCE = 1e-12
_NATURAL_LOG_CALL = re.compile(r"(?<![A-Za-z0-9_])log\(")

_CANONICAL_NAMESPACE: Dict[str, Any] = {
    "log10": lambda arg: sp.log(arg, 10),
    "Infinity": sp.oo,
    "e": sp.E,
    "pi": sp.pi,
}


def format_expression(expression: Any) -> str:
    """Renders a SymPy expression back into user notation.

    Powers use `^` and the natural log is written `ln(`, since a bare `log(`
    reads as base 10 in user input.
    """
    text = str(expression).replace("**", "^")
    return _NATURAL_LOG_CALL.sub("ln(", text)


def _to_real(value: Any) -> float:
    try:
        number = complex(value)
    except (TypeError, ValueError) as exc:
        raise EvaluationError("Expression did not evaluate to a number: {}".format(value)) from exc
    if abs(number.imag) > _IMAGINARY_TOLERANCE:
        raise EvaluationError("Expression evaluated to a non-real value: {}".format(number))
    if not math.isfinite(number.real):
        raise EvaluationError("Expression evaluated to a non-finite value: {}".format(number.real))
    return number.real


class SympyExpressionBackend:
    """Expression backend built on `sympy.sympify`, `sympy.diff` and `sympy.lambdify`."""

    def parse(self, text: str, variable: Optional[str] = None) -> sp.Expr:
        namespace = dict(_CANONICAL_NAMESPACE)
        if variable:
            namespace[variable] = sp.Symbol(variable)
        try:
            parsed = sp.sympify(text.replace("^", "**"), locals=namespace)
        except Exception as exc:
            raise ParseError("Invalid expression '{}': {}".format(text, exc)) from exc
        if not isinstance(parsed, sp.Expr):
            raise ParseError("Invalid expression '{}': not a scalar expression".format(text))
        return parsed

    def derivative(self, text: str, variable: str) -> str:
        expression = self.parse(text, variable)
        try:
            derivative = sp.diff(expression, sp.Symbol(variable))
        except Exception as exc:
            raise DerivativeUnavailableError("SymPy could not differentiate '{}': {}".format(text, exc)) from exc
        if derivative.has(sp.Derivative):
            raise DerivativeUnavailableError("No closed-form derivative for '{}'".format(text))
        return format_expression(derivative)

    def evaluate(self, expression: sp.Expr, bindings: Optional[Dict[str, float]] = None) -> float:
        subs = {sp.Symbol(name): value for name, value in (bindings or {}).items()}
        try:
            value = expression.evalf(subs=subs)
        except Exception as exc:
            raise EvaluationError("Could not evaluate '{}': {}".format(expression, exc)) from exc
        return _to_real(value)

    def compile(self, expression: sp.Expr, variable: str) -> Callable[[float], float]:
        symbol = sp.Symbol(variable)
        unknown = sorted(str(s) for s in expression.free_symbols - {symbol})
        if unknown:
            raise EvaluationError("Unknown symbols in expression: {}".format(", ".join(unknown)))
        try:
            function = sp.lambdify(symbol, expression, modules="mpmath")
        except Exception as exc:
            raise EvaluationError("Could not compile '{}': {}".format(expression, exc)) from exc

        def sample(value: float) -> float:
            try:
                raw = function(value)
            except (ArithmeticError, ValueError, TypeError) as exc:
                raise EvaluationError("Undefined at {}={}: {}".format(variable, value, exc)) from exc
            return _to_real(raw)

        return sample
