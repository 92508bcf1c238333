"""Expression calculus engine: normalization, rule tables, symbolic and numeric integration."""

from .errors import (
    CalculusError,
    DerivativeUnavailableError,
    EvaluationError,
    HistoryEntryNotFoundError,
    IntegrationError,
    ParseError,
)
from .models import CalculationResult, Operation, ResultMethod
from .normalizer import normalize_expression
from .rules import DERIVATIVE_RULES, INTEGRAL_RULES, RuleEntry
from .symbolic import is_unresolved, symbolic_derivative, symbolic_integral
from .explain import build_steps, describe_operation
from .numeric import definite_integral, simpson

__all__ = [
    "CalculusError",
    "DerivativeUnavailableError",
    "EvaluationError",
    "HistoryEntryNotFoundError",
    "IntegrationError",
    "ParseError",
    "CalculationResult",
    "Operation",
    "ResultMethod",
    "normalize_expression",
    "DERIVATIVE_RULES",
    "INTEGRAL_RULES",
    "RuleEntry",
    "is_unresolved",
    "symbolic_derivative",
    "symbolic_integral",
    "build_steps",
    "describe_operation",
    "definite_integral",
    "simpson",
]
