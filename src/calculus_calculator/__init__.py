"""Symbolic and numeric calculus calculator."""

from calculus_calculator.engine import (
    CalculationResult,
    IntegrationError,
    Operation,
    ParseError,
    definite_integral,
    normalize_expression,
    symbolic_derivative,
    symbolic_integral,
)
from calculus_calculator.engine.calculator import CalculusCalculator
from calculus_calculator.session import CalculationSession, InMemoryHistoryStore, JsonHistoryStore

__version__ = "1.0.0"

__all__ = [
    "CalculationResult",
    "IntegrationError",
    "Operation",
    "ParseError",
    "definite_integral",
    "normalize_expression",
    "symbolic_derivative",
    "symbolic_integral",
    "CalculusCalculator",
    "CalculationSession",
    "InMemoryHistoryStore",
    "JsonHistoryStore",
    "__version__",
]
