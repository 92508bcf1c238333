"""Adapters around the external expression library and input validation."""

from .sympy_backend import SympyExpressionBackend, format_expression
from .utils import SanitizationError, sanitize_math_expression, validate_variable

__all__ = [
    "SympyExpressionBackend",
    "format_expression",
    "SanitizationError",
    "sanitize_math_expression",
    "validate_variable",
]
