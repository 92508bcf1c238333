"""Input validation helpers applied before any expression reaches the backend."""

from __future__ import annotations

import re
from typing import Iterable, Optional

from calculus_calculator.engine.errors import ParseError

MATH_EXPR_REGEX = re.compile(r"^[a-zA-Z0-9_+\-*/^().,|\s√π∞]+$")
VARIABLE_REGEX = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

DEFAULT_BLOCKED_PATTERNS = ("__", "import", "exec", "eval", "lambda")

_UNICODE_REPLACEMENTS = {
    "−": "-",
    "–": "-",
    "—": "-",
    "×": "*",
    "÷": "/",
    "·": "*",
    "∙": "*",
    "⁄": "/",
}

_SUPERSCRIPT_MAP = {
    "⁰": "0",
    "¹": "1",
    "²": "2",
    "³": "3",
    "⁴": "4",
    "⁵": "5",
    "⁶": "6",
    "⁷": "7",
    "⁸": "8",
    "⁹": "9",
    "⁺": "+",
    "⁻": "-",
}


class SanitizationError(ParseError):
    """Raised when an input expression does not pass validation."""


def sanitize_math_expression(
    expression: str,
    max_length: int = 400,
    blocked_patterns: Optional[Iterable[str]] = None,
) -> str:
    """Validates user input and folds typographic symbols into ASCII operators.

    Args:
        expression: Raw user input.
        max_length: Maximum accepted length after cleanup.
        blocked_patterns: Case-insensitive substrings that are rejected.

    Returns:
        Cleaned expression, still in user notation (`ln`, `e^`, `√`, ... are kept).

    Raises:
        SanitizationError: If the input is empty, too long, has unsupported
            characters or contains a blocked pattern.
    """
    normalized = _normalize_math_unicode((expression or "").strip())
    if not normalized:
        raise SanitizationError("Please enter a function")
    if len(normalized) > max_length:
        raise SanitizationError("Expression exceeds max length of {} characters.".format(max_length))
    if not MATH_EXPR_REGEX.match(normalized):
        raise SanitizationError("Expression contains unsupported characters.")

    patterns = DEFAULT_BLOCKED_PATTERNS if blocked_patterns is None else tuple(blocked_patterns)
    lowered = normalized.lower()
    for pattern in patterns:
        if pattern.lower() in lowered:
            raise SanitizationError("Expression contains blocked pattern '{}'.".format(pattern))

    return normalized


def validate_variable(variable: str) -> str:
    cleaned = (variable or "").strip()
    if not VARIABLE_REGEX.match(cleaned):
        raise SanitizationError("Invalid variable name '{}'.".format(variable))
    return cleaned


def _normalize_math_unicode(expression: str) -> str:
    if not expression:
        return expression

    for source, target in _UNICODE_REPLACEMENTS.items():
        expression = expression.replace(source, target)

    result_chars = []
    i = 0
    while i < len(expression):
        char = expression[i]
        if char in _SUPERSCRIPT_MAP:
            superscript_tokens = []
            while i < len(expression) and expression[i] in _SUPERSCRIPT_MAP:
                superscript_tokens.append(_SUPERSCRIPT_MAP[expression[i]])
                i += 1
            result_chars.append("^" + "".join(superscript_tokens))
            continue

        result_chars.append(char)
        i += 1

    return "".join(result_chars)
