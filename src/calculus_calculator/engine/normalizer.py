"""Rewrites user-facing notation into the canonical tokens of the expression backend."""

from __future__ import annotations

import re
from typing import Optional, Tuple

# User `ln(` is the natural log (`log(` in canonical form); user `log(` is base 10.
# Both are rewritten in a single pass so a freshly produced `log(` is never promoted.
_LOG_CALL = re.compile(r"(?<![A-Za-z0-9_])(ln|log)\(")
_LOG_TARGETS = {"ln": "log(", "log": "log10("}

_IDENTIFIER_CHAR = re.compile(r"[A-Za-z0-9_.]")
_OPERAND_TOKEN = re.compile(r"-?[A-Za-z0-9_.]+")

_LITERAL_REPLACEMENTS: Tuple[Tuple[str, str], ...] = (
    ("π", "pi"),
    ("∞", "Infinity"),
)


def normalize_expression(expression: str) -> str:
    """Returns `expression` in canonical notation.

    Natural-log calls become `log(`, other `log(` calls become `log10(`,
    `e^a` becomes `exp(a)`, `√a` becomes `sqrt(a)`, `π` becomes `pi` and `∞`
    becomes `Infinity`. Operands are rewritten recursively, so nested forms
    like `e^(e^x)` and `√(√x)` come out fully canonical. `^` is
    right-associative: `e^x^2` is `exp(x^2)`. Normalizing twice only differs
    from normalizing once for natural logs, whose canonical `log(` reads as
    base 10 on a second pass.
    """
    text = _LOG_CALL.sub(lambda match: _LOG_TARGETS[match.group(1)], expression)
    text = _rewrite_prefix_operators(text)
    for source, target in _LITERAL_REPLACEMENTS:
        text = text.replace(source, target)
    return text


def _rewrite_prefix_operators(text: str) -> str:
    pieces = []
    cursor = 0
    index = 0
    while index < len(text):
        function, operator_end = _prefix_at(text, index)
        if function is None:
            index += 1
            continue

        pieces.append(text[cursor:index])
        operand, end = _read_operand(text, operator_end)
        if operand is None:
            pieces.append(function + "(")
            cursor = index = operator_end
            continue
        if function == "exp":
            chain_end = _absorb_power_chain(text, end)
            if chain_end > end:
                operand, end = text[operator_end:chain_end], chain_end

        pieces.append("{}({})".format(function, _rewrite_prefix_operators(operand)))
        cursor = index = end
    pieces.append(text[cursor:])
    return "".join(pieces)


def _prefix_at(text: str, index: int) -> Tuple[Optional[str], int]:
    if text.startswith("√", index):
        return "sqrt", index + 1
    if text.startswith("e^", index) and (index == 0 or not _IDENTIFIER_CHAR.match(text[index - 1])):
        return "exp", index + 2
    return None, index


def _absorb_power_chain(text: str, end: int) -> int:
    """Extends an exponent over any following `^<operand>` links."""
    while end < len(text) and text[end] == "^":
        operand, next_end = _read_operand(text, end + 1)
        if operand is None:
            break
        end = next_end
    return end


def _read_operand(text: str, start: int) -> Tuple[Optional[str], int]:
    """Reads one operand (parenthesised group, nested prefix operator, or token with optional call) at `start`."""
    function, operator_end = _prefix_at(text, start)
    if function is not None:
        operand, end = _read_operand(text, operator_end)
        if operand is None:
            return None, start
        if function == "exp":
            end = _absorb_power_chain(text, end)
        return text[start:end], end

    if start < len(text) and text[start] == "(":
        close = _closing_paren(text, start)
        if close < 0:
            return None, start
        return text[start + 1 : close], close + 1

    token = _OPERAND_TOKEN.match(text, start)
    if token is None:
        return None, start
    end = token.end()
    if end < len(text) and text[end] == "(":
        close = _closing_paren(text, end)
        if close < 0:
            return None, start
        end = close + 1
    return text[start:end], end


def _closing_paren(text: str, open_index: int) -> int:
    depth = 0
    for index in range(open_index, len(text)):
        if text[index] == "(":
            depth += 1
        elif text[index] == ")":
            depth -= 1
            if depth == 0:
                return index
    return -1
