"""Static rule tables for table-driven differentiation and integration."""

from __future__ import annotations

from typing import NamedTuple, Optional, Tuple

PLACEHOLDER = "x"


class RuleEntry(NamedTuple):
    """Pattern/result templates written against the placeholder variable `x`."""

    pattern: str
    result: str

    def pattern_for(self, variable: str) -> str:
        return substitute_variable(self.pattern, variable)

    def result_for(self, variable: str) -> str:
        return substitute_variable(self.result, variable)


def substitute_variable(template: str, variable: str) -> str:
    return template.replace(PLACEHOLDER, variable)


DERIVATIVE_RULES: Tuple[RuleEntry, ...] = (
    RuleEntry("x", "1"),
    RuleEntry("x^2", "2*x"),
    RuleEntry("x^3", "3*x^2"),
    RuleEntry("x^n", "n*x^(n-1)"),
    RuleEntry("sin(x)", "cos(x)"),
    RuleEntry("cos(x)", "-sin(x)"),
    RuleEntry("tan(x)", "sec(x)^2"),
    RuleEntry("e^x", "e^x"),
    RuleEntry("ln(x)", "1/x"),
    RuleEntry("log(x)", "1/(x*ln(10))"),
)

INTEGRAL_RULES: Tuple[RuleEntry, ...] = (
    RuleEntry("1", "x"),
    RuleEntry("x", "x^2/2"),
    RuleEntry("x^2", "x^3/3"),
    RuleEntry("x^3", "x^4/4"),
    RuleEntry("1/x", "ln(|x|)"),
    RuleEntry("sin(x)", "-cos(x)"),
    RuleEntry("cos(x)", "sin(x)"),
    RuleEntry("e^x", "e^x"),
    RuleEntry("tan(x)", "-ln(|cos(x)|)"),
)


def lookup(rules: Tuple[RuleEntry, ...], expression: str, variable: str) -> Optional[str]:
    """Returns the result of the first rule whose pattern equals `expression` exactly."""
    for rule in rules:
        if expression == rule.pattern_for(variable):
            return rule.result_for(variable)
    return None
