"""Contract of the external expression parser/evaluator consumed by the engine."""

from __future__ import annotations

from typing import Any, Callable, Dict, Optional, Protocol


class ExpressionBackend(Protocol):
    """Parses, differentiates and evaluates canonical expressions.

    `parse` raises `ParseError`; `derivative` raises `ParseError` or
    `DerivativeUnavailableError`; `evaluate` and `compile` raise `EvaluationError`.
    """

    def parse(self, text: str, variable: Optional[str] = None) -> Any:
        ...

    def derivative(self, text: str, variable: str) -> str:
        ...

    def evaluate(self, expression: Any, bindings: Optional[Dict[str, float]] = None) -> float:
        ...

    def compile(self, expression: Any, variable: str) -> Callable[[float], float]:
        ...
