"""Typed value objects produced by the calculator."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple


class Operation(str, Enum):
    DERIVATIVE = "derivative"
    INTEGRAL = "integral"

    @property
    def label(self) -> str:
        return "Derivative" if self is Operation.DERIVATIVE else "Integral"


class ResultMethod(str, Enum):
    EXTERNAL = "external"
    FALLBACK = "fallback"
    SIMPSON = "simpson"


@dataclass(frozen=True)
class CalculationResult:
    """Outcome of one derivative or integral request."""

    operation: Operation
    input_expression: str
    variable: str
    result_expression: str
    is_numeric: bool = False
    bounds: Optional[Tuple[str, str]] = None
    steps: Tuple[str, ...] = ()
    info: str = ""
    method: ResultMethod = ResultMethod.FALLBACK
    unresolved: bool = False

    @property
    def display_result(self) -> str:
        if self.operation is Operation.DERIVATIVE:
            return self.result_expression
        if self.is_numeric and self.bounds is not None:
            return "{} (from {} to {})".format(self.result_expression, self.bounds[0], self.bounds[1])
        return "{} + C".format(self.result_expression)

    def to_dict(self) -> Dict[str, Any]:
        payload = asdict(self)
        payload["operation"] = self.operation.value
        payload["method"] = self.method.value
        payload["bounds"] = list(self.bounds) if self.bounds is not None else None
        payload["steps"] = list(self.steps)
        payload["display_result"] = self.display_result
        return payload
