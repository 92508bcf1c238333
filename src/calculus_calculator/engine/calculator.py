"""Calculator service: validation, strategy selection and result assembly."""

from __future__ import annotations

from typing import Optional, Tuple

from calculus_calculator.engine.backend import ExpressionBackend
from calculus_calculator.engine.errors import CalculusError
from calculus_calculator.engine.explain import build_steps, describe_operation
from calculus_calculator.engine.models import CalculationResult, Operation, ResultMethod
from calculus_calculator.engine.normalizer import normalize_expression
from calculus_calculator.engine.numeric import definite_integral
from calculus_calculator.engine.symbolic import is_unresolved, symbolic_derivative, symbolic_integral
from calculus_calculator.session.state import CalculationSession
from calculus_calculator.tools.sympy_backend import SympyExpressionBackend
from calculus_calculator.tools.utils import sanitize_math_expression, validate_variable
from calculus_calculator.utils.config_loader import CalculatorConfig
from calculus_calculator.utils.logger import get_logger

logger = get_logger("calculus_calculator.calculator")


class ExternalDerivativeEngine:
    """Differentiates through the expression backend; raises when it cannot."""

    method = ResultMethod.EXTERNAL

    def __init__(self, backend: ExpressionBackend) -> None:
        self.backend = backend

    def differentiate(self, expression: str, variable: str) -> str:
        return self.backend.derivative(normalize_expression(expression), variable)


class FallbackRuleEngine:
    """Rule-table differentiation/integration; never raises."""

    method = ResultMethod.FALLBACK

    def differentiate(self, expression: str, variable: str) -> str:
        return symbolic_derivative(expression, variable)

    def integrate(self, expression: str, variable: str) -> str:
        return symbolic_integral(expression, variable)


class CalculusCalculator:
    """Entry point consumed by the CLI, the HTTP API and the UI."""

    def __init__(self, config: Optional[CalculatorConfig] = None, backend: Optional[ExpressionBackend] = None) -> None:
        self.config = config or CalculatorConfig()
        self.backend: ExpressionBackend = backend or SympyExpressionBackend()
        self.external = ExternalDerivativeEngine(self.backend)
        self.fallback = FallbackRuleEngine()

    def _prepare(self, expression: str, variable: Optional[str]) -> Tuple[str, str]:
        cleaned = sanitize_math_expression(
            expression,
            max_length=self.config.security.max_expression_length,
            blocked_patterns=self.config.security.blocked_patterns,
        )
        chosen = (variable or "").strip() or self.config.engine.default_variable
        return cleaned, validate_variable(chosen)

    def derivative(self, expression: str, variable: Optional[str] = None) -> CalculationResult:
        """Differentiates `expression`, preferring the backend over the rule table.

        Raises:
            ParseError: If the expression or variable fails validation.
        """
        expression, variable = self._prepare(expression, variable)
        try:
            result = self.external.differentiate(expression, variable)
            method = self.external.method
        except CalculusError as exc:
            logger.info("external_derivative_unavailable expression=%s error=%s", expression, exc)
            result = self.fallback.differentiate(expression, variable)
            method = self.fallback.method

        return CalculationResult(
            operation=Operation.DERIVATIVE,
            input_expression=expression,
            variable=variable,
            result_expression=result,
            steps=build_steps(Operation.DERIVATIVE, expression, variable),
            info=describe_operation(Operation.DERIVATIVE, variable),
            method=method,
            unresolved=method is ResultMethod.FALLBACK and is_unresolved(result),
        )

    def integral(
        self,
        expression: str,
        variable: Optional[str] = None,
        lower: Optional[str] = None,
        upper: Optional[str] = None,
    ) -> CalculationResult:
        """Integrates `expression`; definite when both bounds are given.

        Raises:
            ParseError: If the expression or variable fails validation.
            IntegrationError: If numeric evaluation of a definite integral fails.
        """
        expression, variable = self._prepare(expression, variable)
        low = (lower or "").strip()
        high = (upper or "").strip()
        steps = build_steps(Operation.INTEGRAL, expression, variable)
        info = describe_operation(Operation.INTEGRAL, variable)

        if low and high:
            engine = self.config.engine
            value = definite_integral(
                normalize_expression(expression),
                variable,
                low,
                high,
                backend=self.backend,
                subdivisions=engine.subdivisions,
                decimal_places=engine.decimal_places,
                deadline_seconds=engine.deadline_seconds,
            )
            return CalculationResult(
                operation=Operation.INTEGRAL,
                input_expression=expression,
                variable=variable,
                result_expression=value,
                is_numeric=True,
                bounds=(low, high),
                steps=steps,
                info=info,
                method=ResultMethod.SIMPSON,
            )

        if low or high:
            logger.warning("single_bound_ignored expression=%s lower=%s upper=%s", expression, low, high)

        result = self.fallback.integrate(expression, variable)
        return CalculationResult(
            operation=Operation.INTEGRAL,
            input_expression=expression,
            variable=variable,
            result_expression=result,
            steps=steps,
            info=info,
            method=self.fallback.method,
            unresolved=is_unresolved(result),
        )

    def calculate(
        self,
        operation: Operation,
        expression: str,
        variable: Optional[str] = None,
        lower: Optional[str] = None,
        upper: Optional[str] = None,
    ) -> CalculationResult:
        if Operation(operation) is Operation.DERIVATIVE:
            return self.derivative(expression, variable)
        return self.integral(expression, variable, lower=lower, upper=upper)

    def perform(
        self,
        session: CalculationSession,
        expression: str,
        operation: Optional[Operation] = None,
        variable: Optional[str] = None,
        lower: Optional[str] = None,
        upper: Optional[str] = None,
    ) -> CalculationResult:
        """Runs one calculation for `session` and records it in the session history.

        Without an explicit `operation` the session's last operation is repeated,
        defaulting to a derivative.
        """
        chosen = Operation(operation) if operation else (session.current_operation or Operation.DERIVATIVE)
        session.current_operation = chosen
        result = self.calculate(chosen, expression, variable, lower=lower, upper=upper)
        session.last_entry_id = session.history.record(result).id
        logger.info(
            "calculation_performed session_id=%s operation=%s method=%s unresolved=%s",
            session.session_id,
            result.operation.value,
            result.method.value,
            result.unresolved,
        )
        return result

    def replay(self, session: CalculationSession, entry_id: int) -> CalculationResult:
        """Re-runs a stored history entry with its expression, operation, variable and bounds.

        Raises:
            HistoryEntryNotFoundError: If `entry_id` is not in the session history.
        """
        entry = session.history.get(entry_id)
        return self.perform(
            session,
            entry.expression,
            operation=Operation(entry.operation),
            variable=entry.variable,
            lower=entry.lower,
            upper=entry.upper,
        )
