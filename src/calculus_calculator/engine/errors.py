"""Exception hierarchy for the calculus engine and its collaborators."""

from __future__ import annotations


class CalculusError(RuntimeError):
    """Base class for every error raised by the calculator."""


class ParseError(CalculusError, ValueError):
    """Raised when an input expression or variable is not valid."""


class IntegrationError(CalculusError):
    """Raised when a definite integral cannot be evaluated numerically."""

    def __init__(self, message: str = "Numerical integration failed") -> None:
        super().__init__(message)


class EvaluationError(CalculusError):
    """Raised by an expression backend when a value cannot be computed."""


class DerivativeUnavailableError(CalculusError):
    """Raised by an expression backend that cannot differentiate an expression."""


class HistoryEntryNotFoundError(CalculusError, KeyError):
    """Raised when a history entry id is not present in the store."""

    def __init__(self, entry_id: int) -> None:
        super().__init__("History entry not found: {}".format(entry_id))
        self.entry_id = entry_id

    def __str__(self) -> str:
        return str(self.args[0])
