"""Session state and calculation history persistence."""

from .history import HistoryEntry, InMemoryHistoryStore, JsonHistoryStore
from .state import CalculationSession, SessionRegistry

__all__ = ["HistoryEntry", "InMemoryHistoryStore", "JsonHistoryStore", "CalculationSession", "SessionRegistry"]
