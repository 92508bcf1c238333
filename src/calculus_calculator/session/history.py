"""Calculation history stores: in-memory and JSON-file backed."""

from __future__ import annotations

import json
import threading
import time
from dataclasses import asdict, dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from calculus_calculator.engine.errors import HistoryEntryNotFoundError
from calculus_calculator.engine.models import CalculationResult
from calculus_calculator.utils.logger import get_logger

logger = get_logger("calculus_calculator.session.history")


@dataclass(frozen=True)
class HistoryEntry:
    id: int
    expression: str
    operation: str
    result: str
    variable: str
    timestamp: str
    lower: Optional[str] = None
    upper: Optional[str] = None

    @classmethod
    def from_result(cls, result: CalculationResult, entry_id: int) -> "HistoryEntry":
        lower, upper = result.bounds if result.bounds is not None else (None, None)
        return cls(
            id=entry_id,
            expression=result.input_expression,
            operation=result.operation.value,
            result=result.display_result,
            variable=result.variable,
            timestamp=datetime.now().strftime("%Y-%m-%d %H:%M:%S"),
            lower=lower,
            upper=upper,
        )

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "HistoryEntry":
        return cls(
            id=int(payload["id"]),
            expression=str(payload["expression"]),
            operation=str(payload["operation"]),
            result=str(payload.get("result", "")),
            variable=str(payload.get("variable") or "x"),
            timestamp=str(payload.get("timestamp", "")),
            lower=payload.get("lower"),
            upper=payload.get("upper"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class InMemoryHistoryStore:
    """Most-recent-first calculation log kept in process memory."""

    def __init__(self, max_entries: int = 200) -> None:
        self.max_entries = max(1, int(max_entries))
        self._entries: List[HistoryEntry] = []
        self._lock = threading.Lock()

    def _next_id(self) -> int:
        now_ms = int(time.time() * 1000)
        if self._entries:
            return max(now_ms, self._entries[0].id + 1)
        return now_ms

    def record(self, result: CalculationResult) -> HistoryEntry:
        """Creates a history entry for `result` and stores it at the head of the log."""
        with self._lock:
            entry = HistoryEntry.from_result(result, self._next_id())
            self._entries.insert(0, entry)
            del self._entries[self.max_entries :]
            self._persist()
        logger.info("history_recorded id=%s operation=%s", entry.id, entry.operation)
        return entry

    def list_recent(self, limit: Optional[int] = None) -> List[HistoryEntry]:
        with self._lock:
            if limit is None:
                return list(self._entries)
            return self._entries[: max(0, int(limit))]

    def get(self, entry_id: int) -> HistoryEntry:
        with self._lock:
            for entry in self._entries:
                if entry.id == int(entry_id):
                    return entry
        raise HistoryEntryNotFoundError(entry_id)

    def clear(self) -> None:
        with self._lock:
            self._entries = []
            self._persist()
        logger.info("history_cleared")

    def __len__(self) -> int:
        return len(self._entries)

    def _persist(self) -> None:
        """Hook for durable stores; called with the lock held."""


class JsonHistoryStore(InMemoryHistoryStore):
    """History store persisted to a JSON file so it survives restarts."""

    def __init__(self, path: str, max_entries: int = 200) -> None:
        super().__init__(max_entries=max_entries)
        self.path = Path(path)
        self._entries = self._load()

    def _load(self) -> List[HistoryEntry]:
        if not self.path.exists():
            return []
        try:
            with self.path.open("r", encoding="utf-8") as handle:
                payload = json.load(handle)
        except (OSError, ValueError) as exc:
            logger.warning("history_unreadable path=%s error=%s", self.path, exc)
            return []

        entries: List[HistoryEntry] = []
        for item in payload if isinstance(payload, list) else []:
            try:
                entries.append(HistoryEntry.from_dict(item))
            except (KeyError, TypeError, ValueError):
                logger.warning("history_entry_skipped path=%s entry=%s", self.path, item)
        entries.sort(key=lambda entry: entry.id, reverse=True)
        return entries[: self.max_entries]

    def _persist(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("w", encoding="utf-8") as handle:
            json.dump([entry.to_dict() for entry in self._entries], handle, ensure_ascii=False, indent=2)
