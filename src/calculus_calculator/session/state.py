"""Explicit per-session state passed into the calculator entry points, and a bounded registry of live sessions."""

from __future__ import annotations

import threading
import time
import uuid
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Optional, Tuple

from calculus_calculator.engine.models import Operation
from calculus_calculator.session.history import InMemoryHistoryStore


@dataclass
class CalculationSession:
    """Holds the last operation performed and the history log it appends to."""

    history: InMemoryHistoryStore = field(default_factory=InMemoryHistoryStore)
    current_operation: Optional[Operation] = None
    session_id: str = field(default_factory=lambda: uuid.uuid4().hex)
    last_entry_id: Optional[int] = None


class SessionRegistry:
    """Bounded map of live sessions with least-recently-used eviction and idle expiry."""

    def __init__(
        self,
        history: InMemoryHistoryStore,
        max_sessions: int = 1000,
        idle_seconds: float = 1800,
    ) -> None:
        self.history = history
        self.max_sessions = max(1, int(max_sessions))
        self.idle_seconds = max(1.0, float(idle_seconds))
        self._sessions: OrderedDict[str, Tuple[CalculationSession, float]] = OrderedDict()
        self._lock = threading.Lock()

    def _cleanup_locked(self, now: float) -> None:
        stale = [key for key, (_, last_used) in self._sessions.items() if now - last_used > self.idle_seconds]
        for key in stale:
            del self._sessions[key]
        while len(self._sessions) > self.max_sessions:
            self._sessions.popitem(last=False)

    def get_or_create(self, session_id: Optional[str] = None) -> CalculationSession:
        """Returns the live session for `session_id`, creating it when unknown or expired."""
        now = time.monotonic()
        with self._lock:
            self._cleanup_locked(now)
            if session_id and session_id in self._sessions:
                session = self._sessions[session_id][0]
                self._sessions.move_to_end(session_id)
            else:
                session = CalculationSession(history=self.history)
                if session_id:
                    session.session_id = session_id
            self._sessions[session.session_id] = (session, now)
            self._cleanup_locked(now)
        return session

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def __contains__(self, session_id: object) -> bool:
        with self._lock:
            return session_id in self._sessions
