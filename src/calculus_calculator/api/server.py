"""REST interface for the calculus calculator."""

from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import FastAPI, HTTPException, Query
from pydantic import BaseModel, Field

from calculus_calculator import __version__
from calculus_calculator.engine.calculator import CalculusCalculator
from calculus_calculator.engine.errors import HistoryEntryNotFoundError, IntegrationError, ParseError
from calculus_calculator.engine.models import CalculationResult, Operation
from calculus_calculator.session.history import InMemoryHistoryStore, JsonHistoryStore
from calculus_calculator.session.state import CalculationSession, SessionRegistry
from calculus_calculator.utils.config_loader import CalculatorConfig, load_calculator_config
from calculus_calculator.utils.logger import get_logger

logger = get_logger("calculus_calculator.api")


class CalculateRequest(BaseModel):
    expression: str = Field(default="", description="Function of one variable, e.g. x^3 or sin(x)")
    operation: Optional[str] = Field(
        default=None,
        pattern="^(derivative|integral)$",
        description="Operation to perform; repeats the session's last operation when omitted",
    )
    variable: Optional[str] = Field(default=None, description="Independent variable, defaults to x")
    lower: Optional[str] = Field(default=None, description="Lower integration limit")
    upper: Optional[str] = Field(default=None, description="Upper integration limit")
    session_id: Optional[str] = Field(default=None, description="Session whose last operation is tracked")


class CalculationResponse(BaseModel):
    session_id: str
    history_id: Optional[int]
    operation: str
    input_expression: str
    variable: str
    result: str
    display_result: str
    is_numeric: bool
    bounds: Optional[list[str]]
    steps: list[str]
    info: str
    method: str
    unresolved: bool


class HistoryEntryResponse(BaseModel):
    id: int
    expression: str
    operation: str
    result: str
    variable: str
    timestamp: str
    lower: Optional[str] = None
    upper: Optional[str] = None


class HistoryResponse(BaseModel):
    entries: list[HistoryEntryResponse]


def create_app(
    config: Optional[CalculatorConfig] = None,
    calculator: Optional[CalculusCalculator] = None,
    history: Optional[InMemoryHistoryStore] = None,
) -> FastAPI:
    """Builds and configures the FastAPI application.

    Args:
        config: Calculator configuration; loaded from `configs/calculator.yml` when omitted.
        calculator: Calculator service; built from `config` when omitted.
        history: History store shared by every session; a JSON store at
            `config.history.path` when omitted.

    Returns:
        Configured FastAPI app instance.
    """
    config = config or load_calculator_config()
    calculator = calculator or CalculusCalculator(config=config)
    history = history if history is not None else JsonHistoryStore(config.history.path, config.history.max_entries)

    app = FastAPI(title=config.api.title, version=__version__)
    sessions = SessionRegistry(
        history,
        max_sessions=config.api.max_sessions,
        idle_seconds=config.api.session_idle_seconds,
    )
    app.state.sessions = sessions

    def _session_for(session_id: Optional[str]) -> CalculationSession:
        return sessions.get_or_create(session_id)

    def _to_response(session: CalculationSession, result: CalculationResult) -> Dict[str, Any]:
        return {
            "session_id": session.session_id,
            "history_id": session.last_entry_id,
            "operation": result.operation.value,
            "input_expression": result.input_expression,
            "variable": result.variable,
            "result": result.result_expression,
            "display_result": result.display_result,
            "is_numeric": result.is_numeric,
            "bounds": list(result.bounds) if result.bounds is not None else None,
            "steps": list(result.steps),
            "info": result.info,
            "method": result.method.value,
            "unresolved": result.unresolved,
        }

    def _to_http_exception(exc: Exception) -> HTTPException:
        if isinstance(exc, IntegrationError):
            return HTTPException(status_code=422, detail="Integration calculation failed: {}".format(exc))
        if isinstance(exc, HistoryEntryNotFoundError):
            return HTTPException(status_code=404, detail=str(exc))
        return HTTPException(status_code=422, detail=str(exc))

    @app.get("/health")
    def health() -> Dict[str, Any]:
        return {
            "status": "ok",
            "version": __version__,
            "history_entries": len(history),
            "live_sessions": len(sessions),
        }

    @app.post("/v1/calculate", response_model=CalculationResponse)
    def calculate(payload: CalculateRequest) -> Dict[str, Any]:
        session = _session_for(payload.session_id)
        try:
            result = calculator.perform(
                session,
                payload.expression,
                operation=Operation(payload.operation) if payload.operation else None,
                variable=payload.variable,
                lower=payload.lower,
                upper=payload.upper,
            )
        except (ParseError, IntegrationError) as exc:
            logger.info("calculate_rejected session_id=%s error=%s", session.session_id, exc)
            raise _to_http_exception(exc) from exc
        return _to_response(session, result)

    @app.get("/v1/history", response_model=HistoryResponse)
    def list_history(limit: int = Query(default=50, ge=1, le=500)) -> Dict[str, Any]:
        return {"entries": [entry.to_dict() for entry in history.list_recent(limit)]}

    @app.post("/v1/history/{entry_id}/replay", response_model=CalculationResponse)
    def replay_history(entry_id: int, session_id: Optional[str] = None) -> Dict[str, Any]:
        session = _session_for(session_id)
        try:
            result = calculator.replay(session, entry_id)
        except (ParseError, IntegrationError, HistoryEntryNotFoundError) as exc:
            raise _to_http_exception(exc) from exc
        return _to_response(session, result)

    @app.delete("/v1/history")
    def clear_history() -> Dict[str, Any]:
        history.clear()
        return {"cleared": True}

    return app
