"""Configuration loader for YAML-based calculator settings."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

DEFAULT_CONFIG_PATH = "configs/calculator.yml"


@dataclass
class EngineSettings:
    default_variable: str = "x"
    subdivisions: int = 1000
    decimal_places: int = 6
    deadline_seconds: Optional[float] = 10.0


@dataclass
class SecuritySettings:
    max_expression_length: int = 400
    blocked_patterns: List[str] = field(default_factory=lambda: ["__", "import", "exec", "eval", "lambda"])


@dataclass
class HistorySettings:
    path: str = ".history/calculus_history.json"
    max_entries: int = 200


@dataclass
class ApiSettings:
    host: str = "0.0.0.0"
    port: int = 8000
    title: str = "Calculus Calculator API"
    max_sessions: int = 1000
    session_idle_seconds: float = 1800.0


@dataclass
class CalculatorConfig:
    version: str = "1.0.0"
    engine: EngineSettings = field(default_factory=EngineSettings)
    security: SecuritySettings = field(default_factory=SecuritySettings)
    history: HistorySettings = field(default_factory=HistorySettings)
    api: ApiSettings = field(default_factory=ApiSettings)


class ConfigError(RuntimeError):
    """Raised when configuration files cannot be loaded or validated."""


def _load_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        raise ConfigError("Configuration file not found: {}".format(path))
    with path.open("r", encoding="utf-8") as handle:
        try:
            loaded = yaml.safe_load(handle) or {}
        except yaml.YAMLError as exc:
            raise ConfigError("Invalid YAML in {}: {}".format(path, exc)) from exc
    if not isinstance(loaded, dict):
        raise ConfigError("Configuration root must be a mapping in {}".format(path))
    return loaded


def _section(data: Dict[str, Any], name: str) -> Dict[str, Any]:
    section = data.get(name) or {}
    if not isinstance(section, dict):
        raise ConfigError("'{}' must be a mapping in calculator configuration".format(name))
    return section


def load_calculator_config(path: str = DEFAULT_CONFIG_PATH) -> CalculatorConfig:
    data = _load_yaml(Path(path))
    engine_data = _section(data, "engine")
    security_data = _section(data, "security")
    history_data = _section(data, "history")
    api_data = _section(data, "api")

    defaults = CalculatorConfig()
    subdivisions = int(engine_data.get("subdivisions", defaults.engine.subdivisions))
    if subdivisions <= 0 or subdivisions % 2 != 0:
        raise ConfigError("engine.subdivisions must be a positive even integer, got {}".format(subdivisions))
    deadline = engine_data.get("deadline_seconds", defaults.engine.deadline_seconds)

    engine = EngineSettings(
        default_variable=str(engine_data.get("default_variable", defaults.engine.default_variable)),
        subdivisions=subdivisions,
        decimal_places=int(engine_data.get("decimal_places", defaults.engine.decimal_places)),
        deadline_seconds=float(deadline) if deadline is not None else None,
    )
    security = SecuritySettings(
        max_expression_length=int(security_data.get("max_expression_length", defaults.security.max_expression_length)),
        blocked_patterns=[str(p) for p in security_data.get("blocked_patterns", defaults.security.blocked_patterns)],
    )
    history = HistorySettings(
        path=str(history_data.get("path", defaults.history.path)),
        max_entries=int(history_data.get("max_entries", defaults.history.max_entries)),
    )
    api = ApiSettings(
        host=str(api_data.get("host", defaults.api.host)),
        port=int(api_data.get("port", defaults.api.port)),
        title=str(api_data.get("title", defaults.api.title)),
        max_sessions=int(api_data.get("max_sessions", defaults.api.max_sessions)),
        session_idle_seconds=float(api_data.get("session_idle_seconds", defaults.api.session_idle_seconds)),
    )

    return CalculatorConfig(
        version=str(data.get("version", defaults.version)),
        engine=engine,
        security=security,
        history=history,
        api=api,
    )
