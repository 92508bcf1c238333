"""CLI/API entrypoint for the calculus calculator."""

from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Any, Dict, Optional

from calculus_calculator.engine.calculator import CalculusCalculator
from calculus_calculator.engine.errors import CalculusError
from calculus_calculator.engine.models import Operation
from calculus_calculator.session.history import JsonHistoryStore
from calculus_calculator.session.state import CalculationSession
from calculus_calculator.utils.config_loader import DEFAULT_CONFIG_PATH, CalculatorConfig, load_calculator_config
from calculus_calculator.utils.exporters import export_latex, export_notebook
from calculus_calculator.utils.logger import configure_logging


def build_parser() -> argparse.ArgumentParser:
    """Builds CLI argument parser for app entrypoints.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(description="Calculus Calculator")
    parser.add_argument("--mode", choices=["cli", "api"], default="cli")
    parser.add_argument("--function", type=str, default="", help="Function of one variable, e.g. x^3")
    parser.add_argument("--operation", choices=[op.value for op in Operation], default=None)
    parser.add_argument("--variable", type=str, default=None, help="Independent variable (default from config)")
    parser.add_argument("--lower", type=str, default=None, help="Lower integration limit")
    parser.add_argument("--upper", type=str, default=None, help="Upper integration limit")
    parser.add_argument("--config", type=str, default=None, help="Path to calculator YAML config")
    parser.add_argument("--history-file", type=str, default=None, help="Override history JSON path")
    parser.add_argument("--history", action="store_true", help="Print stored calculation history")
    parser.add_argument("--replay", type=int, default=None, help="Replay a history entry by id")
    parser.add_argument("--clear-history", action="store_true", help="Delete stored calculation history")
    parser.add_argument("--export-latex", type=str, default=None, help="Write the result as LaTeX")
    parser.add_argument("--export-notebook", type=str, default=None, help="Write the result as a Jupyter notebook")
    parser.add_argument("--host", type=str, default=None)
    parser.add_argument("--port", type=int, default=None)
    parser.add_argument("--log-level", type=str, default="WARNING")
    return parser


def _load_config(path: Optional[str]) -> CalculatorConfig:
    if path:
        return load_calculator_config(path)
    if Path(DEFAULT_CONFIG_PATH).exists():
        return load_calculator_config(DEFAULT_CONFIG_PATH)
    return CalculatorConfig()


def _print(payload: Dict[str, Any]) -> None:
    print(json.dumps(payload, ensure_ascii=False, indent=2))


def run_cli(args: argparse.Namespace, config: CalculatorConfig) -> int:
    """Executes one CLI request: a calculation, a replay or a history command.

    Args:
        args: Parsed CLI arguments.
        config: Loaded calculator configuration.

    Returns:
        Process exit code.
    """
    store = JsonHistoryStore(args.history_file or config.history.path, config.history.max_entries)
    session = CalculationSession(history=store)
    calculator = CalculusCalculator(config=config)

    if args.clear_history:
        store.clear()
        _print({"cleared": True})
        return 0
    if args.history:
        _print({"entries": [entry.to_dict() for entry in store.list_recent()]})
        return 0

    try:
        if args.replay is not None:
            result = calculator.replay(session, args.replay)
        else:
            result = calculator.perform(
                session,
                args.function,
                operation=Operation(args.operation) if args.operation else None,
                variable=args.variable,
                lower=args.lower,
                upper=args.upper,
            )
    except CalculusError as exc:
        _print({"error": str(exc)})
        return 1

    payload = result.to_dict()
    payload["history_id"] = session.last_entry_id
    if args.export_latex:
        payload["latex_path"] = export_latex(result, args.export_latex)
    if args.export_notebook:
        payload["notebook_path"] = export_notebook(result, args.export_notebook)
    _print(payload)
    return 0


def run_api(config: CalculatorConfig, host: Optional[str], port: Optional[int]) -> int:
    """Runs FastAPI server using Uvicorn.

    Args:
        config: Loaded calculator configuration.
        host: Bind host override.
        port: Bind port override.

    Returns:
        Process exit code.
    """
    import uvicorn

    from calculus_calculator.api import create_app

    app = create_app(config=config)
    uvicorn.run(app, host=host or config.api.host, port=port or config.api.port)
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    """Application entrypoint for CLI and API modes.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)
    config = _load_config(args.config)

    if args.mode == "api":
        return run_api(config, args.host, args.port)
    return run_cli(args, config)


if __name__ == "__main__":
    raise SystemExit(main())
