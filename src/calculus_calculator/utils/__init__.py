"""Utility helpers for the calculus calculator."""

from .config_loader import CalculatorConfig, ConfigError, load_calculator_config
from .exporters import export_latex, export_notebook
from .logger import configure_logging, get_logger

__all__ = [
    "CalculatorConfig",
    "ConfigError",
    "load_calculator_config",
    "export_latex",
    "export_notebook",
    "configure_logging",
    "get_logger",
]
