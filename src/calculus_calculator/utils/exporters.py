"""Export helpers for LaTeX and Jupyter formats."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict

from calculus_calculator.engine.models import CalculationResult, Operation


def _operation_symbol(result: CalculationResult) -> str:
    v = result.variable
    if result.operation is Operation.DERIVATIVE:
        return "f'({})".format(v)
    if result.bounds is not None and result.is_numeric:
        return r"\int_{{{}}}^{{{}}} f({}) \, d{}".format(result.bounds[0], result.bounds[1], v, v)
    return r"\int f({}) \, d{}".format(v, v)


def export_latex(result: CalculationResult, output_path: str) -> str:
    content = [
        r"\section*{" + result.operation.label + " Result}",
        r"\textbf{Function:} $f(" + result.variable + ") = " + result.input_expression + r"$\\",
        r"\textbf{" + result.operation.label + r":} $" + _operation_symbol(result) + " = " + result.display_result + r"$\\",
        r"\textbf{Method:} " + result.method.value + r"\\",
        r"\begin{enumerate}",
    ]
    content.extend(r"  \item " + step for step in result.steps)
    content.append(r"\end{enumerate}")
    content.append(result.info)

    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text("\n".join(content), encoding="utf-8")
    return str(output)


def export_notebook(result: CalculationResult, output_path: str) -> str:
    notebook: Dict[str, Any] = {
        "cells": [
            {
                "cell_type": "markdown",
                "metadata": {},
                "source": [
                    "# {} Result\n".format(result.operation.label),
                    "- Function: `f({}) = {}`\n".format(result.variable, result.input_expression),
                    "- Method: {}\n".format(result.method.value),
                ],
            },
            {
                "cell_type": "markdown",
                "metadata": {},
                "source": ["## Result\n", "```\n{}\n```\n".format(result.display_result)],
            },
            {
                "cell_type": "markdown",
                "metadata": {},
                "source": ["## Steps\n"] + ["{}. {}\n".format(i, step) for i, step in enumerate(result.steps, start=1)],
            },
            {
                "cell_type": "markdown",
                "metadata": {},
                "source": [result.info],
            },
        ],
        "metadata": {"kernelspec": {"display_name": "Python 3", "language": "python", "name": "python3"}},
        "nbformat": 4,
        "nbformat_minor": 5,
    }

    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(json.dumps(notebook, ensure_ascii=False, indent=2), encoding="utf-8")
    return str(output)
