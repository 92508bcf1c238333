"""Streamlit frontend for the calculus calculator API."""

from __future__ import annotations

from typing import Any, Dict, Optional

import streamlit as st

from calculus_calculator.ui.api_client import (
    build_calculation_payload,
    call_calculate_api,
    call_clear_history_api,
    call_history_api,
    call_replay_api,
)

PAGE_TITLE = "Calculus Calculator"

EXAMPLE_FUNCTIONS = ("x^2", "x^3", "sin(x)", "cos(x)", "e^x", "ln(x)", "tan(x)", "1/x")


def _render_intro() -> None:
    st.title(PAGE_TITLE)
    st.markdown(
        """
Type a function of one variable and compute its derivative or integral.

Supported notation: `^` for powers, `ln(x)` for the natural log, `log(x)` for base 10,
`e^x`, `√`, `π` and `∞`. Give both integration limits for a definite integral.
        """.strip()
    )


def _to_latex(text: str) -> str:
    return text.replace("*", r" \cdot ").replace("∫", r"\int ")


def _render_result(response: Dict[str, Any]) -> None:
    operation = response.get("operation", "derivative")
    variable = response.get("variable", "x")
    label = "Derivative" if operation == "derivative" else "Integral"
    symbol = "f'({})".format(variable) if operation == "derivative" else r"\int f({v})\,d{v}".format(v=variable)

    st.subheader("{} Result".format(label))
    st.markdown("Original function:")
    st.latex("f({}) = {}".format(variable, _to_latex(response.get("input_expression", ""))))
    st.markdown("{}:".format(label))
    st.latex("{} = {}".format(symbol, _to_latex(response.get("display_result", ""))))
    if response.get("unresolved"):
        st.warning("No closed form was found with the built-in rules.")

    steps = response.get("steps") or []
    if steps:
        st.markdown("### Steps")
        for index, step in enumerate(steps, start=1):
            st.markdown("{}. {}".format(index, step))

    info = response.get("info")
    if info:
        with st.expander("About this operation"):
            st.markdown(info)


def _render_history(api_url: str, session_id: Optional[str]) -> None:
    st.header("History")
    try:
        entries = call_history_api(api_url).get("entries", [])
    except RuntimeError as exc:
        st.caption(str(exc))
        return

    if not entries:
        st.caption("No calculations yet")
        return

    if st.button("Clear history"):
        call_clear_history_api(api_url)
        st.rerun()

    for entry in entries:
        label = "Derivative" if entry.get("operation") == "derivative" else "Integral"
        st.markdown("**{} of:** `{}`".format(label, entry.get("expression", "")))
        st.markdown("Result: `{}`".format(entry.get("result", "")))
        st.caption(entry.get("timestamp", ""))
        if st.button("Replay", key="replay-{}".format(entry.get("id"))):
            st.session_state["last_response"] = call_replay_api(api_url, entry["id"], session_id=session_id)
        st.divider()


def main() -> None:
    """Runs the Streamlit app lifecycle."""
    st.set_page_config(page_title=PAGE_TITLE, page_icon="∫", layout="wide")
    _render_intro()

    with st.sidebar:
        st.header("Settings")
        api_url = st.text_input("API base URL", value="http://localhost:8000")
        session_id = st.session_state.setdefault("session_id", None)

    if "function_input" not in st.session_state:
        st.session_state["function_input"] = ""

    st.markdown("Examples:")
    columns = st.columns(len(EXAMPLE_FUNCTIONS))
    for column, example in zip(columns, EXAMPLE_FUNCTIONS):
        if column.button(example, key="example-{}".format(example)):
            st.session_state["function_input"] = example

    expression = st.text_input("f(x) =", key="function_input", placeholder="e.g. x^3 + sin(x)")
    variable = st.text_input("Variable", value="x")

    with st.expander("Advanced options"):
        lower = st.text_input("Lower limit", value="")
        upper = st.text_input("Upper limit", value="")

    derivative_col, integral_col = st.columns(2)
    operation = None
    if derivative_col.button("Derivative", type="primary", use_container_width=True):
        operation = "derivative"
    if integral_col.button("Integral", type="primary", use_container_width=True):
        operation = "integral"

    if operation:
        try:
            payload = build_calculation_payload(
                expression,
                operation=operation,
                variable=variable,
                lower=lower,
                upper=upper,
                session_id=session_id,
            )
            with st.spinner("Calculating..."):
                response = call_calculate_api(api_url, payload)
            st.session_state["session_id"] = response.get("session_id")
            st.session_state["last_response"] = response
        except (ValueError, RuntimeError) as exc:
            st.error("Error calculating: {}".format(exc))

    last_response = st.session_state.get("last_response")
    if last_response:
        _render_result(last_response)

    with st.sidebar:
        _render_history(api_url, st.session_state.get("session_id"))


if __name__ == "__main__":
    main()
