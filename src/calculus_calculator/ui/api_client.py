"""HTTP client helpers for the Streamlit frontend."""

from __future__ import annotations

import json
import logging
import time
from typing import Any, Dict, Optional

import httpx

logger = logging.getLogger("calculus_calculator.ui.api_client")


def build_calculation_payload(
    expression: str,
    operation: Optional[str] = None,
    variable: Optional[str] = None,
    lower: Optional[str] = None,
    upper: Optional[str] = None,
    session_id: Optional[str] = None,
) -> Dict[str, Any]:
    """Builds `/v1/calculate` payload from UI form data.

    Args:
        expression: Function typed by the user.
        operation: `derivative`, `integral`, or None to repeat the last one.
        variable: Independent variable; blank values are omitted.
        lower: Lower integration limit.
        upper: Upper integration limit.
        session_id: Optional session identifier.

    Returns:
        JSON-serializable payload dictionary.

    Raises:
        ValueError: If the expression is blank or the operation is unknown.
    """
    cleaned = (expression or "").strip()
    if not cleaned:
        raise ValueError("Please enter a function")

    payload: Dict[str, Any] = {"expression": cleaned}
    if operation:
        normalized_operation = str(operation).strip().lower()
        if normalized_operation not in {"derivative", "integral"}:
            raise ValueError("Unsupported operation '{}'".format(operation))
        payload["operation"] = normalized_operation

    optional_fields = {"variable": variable, "lower": lower, "upper": upper, "session_id": session_id}
    for key, value in optional_fields.items():
        if value is None:
            continue
        text = str(value).strip()
        if text:
            payload[key] = text
    return payload


def _extract_error_detail(raw: str) -> str:
    try:
        parsed = json.loads(raw)
    except ValueError:
        return raw
    if isinstance(parsed, dict) and "detail" in parsed:
        return str(parsed["detail"])
    return raw


def _request(
    method: str,
    base_url: str,
    path: str,
    timeout_seconds: float,
    client: Optional[httpx.Client] = None,
    **kwargs: Any,
) -> Dict[str, Any]:
    endpoint = base_url.rstrip("/") + path
    started_at = time.perf_counter()
    logger.info("HTTP %s start endpoint=%s timeout=%ss", method, endpoint, timeout_seconds)
    owns_client = client is None
    http = client or httpx.Client(timeout=timeout_seconds)
    try:
        response = http.request(method, endpoint, **kwargs)
        elapsed_ms = (time.perf_counter() - started_at) * 1000.0
        logger.info("HTTP %s done endpoint=%s status=%s elapsed_ms=%.1f", method, endpoint, response.status_code, elapsed_ms)
        if response.status_code >= 400:
            raise RuntimeError("API error {}: {}".format(response.status_code, _extract_error_detail(response.text)))
        return response.json()
    except httpx.ConnectError as exc:
        logger.error("HTTP connect error endpoint=%s error=%s", endpoint, exc)
        raise RuntimeError("Could not connect to the API: {}".format(exc)) from exc
    except httpx.TimeoutException as exc:
        logger.error("HTTP timeout endpoint=%s", endpoint)
        raise RuntimeError("API request timed out after {}s".format(timeout_seconds)) from exc
    finally:
        if owns_client:
            http.close()


def call_calculate_api(
    base_url: str,
    payload: Dict[str, Any],
    timeout_seconds: float = 30,
    client: Optional[httpx.Client] = None,
) -> Dict[str, Any]:
    """Posts one calculation and returns the parsed response.

    Raises:
        RuntimeError: On HTTP errors, connection failures or timeouts.
    """
    return _request("POST", base_url, "/v1/calculate", timeout_seconds, client=client, json=payload)


def call_history_api(
    base_url: str,
    limit: int = 50,
    timeout_seconds: float = 30,
    client: Optional[httpx.Client] = None,
) -> Dict[str, Any]:
    params = {"limit": max(1, min(int(limit), 500))}
    return _request("GET", base_url, "/v1/history", timeout_seconds, client=client, params=params)


def call_replay_api(
    base_url: str,
    entry_id: int,
    session_id: Optional[str] = None,
    timeout_seconds: float = 30,
    client: Optional[httpx.Client] = None,
) -> Dict[str, Any]:
    params = {"session_id": session_id} if session_id else None
    path = "/v1/history/{}/replay".format(int(entry_id))
    return _request("POST", base_url, path, timeout_seconds, client=client, params=params)


def call_clear_history_api(
    base_url: str,
    timeout_seconds: float = 30,
    client: Optional[httpx.Client] = None,
) -> Dict[str, Any]:
    return _request("DELETE", base_url, "/v1/history", timeout_seconds, client=client)
