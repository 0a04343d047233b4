"""Text and JSON rendering shared by the tool handlers."""

from __future__ import annotations

import json
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

JSON_INDENT = 2
_ONE_DECIMAL = Decimal("0.1")


def fixed1(value: float) -> str:
    """Format a number with one decimal place, rounding halves up (12.35 -> 12.4)."""
    try:
        d = Decimal(repr(float(value)))
        if d.is_finite():
            return str(d.quantize(_ONE_DECIMAL, rounding=ROUND_HALF_UP))
    except (InvalidOperation, ValueError):
        pass
    return f"{value:.1f}"


def as_text(value: Any) -> str:
    """Render a decoded JSON scalar as text.

    JSON null reads as "null" and booleans as "true"/"false". Objects and
    arrays have no scalar text and read as "".
    """
    if value is None:
        return "null"
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    return ""


def to_json(payload: Any, *, pretty: bool = True) -> str:
    """Serialize a JSON payload. Raises TypeError/ValueError for unserializable data."""
    if pretty:
        return json.dumps(payload, indent=JSON_INDENT, ensure_ascii=False, allow_nan=False)
    return json.dumps(payload, separators=(",", ":"), ensure_ascii=False, allow_nan=False)


def minimal_error(message: str) -> str:
    """Hand-built error object for when regular serialization already failed."""
    escaped = (
        str(message)
        .replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("\n", "\\n")
        .replace("\r", "\\r")
        .replace("\t", "\\t")
    )
    return f'{{"error":"{escaped}"}}'


def render_error(message: str, **context: Any) -> str:
    """Render `{"error": message, **context}`, degrading to `minimal_error`."""
    try:
        return to_json({"error": message, **context}, pretty=False)
    except (TypeError, ValueError):
        return minimal_error(message)


def try_parse_json(text: str) -> Any | None:
    """Return the decoded JSON value, or None when text is not JSON."""
    try:
        return json.loads(text)
    except (TypeError, ValueError):
        return None
