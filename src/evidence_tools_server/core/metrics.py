"""Metrics routing, formatting and insight heuristics."""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any

from .codec import as_text, fixed1

INVALID_FORMAT_MESSAGE = "Invalid metrics file format"
NO_DATA_INSIGHT = "No metrics data available"
ERROR_INSIGHT = "Error rate metrics requested - indicates error investigation"
LATENCY_INSIGHT = "Performance metrics requested - indicates latency investigation"
CAPACITY_INSIGHT = "Resource utilization metrics - indicates capacity investigation"
EXTREME_VALUES_INSIGHT = "Extreme values detected - potential system limits or failures"

API_GATEWAY_ERRORS = "metrics/api-gateway-errors.json"
CHECKOUT_LATENCY = "metrics/checkout-service-latency.json"
AUTH_ERRORS = "metrics/auth-service-errors.json"
DB_PERFORMANCE = "metrics/db-performance.json"
PAYMENT_ERRORS = "metrics/payment-service-errors.json"
PAYMENT_LATENCY = "metrics/payment-service-latency.json"
USER_RESOURCES = "metrics/user-service-resources.json"
ORDER_THROUGHPUT = "metrics/order-service-throughput.json"

UNKNOWN = "unknown"


def _has_any(text: str, *needles: str) -> bool:
    return any(n in text for n in needles)


def determine_metrics_file(expr: str | None) -> str:
    """Map a metrics expression to the bundled document that answers it."""
    e = (expr or "").lower()

    # Service-specific documents first.
    if "gateway" in e and _has_any(e, "error", "5xx"):
        return API_GATEWAY_ERRORS
    if "checkout" in e and _has_any(e, "latency", "p95", "response_time"):
        return CHECKOUT_LATENCY
    if "auth" in e and _has_any(e, "error", "fail"):
        return AUTH_ERRORS
    if _has_any(e, "db", "database"):
        return DB_PERFORMANCE

    if _has_any(e, "error", "fail"):
        return PAYMENT_ERRORS
    if _has_any(e, "latency", "response_time"):
        return PAYMENT_LATENCY
    if _has_any(e, "cpu", "memory", "resource"):
        return USER_RESOURCES
    if _has_any(e, "throughput", "rate"):
        return ORDER_THROUGHPUT
    return PAYMENT_ERRORS


# JSON documents come from outside; read fields leniently, like a JSON tree
# would: wrong types coerce, missing values fall back to defaults.


def _num(node: Mapping[str, Any], key: str) -> float:
    value = node.get(key)
    if isinstance(value, bool):
        return 1.0 if value else 0.0
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return 0.0
    if isinstance(value, (int, float)) and math.isfinite(value):
        return float(value)
    return 0.0


def _int(node: Mapping[str, Any], key: str) -> int:
    return int(_num(node, key))


def _field_text(node: Mapping[str, Any], key: str) -> str:
    # Only an absent key falls back; an explicit null renders as "null".
    if key not in node:
        return UNKNOWN
    return as_text(node[key])


def _flag(node: Mapping[str, Any], key: str) -> bool:
    value = node.get(key)
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value != 0
    if isinstance(value, str):
        return value.strip() == "true"
    return False


def _group(metrics: Mapping[str, Any], key: str) -> Mapping[str, Any] | None:
    """Return a metric group, or None when absent. Non-object groups read as empty."""
    if key not in metrics:
        return None
    node = metrics[key]
    return node if isinstance(node, Mapping) else {}


def _error_lines(metrics: Mapping[str, Any]) -> list[str]:
    error_rate = _group(metrics, "error_rate")
    if error_rate is None:
        return []

    if "previous_hour" in error_rate:
        previous = _num(error_rate, "previous_hour")
    elif "previous_window" in error_rate:
        previous = _num(error_rate, "previous_window")
    else:
        previous = 0.0

    out = [
        f"- Error Rate: {fixed1(_num(error_rate, 'current'))}% "
        f"({_field_text(error_rate, 'status')}), Previous: {fixed1(previous)}%"
    ]

    error_count = _group(metrics, "error_count")
    if error_count is not None and "total" in error_count:
        out.append(f"- Total Errors: {_int(error_count, 'total')} requests")

    spike = _group(metrics, "error_spike")
    if spike is not None and _flag(spike, "detected"):
        out.append(
            f"- Spike Detected: {_field_text(spike, 'time_window')} "
            f"(peak: {fixed1(_num(spike, 'peak_rate'))}%, "
            f"cause: {_field_text(spike, 'primary_cause')})"
        )
    return out


def _latency_lines(metrics: Mapping[str, Any]) -> list[str]:
    latency = _group(metrics, "latency_percentiles")
    if latency is None:
        return []

    out = [
        f"- Latency P95: {_int(latency, 'p95')}ms, "
        f"P99: {_int(latency, 'p99')}ms, P99.9: {_int(latency, 'p99.9')}ms"
    ]

    avg = _group(metrics, "average_latency")
    if avg is not None:
        out.append(
            f"- Average Latency: {_int(avg, 'current')}ms ({_field_text(avg, 'status')}), "
            f"Baseline: {_int(avg, 'baseline')}ms"
        )
    return out


def _resource_lines(metrics: Mapping[str, Any]) -> list[str]:
    cpu = _group(metrics, "cpu_utilization")
    if cpu is None:
        return []

    out = [
        f"- CPU Usage: {fixed1(_num(cpu, 'current'))}% ({_field_text(cpu, 'status')}), "
        f"Peak: {fixed1(_num(cpu, 'peak_15min'))}%"
    ]

    memory = _group(metrics, "memory_utilization")
    if memory is not None:
        out.append(
            f"- Memory: Heap {fixed1(_num(memory, 'heap_used'))}%, "
            f"GC Pressure: {_field_text(memory, 'gc_pressure')}"
        )
    return out


def _throughput_lines(metrics: Mapping[str, Any]) -> list[str]:
    request_rate = _group(metrics, "request_rate")
    if request_rate is None:
        return []

    out = [
        f"- Request Rate: {_int(request_rate, 'current')} req/sec, "
        f"Peak: {_int(request_rate, 'peak_1h')} req/sec"
    ]

    success = _group(metrics, "success_rate")
    if success is not None:
        out.append(
            f"- Success Rate: {fixed1(_num(success, 'current'))}% "
            f"({_field_text(success, 'status')}), Target: {fixed1(_num(success, 'target'))}%"
        )
    return out


def _alert_lines(metrics: Mapping[str, Any]) -> list[str]:
    alerts = metrics.get("alerts")
    if not isinstance(alerts, list) or not alerts:
        return []
    return ["- Active Alerts: " + "".join(f"{as_text(a)}; " for a in alerts)]


def format_metrics_output(document: Any, expr: str | None = None, range_: str | None = None) -> str:
    """Render a metrics document as a short human-readable summary.

    `expr` and `range_` are accepted for symmetry with the query but do not
    influence the text; only the document's own fields do.
    """
    metrics = document.get("metrics") if isinstance(document, Mapping) else None
    if metrics is None:
        return INVALID_FORMAT_MESSAGE
    if not isinstance(metrics, Mapping):
        metrics = {}

    lines = ["Metrics Data Summary:"]
    lines.extend(_error_lines(metrics))
    lines.extend(_latency_lines(metrics))
    lines.extend(_resource_lines(metrics))
    lines.extend(_throughput_lines(metrics))
    lines.extend(_alert_lines(metrics))
    return "".join(f"{line}\n" for line in lines)


def analyze_metrics(raw: str | None, expr: str | None) -> list[str]:
    """Return keyword-driven insights for a metrics query."""
    if not raw:
        return [NO_DATA_INSIGHT]

    e = expr or ""
    insights: list[str] = []
    if "error" in e:
        insights.append(ERROR_INSIGHT)
    if _has_any(e, "latency", "response_time"):
        insights.append(LATENCY_INSIGHT)
    if _has_any(e, "cpu", "memory"):
        insights.append(CAPACITY_INSIGHT)

    if _has_any(raw, "100%", "0.00"):
        insights.append(EXTREME_VALUES_INSIGHT)
    return insights
