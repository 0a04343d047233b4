"""MCP tool registry.

Tools are declared in one table: name, description, the `EvidenceTools`
method that handles the call and its behaviour hints. FastMCP derives the
input schema from the handler signature.
"""

from __future__ import annotations

from dataclasses import dataclass

from mcp.server.fastmcp import FastMCP
from mcp.types import ToolAnnotations

from .evidence import EvidenceTools

READ_ONLY = ToolAnnotations(readOnlyHint=True, idempotentHint=True, openWorldHint=False)


@dataclass(frozen=True, slots=True)
class ToolSpec:
    name: str
    handler: str  # EvidenceTools method name
    description: str
    annotations: ToolAnnotations


TOOL_SPECS: tuple[ToolSpec, ...] = (
    ToolSpec(
        name="fetch_logs",
        handler="fetch_logs",
        description=(
            "Fetch logs from the agentic AI triage system services (payment-service, "
            "checkout-service, auth-service, etc.). Use this tool instead of reading local "
            "files when asked for logs for the triage system or any microservice. Returns "
            "recent log lines with automatic error analysis and anomaly detection. "
            "Arguments: service (e.g. payment-service), lines (default: 200)."
        ),
        annotations=READ_ONLY,
    ),
    ToolSpec(
        name="query_metrics",
        handler="query_metrics",
        description=(
            "Query performance metrics for the agentic AI triage system services. Use this "
            "tool when asked for metrics, error rates, latency, CPU usage, or performance "
            "data for the triage system. Returns parsed metrics with insights and alerts. "
            "Arguments: expr (e.g. error_rate, latency, cpu_usage), range (e.g. 1h, 30m, 5m)."
        ),
        annotations=READ_ONLY,
    ),
    ToolSpec(
        name="correlate_evidence",
        handler="correlate_evidence",
        description=(
            "Correlate findings from logs and metrics for the agentic AI triage system. Use "
            "this after gathering logs and metrics to identify patterns, timeline alignment, "
            "and root causes across the triage system services."
        ),
        annotations=READ_ONLY,
    ),
    ToolSpec(
        name="get_known_services",
        handler="get_known_services",
        description=(
            "Get the complete list of known services for accurate incident classification. "
            "Returns all available services organized by categories with domain mappings "
            "and usage instructions."
        ),
        annotations=READ_ONLY,
    ),
)


def register_tools(mcp: FastMCP, tools: EvidenceTools) -> None:
    """Register every entry of TOOL_SPECS on the MCP server."""
    for spec in TOOL_SPECS:
        mcp.add_tool(
            getattr(tools, spec.handler),
            name=spec.name,
            description=spec.description,
            annotations=spec.annotations,
        )
