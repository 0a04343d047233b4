"""MCP prompt registry.

Prompts are predefined conversation/workflow templates that the client can invoke explicitly.
FastMCP renders only user/assistant messages with a single content block each.
"""

from __future__ import annotations

from mcp.server.fastmcp import FastMCP
from mcp.server.fastmcp.prompts.base import Message, UserMessage

from evidence_tools_server.tools.evidence import RUNBOOK_URI

TRIAGE_PREAMBLE = (
    "You are a senior incident triage assistant for backend services. "
    "Provide concise, evidence-based summaries from logs and metrics. "
    "Do not invent details; if the evidence is insufficient, say so.\n\n"
)


def register_prompts(mcp: FastMCP) -> None:
    """Register prompt templates on the MCP server."""

    @mcp.prompt()
    def triage_incident(
        service: str,
        symptom: str = "",
        lines: int = 200,
        range: str = "1h",  # noqa: A002
    ) -> list[Message]:
        """Build a prompt that walks an agent through evidence gathering for one service."""
        symptom_line = f"Reported symptom: {symptom}\n\n" if symptom else ""
        runbook_uri = RUNBOOK_URI.format(service_name=service)
        return [
            UserMessage(
                f"{TRIAGE_PREAMBLE}"
                f"Triage an incident on {service}.\n"
                f"{symptom_line}"
                "Follow this workflow:\n"
                "- Call get_known_services if you are unsure of the service name.\n"
                f"- Call fetch_logs with service={service} and lines={lines}.\n"
                f"- Call query_metrics with an expression naming {service} and the "
                f"symptom (e.g. error_rate, latency, cpu_usage) and range={range}.\n"
                "- Call correlate_evidence with a one-paragraph summary of each.\n"
                "- Use only tool output as evidence; do not fabricate lines or numbers.\n\n"
                "Return this structure:\n"
                "1) What happened (1-3 bullets)\n"
                "2) Evidence (quoted sample error lines and metric values)\n"
                "3) Suspected root cause (1-2 sentences; say 'Unknown' if unclear)\n"
                "4) Next actions from the runbook (2-4 bullets)\n"
            ),
            UserMessage(f"Runbook for this service: read the resource {runbook_uri}"),
        ]
