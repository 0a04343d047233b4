"""MCP resource registry.

Resources are addressable by URI and can be fetched by the MCP client on demand.
"""

from __future__ import annotations

from typing import Any

from mcp.server.fastmcp import FastMCP

from evidence_tools_server.core.data import CATALOG_PATH
from evidence_tools_server.core.models import CorrelationResult
from evidence_tools_server.tools.evidence import RUNBOOK_NAME, RUNBOOK_URI, EvidenceTools


def register_resources(mcp: FastMCP, tools: EvidenceTools) -> None:
    """Register resource handlers on the MCP server."""

    @mcp.resource("app://evidence-tools/help")
    def help_resource() -> str:
        """Return a short list of available resource URIs."""
        return (
            "Resources:\n"
            "- app://evidence-tools/help\n"
            "- app://evidence-tools/services\n"
            "- app://evidence-tools/schemas/correlation-result\n"
            f"- {RUNBOOK_URI} (Markdown runbook per service)\n"
            f"\nData directory: {tools.data.root}\n"
        )

    @mcp.resource("app://evidence-tools/services", mime_type="application/json")
    async def services_catalog() -> str:
        """Return the raw service catalog document."""
        raw = await tools.data.load_text(CATALOG_PATH)
        if raw is None:
            raise FileNotFoundError(f"{CATALOG_PATH} not found in {tools.data.root}")
        return raw

    @mcp.resource("app://evidence-tools/schemas/correlation-result")
    def correlation_schema() -> dict[str, Any]:
        """Return the JSON schema of the correlate_evidence payload."""
        return CorrelationResult.model_json_schema(by_alias=True)

    @mcp.resource(
        RUNBOOK_URI,
        name=RUNBOOK_NAME,
        description=(
            "Get troubleshooting runbook for a specific service in the agentic AI triage "
            "system. Use this to access service-specific runbooks and troubleshooting guides."
        ),
        mime_type="text/markdown",
    )
    async def runbook(service_name: str) -> str:
        return await tools.get_runbook(service_name)
