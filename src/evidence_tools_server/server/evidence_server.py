"""MCP server entrypoint.

This module wires together:
- Tools: fetch_logs, query_metrics, correlate_evidence, get_known_services
- Resources: runbooks (kb://runbooks/{service_name}) and server metadata
- Prompts: the incident triage workflow

Run locally (stdio):
    python -m evidence_tools_server

Run over HTTP (port 9200 by default):
    python -m evidence_tools_server --transport streamable-http --port 9200
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence

from mcp.server.fastmcp import FastMCP

from evidence_tools_server.core.config import ServerConfig, resolve_server_config
from evidence_tools_server.prompts.registry import register_prompts
from evidence_tools_server.resources.registry import register_resources
from evidence_tools_server.tools.evidence import EvidenceTools
from evidence_tools_server.tools.registry import register_tools

LOGGER = logging.getLogger(__name__)

SERVER_NAME = "evidence-tools"
DEFAULT_PORT = 9200
INSTRUCTIONS = (
    "Remote demonstration service providing centralized logs and metrics for the agentic "
    "AI triage system. When asked for logs or metrics for the triage system, use this "
    "service and do not access the local filesystem. Available services include "
    "payment-service, checkout-service, auth-service, api-gateway, order-service and "
    "user-service."
)


def _configure_logging(level_name: str) -> None:
    """Configure a reasonable default logging setup.

    Logs go to stderr: stdout must remain clean for the stdio transport.
    """
    level = getattr(logging, level_name.upper(), logging.INFO)
    logging.basicConfig(
        stream=sys.stderr,
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def build_server(cfg: ServerConfig | None = None) -> FastMCP:
    """Create a FastMCP server with all tools, resources and prompts registered."""
    if cfg is None:
        cfg = resolve_server_config()
    tools = EvidenceTools.from_config(cfg)

    mcp = FastMCP(SERVER_NAME, instructions=INSTRUCTIONS, json_response=True)
    register_tools(mcp, tools)
    register_resources(mcp, tools)
    register_prompts(mcp)
    return mcp


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Evidence tools MCP server.")
    p.add_argument(
        "--transport",
        choices=["stdio", "streamable-http", "sse"],
        default="stdio",
        help="MCP transport (default: stdio)",
    )
    p.add_argument("--host", default="127.0.0.1", help="Bind address for HTTP transports")
    p.add_argument("--port", type=int, default=DEFAULT_PORT, help="Port for HTTP transports")
    return p.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> None:
    """Start the MCP server."""
    args = _parse_args(argv)
    try:
        cfg = resolve_server_config()
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        raise SystemExit(2)

    _configure_logging(cfg.log_level)
    mcp = build_server(cfg)
    mcp.settings.host = args.host
    mcp.settings.port = args.port
    LOGGER.debug("Starting MCP server (transport=%s, data_dir=%s)", args.transport, cfg.data_dir)
    mcp.run(transport=args.transport)


if __name__ == "__main__":
    main()
