"""Local command line for the evidence tools (no MCP client needed).

Examples:
    evidence-tools logs payment-service --lines 50
    evidence-tools metrics "checkout p95 latency" --range 30m
    evidence-tools services
    evidence-tools runbook auth-service
    evidence-tools correlate "503s from 10:02" "error rate 12%"
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from collections.abc import Sequence

from evidence_tools_server.core.config import resolve_server_config
from evidence_tools_server.tools.evidence import EvidenceTools


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Query the bundled triage evidence from a shell.")
    sub = p.add_subparsers(dest="command", required=True)

    logs = sub.add_parser("logs", help="Fetch and analyze recent log lines")
    logs.add_argument("service")
    logs.add_argument("--lines", type=int, default=None, help="Lines to return (default: 200)")

    metrics = sub.add_parser("metrics", help="Query metrics for an expression")
    metrics.add_argument("expr")
    metrics.add_argument("--range", dest="range_", default="1h", help="Time range (default: 1h)")

    sub.add_parser("services", help="List known services")

    runbook = sub.add_parser("runbook", help="Print a service runbook")
    runbook.add_argument("service")

    corr = sub.add_parser("correlate", help="Correlate log and metric findings")
    corr.add_argument("log_findings")
    corr.add_argument("metric_findings")
    return p


async def _run(tools: EvidenceTools, args: argparse.Namespace) -> str:
    if args.command == "logs":
        return await tools.fetch_logs(args.service, args.lines)
    if args.command == "metrics":
        return await tools.query_metrics(args.expr, args.range_)
    if args.command == "services":
        return await tools.get_known_services()
    if args.command == "runbook":
        return await tools.get_runbook(args.service)
    return await tools.correlate_evidence(args.log_findings, args.metric_findings)


def main(argv: Sequence[str] | None = None) -> None:
    args = _build_parser().parse_args(argv)
    try:
        cfg = resolve_server_config()
        tools = EvidenceTools.from_config(cfg)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        raise SystemExit(2)

    print(asyncio.run(_run(tools, args)))


if __name__ == "__main__":
    main()
