"""MCP tool implementations.

This module contains the *implementation* behind the exposed MCP tools and the
runbook resource. Keep this layer thin: load the bundled file, hand the text
to the core analysis functions and render the result as text.

Every handler returns something the caller can use. Missing files become an
error payload; unexpected failures are logged and converted to one as well.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any

from evidence_tools_server.core.call_log import CallLogger
from evidence_tools_server.core.catalog import format_known_services, service_count
from evidence_tools_server.core.codec import minimal_error, render_error, to_json
from evidence_tools_server.core.config import ServerConfig
from evidence_tools_server.core.correlation import correlate
from evidence_tools_server.core.data import CATALOG_PATH, BundledData, log_path, runbook_path
from evidence_tools_server.core.log_analysis import analyze_logs, tail_lines
from evidence_tools_server.core.metrics import (
    analyze_metrics,
    determine_metrics_file,
    format_metrics_output,
)

logger = logging.getLogger(__name__)

SOURCE = "classpath"
RUNBOOK_URI = "kb://runbooks/{service_name}"
RUNBOOK_NAME = "Service Runbook"
CATALOG_MISSING = "services.json configuration file not found"


def runbook_not_found(service_name: str) -> str:
    return f"# Runbook Not Found\n\nNo runbook available for service: {service_name}"


def parse_document(raw: str) -> Any:
    """Parse a JSON document; a blank file has no document and yields None."""
    if not raw.strip(" \t\r\n"):
        return None
    return json.loads(raw)


class EvidenceTools:
    """Tool handlers bound to a data directory and a call logger."""

    def __init__(
        self,
        *,
        data: BundledData,
        calls: CallLogger | None = None,
        default_lines: int = 200,
    ) -> None:
        if default_lines < 1:
            raise ValueError("default_lines must be >= 1")
        self.data = data
        self.calls = calls or CallLogger()
        self.default_lines = default_lines

    @classmethod
    def from_config(cls, cfg: ServerConfig) -> EvidenceTools:
        return cls(
            data=BundledData(cfg.data_dir),
            calls=CallLogger(max_response_length=cfg.max_logged_response_length),
            default_lines=cfg.default_lines,
        )

    def _respond(self, tool: str, response: str, *, success: bool) -> str:
        self.calls.tool_response(tool, response, success=success)
        return response

    def _fail(self, tool: str, exc: Exception, message: str, **context: Any) -> str:
        logger.exception("Error in %s", tool)
        self.calls.error(tool, exc)
        return self._respond(tool, render_error(message, **context), success=False)

    async def fetch_logs(self, service: str, lines: int | None = None) -> str:
        """Fetch recent log lines for a service with automatic error analysis.

        Returns the last `lines` lines (default 200) plus error counts, HTTP
        status counts, detected patterns, anomalies and sample error lines.
        """
        requested = self.default_lines if lines is None else lines
        self.calls.tool_call("fetch_logs", {"service": service, "lines": requested})
        logger.info("fetch_logs called - service=%s lines=%s", service, requested)

        try:
            text = await self.data.load_text(log_path(service))
            if text is None:
                response = render_error(
                    f"No log file found for service: {service}", service=service
                )
                return self._respond("fetch_logs", response, success=False)

            recent, returned = tail_lines(text, requested)
            analysis = analyze_logs(recent)
            payload = {
                "logs": recent,
                "source": SOURCE,
                "service": service,
                "linesReturned": returned,
                "linesRequested": requested,
                "analysis": analysis.to_dict(),
            }
            logger.debug(
                "fetch_logs completed - errors=%d patterns=%d",
                analysis.error_count,
                len(analysis.error_patterns),
            )
            return self._respond("fetch_logs", to_json(payload), success=True)
        except Exception as e:
            return self._fail("fetch_logs", e, f"Failed to fetch logs: {e}", service=service)

    async def query_metrics(self, expr: str, range: str = "1h") -> str:  # noqa: A002
        """Query performance metrics (error rates, latency, CPU, throughput).

        Returns the raw metrics document, a formatted summary and heuristic
        insights for the expression.
        """
        self.calls.tool_call("query_metrics", {"expr": expr, "range": range})
        logger.info("query_metrics called - expr=%s range=%s", expr, range)

        try:
            relative = determine_metrics_file(expr)
            raw = await self.data.load_text(relative)
            if raw is None:
                response = render_error(
                    f"No metrics file found for query: {expr}", expr=expr, range=range
                )
                return self._respond("query_metrics", response, success=False)

            document = parse_document(raw)
            formatted = format_metrics_output(document, expr, range)
            insights = analyze_metrics(raw, expr)
            payload = {
                "raw": raw,
                "formatted": formatted,
                "source": SOURCE,
                "expr": expr,
                "range": range,
                "insights": insights,
            }
            logger.debug("query_metrics completed - file=%s insights=%d", relative, len(insights))
            return self._respond("query_metrics", to_json(payload), success=True)
        except Exception as e:
            return self._fail(
                "query_metrics", e, f"Failed to query metrics: {e}", expr=expr, range=range
            )

    async def correlate_evidence(self, logFindings: str, metricFindings: str) -> str:  # noqa: N803
        """Correlate log findings with metric findings.

        Echoes both descriptions next to the correlation checks to perform
        (timeline alignment, dependency failures, resource exhaustion) and a
        confidence guide.
        """
        self.calls.tool_call(
            "correlate_evidence",
            {"logFindings": logFindings, "metricFindings": metricFindings},
        )
        logger.info("correlate_evidence called")

        try:
            result = correlate(logFindings, metricFindings)
            return self._respond("correlate_evidence", to_json(result.to_dict()), success=True)
        except Exception as e:
            logger.exception("Error in correlate_evidence")
            self.calls.error("correlate_evidence", e)
            response = minimal_error(f"Failed to correlate evidence: {e}")
            return self._respond("correlate_evidence", response, success=False)

    async def get_known_services(self) -> str:
        """List all known services and their categories for incident classification."""
        self.calls.tool_call("get_known_services", {})
        logger.info("get_known_services called")

        try:
            raw = await self.data.load_text(CATALOG_PATH)
            if raw is None:
                return self._respond(
                    "get_known_services", render_error(CATALOG_MISSING), success=False
                )

            catalog = parse_document(raw)
            if not isinstance(catalog, Mapping):
                catalog = {}
            text = format_known_services(catalog)
            logger.debug("get_known_services completed - %d services", service_count(catalog))
            return self._respond("get_known_services", text, success=True)
        except Exception as e:
            logger.exception("Error in get_known_services")
            self.calls.error("get_known_services", e)
            response = f"Error loading services configuration: {e}"
            return self._respond("get_known_services", response, success=False)

    async def get_runbook(self, service_name: str) -> str:
        """Return the Markdown troubleshooting runbook for a service."""
        uri = RUNBOOK_URI.format(service_name=service_name)
        self.calls.resource_access(uri, RUNBOOK_NAME, service_name)
        logger.info("get_runbook called - service=%s", service_name)

        try:
            content = await self.data.load_text(runbook_path(service_name))
        except Exception as e:
            logger.exception("Error in get_runbook")
            self.calls.error("get_runbook", e)
            content = f"# Error\n\nFailed to load runbook: {e}"
            self.calls.resource_response(uri, len(content), success=False)
            return content

        if content is None:
            content = runbook_not_found(service_name)
            self.calls.resource_response(uri, len(content), success=False)
            return content

        self.calls.resource_response(uri, len(content), success=True)
        return content
