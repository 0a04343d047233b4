"""Structured logging of MCP tool calls, responses and resource access.

Messages go to the `mcp_messages` logger so they can be routed or silenced
independently of the module loggers. A failure while logging never affects
the call being logged.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any

from .codec import try_parse_json

RULE = "=" * 47
THIN_RULE = "-" * 47


class CallLogger:
    """Writes call/response records for MCP tools and resources."""

    def __init__(
        self,
        *,
        max_response_length: int = 5000,
        logger: logging.Logger | None = None,
    ) -> None:
        if max_response_length < 1:
            raise ValueError("max_response_length must be >= 1")
        self.max_response_length = max_response_length
        self.logger = logger or logging.getLogger("mcp_messages")

    def _now(self) -> str:
        return datetime.now(UTC).isoformat()

    def _truncate(self, text: str) -> str:
        if len(text) <= self.max_response_length:
            return text
        cut = len(text) - self.max_response_length
        return f"{text[: self.max_response_length]}\n... (truncated {cut} characters)"

    def tool_call(self, tool: str, arguments: Mapping[str, Any]) -> None:
        try:
            args = json.dumps(dict(arguments), indent=2, ensure_ascii=False, default=str)
            self.logger.info(
                "%s\nMCP TOOL CALL: %s\n%s\nTimestamp: %s\nArguments:\n%s\n%s",
                RULE, tool, THIN_RULE, self._now(), args, RULE,
            )
        except Exception:
            self.logger.warning("Failed to log tool call for %s", tool, exc_info=True)

    def tool_response(self, tool: str, response: str, *, success: bool) -> None:
        try:
            status = "SUCCESS" if success else "ERROR"
            parsed = try_parse_json(response)
            body = response
            if parsed is not None:
                body = json.dumps(parsed, indent=2, ensure_ascii=False)
            self.logger.info(
                "%s\nMCP TOOL RESPONSE: %s - %s\n%s\nTimestamp: %s\nResponse:\n%s\n%s",
                RULE, tool, status, THIN_RULE, self._now(), self._truncate(body), RULE,
            )
            if isinstance(parsed, dict) and "error" in parsed:
                self.logger.warning("Error in response: %s", parsed["error"])
        except Exception:
            self.logger.warning("Failed to log tool response for %s", tool, exc_info=True)

    def resource_access(self, uri: str, name: str, service: str | None = None) -> None:
        try:
            extra = f"\nService: {service}" if service else ""
            self.logger.info(
                "%s\nMCP RESOURCE ACCESS\n%s\nTimestamp: %s\nURI: %s\nName: %s%s\n%s",
                RULE, THIN_RULE, self._now(), uri, name, extra, RULE,
            )
        except Exception:
            self.logger.warning("Failed to log resource access for %s", uri, exc_info=True)

    def resource_response(self, uri: str, content_length: int, *, success: bool) -> None:
        try:
            status = "SUCCESS" if success else "ERROR"
            self.logger.info(
                "MCP RESOURCE RESPONSE: %s - %s\nContent Length: %d characters\n%s",
                uri, status, content_length, RULE,
            )
        except Exception:
            self.logger.warning("Failed to log resource response for %s", uri, exc_info=True)

    def error(self, operation: str, exc: BaseException) -> None:
        try:
            self.logger.error(
                "%s\nMCP ERROR: %s\n%s\nTimestamp: %s\nError Type: %s\nError Message: %s\n%s",
                RULE, operation, THIN_RULE, self._now(), type(exc).__name__, exc, RULE,
                exc_info=exc,
            )
        except Exception:
            self.logger.error("Failed to log error for %s", operation, exc_info=True)
