"""Heuristic log analysis.

Scans raw log text line by line and classifies each line with a handful of
regular expressions. The result is a `LogAnalysis` value; nothing is kept
between calls.
"""

from __future__ import annotations

import re

from .codec import fixed1
from .models import LogAnalysis

MAX_SAMPLE_ERROR_LINES = 5
HIGH_ERROR_RATE_RATIO = 0.1
DB_CONNECTIVITY_LABEL = "Database connectivity issues"

_ERROR_RE = re.compile(r"(?i)(error|exception|failed|timeout|refused)", re.ASCII)
_HTTP_STATUS_RE = re.compile(r"(?i)(5\d{2}|4\d{2})", re.ASCII)
_DB_ERROR_RE = re.compile(r"(?i)(connection.*refused|deadlock|timeout.*database)", re.ASCII)


def split_lines(text: str | None) -> list[str]:
    """Split on newlines, dropping trailing empty lines.

    A trailing newline does not add a line: "a\\nb\\n" has two lines.
    """
    if not text:
        return []
    lines = text.split("\n")
    while lines and lines[-1] == "":
        lines.pop()
    return lines


def tail_lines(text: str | None, count: int) -> tuple[str, int]:
    """Return the last `count` lines, each newline-terminated, and how many were kept."""
    lines = split_lines(text)
    if count <= 0:
        return "", 0
    kept = lines[-count:]
    return "".join(f"{line}\n" for line in kept), len(kept)


def _add_pattern(patterns: list[str], label: str) -> None:
    if label not in patterns:
        patterns.append(label)


def analyze_logs(text: str | None) -> LogAnalysis:
    """Count error lines, HTTP 4xx/5xx codes and database symptoms in `text`."""
    if not text:
        return LogAnalysis()

    error_count = 0
    patterns: list[str] = []
    status_counts: dict[str, int] = {}
    samples: list[str] = []

    lines = split_lines(text)
    for line in lines:
        if _ERROR_RE.search(line):
            error_count += 1
            if len(samples) < MAX_SAMPLE_ERROR_LINES:
                samples.append(line.strip())

        # Only the first code on a line counts.
        m = _HTTP_STATUS_RE.search(line)
        if m:
            code = m.group(1)
            _add_pattern(patterns, f"HTTP {code} errors")
            status_counts[code] = status_counts.get(code, 0) + 1

        if _DB_ERROR_RE.search(line):
            _add_pattern(patterns, DB_CONNECTIVITY_LABEL)

    anomalies: list[str] = []
    total = len(lines)
    if error_count > total * HIGH_ERROR_RATE_RATIO:
        pct = fixed1(error_count * 100.0 / total)
        anomalies.append(f"High error rate ({error_count} errors in {total} lines = {pct}%)")

    return LogAnalysis(
        error_count=error_count,
        error_patterns=patterns,
        status_code_counts=status_counts,
        anomalies=anomalies,
        sample_error_lines=samples,
    )
