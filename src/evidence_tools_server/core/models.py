"""Core data models for evidence analysis."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


@dataclass(frozen=True, slots=True)
class LogAnalysis:
    """Heuristic summary of a block of log text."""

    error_count: int = 0
    error_patterns: list[str] = field(default_factory=list)  # first-seen order, no duplicates
    status_code_counts: dict[str, int] = field(default_factory=dict)
    anomalies: list[str] = field(default_factory=list)
    sample_error_lines: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Return the wire representation used in `fetch_logs` responses."""
        return {
            "errorCount": self.error_count,
            "errorPatterns": list(self.error_patterns),
            "httpStatusCounts": dict(self.status_code_counts),
            "anomalies": list(self.anomalies),
            "sampleErrorLines": list(self.sample_error_lines),
        }


class PotentialCorrelations(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    timeline_alignment: str = Field(
        alias="timelineAlignment",
        description="Prompt for aligning error spikes with performance degradation.",
    )
    dependency_failures: str = Field(
        alias="dependencyFailures",
        description="Prompt for checking dependency failures against error increases.",
    )
    resource_exhaustion: str = Field(
        alias="resourceExhaustion",
        description="Prompt for relating resource exhaustion to error patterns.",
    )


class Confidence(BaseModel):
    model_config = ConfigDict(frozen=True)

    level: str = Field(description="Confidence label (High, Medium or Low).")
    reasoning: str = Field(description="How the confidence label should be interpreted.")


class CorrelationResult(BaseModel):
    """Correlation template returned by `correlate_evidence`."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    log_findings: str | None = Field(alias="logFindings", description="Log findings, echoed verbatim.")
    metric_findings: str | None = Field(
        alias="metricFindings", description="Metric findings, echoed verbatim."
    )
    potential_correlations: PotentialCorrelations = Field(alias="potentialCorrelations")
    confidence: Confidence

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)
