"""Evidence correlation template.

`correlate` does not inspect its inputs: it echoes them next to a fixed set of
analysis prompts and a fixed confidence label. Agents use the prompts to drive
their own reasoning over the findings.
"""

from __future__ import annotations

from .models import Confidence, CorrelationResult, PotentialCorrelations

TIMELINE_ALIGNMENT = "Analyze temporal alignment between error spikes and performance degradation"
DEPENDENCY_FAILURES = "Check if service dependency failures coincide with error increases"
RESOURCE_EXHAUSTION = "Correlate resource exhaustion patterns with error patterns"

CONFIDENCE_LEVEL = "Medium"
CONFIDENCE_REASONING = (
    "Confidence is HIGH if patterns align temporally, MEDIUM if partial alignment, "
    "LOW if no clear correlation"
)

_CORRELATIONS = PotentialCorrelations(
    timeline_alignment=TIMELINE_ALIGNMENT,
    dependency_failures=DEPENDENCY_FAILURES,
    resource_exhaustion=RESOURCE_EXHAUSTION,
)
_CONFIDENCE = Confidence(level=CONFIDENCE_LEVEL, reasoning=CONFIDENCE_REASONING)


def correlate(log_findings: str | None, metric_findings: str | None) -> CorrelationResult:
    return CorrelationResult(
        log_findings=log_findings,
        metric_findings=metric_findings,
        potential_correlations=_CORRELATIONS,
        confidence=_CONFIDENCE,
    )
