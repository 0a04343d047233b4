from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path

import pytest

from evidence_tools_server.core.call_log import CallLogger
from evidence_tools_server.core.config import DEFAULT_DATA_DIR
from evidence_tools_server.core.data import BundledData
from evidence_tools_server.tools.evidence import EvidenceTools

SAMPLE_LOG = "\n".join(
    [
        "2025-12-30T08:12:01Z INFO service started",
        "2025-12-30T08:12:03Z WARN retrying request id=abc",
        "2025-12-30T08:12:04Z ERROR upstream call failed status=503",
        "2025-12-30T08:12:05Z ERROR connection refused by db-primary",
        "2025-12-30T08:12:06Z INFO request ok",
    ]
) + "\n"

SAMPLE_METRICS = {
    "metrics": {
        "error_rate": {"current": 13.8, "previous_hour": 0.4, "status": "critical"},
        "error_count": {"total": 57},
        "alerts": ["HighErrorRate"],
    }
}

SAMPLE_CATALOG = {
    "services": ["svc", "other-svc"],
    "categories": {"core": ["svc"], "edge": ["other-svc"]},
    "usage_instructions": "Use exact names.",
}


@pytest.fixture
def write_bundle() -> Callable[[Path], Path]:
    """Write a small data directory with one service of each kind."""

    def _write(root: Path) -> Path:
        (root / "logs").mkdir(parents=True, exist_ok=True)
        (root / "metrics").mkdir(exist_ok=True)
        (root / "knowledge_base").mkdir(exist_ok=True)
        (root / "logs" / "svc.log").write_text(SAMPLE_LOG, encoding="utf-8")
        (root / "metrics" / "payment-service-errors.json").write_text(
            json.dumps(SAMPLE_METRICS), encoding="utf-8"
        )
        (root / "services.json").write_text(json.dumps(SAMPLE_CATALOG), encoding="utf-8")
        (root / "knowledge_base" / "svc-runbook.md").write_text(
            "# svc Runbook\n\nRestart it.\n", encoding="utf-8"
        )
        return root

    return _write


@pytest.fixture
def tools(tmp_path: Path, write_bundle) -> EvidenceTools:
    root = write_bundle(tmp_path / "data")
    return EvidenceTools(data=BundledData(root), calls=CallLogger(max_response_length=200))


@pytest.fixture
def bundled_tools() -> EvidenceTools:
    return EvidenceTools(data=BundledData(DEFAULT_DATA_DIR))
