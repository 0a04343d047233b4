from __future__ import annotations

import json
from pathlib import Path

import pytest

from evidence_tools_server.core import metrics as m
from evidence_tools_server.core.config import DEFAULT_DATA_DIR
from evidence_tools_server.core.data import BundledData, log_path, runbook_path
from evidence_tools_server.core.metrics import format_metrics_output


@pytest.mark.asyncio
async def test_load_text(tmp_path: Path, write_bundle) -> None:
    data = BundledData(write_bundle(tmp_path))
    text = await data.load_text(log_path("svc"))
    assert text is not None
    assert text.startswith("2025-12-30T08:12:01Z INFO service started")


@pytest.mark.asyncio
async def test_load_text_missing(tmp_path: Path, write_bundle) -> None:
    data = BundledData(write_bundle(tmp_path))
    assert await data.load_text(log_path("nope")) is None
    assert await data.load_text("") is None


@pytest.mark.asyncio
async def test_load_text_rejects_paths_outside_root(tmp_path: Path, write_bundle) -> None:
    root = write_bundle(tmp_path / "data")
    (tmp_path / "secret.log").write_text("top secret", encoding="utf-8")
    data = BundledData(root)
    assert await data.load_text("logs/../../secret.log") is None
    assert await data.load_text(runbook_path("../../../secret")) is None


@pytest.mark.asyncio
async def test_load_text_replaces_undecodable_bytes(tmp_path: Path) -> None:
    (tmp_path / "logs").mkdir()
    (tmp_path / "logs" / "bin.log").write_bytes(b"ok \xff\xfe error\n")
    text = await BundledData(tmp_path).load_text(log_path("bin"))
    assert text is not None
    assert "error" in text


@pytest.mark.parametrize(
    "relative",
    [
        m.API_GATEWAY_ERRORS,
        m.CHECKOUT_LATENCY,
        m.AUTH_ERRORS,
        m.DB_PERFORMANCE,
        m.PAYMENT_ERRORS,
        m.PAYMENT_LATENCY,
        m.USER_RESOURCES,
        m.ORDER_THROUGHPUT,
    ],
)
def test_every_routed_metrics_document_is_bundled(relative: str) -> None:
    path = BundledData(DEFAULT_DATA_DIR).resolve(relative)
    assert path is not None
    document = json.loads(path.read_text(encoding="utf-8"))
    assert format_metrics_output(document).startswith("Metrics Data Summary:\n")
