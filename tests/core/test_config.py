from __future__ import annotations

from pathlib import Path

import pytest

from evidence_tools_server.core.config import (
    DATA_DIR_ENV,
    DEFAULT_DATA_DIR,
    DEFAULT_LINES_ENV,
    LOG_LEVEL_ENV,
    MAX_LOGGED_RESPONSE_ENV,
    ServerConfig,
    resolve_server_config,
)

_ENV = (DATA_DIR_ENV, DEFAULT_LINES_ENV, LOG_LEVEL_ENV, MAX_LOGGED_RESPONSE_ENV)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch) -> None:
    for name in _ENV:
        monkeypatch.delenv(name, raising=False)


def test_defaults() -> None:
    cfg = resolve_server_config()
    assert cfg == ServerConfig()
    assert cfg.data_dir == DEFAULT_DATA_DIR
    assert cfg.max_logged_response_length == 5000
    assert cfg.default_lines == 200


def test_env_overrides(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setenv(DATA_DIR_ENV, str(tmp_path))
    monkeypatch.setenv(DEFAULT_LINES_ENV, "50")
    monkeypatch.setenv(MAX_LOGGED_RESPONSE_ENV, "1000")
    monkeypatch.setenv(LOG_LEVEL_ENV, "debug")

    cfg = resolve_server_config()
    assert cfg.data_dir == tmp_path.resolve()
    assert cfg.default_lines == 50
    assert cfg.max_logged_response_length == 1000
    assert cfg.log_level == "DEBUG"


def test_explicit_config_is_kept_without_env() -> None:
    cfg = ServerConfig(default_lines=7)
    assert resolve_server_config(cfg) is cfg


@pytest.mark.parametrize("value", ["abc", "0", "-5"])
def test_invalid_integer_env(monkeypatch, value: str) -> None:
    monkeypatch.setenv(DEFAULT_LINES_ENV, value)
    with pytest.raises(ValueError, match=DEFAULT_LINES_ENV):
        resolve_server_config()
