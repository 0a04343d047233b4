"""Server configuration and environment overrides."""

from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from pathlib import Path

DEFAULT_DATA_DIR = Path(__file__).resolve().parent.parent / "data"

DATA_DIR_ENV = "EVIDENCE_TOOLS_DATA_DIR"
MAX_LOGGED_RESPONSE_ENV = "EVIDENCE_TOOLS_MAX_LOGGED_RESPONSE"
DEFAULT_LINES_ENV = "EVIDENCE_TOOLS_DEFAULT_LINES"
LOG_LEVEL_ENV = "EVIDENCE_TOOLS_LOG_LEVEL"


@dataclass(frozen=True, slots=True)
class ServerConfig:
    data_dir: Path = field(default_factory=lambda: DEFAULT_DATA_DIR)
    # Longer tool responses are truncated in the message log.
    max_logged_response_length: int = 5000
    default_lines: int = 200
    log_level: str = "INFO"


def _positive_int_env(name: str) -> int | None:
    env = os.getenv(name)
    if env is None or env == "":
        return None
    try:
        value = int(env)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer") from exc
    if value < 1:
        raise ValueError(f"{name} must be >= 1")
    return value


def resolve_server_config(cfg: ServerConfig | None = None) -> ServerConfig:
    """Return config with optional env overrides applied."""
    if cfg is None:
        cfg = ServerConfig()

    changes: dict[str, object] = {}

    data_dir = os.getenv(DATA_DIR_ENV)
    if data_dir:
        changes["data_dir"] = Path(data_dir).expanduser().resolve()

    max_logged = _positive_int_env(MAX_LOGGED_RESPONSE_ENV)
    if max_logged is not None:
        changes["max_logged_response_length"] = max_logged

    default_lines = _positive_int_env(DEFAULT_LINES_ENV)
    if default_lines is not None:
        changes["default_lines"] = default_lines

    level = os.getenv(LOG_LEVEL_ENV)
    if level:
        changes["log_level"] = level.strip().upper()

    return replace(cfg, **changes) if changes else cfg
