"""Access to the bundled evidence files (logs, metrics, catalog, runbooks)."""

from __future__ import annotations

import logging
from pathlib import Path

import aiofiles

logger = logging.getLogger(__name__)

TEXT_ENCODING = "utf-8"
TEXT_ERRORS = "replace"


def log_path(service: str) -> str:
    return f"logs/{service}.log"


def runbook_path(service: str) -> str:
    return f"knowledge_base/{service}-runbook.md"


CATALOG_PATH = "services.json"


class BundledData:
    """Resolve logical names to files under a root directory and read them."""

    def __init__(self, root: Path) -> None:
        self.root = Path(root).resolve()

    def resolve(self, relative: str) -> Path | None:
        """Return the file for `relative`, or None if missing or outside the root."""
        if not relative:
            return None
        p = (self.root / relative).resolve()
        if self.root not in p.parents:
            logger.warning("Rejected path outside data dir: %s", relative)
            return None
        if not p.is_file():
            return None
        return p

    async def load_text(self, relative: str) -> str | None:
        """Read a bundled file as text, line endings untouched; None means not found."""
        p = self.resolve(relative)
        if p is None:
            return None
        async with aiofiles.open(
            p, encoding=TEXT_ENCODING, errors=TEXT_ERRORS, newline=""
        ) as f:
            return await f.read()
