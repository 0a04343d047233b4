"""Service catalog rendering."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .codec import as_text


def _names(node: Any) -> list[str] | None:
    if not isinstance(node, list):
        return None
    return [as_text(n) for n in node]


def format_known_services(catalog: Mapping[str, Any]) -> str:
    """Render the catalog document as the text returned by `get_known_services`.

    Expected keys: `services` (list), `categories` (object of lists) and
    `usage_instructions` (text). Each is optional.
    """
    parts = ["Known Services List:\n"]

    services = _names(catalog.get("services"))
    if services is not None:
        parts.append(", ".join(services))

    parts.append("\n\nService Categories:\n")
    categories = catalog.get("categories")
    if isinstance(categories, Mapping):
        for name, members in categories.items():
            listed = _names(members)
            if listed is not None:
                parts.append(f"- {name}: {', '.join(listed)}\n")

    parts.append("\n")
    if "usage_instructions" in catalog:
        parts.append(as_text(catalog["usage_instructions"]))

    return "".join(parts)


def service_count(catalog: Mapping[str, Any]) -> int:
    services = catalog.get("services")
    return len(services) if isinstance(services, list) else 0
