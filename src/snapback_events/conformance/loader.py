"""Fixture loading for snapback-events conformance testing.

Provides FixtureCase (frozen dataclass) and load_fixtures() for data-driven
conformance tests. Reads from the bundled manifest.json and fixture JSON files.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

_FIXTURES_DIR = Path(__file__).parent / "fixtures"
_MANIFEST_PATH = _FIXTURES_DIR / "manifest.json"

_VALID_CATEGORIES = frozenset({"core", "legacy"})


@dataclass(frozen=True)
class FixtureCase:
    """A single fixture test case loaded from the manifest.

    ``maps_to`` is only meaningful for legacy fixtures: the canonical tag
    the payload is expected to map to, or ``None`` when it stays unmapped.
    """

    id: str
    payload: Any
    expected_valid: bool
    event_type: str
    notes: str
    min_version: str
    maps_to: Optional[str] = None


def load_manifest() -> Dict[str, Any]:
    """Return the parsed manifest.json."""
    with open(_MANIFEST_PATH, "r", encoding="utf-8") as fh:
        manifest: Dict[str, Any] = json.load(fh)
    return manifest


def load_fixtures(category: str) -> List[FixtureCase]:
    """Load fixture cases for a category.

    Args:
        category: ``"core"`` or ``"legacy"``.

    Returns:
        List of :class:`FixtureCase` instances with payloads loaded from JSON,
        in manifest order.

    Raises:
        ValueError: If *category* is not one of the recognised categories.
        FileNotFoundError: If the manifest or a referenced fixture file is missing.
    """
    if category not in _VALID_CATEGORIES:
        raise ValueError(
            f"Unknown fixture category: {category!r}. "
            f"Valid categories: {sorted(_VALID_CATEGORIES)}"
        )

    fixtures: List[FixtureCase] = []
    for entry in load_manifest()["fixtures"]:
        fixture_path: str = entry["path"]
        if not fixture_path.startswith(category + "/"):
            continue

        full_path = _FIXTURES_DIR / fixture_path
        if not full_path.exists():
            raise FileNotFoundError(
                f"Fixture file referenced in manifest does not exist: {full_path}"
            )

        with open(full_path, "r", encoding="utf-8") as fh:
            payload: Any = json.load(fh)

        fixtures.append(
            FixtureCase(
                id=entry["id"],
                payload=payload,
                expected_valid=entry["expected_result"] == "valid",
                event_type=entry["event_type"],
                notes=entry["notes"],
                min_version=entry["min_version"],
                maps_to=entry.get("maps_to"),
            )
        )

    return fixtures
