"""
voicing_core/patterns.py — Load the jazz voicing pattern library.

Uses importlib.resources (stdlib) to read voicing_patterns.yaml bundled in
the voicing_core/data/ package. The file is parsed once per process and
turned into a tuple of frozen VoicingPattern values; library order is
significant because recognition returns the first match.

Load-time validation (any failure raises ValueError):
    - every entry has the required keys
    - ids are unique across the library
    - every role, category and chord function is a known enum value
"""

from __future__ import annotations

import functools
import importlib.resources
import logging
from typing import Any

import yaml  # PyYAML

from voicing_core.types import ChordFunction, PatternCategory, VoicingPattern, VoicingRole

logger = logging.getLogger(__name__)

_DATA_PACKAGE = "voicing_core.data"
_LIBRARY_FILE = "voicing_patterns.yaml"

_REQUIRED_KEYS = ("id", "name", "pattern", "category", "description", "why_it_works", "common_use")


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


def _parse_entry(entry: dict[str, Any]) -> VoicingPattern:
    missing = [key for key in _REQUIRED_KEYS if key not in entry]
    if missing:
        raise ValueError(f"Pattern entry {entry.get('id', '?')!r} missing keys: {missing}")

    return VoicingPattern(
        id=str(entry["id"]),
        name=str(entry["name"]),
        pattern=tuple(VoicingRole(role) for role in entry["pattern"]),
        flexible=bool(entry.get("flexible", False)),
        category=PatternCategory(entry["category"]),
        description=str(entry["description"]),
        why_it_works=str(entry["why_it_works"]),
        common_use=str(entry["common_use"]),
        caution=entry.get("caution"),
        sound_character=entry.get("sound_character"),
        recommended_for=tuple(ChordFunction(f) for f in entry.get("recommended_for", ())),
    )


def parse_pattern_library(text: str) -> tuple[VoicingPattern, ...]:
    """Parse a pattern library YAML document.

    Args:
        text: YAML text with a top-level ``patterns`` list.

    Returns:
        Patterns in document order.

    Raises:
        ValueError: On a malformed document, unknown enum value or duplicate id.
    """
    data = yaml.safe_load(text)
    if not isinstance(data, dict) or not isinstance(data.get("patterns"), list):
        raise ValueError("Pattern library must be a mapping with a 'patterns' list")

    patterns = tuple(_parse_entry(entry) for entry in data["patterns"])

    seen: set[str] = set()
    for pattern in patterns:
        if pattern.id in seen:
            raise ValueError(f"Duplicate pattern id {pattern.id!r}")
        seen.add(pattern.id)
    return patterns


# ---------------------------------------------------------------------------
# Public loader
# ---------------------------------------------------------------------------


@functools.cache
def load_voicing_patterns() -> tuple[VoicingPattern, ...]:
    """Return the bundled pattern library, parsed once and cached."""
    pkg = importlib.resources.files(_DATA_PACKAGE)
    text = (pkg / _LIBRARY_FILE).read_text(encoding="utf-8")
    patterns = parse_pattern_library(text)
    logger.debug("Loaded %d voicing patterns from %s", len(patterns), _LIBRARY_FILE)
    return patterns


def all_pattern_ids() -> list[str]:
    """All pattern ids in library order."""
    return [pattern.id for pattern in load_voicing_patterns()]


def get_pattern_by_id(pattern_id: str) -> VoicingPattern | None:
    """The pattern with ``pattern_id``, or None if there is none."""
    return next((p for p in load_voicing_patterns() if p.id == pattern_id), None)


def patterns_by_category(category: PatternCategory | str) -> list[VoicingPattern]:
    """Patterns in one structural category, in library order.

    Raises:
        ValueError: For an unknown category.
    """
    category = PatternCategory(category)
    return [p for p in load_voicing_patterns() if p.category is category]
