"""
voicing_core/recognition.py — Recognise named jazz voicings from role order.

Given the low-to-high roles of a voicing, find the first library pattern it
realises:

    1. Exact pass over the whole library, in order: same length and same role
       at every position → confidence 100
    2. Fuzzy pass over flexible patterns only: the pattern must appear as an
       ordered subsequence of the input. Matching is greedy left to right;
       every input role not consumed becomes an "extra note".

Fuzzy confidence:

    clamp(50, 95, 100 × len(pattern) / len(roles) − 5 × len(extra_notes))

rounded half up. Fewer than two roles never match.

Example:
    [root, third, seventh]               → shell-a, exact, 100
    [root, third, fifth, seventh, ninth] → shell-a, fuzzy, 50, extras (5th, 9th)
"""

from __future__ import annotations

import math
from collections.abc import Sequence

from voicing_core.notes import format_voicing_role
from voicing_core.patterns import load_voicing_patterns
from voicing_core.types import (
    DetectedPattern,
    MatchType,
    PlaygroundBlock,
    VoicingPattern,
    VoicingRole,
)

MIN_FUZZY_CONFIDENCE = 50
MAX_FUZZY_CONFIDENCE = 95
EXTRA_NOTE_PENALTY = 5


# ---------------------------------------------------------------------------
# Matching
# ---------------------------------------------------------------------------


def _matches_exact(roles: Sequence[VoicingRole], pattern: Sequence[VoicingRole]) -> bool:
    return tuple(roles) == tuple(pattern)


def _match_fuzzy(
    roles: Sequence[VoicingRole], pattern: Sequence[VoicingRole]
) -> tuple[VoicingRole, ...] | None:
    """Extra roles when ``pattern`` is a subsequence of ``roles``, else None."""
    if len(roles) < len(pattern):
        return None

    position = 0
    extra: list[VoicingRole] = []
    for role in roles:
        if position < len(pattern) and role is pattern[position]:
            position += 1
        else:
            extra.append(role)
    if position < len(pattern):
        return None
    return tuple(extra)


def _confidence(total: int, pattern_length: int, extra_count: int) -> int:
    raw = 100 * pattern_length / total - EXTRA_NOTE_PENALTY * extra_count
    clamped = max(MIN_FUZZY_CONFIDENCE, min(MAX_FUZZY_CONFIDENCE, raw))
    return math.floor(clamped + 0.5)


def _detected(
    pattern: VoicingPattern,
    match_type: MatchType,
    confidence: int,
    extra: tuple[VoicingRole, ...] = (),
) -> DetectedPattern:
    return DetectedPattern(
        id=pattern.id,
        name=pattern.name,
        match_type=match_type,
        confidence=confidence,
        pattern=pattern,
        extra_notes=extra,
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def detect_pattern(roles: Sequence[VoicingRole | str]) -> DetectedPattern | None:
    """Detect the first library pattern matching ``roles`` (low to high).

    Returns:
        The match, or None for fewer than two roles or no match.

    Raises:
        ValueError: For an unknown role string.
    """
    roles = tuple(VoicingRole(role) for role in roles)
    if len(roles) < 2:
        return None

    library = load_voicing_patterns()
    for pattern in library:
        if _matches_exact(roles, pattern.pattern):
            return _detected(pattern, MatchType.EXACT, 100)

    for pattern in library:
        if not pattern.flexible:
            continue
        extra = _match_fuzzy(roles, pattern.pattern)
        if extra is not None:
            confidence = _confidence(len(roles), len(pattern.pattern), len(extra))
            return _detected(pattern, MatchType.FUZZY, confidence, extra)

    return None


def detect_pattern_in_blocks(blocks: Sequence[PlaygroundBlock]) -> DetectedPattern | None:
    """detect_pattern() over the roles of the enabled blocks."""
    return detect_pattern([block.role for block in blocks if block.enabled])


def pattern_description(detected: DetectedPattern) -> str:
    """Description of a match; fuzzy matches name their extra notes.

    Example:
        "Root in bass, guide tones (3rd and 7th) on top with added 5th, 9th"
    """
    description = detected.pattern.description
    if detected.match_type is MatchType.EXACT or not detected.extra_notes:
        return description
    extras = ", ".join(format_voicing_role(role) for role in detected.extra_notes)
    return f"{description} with added {extras}"
