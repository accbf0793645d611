"""
voicing_core/analysis.py — Voicing quality analysis.

Implements small detectors, each looking at one aspect of a placed voicing
and emitting a VoicingWarning when a threshold is crossed.

Detectors (warning ids in parentheses):
    Playability
        1. note count    — too-many-notes (> 7), many-notes (6–7)
        2. span          — wide-span (> hand span + slack)
        3. clusters      — dense-cluster (two adjacent intervals ≤ minor 3rd)
    Harmony
        4. guide tones   — missing-guide-tones, missing-third, missing-seventh
        5. bass register — muddy-bass (close intervals at or below C3)
        6. root position — root-not-lowest
        7. avoid notes   — alteration-clash-b9-maj7, avoid-11-maj7,
                           avoid-11-dom7, avoid-13-minor
    Spacing
        8. gaps          — wide-gap (adjacent voices > an octave apart)
        9. balance       — unbalanced-spread
       10. sparseness    — sparse-voicing (two notes > an octave apart)

Design:
    - Pure: blocks + placed notes + quality → tuple[VoicingWarning].
    - Each detector returns VoicingWarning | None; None means no problem.
    - Role checks look at the enabled blocks; interval checks at the notes,
      sorted by pitch.
    - Output order is detector order; sort_warnings() ranks by severity.
"""

from __future__ import annotations

from collections.abc import Sequence

from voicing_core.config import DEFAULT_ANALYSIS_CONFIG, AnalysisConfig
from voicing_core.constants import MIN_NOTES
from voicing_core.notes import to_midi
from voicing_core.types import (
    ChordQuality,
    PitchedNote,
    PlaygroundBlock,
    Severity,
    VoicingRole,
    VoicingWarning,
    WarningCategory,
)

_SEVERITY_RANK: dict[Severity, int] = {
    Severity.ERROR: 0,
    Severity.WARNING: 1,
    Severity.SUGGESTION: 2,
}


def _intervals(midi_notes: Sequence[int]) -> list[int]:
    return [high - low for low, high in zip(midi_notes, midi_notes[1:])]


# ---------------------------------------------------------------------------
# Playability
# ---------------------------------------------------------------------------


def _detect_note_count(count: int, config: AnalysisConfig) -> VoicingWarning | None:
    if count > config.max_playable_notes:
        return VoicingWarning(
            id="too-many-notes",
            severity=Severity.WARNING,
            category=WarningCategory.PLAYABILITY,
            message="Too many notes to play comfortably",
            explanation=f"More than {config.max_playable_notes} notes is difficult to voice on piano.",
            suggestion="Try removing less essential notes (like the 5th or root).",
        )
    if count > config.max_comfortable_notes:
        return VoicingWarning(
            id="many-notes",
            severity=Severity.SUGGESTION,
            category=WarningCategory.PLAYABILITY,
            message="Many notes for one hand",
            explanation=f"{config.max_comfortable_notes}+ notes typically requires two hands.",
            suggestion="Consider if this is a two-hand voicing.",
        )
    return None


def _detect_wide_span(midi_notes: Sequence[int], config: AnalysisConfig) -> VoicingWarning | None:
    if len(midi_notes) < 2:
        return None
    span = midi_notes[-1] - midi_notes[0]
    if span <= config.wide_span_threshold:
        return None
    return VoicingWarning(
        id="wide-span",
        severity=Severity.SUGGESTION,
        category=WarningCategory.PLAYABILITY,
        message="Wide interval span",
        explanation=f"Span of {span} semitones is difficult for one hand.",
        suggestion="This voicing likely requires two hands.",
    )


def _detect_dense_cluster(midi_notes: Sequence[int], config: AnalysisConfig) -> VoicingWarning | None:
    intervals = _intervals(midi_notes)
    threshold = config.cluster_threshold
    if not any(a <= threshold and b <= threshold for a, b in zip(intervals, intervals[1:])):
        return None
    return VoicingWarning(
        id="dense-cluster",
        severity=Severity.WARNING,
        category=WarningCategory.PLAYABILITY,
        message="Dense note cluster",
        explanation="Three notes within a narrow range can be hard to voice clearly.",
        suggestion="Spread the notes wider for better clarity.",
    )


# ---------------------------------------------------------------------------
# Harmony
# ---------------------------------------------------------------------------


def _detect_missing_guide_tones(roles: Sequence[VoicingRole]) -> VoicingWarning | None:
    has_third = VoicingRole.THIRD in roles
    has_seventh = VoicingRole.SEVENTH in roles
    if not has_third and not has_seventh:
        return VoicingWarning(
            id="missing-guide-tones",
            severity=Severity.ERROR,
            category=WarningCategory.HARMONY,
            message="Missing 3rd AND 7th",
            explanation=(
                "The 3rd defines quality (major/minor), the 7th defines chord type. "
                "Both are essential."
            ),
            suggestion="Include at least one guide tone (3rd or 7th).",
        )
    if not has_third:
        return VoicingWarning(
            id="missing-third",
            severity=Severity.WARNING,
            category=WarningCategory.HARMONY,
            message="Missing 3rd",
            explanation="The 3rd defines major/minor quality.",
            suggestion="Add the 3rd to clarify harmonic identity.",
        )
    if not has_seventh:
        return VoicingWarning(
            id="missing-seventh",
            severity=Severity.SUGGESTION,
            category=WarningCategory.HARMONY,
            message="Missing 7th",
            explanation="The 7th defines the chord type and adds color.",
            suggestion="Consider adding the 7th for fuller harmony.",
        )
    return None


def _detect_muddy_bass(midi_notes: Sequence[int], config: AnalysisConfig) -> VoicingWarning | None:
    bass = [midi for midi in midi_notes if midi <= config.bass_ceiling_midi]
    if not any(interval < config.min_bass_interval for interval in _intervals(bass)):
        return None
    return VoicingWarning(
        id="muddy-bass",
        severity=Severity.WARNING,
        category=WarningCategory.HARMONY,
        message="Close intervals in bass register",
        explanation="Notes below C3 sound muddy when stacked closely.",
        suggestion="Spread the lower notes wider, or use only root in bass.",
    )


def _detect_root_not_lowest(roles: Sequence[VoicingRole]) -> VoicingWarning | None:
    if VoicingRole.ROOT not in roles or roles[0] is VoicingRole.ROOT or len(roles) <= 2:
        return None
    return VoicingWarning(
        id="root-not-lowest",
        severity=Severity.SUGGESTION,
        category=WarningCategory.HARMONY,
        message="Root note is not the lowest",
        explanation="Having the root in the bass provides the strongest harmonic foundation.",
        suggestion="Drag the root to the leftmost position for clearer harmony.",
    )


def _detect_avoid_notes(roles: Sequence[VoicingRole], quality: ChordQuality) -> list[VoicingWarning]:
    warnings: list[VoicingWarning] = []
    if quality is ChordQuality.MAJ7:
        if VoicingRole.FLAT_NINTH in roles:
            warnings.append(
                VoicingWarning(
                    id="alteration-clash-b9-maj7",
                    severity=Severity.ERROR,
                    category=WarningCategory.HARMONY,
                    message="♭9 clashes with major 7th",
                    explanation="Flat 9th creates a dissonant minor 9th interval against the major 7th.",
                    suggestion="Use natural 9th or ♯9 instead, or switch to dominant 7th.",
                )
            )
        if VoicingRole.ELEVENTH in roles:
            warnings.append(
                VoicingWarning(
                    id="avoid-11-maj7",
                    severity=Severity.WARNING,
                    category=WarningCategory.HARMONY,
                    message="Natural 11th clashes with major 3rd",
                    explanation="The natural 11th is a half-step above the major 3rd, creating dissonance.",
                    suggestion="Use ♯11 (Lydian sound) or omit the 11th.",
                )
            )
    elif quality is ChordQuality.DOM7:
        if VoicingRole.ELEVENTH in roles:
            warnings.append(
                VoicingWarning(
                    id="avoid-11-dom7",
                    severity=Severity.WARNING,
                    category=WarningCategory.HARMONY,
                    message="Natural 11th clashes with major 3rd",
                    explanation="The natural 11th is a half-step above the major 3rd.",
                    suggestion="Use ♯11 for altered dominant sound, or omit the 11th.",
                )
            )
    elif quality in (ChordQuality.MIN7, ChordQuality.MIN7B5):
        if VoicingRole.THIRTEENTH in roles:
            warnings.append(
                VoicingWarning(
                    id="avoid-13-minor",
                    severity=Severity.SUGGESTION,
                    category=WarningCategory.HARMONY,
                    message="Natural 13th can sound bright in minor context",
                    explanation="The natural 13th conflicts with the minor tonality.",
                    suggestion="Use ♭13 for darker sound, or omit the 13th.",
                )
            )
    return warnings


# ---------------------------------------------------------------------------
# Spacing
# ---------------------------------------------------------------------------


def _detect_wide_gap(intervals: Sequence[int], config: AnalysisConfig) -> VoicingWarning | None:
    gaps = [interval for interval in intervals if interval > config.max_gap]
    if not gaps:
        return None
    return VoicingWarning(
        id="wide-gap",
        severity=Severity.SUGGESTION,
        category=WarningCategory.VOICING,
        message="Large gap between voices",
        explanation=f"Gap of {max(gaps)} semitones creates empty space in the voicing.",
        suggestion="Consider filling the gap with another note, or accepting the open sound.",
    )


def _detect_unbalanced_spread(intervals: Sequence[int], config: AnalysisConfig) -> VoicingWarning | None:
    if len(intervals) < 2:
        return None
    smallest, largest = min(intervals), max(intervals)
    if largest <= smallest * config.spread_ratio or smallest > config.cluster_threshold:
        return None
    return VoicingWarning(
        id="unbalanced-spread",
        severity=Severity.SUGGESTION,
        category=WarningCategory.VOICING,
        message="Unbalanced voice spacing",
        explanation="Some voices are very close together while others are far apart.",
        suggestion="Aim for more even spacing between voices.",
    )


def _detect_sparse_voicing(midi_notes: Sequence[int], config: AnalysisConfig) -> VoicingWarning | None:
    if len(midi_notes) != 2 or midi_notes[1] - midi_notes[0] <= config.max_gap:
        return None
    return VoicingWarning(
        id="sparse-voicing",
        severity=Severity.SUGGESTION,
        category=WarningCategory.VOICING,
        message="Sparse voicing with only 2 notes",
        explanation="Two notes spread wide can sound empty.",
        suggestion="Add a note in between for richer harmony, or accept the minimalist sound.",
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def analyze_voicing(
    blocks: Sequence[PlaygroundBlock],
    notes: Sequence[PitchedNote | str],
    quality: ChordQuality | str,
    *,
    config: AnalysisConfig = DEFAULT_ANALYSIS_CONFIG,
) -> tuple[VoicingWarning, ...]:
    """Run every detector over a placed voicing.

    Args:
        blocks:  Playground blocks (disabled blocks are ignored)
        notes:   Placed notes, PitchedNote or "C4"-style tokens
        quality: Chord quality, for the avoid-note rules
        config:  Analysis thresholds

    Returns:
        Warnings in detector order. Empty when ``notes`` is empty.

    Raises:
        ValueError: For a malformed note token or unknown quality.

    Example:
        >>> analyze_voicing(blocks, ["C4", "G4"], "maj7")
        (VoicingWarning(id='missing-guide-tones', ...),)
    """
    quality = ChordQuality(quality)
    midi_notes = sorted(to_midi(note) for note in notes)
    if not midi_notes:
        return ()

    roles = [block.role for block in blocks if block.enabled]
    intervals = _intervals(midi_notes)

    found: list[VoicingWarning | None] = [
        _detect_note_count(len(roles), config),
        _detect_wide_span(midi_notes, config),
        _detect_dense_cluster(midi_notes, config),
        _detect_missing_guide_tones(roles),
        _detect_muddy_bass(midi_notes, config),
        _detect_root_not_lowest(roles),
        *_detect_avoid_notes(roles, quality),
        _detect_wide_gap(intervals, config),
        _detect_unbalanced_spread(intervals, config),
        _detect_sparse_voicing(midi_notes, config),
    ]
    return tuple(warning for warning in found if warning is not None)


def check_minimum_blocks(enabled_count: int) -> VoicingWarning | None:
    """Error-severity warning when fewer than MIN_NOTES voices are enabled."""
    if enabled_count >= MIN_NOTES:
        return None
    return VoicingWarning(
        id="min-blocks",
        severity=Severity.ERROR,
        category=WarningCategory.PLAYABILITY,
        message=f"At least {MIN_NOTES} notes required",
        explanation="A voicing needs at least two notes to create harmony.",
        suggestion="Select more notes from the selector above.",
    )


def sort_warnings(warnings: Sequence[VoicingWarning]) -> list[VoicingWarning]:
    """Errors first, then warnings, then suggestions. Stable within a severity."""
    return sorted(warnings, key=lambda warning: _SEVERITY_RANK[warning.severity])
