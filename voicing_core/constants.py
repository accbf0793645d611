"""
voicing_core/constants.py — Interval, MIDI and voicing-limit constants.

Conventions:
  - Intervals are semitone distances
  - MIDI pitch anchor: C4 = 60 (middle C), C3 = 48
"""

from __future__ import annotations

from types import MappingProxyType

# ---------------------------------------------------------------------------
# Intervals (semitones)
# ---------------------------------------------------------------------------

UNISON: int = 0
MINOR_SECOND: int = 1
MAJOR_SECOND: int = 2
MINOR_THIRD: int = 3
MAJOR_THIRD: int = 4
PERFECT_FOURTH: int = 5
TRITONE: int = 6
PERFECT_FIFTH: int = 7
MINOR_SIXTH: int = 8
MAJOR_SIXTH: int = 9
MINOR_SEVENTH: int = 10
MAJOR_SEVENTH: int = 11
OCTAVE: int = 12
MINOR_NINTH: int = 13
MAJOR_NINTH: int = 14
MINOR_TENTH: int = 15  # octave + minor 3rd — largest comfortable hand span

INTERVAL_NAMES: MappingProxyType[int, str] = MappingProxyType(
    {
        UNISON: "unison",
        MINOR_SECOND: "minor second",
        MAJOR_SECOND: "major second",
        MINOR_THIRD: "minor third",
        MAJOR_THIRD: "major third",
        PERFECT_FOURTH: "perfect fourth",
        TRITONE: "tritone",
        PERFECT_FIFTH: "perfect fifth",
        MINOR_SIXTH: "minor sixth",
        MAJOR_SIXTH: "major sixth",
        MINOR_SEVENTH: "minor seventh",
        MAJOR_SEVENTH: "major seventh",
        OCTAVE: "octave",
        MINOR_NINTH: "minor ninth",
        MAJOR_NINTH: "major ninth",
        MINOR_TENTH: "minor tenth",
    }
)

# ---------------------------------------------------------------------------
# MIDI reference pitches
# ---------------------------------------------------------------------------

MIDDLE_C: int = 60  # C4
MIDI_C3: int = 48

# ---------------------------------------------------------------------------
# Voicing limits (playability / quality analysis)
# ---------------------------------------------------------------------------

MIN_NOTES: int = 2  # a voicing needs at least two voices
MAX_COMFORTABLE_NOTES: int = 5  # one hand
MAX_PLAYABLE_NOTES: int = 7  # both hands, not recommended
MAX_HAND_SPAN_SEMITONES: int = MINOR_TENTH
CLUSTER_THRESHOLD: int = MINOR_THIRD

# ---------------------------------------------------------------------------
# Bass register
# ---------------------------------------------------------------------------

BASS_UPPER_LIMIT_MIDI: int = MIDI_C3
MIN_BASS_INTERVAL: int = PERFECT_FOURTH
