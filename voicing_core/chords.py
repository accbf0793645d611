"""
voicing_core/chords.py — Chord tone calculator.

Knows WHAT notes are in a chord, not WHERE to play them. Every function is
pure modular arithmetic over the 12-note chromatic scale.

    Dm7 → D (root), F (3rd), A (5th), C (7th)

Conventions:
  - Pitch classes are sharp-spelled (C#, never Db)
  - Extensions and alterations are fixed semitone offsets from the root
  - Alterations exist only for dominant 7th chords
"""

from __future__ import annotations

from types import MappingProxyType
from typing import NamedTuple

from voicing_core.types import (
    Alterations,
    Chord,
    ChordFunction,
    ChordQuality,
    ChordTones,
    ExtendedChordTones,
    ExtensionKey,
    Extensions,
    NoteName,
    VoicingRole,
)

# ---------------------------------------------------------------------------
# Chromatic scale + chord formulas
# ---------------------------------------------------------------------------

CHROMATIC_SCALE: tuple[NoteName, ...] = tuple(NoteName)


class ChordFormula(NamedTuple):
    """Semitone offsets from the root."""

    third: int
    fifth: int
    seventh: int


CHORD_FORMULAS: MappingProxyType[ChordQuality, ChordFormula] = MappingProxyType(
    {
        ChordQuality.MAJ7: ChordFormula(third=4, fifth=7, seventh=11),
        ChordQuality.MIN7: ChordFormula(third=3, fifth=7, seventh=10),
        ChordQuality.DOM7: ChordFormula(third=4, fifth=7, seventh=10),
        ChordQuality.MIN7B5: ChordFormula(third=3, fifth=6, seventh=10),
        ChordQuality.DIM7: ChordFormula(third=3, fifth=6, seventh=9),
    }
)

# Extensions: defined for every quality (♯11 included)
EXTENSION_INTERVALS: MappingProxyType[str, int] = MappingProxyType(
    {
        "ninth": 14,
        "eleventh": 17,
        "sharp_eleventh": 18,
        "thirteenth": 21,
    }
)

# Alterations: dominant 7th only
ALTERATION_INTERVALS: MappingProxyType[str, int] = MappingProxyType(
    {
        "flat_ninth": 13,
        "sharp_ninth": 15,
        "sharp_eleventh": 18,
        "flat_thirteenth": 20,
    }
)


class ExtensionRecommendation(NamedTuple):
    """Extension fields worth adding for a chord function."""

    extensions: tuple[str, ...]
    alterations: tuple[ExtensionKey, ...] = ()


EXTENSION_RECOMMENDATIONS: MappingProxyType[ChordFunction, ExtensionRecommendation] = (
    MappingProxyType(
        {
            ChordFunction.II: ExtensionRecommendation(extensions=("ninth", "eleventh")),
            ChordFunction.V: ExtensionRecommendation(
                extensions=("ninth", "thirteenth"),
                alterations=(
                    ExtensionKey.FLAT_NINTH,
                    ExtensionKey.SHARP_NINTH,
                    ExtensionKey.SHARP_ELEVENTH,
                    ExtensionKey.FLAT_THIRTEENTH,
                ),
            ),
            ChordFunction.I: ExtensionRecommendation(extensions=("ninth",)),
            ChordFunction.OTHER: ExtensionRecommendation(extensions=("ninth",)),
        }
    )
)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def note_at(root: NoteName | str, semitones: int) -> NoteName:
    """Move up from ``root`` by ``semitones``, wrapping around the octave.

    Examples:
        >>> note_at("D", 3)
        <NoteName.F: 'F'>
        >>> note_at("B", 2)
        <NoteName.C_SHARP: 'C#'>
    """
    return CHROMATIC_SCALE[(NoteName(root).chroma + semitones) % 12]


def chord_tones(chord: Chord) -> ChordTones:
    """Return root, third, fifth and seventh of ``chord`` (no octave info).

    Example:
        >>> chord_tones(Chord("D", "min7"))
        ChordTones(root=D, third=F, fifth=A, seventh=C)
    """
    formula = CHORD_FORMULAS[chord.quality]
    return ChordTones(
        root=chord.root,
        third=note_at(chord.root, formula.third),
        fifth=note_at(chord.root, formula.fifth),
        seventh=note_at(chord.root, formula.seventh),
    )


def extended_chord_tones(chord: Chord) -> ExtendedChordTones:
    """Return chord tones, all four extensions, and alterations for dom7.

    Alterations are computed together or not at all — they are None for any
    quality other than dominant 7th.
    """
    tones = chord_tones(chord)
    extensions = Extensions(
        **{name: note_at(chord.root, offset) for name, offset in EXTENSION_INTERVALS.items()}
    )
    alterations = None
    if chord.quality is ChordQuality.DOM7:
        alterations = Alterations(
            **{name: note_at(chord.root, offset) for name, offset in ALTERATION_INTERVALS.items()}
        )
    return ExtendedChordTones(
        root=tones.root,
        third=tones.third,
        fifth=tones.fifth,
        seventh=tones.seventh,
        extensions=extensions,
        alterations=alterations,
    )


def recommended_extensions(chord: Chord) -> Extensions:
    """Extensions recommended for the chord's harmonic function.

    ii → 9, 11   V → 9, 13   I → 9   other → 9
    """
    recommendation = EXTENSION_RECOMMENDATIONS[chord.function]
    full = extended_chord_tones(chord).extensions
    return Extensions(**{name: getattr(full, name) for name in recommendation.extensions})


def note_for_role(tones: ExtendedChordTones, role: VoicingRole | str) -> NoteName | None:
    """Resolve the pitch class a voicing role plays in ``tones``.

    Returns None when the role is not available for the chord, e.g. ♭9 on a
    minor 7th chord.
    """
    role = VoicingRole(role)
    basic = {
        VoicingRole.ROOT: tones.root,
        VoicingRole.THIRD: tones.third,
        VoicingRole.FIFTH: tones.fifth,
        VoicingRole.SEVENTH: tones.seventh,
        VoicingRole.NINTH: tones.extensions.ninth,
        VoicingRole.ELEVENTH: tones.extensions.eleventh,
        VoicingRole.SHARP_ELEVENTH: tones.extensions.sharp_eleventh,
        VoicingRole.THIRTEENTH: tones.extensions.thirteenth,
    }
    if role in basic:
        return basic[role]
    if tones.alterations is None:
        return None
    altered = {
        VoicingRole.FLAT_NINTH: tones.alterations.flat_ninth,
        VoicingRole.SHARP_NINTH: tones.alterations.sharp_ninth,
        VoicingRole.FLAT_THIRTEENTH: tones.alterations.flat_thirteenth,
    }
    return altered[role]
