"""
voicing_core/types.py — Frozen value objects for the voicing engine.

All types are immutable — frozen dataclasses or str-valued enums — safe to
hash, cache, and use as dict keys. No I/O, no side effects, no external
dependencies beyond stdlib.

Types:
    NoteName          — one of the 12 sharp-spelled pitch classes
    ChordQuality      — the five supported 7th-chord qualities
    ChordFunction     — harmonic role of a chord (ii, V, I, other)
    VoicingRole       — chord function of a single voice (root, third, ...)
    ExtensionKey      — selectable extension / alteration keys
    Chord             — root + quality (+ optional function)
    ChordTones        — root, third, fifth, seventh
    Extensions        — 9, 11, ♯11, 13 (optional per field)
    Alterations       — ♭9, ♯9, ♯11, ♭13 (dominant chords only)
    ExtendedChordTones — chord tones + extensions + alterations
    PitchedNote       — pitch class + octave, ordered by absolute pitch
    PlaygroundBlock   — a user-orderable voice in the playground
    VoicingPattern    — a named jazz voicing idiom from the pattern library
    DetectedPattern   — result of matching an ordered role sequence
    VoicingWarning    — a severity-tagged voicing quality finding
"""

from __future__ import annotations

import functools
import re
from dataclasses import dataclass, field
from enum import Enum

# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


class NoteName(str, Enum):
    """Sharp-spelled pitch class. Member order is the chromatic scale from C."""

    C = "C"
    C_SHARP = "C#"
    D = "D"
    D_SHARP = "D#"
    E = "E"
    F = "F"
    F_SHARP = "F#"
    G = "G"
    G_SHARP = "G#"
    A = "A"
    A_SHARP = "A#"
    B = "B"

    @property
    def chroma(self) -> int:
        """Pitch class index 0–11 (C=0, C#=1, ... B=11)."""
        return _CHROMA[self]

    def __str__(self) -> str:
        return self.value


_CHROMA: dict[NoteName, int] = {name: index for index, name in enumerate(NoteName)}


class ChordQuality(str, Enum):
    """Supported 7th-chord qualities."""

    MAJ7 = "maj7"
    MIN7 = "min7"
    DOM7 = "dom7"
    MIN7B5 = "min7b5"
    DIM7 = "dim7"

    def __str__(self) -> str:
        return self.value


class ChordFunction(str, Enum):
    """Harmonic function of a chord inside a ii–V–I."""

    II = "ii"
    V = "V"
    I = "I"  # noqa: E741
    OTHER = "other"

    def __str__(self) -> str:
        return self.value


class VoicingRole(str, Enum):
    """Function of a voice within the chord — not a fixed pitch."""

    ROOT = "root"
    THIRD = "third"
    FIFTH = "fifth"
    SEVENTH = "seventh"
    NINTH = "ninth"
    FLAT_NINTH = "flatNinth"
    SHARP_NINTH = "sharpNinth"
    ELEVENTH = "eleventh"
    SHARP_ELEVENTH = "sharpEleventh"
    THIRTEENTH = "thirteenth"
    FLAT_THIRTEENTH = "flatThirteenth"

    def __str__(self) -> str:
        return self.value


class ExtensionKey(str, Enum):
    """Selectable extensions and alterations (keys of a SelectedExtensions map)."""

    NINTH = "ninth"
    FLAT_NINTH = "flatNinth"
    SHARP_NINTH = "sharpNinth"
    ELEVENTH = "eleventh"
    SHARP_ELEVENTH = "sharpEleventh"
    THIRTEENTH = "thirteenth"
    FLAT_THIRTEENTH = "flatThirteenth"

    @property
    def role(self) -> VoicingRole:
        """The voicing role a voice carrying this extension plays."""
        return VoicingRole(self.value)

    def __str__(self) -> str:
        return self.value


class ExtensionFamily(str, Enum):
    """Extension degree families used by the avoid-note rules."""

    NINTH = "ninth"
    ELEVENTH = "eleventh"
    THIRTEENTH = "thirteenth"

    def __str__(self) -> str:
        return self.value


class DensityHint(str, Enum):
    """Placement hint: compact (single hand) or spread (two hands)."""

    COMPACT = "compact"
    SPREAD = "spread"

    def __str__(self) -> str:
        return self.value


class VariantKey(str, Enum):
    """Which variant of an extension degree a playground block carries."""

    NATURAL = "natural"
    FLAT = "flat"
    SHARP = "sharp"

    def __str__(self) -> str:
        return self.value


class MatchType(str, Enum):
    EXACT = "exact"
    FUZZY = "fuzzy"

    def __str__(self) -> str:
        return self.value


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"
    SUGGESTION = "suggestion"

    def __str__(self) -> str:
        return self.value


class WarningCategory(str, Enum):
    PLAYABILITY = "playability"
    HARMONY = "harmony"
    VOICING = "voicing"

    def __str__(self) -> str:
        return self.value


class PatternCategory(str, Enum):
    SHELL = "shell"
    ROOTLESS = "rootless"
    SPREAD = "spread"
    INVERSION = "inversion"
    SLASH = "slash"

    def __str__(self) -> str:
        return self.value


# ---------------------------------------------------------------------------
# Chord
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Chord:
    """An abstract 7th chord.

    Plain strings are accepted for every field and coerced to their enum,
    e.g. Chord("D", "min7") == Chord(NoteName.D, ChordQuality.MIN7).

    Attributes:
        root:     Root pitch class, e.g. NoteName.D
        quality:  One of the five ChordQuality values
        function: Harmonic function, used for extension recommendations
    """

    root: NoteName
    quality: ChordQuality
    function: ChordFunction = ChordFunction.OTHER

    def __post_init__(self) -> None:
        # Enum lookup raises ValueError for unknown values
        object.__setattr__(self, "root", NoteName(self.root))
        object.__setattr__(self, "quality", ChordQuality(self.quality))
        object.__setattr__(self, "function", ChordFunction(self.function))


@dataclass(frozen=True)
class ChordTones:
    """The four chord tones of a 7th chord, as pitch classes."""

    root: NoteName
    third: NoteName
    fifth: NoteName
    seventh: NoteName


@dataclass(frozen=True)
class Extensions:
    """Extension tones above the 7th. None means not applicable / not requested."""

    ninth: NoteName | None = None
    eleventh: NoteName | None = None
    sharp_eleventh: NoteName | None = None
    thirteenth: NoteName | None = None


@dataclass(frozen=True)
class Alterations:
    """Altered tensions. Only ever populated for dominant 7th chords."""

    flat_ninth: NoteName | None = None
    sharp_ninth: NoteName | None = None
    sharp_eleventh: NoteName | None = None
    flat_thirteenth: NoteName | None = None


@dataclass(frozen=True)
class ExtendedChordTones:
    """Chord tones plus extensions, plus alterations for dominant chords.

    Attributes:
        root, third, fifth, seventh: The basic chord tones
        extensions:  Always populated (all four fields)
        alterations: None unless the chord quality is dom7
    """

    root: NoteName
    third: NoteName
    fifth: NoteName
    seventh: NoteName
    extensions: Extensions
    alterations: Alterations | None = None

    @property
    def chord_tones(self) -> ChordTones:
        return ChordTones(root=self.root, third=self.third, fifth=self.fifth, seventh=self.seventh)


# ---------------------------------------------------------------------------
# PitchedNote
# ---------------------------------------------------------------------------

_NOTE_PATTERN = re.compile(r"^([A-G]#?)(-?\d+)$")


@functools.total_ordering
@dataclass(frozen=True)
class PitchedNote:
    """A pitch class placed in a specific octave, e.g. C#4.

    Ordered by absolute pitch. The string form ("C#4") is only produced and
    parsed at the boundary: str(note) and PitchedNote.parse().

    Attributes:
        name:   Pitch class
        octave: Scientific-pitch octave number (C4 = middle C)
    """

    name: NoteName
    octave: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "name", NoteName(self.name))
        if isinstance(self.octave, bool) or not isinstance(self.octave, int):
            raise ValueError(f"PitchedNote.octave must be an int, got {self.octave!r}")

    @classmethod
    def parse(cls, text: str) -> PitchedNote:
        """Parse a note token such as "C#4" or "B3".

        Raises:
            ValueError: If the token is malformed or uses a flat spelling.
        """
        match = _NOTE_PATTERN.match(text.strip()) if isinstance(text, str) else None
        if match is None:
            raise ValueError(f"Invalid note: {text!r}")
        return cls(name=NoteName(match.group(1)), octave=int(match.group(2)))

    @property
    def midi(self) -> int:
        """MIDI-style absolute pitch (C4 = 60)."""
        return (self.octave + 1) * 12 + self.name.chroma

    def raised(self, octaves: int = 1) -> PitchedNote:
        """Same pitch class, ``octaves`` octaves higher."""
        return PitchedNote(self.name, self.octave + octaves)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, PitchedNote):
            return NotImplemented
        return self.midi < other.midi

    def __str__(self) -> str:
        return f"{self.name.value}{self.octave}"


# ---------------------------------------------------------------------------
# Playground blocks
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PlaygroundVariant:
    """One selectable spelling of an extension degree (e.g. 9, ♭9 or ♯9)."""

    key: VariantKey
    pitch_class: NoteName
    role: VoicingRole
    label: str
    extension_key: ExtensionKey | None = None


@dataclass(frozen=True)
class PlaygroundBlock:
    """A user-orderable voice. List position is the intended low-to-high order.

    Attributes:
        id:           Stable identity used when merging regenerated blocks
        role:         Chord function of this voice
        pitch_class:  Pitch class, no octave
        enabled:      Whether the voice sounds
        is_extension: True for 9th / 11th / 13th blocks
        label:        Short display label, e.g. "R", "3", "♭9"
        variants:     Available spellings for extension blocks
        variant_key:  Currently selected variant, if any
    """

    id: str
    role: VoicingRole
    pitch_class: NoteName
    enabled: bool = True
    is_extension: bool = False
    label: str = ""
    variants: tuple[PlaygroundVariant, ...] = ()
    variant_key: VariantKey | None = None

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("PlaygroundBlock.id must not be empty")
        object.__setattr__(self, "role", VoicingRole(self.role))
        object.__setattr__(self, "pitch_class", NoteName(self.pitch_class))


# ---------------------------------------------------------------------------
# Pattern library
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class VoicingPattern:
    """A named jazz voicing idiom. Read-only reference data.

    Attributes:
        id:              Unique pattern id, e.g. "shell-a"
        name:            Display name, e.g. "Shell Position A"
        pattern:         Ordered role sequence (low to high)
        flexible:        Whether the pattern may match with extra notes
        category:        Structural family of the voicing
        description:     One-line description
        why_it_works:    Theory explanation
        common_use:      Typical musical context
        caution:         Optional caveat
        sound_character: Optional short sound description
        recommended_for: Chord functions the voicing suits
    """

    id: str
    name: str
    pattern: tuple[VoicingRole, ...]
    flexible: bool
    category: PatternCategory
    description: str
    why_it_works: str
    common_use: str
    caution: str | None = None
    sound_character: str | None = None
    recommended_for: tuple[ChordFunction, ...] = ()

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("VoicingPattern.id must not be empty")
        if not self.pattern:
            raise ValueError(f"VoicingPattern {self.id!r} must have a non-empty pattern")


@dataclass(frozen=True)
class DetectedPattern:
    """A pattern match for one query. Never persisted.

    Attributes:
        id:          Id of the matched library pattern
        name:        Display name of the matched pattern
        match_type:  EXACT or FUZZY
        confidence:  0–100 (100 for exact matches)
        extra_notes: Input roles not consumed by a fuzzy match
        pattern:     The matched library entry
    """

    id: str
    name: str
    match_type: MatchType
    confidence: int
    pattern: VoicingPattern
    extra_notes: tuple[VoicingRole, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if not (0 <= self.confidence <= 100):
            raise ValueError(f"DetectedPattern.confidence must be in [0, 100], got {self.confidence}")


# ---------------------------------------------------------------------------
# Warnings
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class VoicingWarning:
    """A severity-tagged finding about a voicing."""

    id: str
    severity: Severity
    category: WarningCategory
    message: str
    explanation: str
    suggestion: str | None = None
