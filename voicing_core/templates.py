"""
voicing_core/templates.py — Two-hand voicing templates and ii–V–I progressions.

A template says WHICH chord tones go in which hand, starting at which octave:

    Shell A   LH: root        RH: 3rd, 7th
    Shell B   LH: root        RH: 7th, 3rd
    Open      LH: root, 5th   RH: 3rd, 7th

generate_voicing() realises a template for any chord by stacking each hand in
close position from its base octave. PROGRESSIONS holds voice-led ii–V–I
voicings in C for every template; the extended ones are generated, the three
basic ones are written out by hand because Shell B keeps a wide right hand
that close-position stacking would collapse.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from types import MappingProxyType

from voicing_core.chords import extended_chord_tones, note_for_role
from voicing_core.notes import parse_notes, transpose_note
from voicing_core.placement import build_close_position
from voicing_core.types import Chord, ChordFunction, PitchedNote, VoicingRole

# ---------------------------------------------------------------------------
# Types
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class VoicingTemplate:
    """Abstract left-hand / right-hand voicing recipe.

    Attributes:
        id:                 Stable template id, e.g. "shell-a"
        name:               Display name
        left_hand:          Roles for the left hand, low to high
        right_hand:         Roles for the right hand, low to high
        left_hand_octave:   Octave of the lowest left-hand note
        right_hand_octave:  Octave of the lowest right-hand note
        category:           "shell", "shell-extended" or "open"
    """

    id: str
    name: str
    left_hand: tuple[VoicingRole, ...]
    right_hand: tuple[VoicingRole, ...]
    left_hand_octave: int = 2
    right_hand_octave: int = 3
    category: str = "shell"

    def __post_init__(self) -> None:
        if not self.left_hand or not self.right_hand:
            raise ValueError(f"Template {self.id!r} needs at least one note per hand")
        object.__setattr__(self, "left_hand", tuple(VoicingRole(r) for r in self.left_hand))
        object.__setattr__(self, "right_hand", tuple(VoicingRole(r) for r in self.right_hand))

    @property
    def roles(self) -> tuple[VoicingRole, ...]:
        """All roles, left hand first."""
        return self.left_hand + self.right_hand


@dataclass(frozen=True)
class HandVoicing:
    """One chord voiced across two hands."""

    left_hand: tuple[PitchedNote, ...]
    right_hand: tuple[PitchedNote, ...]

    @property
    def notes(self) -> tuple[PitchedNote, ...]:
        """Both hands, left hand first."""
        return self.left_hand + self.right_hand

    @classmethod
    def parse(cls, left_hand: Sequence[str], right_hand: Sequence[str]) -> HandVoicing:
        return cls(left_hand=parse_notes(left_hand), right_hand=parse_notes(right_hand))


# ---------------------------------------------------------------------------
# Templates
# ---------------------------------------------------------------------------

_R, _T, _F, _S = VoicingRole.ROOT, VoicingRole.THIRD, VoicingRole.FIFTH, VoicingRole.SEVENTH

SHELL_POSITION_A = VoicingTemplate(
    id="shell-a", name="Shell Position A", left_hand=(_R,), right_hand=(_T, _S)
)
SHELL_POSITION_B = VoicingTemplate(
    id="shell-b", name="Shell Position B", left_hand=(_R,), right_hand=(_S, _T)
)
OPEN_VOICING = VoicingTemplate(
    id="open", name="Open Voicing", left_hand=(_R, _F), right_hand=(_T, _S), category="open"
)

SHELL_WITH_NINTH = VoicingTemplate(
    id="shell-a-9",
    name="Shell A + 9",
    left_hand=(_R,),
    right_hand=(_T, _S, VoicingRole.NINTH),
    category="shell-extended",
)
SHELL_WITH_THIRTEENTH = VoicingTemplate(
    id="shell-a-13",
    name="Shell A + 13",
    left_hand=(_R,),
    right_hand=(_T, _S, VoicingRole.THIRTEENTH),
    category="shell-extended",
)
OPEN_WITH_NINTH = VoicingTemplate(
    id="open-9",
    name="Open + 9",
    left_hand=(_R, _F),
    right_hand=(_T, _S, VoicingRole.NINTH),
    category="open",
)

BASIC_TEMPLATES: tuple[VoicingTemplate, ...] = (SHELL_POSITION_A, SHELL_POSITION_B, OPEN_VOICING)
EXTENDED_TEMPLATES: tuple[VoicingTemplate, ...] = (
    SHELL_WITH_NINTH,
    SHELL_WITH_THIRTEENTH,
    OPEN_WITH_NINTH,
)
ALL_TEMPLATES: tuple[VoicingTemplate, ...] = BASIC_TEMPLATES + EXTENDED_TEMPLATES

TEMPLATES_BY_ID: MappingProxyType[str, VoicingTemplate] = MappingProxyType(
    {template.id: template for template in ALL_TEMPLATES}
)


def get_template(template_id: str) -> VoicingTemplate:
    """Look up a template by id. Raises ValueError for unknown ids."""
    try:
        return TEMPLATES_BY_ID[template_id]
    except KeyError:
        known = ", ".join(TEMPLATES_BY_ID)
        raise ValueError(f"Unknown voicing template {template_id!r}. Known: {known}") from None


# ---------------------------------------------------------------------------
# Generation
# ---------------------------------------------------------------------------


def _voice_hand(chord: Chord, roles: Sequence[VoicingRole], octave: int) -> tuple[PitchedNote, ...]:
    tones = extended_chord_tones(chord)
    names = []
    for role in roles:
        name = note_for_role(tones, role)
        if name is None:
            raise ValueError(f"{role} is not available on {chord.root}{chord.quality}")
        names.append(name)
    first = PitchedNote(names[0], octave)
    return (first, *build_close_position(first, names[1:]))


def generate_voicing(chord: Chord, template: VoicingTemplate) -> HandVoicing:
    """Voice ``chord`` with ``template``, each hand stacked in close position.

    Example:
        >>> generate_voicing(Chord("D", "min7"), SHELL_POSITION_A)
        HandVoicing(left_hand=(D2,), right_hand=(F3, C4))

    Raises:
        ValueError: If the template asks for a role the chord does not have
            (an alteration on a non-dominant chord).
    """
    return HandVoicing(
        left_hand=_voice_hand(chord, template.left_hand, template.left_hand_octave),
        right_hand=_voice_hand(chord, template.right_hand, template.right_hand_octave),
    )


def generate_progression(chords: Sequence[Chord], template: VoicingTemplate) -> tuple[HandVoicing, ...]:
    """Voice every chord of a progression with the same template."""
    return tuple(generate_voicing(chord, template) for chord in chords)


def transpose_voicing(voicing: HandVoicing, semitones: int) -> HandVoicing:
    """Move every note of a voicing by ``semitones``.

    Example:
        transpose_voicing(D2 | F3 C4, 2) → E2 | G3 D4
    """
    return HandVoicing(
        left_hand=tuple(transpose_note(note, semitones) for note in voicing.left_hand),
        right_hand=tuple(transpose_note(note, semitones) for note in voicing.right_hand),
    )


# ---------------------------------------------------------------------------
# ii–V–I in C
# ---------------------------------------------------------------------------

II_V_I_IN_C: tuple[Chord, ...] = (
    Chord("D", "min7", ChordFunction.II),
    Chord("G", "dom7", ChordFunction.V),
    Chord("C", "maj7", ChordFunction.I),
)

# C moves down to B, then F moves down to E
SHELL_A_PROGRESSION: tuple[HandVoicing, ...] = (
    HandVoicing.parse(["D2"], ["F3", "C4"]),
    HandVoicing.parse(["G2"], ["B3", "F4"]),
    HandVoicing.parse(["C2"], ["E3", "B3"]),
)

SHELL_B_PROGRESSION: tuple[HandVoicing, ...] = (
    HandVoicing.parse(["D2"], ["C3", "F4"]),
    HandVoicing.parse(["G2"], ["F3", "B4"]),
    HandVoicing.parse(["C2"], ["B3", "E4"]),
)

OPEN_VOICING_PROGRESSION: tuple[HandVoicing, ...] = (
    HandVoicing.parse(["D2", "A2"], ["F3", "C4"]),
    HandVoicing.parse(["G2", "D3"], ["B3", "F4"]),
    HandVoicing.parse(["C2", "G2"], ["E3", "B3"]),
)

SHELL_9_PROGRESSION = generate_progression(II_V_I_IN_C, SHELL_WITH_NINTH)
SHELL_13_PROGRESSION = generate_progression(II_V_I_IN_C, SHELL_WITH_THIRTEENTH)
OPEN_9_PROGRESSION = generate_progression(II_V_I_IN_C, OPEN_WITH_NINTH)

PROGRESSIONS: MappingProxyType[str, tuple[HandVoicing, ...]] = MappingProxyType(
    {
        SHELL_POSITION_A.id: SHELL_A_PROGRESSION,
        SHELL_POSITION_B.id: SHELL_B_PROGRESSION,
        OPEN_VOICING.id: OPEN_VOICING_PROGRESSION,
        SHELL_WITH_NINTH.id: SHELL_9_PROGRESSION,
        SHELL_WITH_THIRTEENTH.id: SHELL_13_PROGRESSION,
        OPEN_WITH_NINTH.id: OPEN_9_PROGRESSION,
    }
)
