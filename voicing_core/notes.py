"""
voicing_core/notes.py — Note helpers at the string boundary.

Canonical helpers for parsing "C#4"-style tokens, converting to and from
MIDI pitch numbers, transposing, and formatting voicing roles for display.
Everything inside the engine works on PitchedNote values; these helpers are
what the UI / audio boundary uses.
"""

from __future__ import annotations

from collections.abc import Iterable

from voicing_core.types import NoteName, PitchedNote, VoicingRole

_ROLE_DISPLAY: dict[VoicingRole, str] = {
    VoicingRole.ROOT: "root",
    VoicingRole.THIRD: "3rd",
    VoicingRole.FIFTH: "5th",
    VoicingRole.SEVENTH: "7th",
    VoicingRole.NINTH: "9th",
    VoicingRole.FLAT_NINTH: "♭9",
    VoicingRole.SHARP_NINTH: "♯9",
    VoicingRole.ELEVENTH: "11th",
    VoicingRole.SHARP_ELEVENTH: "♯11",
    VoicingRole.THIRTEENTH: "13th",
    VoicingRole.FLAT_THIRTEENTH: "♭13",
}


def parse_note(text: str) -> PitchedNote:
    """Parse a note token. Raises ValueError on malformed input.

    Example:
        >>> parse_note("C#4")
        PitchedNote(name=<NoteName.C_SHARP: 'C#'>, octave=4)
    """
    return PitchedNote.parse(text)


def parse_notes(tokens: Iterable[str]) -> tuple[PitchedNote, ...]:
    """Parse several note tokens, failing on the first malformed one."""
    return tuple(PitchedNote.parse(token) for token in tokens)


def format_notes(notes: Iterable[PitchedNote]) -> list[str]:
    """Render notes back to "C#4"-style tokens."""
    return [str(note) for note in notes]


def note_chroma(name: NoteName | str) -> int:
    """Pitch class 0–11 for a note name (C=0 ... B=11)."""
    return NoteName(name).chroma


def to_midi(note: PitchedNote | str) -> int:
    """MIDI pitch of a note (C4 = 60). Accepts a PitchedNote or a token."""
    if isinstance(note, str):
        note = PitchedNote.parse(note)
    return note.midi


def from_midi(pitch: int) -> PitchedNote:
    """PitchedNote for a MIDI pitch number (60 → C4)."""
    if not (0 <= pitch <= 127):
        raise ValueError(f"MIDI pitch {pitch} out of range [0, 127]")
    octave, chroma = divmod(pitch, 12)
    return PitchedNote(name=tuple(NoteName)[chroma], octave=octave - 1)


def transpose_note(note: PitchedNote, semitones: int) -> PitchedNote:
    """Move a note by ``semitones``, carrying across octave boundaries.

    Examples:
        transpose_note(D3, 5)  → G3
        transpose_note(A3, 4)  → C#4
        transpose_note(C4, -1) → B3
    """
    octave_change, chroma = divmod(note.name.chroma + semitones, 12)
    return PitchedNote(name=tuple(NoteName)[chroma], octave=note.octave + octave_change)


def format_voicing_role(role: VoicingRole | str) -> str:
    """Human-readable role label, e.g. "♭9", "♯11", "3rd"."""
    return _ROLE_DISPLAY[VoicingRole(role)]
