"""
Shared fixtures for the test suite.

Centralizes the chord and block builders so individual test files
don't need to repeat playground setup.
"""

import pytest

from voicing_core.chords import extended_chord_tones
from voicing_core.types import Chord, ExtendedChordTones, PlaygroundBlock, VoicingRole

# ---------------------------------------------------------------------------
# Block factory
# ---------------------------------------------------------------------------


def _build_blocks(*roles: str, disabled: tuple[int, ...] = ()) -> list[PlaygroundBlock]:
    """Build one block per role, in order, with pitch class C.

    The analyzer and recognizer only look at roles and on/off state, so
    the pitch class is irrelevant here. Ids are made unique by position.

    Args:
        roles:    Role values, low to high (e.g. "root", "third")
        disabled: Positions of blocks to switch off
    """
    return [
        PlaygroundBlock(
            id=f"{index}-{role}",
            role=VoicingRole(role),
            pitch_class="C",
            enabled=index not in disabled,
        )
        for index, role in enumerate(roles)
    ]


# ---------------------------------------------------------------------------
# Chord fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def dm7() -> Chord:
    """D minor 7 — the ii of C major."""
    return Chord("D", "min7", "ii")


@pytest.fixture
def g7() -> Chord:
    """G dominant 7 — the V of C major."""
    return Chord("G", "dom7", "V")


@pytest.fixture
def cmaj7() -> Chord:
    """C major 7 — the I of C major."""
    return Chord("C", "maj7", "I")


@pytest.fixture
def g7_tones(g7: Chord) -> ExtendedChordTones:
    return extended_chord_tones(g7)


@pytest.fixture
def dm7_tones(dm7: Chord) -> ExtendedChordTones:
    return extended_chord_tones(dm7)


@pytest.fixture
def cmaj7_tones(cmaj7: Chord) -> ExtendedChordTones:
    return extended_chord_tones(cmaj7)


@pytest.fixture
def make_blocks():
    """Factory fixture: make_blocks("root", "third", disabled=(1,))."""
    return _build_blocks
