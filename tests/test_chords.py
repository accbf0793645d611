"""
Tests for voicing_core/chords.py — chord tone calculator.

Pure computation — no mocks, no I/O.
All 12 roots × 5 qualities are checked against the interval formulas.
"""

import pytest

from voicing_core.chords import (
    CHORD_FORMULAS,
    chord_tones,
    extended_chord_tones,
    note_at,
    note_for_role,
    recommended_extensions,
)
from voicing_core.types import Chord, ChordQuality, NoteName, VoicingRole

ALL_ROOTS = list(NoteName)
ALL_QUALITIES = list(ChordQuality)


def _semitones(root: NoteName, note: NoteName) -> int:
    return (note.chroma - root.chroma) % 12


# ---------------------------------------------------------------------------
# note_at
# ---------------------------------------------------------------------------


class TestNoteAt:
    def test_minor_third_above_d(self):
        assert note_at("D", 3) is NoteName.F

    def test_wraps_past_b(self):
        assert note_at("B", 2) is NoteName.C_SHARP

    def test_negative_offset_wraps(self):
        assert note_at("C", -1) is NoteName.B

    def test_octave_is_identity(self):
        assert note_at("G", 12) is NoteName.G


# ---------------------------------------------------------------------------
# chord_tones
# ---------------------------------------------------------------------------


class TestChordTones:
    @pytest.mark.parametrize("quality", ALL_QUALITIES)
    @pytest.mark.parametrize("root", ALL_ROOTS)
    def test_intervals_match_formula(self, root, quality):
        tones = chord_tones(Chord(root, quality))
        formula = CHORD_FORMULAS[quality]
        assert tones.root is root
        assert _semitones(root, tones.third) == formula.third
        assert _semitones(root, tones.fifth) == formula.fifth
        assert _semitones(root, tones.seventh) == formula.seventh

    def test_d_minor_seven(self, dm7):
        tones = chord_tones(dm7)
        assert [tones.root, tones.third, tones.fifth, tones.seventh] == [
            NoteName.D,
            NoteName.F,
            NoteName.A,
            NoteName.C,
        ]

    def test_g_dominant_seven(self, g7):
        tones = chord_tones(g7)
        assert [n.value for n in (tones.root, tones.third, tones.fifth, tones.seventh)] == [
            "G", "B", "D", "F",
        ]  # fmt: skip

    def test_b_half_diminished(self):
        tones = chord_tones(Chord("B", "min7b5"))
        assert [n.value for n in (tones.third, tones.fifth, tones.seventh)] == ["D", "F", "A"]

    def test_b_diminished_seventh_uses_sharp_spelling(self):
        tones = chord_tones(Chord("B", "dim7"))
        assert tones.seventh is NoteName.G_SHARP


# ---------------------------------------------------------------------------
# extended_chord_tones
# ---------------------------------------------------------------------------


class TestExtendedChordTones:
    def test_extensions_of_c(self, cmaj7_tones):
        ext = cmaj7_tones.extensions
        assert ext.ninth is NoteName.D
        assert ext.eleventh is NoteName.F
        assert ext.sharp_eleventh is NoteName.F_SHARP
        assert ext.thirteenth is NoteName.A

    def test_dominant_has_all_alterations(self, g7_tones):
        alt = g7_tones.alterations
        assert alt is not None
        assert alt.flat_ninth is NoteName.G_SHARP
        assert alt.sharp_ninth is NoteName.A_SHARP
        assert alt.sharp_eleventh is NoteName.C_SHARP
        assert alt.flat_thirteenth is NoteName.D_SHARP

    @pytest.mark.parametrize("quality", [q for q in ALL_QUALITIES if q is not ChordQuality.DOM7])
    def test_non_dominant_has_no_alterations(self, quality):
        assert extended_chord_tones(Chord("F", quality)).alterations is None

    @pytest.mark.parametrize("quality", ALL_QUALITIES)
    def test_extensions_always_complete(self, quality):
        ext = extended_chord_tones(Chord("A#", quality)).extensions
        assert None not in (ext.ninth, ext.eleventh, ext.sharp_eleventh, ext.thirteenth)

    def test_chord_tones_property(self, dm7, dm7_tones):
        assert dm7_tones.chord_tones == chord_tones(dm7)


# ---------------------------------------------------------------------------
# Recommendations + role lookup
# ---------------------------------------------------------------------------


class TestRecommendedExtensions:
    def test_ii_gets_ninth_and_eleventh(self, dm7):
        rec = recommended_extensions(dm7)
        assert rec.ninth is NoteName.E
        assert rec.eleventh is NoteName.G
        assert rec.thirteenth is None
        assert rec.sharp_eleventh is None

    def test_v_gets_ninth_and_thirteenth(self, g7):
        rec = recommended_extensions(g7)
        assert rec.ninth is NoteName.A
        assert rec.thirteenth is NoteName.E
        assert rec.eleventh is None

    def test_i_gets_ninth_only(self, cmaj7):
        rec = recommended_extensions(cmaj7)
        assert rec.ninth is NoteName.D
        assert rec.eleventh is None
        assert rec.thirteenth is None


class TestNoteForRole:
    def test_chord_tone(self, dm7_tones):
        assert note_for_role(dm7_tones, VoicingRole.SEVENTH) is NoteName.C

    def test_extension(self, dm7_tones):
        assert note_for_role(dm7_tones, "ninth") is NoteName.E

    def test_alteration_on_dominant(self, g7_tones):
        assert note_for_role(g7_tones, "flatThirteenth") is NoteName.D_SHARP

    def test_alteration_missing_on_minor(self, dm7_tones):
        assert note_for_role(dm7_tones, "flatNinth") is None

    def test_unknown_role_raises(self, dm7_tones):
        with pytest.raises(ValueError):
            note_for_role(dm7_tones, "tonic")
