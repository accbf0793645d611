"""
Tests for voicing_core/templates.py — two-hand templates and ii–V–I progressions.
"""

import pytest

from voicing_core.chords import chord_tones
from voicing_core.templates import (
    ALL_TEMPLATES,
    II_V_I_IN_C,
    OPEN_VOICING,
    OPEN_VOICING_PROGRESSION,
    PROGRESSIONS,
    SHELL_A_PROGRESSION,
    SHELL_B_PROGRESSION,
    SHELL_POSITION_A,
    SHELL_WITH_NINTH,
    HandVoicing,
    VoicingTemplate,
    generate_progression,
    generate_voicing,
    get_template,
    transpose_voicing,
)
from voicing_core.types import Chord, ChordFunction, VoicingRole


def _hands(left: list[str], right: list[str]) -> HandVoicing:
    return HandVoicing.parse(left, right)


# ---------------------------------------------------------------------------
# Templates
# ---------------------------------------------------------------------------


class TestTemplates:
    def test_six_templates_with_unique_ids(self):
        ids = [template.id for template in ALL_TEMPLATES]
        assert len(ids) == 6
        assert len(set(ids)) == 6

    def test_shell_a_roles(self):
        assert SHELL_POSITION_A.roles == (VoicingRole.ROOT, VoicingRole.THIRD, VoicingRole.SEVENTH)

    def test_open_voicing_left_hand_has_fifth(self):
        assert OPEN_VOICING.left_hand == (VoicingRole.ROOT, VoicingRole.FIFTH)

    def test_empty_hand_raises(self):
        with pytest.raises(ValueError, match="at least one note"):
            VoicingTemplate(id="bad", name="Bad", left_hand=(), right_hand=(VoicingRole.THIRD,))

    def test_get_template(self):
        assert get_template("shell-a-9") is SHELL_WITH_NINTH

    def test_get_unknown_template_raises(self):
        with pytest.raises(ValueError, match="Unknown voicing template"):
            get_template("drop-3")


# ---------------------------------------------------------------------------
# generate_voicing
# ---------------------------------------------------------------------------


class TestGenerateVoicing:
    def test_shell_a_d_minor(self, dm7):
        assert generate_voicing(dm7, SHELL_POSITION_A) == _hands(["D2"], ["F3", "C4"])

    def test_shell_a_nine_stacks_ninth_on_top(self, dm7):
        assert generate_voicing(dm7, SHELL_WITH_NINTH) == _hands(["D2"], ["F3", "C4", "E4"])

    def test_open_voicing_g7(self, g7):
        assert generate_voicing(g7, OPEN_VOICING) == _hands(["G2", "D3"], ["B3", "F4"])

    def test_missing_role_raises(self, cmaj7):
        altered = VoicingTemplate(
            id="altered",
            name="Altered",
            left_hand=(VoicingRole.ROOT,),
            right_hand=(VoicingRole.THIRD, VoicingRole.FLAT_NINTH),
        )
        with pytest.raises(ValueError, match="not available"):
            generate_voicing(cmaj7, altered)

    def test_notes_left_hand_first(self, dm7):
        voicing = generate_voicing(dm7, OPEN_VOICING)
        assert [str(n) for n in voicing.notes] == ["D2", "A2", "F3", "C4"]


# ---------------------------------------------------------------------------
# Progressions
# ---------------------------------------------------------------------------


class TestProgressions:
    def test_ii_v_i_functions(self):
        assert [chord.function for chord in II_V_I_IN_C] == [
            ChordFunction.II,
            ChordFunction.V,
            ChordFunction.I,
        ]

    def test_shell_a_generated_matches_canned(self):
        assert generate_progression(II_V_I_IN_C, SHELL_POSITION_A) == SHELL_A_PROGRESSION

    def test_open_generated_matches_canned(self):
        assert generate_progression(II_V_I_IN_C, OPEN_VOICING) == OPEN_VOICING_PROGRESSION

    def test_shell_b_keeps_seventh_below_third(self):
        for voicing, chord in zip(SHELL_B_PROGRESSION, II_V_I_IN_C):
            tones = chord_tones(chord)
            low, high = voicing.right_hand
            assert low < high
            assert (low.name, high.name) == (tones.seventh, tones.third)

    def test_every_template_has_three_chords(self):
        assert set(PROGRESSIONS) == {template.id for template in ALL_TEMPLATES}
        assert all(len(progression) == 3 for progression in PROGRESSIONS.values())

    def test_shell_a_voice_leading_moves_by_step(self):
        # C4 (7th of Dm7) falls a half step to B3 (3rd of G7)
        first, second, _ = SHELL_A_PROGRESSION
        assert second.right_hand[0].midi - first.right_hand[1].midi == -1


# ---------------------------------------------------------------------------
# transpose_voicing
# ---------------------------------------------------------------------------


class TestTransposeVoicing:
    def test_up_a_whole_step(self):
        moved = transpose_voicing(SHELL_A_PROGRESSION[0], 2)
        assert moved == _hands(["E2"], ["G3", "D4"])

    def test_round_trip(self):
        voicing = OPEN_VOICING_PROGRESSION[1]
        assert transpose_voicing(transpose_voicing(voicing, 5), -5) == voicing

    def test_chord_in_other_key(self):
        assert generate_voicing(Chord("E", "min7"), SHELL_POSITION_A) == transpose_voicing(
            SHELL_A_PROGRESSION[0], 2
        )
