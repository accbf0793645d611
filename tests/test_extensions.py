"""
Tests for voicing_core/extensions.py — availability, avoid notes, chord symbols.
"""

import pytest

from voicing_core.chords import extended_chord_tones, note_for_role
from voicing_core.extensions import (
    AVAILABLE_EXTENSIONS,
    SAFE_EXTENSIONS,
    active_extension_keys,
    build_chord_symbol,
    chord_symbol_for,
    extension_note,
    extensions_by_group,
    role_for_extension_key,
    role_for_note,
    safe_extensions,
    should_avoid_extension,
)
from voicing_core.types import (
    Chord,
    ChordQuality,
    ExtensionFamily,
    ExtensionKey,
    NoteName,
    VoicingRole,
)

# ---------------------------------------------------------------------------
# build_chord_symbol
# ---------------------------------------------------------------------------


class TestBuildChordSymbol:
    @pytest.mark.parametrize(
        ("quality", "expected"),
        [
            ("maj7", "Cmaj7"),
            ("min7", "Cm7"),
            ("dom7", "C7"),
            ("min7b5", "Cm7♭5"),
            ("dim7", "C°7"),
        ],
    )
    def test_no_extensions(self, quality, expected):
        assert build_chord_symbol("C", quality, {}) == expected

    def test_none_selection(self):
        assert build_chord_symbol("D", "min7", None) == "Dm7"

    def test_maj13_sharp_eleven(self):
        selected = {"ninth": True, "sharpEleventh": True, "thirteenth": True}
        assert build_chord_symbol("C", "maj7", selected) == "Cmaj13(♯11)"

    def test_dominant_thirteen_flat_nine(self):
        assert build_chord_symbol("G", "dom7", {"thirteenth": True, "flatNinth": True}) == "G13(♭9)"

    def test_alteration_order(self):
        selected = {"sharpNinth": True, "flatNinth": True, "flatThirteenth": True}
        assert build_chord_symbol("G", "dom7", selected) == "G13(♭13,♭9,♯9)"

    def test_minor_ninth(self):
        assert build_chord_symbol("D", "min7", {"ninth": True}) == "Dm9"

    def test_minor_eleventh(self):
        assert build_chord_symbol("D", "min7", {"ninth": True, "eleventh": True}) == "Dm11"

    def test_half_diminished_keeps_suffix(self):
        assert build_chord_symbol("B", "min7b5", {"ninth": True}) == "Bm7♭5(9)"

    def test_diminished_keeps_suffix(self):
        assert build_chord_symbol("B", "dim7", {"thirteenth": True}) == "B°7(13)"

    def test_false_flags_are_ignored(self):
        assert build_chord_symbol("G", "dom7", {"ninth": False}) == "G7"

    def test_unknown_keys_are_ignored(self):
        assert build_chord_symbol("G", "dom7", {"bogus": True}) == "G7"

    def test_accepts_enum_keys(self):
        assert build_chord_symbol("A", "dom7", {ExtensionKey.NINTH: True}) == "A9"

    def test_chord_symbol_for(self):
        assert chord_symbol_for(Chord("G", "dom7"), ["ninth", ExtensionKey.SHARP_NINTH]) == "G9(♯9)"


# ---------------------------------------------------------------------------
# Availability
# ---------------------------------------------------------------------------


class TestAvailableExtensions:
    def test_dominant_offers_all_seven(self):
        keys = [option.key for option in AVAILABLE_EXTENSIONS[ChordQuality.DOM7]]
        assert keys == list(ExtensionKey)

    def test_diminished_has_no_sharp_eleventh(self):
        keys = {option.key for option in AVAILABLE_EXTENSIONS[ChordQuality.DIM7]}
        assert ExtensionKey.SHARP_ELEVENTH not in keys

    def test_minor_order(self):
        labels = [option.label for option in AVAILABLE_EXTENSIONS[ChordQuality.MIN7]]
        assert labels == ["9", "11", "13", "♯11"]

    def test_alteration_flags(self):
        flagged = {o.key for o in AVAILABLE_EXTENSIONS[ChordQuality.DOM7] if o.is_alteration}
        assert flagged == {
            ExtensionKey.FLAT_NINTH,
            ExtensionKey.SHARP_NINTH,
            ExtensionKey.FLAT_THIRTEENTH,
        }

    def test_grouping(self):
        groups = extensions_by_group("dom7")
        assert list(groups) == ["9ths", "11ths", "13ths"]
        assert [o.label for o in groups["9ths"]] == ["9", "♭9", "♯9"]
        assert [o.label for o in groups["13ths"]] == ["13", "♭13"]


# ---------------------------------------------------------------------------
# Avoid notes
# ---------------------------------------------------------------------------


class TestAvoidExtensions:
    @pytest.mark.parametrize(
        ("quality", "family", "expected"),
        [
            ("maj7", "eleventh", True),
            ("maj7", "ninth", False),
            ("dom7", "eleventh", True),
            ("dom7", "thirteenth", False),
            ("min7", "thirteenth", True),
            ("min7", "eleventh", False),
            ("min7b5", "thirteenth", True),
            ("dim7", "thirteenth", True),
        ],
    )
    def test_should_avoid(self, quality, family, expected):
        assert should_avoid_extension(Chord("C", quality), family) is expected

    def test_safe_table_is_complement(self):
        assert SAFE_EXTENSIONS[ChordQuality.MAJ7] == {
            ExtensionFamily.NINTH,
            ExtensionFamily.THIRTEENTH,
        }
        assert SAFE_EXTENSIONS[ChordQuality.MIN7] == {
            ExtensionFamily.NINTH,
            ExtensionFamily.ELEVENTH,
        }

    def test_safe_extensions_blank_avoided(self, cmaj7):
        safe = safe_extensions(cmaj7)
        assert safe.eleventh is None
        assert safe.ninth is NoteName.D
        assert safe.thirteenth is NoteName.A
        assert safe.sharp_eleventh is NoteName.F_SHARP

    def test_unknown_family_raises(self, cmaj7):
        with pytest.raises(ValueError):
            should_avoid_extension(cmaj7, "fifteenth")


# ---------------------------------------------------------------------------
# Lookups
# ---------------------------------------------------------------------------


class TestLookups:
    def test_active_keys_in_render_order(self):
        selected = {"thirteenth": True, "ninth": True, "eleventh": False}
        assert active_extension_keys(selected) == [ExtensionKey.NINTH, ExtensionKey.THIRTEENTH]

    def test_extension_note_alteration_missing(self, cmaj7_tones):
        assert extension_note(cmaj7_tones, "flatNinth") is None

    def test_extension_note_dominant(self, g7_tones):
        assert extension_note(g7_tones, ExtensionKey.SHARP_NINTH) is NoteName.A_SHARP

    @pytest.mark.parametrize("key", list(ExtensionKey))
    def test_extension_note_matches_role_lookup(self, g7_tones, dm7_tones, key):
        """Extension keys resolve through the same lookup as voicing roles."""
        for tones in (g7_tones, dm7_tones):
            assert extension_note(tones, key) is note_for_role(tones, key.role)

    def test_role_for_extension_key(self):
        assert role_for_extension_key("sharpEleventh") is VoicingRole.SHARP_ELEVENTH

    def test_role_for_note_chord_tone(self, cmaj7_tones):
        assert role_for_note(cmaj7_tones, "E") is VoicingRole.THIRD

    def test_role_for_note_extension(self, cmaj7_tones):
        assert role_for_note(cmaj7_tones, "D") is VoicingRole.NINTH
        assert role_for_note(cmaj7_tones, "F#") is VoicingRole.SHARP_ELEVENTH

    def test_role_for_note_alteration(self, g7_tones):
        assert role_for_note(g7_tones, "G#") is VoicingRole.FLAT_NINTH

    def test_role_for_note_outside_chord(self):
        assert role_for_note(extended_chord_tones(Chord("C", "maj7")), "C#") is None
