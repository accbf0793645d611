"""
Tests for voicing_core/playground.py — playground blocks, merging and variants.

Pure computation — no mocks, no I/O.
"""

from dataclasses import replace

from voicing_core.chords import extended_chord_tones
from voicing_core.playground import (
    ROOT_WARNING,
    build_playground_blocks,
    cycle_block,
    enabled_blocks,
    merge_playground_blocks,
    next_variant_key,
    root_warning,
    selected_extensions_from_blocks,
    update_block_variant,
)
from voicing_core.types import Chord, NoteName, VariantKey, VoicingRole


def _by_id(blocks, block_id):
    return next(block for block in blocks if block.id == block_id)


# ---------------------------------------------------------------------------
# build_playground_blocks
# ---------------------------------------------------------------------------


class TestBuildPlaygroundBlocks:
    def test_default_order_and_labels(self, dm7_tones):
        blocks = build_playground_blocks(dm7_tones)
        assert [b.id for b in blocks] == [
            "root", "third", "fifth", "seventh", "ninth", "eleventh", "thirteenth",
        ]  # fmt: skip
        assert [b.label for b in blocks] == ["R", "3", "5", "7", "9", "11", "13"]

    def test_chord_tones_enabled_extensions_off(self, dm7_tones):
        blocks = build_playground_blocks(dm7_tones)
        assert [b.enabled for b in blocks] == [True] * 4 + [False] * 3
        assert [b.is_extension for b in blocks] == [False] * 4 + [True] * 3

    def test_pitch_classes(self, dm7_tones):
        blocks = build_playground_blocks(dm7_tones)
        assert [b.pitch_class.value for b in blocks] == ["D", "F", "A", "C", "E", "G", "B"]

    def test_selected_extension_enabled(self, dm7_tones):
        ninth = _by_id(build_playground_blocks(dm7_tones, {"ninth": True}), "ninth")
        assert ninth.enabled is True
        assert ninth.role is VoicingRole.NINTH

    def test_selected_alteration_shows_that_spelling(self, g7_tones):
        blocks = build_playground_blocks(g7_tones, {"flatNinth": True})
        assert [b.label for b in blocks] == ["R", "3", "5", "7", "♭9", "11", "13"]
        ninth = _by_id(blocks, "ninth")
        assert ninth.enabled is True
        assert ninth.pitch_class is NoteName.G_SHARP
        assert ninth.role is VoicingRole.FLAT_NINTH
        assert ninth.variant_key is VariantKey.FLAT

    def test_dominant_ninth_offers_three_spellings(self, g7_tones):
        ninth = _by_id(build_playground_blocks(g7_tones), "ninth")
        assert [v.label for v in ninth.variants] == ["9", "♭9", "♯9"]

    def test_minor_ninth_offers_only_natural(self, dm7_tones):
        ninth = _by_id(build_playground_blocks(dm7_tones), "ninth")
        assert [v.key for v in ninth.variants] == [VariantKey.NATURAL]

    def test_eleventh_offers_sharp_on_every_quality(self, dm7_tones):
        eleventh = _by_id(build_playground_blocks(dm7_tones), "eleventh")
        assert [v.label for v in eleventh.variants] == ["11", "♯11"]

    def test_sharp_eleventh_selection(self, cmaj7_tones):
        eleventh = _by_id(build_playground_blocks(cmaj7_tones, {"sharpEleventh": True}), "eleventh")
        assert eleventh.enabled is True
        assert eleventh.pitch_class is NoteName.F_SHARP
        assert eleventh.label == "♯11"


# ---------------------------------------------------------------------------
# merge_playground_blocks
# ---------------------------------------------------------------------------


class TestMergePlaygroundBlocks:
    def test_empty_previous_returns_new(self, dm7_tones):
        new = build_playground_blocks(dm7_tones)
        assert merge_playground_blocks([], new) == new

    def test_keeps_user_order_and_enabled(self, dm7_tones):
        previous = build_playground_blocks(dm7_tones)
        previous = [replace(b, enabled=b.id != "fifth") for b in reversed(previous)]

        new = build_playground_blocks(extended_chord_tones(Chord("G", "dom7")))
        merged = merge_playground_blocks(previous, new)

        assert [b.id for b in merged] == [b.id for b in previous]
        assert [b.enabled for b in merged] == [b.enabled for b in previous]
        assert _by_id(merged, "root").pitch_class is NoteName.G

    def test_keeps_chosen_variant(self, g7_tones):
        previous = build_playground_blocks(g7_tones, {"sharpNinth": True})
        merged = merge_playground_blocks(previous, build_playground_blocks(g7_tones))
        ninth = _by_id(merged, "ninth")
        assert ninth.variant_key is VariantKey.SHARP
        assert ninth.pitch_class is NoteName.A_SHARP
        assert ninth.enabled is True

    def test_unavailable_variant_falls_back_to_natural(self, g7_tones, dm7_tones):
        previous = build_playground_blocks(g7_tones, {"flatNinth": True})
        merged = merge_playground_blocks(previous, build_playground_blocks(dm7_tones))
        ninth = _by_id(merged, "ninth")
        assert ninth.variant_key is VariantKey.NATURAL
        assert ninth.pitch_class is NoteName.E

    def test_new_blocks_appended_missing_dropped(self, dm7_tones):
        previous = [b for b in build_playground_blocks(dm7_tones) if b.id != "thirteenth"]
        previous = [replace(previous[0], id="gone"), *previous[1:]]
        merged = merge_playground_blocks(previous, build_playground_blocks(dm7_tones))
        ids = [b.id for b in merged]
        assert "gone" not in ids
        assert ids[-2:] == ["root", "thirteenth"]


# ---------------------------------------------------------------------------
# Variant cycling
# ---------------------------------------------------------------------------


class TestVariantCycling:
    def test_chord_tone_toggles(self, dm7_tones):
        root = build_playground_blocks(dm7_tones)[0]
        assert next_variant_key(root) == (None, False)
        assert cycle_block(cycle_block(root)).enabled is True

    def test_dominant_ninth_full_cycle(self, g7_tones):
        block = _by_id(build_playground_blocks(g7_tones), "ninth")
        states = []
        for _ in range(4):
            block = cycle_block(block)
            states.append((block.enabled, block.label))
        assert states == [(True, "9"), (True, "♭9"), (True, "♯9"), (False, "♯9")]

    def test_single_variant_toggles(self, dm7_tones):
        ninth = _by_id(build_playground_blocks(dm7_tones), "ninth")
        assert next_variant_key(ninth) == (VariantKey.NATURAL, True)
        on = cycle_block(ninth)
        assert next_variant_key(on) == (VariantKey.NATURAL, False)

    def test_thirteenth_skips_missing_sharp(self, g7_tones):
        block = update_block_variant(_by_id(build_playground_blocks(g7_tones), "thirteenth"), "flat", True)
        assert next_variant_key(block) == (VariantKey.FLAT, False)

    def test_update_block_variant(self, g7_tones):
        block = update_block_variant(_by_id(build_playground_blocks(g7_tones), "ninth"), "sharp")
        assert block.pitch_class is NoteName.A_SHARP
        assert block.role is VoicingRole.SHARP_NINTH
        assert block.enabled is False


# ---------------------------------------------------------------------------
# Derived state
# ---------------------------------------------------------------------------


class TestDerivedState:
    def test_enabled_blocks(self, dm7_tones):
        assert [b.id for b in enabled_blocks(build_playground_blocks(dm7_tones))] == [
            "root", "third", "fifth", "seventh",
        ]  # fmt: skip

    def test_selected_extensions_from_blocks(self, g7_tones):
        blocks = build_playground_blocks(g7_tones, {"flatNinth": True, "thirteenth": True})
        assert selected_extensions_from_blocks(blocks) == {"flatNinth": True, "thirteenth": True}

    def test_no_selection_from_default_blocks(self, dm7_tones):
        assert selected_extensions_from_blocks(build_playground_blocks(dm7_tones)) == {}

    def test_root_warning_when_root_not_first(self, dm7_tones):
        blocks = build_playground_blocks(dm7_tones)
        assert root_warning([blocks[1], blocks[0], blocks[3]]) == ROOT_WARNING

    def test_no_root_warning_in_root_position(self, dm7_tones):
        assert root_warning(build_playground_blocks(dm7_tones)) is None

    def test_no_root_warning_without_root(self, dm7_tones):
        blocks = build_playground_blocks(dm7_tones)
        assert root_warning([blocks[1], replace(blocks[0], enabled=False)]) is None
