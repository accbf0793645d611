"""
voicing_core/playground.py — Playground blocks: the user-orderable voices.

A chord is offered as seven blocks: R, 3, 5, 7 (enabled) and one block per
extension degree (9, 11, 13). Extension blocks carry the spellings the chord
supports (9 / ♭9 / ♯9 on a dominant, only 9 elsewhere) and start enabled only
when one of those spellings is selected.

Blocks are rebuilt whenever the chord or selection changes and merged back
into the user's existing order by id, so a regenerated chord keeps the
user's arrangement, on/off state and chosen spellings.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import replace
from typing import NamedTuple

from voicing_core.extensions import SelectedExtensions, normalize_selection
from voicing_core.types import (
    ExtendedChordTones,
    ExtensionKey,
    NoteName,
    PlaygroundBlock,
    PlaygroundVariant,
    VariantKey,
    VoicingRole,
)

ROOT_WARNING = "Root should be lowest for clear harmony"

# Cycle order for a block's spellings; the cycle ends in "off"
VARIANT_SEQUENCE: tuple[VariantKey, ...] = (VariantKey.NATURAL, VariantKey.FLAT, VariantKey.SHARP)


class _VariantSpec(NamedTuple):
    key: VariantKey
    extension_key: ExtensionKey
    label: str
    note: Callable[[ExtendedChordTones], NoteName | None]


def _altered(attr: str) -> Callable[[ExtendedChordTones], NoteName | None]:
    return lambda tones: getattr(tones.alterations, attr) if tones.alterations else None


_EXTENSION_VARIANTS: tuple[tuple[str, str, tuple[_VariantSpec, ...]], ...] = (
    (
        "ninth",
        "9",
        (
            _VariantSpec(VariantKey.NATURAL, ExtensionKey.NINTH, "9", lambda t: t.extensions.ninth),
            _VariantSpec(VariantKey.FLAT, ExtensionKey.FLAT_NINTH, "♭9", _altered("flat_ninth")),
            _VariantSpec(VariantKey.SHARP, ExtensionKey.SHARP_NINTH, "♯9", _altered("sharp_ninth")),
        ),
    ),
    (
        "eleventh",
        "11",
        (
            _VariantSpec(VariantKey.NATURAL, ExtensionKey.ELEVENTH, "11", lambda t: t.extensions.eleventh),
            _VariantSpec(
                VariantKey.SHARP,
                ExtensionKey.SHARP_ELEVENTH,
                "♯11",
                lambda t: t.extensions.sharp_eleventh,
            ),
        ),
    ),
    (
        "thirteenth",
        "13",
        (
            _VariantSpec(
                VariantKey.NATURAL, ExtensionKey.THIRTEENTH, "13", lambda t: t.extensions.thirteenth
            ),
            _VariantSpec(VariantKey.FLAT, ExtensionKey.FLAT_THIRTEENTH, "♭13", _altered("flat_thirteenth")),
        ),
    ),
)


# ---------------------------------------------------------------------------
# Variants
# ---------------------------------------------------------------------------


def _find_variant(block: PlaygroundBlock, key: VariantKey | str | None) -> PlaygroundVariant | None:
    if not block.variants:
        return None
    if key is not None:
        key = VariantKey(key)
        for variant in block.variants:
            if variant.key is key:
                return variant
    return block.variants[0]


def _apply_variant(block: PlaygroundBlock, key: VariantKey | str | None) -> PlaygroundBlock:
    variant = _find_variant(block, key)
    if variant is None:
        return block
    return replace(
        block,
        label=variant.label,
        pitch_class=variant.pitch_class,
        role=variant.role,
        variant_key=variant.key,
    )


def _available_keys(block: PlaygroundBlock) -> list[VariantKey]:
    present = {variant.key for variant in block.variants}
    return [key for key in VARIANT_SEQUENCE if key in present]


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def build_playground_blocks(
    tones: ExtendedChordTones,
    selected: SelectedExtensions | None = None,
) -> list[PlaygroundBlock]:
    """Default blocks for a chord and extension selection.

    Chord-tone blocks come first (R, 3, 5, 7) and are always enabled. Then one
    block per extension degree, enabled when any of its spellings is selected
    and showing that spelling, else showing the natural one.

    Example:
        >>> tones = extended_chord_tones(Chord("G", "dom7"))
        >>> [b.label for b in build_playground_blocks(tones, {"flatNinth": True})]
        ['R', '3', '5', '7', '♭9', '11', '13']
    """
    chosen = normalize_selection(selected)
    blocks = [
        PlaygroundBlock(id="root", role=VoicingRole.ROOT, pitch_class=tones.root, label="R"),
        PlaygroundBlock(id="third", role=VoicingRole.THIRD, pitch_class=tones.third, label="3"),
        PlaygroundBlock(id="fifth", role=VoicingRole.FIFTH, pitch_class=tones.fifth, label="5"),
        PlaygroundBlock(id="seventh", role=VoicingRole.SEVENTH, pitch_class=tones.seventh, label="7"),
    ]

    for degree, label, specs in _EXTENSION_VARIANTS:
        variants = tuple(
            PlaygroundVariant(
                key=spec.key,
                pitch_class=note,
                role=spec.extension_key.role,
                label=spec.label,
                extension_key=spec.extension_key,
            )
            for spec in specs
            if (note := spec.note(tones)) is not None
        )
        if not variants:
            continue

        selected_variant = next(
            (v for v in variants if chosen.get(v.extension_key.value, False)),
            None,
        )
        default_variant = next((v for v in variants if v.key is VariantKey.NATURAL), variants[0])
        block = PlaygroundBlock(
            id=degree,
            role=default_variant.role,
            pitch_class=default_variant.pitch_class,
            enabled=selected_variant is not None,
            is_extension=True,
            label=label,
            variants=variants,
            variant_key=(selected_variant or default_variant).key,
        )
        blocks.append(_apply_variant(block, block.variant_key))

    return blocks


def merge_playground_blocks(
    previous: Sequence[PlaygroundBlock],
    new: Sequence[PlaygroundBlock],
) -> list[PlaygroundBlock]:
    """Refresh ``new`` block data into the user's ``previous`` order.

    Blocks present in both keep their previous position, enabled flag and
    spelling (when the new block still offers it). Blocks only in ``new`` are
    appended in their own order; blocks only in ``previous`` are dropped.
    """
    if not previous:
        return list(new)

    remaining = {block.id: block for block in new}
    merged: list[PlaygroundBlock] = []
    for block in previous:
        updated = remaining.pop(block.id, None)
        if updated is None:
            continue
        updated = _apply_variant(updated, block.variant_key)
        merged.append(replace(updated, enabled=block.enabled))

    merged.extend(block for block in new if block.id in remaining)
    return merged


def enabled_blocks(blocks: Sequence[PlaygroundBlock]) -> list[PlaygroundBlock]:
    """Only the enabled blocks, in order."""
    return [block for block in blocks if block.enabled]


def next_variant_key(block: PlaygroundBlock) -> tuple[VariantKey | None, bool]:
    """Next (variant_key, enabled) state when the user taps a block.

    Extension blocks cycle off → natural → flat → sharp → off over the
    spellings they offer. Chord-tone blocks simply toggle.
    """
    if not block.variants:
        return block.variant_key, not block.enabled

    available = _available_keys(block)
    current = block.variant_key if block.variant_key in available else available[0]
    if not block.enabled:
        return current, True
    index = available.index(current)
    if index == len(available) - 1:
        return current, False
    return available[index + 1], True


def update_block_variant(
    block: PlaygroundBlock,
    key: VariantKey | str | None = None,
    enabled: bool | None = None,
) -> PlaygroundBlock:
    """Switch a block's spelling and/or enabled flag."""
    if key is not None:
        block = _apply_variant(block, key)
    if enabled is not None:
        block = replace(block, enabled=enabled)
    return block


def cycle_block(block: PlaygroundBlock) -> PlaygroundBlock:
    """Apply next_variant_key() to ``block``."""
    key, enabled = next_variant_key(block)
    return update_block_variant(block, key, enabled)


def selected_extensions_from_blocks(blocks: Sequence[PlaygroundBlock]) -> dict[str, bool]:
    """Extension selection implied by the enabled extension blocks."""
    selected: dict[str, bool] = {}
    for block in blocks:
        if not (block.is_extension and block.enabled):
            continue
        variant = _find_variant(block, block.variant_key)
        if variant is not None and variant.extension_key is not None:
            selected[variant.extension_key.value] = True
    return selected


def root_warning(blocks: Sequence[PlaygroundBlock]) -> str | None:
    """Advisory text when an enabled root is not the leftmost enabled block."""
    roles = [block.role for block in enabled_blocks(blocks)]
    if VoicingRole.ROOT in roles and roles.index(VoicingRole.ROOT) > 0:
        return ROOT_WARNING
    return None
