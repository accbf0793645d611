"""
voicing_core/placement.py — Octave placement for ordered voicings.

place_voicing() turns the user's left-to-right block order (pitch classes
only) into concrete, strictly ascending PitchedNotes:

Algorithm (left to right over the enabled blocks):
    1. First voice at the base octave of the density hint
       (compact → 4, spread → 3)
    2. Every following voice at the lowest octave strictly above the
       previous voice — the root gets no special treatment
    3. Bass mud: if that leaves an interval smaller than a perfect fourth
       while the voice is still below the bass ceiling (octave 4), lift it
       one octave
    4. De-cluster: if the last three voices form two consecutive intervals
       of a minor third or less, lift the newest voice one more octave

Output is index-aligned with the enabled input and always strictly
ascending; lifting only ever raises a voice, so step 2 keeps holding.

Example:
    [root=C, seventh=B, third=E] compact  →  C4, B4, E5
    [root=C, third=D,  fifth=E] compact   →  C4, D4, E5   (cluster widened)

find_next_note_up() / build_close_position() are the close-position
primitives also used to build the canned ii–V–I template voicings.
"""

from __future__ import annotations

from collections.abc import Sequence

from voicing_core.config import DEFAULT_PLACEMENT_CONFIG, PlacementConfig
from voicing_core.types import DensityHint, NoteName, PitchedNote, PlaygroundBlock

# ---------------------------------------------------------------------------
# Close-position primitives
# ---------------------------------------------------------------------------


def find_next_note_up(reference: PitchedNote, target: NoteName | str) -> PitchedNote:
    """Next occurrence of ``target`` strictly above ``reference``.

    Same octave when the target's chroma is higher than the reference's,
    otherwise the next octave up.

    Examples:
        find_next_note_up(F4, "B") → B4
        find_next_note_up(B4, "E") → E5
        find_next_note_up(C4, "C") → C5
    """
    target = NoteName(target)
    octave = reference.octave if target.chroma > reference.name.chroma else reference.octave + 1
    return PitchedNote(target, octave)


def build_close_position(base: PitchedNote, targets: Sequence[NoteName | str]) -> tuple[PitchedNote, ...]:
    """Stack ``targets`` upward from ``base`` in close position.

    ``base`` itself is not included in the result.

    Example:
        build_close_position(B3, ["F", "A"]) → (F4, A4)
    """
    result: list[PitchedNote] = []
    current = base
    for target in targets:
        current = find_next_note_up(current, target)
        result.append(current)
    return tuple(result)


# ---------------------------------------------------------------------------
# Heuristics
# ---------------------------------------------------------------------------


def _is_muddy_bass(previous: PitchedNote, candidate: PitchedNote, config: PlacementConfig) -> bool:
    interval = candidate.midi - previous.midi
    return interval < config.min_bass_interval and candidate.octave < config.bass_ceiling_octave


def _is_cluster(
    first: PitchedNote,
    second: PitchedNote,
    candidate: PitchedNote,
    config: PlacementConfig,
) -> bool:
    return (
        second.midi - first.midi <= config.cluster_threshold
        and candidate.midi - second.midi <= config.cluster_threshold
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def place_pitch_classes(
    pitch_classes: Sequence[NoteName | str],
    density: DensityHint | str = DensityHint.COMPACT,
    *,
    config: PlacementConfig = DEFAULT_PLACEMENT_CONFIG,
) -> tuple[PitchedNote, ...]:
    """Place an ordered list of pitch classes into octaves.

    Args:
        pitch_classes: Pitch classes in intended low-to-high order
        density:       "compact" (default) or "spread"
        config:        Placement thresholds

    Returns:
        Strictly ascending PitchedNotes, one per input, in input order.
        Empty input gives an empty tuple.

    Raises:
        ValueError: For an unknown density hint or pitch class.
    """
    hint = DensityHint(density)
    if not pitch_classes:
        return ()

    placed: list[PitchedNote] = [PitchedNote(NoteName(pitch_classes[0]), config.base_octave(hint))]
    for pitch_class in pitch_classes[1:]:
        previous = placed[-1]
        candidate = find_next_note_up(previous, pitch_class)
        if _is_muddy_bass(previous, candidate, config):
            candidate = candidate.raised()
        if len(placed) >= 2 and _is_cluster(placed[-2], previous, candidate, config):
            candidate = candidate.raised()
        placed.append(candidate)
    return tuple(placed)


def place_voicing(
    blocks: Sequence[PlaygroundBlock],
    density: DensityHint | str = DensityHint.COMPACT,
    *,
    config: PlacementConfig = DEFAULT_PLACEMENT_CONFIG,
) -> tuple[PitchedNote, ...]:
    """Place the enabled playground blocks into octaves.

    Disabled blocks are skipped; position i of the result belongs to the
    i-th enabled block.

    Examples:
        >>> place_voicing([root C, third E, seventh B])
        (C4, E4, B4)
        >>> place_voicing([root C, seventh B, third E])
        (C4, B4, E5)
    """
    enabled = [block.pitch_class for block in blocks if block.enabled]
    return place_pitch_classes(enabled, density, config=config)
