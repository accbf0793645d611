"""
Shared helpers for the voicing tools.

Turns raw string parameters ("ninth,flatNinth", "root,seventh,third") into
engine values, and engine values back into JSON-friendly dicts. Any bad
input raises ValueError, which VoicingTool.__call__ turns into a failed
ToolResult.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any

from voicing_core.extensions import AVAILABLE_EXTENSIONS
from voicing_core.playground import update_block_variant
from voicing_core.types import (
    ChordQuality,
    DetectedPattern,
    ExtensionKey,
    PlaygroundBlock,
    VoicingRole,
    VoicingWarning,
)

NOTE_CHOICES: tuple[str, ...] = ("C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B")
QUALITY_CHOICES: tuple[str, ...] = tuple(quality.value for quality in ChordQuality)
DENSITY_CHOICES: tuple[str, ...] = ("compact", "spread")


def split_csv(raw: str | None) -> list[str]:
    """Split a comma list, dropping blanks: "a, b,,c" → ["a", "b", "c"]."""
    return [token.strip() for token in (raw or "").split(",") if token.strip()]


def parse_extensions(raw: str | None, quality: ChordQuality) -> dict[str, bool]:
    """Selection map from a comma list of extension keys.

    Raises:
        ValueError: For an unknown key or one the quality does not offer.
    """
    available = {option.key for option in AVAILABLE_EXTENSIONS[quality]}
    selected: dict[str, bool] = {}
    for token in split_csv(raw):
        try:
            key = ExtensionKey(token)
        except ValueError:
            options = ", ".join(k.value for k in ExtensionKey)
            raise ValueError(f"Unknown extension {token!r}. Options: {options}") from None
        if key not in available:
            raise ValueError(f"Extension {key.value!r} is not available on {quality.value} chords")
        selected[key.value] = True
    return selected


def parse_roles(raw: str | None) -> list[VoicingRole]:
    """Roles from a comma list. Raises ValueError for an unknown role."""
    roles = []
    for token in split_csv(raw):
        try:
            roles.append(VoicingRole(token))
        except ValueError:
            options = ", ".join(r.value for r in VoicingRole)
            raise ValueError(f"Unknown voicing role {token!r}. Options: {options}") from None
    return roles


def _resolve_block(token: str, blocks: list[PlaygroundBlock]) -> tuple[PlaygroundBlock, int]:
    for index, block in enumerate(blocks):
        if block.id == token:
            return block, index
    for index, block in enumerate(blocks):
        for variant in block.variants:
            if variant.role.value == token:
                return update_block_variant(block, variant.key), index
    known = ", ".join(block.id for block in blocks)
    raise ValueError(f"Unknown block {token!r}. Blocks for this chord: {known}")


def arrange_blocks(
    blocks: list[PlaygroundBlock],
    order: str | None,
    disabled: str | None = None,
) -> list[PlaygroundBlock]:
    """Apply a user ordering and disabled list to freshly built blocks.

    ``order`` lists block ids ("root", "ninth") or extension roles
    ("flatNinth", which selects that spelling of the 9th block). Listed
    blocks come first, in that order, and are enabled; the rest follow
    disabled. An empty ``order`` keeps the default order and flags.

    Raises:
        ValueError: For an unknown or repeated token.
    """
    arranged = list(blocks)
    tokens = split_csv(order)
    if tokens:
        chosen: list[PlaygroundBlock] = []
        used: set[str] = set()
        for token in tokens:
            block, _ = _resolve_block(token, arranged)
            if block.id in used:
                raise ValueError(f"Block {block.id!r} appears more than once in the order")
            used.add(block.id)
            chosen.append(replace(block, enabled=True))
        rest = [replace(block, enabled=False) for block in arranged if block.id not in used]
        arranged = chosen + rest

    for token in split_csv(disabled):
        block, index = _resolve_block(token, arranged)
        arranged[index] = replace(block, enabled=False)
    return arranged


# ---------------------------------------------------------------------------
# Serialisation
# ---------------------------------------------------------------------------


def block_to_dict(block: PlaygroundBlock) -> dict[str, Any]:
    return {
        "id": block.id,
        "label": block.label,
        "role": block.role.value,
        "note": block.pitch_class.value,
        "enabled": block.enabled,
        "is_extension": block.is_extension,
        "variant": block.variant_key.value if block.variant_key else None,
    }


def warning_to_dict(warning: VoicingWarning) -> dict[str, Any]:
    return {
        "id": warning.id,
        "severity": warning.severity.value,
        "category": warning.category.value,
        "message": warning.message,
        "explanation": warning.explanation,
        "suggestion": warning.suggestion,
    }


def detected_to_dict(detected: DetectedPattern | None, description: str | None = None) -> dict[str, Any] | None:
    if detected is None:
        return None
    pattern = detected.pattern
    return {
        "id": detected.id,
        "name": detected.name,
        "match_type": detected.match_type.value,
        "confidence": detected.confidence,
        "extra_notes": [role.value for role in detected.extra_notes],
        "category": pattern.category.value,
        "description": description or pattern.description,
        "why_it_works": pattern.why_it_works,
        "common_use": pattern.common_use,
        "caution": pattern.caution,
        "sound_character": pattern.sound_character,
    }
