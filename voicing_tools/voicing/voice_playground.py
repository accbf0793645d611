"""
voice_playground tool — place a user-ordered voicing and review it.

Pure computation: no I/O.
Given a chord, selected extensions and a left-to-right block order, returns:
  - The blocks in their final order with on/off state
  - The placed notes (e.g. ["D4", "F4", "C5", "E5"])
  - The recognised voicing pattern, if any
  - Quality warnings, errors first
"""

from typing import Any

from voicing_core.analysis import analyze_voicing, check_minimum_blocks, sort_warnings
from voicing_core.chords import extended_chord_tones
from voicing_core.extensions import build_chord_symbol
from voicing_core.placement import place_voicing
from voicing_core.playground import (
    build_playground_blocks,
    enabled_blocks,
    root_warning,
    selected_extensions_from_blocks,
)
from voicing_core.recognition import detect_pattern_in_blocks, pattern_description
from voicing_core.types import Chord, PlaygroundBlock
from voicing_tools.base import ToolParameter, ToolResult, VoicingTool
from voicing_tools.voicing._common import (
    DENSITY_CHOICES,
    NOTE_CHOICES,
    QUALITY_CHOICES,
    arrange_blocks,
    block_to_dict,
    detected_to_dict,
    parse_extensions,
    warning_to_dict,
)


def voice_chord(
    root: str,
    quality: str,
    extensions: str = "",
    order: str = "",
    disabled: str = "",
) -> tuple[Chord, list[PlaygroundBlock]]:
    """Build and arrange the playground blocks for a chord.

    Raises:
        ValueError: For an unknown note, quality, extension or block.
    """
    chord = Chord(root, quality)
    selected = parse_extensions(extensions, chord.quality)
    blocks = build_playground_blocks(extended_chord_tones(chord), selected)
    return chord, arrange_blocks(blocks, order, disabled)


class VoicePlayground(VoicingTool):
    """
    Place a user-ordered voicing into octaves, name it and critique it.

    The order of the blocks is the order of the voices from low to high;
    the root is never moved to the bass on the user's behalf.
    """

    @property
    def name(self) -> str:
        return "voice_playground"

    @property
    def description(self) -> str:
        return (
            "Voice a jazz 7th chord in a chosen low-to-high order of chord tones "
            "and extensions. Returns concrete notes with octaves, the recognised "
            "voicing pattern (shell, rootless, drop-2, inversion...) with an "
            "explanation, and warnings about playability and harmony. "
            "Use when the user wants to try a voicing or asks why one sounds muddy."
        )

    @property
    def parameters(self) -> list[ToolParameter]:
        return [
            ToolParameter(
                name="root",
                type=str,
                description="Root pitch class, sharp spelling (e.g. 'D', 'F#').",
                choices=NOTE_CHOICES,
            ),
            ToolParameter(
                name="quality",
                type=str,
                description=f"Chord quality. Options: {', '.join(QUALITY_CHOICES)}.",
                choices=QUALITY_CHOICES,
            ),
            ToolParameter(
                name="extensions",
                type=str,
                description="Comma list of selected extensions (e.g. 'ninth,thirteenth').",
                required=False,
                default="",
            ),
            ToolParameter(
                name="order",
                type=str,
                description=(
                    "Comma list of blocks, low to high (e.g. 'root,seventh,third,ninth'). "
                    "Unlisted blocks are switched off. Default: R 3 5 7 plus selected extensions."
                ),
                required=False,
                default="",
            ),
            ToolParameter(
                name="disabled",
                type=str,
                description="Comma list of blocks to switch off (e.g. 'fifth').",
                required=False,
                default="",
            ),
            ToolParameter(
                name="density",
                type=str,
                description="Placement hint: compact (one hand, from octave 4) or spread (from octave 3).",
                required=False,
                default="compact",
                choices=DENSITY_CHOICES,
            ),
        ]

    def execute(self, **kwargs: Any) -> ToolResult:
        """
        Place, recognise and analyse the voicing.

        Returns:
            ToolResult with blocks, notes, pattern and warnings.
        """
        chord, blocks = voice_chord(
            kwargs["root"],
            kwargs["quality"],
            kwargs["extensions"],
            kwargs["order"],
            kwargs["disabled"],
        )
        notes = place_voicing(blocks, kwargs["density"])
        detected = detect_pattern_in_blocks(blocks)

        warnings = list(analyze_voicing(blocks, notes, chord.quality))
        minimum = check_minimum_blocks(len(enabled_blocks(blocks)))
        if minimum is not None:
            warnings.append(minimum)

        symbol = build_chord_symbol(chord.root, chord.quality, selected_extensions_from_blocks(blocks))
        return ToolResult(
            success=True,
            data={
                "symbol": symbol,
                "blocks": [block_to_dict(block) for block in blocks],
                "notes": [str(note) for note in notes],
                "midi": [note.midi for note in notes],
                "pattern": detected_to_dict(
                    detected, pattern_description(detected) if detected else None
                ),
                "warnings": [warning_to_dict(w) for w in sort_warnings(warnings)],
                "root_warning": root_warning(blocks),
            },
            metadata={
                "density": kwargs["density"],
                "voice_count": len(notes),
            },
        )
