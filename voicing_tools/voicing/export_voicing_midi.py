"""
export_voicing_midi tool — write a placed voicing to a MIDI file.

The only tool with side effects: writes one .mid file via mido.
The voicing is built exactly like voice_playground builds it, then held
as a block chord for ``beats`` quarter notes.
"""

from pathlib import Path
from typing import Any

from voicing_core.extensions import build_chord_symbol
from voicing_core.placement import place_voicing
from voicing_core.playground import enabled_blocks, selected_extensions_from_blocks
from voicing_tools.base import ToolParameter, ToolResult, VoicingTool
from voicing_tools.midi_export import DEFAULT_VELOCITY, voicing_to_midi
from voicing_tools.voicing._common import DENSITY_CHOICES, NOTE_CHOICES, QUALITY_CHOICES
from voicing_tools.voicing.voice_playground import voice_chord


class ExportVoicingMidi(VoicingTool):
    """Render a playground voicing as a single-chord MIDI file."""

    @property
    def name(self) -> str:
        return "export_voicing_midi"

    @property
    def description(self) -> str:
        return (
            "Export a voiced jazz chord to a MIDI file (Type 1, one held chord). "
            "Takes the same chord, extensions and block order as voice_playground "
            "plus an output path, tempo and length in beats."
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
                name="output_path",
                type=str,
                description="Destination .mid file. Its directory must exist.",
            ),
            ToolParameter(
                name="extensions",
                type=str,
                description="Comma list of selected extensions.",
                required=False,
                default="",
            ),
            ToolParameter(
                name="order",
                type=str,
                description="Comma list of blocks, low to high. Default: R 3 5 7 plus extensions.",
                required=False,
                default="",
            ),
            ToolParameter(
                name="disabled",
                type=str,
                description="Comma list of blocks to switch off.",
                required=False,
                default="",
            ),
            ToolParameter(
                name="density",
                type=str,
                description="Placement hint: compact or spread.",
                required=False,
                default="compact",
                choices=DENSITY_CHOICES,
            ),
            ToolParameter(
                name="bpm",
                type=float,
                description="Tempo in BPM. Default: 120.",
                required=False,
                default=120.0,
            ),
            ToolParameter(
                name="beats",
                type=float,
                description="Chord length in quarter notes. Default: 4 (one 4/4 bar).",
                required=False,
                default=4.0,
            ),
            ToolParameter(
                name="velocity",
                type=int,
                description="Note-on velocity 1–127. Default: 90.",
                required=False,
                default=DEFAULT_VELOCITY,
            ),
        ]

    def execute(self, **kwargs: Any) -> ToolResult:
        output_path = Path(kwargs["output_path"])
        if not output_path.parent.exists():
            return ToolResult(
                success=False,
                error=f"Output directory does not exist: {output_path.parent}",
            )
        if kwargs["bpm"] <= 0 or kwargs["beats"] <= 0:
            return ToolResult(success=False, error="bpm and beats must be positive")

        chord, blocks = voice_chord(
            kwargs["root"],
            kwargs["quality"],
            kwargs["extensions"],
            kwargs["order"],
            kwargs["disabled"],
        )
        if len(enabled_blocks(blocks)) == 0:
            return ToolResult(success=False, error="Nothing to export: no enabled voices")

        notes = place_voicing(blocks, kwargs["density"])
        voicing_to_midi(
            notes,
            bpm=kwargs["bpm"],
            beats=kwargs["beats"],
            velocity=kwargs["velocity"],
            output_path=output_path,
        )

        return ToolResult(
            success=True,
            data={
                "path": str(output_path),
                "symbol": build_chord_symbol(
                    chord.root, chord.quality, selected_extensions_from_blocks(blocks)
                ),
                "notes": [str(note) for note in notes],
                "midi": [note.midi for note in notes],
            },
            metadata={"bpm": kwargs["bpm"], "beats": kwargs["beats"]},
        )
