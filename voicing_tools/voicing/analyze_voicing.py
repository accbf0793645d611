"""
analyze_voicing tool — critique an already placed voicing.

Pure computation: no I/O.
Given the roles of the voices and their placed notes, returns playability,
harmony and spacing warnings sorted errors → warnings → suggestions.
"""

from typing import Any

from voicing_core.analysis import analyze_voicing, check_minimum_blocks, sort_warnings
from voicing_core.notes import parse_notes
from voicing_core.types import PlaygroundBlock
from voicing_tools.base import ToolParameter, ToolResult, VoicingTool
from voicing_tools.voicing._common import QUALITY_CHOICES, parse_roles, split_csv, warning_to_dict


class AnalyzeVoicing(VoicingTool):
    """Warn about playability and harmony problems in a placed voicing."""

    @property
    def name(self) -> str:
        return "analyze_voicing"

    @property
    def description(self) -> str:
        return (
            "Check a placed piano voicing for problems: too many notes, wide "
            "stretches, dense clusters, missing guide tones (3rd/7th), muddy "
            "bass intervals, avoid notes for the chord quality and uneven "
            "spacing. Give the roles and the notes (e.g. 'C4,E4,B4') low to high."
        )

    @property
    def parameters(self) -> list[ToolParameter]:
        return [
            ToolParameter(
                name="roles",
                type=str,
                description="Comma list of roles low to high, e.g. 'root,third,seventh'.",
            ),
            ToolParameter(
                name="notes",
                type=str,
                description="Comma list of placed notes, same order as roles, e.g. 'C4,E4,B4'.",
            ),
            ToolParameter(
                name="quality",
                type=str,
                description=f"Chord quality. Options: {', '.join(QUALITY_CHOICES)}.",
                choices=QUALITY_CHOICES,
            ),
        ]

    def execute(self, **kwargs: Any) -> ToolResult:
        roles = parse_roles(kwargs["roles"])
        notes = parse_notes(split_csv(kwargs["notes"]))
        if len(roles) != len(notes):
            return ToolResult(
                success=False,
                error=f"roles and notes must have the same length ({len(roles)} != {len(notes)})",
            )

        blocks = [
            PlaygroundBlock(id=f"{index}-{role.value}", role=role, pitch_class=note.name)
            for index, (role, note) in enumerate(zip(roles, notes))
        ]
        warnings = list(analyze_voicing(blocks, notes, kwargs["quality"]))
        minimum = check_minimum_blocks(len(blocks))
        if minimum is not None:
            warnings.append(minimum)

        return ToolResult(
            success=True,
            data={
                "notes": [str(note) for note in notes],
                "warnings": [warning_to_dict(w) for w in sort_warnings(warnings)],
            },
            metadata={"warning_count": len(warnings)},
        )
