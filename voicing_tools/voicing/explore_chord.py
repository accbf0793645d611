"""
explore_chord tool — spell a 7th chord and its extensions.

Pure computation: no I/O.
Given a root + quality (+ optional extensions), returns:
  - The four chord tones
  - All extensions, and alterations for dominant chords
  - The chord symbol for the selected extensions (e.g. "G13(♭9)")
  - Extensions the quality offers, grouped by degree, with tips
  - Extension families to avoid, and those recommended for the chord function
"""

from typing import Any

from voicing_core.chords import extended_chord_tones, recommended_extensions
from voicing_core.extensions import (
    AVOID_EXTENSIONS,
    EXTENSION_TIPS,
    build_chord_symbol,
    extensions_by_group,
)
from voicing_core.types import Chord, ChordFunction
from voicing_tools.base import ToolParameter, ToolResult, VoicingTool
from voicing_tools.voicing._common import NOTE_CHOICES, QUALITY_CHOICES, parse_extensions

FUNCTION_CHOICES: tuple[str, ...] = tuple(function.value for function in ChordFunction)


def _fields(value: Any) -> dict[str, str | None]:
    return {name: (note.value if note is not None else None) for name, note in vars(value).items()}


class ExploreChord(VoicingTool):
    """
    Spell a chord: tones, extensions, alterations, and its chord symbol.

    100% deterministic — no database, works offline.
    """

    @property
    def name(self) -> str:
        return "explore_chord"

    @property
    def description(self) -> str:
        return (
            "Spell a jazz 7th chord. Returns the root, 3rd, 5th and 7th, "
            "all extensions (9, 11, ♯11, 13), alterations for dominant chords "
            "(♭9, ♯9, ♯11, ♭13), the chord symbol for the selected extensions, "
            "which extensions the quality offers and which ones to avoid. "
            f"Qualities: {', '.join(QUALITY_CHOICES)}."
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
                description="Comma list of selected extensions (e.g. 'ninth,flatNinth'). Default: none.",
                required=False,
                default="",
            ),
            ToolParameter(
                name="function",
                type=str,
                description="Harmonic function for recommendations: ii, V, I or other. Default: other.",
                required=False,
                default="other",
                choices=FUNCTION_CHOICES,
            ),
        ]

    def execute(self, **kwargs: Any) -> ToolResult:
        """
        Spell the chord for the given root + quality + extensions.

        Returns:
            ToolResult with tones, extensions, alterations, symbol and
            extension guidance.
        """
        chord = Chord(kwargs["root"], kwargs["quality"], kwargs["function"])
        selected = parse_extensions(kwargs["extensions"], chord.quality)

        tones = extended_chord_tones(chord)
        recommended = recommended_extensions(chord)
        available = {
            group: [
                {
                    "key": option.key.value,
                    "label": option.label,
                    "is_alteration": option.is_alteration,
                    "tip": EXTENSION_TIPS[option.key],
                }
                for option in options
            ]
            for group, options in extensions_by_group(chord.quality).items()
        }

        return ToolResult(
            success=True,
            data={
                "root": chord.root.value,
                "quality": chord.quality.value,
                "symbol": build_chord_symbol(chord.root, chord.quality, selected),
                "tones": _fields(tones.chord_tones),
                "extensions": _fields(tones.extensions),
                "alterations": _fields(tones.alterations) if tones.alterations else None,
                "selected": sorted(selected),
                "available_extensions": available,
                "avoid": sorted(family.value for family in AVOID_EXTENSIONS[chord.quality]),
                "recommended": {k: v for k, v in _fields(recommended).items() if v is not None},
            },
            metadata={"has_alterations": tones.alterations is not None},
        )
