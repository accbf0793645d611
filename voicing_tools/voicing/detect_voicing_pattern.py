"""
detect_voicing_pattern tool — name a voicing from its role order.

Pure computation: reads only the bundled pattern library.
"""

from typing import Any

from voicing_core.recognition import detect_pattern, pattern_description
from voicing_tools.base import ToolParameter, ToolResult, VoicingTool
from voicing_tools.voicing._common import detected_to_dict, parse_roles


class DetectVoicingPattern(VoicingTool):
    """Recognise a named jazz voicing from low-to-high chord roles."""

    @property
    def name(self) -> str:
        return "detect_voicing_pattern"

    @property
    def description(self) -> str:
        return (
            "Recognise a named jazz piano voicing (shell, rootless, drop-2, open, "
            "inversion, slash chord) from the chord roles of its voices, low to high. "
            "Returns the pattern, whether the match is exact or fuzzy with a "
            "confidence, and an explanation of why the voicing works."
        )

    @property
    def parameters(self) -> list[ToolParameter]:
        return [
            ToolParameter(
                name="roles",
                type=str,
                description=(
                    "Comma list of roles low to high, e.g. 'root,third,seventh'. "
                    "Roles: root, third, fifth, seventh, ninth, flatNinth, sharpNinth, "
                    "eleventh, sharpEleventh, thirteenth, flatThirteenth."
                ),
            ),
        ]

    def execute(self, **kwargs: Any) -> ToolResult:
        roles = parse_roles(kwargs["roles"])
        detected = detect_pattern(roles)
        return ToolResult(
            success=True,
            data={
                "roles": [role.value for role in roles],
                "pattern": detected_to_dict(
                    detected, pattern_description(detected) if detected else None
                ),
            },
            metadata={"matched": detected is not None},
        )
