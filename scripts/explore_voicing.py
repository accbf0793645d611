#!/usr/bin/env python
"""Jazz Voicing Lab — explore, voice and export a chord from the shell.

Usage
-----
    # Spell the chord and voice it in the default order (R 3 5 7)
    python scripts/explore_voicing.py --root D --quality min7

    # Shell A with a 9th, two-hand spread placement
    python scripts/explore_voicing.py --root D --quality min7 --ext ninth \\
        --order root,third,seventh,ninth --density spread

    # Altered dominant, written to a MIDI file
    python scripts/explore_voicing.py --root G --quality dom7 --ext flatNinth,thirteenth \\
        --order root,seventh,third,flatNinth,thirteenth --midi g13b9.mid

    # Name a voicing from its roles only
    python scripts/explore_voicing.py --pattern-roles third,fifth,seventh,ninth

    # Raw tool output
    python scripts/explore_voicing.py --root C --quality maj7 --json

    # What the tools are and what they need
    python scripts/explore_voicing.py --list-tools

Exit codes
----------
    0  — success
    2  — invalid input, invalid VOICELAB_* setting or tool failure
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

# Add project root to sys.path
sys.path.insert(0, str(Path(__file__).parent.parent))

from voicing_tools.base import ToolResult  # noqa: E402
from voicing_tools.registry import get_registry  # noqa: E402
from voicing_tools.settings import load_settings  # noqa: E402
from voicing_tools.voicing._common import DENSITY_CHOICES, NOTE_CHOICES, QUALITY_CHOICES  # noqa: E402

logger = logging.getLogger("explore_voicing")


def parse_args(default_density: str) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Jazz Voicing Lab")
    p.add_argument("--root", choices=NOTE_CHOICES, default=None, help="Chord root (sharp spelling)")
    p.add_argument("--quality", choices=QUALITY_CHOICES, default=None, help="Chord quality")
    p.add_argument(
        "--ext",
        default="",
        metavar="KEYS",
        help="Comma list of extensions, e.g. ninth,flatNinth,thirteenth",
    )
    p.add_argument(
        "--order",
        default="",
        metavar="BLOCKS",
        help="Comma list of blocks low to high, e.g. root,seventh,third,ninth",
    )
    p.add_argument(
        "--disabled",
        default="",
        metavar="BLOCKS",
        help="Comma list of blocks to switch off, e.g. fifth",
    )
    p.add_argument(
        "--density",
        choices=DENSITY_CHOICES,
        default=default_density,
        help=f"Placement hint (default: {default_density})",
    )
    p.add_argument(
        "--pattern-roles",
        default=None,
        metavar="ROLES",
        help="Only detect the voicing pattern for this comma list of roles",
    )
    p.add_argument("--midi", metavar="OUTPUT_MID", default=None, help="Write the voicing to a MIDI file")
    p.add_argument("--bpm", type=float, default=None, help="MIDI tempo (default: from settings)")
    p.add_argument("--json", action="store_true", help="Print raw tool output as JSON")
    p.add_argument("--list-tools", action="store_true", help="List the available tools and exit")
    return p.parse_args()


def _fail(result: ToolResult) -> int:
    print(f"  ERROR: {result.error}", file=sys.stderr)
    return 2


def _print_catalogue(entries: list[dict]) -> None:
    for entry in entries:
        print(f"  {entry['name']:<24} {entry['summary']}")
        print(f"  {'':<24} required: {', '.join(entry['required'])}")


def _print_chord(data: dict) -> None:
    tones = data["tones"]
    print(f"  Chord     : {data['symbol']}")
    print(
        f"  Tones     : R={tones['root']}  3={tones['third']}  "
        f"5={tones['fifth']}  7={tones['seventh']}"
    )
    if data["avoid"]:
        print(f"  Avoid     : {', '.join(data['avoid'])}")


def _print_pattern(pattern: dict | None) -> None:
    if pattern is None:
        print("  Pattern   : (no known voicing)")
        return
    suffix = "" if pattern["match_type"] == "exact" else f" (fuzzy, {pattern['confidence']}%)"
    print(f"  Pattern   : {pattern['name']}{suffix}")
    print(f"              {pattern['description']}")
    print(f"  Why       : {pattern['why_it_works']}")


def _print_voicing(data: dict) -> None:
    print(f"  Symbol    : {data['symbol']}")
    print(f"  Notes     : {' '.join(data['notes']) or '(none)'}")
    _print_pattern(data["pattern"])
    if data["root_warning"]:
        print(f"  Note      : {data['root_warning']}")
    if not data["warnings"]:
        print("  ✓  No voicing problems found")
        return
    print()
    for warning in data["warnings"]:
        print(f"  [{warning['severity']:<10}] {warning['message']}")
        if warning["suggestion"]:
            print(f"               → {warning['suggestion']}")


def main() -> int:
    try:
        settings = load_settings()
    except ValueError as exc:
        print(f"  ERROR: {exc}", file=sys.stderr)
        return 2
    logging.basicConfig(
        level=settings.log_level_number,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    args = parse_args(settings.density.value)
    registry = get_registry()
    logger.debug("Registered tools: %s", ", ".join(registry.names()))

    if args.list_tools:
        _print_catalogue(registry.catalogue())
        return 0

    if args.pattern_roles is not None:
        result = registry.run("detect_voicing_pattern", roles=args.pattern_roles)
        if not result.success:
            return _fail(result)
        if args.json:
            print(json.dumps(result.data, indent=2, ensure_ascii=False))
        else:
            _print_pattern(result.data["pattern"])
        return 0

    if args.root is None or args.quality is None:
        print("  ERROR: --root and --quality are required (or use --pattern-roles)", file=sys.stderr)
        return 2

    chord = registry.run("explore_chord", root=args.root, quality=args.quality, extensions=args.ext)
    if not chord.success:
        return _fail(chord)

    voicing = registry.run(
        "voice_playground",
        root=args.root,
        quality=args.quality,
        extensions=args.ext,
        order=args.order,
        disabled=args.disabled,
        density=args.density,
    )
    if not voicing.success:
        return _fail(voicing)

    exported = None
    if args.midi:
        exported = registry.run(
            "export_voicing_midi",
            root=args.root,
            quality=args.quality,
            extensions=args.ext,
            order=args.order,
            disabled=args.disabled,
            density=args.density,
            output_path=args.midi,
            bpm=args.bpm if args.bpm is not None else settings.midi_bpm,
            velocity=settings.midi_velocity,
        )
        if not exported.success:
            return _fail(exported)

    if args.json:
        payload = {"chord": chord.data, "voicing": voicing.data}
        if exported is not None:
            payload["midi"] = exported.data
        print(json.dumps(payload, indent=2, ensure_ascii=False))
        return 0

    print()
    _print_chord(chord.data)
    _print_voicing(voicing.data)
    if exported is not None:
        print(f"  MIDI saved → {exported.data['path']}")
    print()
    return 0


if __name__ == "__main__":
    sys.exit(main())
