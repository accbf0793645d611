"""
voicing_core/extensions.py — Extension availability, avoid-note rules, and
chord symbol formatting.

Quality-indexed tables declare which extensions a chord can offer, which
extension families clash with the chord's essential tones ("avoid notes"),
and how a selection of extensions is spelled as a chord symbol:

    build_chord_symbol("C", "maj7", {"ninth": True, "sharpEleventh": True,
                                     "thirteenth": True})  →  "Cmaj13(♯11)"

All tables are read-only mappings; all functions are pure.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType

from voicing_core.chords import extended_chord_tones, note_for_role
from voicing_core.types import (
    Chord,
    ChordQuality,
    ExtendedChordTones,
    ExtensionFamily,
    ExtensionKey,
    Extensions,
    NoteName,
    VoicingRole,
)

SelectedExtensions = Mapping[str, bool]
"""Extension key (e.g. "flatNinth") → selected flag. Missing keys mean False."""

# ---------------------------------------------------------------------------
# Labels + tips
# ---------------------------------------------------------------------------

EXTENSION_LABELS: MappingProxyType[ExtensionKey, str] = MappingProxyType(
    {
        ExtensionKey.NINTH: "9",
        ExtensionKey.FLAT_NINTH: "♭9",
        ExtensionKey.SHARP_NINTH: "♯9",
        ExtensionKey.ELEVENTH: "11",
        ExtensionKey.SHARP_ELEVENTH: "♯11",
        ExtensionKey.THIRTEENTH: "13",
        ExtensionKey.FLAT_THIRTEENTH: "♭13",
    }
)

EXTENSION_TIPS: MappingProxyType[ExtensionKey, str] = MappingProxyType(
    {
        ExtensionKey.NINTH: "Adds smooth color - the most common extension",
        ExtensionKey.FLAT_NINTH: "Creates tension, wants to resolve downward",
        ExtensionKey.SHARP_NINTH: "Blues/funk color - the 'Hendrix chord' sound",
        ExtensionKey.ELEVENTH: "Suspended, open sound - great on minor chords",
        ExtensionKey.SHARP_ELEVENTH: "Lydian color - bright, modern, dreamy",
        ExtensionKey.THIRTEENTH: "Brightens the chord - characteristic of dominant 13",
        ExtensionKey.FLAT_THIRTEENTH: "Darker altered color - creates tension",
    }
)

# Render order used wherever extensions are listed
DEFAULT_EXTENSION_ORDER: tuple[ExtensionKey, ...] = tuple(ExtensionKey)

# ---------------------------------------------------------------------------
# Available extensions per quality
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ExtensionOption:
    """An extension a UI can offer for a chord quality.

    Attributes:
        key:           Extension key
        label:         Display label, e.g. "♭9"
        group:         Degree group: "9ths", "11ths" or "13ths"
        is_alteration: True for non-diatonic color tones (♭9, ♯9, ♭13)
    """

    key: ExtensionKey
    label: str
    group: str
    is_alteration: bool


def _option(key: ExtensionKey, group: str, is_alteration: bool = False) -> ExtensionOption:
    return ExtensionOption(key=key, label=EXTENSION_LABELS[key], group=group, is_alteration=is_alteration)


_NINTH = _option(ExtensionKey.NINTH, "9ths")
_FLAT_NINTH = _option(ExtensionKey.FLAT_NINTH, "9ths", is_alteration=True)
_SHARP_NINTH = _option(ExtensionKey.SHARP_NINTH, "9ths", is_alteration=True)
_ELEVENTH = _option(ExtensionKey.ELEVENTH, "11ths")
_SHARP_ELEVENTH = _option(ExtensionKey.SHARP_ELEVENTH, "11ths")
_THIRTEENTH = _option(ExtensionKey.THIRTEENTH, "13ths")
_FLAT_THIRTEENTH = _option(ExtensionKey.FLAT_THIRTEENTH, "13ths", is_alteration=True)

AVAILABLE_EXTENSIONS: MappingProxyType[ChordQuality, tuple[ExtensionOption, ...]] = (
    MappingProxyType(
        {
            ChordQuality.MAJ7: (_NINTH, _ELEVENTH, _SHARP_ELEVENTH, _THIRTEENTH),
            ChordQuality.MIN7: (_NINTH, _ELEVENTH, _THIRTEENTH, _SHARP_ELEVENTH),
            ChordQuality.DOM7: (
                _NINTH,
                _FLAT_NINTH,
                _SHARP_NINTH,
                _ELEVENTH,
                _SHARP_ELEVENTH,
                _THIRTEENTH,
                _FLAT_THIRTEENTH,
            ),
            ChordQuality.MIN7B5: (_NINTH, _ELEVENTH, _SHARP_ELEVENTH, _THIRTEENTH),
            ChordQuality.DIM7: (_NINTH, _ELEVENTH, _THIRTEENTH),
        }
    )
)

EXTENSION_GROUPS: tuple[str, ...] = ("9ths", "11ths", "13ths")

# ---------------------------------------------------------------------------
# Avoid / safe extension families per quality
# ---------------------------------------------------------------------------

# maj7 / dom7: natural 11 sits a half step above the major 3rd
# min7 / min7b5 / dim7: natural 13 fights the minor colour
AVOID_EXTENSIONS: MappingProxyType[ChordQuality, frozenset[ExtensionFamily]] = MappingProxyType(
    {
        ChordQuality.MAJ7: frozenset({ExtensionFamily.ELEVENTH}),
        ChordQuality.MIN7: frozenset({ExtensionFamily.THIRTEENTH}),
        ChordQuality.DOM7: frozenset({ExtensionFamily.ELEVENTH}),
        ChordQuality.MIN7B5: frozenset({ExtensionFamily.THIRTEENTH}),
        ChordQuality.DIM7: frozenset({ExtensionFamily.THIRTEENTH}),
    }
)

SAFE_EXTENSIONS: MappingProxyType[ChordQuality, frozenset[ExtensionFamily]] = MappingProxyType(
    {quality: frozenset(ExtensionFamily) - avoid for quality, avoid in AVOID_EXTENSIONS.items()}
)

_QUALITY_SYMBOLS: MappingProxyType[ChordQuality, str] = MappingProxyType(
    {
        ChordQuality.MAJ7: "maj7",
        ChordQuality.MIN7: "m7",
        ChordQuality.DOM7: "7",
        ChordQuality.MIN7B5: "m7♭5",
        ChordQuality.DIM7: "°7",
    }
)


# ---------------------------------------------------------------------------
# Lookups
# ---------------------------------------------------------------------------


def extensions_by_group(quality: ChordQuality | str) -> dict[str, tuple[ExtensionOption, ...]]:
    """Available extensions for ``quality`` keyed by degree group."""
    available = AVAILABLE_EXTENSIONS[ChordQuality(quality)]
    return {group: tuple(opt for opt in available if opt.group == group) for group in EXTENSION_GROUPS}


def should_avoid_extension(chord: Chord, family: ExtensionFamily | str) -> bool:
    """True when the extension family clashes with the chord's quality.

    Example:
        >>> should_avoid_extension(Chord("C", "maj7"), "eleventh")
        True
    """
    return ExtensionFamily(family) in AVOID_EXTENSIONS[chord.quality]


def safe_extensions(chord: Chord) -> Extensions:
    """Extensions of ``chord`` with avoided families blanked out.

    ♯11 is never an avoid note and is always kept.
    """
    full = extended_chord_tones(chord).extensions
    avoid = AVOID_EXTENSIONS[chord.quality]
    return Extensions(
        ninth=None if ExtensionFamily.NINTH in avoid else full.ninth,
        eleventh=None if ExtensionFamily.ELEVENTH in avoid else full.eleventh,
        sharp_eleventh=full.sharp_eleventh,
        thirteenth=None if ExtensionFamily.THIRTEENTH in avoid else full.thirteenth,
    )


def normalize_selection(selected: SelectedExtensions | None) -> dict[str, bool]:
    """Plain-string copy of a selection map (ExtensionKey members become their values)."""
    return {str(key): bool(flag) for key, flag in (selected or {}).items()}


def active_extension_keys(selected: SelectedExtensions | None) -> list[ExtensionKey]:
    """Selected extension keys in render order. Unknown keys are ignored."""
    chosen = {key for key, is_selected in normalize_selection(selected).items() if is_selected}
    return [key for key in DEFAULT_EXTENSION_ORDER if key.value in chosen]


def extension_note(tones: ExtendedChordTones, key: ExtensionKey | str) -> NoteName | None:
    """Pitch class of an extension key, or None when not available for the chord."""
    return note_for_role(tones, ExtensionKey(key).role)


def role_for_extension_key(key: ExtensionKey | str) -> VoicingRole:
    """Voicing role played by a voice carrying extension ``key``."""
    return ExtensionKey(key).role


def role_for_note(tones: ExtendedChordTones, note: NoteName | str) -> VoicingRole | None:
    """Voicing role of a pitch class within ``tones`` (chord tones win ties)."""
    note = NoteName(note)
    for role, tone in (
        (VoicingRole.ROOT, tones.root),
        (VoicingRole.THIRD, tones.third),
        (VoicingRole.FIFTH, tones.fifth),
        (VoicingRole.SEVENTH, tones.seventh),
    ):
        if tone is note:
            return role
    for key in DEFAULT_EXTENSION_ORDER:
        if extension_note(tones, key) is note:
            return key.role
    return None


# ---------------------------------------------------------------------------
# Chord symbols
# ---------------------------------------------------------------------------


def _selected(selected: SelectedExtensions, *keys: ExtensionKey) -> bool:
    return any(selected.get(key.value, False) for key in keys)


def build_chord_symbol(
    root: NoteName | str,
    quality: ChordQuality | str,
    selected: SelectedExtensions | None = None,
) -> str:
    """Build a chord symbol with extensions, e.g. "Cmaj13(♯11)".

    The highest selected degree (13 > 11 > 9) replaces the 7 of the base
    suffix; alterations follow in parentheses in the order ♭13, ♯11, ♭9, ♯9.

    Args:
        root:     Root pitch class
        quality:  Chord quality
        selected: Extension key → selected flag. None or empty means no extensions.

    Returns:
        The chord symbol. Never raises for unknown extension keys.

    Examples:
        >>> build_chord_symbol("D", "min7", {})
        'Dm7'
        >>> build_chord_symbol("G", "dom7", {"thirteenth": True, "flatNinth": True})
        'G13(♭9)'
    """
    root = NoteName(root)
    quality = ChordQuality(quality)
    selected = normalize_selection(selected)
    base = _QUALITY_SYMBOLS[quality]

    if not active_extension_keys(selected):
        return f"{root.value}{base}"

    highest = ""
    alterations: list[str] = []
    if _selected(selected, ExtensionKey.THIRTEENTH, ExtensionKey.FLAT_THIRTEENTH):
        highest = "13"
        if _selected(selected, ExtensionKey.FLAT_THIRTEENTH):
            alterations.append(EXTENSION_LABELS[ExtensionKey.FLAT_THIRTEENTH])
    elif _selected(selected, ExtensionKey.ELEVENTH, ExtensionKey.SHARP_ELEVENTH):
        highest = "11"
    elif _selected(selected, ExtensionKey.NINTH, ExtensionKey.FLAT_NINTH, ExtensionKey.SHARP_NINTH):
        highest = "9"

    for key in (ExtensionKey.SHARP_ELEVENTH, ExtensionKey.FLAT_NINTH, ExtensionKey.SHARP_NINTH):
        if _selected(selected, key):
            alterations.append(EXTENSION_LABELS[key])

    if quality is ChordQuality.DOM7:
        base = highest
    elif quality is ChordQuality.MAJ7:
        base = f"maj{highest}"
    elif quality is ChordQuality.MIN7:
        base = f"m{highest}"
    else:
        base = f"{base}({highest})"

    suffix = f"({','.join(alterations)})" if alterations else ""
    return f"{root.value}{base}{suffix}"


def chord_symbol_for(chord: Chord, extensions: Iterable[ExtensionKey | str] = ()) -> str:
    """Convenience wrapper: chord symbol for a Chord and a list of extension keys."""
    return build_chord_symbol(chord.root, chord.quality, {str(key): True for key in extensions})
