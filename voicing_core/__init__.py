"""
voicing_core/ — Pure jazz voicing engine.

Exports:
    Types:       Chord, ChordQuality, NoteName, PitchedNote, PlaygroundBlock,
                 VoicingRole, VoicingPattern, DetectedPattern, VoicingWarning
    Chords:      chord_tones, extended_chord_tones, recommended_extensions
    Extensions:  build_chord_symbol, should_avoid_extension, safe_extensions
    Placement:   place_voicing, find_next_note_up, build_close_position
    Templates:   generate_voicing, generate_progression, PROGRESSIONS
    Playground:  build_playground_blocks, merge_playground_blocks
    Recognition: detect_pattern, detect_pattern_in_blocks, pattern_description
    Analysis:    analyze_voicing, check_minimum_blocks, sort_warnings
"""

from voicing_core.analysis import analyze_voicing, check_minimum_blocks, sort_warnings
from voicing_core.chords import chord_tones, extended_chord_tones, recommended_extensions
from voicing_core.config import (
    DEFAULT_ANALYSIS_CONFIG,
    DEFAULT_PLACEMENT_CONFIG,
    AnalysisConfig,
    PlacementConfig,
)
from voicing_core.extensions import (
    AVAILABLE_EXTENSIONS,
    build_chord_symbol,
    safe_extensions,
    should_avoid_extension,
)
from voicing_core.patterns import all_pattern_ids, get_pattern_by_id, patterns_by_category
from voicing_core.placement import build_close_position, find_next_note_up, place_voicing
from voicing_core.playground import (
    build_playground_blocks,
    enabled_blocks,
    merge_playground_blocks,
    next_variant_key,
    root_warning,
    update_block_variant,
)
from voicing_core.recognition import detect_pattern, detect_pattern_in_blocks, pattern_description
from voicing_core.templates import (
    ALL_TEMPLATES,
    PROGRESSIONS,
    generate_progression,
    generate_voicing,
    transpose_voicing,
)
from voicing_core.types import (
    Chord,
    ChordFunction,
    ChordQuality,
    DensityHint,
    DetectedPattern,
    ExtensionKey,
    NoteName,
    PitchedNote,
    PlaygroundBlock,
    VoicingPattern,
    VoicingRole,
    VoicingWarning,
)

__all__ = [
    # Types
    "Chord",
    "ChordFunction",
    "ChordQuality",
    "DensityHint",
    "DetectedPattern",
    "ExtensionKey",
    "NoteName",
    "PitchedNote",
    "PlaygroundBlock",
    "VoicingPattern",
    "VoicingRole",
    "VoicingWarning",
    # Config
    "AnalysisConfig",
    "PlacementConfig",
    "DEFAULT_ANALYSIS_CONFIG",
    "DEFAULT_PLACEMENT_CONFIG",
    # Chords
    "chord_tones",
    "extended_chord_tones",
    "recommended_extensions",
    # Extensions
    "AVAILABLE_EXTENSIONS",
    "build_chord_symbol",
    "safe_extensions",
    "should_avoid_extension",
    # Placement
    "build_close_position",
    "find_next_note_up",
    "place_voicing",
    # Templates
    "ALL_TEMPLATES",
    "PROGRESSIONS",
    "generate_progression",
    "generate_voicing",
    "transpose_voicing",
    # Playground
    "build_playground_blocks",
    "enabled_blocks",
    "merge_playground_blocks",
    "next_variant_key",
    "root_warning",
    "update_block_variant",
    # Patterns
    "all_pattern_ids",
    "get_pattern_by_id",
    "patterns_by_category",
    "detect_pattern",
    "detect_pattern_in_blocks",
    "pattern_description",
    # Analysis
    "analyze_voicing",
    "check_minimum_blocks",
    "sort_warnings",
]
