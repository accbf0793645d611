"""
Configuration dataclasses for voicing placement and analysis.

These immutable config objects decouple threshold tuning from function
signatures, making it easy to define standard configurations and reuse them
across calls. The defaults encode the engine's reference behaviour.
"""

from dataclasses import dataclass

from voicing_core import constants
from voicing_core.types import DensityHint


@dataclass(frozen=True)
class PlacementConfig:
    """
    Configuration for octave placement of playground voicings.

    Attributes:
        compact_base_octave: Octave of the first voice for the compact hint.
            Defaults to 4 (single-hand voicings around middle C).
        spread_base_octave: Octave of the first voice for the spread hint.
            Defaults to 3 (two-hand voicings with a bass voice).
        cluster_threshold: Largest interval (semitones) counted as "tight"
            when looking for three-note clusters. Defaults to a minor third.
        min_bass_interval: Smallest interval that stays clear below the bass
            ceiling. Defaults to a perfect fourth.
        bass_ceiling_octave: Notes placed below this octave count as bass
            register for the mud check. Defaults to 4.

    Example:
        >>> config = PlacementConfig(spread_base_octave=2)
        >>> notes = place_voicing(blocks, "spread", config=config)
    """

    compact_base_octave: int = 4
    spread_base_octave: int = 3
    cluster_threshold: int = constants.CLUSTER_THRESHOLD
    min_bass_interval: int = constants.MIN_BASS_INTERVAL
    bass_ceiling_octave: int = 4

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        for name in ("compact_base_octave", "spread_base_octave", "bass_ceiling_octave"):
            value = getattr(self, name)
            if not (0 <= value <= 8):
                raise ValueError(f"{name} must be in [0, 8], got {value}")
        if self.cluster_threshold < 0:
            raise ValueError(f"cluster_threshold must be non-negative, got {self.cluster_threshold}")
        if self.min_bass_interval < 0:
            raise ValueError(f"min_bass_interval must be non-negative, got {self.min_bass_interval}")

    def base_octave(self, density: DensityHint) -> int:
        """Octave of the first placed voice for a density hint."""
        if DensityHint(density) is DensityHint.SPREAD:
            return self.spread_base_octave
        return self.compact_base_octave


@dataclass(frozen=True)
class AnalysisConfig:
    """
    Thresholds used by the voicing quality analyzer.

    Attributes:
        max_comfortable_notes: More voices than this suggest two hands.
        max_playable_notes: More voices than this are flagged as too many.
        max_hand_span: Largest one-hand span in semitones (minor tenth).
        span_slack: Semitones tolerated above max_hand_span before the
            wide-span suggestion fires.
        cluster_threshold: Largest "tight" interval for dense clusters.
        bass_ceiling_midi: MIDI pitch at or below which notes are bass register.
        min_bass_interval: Smallest clear interval in the bass register.
        max_gap: Adjacent voice gap above which a gap suggestion fires.
        spread_ratio: Largest/smallest interval ratio for unbalanced spacing.
    """

    max_comfortable_notes: int = constants.MAX_COMFORTABLE_NOTES
    max_playable_notes: int = constants.MAX_PLAYABLE_NOTES
    max_hand_span: int = constants.MAX_HAND_SPAN_SEMITONES
    span_slack: int = 2
    cluster_threshold: int = constants.CLUSTER_THRESHOLD
    bass_ceiling_midi: int = constants.BASS_UPPER_LIMIT_MIDI
    min_bass_interval: int = constants.MIN_BASS_INTERVAL
    max_gap: int = constants.OCTAVE
    spread_ratio: int = 4

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        if self.max_comfortable_notes <= 0:
            raise ValueError(
                f"max_comfortable_notes must be positive, got {self.max_comfortable_notes}"
            )
        if self.max_playable_notes < self.max_comfortable_notes:
            raise ValueError(
                f"max_playable_notes ({self.max_playable_notes}) must be >= "
                f"max_comfortable_notes ({self.max_comfortable_notes})"
            )
        if not (0 <= self.bass_ceiling_midi <= 127):
            raise ValueError(f"bass_ceiling_midi must be in [0, 127], got {self.bass_ceiling_midi}")
        if self.spread_ratio <= 1:
            raise ValueError(f"spread_ratio must be > 1, got {self.spread_ratio}")

    @property
    def wide_span_threshold(self) -> int:
        """Span (semitones) above which the wide-span suggestion fires."""
        return self.max_hand_span + self.span_slack


DEFAULT_PLACEMENT_CONFIG = PlacementConfig()
"""Default placement: compact at octave 4, spread at octave 3."""

DEFAULT_ANALYSIS_CONFIG = AnalysisConfig()
"""Default analysis thresholds."""
