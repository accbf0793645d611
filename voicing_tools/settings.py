"""
voicing_tools/settings.py — Environment-driven settings for the tool layer.

Values come from the process environment, after python-dotenv has loaded a
local .env file (existing environment variables win):

    VOICELAB_DENSITY        compact | spread        (default: compact)
    VOICELAB_LOG_LEVEL      DEBUG | INFO | WARNING  (default: WARNING)
    VOICELAB_MIDI_BPM       tempo for MIDI export   (default: 120)
    VOICELAB_MIDI_VELOCITY  note-on velocity 1–127  (default: 90)

Invalid values raise ValueError when settings are loaded, not later.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass

from dotenv import load_dotenv

from voicing_core.types import DensityHint

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class Settings:
    """
    Tool-layer settings.

    Attributes:
        density: Default placement hint for playground voicings.
        log_level: Root logging level name used by the CLI.
        midi_bpm: Tempo of exported MIDI files.
        midi_velocity: Note-on velocity of exported MIDI notes.
    """

    density: DensityHint = DensityHint.COMPACT
    log_level: str = "WARNING"
    midi_bpm: float = 120.0
    midi_velocity: int = 90

    def __post_init__(self) -> None:
        """Validate settings."""
        object.__setattr__(self, "density", DensityHint(self.density))
        object.__setattr__(self, "log_level", self.log_level.upper())
        if self.log_level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {_LOG_LEVELS}, got {self.log_level!r}")
        if self.midi_bpm <= 0:
            raise ValueError(f"midi_bpm must be positive, got {self.midi_bpm}")
        if not (1 <= self.midi_velocity <= 127):
            raise ValueError(f"midi_velocity must be in [1, 127], got {self.midi_velocity}")

    @property
    def log_level_number(self) -> int:
        """Numeric logging level, e.g. logging.WARNING."""
        return getattr(logging, self.log_level)


DEFAULT_SETTINGS = Settings()
"""Settings used when nothing is configured; also the fallback for unset variables."""


def _number(env: Mapping[str, str], key: str, default: str, kind: type) -> float | int:
    raw = env.get(key, default).strip()
    try:
        return kind(raw)
    except ValueError:
        raise ValueError(f"{key} must be a {kind.__name__}, got {raw!r}") from None


def settings_from_env(env: Mapping[str, str]) -> Settings:
    """Build Settings from an environment mapping (no .env loading).

    Unset variables take their value from DEFAULT_SETTINGS.
    """
    default = DEFAULT_SETTINGS
    return Settings(
        density=env.get("VOICELAB_DENSITY", default.density.value).strip().lower(),
        log_level=env.get("VOICELAB_LOG_LEVEL", default.log_level).strip(),
        midi_bpm=_number(env, "VOICELAB_MIDI_BPM", str(default.midi_bpm), float),
        midi_velocity=_number(env, "VOICELAB_MIDI_VELOCITY", str(default.midi_velocity), int),
    )


def load_settings() -> Settings:
    """Load a local .env file, then read Settings from os.environ."""
    load_dotenv()
    return settings_from_env(os.environ)
