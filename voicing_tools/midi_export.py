"""
voicing_tools/midi_export.py — Write placed voicings to MIDI files using mido.

This module is the only write I/O in the project:
    placed voicing (voicing_core.placement) → voicing_to_midi
    two-hand progression (voicing_core.templates) → progression_to_midi

MIDI structure:
    Type 1, Track 0 = meta (tempo, 4/4 time signature), Track 1 = chords.
    Every voice of a chord starts on the same tick and is held for
    ``beats`` quarter notes; consecutive chords follow each other directly.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

import mido

from voicing_core.templates import HandVoicing
from voicing_core.types import PitchedNote

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

DEFAULT_TICKS_PER_BEAT: int = 480
"""Standard MIDI ticks per quarter note."""

MIDI_CHANNEL: int = 0
"""MIDI channel for chord events (0-indexed = channel 1 in a DAW)."""

DEFAULT_VELOCITY: int = 90


def _bpm_to_tempo_us(bpm: float) -> int:
    """Convert BPM to MIDI tempo (microseconds per beat). 120 BPM = 500,000 μs."""
    if bpm <= 0:
        bpm = 120.0
    return max(1, round(60_000_000.0 / bpm))


def _new_file(bpm: float, ticks_per_beat: int) -> tuple[mido.MidiFile, mido.MidiTrack]:
    midi = mido.MidiFile(type=1, ticks_per_beat=ticks_per_beat)

    meta_track = mido.MidiTrack()
    midi.tracks.append(meta_track)
    meta_track.append(mido.MetaMessage("set_tempo", tempo=_bpm_to_tempo_us(bpm), time=0))
    meta_track.append(
        mido.MetaMessage(
            "time_signature",
            numerator=4,
            denominator=4,
            clocks_per_click=24,
            notated_32nd_notes_per_beat=8,
            time=0,
        )
    )
    meta_track.append(mido.MetaMessage("end_of_track", time=0))

    chord_track = mido.MidiTrack()
    midi.tracks.append(chord_track)
    return midi, chord_track


def _append_chords(
    track: mido.MidiTrack,
    chords: Sequence[Sequence[PitchedNote]],
    *,
    beats: float,
    velocity: int,
    ticks_per_beat: int,
) -> None:
    duration = max(1, round(beats * ticks_per_beat))
    velocity = max(1, min(127, velocity))
    for chord in chords:
        pitches = [note.midi for note in chord]
        for pitch in pitches:
            if not (0 <= pitch <= 127):
                raise ValueError(f"Note pitch {pitch} is outside the MIDI range [0, 127]")
        for pitch in pitches:
            track.append(mido.Message("note_on", channel=MIDI_CHANNEL, note=pitch, velocity=velocity, time=0))
        # The first note_off carries the whole chord duration as its delta
        for index, pitch in enumerate(pitches):
            track.append(
                mido.Message(
                    "note_off",
                    channel=MIDI_CHANNEL,
                    note=pitch,
                    velocity=0,
                    time=duration if index == 0 else 0,
                )
            )
    track.append(mido.MetaMessage("end_of_track", time=0))


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def voicing_to_midi(
    notes: Sequence[PitchedNote],
    *,
    bpm: float = 120.0,
    beats: float = 4.0,
    velocity: int = DEFAULT_VELOCITY,
    output_path: str | Path | None = None,
    ticks_per_beat: int = DEFAULT_TICKS_PER_BEAT,
) -> mido.MidiFile:
    """Render one placed voicing as a held block chord.

    Args:
        notes:          Placed notes. Must not be empty.
        bpm:            Tempo in BPM (default: 120.0).
        beats:          Chord length in quarter notes (default: a 4/4 bar).
        velocity:       Note-on velocity, clamped to 1–127.
        output_path:    If provided, saves the MIDI file to this path.
                        The path's parent directory must exist.
        ticks_per_beat: MIDI resolution (default: 480).

    Returns:
        mido.MidiFile object.

    Raises:
        ValueError: If notes is empty or a note is outside the MIDI range.
        OSError: If output_path is not writable.
    """
    if not notes:
        raise ValueError("notes sequence must not be empty")
    return progression_to_midi(
        [notes],
        bpm=bpm,
        beats=beats,
        velocity=velocity,
        output_path=output_path,
        ticks_per_beat=ticks_per_beat,
    )


def progression_to_midi(
    chords: Sequence[Sequence[PitchedNote] | HandVoicing],
    *,
    bpm: float = 120.0,
    beats: float = 4.0,
    velocity: int = DEFAULT_VELOCITY,
    output_path: str | Path | None = None,
    ticks_per_beat: int = DEFAULT_TICKS_PER_BEAT,
) -> mido.MidiFile:
    """Render a sequence of voicings, one chord after another.

    HandVoicing entries are flattened left hand first.

    Raises:
        ValueError: If chords is empty, a chord is empty, or beats <= 0.
    """
    if not chords:
        raise ValueError("chords sequence must not be empty")
    if beats <= 0:
        raise ValueError(f"beats must be positive, got {beats}")

    flat = [chord.notes if isinstance(chord, HandVoicing) else tuple(chord) for chord in chords]
    if any(not chord for chord in flat):
        raise ValueError("every chord must contain at least one note")

    midi, track = _new_file(bpm, ticks_per_beat)
    _append_chords(track, flat, beats=beats, velocity=velocity, ticks_per_beat=ticks_per_beat)

    if output_path is not None:
        midi.save(str(output_path))
        logger.info("Wrote %d chord(s) to %s", len(flat), output_path)

    return midi


def midi_to_chords(midi_file: mido.MidiFile) -> list[list[int]]:
    """Parse a chord track back into lists of MIDI pitches, one per chord.

    Notes whose note_on events share a tick belong to the same chord.
    """
    if len(midi_file.tracks) < 2:
        return []

    by_tick: dict[int, list[int]] = {}
    abs_tick = 0
    for msg in midi_file.tracks[1]:
        abs_tick += msg.time
        if msg.type == "note_on" and msg.velocity > 0:
            by_tick.setdefault(abs_tick, []).append(msg.note)
    return [by_tick[tick] for tick in sorted(by_tick)]
