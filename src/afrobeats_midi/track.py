"""Single-instrument event track and its MIDI serialization."""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from typing import Iterable, List, Sequence, Union

import pandas as pd
import pretty_midi

from .theory import note_to_midi

__all__ = [
    "DURATION_TOKENS",
    "GenerationSettings",
    "DEFAULT_SETTINGS",
    "ProgramChangeEvent",
    "NoteEvent",
    "Track",
    "duration_to_ticks",
]

logger = logging.getLogger(__name__)

# Note length tokens as fractions of a whole note.
DURATION_TOKENS = {"1": 4.0, "2": 2.0, "4": 1.0, "8": 0.5, "16": 0.25}

_COLUMNS = ["start_tick", "duration_ticks", "pitch", "midi", "velocity", "role"]


@dataclass(frozen=True)
class GenerationSettings:
    """Constants shared by the assembler and the MIDI writer."""

    tempo: int = 120
    ticks_per_beat: int = 128
    chord_octave: int = 4
    melody_bars: int = 4
    instrument: int = 1  # General MIDI numbering, 1 = Acoustic Grand Piano
    channel: int = 0

    @property
    def ticks_per_bar(self) -> int:
        return self.ticks_per_beat * 4

    def tick_to_seconds(self, tick: int) -> float:
        return tick * 60.0 / (self.tempo * self.ticks_per_beat)


DEFAULT_SETTINGS = GenerationSettings()


def duration_to_ticks(token: str, ticks_per_beat: int = DEFAULT_SETTINGS.ticks_per_beat) -> int:
    if token not in DURATION_TOKENS:
        raise ValueError(f"Unknown duration token: {token!r}")
    return int(DURATION_TOKENS[token] * ticks_per_beat)


@dataclass(frozen=True)
class ProgramChangeEvent:
    instrument: int
    channel: int = 0


@dataclass(frozen=True)
class NoteEvent:
    """One or more pitches struck together at an absolute tick."""

    pitches: tuple[str, ...]
    start_tick: int
    duration: str
    velocity: int
    channel: int = 0

    @property
    def is_chord(self) -> bool:
        return len(self.pitches) > 1


TrackEvent = Union[ProgramChangeEvent, NoteEvent]


class Track:
    """Ordered events for one instrument channel.

    Events keep their insertion order; placement in time comes only from each
    note's absolute ``start_tick``.
    """

    def __init__(self, events: Iterable[TrackEvent] | None = None) -> None:
        self._events: List[TrackEvent] = list(events or [])

    def __iter__(self):  # pragma: no cover - trivial
        return iter(self._events)

    def __len__(self) -> int:
        return len(self._events)

    @property
    def events(self) -> List[TrackEvent]:
        return list(self._events)

    @property
    def note_events(self) -> List[NoteEvent]:
        return [event for event in self._events if isinstance(event, NoteEvent)]

    @property
    def program_change(self) -> ProgramChangeEvent | None:
        return next((event for event in self._events if isinstance(event, ProgramChangeEvent)), None)

    def add_event(self, event: TrackEvent) -> None:
        self._events.append(event)

    def extend(self, events: Sequence[TrackEvent]) -> None:
        for event in events:
            self.add_event(event)

    def to_dataframe(self, settings: GenerationSettings = DEFAULT_SETTINGS) -> pd.DataFrame:
        rows = []
        for event in self.note_events:
            role = "chord" if event.is_chord else "melody"
            for pitch_name in event.pitches:
                rows.append(
                    {
                        "start_tick": event.start_tick,
                        "duration_ticks": duration_to_ticks(event.duration, settings.ticks_per_beat),
                        "pitch": pitch_name,
                        "midi": note_to_midi(pitch_name),
                        "velocity": event.velocity,
                        "role": role,
                    }
                )
        if not rows:
            return pd.DataFrame(columns=_COLUMNS)
        return pd.DataFrame(rows, columns=_COLUMNS)

    def to_pretty_midi(self, settings: GenerationSettings = DEFAULT_SETTINGS) -> pretty_midi.PrettyMIDI:
        midi = pretty_midi.PrettyMIDI(resolution=settings.ticks_per_beat, initial_tempo=settings.tempo)
        program_event = self.program_change
        instrument_number = program_event.instrument if program_event else settings.instrument
        instrument = pretty_midi.Instrument(
            program=instrument_number - 1,
            name=pretty_midi.program_to_instrument_name(instrument_number - 1),
        )

        for event in self.note_events:
            end_tick = event.start_tick + duration_to_ticks(event.duration, settings.ticks_per_beat)
            start_tick = event.start_tick
            if start_tick < 0:
                # Standard MIDI files have no position before the first tick.
                logger.debug("Clamping note at tick %d to 0", start_tick)
                start_tick = 0
            for pitch_name in event.pitches:
                instrument.notes.append(
                    pretty_midi.Note(
                        velocity=event.velocity,
                        pitch=note_to_midi(pitch_name),
                        start=settings.tick_to_seconds(start_tick),
                        end=settings.tick_to_seconds(end_tick),
                    )
                )

        midi.instruments.append(instrument)
        return midi

    def to_midi_bytes(self, settings: GenerationSettings = DEFAULT_SETTINGS) -> io.BytesIO:
        midi_bytes = io.BytesIO()
        self.to_pretty_midi(settings).write(midi_bytes)
        midi_bytes.seek(0)
        return midi_bytes
