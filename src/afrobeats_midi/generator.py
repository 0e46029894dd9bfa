"""Core afrobeats progression and melody generation."""

from __future__ import annotations

import io
import logging
import re
import warnings
from dataclasses import dataclass
from typing import List, Sequence

import numpy as np

from .progression import select_progression
from .theory import (
    TheoryResolutionError,
    chord_notes,
    parse_scale_input,
    pentatonic_pitch_classes,
    resolve_diatonic_chords,
)
from .track import DEFAULT_SETTINGS, GenerationSettings, NoteEvent, ProgramChangeEvent, Track

__all__ = [
    "MelodyNote",
    "GenerationResult",
    "invert_chord",
    "generate_melody",
    "assemble_track",
    "progression_filename",
    "progression_label",
    "generate_afrobeats_midi",
]

logger = logging.getLogger(__name__)

SLOTS_PER_BAR = 8
SLOT_DIVISOR = 4  # slots sit a quarter beat apart
MELODY_NOTE_PROBABILITY = 0.6
MELODY_OCTAVES = (5, 6)
MELODY_JITTER = (-5, 4)
MELODY_VELOCITY = (90, 119)
MELODY_DURATION = "8"

CHORD_INVERSIONS = (0, 2)
CHORD_VELOCITY = (80, 109)
CHORD_OFFSET = (-10, 9)
CHORD_DURATION = "1"

_UNSAFE_FILENAME_CHARS = re.compile(r'[/\\:*?"<>|]')
_PITCH_PATTERN = re.compile(r"^(.*?)(-?\d+)$")


@dataclass(frozen=True)
class MelodyNote:
    pitch: str
    start_tick: int
    duration: str
    velocity: int


@dataclass(frozen=True)
class GenerationResult:
    """Everything produced by one generate action."""

    root: str
    scale_type: str
    chord_pool: Sequence[str]
    progression: Sequence[str]
    melody: Sequence[MelodyNote]
    track: Track
    midi: io.BytesIO
    filename: str

    @property
    def label(self) -> str:
        return progression_label(self.progression)


def _randint(rng: np.random.Generator, bounds: tuple[int, int]) -> int:
    low, high = bounds
    return int(rng.integers(low, high + 1))


def invert_chord(notes: Sequence[str], inversion: int = 0) -> List[str]:
    """Rotate the first note to the top ``inversion`` times, an octave higher each move.

    The first note is taken by list order, not by pitch height, and counts
    larger than the chord keep cycling.

    >>> invert_chord(["C4", "E4", "G4"], 1)
    ['E4', 'G4', 'C5']
    """

    if inversion < 0:
        raise ValueError("inversion must be zero or positive")

    inverted = list(notes)
    if not inverted:
        return inverted
    for _ in range(inversion):
        match = _PITCH_PATTERN.match(inverted.pop(0))
        if match is None:
            raise ValueError("Chord notes must end with an octave number")
        name, octave = match.groups()
        inverted.append(f"{name}{int(octave) + 1}")
    return inverted


def generate_melody(
    root: str,
    scale_type: str,
    number_of_bars: int = 4,
    rng: np.random.Generator | None = None,
    settings: GenerationSettings = DEFAULT_SETTINGS,
) -> List[MelodyNote]:
    """Sprinkle pentatonic eighth notes over ``number_of_bars`` bars.

    Each of the eight slots in a bar sounds with a 60% chance. Pitches come
    from the major or minor pentatonic matching ``scale_type``, timing is
    nudged by a few ticks and velocities vary to keep the line loose.
    """

    if number_of_bars < 0:
        raise ValueError("number_of_bars must be zero or positive")

    pitch_classes = pentatonic_pitch_classes(root, scale_type)
    if not pitch_classes:
        warnings.warn(
            f"No pentatonic scale for {root!r} {scale_type!r}; skipping melody.",
            RuntimeWarning,
            stacklevel=2,
        )
        return []

    rng = rng if rng is not None else np.random.default_rng()
    slot_ticks = settings.ticks_per_beat // SLOT_DIVISOR
    melody: List[MelodyNote] = []

    for bar in range(number_of_bars):
        for slot in range(SLOTS_PER_BAR):
            if rng.random() >= MELODY_NOTE_PROBABILITY:
                continue
            pitch_class = pitch_classes[int(rng.integers(len(pitch_classes)))]
            octave = MELODY_OCTAVES[int(rng.integers(len(MELODY_OCTAVES)))]
            jitter = _randint(rng, MELODY_JITTER)
            melody.append(
                MelodyNote(
                    pitch=f"{pitch_class}{octave}",
                    start_tick=bar * settings.ticks_per_bar + slot * slot_ticks + jitter,
                    duration=MELODY_DURATION,
                    velocity=_randint(rng, MELODY_VELOCITY),
                )
            )

    return melody


def assemble_track(
    progression: Sequence[str],
    melody: Sequence[MelodyNote],
    rng: np.random.Generator | None = None,
    settings: GenerationSettings = DEFAULT_SETTINGS,
) -> Track:
    """Lay out one whole-note chord per bar followed by the melody notes."""

    rng = rng if rng is not None else np.random.default_rng()
    track = Track([ProgramChangeEvent(instrument=settings.instrument, channel=settings.channel)])

    for index, chord_symbol in enumerate(progression):
        inversion = _randint(rng, CHORD_INVERSIONS)
        notes = invert_chord(chord_notes(chord_symbol, settings.chord_octave), inversion)
        velocity = _randint(rng, CHORD_VELOCITY)
        offset = _randint(rng, CHORD_OFFSET)
        logger.debug("Chord %s inversion %d offset %d", chord_symbol, inversion, offset)
        track.add_event(
            NoteEvent(
                pitches=tuple(notes),
                start_tick=index * settings.ticks_per_bar + offset,
                duration=CHORD_DURATION,
                velocity=velocity,
                channel=settings.channel,
            )
        )

    track.extend(
        [
            NoteEvent(
                pitches=(note.pitch,),
                start_tick=note.start_tick,
                duration=note.duration,
                velocity=note.velocity,
                channel=settings.channel,
            )
            for note in melody
        ]
    )
    return track


def progression_filename(progression: Sequence[str]) -> str:
    """Build a download name such as ``Csharpmaj_Dmin.mid``."""

    stem = "_".join(progression).replace("#", "sharp")
    return f"{_UNSAFE_FILENAME_CHARS.sub('', stem)}.mid"


def progression_label(progression: Sequence[str]) -> str:
    return " - ".join(progression)


def generate_afrobeats_midi(
    scale_text: str,
    *,
    rng: np.random.Generator | None = None,
    seed: int | None = None,
    settings: GenerationSettings = DEFAULT_SETTINGS,
) -> GenerationResult:
    """Turn input such as ``"C minor"`` into a progression, melody and MIDI file.

    Raises one of the :class:`~afrobeats_midi.theory.ScaleInputError`
    subclasses when the input cannot be used; nothing is produced in that
    case.
    """

    if rng is None:
        rng = np.random.default_rng(seed)

    root, scale_type = parse_scale_input(scale_text)
    chord_pool = resolve_diatonic_chords(root, scale_type)
    if not chord_pool:
        raise TheoryResolutionError("Could not generate chords for the provided scale.")
    logger.debug("Resolved %s %s to %s", root, scale_type, chord_pool)

    progression = select_progression(chord_pool, rng)
    melody = generate_melody(root, scale_type, settings.melody_bars, rng, settings)
    track = assemble_track(progression, melody, rng, settings)
    logger.debug("Assembled %d events for %s", len(track), progression_label(progression))

    return GenerationResult(
        root=root,
        scale_type=scale_type,
        chord_pool=list(chord_pool),
        progression=progression,
        melody=melody,
        track=track,
        midi=track.to_midi_bytes(settings),
        filename=progression_filename(progression),
    )
