"""Afrobeats chord progression and melody MIDI generator."""

from __future__ import annotations

__version__ = "0.1.0"

from .generator import (
    GenerationResult,
    MelodyNote,
    assemble_track,
    generate_afrobeats_midi,
    generate_melody,
    invert_chord,
    progression_filename,
    progression_label,
)
from .progression import PROGRESSION_TEMPLATES, select_progression
from .theory import (
    ParseError,
    ScaleInputError,
    TheoryResolutionError,
    ValidationError,
    parse_scale_input,
    resolve_diatonic_chords,
)
from .track import DEFAULT_SETTINGS, GenerationSettings, NoteEvent, ProgramChangeEvent, Track

__all__ = [
    "DEFAULT_SETTINGS",
    "GenerationResult",
    "GenerationSettings",
    "MelodyNote",
    "NoteEvent",
    "PROGRESSION_TEMPLATES",
    "ParseError",
    "ProgramChangeEvent",
    "ScaleInputError",
    "TheoryResolutionError",
    "Track",
    "ValidationError",
    "assemble_track",
    "generate_afrobeats_midi",
    "generate_melody",
    "invert_chord",
    "parse_scale_input",
    "progression_filename",
    "progression_label",
    "resolve_diatonic_chords",
    "select_progression",
]
