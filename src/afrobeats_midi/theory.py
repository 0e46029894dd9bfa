"""Scale and chord theory helpers built on music21.

Pitch classes travel through the project as plain strings spelled with ``#``
and ``b`` (``"C#"``, ``"Bb"``). music21 spells flats with ``-`` so every
value is converted on the way in and out of the library.
"""

from __future__ import annotations

import re
from typing import List, Tuple

from music21 import key as m21key
from music21 import pitch as m21pitch

__all__ = [
    "SCALE_TYPES",
    "TRIAD_QUALITIES",
    "QUALITY_INTERVALS",
    "PENTATONIC_DEGREES",
    "ScaleInputError",
    "ParseError",
    "ValidationError",
    "TheoryResolutionError",
    "simplify_note",
    "parse_scale_input",
    "scale_pitch_classes",
    "resolve_diatonic_chords",
    "chord_tones",
    "chord_notes",
    "pentatonic_pitch_classes",
    "note_to_midi",
]

SCALE_TYPES = ("major", "minor")

# Triad quality per scale degree; minor is the natural minor.
TRIAD_QUALITIES = {
    "major": ("maj", "min", "min", "maj", "maj", "min", "dim"),
    "minor": ("min", "dim", "maj", "min", "min", "maj", "maj"),
}

QUALITY_INTERVALS = {
    "maj": ("M3", "P5"),
    "min": ("m3", "P5"),
    "dim": ("m3", "d5"),
}

# 1-indexed degrees of the parent scale kept by each pentatonic variant.
PENTATONIC_DEGREES = {
    "major": (1, 2, 3, 5, 6),
    "minor": (1, 3, 4, 5, 7),
}

_NOTE_PATTERN = re.compile(r"^([A-Ga-g])(#{0,3}|b{0,3})$")
_CHORD_PATTERN = re.compile(r"^([A-G](?:#{1,2}|b{1,2})?)(maj|min|dim)$")
_NOTE_WITH_OCTAVE_PATTERN = re.compile(r"^([A-Ga-g](?:#{1,3}|b{1,3})?)(\d+)$")


class ScaleInputError(ValueError):
    """Base class for user-facing problems with a requested scale."""


class ParseError(ScaleInputError):
    """Raised when the input is missing the root or the scale type."""


class ValidationError(ScaleInputError):
    """Raised when the scale type is not one of :data:`SCALE_TYPES`."""


class TheoryResolutionError(ScaleInputError):
    """Raised when no scale tones can be derived for the requested root."""


def _to_music21(name: str) -> str:
    return name[0].upper() + name[1:].replace("b", "-")


def _from_music21(name: str) -> str:
    return name.replace("-", "b")


def _pitch_class(name: str) -> m21pitch.Pitch | None:
    match = _NOTE_PATTERN.match(name or "")
    if match is None:
        return None
    return m21pitch.Pitch(_to_music21(match.group(1) + match.group(2)))


def simplify_note(name: str) -> str:
    """Return the canonical spelling of ``name`` or ``""`` when it is not a note.

    Double accidentals and the white-key enharmonics (``E#``, ``B#``, ``Cb``,
    ``Fb``) collapse to their simplest spelling, single sharps and flats are
    kept as written.
    """

    parsed = _pitch_class(name.strip())
    if parsed is None:
        return ""
    return _from_music21(parsed.simplifyEnharmonic().name)


def parse_scale_input(text: str) -> Tuple[str, str]:
    """Split free text such as ``"C minor"`` into ``(root, scale_type)``.

    The root may come back empty when it is not a valid note name; the
    resolver reports that case as :class:`TheoryResolutionError`.
    """

    tokens = (text or "").split()
    if len(tokens) < 2:
        raise ParseError("Please enter a valid scale, e.g. 'C minor'.")

    root_raw, type_raw = tokens[0], tokens[1]
    scale_type = type_raw.lower()
    if scale_type not in SCALE_TYPES:
        raise ValidationError("Scale type must be 'major' or 'minor'.")

    return simplify_note(root_raw), scale_type


def scale_pitch_classes(root: str, scale_type: str) -> List[str]:
    """Return the seven pitch classes of the scale, or ``[]`` if unresolved."""

    if scale_type not in SCALE_TYPES:
        return []
    tonic = _pitch_class(root)
    if tonic is None:
        return []
    musical_key = m21key.Key(tonic.name, scale_type)
    return [_from_music21(p.name) for p in musical_key.getPitches()[:7]]


def resolve_diatonic_chords(root: str, scale_type: str) -> List[str]:
    """Build the diatonic triad symbols of a major or natural minor scale.

    >>> resolve_diatonic_chords("C", "major")
    ['Cmaj', 'Dmin', 'Emin', 'Fmaj', 'Gmaj', 'Amin', 'Bdim']
    """

    tones = scale_pitch_classes(root, scale_type)
    if not tones:
        return []
    qualities = TRIAD_QUALITIES[scale_type]
    return [f"{tone}{quality}" for tone, quality in zip(tones, qualities)]


def chord_tones(symbol: str) -> List[str]:
    """Return the pitch classes of a chord symbol in root, third, fifth order."""

    match = _CHORD_PATTERN.match(symbol)
    if match is None:
        raise ValueError(f"Unknown chord symbol: {symbol!r}")

    root_name, quality = match.groups()
    root = m21pitch.Pitch(_to_music21(root_name))
    tones = [root] + [root.transpose(interval) for interval in QUALITY_INTERVALS[quality]]
    return [_from_music21(tone.name) for tone in tones]


def chord_notes(symbol: str, octave: int = 4) -> List[str]:
    """Attach ``octave`` to every chord tone, keeping chord-tone order."""

    return [f"{tone}{octave}" for tone in chord_tones(symbol)]


def pentatonic_pitch_classes(root: str, scale_type: str) -> List[str]:
    """Return the major or minor pentatonic matching ``scale_type``."""

    tones = scale_pitch_classes(root, scale_type)
    if not tones:
        return []
    return [tones[degree - 1] for degree in PENTATONIC_DEGREES[scale_type]]


def note_to_midi(name: str) -> int:
    """Return the MIDI number of a note such as ``"C#4"``, ``"F##5"`` or ``"Bbb4"``."""

    match = _NOTE_WITH_OCTAVE_PATTERN.match(name)
    if match is None:
        raise ValueError(f"Unknown note name: {name!r}")
    pitch_class, octave = match.groups()
    return int(m21pitch.Pitch(f"{_to_music21(pitch_class)}{octave}").midi)
