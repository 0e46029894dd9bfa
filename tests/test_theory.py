import pytest

from afrobeats_midi import theory
from afrobeats_midi.theory import (
    ParseError,
    TheoryResolutionError,
    ValidationError,
    chord_notes,
    chord_tones,
    parse_scale_input,
    note_to_midi,
    pentatonic_pitch_classes,
    resolve_diatonic_chords,
    simplify_note,
)

ROOTS = ["C", "G", "D", "A", "E", "B", "F#", "C#", "F", "Bb", "Eb", "Ab", "Db", "Gb"]


def _qualities(symbols):
    return [symbol[-3:] for symbol in symbols]


def test_c_major_pool():
    assert resolve_diatonic_chords("C", "major") == ["Cmaj", "Dmin", "Emin", "Fmaj", "Gmaj", "Amin", "Bdim"]


def test_a_minor_pool():
    assert resolve_diatonic_chords("A", "minor") == ["Amin", "Bdim", "Cmaj", "Dmin", "Emin", "Fmaj", "Gmaj"]


def test_flat_key_spelling():
    assert resolve_diatonic_chords("Eb", "major") == [
        "Ebmaj",
        "Fmin",
        "Gmin",
        "Abmaj",
        "Bbmaj",
        "Cmin",
        "Ddim",
    ]


@pytest.mark.parametrize("root", ROOTS)
def test_major_qualities(root):
    pool = resolve_diatonic_chords(root, "major")
    assert len(pool) == 7
    assert pool[0].startswith(root)
    assert _qualities(pool) == list(theory.TRIAD_QUALITIES["major"])


@pytest.mark.parametrize("root", ROOTS)
def test_minor_qualities(root):
    pool = resolve_diatonic_chords(root, "minor")
    assert len(pool) == 7
    assert pool[0].startswith(root)
    assert _qualities(pool) == ["min", "dim", "maj", "min", "min", "maj", "maj"]


@pytest.mark.parametrize("root, scale_type", [("", "major"), ("H", "minor"), ("C", "dorian")])
def test_unresolvable_scale_yields_empty_pool(root, scale_type):
    assert resolve_diatonic_chords(root, scale_type) == []


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("C", "C"),
        ("c#", "C#"),
        ("db", "Db"),
        ("C##", "D"),
        ("E#", "F"),
        ("Cb", "B"),
        ("B#", "C"),
        ("H", ""),
        ("C4", ""),
        ("", ""),
    ],
)
def test_simplify_note(raw, expected):
    assert simplify_note(raw) == expected


def test_parse_scale_input_normalises_tokens():
    assert parse_scale_input("  d#  MINOR ") == ("D#", "minor")
    assert parse_scale_input("C major") == ("C", "major")


@pytest.mark.parametrize("text", ["", "   ", "C"])
def test_parse_scale_input_requires_two_tokens(text):
    with pytest.raises(ParseError):
        parse_scale_input(text)


def test_parse_scale_input_rejects_unknown_type():
    with pytest.raises(ValidationError):
        parse_scale_input("x y")


def test_parse_scale_input_passes_bad_root_to_resolver():
    root, scale_type = parse_scale_input("H major")
    assert root == ""
    assert resolve_diatonic_chords(root, scale_type) == []


def test_errors_share_user_facing_base():
    for error in (ParseError, ValidationError, TheoryResolutionError):
        assert issubclass(error, theory.ScaleInputError)
        assert issubclass(error, ValueError)


@pytest.mark.parametrize(
    "symbol, expected",
    [
        ("Cmaj", ["C", "E", "G"]),
        ("Dmin", ["D", "F", "A"]),
        ("Bdim", ["B", "D", "F"]),
        ("F#min", ["F#", "A", "C#"]),
        ("Bbmaj", ["Bb", "D", "F"]),
        ("B#dim", ["B#", "D#", "F#"]),
    ],
)
def test_chord_tones(symbol, expected):
    assert chord_tones(symbol) == expected


def test_chord_tones_rejects_unknown_symbol():
    with pytest.raises(ValueError):
        chord_tones("Csus4")


def test_chord_notes_keep_chord_tone_order():
    assert chord_notes("Amin") == ["A4", "C4", "E4"]
    assert chord_notes("Gmaj", octave=3) == ["G3", "B3", "D3"]


@pytest.mark.parametrize(
    "root, scale_type, expected",
    [
        ("C", "major", ["C", "D", "E", "G", "A"]),
        ("A", "minor", ["A", "C", "D", "E", "G"]),
        ("C", "minor", ["C", "Eb", "F", "G", "Bb"]),
        ("H", "major", []),
    ],
)
def test_pentatonic_pitch_classes(root, scale_type, expected):
    assert pentatonic_pitch_classes(root, scale_type) == expected


@pytest.mark.parametrize(
    "name, number",
    [
        ("C4", 60),
        ("c#4", 61),
        ("A5", 81),
        ("F##4", 67),
        ("C##5", 74),
        ("Bbb4", 69),
        ("Ebb4", 62),
        ("Cb4", 59),
        ("B#4", 72),
    ],
)
def test_note_to_midi_handles_double_accidentals(name, number):
    assert note_to_midi(name) == number


@pytest.mark.parametrize("name", ["C", "H4", "C-1", "C#x4"])
def test_note_to_midi_rejects_malformed_names(name):
    with pytest.raises(ValueError):
        note_to_midi(name)
