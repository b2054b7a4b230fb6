"""
Pitch primitives - PitchClass and note-name helpers.

PitchClass represents the 12 chromatic pitches (octave-independent).
All arithmetic is modulo 12, including negative offsets. Note names are
parsed arithmetically (letter + accidental), so enharmonic spellings such
as C#/Db or B#/C fold onto the same pitch class.
"""

from __future__ import annotations

import re
from enum import IntEnum

from chuk_mcp_fretboard.constants import KeyAccidental

# Display name mappings (module level to avoid IntEnum member issues)
_SHARP_NAMES: list[str] = [
    "C",
    "C#",
    "D",
    "D#",
    "E",
    "F",
    "F#",
    "G",
    "G#",
    "A",
    "A#",
    "B",
]
_FLAT_NAMES: list[str] = [
    "C",
    "Db",
    "D",
    "Eb",
    "E",
    "F",
    "Gb",
    "G",
    "Ab",
    "A",
    "Bb",
    "B",
]
# Conventional spelling with no key signature
_NATURAL_NAMES: list[str] = [
    "C",
    "C#",
    "D",
    "Eb",
    "E",
    "F",
    "F#",
    "G",
    "Ab",
    "A",
    "Bb",
    "B",
]

_LETTER_VALUES: dict[str, int] = {"C": 0, "D": 2, "E": 4, "F": 5, "G": 7, "A": 9, "B": 11}
_ACCIDENTAL_OFFSETS: dict[str, int] = {"": 0, "#": 1, "b": -1}

_NOTE_RE = re.compile(r"^([A-Ga-g])([#b]?)$")
_KEY_RE = re.compile(r"^([A-Ga-g][#b]?)\s*(.*)$")

_SHARP_KEYS = frozenset({"G", "D", "A", "E", "B", "F#", "C#"})
_FLAT_KEYS = frozenset({"F", "Bb", "Eb", "Ab", "Db", "Gb", "Cb"})
_SHARP_MINOR_KEYS = frozenset({"E", "B", "F#", "C#", "G#", "D#", "A#"})
_FLAT_MINOR_KEYS = frozenset({"D", "G", "C", "F", "Bb", "Eb", "Ab"})
_MINOR_SUFFIXES = frozenset({"m", "min", "minor", "aeolian", "-"})


def _clean_accidentals(name: str) -> str:
    """Replace unicode accidentals with their ASCII forms."""
    return name.strip().replace("♯", "#").replace("♭", "b")


class PitchClass(IntEnum):
    """
    The 12 chromatic pitch classes (0-11).

    Octave-independent - E2 and E4 are both PitchClass.E.
    Enharmonic equivalents share the same value (C# == Db == 1).

    Spelling is a display concern, handled by spell() and display_name().
    Internally, we use sharp names (Cs, Ds, etc.).
    """

    C = 0
    Cs = 1  # C# / Db
    D = 2
    Ds = 3  # D# / Eb
    E = 4
    F = 5
    Fs = 6  # F# / Gb
    G = 7
    Gs = 8  # G# / Ab
    A = 9
    As = 10  # A# / Bb
    B = 11

    def transpose(self, semitones: int) -> PitchClass:
        """Transpose by a number of semitones (positive or negative)."""
        return PitchClass((self.value + semitones) % 12)

    def interval_to(self, other: PitchClass) -> int:
        """Get the ascending distance in semitones to another pitch class."""
        return (other.value - self.value) % 12

    def spell(self, prefer_flats: bool = False) -> str:
        """Get human-readable name."""
        names = _FLAT_NAMES if prefer_flats else _SHARP_NAMES
        return names[self.value]

    @classmethod
    def parse(cls, name: str) -> PitchClass:
        """
        Parse a pitch class from a note name like 'C', 'c#', 'Db' or 'B#'.

        The accidental is applied arithmetically, so 'Cb' is B and 'E#' is F.

        Raises:
            ValueError: If the name is not a letter with an optional accidental
        """
        match = _NOTE_RE.match(_clean_accidentals(name))
        if not match:
            raise ValueError(f"Unknown pitch class: {name}")
        letter, accidental = match.groups()
        value = _LETTER_VALUES[letter.upper()] + _ACCIDENTAL_OFFSETS[accidental]
        return cls(value % 12)


def note_to_value(name: str, default: int = 0) -> int:
    """
    Convert a note name to its pitch class value.

    Never raises: unrecognized input returns ``default``.
    """
    try:
        return int(PitchClass.parse(name))
    except (ValueError, AttributeError):
        return default


def value_to_name(value: int, prefer_flats: bool = False) -> str:
    """Convert a pitch class value (any integer) to a note name."""
    return PitchClass(value % 12).spell(prefer_flats)


def is_note_name(name: str) -> bool:
    """Check whether a string is a single note name."""
    return bool(_NOTE_RE.match(_clean_accidentals(name)))


def transpose_note(name: str, semitones: int, prefer_flats: bool = False) -> str:
    """Transpose a note name by a number of semitones."""
    return value_to_name(note_to_value(name) + semitones, prefer_flats)


def semitone_distance(from_note: str, to_note: str) -> int:
    """Ascending distance from one note to another, in [0, 12)."""
    return (note_to_value(to_note) - note_to_value(from_note)) % 12


def are_enharmonic(a: str, b: str) -> bool:
    """Check whether two note names denote the same pitch class."""
    if not (is_note_name(a) and is_note_name(b)):
        return False
    return note_to_value(a) == note_to_value(b)


def normalize_root(name: str) -> str:
    """
    Fold a root name onto its canonical (sharp) spelling.

    Db -> C#, Cb -> B, E# -> F. Unparseable input falls back to C.
    Idempotent: normalize_root(normalize_root(x)) == normalize_root(x).
    """
    return value_to_name(note_to_value(name, default=0))


def key_accidental(key: str | None) -> KeyAccidental:
    """
    Decide the spelling preference for a key context.

    Major keys are given by their tonic ('G', 'Bb'); minor keys by a
    suffix ('Dm', 'F# minor'). Unknown contexts use sharps.
    """
    if not key:
        return KeyAccidental.SHARP

    match = _KEY_RE.match(_clean_accidentals(key))
    if not match:
        return KeyAccidental.SHARP

    tonic = match.group(1)[0].upper() + match.group(1)[1:]
    suffix = match.group(2).strip().lower()

    if suffix in _MINOR_SUFFIXES:
        if tonic == "A":
            return KeyAccidental.NATURAL
        if tonic in _SHARP_MINOR_KEYS:
            return KeyAccidental.SHARP
        if tonic in _FLAT_MINOR_KEYS:
            return KeyAccidental.FLAT
        return KeyAccidental.SHARP

    if tonic == "C":
        return KeyAccidental.NATURAL
    if tonic in _SHARP_KEYS:
        return KeyAccidental.SHARP
    if tonic in _FLAT_KEYS:
        return KeyAccidental.FLAT
    return KeyAccidental.SHARP


def display_name(name: str, key: str | None = None) -> str:
    """
    Spell a note for display in a key context.

    Sharp keys use sharps, flat keys use flats, and C major / A minor use
    a fixed conventional spelling. Without a key, the input's own
    accidental style is kept.

    Args:
        name: Note name in any spelling
        key: Optional key context, e.g. 'Bb' or 'Em'

    Returns:
        The note name to display
    """
    value = note_to_value(name, default=-1)
    if value < 0:
        return name

    if key is None:
        return value_to_name(value, prefer_flats="b" in _clean_accidentals(name)[1:])

    accidental = key_accidental(key)
    if accidental == KeyAccidental.NATURAL:
        return _NATURAL_NAMES[value]
    return value_to_name(value, prefer_flats=accidental == KeyAccidental.FLAT)
