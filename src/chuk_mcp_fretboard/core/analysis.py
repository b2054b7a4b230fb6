"""
Chord analysis - formulas, interval names, function in a key, and scales.

Everything here reads the formula tables; nothing touches the voicing
corpus. Formulas use degree notation ('1-♭3-5-♭7'), interval names use
ASCII with 'R' for the root ('R', 'b3', '5', 'b7').
"""

from __future__ import annotations

from dataclasses import dataclass

from .chord import Chord, ChordQuality
from .formulas import SCALE_FORMULAS, scale_type
from .pitch import PitchClass, display_name, value_to_name

# Degree of each formula interval, compound extensions included
_DEGREE_TOKENS: dict[int, str] = {
    0: "1",
    1: "♭2",
    2: "2",
    3: "♭3",
    4: "3",
    5: "4",
    6: "♭5",
    7: "5",
    8: "#5",
    9: "6",
    10: "♭7",
    11: "7",
    13: "♭9",
    14: "9",
    15: "#9",
    17: "11",
    18: "#11",
    20: "♭13",
    21: "13",
}

# Qualities whose spelling differs from the default degree for an interval
_DEGREE_OVERRIDES: dict[str, dict[int, str]] = {
    "dim7": {9: "♭♭7"},
    "quartal": {15: "♭10"},
}

# Chord root relative to a key tonic
_SCALE_DEGREES: tuple[str, ...] = (
    "1",
    "b2",
    "2",
    "b3",
    "3",
    "4",
    "#4",
    "5",
    "b6",
    "6",
    "b7",
    "7",
)

_NUMERALS: tuple[str, ...] = (
    "I",
    "bII",
    "II",
    "bIII",
    "III",
    "IV",
    "#IV",
    "V",
    "bVI",
    "VI",
    "bVII",
    "VII",
)

_NUMERAL_SUFFIXES: dict[str, str] = {
    "dim": "°",
    "dim7": "°7",
    "min7b5": "ø7",
    "aug": "+",
    "7": "7",
    "min7": "7",
    "maj7": "maj7",
    "min/maj7": "maj7",
    "6": "6",
    "min6": "6",
    "9": "9",
    "min9": "9",
    "maj9": "maj9",
}


@dataclass(frozen=True)
class ChordAnalysis:
    """Theory summary of one chord, optionally in a key."""

    chord: str
    root: str
    quality: str
    formula: str
    intervals: tuple[str, ...]
    notes: tuple[str, ...]
    degree: str | None
    numeral: str | None
    compatible_scales: tuple[str, ...]


def degree_tokens(quality: ChordQuality) -> list[str]:
    """Degree notation for each interval of a quality, in formula order."""
    overrides = _DEGREE_OVERRIDES.get(quality.name, {})
    return [
        overrides.get(interval, _DEGREE_TOKENS.get(interval, str(interval)))
        for interval in quality.intervals
    ]


def chord_formula(quality: ChordQuality) -> str:
    """Formula notation, e.g. '1-♭3-5-♭7' for min7."""
    return "-".join(degree_tokens(quality))


def interval_names(quality: ChordQuality) -> list[str]:
    """ASCII interval names, e.g. ['R', 'b3', '5', 'b7'] for min7."""
    names = []
    for token in degree_tokens(quality):
        names.append("R" if token == "1" else token.replace("♭", "b"))
    return names


def scale_degree(root: PitchClass, tonic: PitchClass) -> str:
    """Where a chord root sits in a key, e.g. 'b3' for Eb in C."""
    return _SCALE_DEGREES[tonic.interval_to(root)]


def roman_numeral(chord: Chord, tonic: PitchClass) -> str:
    """
    Roman numeral for a chord in a key.

    Chords with a minor third and no major third are lower case:
    G7 in C is 'V7', Dm7 is 'ii7', Bm7b5 is 'viiø7'.
    """
    numeral = _NUMERALS[tonic.interval_to(chord.root)]
    intervals = set(chord.quality.intervals)
    if 3 in intervals and 4 not in intervals:
        numeral = numeral.replace("I", "i").replace("V", "v")
    return numeral + _NUMERAL_SUFFIXES.get(chord.quality.name, "")


def compatible_scales(chord: Chord) -> list[str]:
    """
    Scales built on the chord root that contain every chord tone.

    A slash bass counts as a chord tone. Scales come back in table order.
    """
    relative = {chord.root.interval_to(PitchClass(pc)) for pc in chord.pitch_classes()}
    return [
        scale_id
        for scale_id, intervals in SCALE_FORMULAS.items()
        if relative <= set(intervals)
    ]


def analyze_chord(
    chord: Chord,
    tonic: PitchClass | None = None,
    prefer_flats: bool = False,
    key: str | None = None,
) -> ChordAnalysis:
    """
    Analyze a chord.

    Args:
        chord: The chord to analyze
        tonic: Key tonic; degree and numeral are None without one
        prefer_flats: Spell note names with flats
        key: Key context for spelling; overrides prefer_flats

    Returns:
        ChordAnalysis
    """

    def spell(pitch: PitchClass) -> str:
        if key:
            return display_name(pitch.spell(), key)
        return pitch.spell(prefer_flats)

    return ChordAnalysis(
        chord=chord.name,
        root=spell(chord.root),
        quality=chord.quality.name,
        formula=chord_formula(chord.quality),
        intervals=tuple(interval_names(chord.quality)),
        notes=tuple(spell(p) for p in chord.get_pitches()),
        degree=scale_degree(chord.root, tonic) if tonic is not None else None,
        numeral=roman_numeral(chord, tonic) if tonic is not None else None,
        compatible_scales=tuple(compatible_scales(chord)),
    )


def scale_notes(root: PitchClass, scale_id: str, key: str | None = None) -> list[str]:
    """
    Spell a scale's notes from its root.

    Args:
        root: Scale root
        scale_id: Canonical scale id
        key: Key context for spelling ('G minor' spells Bb); sharps without one

    Returns:
        Note names in ascending order from the root
    """
    return [
        display_name(value_to_name(pitch.value), key)
        for pitch in scale_type(scale_id).get_pitches(root)
    ]
