"""
Constants and enums for the fretboard engine.

No magic strings - use enums and module constants for tunables.
String ordering is low string first everywhere (index 0 = low E).
"""

from enum import Enum

# Number of strings on the instrument
NUM_STRINGS = 6

# Open-string pitch classes, low E first
STANDARD_TUNING: tuple[int, ...] = (4, 9, 2, 7, 11, 4)

# Open-string MIDI notes, low E first (E2 A2 D3 G3 B3 E4)
STANDARD_TUNING_MIDI: tuple[int, ...] = (40, 45, 50, 55, 59, 64)

# Highest fret on the neck
MAX_FRET = 24

# Reachable range for the anchor (first finger) of a movable shape
MIN_ANCHOR_FRET = 1
MAX_ANCHOR_FRET = 17

# Chord-tone coverage a voicing needs to be accepted. Extra notes are
# always rejected, whatever this value is.
MIN_VOICING_MATCH_RATIO = 0.5

# Scale coverage a fingering needs (stricter than chords)
MIN_FINGERING_MATCH_RATIO = 1.0

# Source roots tried, in order, by the transposition fallback
TRANSPOSITION_SOURCE_ROOTS: tuple[str, ...] = (
    "C",
    "G",
    "D",
    "A",
    "E",
    "F",
    "B",
    "C#",
    "D#",
    "F#",
    "G#",
    "A#",
)

# Roots warmed by preload()
COMMON_ROOTS: tuple[str, ...] = ("C", "G", "D", "A", "E", "F")

# Most positions a scale exposes
MAX_SCALE_POSITIONS = 7

# Fret width of a symmetric-scale window
SCALE_WINDOW_SPAN = 4

# Frets a fretting hand can cover when adding a bass note to a shape
HAND_SPAN = 4

# Fewest strings a shape may keep after muting down to a slash bass
MIN_SOUNDING_STRINGS = 3

# Marker used for muted strings in the YAML corpus
MUTED_MARKER = "x"

# Environment variable naming the project voicings directory
VOICINGS_DIR_ENV = "CHUK_FRETBOARD_VOICINGS_DIR"


class ResolutionSource(str, Enum):
    """Which tier of the fallback chain produced a set of voicings."""

    EXACT = "exact"
    TRANSPOSED = "transposed"
    QUALITY_FAMILY = "quality_family"
    LAST_RESORT = "last_resort"
    EXHAUSTED = "exhausted"


class KeyAccidental(str, Enum):
    """Spelling preference for a key context."""

    SHARP = "sharp"
    FLAT = "flat"
    NATURAL = "natural"


class FingeringLayout(str, Enum):
    """How a scale is laid out across the strings."""

    THREE_PER_STRING = "3nps"
    TWO_PER_STRING = "2nps"
    WINDOW = "window"


class ErrorMessages:
    """Standardized error messages."""

    UNRECOGNIZED_CHORD = "Unrecognized chord '{name}', showing {fallback} instead."
    UNRECOGNIZED_SCALE = "Unrecognized scale '{name}', showing {fallback} instead."
    NO_VOICINGS = "No voicings available for '{name}'."
    INVALID_VOICING = "Invalid voicing: {detail}"
    INVALID_ROOT = "Invalid root note: '{root}'."


class SuccessMessages:
    """Standardized success messages."""

    PRELOADED = "Scheduled preload for {count} roots."
    CACHE_CLEARED = "Voicing cache cleared."
