"""
Quality resolver - chord-name and scale-name parsing.

Turns free-form text (user input or model output) into canonical tokens:

- chord suffixes -> one of CANONICAL_CHORD_QUALITIES
- scale names -> one of CANONICAL_SCALES

Resolution is ordered and total: exact synonym table, then ordered
regex patterns, then a default ('major') flagged as unrecognized.
Nothing here raises for malformed input.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from .pitch import display_name, is_note_name, normalize_root

logger = logging.getLogger(__name__)

CANONICAL_CHORD_QUALITIES: tuple[str, ...] = (
    "major",
    "minor",
    "dim",
    "aug",
    "sus2",
    "sus4",
    "5",
    "7",
    "maj7",
    "min7",
    "dim7",
    "min7b5",
    "min/maj7",
    "9",
    "maj9",
    "min9",
    "9#11",
    "11",
    "maj11",
    "min11",
    "13",
    "maj13",
    "min13",
    "6",
    "min6",
    "6/9",
    "add9",
    "add11",
    "madd9",
    "7b9",
    "7#9",
    "7b5",
    "7#5",
    "7alt",
    "7b13",
    "7#11",
    "7b9b13",
    "7#9b13",
    "7sus4",
    "9sus4",
    "maj7#11",
    "maj7b13",
    "maj7#9",
    "quartal",
)

# Exact aliases, keyed by the sanitized (lowercase, no spaces) suffix
QUALITY_SYNONYMS: dict[str, str] = {
    # Major
    "": "major",
    "maj": "major",
    "major": "major",
    "ma": "major",
    # Minor
    "m": "minor",
    "mi": "minor",
    "min": "minor",
    "minor": "minor",
    "-": "minor",
    # Diminished / augmented
    "dim": "dim",
    "diminished": "dim",
    "°": "dim",
    "o": "dim",
    "aug": "aug",
    "augmented": "aug",
    "+": "aug",
    # Power chord
    "5": "5",
    "power": "5",
    "5th": "5",
    "no3": "5",
    # Suspended
    "sus": "sus4",
    "sus4": "sus4",
    "sus2": "sus2",
    "2": "sus2",
    "4": "sus4",
    # Dominant seventh
    "7": "7",
    "dom": "7",
    "dom7": "7",
    "dominant": "7",
    "dominant7": "7",
    # Major seventh
    "maj7": "maj7",
    "major7": "maj7",
    "ma7": "maj7",
    "δ": "maj7",
    "δ7": "maj7",
    # Minor seventh
    "m7": "min7",
    "mi7": "min7",
    "min7": "min7",
    "minor7": "min7",
    "-7": "min7",
    # Diminished seventh
    "dim7": "dim7",
    "o7": "dim7",
    "°7": "dim7",
    # Half-diminished
    "m7b5": "min7b5",
    "min7b5": "min7b5",
    "-7b5": "min7b5",
    "ø": "min7b5",
    "ø7": "min7b5",
    "halfdim": "min7b5",
    "halfdiminished": "min7b5",
    "half-diminished": "min7b5",
    # Minor-major seventh
    "mmaj7": "min/maj7",
    "minmaj7": "min/maj7",
    "m/maj7": "min/maj7",
    "min/maj7": "min/maj7",
    "-maj7": "min/maj7",
    "mδ7": "min/maj7",
    "mδ": "min/maj7",
    # Ninths, elevenths, thirteenths
    "9": "9",
    "dom9": "9",
    "maj9": "maj9",
    "δ9": "maj9",
    "m9": "min9",
    "min9": "min9",
    "-9": "min9",
    "ø9": "min9",
    "11": "11",
    "dom11": "11",
    "maj11": "maj11",
    "δ11": "maj11",
    "m11": "min11",
    "min11": "min11",
    "-11": "min11",
    "ø11": "min11",
    "13": "13",
    "dom13": "13",
    "maj13": "maj13",
    "δ13": "maj13",
    "m13": "min13",
    "min13": "min13",
    "-13": "min13",
    # Sixths and added tones
    "6": "6",
    "maj6": "6",
    "m6": "min6",
    "min6": "min6",
    "-6": "min6",
    "6/9": "6/9",
    "69": "6/9",
    "6add9": "6/9",
    "add9": "add9",
    "add2": "add9",
    "add11": "add11",
    "add4": "add11",
    "madd9": "madd9",
    "minadd9": "madd9",
    "madd2": "madd9",
    "-add9": "madd9",
    # Suspended dominants
    "7sus": "7sus4",
    "7sus4": "7sus4",
    "9sus": "9sus4",
    "9sus4": "9sus4",
    "sus9": "9sus4",
    # Altered
    "alt": "7alt",
    "7alt": "7alt",
    "aug7": "7#5",
    "+7": "7#5",
    "7+": "7#5",
    "7aug": "7#5",
    # Voicing styles
    "quartal": "quartal",
    "4ths": "quartal",
    "fourths": "quartal",
}

# Compound alterations, highest priority first. Every pattern is anchored at
# both ends: a suffix with an alteration not listed here stays unrecognized
# instead of being read as a simpler chord.
ALTERATION_PATTERNS: list[tuple[re.Pattern[str], str]] = [
    (re.compile(r"^(7|dom7?)(b9b13|b13b9)$"), "7b9b13"),
    (re.compile(r"^(7|dom7?)(#9b13|b13#9|#5#9|#9#5|\+5#9|#9\+5)$"), "7#9b13"),
    (re.compile(r"^(7|dom7?)(b9#9|#9b9|b5b9|b9b5)$"), "7alt"),
    (re.compile(r"^(7|dom7?)alt$"), "7alt"),
    (re.compile(r"^(maj|δ)(7|9)?(#11|\+11|b5|#4)$"), "maj7#11"),
    (re.compile(r"^(maj|δ)7?b13$"), "maj7b13"),
    (re.compile(r"^(maj|δ)7?(#9|\+9)$"), "maj7#9"),
    (re.compile(r"^(m|min|-)(maj|δ)(7|9)?$"), "min/maj7"),
    (re.compile(r"^(m|min|-)7\+$"), "min/maj7"),
    (re.compile(r"^(m|min|-)7(b5|-5)$"), "min7b5"),
    (re.compile(r"^(m|min|-)(b5|-5)$"), "dim"),
    (re.compile(r"^(7|dom7?)b9$"), "7b9"),
    (re.compile(r"^(7|dom7?)(#9|\+9)$"), "7#9"),
    (re.compile(r"^(7|dom7?)(b5|-5)$"), "7b5"),
    (re.compile(r"^(7|dom7?)(#5|\+5|\+|aug)$"), "7#5"),
    (re.compile(r"^(7|dom7?)(b13|-13)$"), "7b13"),
    (re.compile(r"^(7|dom7?)(#11|\+11)$"), "7#11"),
    (re.compile(r"^(9|dom9)(#11|\+11)$"), "9#11"),
    (re.compile(r"^(13|dom13)b9$"), "7b9"),
    (re.compile(r"^(13|dom13)#9$"), "7#9"),
    (re.compile(r"^(13|dom13)#11$"), "9#11"),
    (re.compile(r"^9sus4?$"), "9sus4"),
    (re.compile(r"^7sus4?$"), "7sus4"),
]

# Single-feature spellings, tried after the alteration patterns
SIMPLE_PATTERNS: list[tuple[re.Pattern[str], str]] = [
    (re.compile(r"^(major|maj|ma|δ)13$"), "maj13"),
    (re.compile(r"^(major|maj|ma|δ)11$"), "maj11"),
    (re.compile(r"^(major|maj|ma|δ)9$"), "maj9"),
    (re.compile(r"^(major|maj|ma|δ)7$"), "maj7"),
    (re.compile(r"^(minor|min|mi|m|-)13$"), "min13"),
    (re.compile(r"^(minor|min|mi|m|-)11$"), "min11"),
    (re.compile(r"^(minor|min|mi|m|-)9$"), "min9"),
    (re.compile(r"^(minor|min|mi|m|-)7$"), "min7"),
    (re.compile(r"^(minor|min|mi|m|-)6$"), "min6"),
    (re.compile(r"^(minor|min|mi|m|-)add(9|2)$"), "madd9"),
    (re.compile(r"^(dim|o|°)7$"), "dim7"),
    (re.compile(r"^(dim|o|°)$"), "dim"),
    (re.compile(r"^(aug|\+)$"), "aug"),
    (re.compile(r"^sus2$"), "sus2"),
    (re.compile(r"^sus4?$"), "sus4"),
    (re.compile(r"^add(9|2)$"), "add9"),
    (re.compile(r"^add(11|4)$"), "add11"),
    (re.compile(r"^6$"), "6"),
    (re.compile(r"^13$"), "13"),
    (re.compile(r"^11$"), "11"),
    (re.compile(r"^9$"), "9"),
    (re.compile(r"^7$"), "7"),
    (re.compile(r"^5$"), "5"),
    (re.compile(r"^(minor|min|mi)$"), "minor"),
    (re.compile(r"^(major|maj)$"), "major"),
]

CANONICAL_SCALES: tuple[str, ...] = (
    "major",
    "minor",
    "dorian",
    "phrygian",
    "lydian",
    "mixolydian",
    "locrian",
    "harmonic minor",
    "melodic minor",
    "pentatonic major",
    "pentatonic minor",
    "blues",
    "whole tone",
    "diminished",
    "altered",
    "super locrian",
    "lydian dominant",
    "phrygian dominant",
    "hungarian minor",
    "gypsy",
    "bebop dominant",
    "bebop major",
)

# Exact scale aliases, keyed by the sanitized name (no spaces or hyphens)
SCALE_SYNONYMS: dict[str, str] = {
    "major": "major",
    "maj": "major",
    "ionian": "major",
    "minor": "minor",
    "min": "minor",
    "naturalminor": "minor",
    "aeolian": "minor",
    "dorian": "dorian",
    "phrygian": "phrygian",
    "lydian": "lydian",
    "mixolydian": "mixolydian",
    "locrian": "locrian",
    "harmonicminor": "harmonic minor",
    "melodicminor": "melodic minor",
    "jazzminor": "melodic minor",
    "pentatonicmajor": "pentatonic major",
    "majorpentatonic": "pentatonic major",
    "pentatonic": "pentatonic major",
    "pentatonicminor": "pentatonic minor",
    "minorpentatonic": "pentatonic minor",
    "blues": "blues",
    "minorblues": "blues",
    "wholetone": "whole tone",
    "diminished": "diminished",
    "halfwhole": "diminished",
    "wholehalf": "diminished",
    "halfwholediminished": "diminished",
    "wholehalfdiminished": "diminished",
    "diminishedhalfwhole": "diminished",
    "octatonic": "diminished",
    "altered": "altered",
    "alteredscale": "altered",
    "diminishedwholetone": "altered",
    "superlocrian": "super locrian",
    "lydiandominant": "lydian dominant",
    "lydianb7": "lydian dominant",
    "overtone": "lydian dominant",
    "phrygiandominant": "phrygian dominant",
    "phrygianmajor": "phrygian dominant",
    "spanishphrygian": "phrygian dominant",
    "hungarianminor": "hungarian minor",
    "gypsy": "gypsy",
    "gypsyminor": "gypsy",
    "bebopdominant": "bebop dominant",
    "bebop": "bebop dominant",
    "bebopmajor": "bebop major",
}

SCALE_PATTERNS: list[tuple[re.Pattern[str], str]] = [
    (re.compile(r"pent.*min|min.*pent"), "pentatonic minor"),
    (re.compile(r"pent"), "pentatonic major"),
    (re.compile(r"harm"), "harmonic minor"),
    (re.compile(r"mel"), "melodic minor"),
    (re.compile(r"halfwhole|wholehalf|dim|octatonic"), "diminished"),
    (re.compile(r"whole"), "whole tone"),
    (re.compile(r"bebop.*maj"), "bebop major"),
    (re.compile(r"bebop"), "bebop dominant"),
    (re.compile(r"blues"), "blues"),
    (re.compile(r"superloc"), "super locrian"),
    (re.compile(r"alt"), "altered"),
    (re.compile(r"lyd.*(dom|b7)"), "lydian dominant"),
    (re.compile(r"phryg.*(dom|maj)|spanish"), "phrygian dominant"),
    (re.compile(r"hungar"), "hungarian minor"),
    (re.compile(r"gyps"), "gypsy"),
    (re.compile(r"mixo"), "mixolydian"),
    (re.compile(r"dor"), "dorian"),
    (re.compile(r"phryg"), "phrygian"),
    (re.compile(r"lyd"), "lydian"),
    (re.compile(r"loc"), "locrian"),
    (re.compile(r"^(maj|ion)"), "major"),
    (re.compile(r"^(min|aeol)"), "minor"),
]

_CHORD_RE = re.compile(r"^([A-Ga-g])([#b]?)(.*)$")
_SCALE_ROOT_RE = re.compile(r"^([A-Ga-g][#b]?)(?:\s+|$)(.*)$")
_SCALE_NOISE_RE = re.compile(r"\b(scale|mode)\b", re.IGNORECASE)
_CAPITAL_MAJOR_RE = re.compile(r"^M(?=$|[0-9#b])")


@dataclass(frozen=True)
class QualityResolution:
    """Result of resolving a chord suffix."""

    quality: str
    recognized: bool


@dataclass(frozen=True)
class ScaleResolution:
    """Result of resolving a scale name."""

    scale_id: str
    recognized: bool


@dataclass(frozen=True)
class ParsedChord:
    """
    A chord name split into canonical parts.

    Root and bass use the canonical sharp spelling ('Db' -> 'C#').
    """

    root: str
    quality: str
    bass: str | None
    recognized: bool
    original: str

    @property
    def key(self) -> tuple[str, str]:
        """Corpus key for this chord: (root, quality)."""
        return (self.root, self.quality)


def _clean(text: str) -> str:
    return text.strip().replace("♯", "#").replace("♭", "b").replace("△", "Δ")


def sanitize_quality(suffix: str) -> str:
    """
    Normalize a chord suffix for table lookup.

    Strips whitespace, parentheses and commas, rewrites a capital 'M'
    (as in 'M7') to 'maj', then lowercases.
    """
    text = re.sub(r"[\s(),]", "", _clean(suffix))
    text = _CAPITAL_MAJOR_RE.sub("maj", text)
    return text.lower()


def resolve_chord_quality(suffix: str) -> QualityResolution:
    """
    Resolve a chord suffix to a canonical quality.

    Args:
        suffix: Everything after the root (slash bass already removed)

    Returns:
        QualityResolution; unknown suffixes give 'major', unrecognized
    """
    token = sanitize_quality(suffix or "")

    if token in QUALITY_SYNONYMS:
        return QualityResolution(QUALITY_SYNONYMS[token], True)

    for pattern, quality in ALTERATION_PATTERNS:
        if pattern.search(token):
            return QualityResolution(quality, True)

    for pattern, quality in SIMPLE_PATTERNS:
        if pattern.search(token):
            return QualityResolution(quality, True)

    if token in CANONICAL_CHORD_QUALITIES:
        return QualityResolution(token, True)

    logger.warning(f"Unrecognized chord quality '{suffix}', defaulting to major")
    return QualityResolution("major", False)


def _split_bass(rest: str) -> tuple[str, str | None]:
    """Split a trailing '/bass' when the part after the slash is a note name."""
    head, sep, tail = rest.rpartition("/")
    if sep and is_note_name(tail):
        return head, tail.strip()
    return rest, None


def parse_chord_name(name: str) -> ParsedChord:
    """
    Parse a chord name into root, quality and optional slash bass.

    'C#maj7/E' -> ('C#', 'maj7', 'E'); 'Dbm7' -> ('C#', 'min7', None).
    'C6/9' and 'Cm/maj7' keep their slash as part of the quality.
    Unparseable names resolve to C major, flagged unrecognized.
    """
    original = name if isinstance(name, str) else ""
    match = _CHORD_RE.match(_clean(original))
    if not match:
        logger.warning(f"Unparseable chord name '{original}', defaulting to C major")
        return ParsedChord("C", "major", None, False, original)

    letter, accidental, rest = match.groups()
    root = normalize_root(letter.upper() + accidental)

    suffix, bass = _split_bass(rest)
    resolution = resolve_chord_quality(suffix)

    return ParsedChord(
        root=root,
        quality=resolution.quality,
        bass=normalize_root(bass) if bass else None,
        recognized=resolution.recognized,
        original=original,
    )


def display_chord_name(name: str, key: str | None = None) -> str:
    """
    Respell a chord name's root and bass for a key context.

    The suffix is left as written: display_chord_name('A#m7', 'F') -> 'Bbm7'.
    """
    match = _CHORD_RE.match(_clean(name))
    if not match:
        return name
    letter, accidental, rest = match.groups()
    suffix, bass = _split_bass(rest)
    shown = display_name(letter.upper() + accidental, key) + suffix
    if bass:
        shown += "/" + display_name(bass, key)
    return shown


def split_scale_name(name: str) -> tuple[str | None, str]:
    """
    Split an optional leading root off a scale name.

    'C Aeolian' -> ('C', 'Aeolian'); 'Dorian' -> (None, 'Dorian').
    A lone 'Bb' is a root with an empty scale name.
    """
    text = _clean(name)
    match = _SCALE_ROOT_RE.match(text)
    if match:
        return normalize_root(match.group(1)), match.group(2)
    return None, text


def sanitize_scale_name(name: str) -> str:
    """Strip root, the words 'scale'/'mode', spaces and hyphens; lowercase."""
    _, rest = split_scale_name(name)
    rest = _SCALE_NOISE_RE.sub("", rest)
    return re.sub(r"[\s\-_]", "", rest).lower()


def resolve_scale_name(name: str) -> ScaleResolution:
    """
    Resolve a scale descriptor to a canonical scale id.

    'Ionian' -> major, 'C Aeolian' -> minor, 'Lydian Dominant' ->
    lydian dominant. Unknown names give 'major', unrecognized.
    """
    token = sanitize_scale_name(name or "")

    if token in SCALE_SYNONYMS:
        return ScaleResolution(SCALE_SYNONYMS[token], True)

    if token:
        for pattern, scale_id in SCALE_PATTERNS:
            if pattern.search(token):
                return ScaleResolution(scale_id, True)

    logger.warning(f"Unrecognized scale '{name}', defaulting to major")
    return ScaleResolution("major", False)
