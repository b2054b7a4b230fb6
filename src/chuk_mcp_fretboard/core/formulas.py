"""
Formula tables - canonical chord qualities and scales to interval sets.

Both tables are closed and immutable. Lookups fall back to the major
formula for an unknown key; that only happens when a caller bypasses the
quality resolver, so it is logged as a warning.
"""

from __future__ import annotations

import logging
from types import MappingProxyType

from .chord import Chord, ChordQuality
from .pitch import PitchClass
from .quality import ParsedChord, parse_chord_name
from .scale import ScaleType

logger = logging.getLogger(__name__)

CHORD_FORMULAS: MappingProxyType[str, tuple[int, ...]] = MappingProxyType(
    {
        # Triads
        "major": (0, 4, 7),
        "minor": (0, 3, 7),
        "dim": (0, 3, 6),
        "aug": (0, 4, 8),
        "sus2": (0, 2, 7),
        "sus4": (0, 5, 7),
        "5": (0, 7),
        # Sevenths
        "7": (0, 4, 7, 10),
        "maj7": (0, 4, 7, 11),
        "min7": (0, 3, 7, 10),
        "dim7": (0, 3, 6, 9),
        "min7b5": (0, 3, 6, 10),
        "min/maj7": (0, 3, 7, 11),
        # Ninths
        "9": (0, 4, 7, 10, 14),
        "maj9": (0, 4, 7, 11, 14),
        "min9": (0, 3, 7, 10, 14),
        "9#11": (0, 4, 7, 10, 14, 18),
        # Elevenths
        "11": (0, 4, 7, 10, 14, 17),
        "maj11": (0, 4, 7, 11, 14, 17),
        "min11": (0, 3, 7, 10, 14, 17),
        # Thirteenths
        "13": (0, 4, 7, 10, 14, 17, 21),
        "maj13": (0, 4, 7, 11, 14, 17, 21),
        "min13": (0, 3, 7, 10, 14, 17, 21),
        # Sixths and added tones
        "6": (0, 4, 7, 9),
        "min6": (0, 3, 7, 9),
        "6/9": (0, 4, 7, 9, 14),
        "add9": (0, 4, 7, 14),
        "add11": (0, 4, 7, 17),
        "madd9": (0, 3, 7, 14),
        # Altered dominants
        "7b9": (0, 4, 7, 10, 13),
        "7#9": (0, 4, 7, 10, 15),
        "7b5": (0, 4, 6, 10),
        "7#5": (0, 4, 8, 10),
        "7alt": (0, 4, 6, 10, 13, 15),
        "7b13": (0, 4, 7, 10, 20),
        "7#11": (0, 4, 7, 10, 18),
        "7b9b13": (0, 4, 7, 10, 13, 20),
        "7#9b13": (0, 4, 7, 10, 15, 20),
        # Suspended dominants
        "7sus4": (0, 5, 7, 10),
        "9sus4": (0, 5, 7, 10, 14),
        # Altered major sevenths
        "maj7#11": (0, 4, 7, 11, 18),
        "maj7b13": (0, 4, 7, 11, 20),
        "maj7#9": (0, 4, 7, 11, 15),
        # Stacked fourths
        "quartal": (0, 5, 10, 15),
    }
)

SCALE_FORMULAS: MappingProxyType[str, tuple[int, ...]] = MappingProxyType(
    {
        # Diatonic modes
        "major": (0, 2, 4, 5, 7, 9, 11),
        "dorian": (0, 2, 3, 5, 7, 9, 10),
        "phrygian": (0, 1, 3, 5, 7, 8, 10),
        "lydian": (0, 2, 4, 6, 7, 9, 11),
        "mixolydian": (0, 2, 4, 5, 7, 9, 10),
        "minor": (0, 2, 3, 5, 7, 8, 10),
        "locrian": (0, 1, 3, 5, 6, 8, 10),
        # Minor scales
        "harmonic minor": (0, 2, 3, 5, 7, 8, 11),
        "melodic minor": (0, 2, 3, 5, 7, 9, 11),
        # Pentatonic and blues
        "pentatonic major": (0, 2, 4, 7, 9),
        "pentatonic minor": (0, 3, 5, 7, 10),
        "blues": (0, 3, 5, 6, 7, 10),
        # Symmetric
        "whole tone": (0, 2, 4, 6, 8, 10),
        "diminished": (0, 1, 3, 4, 6, 7, 9, 10),
        # Melodic-minor and harmonic-minor modes
        "altered": (0, 1, 3, 4, 6, 8, 10),
        "super locrian": (0, 1, 3, 4, 6, 8, 10),
        "lydian dominant": (0, 2, 4, 6, 7, 9, 10),
        "phrygian dominant": (0, 1, 4, 5, 7, 8, 10),
        # Exotic
        "hungarian minor": (0, 2, 3, 6, 7, 8, 11),
        "gypsy": (0, 2, 3, 6, 7, 8, 11),
        # Bebop
        "bebop dominant": (0, 2, 4, 5, 7, 9, 10, 11),
        "bebop major": (0, 2, 4, 5, 7, 8, 9, 11),
    }
)

# Fallback families, richest quality first. Substitutes are drawn from the
# qualities after the requested one, then from the ones before it.
QUALITY_FAMILIES: MappingProxyType[str, tuple[str, ...]] = MappingProxyType(
    {
        "major": (
            "maj13",
            "maj11",
            "maj9",
            "maj7#11",
            "maj7#9",
            "maj7b13",
            "maj7",
            "6/9",
            "6",
            "add9",
            "add11",
            "major",
        ),
        "minor": (
            "min13",
            "min11",
            "min9",
            "min7",
            "min/maj7",
            "min6",
            "madd9",
            "minor",
        ),
        "dominant": (
            "13",
            "11",
            "9#11",
            "9",
            "7#9b13",
            "7b9b13",
            "7alt",
            "7#9",
            "7b9",
            "7#11",
            "7b13",
            "7#5",
            "7b5",
            "7",
        ),
        "diminished": ("dim7", "min7b5", "dim"),
        "augmented": ("7#5", "aug"),
        "suspended": ("9sus4", "7sus4", "sus4", "sus2", "quartal", "5"),
    }
)

CHORD_QUALITIES: MappingProxyType[str, ChordQuality] = MappingProxyType(
    {name: ChordQuality(name, intervals) for name, intervals in CHORD_FORMULAS.items()}
)

SCALE_TYPES: MappingProxyType[str, ScaleType] = MappingProxyType(
    {name: ScaleType(name, intervals) for name, intervals in SCALE_FORMULAS.items()}
)


def chord_quality(name: str) -> ChordQuality:
    """
    Look up a chord quality by canonical name.

    Unknown names return the major quality and log a warning.
    """
    quality = CHORD_QUALITIES.get(name)
    if quality is None:
        logger.warning(f"No chord formula for '{name}', using major")
        return CHORD_QUALITIES["major"]
    return quality


def scale_type(name: str) -> ScaleType:
    """
    Look up a scale by canonical id.

    Unknown ids return the major scale and log a warning.
    """
    scale = SCALE_TYPES.get(name)
    if scale is None:
        logger.warning(f"No scale formula for '{name}', using major")
        return SCALE_TYPES["major"]
    return scale


def chord_pitch_classes(root: PitchClass | int, quality: str) -> frozenset[int]:
    """Pitch classes of a quality built on a root."""
    return chord_quality(quality).pitch_classes(PitchClass(int(root) % 12))


def scale_pitch_classes(root: PitchClass | int, scale_id: str) -> frozenset[int]:
    """Pitch classes of a scale built on a root."""
    return scale_type(scale_id).pitch_classes(PitchClass(int(root) % 12))


def quality_family(quality: str) -> tuple[str, ...]:
    """
    Get the fallback family containing a quality.

    Returns:
        The family's qualities, richest first, or an empty tuple
    """
    for members in QUALITY_FAMILIES.values():
        if quality in members:
            return members
    return ()


def family_substitutes(quality: str) -> list[str]:
    """
    Ordered substitutes for a quality within its family.

    Qualities simpler than the requested one come first (maj13 -> maj11 ->
    maj9 -> ... -> major), then the richer ones.
    """
    members = quality_family(quality)
    if not members:
        return []
    index = members.index(quality)
    return list(members[index + 1 :]) + list(reversed(members[:index]))


def build_chord(parsed: ParsedChord) -> Chord:
    """Turn a parsed chord name into a Chord with its formula attached."""
    bass = PitchClass.parse(parsed.bass) if parsed.bass else None
    return Chord(PitchClass.parse(parsed.root), chord_quality(parsed.quality), bass)


def chord_from_name(name: str) -> Chord:
    """Parse a chord name straight to a Chord (never raises)."""
    return build_chord(parse_chord_name(name))
