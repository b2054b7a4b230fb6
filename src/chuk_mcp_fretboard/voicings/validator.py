"""
Voicing validator - checks a shape against its chord formula.

A voicing is rejected outright if any sounding pitch class is not a chord
tone. Beyond that, it must sound at least ``min_match_ratio`` of the
chord's pitch classes; leaving out a non-root tone is normal on six
strings, playing a wrong note never is.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from chuk_mcp_fretboard.constants import MIN_VOICING_MATCH_RATIO, STANDARD_TUNING
from chuk_mcp_fretboard.core.chord import Chord
from chuk_mcp_fretboard.core.formulas import chord_from_name
from chuk_mcp_fretboard.models.voicing import ChordVoicing


@dataclass(frozen=True)
class VoicingValidation:
    """Outcome of validating one voicing."""

    valid: bool
    sounding: frozenset[int]
    expected: frozenset[int]
    extra: frozenset[int]  # Sounding notes that are not chord tones
    missing: frozenset[int]  # Chord tones the voicing leaves out
    match_ratio: float  # Share of sounding notes that are chord tones
    coverage: float  # Share of chord tones that sound


def extract_pitch_classes(
    voicing: ChordVoicing,
    tuning: tuple[int, ...] = STANDARD_TUNING,
) -> frozenset[int]:
    """
    Get the set of pitch classes a voicing sounds.

    Args:
        voicing: The shape to inspect
        tuning: Open-string pitch classes, low E first

    Returns:
        Pitch class values (0-11) of every played string
    """
    return frozenset(
        (tuning[string] + fret) % 12
        for string, fret in enumerate(voicing.absolute_frets())
        if fret is not None
    )


def lowest_pitch_class(
    voicing: ChordVoicing,
    tuning: tuple[int, ...] = STANDARD_TUNING,
) -> int | None:
    """Pitch class on the lowest played string (the bass note)."""
    string = voicing.lowest_sounding_string()
    if string is None:
        return None
    fret = voicing.absolute_frets()[string]
    return None if fret is None else (tuning[string] + fret) % 12


class VoicingValidator:
    """
    Validates voicings against chord formulas.

    The coverage threshold is configurable; the no-extra-notes rule is not.
    """

    def __init__(
        self,
        min_match_ratio: float = MIN_VOICING_MATCH_RATIO,
        tuning: tuple[int, ...] = STANDARD_TUNING,
    ):
        """
        Initialize the validator.

        Args:
            min_match_ratio: Minimum share of chord tones a voicing must sound
            tuning: Open-string pitch classes, low E first
        """
        if not 0.0 <= min_match_ratio <= 1.0:
            raise ValueError(f"min_match_ratio must be within 0-1, got {min_match_ratio}")
        self.min_match_ratio = min_match_ratio
        self.tuning = tuning

    def validate(self, voicing: ChordVoicing, chord: Chord | str) -> VoicingValidation:
        """
        Compare a voicing's sounding notes with a chord's formula.

        Args:
            voicing: The shape to check
            chord: A Chord or a chord name such as 'C#maj7/E'

        Returns:
            VoicingValidation with the verdict and the note breakdown
        """
        if isinstance(chord, str):
            chord = chord_from_name(chord)

        expected = chord.pitch_classes()
        sounding = extract_pitch_classes(voicing, self.tuning)
        extra = sounding - expected
        missing = expected - sounding

        match_ratio = (len(sounding) - len(extra)) / len(sounding) if sounding else 0.0
        coverage = (len(expected) - len(missing)) / len(expected) if expected else 0.0

        valid = bool(sounding) and not extra and coverage >= self.min_match_ratio
        return VoicingValidation(
            valid=valid,
            sounding=sounding,
            expected=expected,
            extra=extra,
            missing=missing,
            match_ratio=match_ratio,
            coverage=coverage,
        )

    def is_valid(self, voicing: ChordVoicing, chord: Chord | str) -> bool:
        """Check whether a voicing is acceptable for a chord."""
        return self.validate(voicing, chord).valid

    def filter_valid(
        self,
        voicings: Iterable[ChordVoicing],
        chord: Chord | str,
    ) -> list[ChordVoicing]:
        """Keep only the voicings that pass, preserving order."""
        if isinstance(chord, str):
            chord = chord_from_name(chord)
        return [v for v in voicings if self.is_valid(v, chord)]


_default_validator = VoicingValidator()


def is_valid(voicing: ChordVoicing, chord_name: str) -> bool:
    """Check a voicing against a chord name with the default thresholds."""
    return _default_validator.is_valid(voicing, chord_name)
