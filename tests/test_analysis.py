"""
Tests for chord analysis and scale spelling.
"""

import pytest

from chuk_mcp_fretboard.core import (
    PitchClass,
    analyze_chord,
    chord_formula,
    chord_from_name,
    chord_quality,
    compatible_scales,
    interval_names,
    roman_numeral,
    scale_degree,
    scale_notes,
)


class TestFormulas:
    """Tests for formula and interval naming."""

    @pytest.mark.parametrize(
        "quality,formula",
        [
            ("major", "1-3-5"),
            ("min7", "1-♭3-5-♭7"),
            ("7", "1-3-5-♭7"),
            ("dim7", "1-♭3-♭5-♭♭7"),
            ("min7b5", "1-♭3-♭5-♭7"),
        ],
    )
    def test_chord_formula(self, quality: str, formula: str) -> None:
        """Formulas use degree notation."""
        assert chord_formula(chord_quality(quality)) == formula

    def test_interval_names(self) -> None:
        """Interval names are ASCII with R for the root."""
        assert interval_names(chord_quality("7")) == ["R", "3", "5", "b7"]
        assert interval_names(chord_quality("min7")) == ["R", "b3", "5", "b7"]


class TestKeyFunction:
    """Tests for degrees and roman numerals in a key."""

    def test_scale_degree(self) -> None:
        """Chord roots are placed relative to the tonic."""
        assert scale_degree(PitchClass.G, PitchClass.C) == "5"
        assert scale_degree(PitchClass.Ds, PitchClass.C) == "b3"

    @pytest.mark.parametrize(
        "chord,numeral",
        [
            ("G7", "V7"),
            ("Dm7", "ii7"),
            ("Bm7b5", "viiø7"),
            ("Ebmaj7", "bIIImaj7"),
            ("Ab", "bVI"),
            ("Am", "vi"),
        ],
    )
    def test_roman_numeral(self, chord: str, numeral: str) -> None:
        """Minor-third chords are lower case, with a quality suffix."""
        assert roman_numeral(chord_from_name(chord), PitchClass.C) == numeral


class TestCompatibleScales:
    """Tests for scale compatibility."""

    def test_dominant_seventh(self) -> None:
        """A dominant seventh fits the dominant scales in table order."""
        assert compatible_scales(chord_from_name("C7")) == [
            "mixolydian",
            "diminished",
            "lydian dominant",
            "phrygian dominant",
            "bebop dominant",
        ]

    def test_major_seventh(self) -> None:
        """A major seventh excludes the flat-seventh scales."""
        assert compatible_scales(chord_from_name("Cmaj7")) == [
            "major",
            "lydian",
            "bebop dominant",
            "bebop major",
        ]

    def test_slash_bass_counts(self) -> None:
        """The bass note has to fit the scale too."""
        scales = compatible_scales(chord_from_name("C/Bb"))
        assert "mixolydian" in scales
        assert "major" not in scales


class TestAnalyzeChord:
    """Tests for the combined analysis."""

    def test_without_key(self) -> None:
        """Without a key there is no degree or numeral."""
        analysis = analyze_chord(chord_from_name("Am7"))
        assert analysis.quality == "min7"
        assert analysis.notes == ("A", "C", "E", "G")
        assert analysis.degree is None
        assert analysis.numeral is None
        assert "dorian" in analysis.compatible_scales

    def test_in_key(self) -> None:
        """A key fills in the degree and numeral and sets the spelling."""
        analysis = analyze_chord(chord_from_name("D#maj7"), PitchClass.C, key="C")
        assert analysis.root == "Eb"
        assert analysis.notes == ("Eb", "G", "Bb", "D")
        assert analysis.degree == "b3"
        assert analysis.numeral == "bIIImaj7"

    def test_prefer_flats(self) -> None:
        """Flat spelling is used on request."""
        assert analyze_chord(chord_from_name("A#7"), prefer_flats=True).notes == (
            "Bb",
            "D",
            "F",
            "Ab",
        )


class TestScaleNotes:
    """Tests for scale spelling."""

    def test_sharp_key(self) -> None:
        """E major spells with sharps."""
        assert scale_notes(PitchClass.E, "major", "E") == ["E", "F#", "G#", "A", "B", "C#", "D#"]

    def test_flat_key(self) -> None:
        """Bb major spells with flats."""
        assert scale_notes(PitchClass.As, "major", "Bb") == ["Bb", "C", "D", "Eb", "F", "G", "A"]

    def test_pentatonic(self) -> None:
        """Pentatonic scales have five notes."""
        assert scale_notes(PitchClass.A, "pentatonic minor", "A minor") == ["A", "C", "D", "E", "G"]
