"""
Tests for the formula tables and chord/scale primitives.
"""

import pytest

from chuk_mcp_fretboard.core import (
    CANONICAL_CHORD_QUALITIES,
    CANONICAL_SCALES,
    CHORD_FORMULAS,
    SCALE_FORMULAS,
    Chord,
    ChordQuality,
    PitchClass,
    ScaleType,
    chord_from_name,
    chord_pitch_classes,
    chord_quality,
    family_substitutes,
    quality_family,
    scale_pitch_classes,
    scale_type,
)


class TestFormulaTables:
    """Tests for the static formula maps."""

    def test_every_quality_has_a_formula(self) -> None:
        """The chord table covers the canonical qualities exactly."""
        assert set(CHORD_FORMULAS) == set(CANONICAL_CHORD_QUALITIES)

    def test_every_scale_has_a_formula(self) -> None:
        """The scale table covers the canonical scales exactly."""
        assert set(SCALE_FORMULAS) == set(CANONICAL_SCALES)

    def test_formulas_start_at_root(self) -> None:
        """Every formula starts at 0 and strictly increases."""
        for intervals in (*CHORD_FORMULAS.values(), *SCALE_FORMULAS.values()):
            assert intervals[0] == 0
            assert list(intervals) == sorted(set(intervals))

    def test_scales_stay_in_octave(self) -> None:
        """Scale intervals never exceed 11."""
        for intervals in SCALE_FORMULAS.values():
            assert max(intervals) <= 11

    def test_tables_are_read_only(self) -> None:
        """The tables cannot be mutated."""
        with pytest.raises(TypeError):
            CHORD_FORMULAS["new"] = (0,)  # type: ignore[index]

    def test_unknown_lookup_falls_back_to_major(self) -> None:
        """Unknown keys give the major formula."""
        assert chord_quality("not-a-quality").intervals == (0, 4, 7)
        assert scale_type("not-a-scale").name == "major"


class TestPitchClassSets:
    """Tests for formula-derived pitch class sets."""

    def test_extensions_reduce_mod_12(self) -> None:
        """Compound intervals fold into one octave."""
        assert chord_pitch_classes(PitchClass.C, "9") == frozenset({0, 4, 7, 10, 2})
        assert chord_pitch_classes(PitchClass.C, "13") == frozenset({0, 4, 7, 10, 2, 5, 9})

    def test_root_offsets(self) -> None:
        """Pitch classes shift with the root."""
        assert chord_pitch_classes(PitchClass.A, "minor") == frozenset({9, 0, 4})
        assert scale_pitch_classes(PitchClass.D, "dorian") == frozenset({2, 4, 5, 7, 9, 11, 0})


class TestChordQuality:
    """Tests for ChordQuality and Chord."""

    def test_invalid_formula(self) -> None:
        """Formulas must start at 0 and increase."""
        with pytest.raises(ValueError):
            ChordQuality("bad", (4, 7))
        with pytest.raises(ValueError):
            ChordQuality("bad", (0, 7, 4))

    def test_get_pitches_drops_octaves(self) -> None:
        """Repeated pitch classes appear once."""
        quality = ChordQuality("octave", (0, 7, 12))
        assert quality.get_pitches(PitchClass.C) == [PitchClass.C, PitchClass.G]

    def test_slash_bass_is_a_chord_tone(self) -> None:
        """A slash bass joins the expected pitch classes."""
        chord = chord_from_name("C/Bb")
        assert chord.pitch_classes() == frozenset({0, 4, 7, 10})
        assert chord.get_pitches()[0] == PitchClass.As

    def test_chord_name(self) -> None:
        """Chords render canonical names."""
        assert chord_from_name("Dbmaj7/F").name == "C#maj7/F"
        assert chord_from_name("Am").name == "Am"
        assert Chord(PitchClass.G, chord_quality("major")).name == "G"


class TestScaleType:
    """Tests for ScaleType."""

    def test_symmetry_period(self) -> None:
        """Symmetric scales repeat inside the octave."""
        assert scale_type("whole tone").symmetry_period == 2
        assert scale_type("diminished").symmetry_period == 3
        assert scale_type("major").symmetry_period == 12
        assert not scale_type("blues").is_symmetric

    def test_invalid_scale(self) -> None:
        """Scales must stay within one octave."""
        with pytest.raises(ValueError):
            ScaleType("bad", (0, 5, 12))


class TestQualityFamilies:
    """Tests for fallback families."""

    def test_family_lookup(self) -> None:
        """Qualities find their family."""
        assert "maj7" in quality_family("maj13")
        assert quality_family("min7b5") == ("dim7", "min7b5", "dim")

    def test_substitutes_simplify_first(self) -> None:
        """Simpler qualities come before richer ones."""
        substitutes = family_substitutes("maj9")
        assert substitutes[:2] == ["maj7#11", "maj7#9"]
        assert substitutes[-1] == "maj13"
        assert "maj9" not in substitutes

    def test_shared_member_uses_first_family(self) -> None:
        """7#5 sits in the dominant family first; aug falls back to 7#5."""
        assert family_substitutes("7#5")[:2] == ["7b5", "7"]
        assert family_substitutes("aug") == ["7#5"]

    def test_every_family_member_is_canonical(self) -> None:
        """Families only name canonical qualities."""
        from chuk_mcp_fretboard.core import QUALITY_FAMILIES

        for members in QUALITY_FAMILIES.values():
            assert set(members) <= set(CANONICAL_CHORD_QUALITIES)
