"""
Tests for the FretboardEngine facade.
"""

import pytest

from chuk_mcp_fretboard import engine as engine_module
from chuk_mcp_fretboard.constants import ResolutionSource
from chuk_mcp_fretboard.engine import FretboardEngine


class TestChords:
    """Tests for chord entry points."""

    @pytest.mark.asyncio
    async def test_resolve_chord(self, engine: FretboardEngine) -> None:
        """Chord resolution keeps its diagnostics."""
        resolution = await engine.resolve_chord("G7")
        assert resolution.source == ResolutionSource.EXACT
        assert resolution.voicings

    @pytest.mark.asyncio
    async def test_resolve_chord_voicings(self, engine: FretboardEngine) -> None:
        """The list form returns plain voicings."""
        voicings = await engine.resolve_chord_voicings("F#m7b5")
        assert voicings
        assert all(v.is_movable for v in voicings)

    def test_chord_tones_flat_input(self, engine: FretboardEngine) -> None:
        """Flat input spells with flats."""
        tones = engine.chord_tones("Bbmaj7")
        assert tones["root"] == "Bb"
        assert tones["notes"] == ["Bb", "D", "F", "A"]
        assert tones["pitch_classes"] == [2, 5, 9, 10]
        assert tones["quality"] == "maj7"

    def test_chord_tones_key_context(self, engine: FretboardEngine) -> None:
        """A key context overrides the input spelling."""
        assert engine.chord_tones("Bb", key="E")["root"] == "A#"
        assert engine.chord_tones("A#7", key="F")["notes"] == ["Bb", "D", "F", "Ab"]

    def test_chord_tones_unrecognized(self, engine: FretboardEngine) -> None:
        """Unknown chords are flagged, not raised."""
        tones = engine.chord_tones("Cxyz")
        assert tones["quality"] == "major"
        assert not tones["recognized"]

    def test_analyze_chord_in_key(self, engine: FretboardEngine) -> None:
        """A key gives the chord its function and spelling."""
        analysis = engine.analyze_chord("G7", key="C")
        assert analysis.numeral == "V7"
        assert analysis.degree == "5"
        assert analysis.notes == ("G", "B", "D", "F")

    def test_analyze_chord_minor_key(self, engine: FretboardEngine) -> None:
        """Minor keys place the tonic and spell with their signature."""
        analysis = engine.analyze_chord("A#", key="F minor")
        assert analysis.root == "Bb"
        assert analysis.numeral == "IV"

    def test_analyze_chord_without_key(self, engine: FretboardEngine) -> None:
        """Without a key, the written accidental picks the spelling."""
        analysis = engine.analyze_chord("Ebm7")
        assert analysis.notes == ("Eb", "Gb", "Bb", "Db")
        assert analysis.formula == "1-♭3-5-♭7"
        assert analysis.numeral is None


class TestScales:
    """Tests for scale entry points."""

    def test_root_from_name(self, engine: FretboardEngine) -> None:
        """The root can come from the scale name."""
        fingering = engine.resolve_scale_fingering("A minor pentatonic", position=2)
        assert fingering.root == "A"
        assert fingering.scale_id == "pentatonic minor"
        assert fingering.frets[0] == (5, 8)

    def test_explicit_root_wins(self, engine: FretboardEngine) -> None:
        """An explicit root overrides one in the name."""
        assert engine.resolve_scale_fingering("C Dorian", root="D").root == "D"

    def test_default_root(self, engine: FretboardEngine) -> None:
        """Without any root, C is used."""
        assert engine.resolve_scale_fingering("Lydian").root == "C"

    def test_unrecognized_scale(self, engine: FretboardEngine) -> None:
        """Unknown scale names degrade to major."""
        selection = engine.select_scale("E klingon")
        assert selection.scale_id == "major"
        assert selection.root == "E"
        assert not selection.recognized

    def test_available_positions(self, engine: FretboardEngine) -> None:
        """Position counts are looked up by scale name."""
        assert engine.available_positions("whole-tone") == 2
        assert engine.available_positions("Aeolian") == 7

    @pytest.mark.parametrize(
        "scale_name,notes",
        [
            ("Bb major", ["Bb", "C", "D", "Eb", "F", "G", "A"]),
            ("G Dorian", ["G", "A", "Bb", "C", "D", "E", "F"]),
            ("E major", ["E", "F#", "G#", "A", "B", "C#", "D#"]),
            ("A minor", ["A", "B", "C", "D", "E", "F", "G"]),
            ("C blues", ["C", "Eb", "F", "Gb", "G", "Bb"]),
        ],
    )
    def test_scale_notes(self, engine: FretboardEngine, scale_name: str, notes: list[str]) -> None:
        """Scale notes follow the key signature of their root."""
        assert engine.scale_notes(scale_name) == notes

    def test_scale_notes_explicit_root(self, engine: FretboardEngine) -> None:
        """An explicit root is spelled as written."""
        assert engine.scale_notes("major", root="Db")[:3] == ["Db", "Eb", "F"]

    def test_half_whole_diminished(self, engine: FretboardEngine) -> None:
        """The half-whole name is the diminished scale, not whole tone."""
        selection = engine.select_scale("C half-whole diminished")
        assert selection.scale_id == "diminished"
        assert selection.recognized
        assert engine.available_positions("half-whole diminished") == 3


class TestModuleLevel:
    """Tests for the module-level entry points."""

    @pytest.mark.asyncio
    async def test_default_engine(self) -> None:
        """Module functions share one lazily created engine."""
        assert engine_module.get_engine() is engine_module.get_engine()
        voicings = await engine_module.resolve_chord_voicings("D")
        assert voicings[0].position == "Open"
        assert engine_module.resolve_scale_fingering("E Phrygian").scale_id == "phrygian"
        assert engine_module.available_positions("blues") == 6
