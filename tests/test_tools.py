"""
Tests for MCP tools.

Tests the MCP tool implementations for chord voicings and scale fingerings.
"""

import json

import pytest

from chuk_mcp_fretboard.engine import FretboardEngine
from chuk_mcp_fretboard.tools import register_chord_tools, register_scale_tools


# Mock MCP server for testing tools
class MockMCPServer:
    """Mock MCP server that just stores registered tools."""

    def __init__(self, name: str):
        self.name = name
        self.tools: dict = {}

    def tool(self, func):
        """Decorator to register a tool."""
        self.tools[func.__name__] = func
        return func


@pytest.fixture
def chord_tools(engine: FretboardEngine) -> dict:
    """Chord tools bound to a fresh engine."""
    return register_chord_tools(MockMCPServer("test"), engine)


@pytest.fixture
def scale_tools(engine: FretboardEngine) -> dict:
    """Scale tools bound to a fresh engine."""
    return register_scale_tools(MockMCPServer("test"), engine)


class TestRegistration:
    """Tests for tool registration."""

    def test_registers_chord_tools(self, engine: FretboardEngine) -> None:
        """Chord tools are registered on the server and returned."""
        mcp = MockMCPServer("test")
        tools = register_chord_tools(mcp, engine)
        assert set(tools) == {
            "fretboard_resolve_chord",
            "fretboard_chord_tones",
            "fretboard_analyze_chord",
            "fretboard_validate_voicing",
            "fretboard_preload",
            "fretboard_cache_stats",
        }
        assert set(mcp.tools) == set(tools)

    def test_registers_scale_tools(self, engine: FretboardEngine) -> None:
        """Scale tools are registered on the server and returned."""
        mcp = MockMCPServer("test")
        tools = register_scale_tools(mcp, engine)
        assert set(tools) == {
            "fretboard_scale_fingering",
            "fretboard_scale_positions",
            "fretboard_scale_notes",
            "fretboard_list_scales",
        }


class TestChordTools:
    """Tests for chord tools."""

    @pytest.mark.asyncio
    async def test_resolve_chord(self, chord_tools: dict) -> None:
        """Resolve a chord to voicings."""
        result = await chord_tools["fretboard_resolve_chord"](chord_name="Am7")
        data = json.loads(result)

        assert data["status"] == "success"
        assert data["root"] == "A"
        assert data["quality"] == "min7"
        assert data["source"] == "exact"
        assert data["count"] == len(data["voicings"]) > 0
        assert data["voicings"][0]["frets"] == ["x", 0, 2, 0, 1, 0]
        assert data["warnings"] == []

    @pytest.mark.asyncio
    async def test_resolve_unrecognized(self, chord_tools: dict) -> None:
        """Unparseable chords succeed with a warning."""
        result = await chord_tools["fretboard_resolve_chord"](chord_name="Qmaj7")
        data = json.loads(result)

        assert data["status"] == "success"
        assert data["quality"] == "major"
        assert len(data["warnings"]) == 1

    @pytest.mark.asyncio
    async def test_chord_tones(self, chord_tools: dict) -> None:
        """Spell a chord's notes."""
        result = await chord_tools["fretboard_chord_tones"](chord_name="Ebm7")
        data = json.loads(result)

        assert data["status"] == "success"
        assert data["notes"] == ["Eb", "Gb", "Bb", "Db"]
        assert data["warnings"] == []

    @pytest.mark.asyncio
    async def test_analyze_chord(self, chord_tools: dict) -> None:
        """Analyze a chord in a key."""
        result = await chord_tools["fretboard_analyze_chord"](chord_name="Bm7b5", key="C")
        data = json.loads(result)

        assert data["status"] == "success"
        assert data["formula"] == "1-♭3-♭5-♭7"
        assert data["intervals"] == ["R", "b3", "b5", "b7"]
        assert data["numeral"] == "viiø7"
        assert data["degree"] == "7"
        assert data["key"] == "C"
        assert "locrian" in data["compatible_scales"]
        assert data["warnings"] == []

    @pytest.mark.asyncio
    async def test_analyze_unrecognized(self, chord_tools: dict) -> None:
        """Unknown suffixes are analyzed as major with a warning."""
        data = json.loads(await chord_tools["fretboard_analyze_chord"](chord_name="Cm7#5"))

        assert data["status"] == "success"
        assert data["quality"] == "major"
        assert data["numeral"] is None
        assert len(data["warnings"]) == 1

    @pytest.mark.asyncio
    async def test_validate_voicing(self, chord_tools: dict) -> None:
        """Check a hand-made shape."""
        result = await chord_tools["fretboard_validate_voicing"](
            chord_name="C", frets=["x", 3, 2, 0, 1, 0]
        )
        data = json.loads(result)

        assert data["status"] == "success"
        assert data["valid"] is True
        assert data["shape"] == "x-3-2-0-1-0"

    @pytest.mark.asyncio
    async def test_validate_voicing_wrong_note(self, chord_tools: dict) -> None:
        """A wrong note is reported."""
        result = await chord_tools["fretboard_validate_voicing"](
            chord_name="C", frets=["x", 1, 3, 2, 3, 1], first_fret=3
        )
        data = json.loads(result)

        assert data["valid"] is False
        assert data["extra"] == [11]

    @pytest.mark.asyncio
    async def test_validate_voicing_malformed(self, chord_tools: dict) -> None:
        """Malformed shapes return an error."""
        result = await chord_tools["fretboard_validate_voicing"](chord_name="C", frets=[0, 1])
        data = json.loads(result)

        assert data["status"] == "error"
        assert data["message"].startswith("Invalid voicing")

    @pytest.mark.asyncio
    async def test_preload_and_stats(self, chord_tools: dict, engine: FretboardEngine) -> None:
        """Preload warms the cache; stats report and clear it."""
        result = await chord_tools["fretboard_preload"](roots=["C", "G"])
        data = json.loads(result)
        assert data["status"] == "success"
        assert data["scheduled"] == 2

        await engine.loader.load_many(["C", "G"])
        stats = json.loads(await chord_tools["fretboard_cache_stats"](clear=True))
        assert stats["cached_roots"] == ["C", "G"]
        assert stats["message"] == "Voicing cache cleared."
        assert engine.loader.cache_stats()["cache_size"] == 0

    @pytest.mark.asyncio
    async def test_tool_error(self, chord_tools: dict, engine: FretboardEngine, monkeypatch) -> None:
        """Unexpected failures come back as error JSON."""

        async def broken(chord_name: str):
            raise RuntimeError("boom")

        monkeypatch.setattr(engine, "resolve_chord", broken)
        data = json.loads(await chord_tools["fretboard_resolve_chord"](chord_name="C"))

        assert data == {"status": "error", "message": "boom"}


class TestScaleTools:
    """Tests for scale tools."""

    @pytest.mark.asyncio
    async def test_scale_fingering(self, scale_tools: dict) -> None:
        """Get a scale position."""
        result = await scale_tools["fretboard_scale_fingering"](
            scale_name="A minor pentatonic", position=2
        )
        data = json.loads(result)

        assert data["status"] == "success"
        assert data["scale"] == "pentatonic minor"
        assert data["label"] == "Box 3"
        assert data["frets"][0] == [5, 8]
        assert data["fret_range"] == [5, 8]
        assert data["valid"] is True

    @pytest.mark.asyncio
    async def test_scale_fingering_flat_root(self, scale_tools: dict) -> None:
        """Flat roots are displayed as given."""
        result = await scale_tools["fretboard_scale_fingering"](scale_name="Dorian", root="Bb")
        data = json.loads(result)

        assert data["root"] == "Bb"
        assert data["scale"] == "dorian"

    @pytest.mark.asyncio
    async def test_scale_fingering_unrecognized(self, scale_tools: dict) -> None:
        """Unknown scales succeed with a warning."""
        result = await scale_tools["fretboard_scale_fingering"](scale_name="zorblax")
        data = json.loads(result)

        assert data["status"] == "success"
        assert data["scale"] == "major"
        assert len(data["warnings"]) == 1

    @pytest.mark.asyncio
    async def test_scale_positions(self, scale_tools: dict) -> None:
        """Count positions of a symmetric scale."""
        data = json.loads(await scale_tools["fretboard_scale_positions"](scale_name="diminished"))

        assert data["positions"] == 3
        assert data["layout"] == "window"
        assert data["symmetric"] is True

    @pytest.mark.asyncio
    async def test_scale_notes(self, scale_tools: dict) -> None:
        """Spell a scale in its key."""
        data = json.loads(await scale_tools["fretboard_scale_notes"](scale_name="G Dorian"))

        assert data["status"] == "success"
        assert data["scale"] == "dorian"
        assert data["root"] == "G"
        assert data["notes"] == ["G", "A", "Bb", "C", "D", "E", "F"]
        assert data["intervals"] == [0, 2, 3, 5, 7, 9, 10]
        assert data["warnings"] == []

    @pytest.mark.asyncio
    async def test_scale_notes_unrecognized(self, scale_tools: dict) -> None:
        """Unknown scale names are spelled as major with a warning."""
        data = json.loads(await scale_tools["fretboard_scale_notes"](scale_name="zorblax", root="F"))

        assert data["scale"] == "major"
        assert data["notes"] == ["F", "G", "A", "Bb", "C", "D", "E"]
        assert len(data["warnings"]) == 1

    @pytest.mark.asyncio
    async def test_list_scales(self, scale_tools: dict) -> None:
        """List every scale."""
        data = json.loads(await scale_tools["fretboard_list_scales"]())

        assert data["status"] == "success"
        assert data["count"] == 22
        assert {"id": "dorian", "intervals": [0, 2, 3, 5, 7, 9, 10]} in data["scales"]
