"""
Chord tools - MCP tools for chord voicing lookup and validation.

Tools for resolving chord names to fretboard voicings, spelling and
analyzing chords, checking a shape against a chord, and managing the
voicing cache.
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from chuk_mcp_fretboard.constants import COMMON_ROOTS, ErrorMessages, SuccessMessages
from chuk_mcp_fretboard.core.formulas import chord_from_name
from chuk_mcp_fretboard.core.quality import parse_chord_name
from chuk_mcp_fretboard.engine import FretboardEngine
from chuk_mcp_fretboard.models.voicing import ChordVoicing

if TYPE_CHECKING:
    from chuk_mcp_server import ChukMCPServer

logger = logging.getLogger(__name__)


def _voicing_dict(voicing: ChordVoicing) -> dict[str, Any]:
    return {
        "frets": ["x" if f is None else f for f in voicing.frets],
        "first_fret": voicing.first_fret,
        "position": voicing.position,
        "absolute_frets": ["x" if f is None else f for f in voicing.absolute_frets()],
        "shape": voicing.shape(),
        "movable": voicing.is_movable,
    }


def register_chord_tools(
    mcp: ChukMCPServer,
    engine: FretboardEngine,
) -> dict[str, Any]:
    """
    Register chord voicing tools with the MCP server.

    Args:
        mcp: The MCP server instance
        engine: The fretboard engine

    Returns:
        Dictionary of registered tool functions
    """
    tools: dict[str, Any] = {}

    @mcp.tool  # type: ignore[arg-type]
    async def fretboard_resolve_chord(chord_name: str) -> str:
        """
        Resolve a chord name to guitar voicings.

        Looks the chord up in the voicing library, falling back to
        transposed shapes, related qualities, or the major triad when no
        exact voicing exists. Every returned shape is checked against
        the chord's formula.

        Args:
            chord_name: Chord name, e.g. "C#maj7/E", "Dbm7", "G7(b9)", "Bø"

        Returns:
            JSON string with voicings (frets low E to high E) and the
            fallback tier that produced them

        Example:
            fretboard_resolve_chord(chord_name="Am7")
        """
        try:
            resolution = await engine.resolve_chord(chord_name)

            return json.dumps(
                {
                    "status": "success",
                    "chord": chord_name,
                    "root": resolution.root,
                    "quality": resolution.quality,
                    "bass": resolution.bass,
                    "source": resolution.source.value,
                    "source_root": resolution.source_root,
                    "substituted_quality": resolution.substituted_quality,
                    "voicings": [_voicing_dict(v) for v in resolution.voicings],
                    "count": len(resolution.voicings),
                    "warnings": resolution.warnings(),
                }
            )
        except Exception as e:
            logger.exception(f"Failed to resolve chord {chord_name}")
            return json.dumps({"status": "error", "message": str(e)})

    tools["fretboard_resolve_chord"] = fretboard_resolve_chord

    @mcp.tool  # type: ignore[arg-type]
    async def fretboard_chord_tones(chord_name: str, key: str | None = None) -> str:
        """
        Spell out the notes of a chord.

        Args:
            chord_name: Chord name, e.g. "Bbmaj7"
            key: Optional key context for note spelling, e.g. "F" or "Dm"

        Returns:
            JSON string with note names and pitch classes

        Example:
            fretboard_chord_tones(chord_name="F#m7b5")
        """
        try:
            tones = engine.chord_tones(chord_name, key)
            warnings = []
            if not tones["recognized"]:
                warnings.append(
                    ErrorMessages.UNRECOGNIZED_CHORD.format(
                        name=chord_name, fallback=f"{tones['root']} {tones['quality']}"
                    )
                )

            return json.dumps({"status": "success", **tones, "warnings": warnings})
        except Exception as e:
            logger.exception(f"Failed to spell chord {chord_name}")
            return json.dumps({"status": "error", "message": str(e)})

    tools["fretboard_chord_tones"] = fretboard_chord_tones

    @mcp.tool  # type: ignore[arg-type]
    async def fretboard_analyze_chord(chord_name: str, key: str | None = None) -> str:
        """
        Analyze a chord's structure and the scales that fit it.

        Args:
            chord_name: Chord name, e.g. "Dm7"
            key: Optional key for the chord's degree and roman numeral, e.g. "C"

        Returns:
            JSON string with the formula (1-♭3-5-♭7), interval names,
            notes, degree, numeral and compatible scales

        Example:
            fretboard_analyze_chord(chord_name="Bm7b5", key="C")
        """
        try:
            analysis = engine.analyze_chord(chord_name, key)
            warnings = []
            if not parse_chord_name(chord_name).recognized:
                warnings.append(
                    ErrorMessages.UNRECOGNIZED_CHORD.format(
                        name=chord_name, fallback=f"{analysis.root} {analysis.quality}"
                    )
                )

            return json.dumps(
                {
                    "status": "success",
                    **asdict(analysis),
                    "key": key,
                    "warnings": warnings,
                }
            )
        except Exception as e:
            logger.exception(f"Failed to analyze chord {chord_name}")
            return json.dumps({"status": "error", "message": str(e)})

    tools["fretboard_analyze_chord"] = fretboard_analyze_chord

    @mcp.tool  # type: ignore[arg-type]
    async def fretboard_validate_voicing(
        chord_name: str,
        frets: list[int | str | None],
        first_fret: int | None = None,
    ) -> str:
        """
        Check a fretted shape against a chord.

        A shape fails if it sounds any note outside the chord, or if it
        covers too few of the chord's notes.

        Args:
            chord_name: Chord to check against
            frets: Six frets, low E to high E; "x" or null for muted
            first_fret: Anchor fret if the frets are relative to it

        Returns:
            JSON string with the verdict and the note breakdown

        Example:
            fretboard_validate_voicing(chord_name="C", frets=["x", 3, 2, 0, 1, 0])
        """
        try:
            voicing = ChordVoicing(frets=frets, first_fret=first_fret)
        except ValidationError as e:
            return json.dumps(
                {"status": "error", "message": ErrorMessages.INVALID_VOICING.format(detail=e)}
            )

        try:
            chord = chord_from_name(chord_name)
            result = engine.validator.validate(voicing, chord)

            return json.dumps(
                {
                    "status": "success",
                    "chord": chord.name,
                    "valid": result.valid,
                    "shape": voicing.shape(),
                    "sounding": sorted(result.sounding),
                    "expected": sorted(result.expected),
                    "extra": sorted(result.extra),
                    "missing": sorted(result.missing),
                    "match_ratio": round(result.match_ratio, 3),
                    "coverage": round(result.coverage, 3),
                }
            )
        except Exception as e:
            logger.exception(f"Failed to validate voicing for {chord_name}")
            return json.dumps({"status": "error", "message": str(e)})

    tools["fretboard_validate_voicing"] = fretboard_validate_voicing

    @mcp.tool  # type: ignore[arg-type]
    async def fretboard_preload(roots: list[str] | None = None) -> str:
        """
        Start loading voicing partitions in the background.

        Args:
            roots: Roots to warm (defaults to C, G, D, A, E, F)

        Returns:
            JSON string with the roots scheduled

        Example:
            fretboard_preload(roots=["Bb", "Eb"])
        """
        try:
            tasks = engine.loader.preload(roots or COMMON_ROOTS)

            return json.dumps(
                {
                    "status": "success",
                    "scheduled": len(tasks),
                    "message": SuccessMessages.PRELOADED.format(count=len(tasks)),
                }
            )
        except Exception as e:
            logger.exception("Failed to preload voicings")
            return json.dumps({"status": "error", "message": str(e)})

    tools["fretboard_preload"] = fretboard_preload

    @mcp.tool  # type: ignore[arg-type]
    async def fretboard_cache_stats(clear: bool = False) -> str:
        """
        Report which voicing partitions are loaded.

        Args:
            clear: Drop every cached partition after reporting

        Returns:
            JSON string with cached and in-flight roots

        Example:
            fretboard_cache_stats()
        """
        try:
            stats = engine.loader.cache_stats()
            response: dict[str, Any] = {"status": "success", **stats}
            if clear:
                engine.loader.clear_cache()
                response["message"] = SuccessMessages.CACHE_CLEARED

            return json.dumps(response)
        except Exception as e:
            logger.exception("Failed to read cache stats")
            return json.dumps({"status": "error", "message": str(e)})

    tools["fretboard_cache_stats"] = fretboard_cache_stats

    return tools
