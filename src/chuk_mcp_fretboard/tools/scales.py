"""
Scale tools - MCP tools for scale fingerings.

Tools for laying a scale out on the neck, counting its positions,
spelling its notes, and listing the scales the engine knows.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from chuk_mcp_fretboard.constants import ErrorMessages
from chuk_mcp_fretboard.core.formulas import SCALE_FORMULAS, scale_type
from chuk_mcp_fretboard.core.pitch import display_name
from chuk_mcp_fretboard.engine import FretboardEngine
from chuk_mcp_fretboard.scales.generator import fingering_layout

if TYPE_CHECKING:
    from chuk_mcp_server import ChukMCPServer

logger = logging.getLogger(__name__)


def register_scale_tools(
    mcp: ChukMCPServer,
    engine: FretboardEngine,
) -> dict[str, Any]:
    """
    Register scale fingering tools with the MCP server.

    Args:
        mcp: The MCP server instance
        engine: The fretboard engine

    Returns:
        Dictionary of registered tool functions
    """
    tools: dict[str, Any] = {}

    @mcp.tool  # type: ignore[arg-type]
    async def fretboard_scale_fingering(
        scale_name: str,
        root: str | None = None,
        position: int = 0,
    ) -> str:
        """
        Get one hand position of a scale on the fretboard.

        Position indices past the last position clamp to it; symmetric
        scales (whole tone, diminished) wrap because their pattern repeats.

        Args:
            scale_name: Scale descriptor, e.g. "Dorian", "A minor pentatonic"
            root: Root note; taken from the scale name when omitted
            position: Zero-based position index

        Returns:
            JSON string with absolute frets per string, low E to high E

        Example:
            fretboard_scale_fingering(scale_name="E Phrygian", position=2)
        """
        try:
            selection = engine.select_scale(scale_name, root)
            fingering = engine.resolve_scale_fingering(scale_name, root, position)
            check = engine.scale_validator.validate(fingering)

            warnings = []
            if not selection.recognized:
                warnings.append(
                    ErrorMessages.UNRECOGNIZED_SCALE.format(
                        name=scale_name, fallback=f"{selection.root} {selection.scale_id}"
                    )
                )

            return json.dumps(
                {
                    "status": "success",
                    "scale": fingering.scale_id,
                    "root": display_name(fingering.root, root or scale_name),
                    "position": fingering.position,
                    "label": fingering.label,
                    "frets": [list(f) for f in fingering.frets],
                    "fret_range": [fingering.lowest_fret, fingering.highest_fret],
                    "note_count": fingering.note_count,
                    "valid": check.valid,
                    "warnings": warnings,
                }
            )
        except Exception as e:
            logger.exception(f"Failed to build fingering for {scale_name}")
            return json.dumps({"status": "error", "message": str(e)})

    tools["fretboard_scale_fingering"] = fretboard_scale_fingering

    @mcp.tool  # type: ignore[arg-type]
    async def fretboard_scale_positions(scale_name: str) -> str:
        """
        Count the distinct positions of a scale.

        Args:
            scale_name: Scale descriptor, e.g. "whole tone"

        Returns:
            JSON string with the position count and layout

        Example:
            fretboard_scale_positions(scale_name="minor pentatonic")
        """
        try:
            selection = engine.select_scale(scale_name)
            scale = scale_type(selection.scale_id)

            return json.dumps(
                {
                    "status": "success",
                    "scale": selection.scale_id,
                    "positions": engine.available_positions(scale_name),
                    "layout": fingering_layout(scale).value,
                    "symmetric": scale.is_symmetric,
                }
            )
        except Exception as e:
            logger.exception(f"Failed to count positions for {scale_name}")
            return json.dumps({"status": "error", "message": str(e)})

    tools["fretboard_scale_positions"] = fretboard_scale_positions

    @mcp.tool  # type: ignore[arg-type]
    async def fretboard_scale_notes(scale_name: str, root: str | None = None) -> str:
        """
        Spell out the notes of a scale.

        Args:
            scale_name: Scale descriptor, e.g. "G Dorian"
            root: Root note; taken from the scale name when omitted

        Returns:
            JSON string with note names from the root upward and the
            scale's interval formula

        Example:
            fretboard_scale_notes(scale_name="Bb major")
        """
        try:
            selection = engine.select_scale(scale_name, root)
            notes = engine.scale_notes(scale_name, root)

            warnings = []
            if not selection.recognized:
                warnings.append(
                    ErrorMessages.UNRECOGNIZED_SCALE.format(
                        name=scale_name, fallback=f"{selection.root} {selection.scale_id}"
                    )
                )

            return json.dumps(
                {
                    "status": "success",
                    "scale": selection.scale_id,
                    "root": notes[0],
                    "notes": notes,
                    "intervals": list(scale_type(selection.scale_id).intervals),
                    "warnings": warnings,
                }
            )
        except Exception as e:
            logger.exception(f"Failed to spell scale {scale_name}")
            return json.dumps({"status": "error", "message": str(e)})

    tools["fretboard_scale_notes"] = fretboard_scale_notes

    @mcp.tool  # type: ignore[arg-type]
    async def fretboard_list_scales() -> str:
        """
        List the scales the engine can finger.

        Returns:
            JSON string with scale ids and their interval formulas

        Example:
            fretboard_list_scales()
        """
        try:
            return json.dumps(
                {
                    "status": "success",
                    "scales": [
                        {"id": scale_id, "intervals": list(intervals)}
                        for scale_id, intervals in SCALE_FORMULAS.items()
                    ],
                    "count": len(SCALE_FORMULAS),
                }
            )
        except Exception as e:
            logger.exception("Failed to list scales")
            return json.dumps({"status": "error", "message": str(e)})

    tools["fretboard_list_scales"] = fretboard_list_scales

    return tools
