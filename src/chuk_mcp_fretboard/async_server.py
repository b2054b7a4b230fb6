#!/usr/bin/env python3
"""
Async Fretboard MCP Server using chuk-mcp-server

This server provides MCP tools that turn chord and scale names into guitar
fretboard geometry. Voicings come from a YAML library shipped with the
package; drop files into ./voicings (or the directory named by
CHUK_FRETBOARD_VOICINGS_DIR) to override or extend it.

The server provides tools for:
- Resolving chord names to validated voicings, with fallbacks
- Spelling and analyzing chords, and checking hand-made shapes
- Laying scales out as hand positions across the neck and spelling them
- Warming and inspecting the voicing cache
"""

import logging
import os
from pathlib import Path

from chuk_mcp_server import ChukMCPServer

from chuk_mcp_fretboard.constants import VOICINGS_DIR_ENV
from chuk_mcp_fretboard.engine import FretboardEngine
from chuk_mcp_fretboard.tools import register_chord_tools, register_scale_tools
from chuk_mcp_fretboard.voicings import VoicingLoader

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Create the MCP server instance
mcp = ChukMCPServer("chuk-mcp-fretboard")

# Paths - use standard project structure unless overridden
BASE_PATH = Path.cwd()
env_path = os.environ.get(VOICINGS_DIR_ENV)
if env_path:
    VOICINGS_DIR = Path(env_path).expanduser()
else:
    VOICINGS_DIR = BASE_PATH / "voicings"
LIBRARY_PATH = Path(__file__).parent / "voicings" / "library"

# Create the engine
voicing_loader = VoicingLoader(
    library_path=LIBRARY_PATH,
    project_path=VOICINGS_DIR,
)
engine = FretboardEngine(loader=voicing_loader)

# Register all tools
chord_tools = register_chord_tools(mcp, engine)
scale_tools = register_scale_tools(mcp, engine)

# Export tool functions for direct access
fretboard_resolve_chord = chord_tools["fretboard_resolve_chord"]
fretboard_chord_tones = chord_tools["fretboard_chord_tones"]
fretboard_analyze_chord = chord_tools["fretboard_analyze_chord"]
fretboard_validate_voicing = chord_tools["fretboard_validate_voicing"]
fretboard_preload = chord_tools["fretboard_preload"]
fretboard_cache_stats = chord_tools["fretboard_cache_stats"]

fretboard_scale_fingering = scale_tools["fretboard_scale_fingering"]
fretboard_scale_positions = scale_tools["fretboard_scale_positions"]
fretboard_scale_notes = scale_tools["fretboard_scale_notes"]
fretboard_list_scales = scale_tools["fretboard_list_scales"]

logger.info("CHUK Fretboard MCP Server initialized")
logger.info(f"  Library path: {LIBRARY_PATH}")
logger.info(f"  Project voicings dir: {VOICINGS_DIR}")
