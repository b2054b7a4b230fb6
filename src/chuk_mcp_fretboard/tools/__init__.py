"""
MCP tool implementations.

Tools are organized by domain:
- chords - Voicing lookup, chord spelling, voicing checks, cache control
- scales - Scale fingerings and position counts
"""

from chuk_mcp_fretboard.tools.chords import register_chord_tools
from chuk_mcp_fretboard.tools.scales import register_scale_tools

__all__ = [
    "register_chord_tools",
    "register_scale_tools",
]
