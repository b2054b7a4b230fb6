"""
Data models - pydantic schemas for voicings, fingerings and results.

All models are frozen; nothing in the engine mutates them after creation.
"""

from chuk_mcp_fretboard.models.fingering import ScaleFingering
from chuk_mcp_fretboard.models.voicing import ChordVoicing, VoicingResolution

__all__ = [
    "ChordVoicing",
    "ScaleFingering",
    "VoicingResolution",
]
