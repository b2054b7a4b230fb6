"""
Chord voicing system - corpus loading, validation and resolution.

Voicings are pre-authored shapes, one YAML partition per root, loaded
lazily. The resolver fills gaps in the corpus by transposing movable
shapes and by substituting related qualities.
"""

from chuk_mcp_fretboard.voicings.loader import VoicingLoader, partition_filename
from chuk_mcp_fretboard.voicings.resolver import (
    VoicingResolver,
    add_bass_note,
    dedupe_voicings,
    mute_to_bass,
    nearest_offset,
    transpose_voicing,
)
from chuk_mcp_fretboard.voicings.validator import (
    VoicingValidation,
    VoicingValidator,
    extract_pitch_classes,
    is_valid,
    lowest_pitch_class,
)

__all__ = [
    "VoicingLoader",
    "VoicingResolver",
    "VoicingValidation",
    "VoicingValidator",
    "add_bass_note",
    "dedupe_voicings",
    "extract_pitch_classes",
    "is_valid",
    "lowest_pitch_class",
    "mute_to_bass",
    "nearest_offset",
    "partition_filename",
    "transpose_voicing",
]
