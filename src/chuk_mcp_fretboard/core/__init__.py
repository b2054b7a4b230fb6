"""
Core music theory - the pure, synchronous layer.

These are the invariants everything else composes on:
- PitchClass and note-name helpers (mod-12 arithmetic, enharmonic spelling)
- Quality resolver: chord suffixes and scale names to canonical tokens
- ChordQuality / Chord / ScaleType and the formula tables
- Chord analysis: formulas, interval names, roman numerals, scale notes
"""

from chuk_mcp_fretboard.core.analysis import (
    ChordAnalysis,
    analyze_chord,
    chord_formula,
    compatible_scales,
    interval_names,
    roman_numeral,
    scale_degree,
    scale_notes,
)
from chuk_mcp_fretboard.core.chord import Chord, ChordQuality
from chuk_mcp_fretboard.core.formulas import (
    CHORD_FORMULAS,
    CHORD_QUALITIES,
    QUALITY_FAMILIES,
    SCALE_FORMULAS,
    SCALE_TYPES,
    build_chord,
    chord_from_name,
    chord_pitch_classes,
    chord_quality,
    family_substitutes,
    quality_family,
    scale_pitch_classes,
    scale_type,
)
from chuk_mcp_fretboard.core.pitch import (
    PitchClass,
    are_enharmonic,
    display_name,
    is_note_name,
    key_accidental,
    normalize_root,
    note_to_value,
    semitone_distance,
    transpose_note,
    value_to_name,
)
from chuk_mcp_fretboard.core.quality import (
    CANONICAL_CHORD_QUALITIES,
    CANONICAL_SCALES,
    ParsedChord,
    QualityResolution,
    ScaleResolution,
    display_chord_name,
    parse_chord_name,
    resolve_chord_quality,
    resolve_scale_name,
    split_scale_name,
)
from chuk_mcp_fretboard.core.scale import ScaleType

__all__ = [
    # Pitch
    "PitchClass",
    "are_enharmonic",
    "display_name",
    "is_note_name",
    "key_accidental",
    "normalize_root",
    "note_to_value",
    "semitone_distance",
    "transpose_note",
    "value_to_name",
    # Quality resolver
    "CANONICAL_CHORD_QUALITIES",
    "CANONICAL_SCALES",
    "ParsedChord",
    "QualityResolution",
    "ScaleResolution",
    "display_chord_name",
    "parse_chord_name",
    "resolve_chord_quality",
    "resolve_scale_name",
    "split_scale_name",
    # Formulas
    "CHORD_FORMULAS",
    "CHORD_QUALITIES",
    "QUALITY_FAMILIES",
    "SCALE_FORMULAS",
    "SCALE_TYPES",
    "build_chord",
    "chord_from_name",
    "chord_pitch_classes",
    "chord_quality",
    "family_substitutes",
    "quality_family",
    "scale_pitch_classes",
    "scale_type",
    # Chords and scales
    "Chord",
    "ChordQuality",
    "ScaleType",
    # Analysis
    "ChordAnalysis",
    "analyze_chord",
    "chord_formula",
    "compatible_scales",
    "interval_names",
    "roman_numeral",
    "scale_degree",
    "scale_notes",
]
