"""
Fretboard engine - the public entry point for chords and scales.

Wires the loader, resolver, validators and fingering generator together
behind a handful of calls:

    engine = FretboardEngine()
    voicings = await engine.resolve_chord_voicings("C#maj7/E")
    fingering = engine.resolve_scale_fingering("D Dorian", position=2)

Nothing here raises for malformed chord or scale names; unknown input
degrades to a default and is flagged on the result.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from chuk_mcp_fretboard.constants import KeyAccidental
from chuk_mcp_fretboard.core.analysis import ChordAnalysis, analyze_chord, scale_notes
from chuk_mcp_fretboard.core.formulas import build_chord, scale_type
from chuk_mcp_fretboard.core.pitch import PitchClass, key_accidental, normalize_root
from chuk_mcp_fretboard.core.quality import (
    ParsedChord,
    parse_chord_name,
    resolve_scale_name,
    split_scale_name,
)
from chuk_mcp_fretboard.models.fingering import ScaleFingering
from chuk_mcp_fretboard.models.voicing import ChordVoicing, VoicingResolution
from chuk_mcp_fretboard.scales.generator import ScaleFingeringGenerator
from chuk_mcp_fretboard.scales.validator import ScaleFingeringValidator
from chuk_mcp_fretboard.voicings.loader import VoicingLoader
from chuk_mcp_fretboard.voicings.resolver import VoicingResolver
from chuk_mcp_fretboard.voicings.validator import VoicingValidator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScaleSelection:
    """A scale name and root resolved to canonical form."""

    scale_id: str
    root: str
    recognized: bool


class FretboardEngine:
    """
    Resolves chord names to voicings and scale names to fingerings.

    Every collaborator can be injected; defaults use the built-in corpus
    and standard tuning.
    """

    def __init__(
        self,
        loader: VoicingLoader | None = None,
        validator: VoicingValidator | None = None,
        generator: ScaleFingeringGenerator | None = None,
        scale_validator: ScaleFingeringValidator | None = None,
        project_path: Path | None = None,
    ):
        """
        Initialize the engine.

        Args:
            loader: Voicing loader (built-in library if omitted)
            validator: Chord voicing validator
            generator: Scale fingering generator
            scale_validator: Scale fingering validator
            project_path: Project voicings directory, used when no loader is given
        """
        self.loader = loader or VoicingLoader(project_path=project_path)
        self.validator = validator or VoicingValidator()
        self.resolver = VoicingResolver(self.loader, self.validator)
        self.generator = generator or ScaleFingeringGenerator()
        self.scale_validator = scale_validator or ScaleFingeringValidator()

    # Chords

    async def resolve_chord(self, chord_name: str) -> VoicingResolution:
        """Resolve a chord name, keeping the fallback diagnostics."""
        return await self.resolver.resolve(chord_name)

    async def resolve_chord_voicings(self, chord_name: str) -> list[ChordVoicing]:
        """Resolve a chord name to its voicings."""
        return await self.resolver.resolve_voicings(chord_name)

    def chord_tones(self, chord_name: str, key: str | None = None) -> dict[str, Any]:
        """
        Spell out the notes of a chord.

        Args:
            chord_name: Any chord name
            key: Optional key context for spelling ('Bb' spells flats)

        Returns:
            Dict with the canonical parts, note names and pitch classes
        """
        parsed = parse_chord_name(chord_name)
        chord = build_chord(parsed)
        prefer_flats = _prefer_flats(parsed, key)

        return {
            "chord": chord.name,
            "root": chord.root.spell(prefer_flats),
            "quality": parsed.quality,
            "bass": chord.bass.spell(prefer_flats) if chord.bass is not None else None,
            "notes": [p.spell(prefer_flats) for p in chord.get_pitches()],
            "pitch_classes": sorted(chord.pitch_classes()),
            "recognized": parsed.recognized,
        }

    def analyze_chord(self, chord_name: str, key: str | None = None) -> ChordAnalysis:
        """
        Analyze a chord: formula, interval names and compatible scales.

        With a key, the chord's degree and roman numeral are filled in
        and its notes are spelled for that key.

        Args:
            chord_name: Any chord name
            key: Optional key, e.g. 'C', 'Bb' or 'F# minor'

        Returns:
            ChordAnalysis
        """
        parsed = parse_chord_name(chord_name)
        chord = build_chord(parsed)
        tonic = PitchClass.parse(parse_chord_name(key).root) if key else None
        return analyze_chord(chord, tonic, _prefer_flats(parsed, key), key)

    # Scales

    def select_scale(self, scale_name: str, root: str | None = None) -> ScaleSelection:
        """
        Resolve a scale name and root.

        An explicit root wins over one embedded in the name ('C Aeolian');
        with neither, the root is C.
        """
        name_root, _ = split_scale_name(scale_name or "")
        resolution = resolve_scale_name(scale_name or "")
        chosen = root or name_root or "C"
        return ScaleSelection(resolution.scale_id, normalize_root(chosen), resolution.recognized)

    def resolve_scale_fingering(
        self,
        scale_name: str,
        root: str | None = None,
        position: int = 0,
    ) -> ScaleFingering:
        """
        Get one position of a scale, validated against its formula.

        Args:
            scale_name: Any scale descriptor, e.g. 'Dorian' or 'A minor pentatonic'
            root: Root note; taken from the name when omitted
            position: Zero-based position index (clamped or wrapped)

        Returns:
            The ScaleFingering
        """
        selection = self.select_scale(scale_name, root)
        fingering = self.generator.fingering(selection.scale_id, selection.root, position)

        check = self.scale_validator.validate(fingering)
        if not check.valid:
            logger.warning(
                f"{selection.root} {selection.scale_id} {fingering.label} failed validation: "
                f"extra={sorted(check.extra)} coverage={check.coverage:.2f}"
            )
        return fingering

    def scale_notes(self, scale_name: str, root: str | None = None) -> list[str]:
        """
        Spell a scale's notes.

        The root is spelled as written; other notes follow the key
        signature of the root, read as minor when the scale has a minor
        third ('G Dorian' spells Bb).
        """
        selection = self.select_scale(scale_name, root)
        scale = scale_type(selection.scale_id)
        tonic = _root_spelling(scale_name, root)
        if 3 in scale.intervals and 4 not in scale.intervals:
            tonic += " minor"
        return scale_notes(PitchClass.parse(selection.root), selection.scale_id, tonic)

    def available_positions(self, scale_name: str) -> int:
        """Number of distinct positions for a scale name."""
        return self.generator.available_positions(self.select_scale(scale_name).scale_id)


def _prefer_flats(parsed: ParsedChord, key: str | None) -> bool:
    """Spell with flats in a flat key, or, with no key, when the name does."""
    if key:
        return key_accidental(key) is KeyAccidental.FLAT
    name = parsed.original.strip()
    return len(name) > 1 and name[1] in "b♭"


def _root_spelling(scale_name: str, root: str | None) -> str:
    """The scale root as the caller wrote it, defaulting to C."""
    if root:
        return root.strip()
    name_root, _ = split_scale_name(scale_name or "")
    if name_root:
        return scale_name.strip().split()[0]
    return "C"


_default_engine: FretboardEngine | None = None


def get_engine() -> FretboardEngine:
    """Get the shared default engine, creating it on first use."""
    global _default_engine
    if _default_engine is None:
        _default_engine = FretboardEngine()
    return _default_engine


async def resolve_chord_voicings(chord_name: str) -> list[ChordVoicing]:
    """Resolve a chord name with the default engine."""
    return await get_engine().resolve_chord_voicings(chord_name)


def resolve_scale_fingering(
    scale_name: str,
    root: str | None = None,
    position: int = 0,
) -> ScaleFingering:
    """Get a scale position with the default engine."""
    return get_engine().resolve_scale_fingering(scale_name, root, position)


def available_positions(scale_name: str) -> int:
    """Number of distinct positions for a scale name."""
    return get_engine().available_positions(scale_name)
