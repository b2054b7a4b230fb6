"""
Voicing resolver - turns a chord name into playable voicings.

Resolution is an ordered chain, stopping at the first tier that yields a
valid voicing:

1. Exact: the root's own voicings for the quality
2. Transposed: movable shapes of the same quality from another root
3. Quality family: a simpler (or richer) quality from the same family
4. Last resort: the root's major-triad shapes

Every tier filters through the validator against the requested chord, so
no tier can return a shape with a note outside the chord. If all tiers
come up empty the result is tagged EXHAUSTED.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

import yaml

from chuk_mcp_fretboard.constants import (
    HAND_SPAN,
    MAX_ANCHOR_FRET,
    MAX_FRET,
    MIN_ANCHOR_FRET,
    MIN_SOUNDING_STRINGS,
    TRANSPOSITION_SOURCE_ROOTS,
    ResolutionSource,
)
from chuk_mcp_fretboard.core.chord import Chord
from chuk_mcp_fretboard.core.formulas import build_chord, family_substitutes
from chuk_mcp_fretboard.core.pitch import semitone_distance, value_to_name
from chuk_mcp_fretboard.core.quality import ParsedChord, parse_chord_name
from chuk_mcp_fretboard.models.voicing import ChordVoicing, VoicingResolution
from chuk_mcp_fretboard.voicings.loader import Partition, VoicingLoader
from chuk_mcp_fretboard.voicings.validator import VoicingValidator, lowest_pitch_class

logger = logging.getLogger(__name__)

TRANSPOSED_SUFFIX = " (transposed)"


def transpose_voicing(voicing: ChordVoicing, semitones: int) -> ChordVoicing | None:
    """
    Slide a movable shape along the neck.

    The anchor moves by ``semitones``; if that lands outside the reachable
    range, it is folded by octaves (same pitch classes) into range.

    Args:
        voicing: The shape to move
        semitones: Distance to move (may be negative)

    Returns:
        The moved shape, or None if the shape is not movable or cannot fit
    """
    if not voicing.is_movable or voicing.first_fret is None:
        return None

    reach = max((f for f in voicing.frets if f is not None), default=1)
    target = voicing.first_fret + semitones
    for anchor in (target, target - 12, target + 12, target - 24, target + 24):
        if MIN_ANCHOR_FRET <= anchor <= MAX_ANCHOR_FRET and anchor + reach - 1 <= MAX_FRET:
            label = voicing.position or "Movable"
            if not label.endswith(TRANSPOSED_SUFFIX) and semitones % 12:
                label += TRANSPOSED_SUFFIX
            return voicing.model_copy(update={"first_fret": anchor, "position": label})
    return None


def nearest_offset(from_root: str, to_root: str) -> int:
    """Signed semitone offset in (-6, 6] between two roots."""
    distance = semitone_distance(from_root, to_root)
    return distance - 12 if distance > 6 else distance


def dedupe_voicings(voicings: Iterable[ChordVoicing]) -> list[ChordVoicing]:
    """Drop repeated physical shapes, keeping the first occurrence."""
    seen: set[tuple[int | None, ...]] = set()
    unique: list[ChordVoicing] = []
    for voicing in voicings:
        if voicing.shape_key not in seen:
            seen.add(voicing.shape_key)
            unique.append(voicing)
    return unique


def _rebuild(voicing: ChordVoicing, absolute: list[int | None], label: str) -> ChordVoicing:
    """Build a shape from absolute frets, keeping the source's encoding."""
    if voicing.first_fret is None or voicing.first_fret == 1:
        return ChordVoicing(frets=tuple(absolute), first_fret=voicing.first_fret, position=label)
    fretted = [f for f in absolute if f is not None]
    anchor = min([voicing.first_fret, *fretted])
    relative = tuple(None if f is None else f - anchor + 1 for f in absolute)
    return ChordVoicing(frets=relative, first_fret=anchor, position=label)


def add_bass_note(
    voicing: ChordVoicing,
    bass: int,
    tuning: tuple[int, ...],
) -> ChordVoicing | None:
    """
    Add a bass note on a muted string below the shape, within hand reach.

    Returns:
        The extended shape, or None if no lower string can reach the bass
    """
    lowest = voicing.lowest_sounding_string()
    if not lowest:
        return None

    absolute = list(voicing.absolute_frets())
    fretted = [f for f in absolute if f]
    if fretted:
        low = max(0, max(fretted) - (HAND_SPAN - 1))
        high = min(fretted) + (HAND_SPAN - 1)
    else:
        low, high = 0, HAND_SPAN - 1
    allow_open = voicing.first_fret is None or voicing.first_fret == 1

    for string in range(lowest - 1, -1, -1):
        for fret in range(low, min(high, MAX_FRET) + 1):
            if fret == 0 and not allow_open:
                continue
            if (tuning[string] + fret) % 12 == bass:
                absolute[string] = fret
                label = f"{voicing.position or 'Shape'} (bass {value_to_name(bass)})"
                return _rebuild(voicing, absolute, label)
    return None


def mute_to_bass(
    voicing: ChordVoicing,
    bass: int,
    tuning: tuple[int, ...],
) -> ChordVoicing | None:
    """
    Mute low strings until the bass note is the lowest sounding note.

    Returns:
        The trimmed shape, or None if fewer than MIN_SOUNDING_STRINGS remain
    """
    absolute = list(voicing.absolute_frets())
    sounding = voicing.sounding_strings()
    for index, string in enumerate(sounding):
        fret = absolute[string]
        if fret is not None and (tuning[string] + fret) % 12 == bass:
            if len(sounding) - index < MIN_SOUNDING_STRINGS:
                return None
            trimmed = [None if i < string else f for i, f in enumerate(absolute)]
            label = f"{voicing.position or 'Shape'} (bass {value_to_name(bass)})"
            return _rebuild(voicing, trimmed, label)
    return None


class VoicingResolver:
    """
    Resolves chord names to validated voicings through the fallback chain.

    Never raises for malformed input: unknown names resolve to a major
    triad and are flagged in the result.
    """

    def __init__(
        self,
        loader: VoicingLoader,
        validator: VoicingValidator | None = None,
        source_roots: tuple[str, ...] = TRANSPOSITION_SOURCE_ROOTS,
    ):
        """
        Initialize the resolver.

        Args:
            loader: Source of voicing partitions
            validator: Voicing validator (default thresholds if omitted)
            source_roots: Roots tried, in order, by the transposition fallback
        """
        self.loader = loader
        self.validator = validator or VoicingValidator()
        self.source_roots = source_roots

    async def resolve(self, chord_name: str) -> VoicingResolution:
        """
        Resolve a chord name to voicings, recording which tier produced them.

        Args:
            chord_name: Any chord name, e.g. 'C#maj7/E', 'Dbm7', 'G7(b9)'

        Returns:
            VoicingResolution with the voicings and diagnostics
        """
        parsed = parse_chord_name(chord_name)
        chord = build_chord(parsed)

        def result(
            source: ResolutionSource,
            voicings: list[ChordVoicing],
            source_root: str | None = None,
            substituted_quality: str | None = None,
        ) -> VoicingResolution:
            return VoicingResolution(
                chord_name=chord_name if isinstance(chord_name, str) else "",
                root=parsed.root,
                quality=parsed.quality,
                bass=parsed.bass,
                recognized=parsed.recognized,
                source=source,
                source_root=source_root,
                substituted_quality=substituted_quality,
                voicings=tuple(self._arrange_for_bass(voicings, chord)),
            )

        partition = await self._partition(parsed.root)

        exact = self._valid(partition.get(parsed.key, ()), chord)
        if exact:
            return result(ResolutionSource.EXACT, exact)

        source_root, transposed = await self._transposed(parsed, chord)
        if transposed:
            logger.debug(f"Resolved {chord_name} by transposing from {source_root}")
            return result(ResolutionSource.TRANSPOSED, transposed, source_root=source_root)

        for substitute in family_substitutes(parsed.quality):
            candidates = self._valid(partition.get((parsed.root, substitute), ()), chord)
            if candidates:
                logger.warning(f"No voicings for {chord_name}, substituting {substitute}")
                return result(
                    ResolutionSource.QUALITY_FAMILY,
                    candidates,
                    substituted_quality=substitute,
                )

        major = self._valid(partition.get((parsed.root, "major"), ()), chord)
        if major:
            logger.warning(f"No voicings for {chord_name}, falling back to major triad")
            return result(ResolutionSource.LAST_RESORT, major, substituted_quality="major")

        logger.warning(f"All fallbacks exhausted for {chord_name}")
        return result(ResolutionSource.EXHAUSTED, [])

    async def resolve_voicings(self, chord_name: str) -> list[ChordVoicing]:
        """Resolve a chord name to just its list of voicings."""
        resolution = await self.resolve(chord_name)
        return list(resolution.voicings)

    async def _partition(self, root: str) -> Partition:
        """Load a partition, treating read failures as an empty partition."""
        try:
            return await self.loader.load_partition(root)
        except (OSError, yaml.YAMLError):
            logger.exception(f"Failed to load voicings for {root}")
            return {}

    async def _transposed(
        self,
        parsed: ParsedChord,
        chord: Chord,
    ) -> tuple[str | None, list[ChordVoicing]]:
        """Try each source root in order; return the first that transposes cleanly."""
        for source_root in self.source_roots:
            if source_root == parsed.root:
                continue
            partition = await self._partition(source_root)
            shapes = partition.get((source_root, parsed.quality), ())
            if not shapes:
                continue

            offset = nearest_offset(source_root, parsed.root)
            moved = [transpose_voicing(v, offset) for v in shapes]
            valid = self._valid([v for v in moved if v is not None], chord)
            if valid:
                return source_root, valid
        return None, []

    def _valid(self, voicings: Iterable[ChordVoicing], chord: Chord) -> list[ChordVoicing]:
        return dedupe_voicings(self.validator.filter_valid(voicings, chord))

    def _arrange_for_bass(self, voicings: list[ChordVoicing], chord: Chord) -> list[ChordVoicing]:
        """
        Put a slash chord's bass note at the bottom of each shape.

        Shapes already built on the bass are kept; others get the bass added
        below or their low strings muted. If nothing can be arranged, the
        voicings are returned unchanged.
        """
        if chord.bass is None or not voicings:
            return voicings

        bass = chord.bass.value
        tuning = self.validator.tuning
        arranged: list[ChordVoicing] = []
        for voicing in voicings:
            if lowest_pitch_class(voicing, tuning) == bass:
                arranged.append(voicing)
                continue
            for candidate in (
                add_bass_note(voicing, bass, tuning),
                mute_to_bass(voicing, bass, tuning),
            ):
                if candidate is not None and self.validator.is_valid(candidate, chord):
                    arranged.append(candidate)
                    break

        return dedupe_voicings(arranged) or voicings
