"""
Scale fingering generator - lays a scale out as hand positions on the neck.

Layouts:
- 7-note scales (and larger): three notes per string, one position per
  scale degree, CAGED-style
- Pentatonic and blues: two notes per string ("boxes")
- Symmetric scales (whole tone, diminished): fixed 4-fret windows; the
  pattern repeats every period, so only `period` positions are distinct

Every fret used belongs to the scale, so a generated fingering never
contains a wrong note.
"""

from __future__ import annotations

import logging

from chuk_mcp_fretboard.constants import (
    MAX_FRET,
    MAX_SCALE_POSITIONS,
    NUM_STRINGS,
    SCALE_WINDOW_SPAN,
    STANDARD_TUNING_MIDI,
    FingeringLayout,
)
from chuk_mcp_fretboard.core.formulas import scale_type
from chuk_mcp_fretboard.core.pitch import PitchClass, normalize_root
from chuk_mcp_fretboard.core.scale import ScaleType
from chuk_mcp_fretboard.models.fingering import ScaleFingering

logger = logging.getLogger(__name__)

StringFrets = tuple[tuple[int, ...], ...]


def fingering_layout(scale: ScaleType) -> FingeringLayout:
    """Pick the layout a scale is fingered with."""
    if scale.is_symmetric:
        return FingeringLayout.WINDOW
    if scale.size < 7:
        return FingeringLayout.TWO_PER_STRING
    return FingeringLayout.THREE_PER_STRING


def position_count(scale: ScaleType) -> int:
    """Number of distinct positions a scale has."""
    if scale.is_symmetric:
        return scale.symmetry_period
    return min(scale.size, MAX_SCALE_POSITIONS)


def _shift_octave(frets: list[list[int]]) -> list[list[int]]:
    """Move a position up or down an octave so it sits on the neck."""
    flat = [f for string_frets in frets for f in string_frets]
    if not flat:
        return frets
    if min(flat) < 0:
        frets = [[f + 12 for f in string_frets] for string_frets in frets]
    elif max(flat) > MAX_FRET and min(flat) >= 12:
        frets = [[f - 12 for f in string_frets] for string_frets in frets]
    return [[f for f in string_frets if 0 <= f <= MAX_FRET] for string_frets in frets]


class ScaleFingeringGenerator:
    """
    Generates scale fingerings for a tuning.

    Positions are computed once per (scale, root) and memoized.
    """

    def __init__(self, tuning_midi: tuple[int, ...] = STANDARD_TUNING_MIDI):
        """
        Initialize the generator.

        Args:
            tuning_midi: Open-string MIDI notes, low string first
        """
        if len(tuning_midi) != NUM_STRINGS:
            raise ValueError(f"Tuning needs {NUM_STRINGS} strings, got {len(tuning_midi)}")
        self.tuning_midi = tuning_midi
        self._cache: dict[tuple[str, str], tuple[ScaleFingering, ...]] = {}

    def fingering(self, scale_id: str, root: str, position: int = 0) -> ScaleFingering:
        """
        Get one position of a scale.

        Out-of-range indices never raise: symmetric scales wrap (their
        pattern repeats), others clamp to the last position. Negative
        indices clamp to the first.

        Args:
            scale_id: Canonical scale id, e.g. 'dorian'
            root: Root note in any spelling
            position: Zero-based position index

        Returns:
            The ScaleFingering for that position
        """
        positions = self.positions(scale_id, root)
        index = max(0, position)
        if scale_type(scale_id).is_symmetric:
            index %= len(positions)
        else:
            index = min(index, len(positions) - 1)
        return positions[index]

    def positions(self, scale_id: str, root: str) -> tuple[ScaleFingering, ...]:
        """Get every distinct position of a scale, lowest on the neck first."""
        scale = scale_type(scale_id)
        key = (scale.name, normalize_root(root))

        cached = self._cache.get(key)
        if cached is not None:
            return cached

        root_pc = PitchClass.parse(key[1])
        layout = fingering_layout(scale)
        if layout is FingeringLayout.WINDOW:
            shapes = self._window_positions(scale, root_pc)
        else:
            per_string = 2 if layout is FingeringLayout.TWO_PER_STRING else 3
            shapes = self._nps_positions(scale, root_pc, per_string)

        prefix = "Box" if layout is FingeringLayout.TWO_PER_STRING else "Position"
        fingerings = tuple(
            ScaleFingering(
                scale_id=scale.name,
                root=key[1],
                position=i,
                label=f"{prefix} {i + 1}",
                frets=frets,
            )
            for i, frets in enumerate(shapes)
        )
        logger.debug(f"Generated {len(fingerings)} {layout.value} positions for {key[1]} {scale.name}")
        self._cache[key] = fingerings
        return fingerings

    def available_positions(self, scale_id: str) -> int:
        """Number of distinct positions for a scale (independent of root)."""
        return position_count(scale_type(scale_id))

    def clear_cache(self) -> None:
        """Drop memoized positions."""
        self._cache.clear()

    def _nps_positions(
        self,
        scale: ScaleType,
        root: PitchClass,
        per_string: int,
    ) -> list[StringFrets]:
        """
        Build notes-per-string positions, one per starting scale degree.

        Each position starts on a scale degree on the low string and walks
        the scale upward, taking ``per_string`` notes on each string.
        """
        notes = frozenset(scale.pitch_classes(root))
        low_open = self.tuning_midi[0]
        pitches = [p for p in range(low_open, low_open + 96) if p % 12 in notes]
        needed = per_string * NUM_STRINGS

        shapes: list[StringFrets] = []
        for interval in scale.intervals[: position_count(scale)]:
            start_fret = (root.value + interval - low_open) % 12
            start = pitches.index(low_open + start_fret)
            run = pitches[start : start + needed]

            frets = [
                [p - self.tuning_midi[s] for p in run[s * per_string : (s + 1) * per_string]]
                for s in range(NUM_STRINGS)
            ]
            shapes.append(tuple(tuple(f) for f in _shift_octave(frets)))

        shapes.sort(key=lambda shape: min(f for string_frets in shape for f in string_frets))
        return shapes

    def _window_positions(self, scale: ScaleType, root: PitchClass) -> list[StringFrets]:
        """Build fixed-window positions for a symmetric scale."""
        notes = frozenset(scale.pitch_classes(root))
        period = scale.symmetry_period
        anchor = ((root.value - self.tuning_midi[0]) % 12) % period

        shapes: list[StringFrets] = []
        for p in range(period):
            low = anchor + p
            window = range(low, low + SCALE_WINDOW_SPAN)
            shapes.append(
                tuple(
                    tuple(f for f in window if (open_note + f) % 12 in notes)
                    for open_note in self.tuning_midi
                )
            )
        return shapes


_default_generator: ScaleFingeringGenerator | None = None


def _get_default_generator() -> ScaleFingeringGenerator:
    global _default_generator
    if _default_generator is None:
        _default_generator = ScaleFingeringGenerator()
    return _default_generator


def fingering(scale_id: str, root: str, position: int = 0) -> ScaleFingering:
    """Get one position of a scale in standard tuning."""
    return _get_default_generator().fingering(scale_id, root, position)


def available_positions(scale_id: str) -> int:
    """Number of distinct positions for a scale."""
    return _get_default_generator().available_positions(scale_id)
