"""
Scale primitives - ScaleType.

Scales are interval sets from a root, always within one octave.
Symmetric scales (whole tone, diminished) map onto themselves under a
transposition smaller than an octave; that period decides how many
distinct fingering positions they have.
"""

from __future__ import annotations

from dataclasses import dataclass

from .pitch import PitchClass


@dataclass(frozen=True)
class ScaleType:
    """
    A scale defined by its cumulative intervals from the root.

    A major scale is (0, 2, 4, 5, 7, 9, 11).

    Immutable and hashable.
    """

    name: str
    intervals: tuple[int, ...]

    def __post_init__(self) -> None:
        if not self.intervals or self.intervals[0] != 0:
            raise ValueError(f"Scale formula must start at the root (0): {self.name}")
        if any(b <= a for a, b in zip(self.intervals, self.intervals[1:])):
            raise ValueError(f"Scale formula must be strictly increasing: {self.name}")
        if self.intervals[-1] > 11:
            raise ValueError(f"Scale formula must stay within one octave: {self.name}")

    @property
    def size(self) -> int:
        """Number of distinct notes in the scale."""
        return len(self.intervals)

    @property
    def symmetry_period(self) -> int:
        """
        Smallest transposition (in semitones) that maps the scale onto itself.

        12 for ordinary scales, 2 for whole tone, 3 for diminished.
        """
        notes = frozenset(self.intervals)
        for shift in range(1, 12):
            if frozenset((n + shift) % 12 for n in notes) == notes:
                return shift
        return 12

    @property
    def is_symmetric(self) -> bool:
        """Whether the scale repeats within the octave."""
        return self.symmetry_period < 12

    def pitch_classes(self, root: PitchClass) -> frozenset[int]:
        """Get the scale's pitch class values from a root."""
        return frozenset((root.value + interval) % 12 for interval in self.intervals)

    def get_pitches(self, root: PitchClass) -> list[PitchClass]:
        """Get the scale's pitch classes in ascending order from the root."""
        return [root.transpose(interval) for interval in self.intervals]

    def __str__(self) -> str:
        return self.name
