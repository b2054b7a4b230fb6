"""
Chord primitives - ChordQuality and Chord.

Chords are stacks of intervals. Chord qualities define the interval pattern,
measured in semitones from the root. Extensions (9th, 11th, 13th) keep their
compound values (14, 17, 21) and are reduced mod 12 only when compared
against sounding pitch classes.
"""

from __future__ import annotations

from dataclasses import dataclass

from .pitch import PitchClass


@dataclass(frozen=True)
class ChordQuality:
    """
    A chord quality defined by its intervals from the root.

    Intervals are measured from the root, not stacked.
    For example, a major triad is (0, 4, 7) and a dominant ninth is
    (0, 4, 7, 10, 14).

    Immutable and hashable.
    """

    name: str
    intervals: tuple[int, ...]

    def __post_init__(self) -> None:
        if not self.intervals or self.intervals[0] != 0:
            raise ValueError(f"Chord formula must start at the root (0): {self.name}")
        if any(b <= a for a, b in zip(self.intervals, self.intervals[1:])):
            raise ValueError(f"Chord formula must be strictly increasing: {self.name}")

    def pitch_classes(self, root: PitchClass) -> frozenset[int]:
        """
        Get the pitch classes of this quality built on a root.

        Args:
            root: The root pitch class

        Returns:
            Set of pitch class values (0-11)
        """
        return frozenset((root.value + interval) % 12 for interval in self.intervals)

    def get_pitches(self, root: PitchClass) -> list[PitchClass]:
        """Get the chord tones in formula order, duplicates (octaves) removed."""
        pitches: list[PitchClass] = []
        for interval in self.intervals:
            pitch = root.transpose(interval)
            if pitch not in pitches:
                pitches.append(pitch)
        return pitches

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Chord:
    """
    A concrete chord: root + quality, with an optional slash bass.

    The bass note counts as a chord tone, so 'C/Bb' accepts a Bb even though
    a plain C major triad does not contain one.
    """

    root: PitchClass
    quality: ChordQuality
    bass: PitchClass | None = None

    def pitch_classes(self) -> frozenset[int]:
        """Expected sounding pitch classes (formula plus any bass)."""
        pitches = self.quality.pitch_classes(self.root)
        if self.bass is not None:
            pitches = pitches | {self.bass.value}
        return pitches

    def get_pitches(self) -> list[PitchClass]:
        """Chord tones in formula order, bass first when it is not a chord tone."""
        pitches = self.quality.get_pitches(self.root)
        if self.bass is not None and self.bass not in pitches:
            pitches.insert(0, self.bass)
        return pitches

    @property
    def name(self) -> str:
        """Canonical chord name, e.g. 'C#maj7/F'."""
        suffix = "" if self.quality.name == "major" else self.quality.name
        if self.quality.name == "minor":
            suffix = "m"
        bass = f"/{self.bass.spell()}" if self.bass is not None else ""
        return f"{self.root.spell()}{suffix}{bass}"

    def __str__(self) -> str:
        return self.name
