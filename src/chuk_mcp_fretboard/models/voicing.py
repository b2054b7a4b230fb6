"""
Voicing models - chord shapes and resolution results.

A ChordVoicing is one physical shape: six entries, low E string first,
each a fret number or None for a muted string. Shapes with a first_fret
are written relative to that anchor (absolute fret = first_fret + fret - 1),
which is what makes barre shapes movable.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator

from chuk_mcp_fretboard.constants import (
    MAX_ANCHOR_FRET,
    MAX_FRET,
    MIN_ANCHOR_FRET,
    MUTED_MARKER,
    NUM_STRINGS,
    ErrorMessages,
    ResolutionSource,
)


class ChordVoicing(BaseModel):
    """A single fretted chord shape."""

    frets: tuple[int | None, ...] = Field(
        description="Fret per string, low E first; None means muted",
    )
    first_fret: int | None = Field(
        default=None,
        ge=MIN_ANCHOR_FRET,
        le=MAX_ANCHOR_FRET,
        description="Anchor fret for relative (movable) shapes",
    )
    position: str | None = Field(
        default=None,
        description="Human-readable label, e.g. 'Open' or 'Barre 5th'",
    )

    model_config = {"frozen": True}

    @field_validator("frets", mode="before")
    @classmethod
    def _parse_muted(cls, value: Any) -> Any:
        """Accept 'x' (any case) as a muted string."""
        if isinstance(value, (list, tuple)):
            return tuple(
                None if isinstance(f, str) and f.strip().lower() == MUTED_MARKER else f
                for f in value
            )
        return value

    @model_validator(mode="after")
    def _check_range(self) -> ChordVoicing:
        if len(self.frets) != NUM_STRINGS:
            raise ValueError(f"A voicing needs {NUM_STRINGS} strings, got {len(self.frets)}")
        for fret in self.frets:
            if fret is not None and not 0 <= fret <= MAX_FRET:
                raise ValueError(f"Fret {fret} is outside 0-{MAX_FRET}")
        if self.first_fret is not None and self.first_fret > 1:
            if any(f == 0 for f in self.frets):
                raise ValueError("Relative shapes cannot contain open strings")
            if any(f is not None and f > MAX_FRET for f in self.absolute_frets()):
                raise ValueError(f"Shape reaches past fret {MAX_FRET}")
        return self

    def absolute_frets(self) -> tuple[int | None, ...]:
        """Frets as actual fret positions on the neck."""
        if self.first_fret is None:
            return self.frets
        return tuple(None if f is None else self.first_fret + f - 1 for f in self.frets)

    @property
    def is_movable(self) -> bool:
        """Whether the shape can be slid along the neck (relative, no open strings)."""
        if self.first_fret is None:
            return False
        return all(f is None or f >= 1 for f in self.frets)

    def sounding_strings(self) -> list[int]:
        """Indices (0 = low E) of strings that are played."""
        return [i for i, f in enumerate(self.frets) if f is not None]

    def lowest_sounding_string(self) -> int | None:
        """Index of the lowest played string, or None if everything is muted."""
        sounding = self.sounding_strings()
        return sounding[0] if sounding else None

    def is_muted(self) -> bool:
        """True when no string sounds."""
        return not self.sounding_strings()

    @property
    def shape_key(self) -> tuple[int | None, ...]:
        """Identity of the physical shape, ignoring its label and encoding."""
        return self.absolute_frets()

    def shape(self) -> str:
        """Compact display form, e.g. 'x-3-2-0-1-0' (absolute frets)."""
        return "-".join(MUTED_MARKER if f is None else str(f) for f in self.absolute_frets())


class VoicingResolution(BaseModel):
    """
    Tagged result of resolving a chord name.

    Carries the voicings plus which fallback tier produced them, so callers
    can tell an exact match from a substitute or an exhausted search.
    """

    chord_name: str = Field(description="The name as requested")
    root: str = Field(description="Canonical root")
    quality: str = Field(description="Canonical quality")
    bass: str | None = Field(default=None, description="Slash bass, if any")
    recognized: bool = Field(default=True, description="False when the name was guessed")
    source: ResolutionSource = Field(description="Fallback tier that produced the voicings")
    source_root: str | None = Field(
        default=None,
        description="Root the shapes were transposed from",
    )
    substituted_quality: str | None = Field(
        default=None,
        description="Quality used in place of the requested one",
    )
    voicings: tuple[ChordVoicing, ...] = Field(default=())

    model_config = {"frozen": True}

    @property
    def exhausted(self) -> bool:
        """Every fallback tier failed."""
        return self.source == ResolutionSource.EXHAUSTED

    @property
    def is_guess(self) -> bool:
        """The input could not be parsed; the result is a default, not a match."""
        return not self.recognized

    def warnings(self) -> list[str]:
        """User-facing diagnostics for this result."""
        messages: list[str] = []
        if self.is_guess:
            messages.append(
                ErrorMessages.UNRECOGNIZED_CHORD.format(
                    name=self.chord_name, fallback=f"{self.root} {self.quality}"
                )
            )
        if self.exhausted:
            messages.append(ErrorMessages.NO_VOICINGS.format(name=self.chord_name))
        return messages
