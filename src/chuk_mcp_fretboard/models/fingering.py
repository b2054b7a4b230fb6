"""
Fingering models - scale positions on the neck.

A ScaleFingering is one hand position: for each string (low E first) the
absolute frets whose notes belong to the scale.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, model_validator

from chuk_mcp_fretboard.constants import MAX_FRET, NUM_STRINGS


class ScaleFingering(BaseModel):
    """One playable position of a scale."""

    scale_id: str = Field(description="Canonical scale id")
    root: str = Field(description="Canonical root")
    position: int = Field(ge=0, description="Zero-based position index")
    label: str = Field(default="", description="Display label, e.g. 'Position 3'")
    frets: tuple[tuple[int, ...], ...] = Field(
        description="Absolute frets per string, low E first",
    )

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _check_strings(self) -> ScaleFingering:
        if len(self.frets) != NUM_STRINGS:
            raise ValueError(f"A fingering needs {NUM_STRINGS} strings, got {len(self.frets)}")
        for string_frets in self.frets:
            for fret in string_frets:
                if not 0 <= fret <= MAX_FRET:
                    raise ValueError(f"Fret {fret} is outside 0-{MAX_FRET}")
        return self

    @property
    def lowest_fret(self) -> int:
        """Lowest fret used anywhere in the position."""
        return min((f for frets in self.frets for f in frets), default=0)

    @property
    def highest_fret(self) -> int:
        """Highest fret used anywhere in the position."""
        return max((f for frets in self.frets for f in frets), default=0)

    @property
    def note_count(self) -> int:
        """Total number of notes in the position."""
        return sum(len(frets) for frets in self.frets)
