"""
Scale fingering validator - checks a position against its scale formula.

Stricter than the chord validator: a scale position is meant to be
exhaustive within its window, so by default every scale tone must appear
and no other note may.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from chuk_mcp_fretboard.constants import MIN_FINGERING_MATCH_RATIO, STANDARD_TUNING
from chuk_mcp_fretboard.core.formulas import scale_pitch_classes
from chuk_mcp_fretboard.core.pitch import PitchClass
from chuk_mcp_fretboard.models.fingering import ScaleFingering

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FingeringValidation:
    """Outcome of validating one fingering."""

    valid: bool
    sounding: frozenset[int]
    expected: frozenset[int]
    extra: frozenset[int]
    missing: frozenset[int]
    match_ratio: float
    coverage: float


class ScaleFingeringValidator:
    """Validates fingerings against scale formulas."""

    def __init__(
        self,
        min_match_ratio: float = MIN_FINGERING_MATCH_RATIO,
        tuning: tuple[int, ...] = STANDARD_TUNING,
    ):
        if not 0.0 <= min_match_ratio <= 1.0:
            raise ValueError(f"min_match_ratio must be within 0-1, got {min_match_ratio}")
        self.min_match_ratio = min_match_ratio
        self.tuning = tuning

    def sounding(self, fingering: ScaleFingering) -> frozenset[int]:
        """Pitch classes the fingering plays."""
        return frozenset(
            (self.tuning[string] + fret) % 12
            for string, frets in enumerate(fingering.frets)
            for fret in frets
        )

    def validate(
        self,
        fingering: ScaleFingering,
        scale_id: str | None = None,
        root: str | None = None,
    ) -> FingeringValidation:
        """
        Compare a fingering's notes with a scale's formula.

        Args:
            fingering: The position to check
            scale_id: Scale to check against (defaults to the fingering's own)
            root: Root to check against (defaults to the fingering's own)

        Returns:
            FingeringValidation with the verdict and the note breakdown
        """
        root_pc = PitchClass.parse(root or fingering.root)
        expected = scale_pitch_classes(root_pc, scale_id or fingering.scale_id)
        sounding = self.sounding(fingering)
        extra = sounding - expected
        missing = expected - sounding

        match_ratio = (len(sounding) - len(extra)) / len(sounding) if sounding else 0.0
        coverage = (len(expected) - len(missing)) / len(expected) if expected else 0.0

        valid = bool(sounding) and not extra and coverage >= self.min_match_ratio
        if not valid:
            logger.debug(
                f"Fingering {fingering.label or fingering.position} of {fingering.root} "
                f"{fingering.scale_id} failed: extra={sorted(extra)} missing={sorted(missing)}"
            )
        return FingeringValidation(
            valid=valid,
            sounding=sounding,
            expected=expected,
            extra=extra,
            missing=missing,
            match_ratio=match_ratio,
            coverage=coverage,
        )

    def is_valid(
        self,
        fingering: ScaleFingering,
        scale_id: str | None = None,
        root: str | None = None,
    ) -> bool:
        """Check whether a fingering is acceptable for a scale."""
        return self.validate(fingering, scale_id, root).valid


def validate_fingering(
    fingering: ScaleFingering,
    scale_id: str | None = None,
    root: str | None = None,
    min_match_ratio: float = MIN_FINGERING_MATCH_RATIO,
) -> FingeringValidation:
    """Validate a fingering in standard tuning."""
    return ScaleFingeringValidator(min_match_ratio).validate(fingering, scale_id, root)
