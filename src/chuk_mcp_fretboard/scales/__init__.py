"""
Scale fingering system - position generation and validation.
"""

from chuk_mcp_fretboard.scales.generator import (
    ScaleFingeringGenerator,
    available_positions,
    fingering,
    fingering_layout,
    position_count,
)
from chuk_mcp_fretboard.scales.validator import (
    FingeringValidation,
    ScaleFingeringValidator,
    validate_fingering,
)

__all__ = [
    "FingeringValidation",
    "ScaleFingeringGenerator",
    "ScaleFingeringValidator",
    "available_positions",
    "fingering",
    "fingering_layout",
    "position_count",
    "validate_fingering",
]
