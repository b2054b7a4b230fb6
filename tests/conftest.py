"""
Pytest configuration and shared fixtures.
"""

import tempfile
from pathlib import Path

import pytest

from chuk_mcp_fretboard.engine import FretboardEngine
from chuk_mcp_fretboard.scales import ScaleFingeringGenerator
from chuk_mcp_fretboard.voicings import VoicingLoader, VoicingResolver, VoicingValidator


@pytest.fixture
def temp_dir() -> Path:
    """Create a temporary directory for project voicing files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def library_path() -> Path:
    """Path to the built-in voicing library."""
    return Path(__file__).parent.parent / "src" / "chuk_mcp_fretboard" / "voicings" / "library"


@pytest.fixture
def loader(library_path: Path) -> VoicingLoader:
    """A fresh loader over the built-in library (empty cache)."""
    return VoicingLoader(library_path=library_path)


@pytest.fixture
def validator() -> VoicingValidator:
    """Voicing validator with default thresholds."""
    return VoicingValidator()


@pytest.fixture
def resolver(loader: VoicingLoader, validator: VoicingValidator) -> VoicingResolver:
    """Resolver over the built-in library."""
    return VoicingResolver(loader, validator)


@pytest.fixture
def generator() -> ScaleFingeringGenerator:
    """Scale fingering generator in standard tuning."""
    return ScaleFingeringGenerator()


@pytest.fixture
def engine(loader: VoicingLoader) -> FretboardEngine:
    """Engine over the built-in library."""
    return FretboardEngine(loader=loader)
