"""
Voicing loader - lazily loads per-root chord voicing partitions.

Voicings can come from:
1. Built-in library (shipped with package, one YAML file per root)
2. Project voicings (user's project/voicings directory)

Project files override library qualities for the same root. Partitions are
loaded on first request and cached for the life of the process; concurrent
requests for the same root share a single in-flight load.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable, Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Any

import yaml
from pydantic import ValidationError

from chuk_mcp_fretboard.constants import COMMON_ROOTS
from chuk_mcp_fretboard.core.pitch import normalize_root
from chuk_mcp_fretboard.core.quality import CANONICAL_CHORD_QUALITIES
from chuk_mcp_fretboard.models.voicing import ChordVoicing

logger = logging.getLogger(__name__)

ChordKey = tuple[str, str]
Partition = Mapping[ChordKey, tuple[ChordVoicing, ...]]


def partition_filename(root: str) -> str:
    """File name for a root's partition: 'C#' -> 'C_sharp.yaml'."""
    return normalize_root(root).replace("#", "_sharp") + ".yaml"


class VoicingLoader:
    """
    Discovers and loads chord voicing partitions.

    Each partition maps (root, quality) to that root's voicings.
    Enharmonic roots share a partition: 'Db' loads the 'C#' file.
    """

    def __init__(
        self,
        library_path: Path | None = None,
        project_path: Path | None = None,
    ):
        """
        Initialize the voicing loader.

        Args:
            library_path: Path to built-in voicing library
            project_path: Path to project voicings directory
        """
        self.library_path = library_path or (Path(__file__).parent / "library")
        self.project_path = project_path
        self._cache: dict[str, Partition] = {}
        self._pending: dict[str, asyncio.Task[Partition]] = {}
        self._generation = 0

    async def load_partition(self, root: str) -> Partition:
        """
        Get the voicing partition for a root, loading it if needed.

        Concurrent callers for the same root await the same load.

        Args:
            root: Root note in any spelling

        Returns:
            Read-only mapping of (root, quality) to voicings

        Raises:
            OSError: If a partition file cannot be read
            yaml.YAMLError: If a partition file is not valid YAML
        """
        key = normalize_root(root)

        cached = self._cache.get(key)
        if cached is not None:
            return cached

        task = self._pending.get(key)
        if task is not None and task.get_loop() is asyncio.get_running_loop():
            logger.debug(f"Joining in-flight load for {key}")
            return await task

        task = asyncio.ensure_future(self._load(key, self._generation))
        self._pending[key] = task
        return await task

    async def load_many(self, roots: Iterable[str]) -> dict[str, Partition]:
        """Load several partitions concurrently, keyed by canonical root."""
        keys = list(dict.fromkeys(normalize_root(r) for r in roots))
        partitions = await asyncio.gather(*(self.load_partition(k) for k in keys))
        return dict(zip(keys, partitions))

    def preload(self, roots: Iterable[str] = COMMON_ROOTS) -> list[asyncio.Task[Partition]]:
        """
        Start loading partitions in the background without waiting.

        Needs a running event loop; without one this is a no-op.
        Failures are logged, never raised.

        Returns:
            The scheduled load tasks
        """
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            logger.debug("No running event loop, skipping preload")
            return []

        tasks: list[asyncio.Task[Partition]] = []
        for key in dict.fromkeys(normalize_root(r) for r in roots):
            if key in self._cache:
                continue
            task = asyncio.ensure_future(self.load_partition(key))
            task.add_done_callback(self._log_preload_result)
            tasks.append(task)
        return tasks

    def clear_cache(self) -> None:
        """
        Drop every cached partition (for test isolation).

        Loads already in flight still answer their callers but no longer
        write into the cache.
        """
        self._generation += 1
        self._cache.clear()
        self._pending.clear()

    def cache_stats(self) -> dict[str, Any]:
        """Report which roots are cached or loading."""
        return {
            "cached_roots": sorted(self._cache),
            "pending_roots": sorted(self._pending),
            "cache_size": len(self._cache),
        }

    def is_cached(self, root: str) -> bool:
        """Check whether a root's partition is already loaded."""
        return normalize_root(root) in self._cache

    async def _load(self, key: str, generation: int) -> Partition:
        """Read one partition off disk and cache it unless the cache was cleared meanwhile."""
        try:
            partition = await asyncio.to_thread(self._read_partition, key)
            if generation == self._generation:
                self._cache[key] = partition
            logger.info(f"Loaded voicing partition {key} ({len(partition)} qualities)")
            return partition
        finally:
            if self._pending.get(key) is asyncio.current_task():
                del self._pending[key]

    def _read_partition(self, key: str) -> Partition:
        """Read and parse the library file and any project override for a root."""
        filename = partition_filename(key)
        entries: dict[ChordKey, tuple[ChordVoicing, ...]] = {}

        library_file = self.library_path / filename
        if library_file.exists():
            entries.update(self._parse_file(library_file, key))
        else:
            logger.warning(f"No voicing library file for {key}: {library_file}")

        if self.project_path:
            project_file = self.project_path / filename
            if project_file.exists():
                entries.update(self._parse_file(project_file, key))

        return MappingProxyType(entries)

    def _parse_file(self, path: Path, key: str) -> dict[ChordKey, tuple[ChordVoicing, ...]]:
        """Parse a partition file into (root, quality) entries."""
        with open(path) as f:
            data = yaml.safe_load(f) or {}

        chords = data.get("chords") or {}
        entries: dict[ChordKey, tuple[ChordVoicing, ...]] = {}
        for quality, items in chords.items():
            quality = str(quality)
            if quality not in CANONICAL_CHORD_QUALITIES:
                logger.warning(f"Skipping unknown quality '{quality}' in {path.name}")
                continue
            parsed = (self._parse_voicing(item, path) for item in items or [])
            voicings = [v for v in parsed if v is not None]
            if voicings:
                entries[(key, quality)] = tuple(voicings)
        return entries

    def _parse_voicing(self, item: Any, path: Path) -> ChordVoicing | None:
        """Parse one voicing entry, skipping malformed ones."""
        try:
            return ChordVoicing.model_validate(item)
        except ValidationError as e:
            logger.warning(f"Skipping malformed voicing {item!r} in {path.name}: {e}")
            return None

    @staticmethod
    def _log_preload_result(task: asyncio.Task[Partition]) -> None:
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.debug(f"Preload failed: {error}")
