# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Sample corpus discovery and batch runs.

The corpus is a directory tree ``<corpus_dir>/<family>/<version>/*.xml``.
Files whose name contains 'stub' or 'skip' are placeholders and are
ignored.

Every document is processed by its own pipeline in a worker thread; the
only shared object is the read-only registry.

Example:
    >>> settings = Settings.from_env()
    >>> for family, versions in discover(settings.corpus_dir).items():
    ...     for version in versions:
    ...         samples = load_samples(settings.corpus_dir, family, version)
    ...         results = run_integrity(samples, registry)
"""

from __future__ import annotations

import concurrent.futures
import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import TypeVar

from .config import Settings
from .exceptions import DdexError
from .oracle import DOMComparison, validate_round_trip
from .registry import TypeRegistry
from .sniffer import MessageSniffer

logger = logging.getLogger(__name__)

IGNORED_MARKERS = ('stub', 'skip')

T = TypeVar('T')


def _is_sample(path: Path) -> bool:
    name = path.name.lower()
    return (path.is_file() and path.suffix == '.xml'
            and not any(marker in name for marker in IGNORED_MARKERS))


def discover(corpus_dir: str | Path) -> dict[str, list[str]]:
    """Families and versions that hold at least one sample, sorted."""
    root = Path(corpus_dir)
    found: dict[str, list[str]] = {}
    if not root.is_dir():
        return found
    for family_dir in sorted(p for p in root.iterdir() if p.is_dir()):
        versions = [
            version_dir.name
            for version_dir in sorted(p for p in family_dir.iterdir() if p.is_dir())
            if any(_is_sample(f) for f in version_dir.iterdir())
        ]
        if versions:
            found[family_dir.name] = versions
    return found


def load_samples(corpus_dir: str | Path, family: str, version: str) -> dict[str, bytes]:
    """Sample documents of a family/version keyed by file stem, in name order."""
    directory = Path(corpus_dir) / family / version
    if not directory.is_dir():
        return {}
    return {
        path.stem: path.read_bytes()
        for path in sorted(directory.iterdir())
        if _is_sample(path)
    }


@dataclass
class ConformanceResult:
    """Outcome of decoding one sample."""

    name: str
    size: int
    family: str | None = None
    version: str | None = None
    root_element: str | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class IntegrityResult:
    """Outcome of round-tripping one sample."""

    name: str
    comparison: DOMComparison

    @property
    def ok(self) -> bool:
        return self.comparison.success


def _run_parallel(
    samples: Mapping[str, bytes],
    task: Callable[[str, bytes], T],
    workers: int | None,
) -> dict[str, T]:
    if workers is None:
        workers = Settings.from_env().workers
    results: dict[str, T] = {}
    with concurrent.futures.ThreadPoolExecutor(max_workers=max(1, workers)) as executor:
        future_map = {executor.submit(task, name, data): name for name, data in samples.items()}
        for future in concurrent.futures.as_completed(future_map):
            results[future_map[future]] = future.result()
    return {name: results[name] for name in samples}


def run_conformance(
    samples: Mapping[str, bytes],
    registry: TypeRegistry,
    workers: int | None = None,
) -> dict[str, ConformanceResult]:
    """Detect and decode every sample.

    A failing document is reported in its result and does not stop the run.
    """
    sniffer = MessageSniffer(registry)

    def check(name: str, data: bytes) -> ConformanceResult:
        result = ConformanceResult(name=name, size=len(data))
        try:
            message, result.family, result.version = sniffer.parse_any(data)
        except DdexError as e:
            logger.info("%s: %s failed: %s", name, e.stage, e)
            result.error = str(e)
            return result
        result.root_element = message.ROOT_ELEMENT
        return result

    return _run_parallel(samples, check, workers)


def run_integrity(
    samples: Mapping[str, bytes],
    registry: TypeRegistry,
    workers: int | None = None,
    pretty: bool = True,
) -> dict[str, IntegrityResult]:
    """Round-trip every sample through decode -> encode and compare."""
    sniffer = MessageSniffer(registry)

    def round_trip(data: bytes) -> bytes:
        return sniffer.round_trip(data, pretty=pretty)

    def check(name: str, data: bytes) -> IntegrityResult:
        comparison = validate_round_trip(data, round_trip)
        if not comparison.success:
            logger.info("%s: round trip differs\n%s", name, '\n'.join(comparison.summary_lines()))
        return IntegrityResult(name=name, comparison=comparison)

    return _run_parallel(samples, check, workers)
