# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Environment driven settings.

Variables:
    DDEX_XSD_DIR: Root directory of the XSD tree (``<family>v<version>/*.xsd``).
    DDEX_CORPUS_DIR: Root directory of the sample corpus
        (``<family>/<version>/*.xml``).
    DDEX_WORKERS: Number of parallel workers for corpus runs.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class Settings:
    xsd_dir: Path
    corpus_dir: Path
    workers: int

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> Settings:
        """Build settings from environment variables (os.environ by default)."""
        env = os.environ if environ is None else environ
        workers = env.get('DDEX_WORKERS')
        return cls(
            xsd_dir=Path(env.get('DDEX_XSD_DIR', 'xsd')),
            corpus_dir=Path(env.get('DDEX_CORPUS_DIR', 'tests/data')),
            workers=int(workers) if workers else (os.cpu_count() or 1),
        )
