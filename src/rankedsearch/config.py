"""Application configuration defaults."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import FrozenSet

from rankedsearch.utils.files import DEFAULT_SKIP_DIRS

LOGGER = logging.getLogger(__name__)

WORKERS_ENV = "RANKEDSEARCH_WORKERS"


def _get_default_workers() -> int | None:
    """Worker count from the environment, None lets the thread pool decide."""
    raw = os.environ.get(WORKERS_ENV)
    if not raw:
        return None
    try:
        workers = int(raw)
    except ValueError:
        LOGGER.warning("Ignoring %s=%r, expected a positive integer", WORKERS_ENV, raw)
        return None
    if workers < 1:
        LOGGER.warning("Ignoring %s=%r, expected a positive integer", WORKERS_ENV, raw)
        return None
    return workers


@dataclass(slots=True)
class AppConfig:
    workers: int | None = None
    stem: bool = True
    whole_word: bool = False
    include_hidden: bool = False
    skip_dirs: FrozenSet[str] = DEFAULT_SKIP_DIRS
    lock_timeout: float | None = None
    top_k: int | None = None

    def __post_init__(self) -> None:
        if self.workers is None:
            self.workers = _get_default_workers()

    def resolve_root(self, root: Path | None = None) -> Path:
        if root is None:
            return Path.cwd()
        return Path(root).expanduser().resolve()
