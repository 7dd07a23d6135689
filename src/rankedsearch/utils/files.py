"""Utility helpers for working with files."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterable, Iterator

LOGGER = logging.getLogger(__name__)

DEFAULT_SKIP_DIRS: frozenset[str] = frozenset(
    {".git", ".hg", ".svn", "node_modules", "__pycache__", "target", ".venv", "venv"}
)


def _is_hidden(name: str) -> bool:
    return name.startswith(".")


def iter_candidate_paths(
    root: Path,
    *,
    include_hidden: bool = False,
    skip_dirs: Iterable[str] = DEFAULT_SKIP_DIRS,
) -> Iterator[Path]:
    """Yield regular files under root, descending into directories.

    Hidden entries are skipped unless ``include_hidden`` is set and directories
    named in ``skip_dirs`` are never entered. Entries that cannot be listed are
    skipped.
    """
    root = Path(root)
    if root.is_file():
        yield root
        return

    skipped = frozenset(skip_dirs)

    def _on_error(exc: OSError) -> None:
        LOGGER.debug("Skipping unreadable entry %s: %s", exc.filename, exc)

    for dirpath, dirnames, filenames in os.walk(root, onerror=_on_error):
        dirnames[:] = sorted(
            name
            for name in dirnames
            if name not in skipped and (include_hidden or not _is_hidden(name))
        )
        for name in sorted(filenames):
            if not include_hidden and _is_hidden(name):
                continue
            path = Path(dirpath) / name
            if path.is_file():
                yield path


def relative_to_root(path: Path, root: Path) -> Path:
    """Strip the root prefix from path, falling back to the absolute path."""
    try:
        return Path(path).relative_to(root)
    except ValueError:
        return Path(path).absolute()
