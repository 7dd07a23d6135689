"""Concurrent document indexing pipeline."""

from __future__ import annotations

import logging
from collections import Counter
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Iterable, Optional

from rankedsearch.index.inverted import IndexBuilder, InvertedIndex
from rankedsearch.ingestion.extractors import extract, extractor_for
from rankedsearch.models import Document, ExtractorKind
from rankedsearch.utils.files import DEFAULT_SKIP_DIRS, iter_candidate_paths, relative_to_root
from rankedsearch.utils.text import iter_terms

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class IndexStats:
    indexed: int = 0
    skipped: int = 0
    failed: int = 0
    processed_files: list[Path] = field(default_factory=list)

    def increment(self, status: str, path: Path) -> None:
        if status == "indexed":
            self.indexed += 1
        elif status == "skipped":
            self.skipped += 1
        else:
            self.failed += 1
        self.processed_files.append(path)


def build_document(
    path: Path,
    content: str,
    *,
    root: Path,
    extractor: ExtractorKind = ExtractorKind.PLAIN_TEXT,
    stem: bool = True,
) -> Document:
    """Tokenize content and wrap its term statistics in a Document."""
    frequency = Counter(iter_terms(content, stem=stem))
    return Document(
        path=relative_to_root(path, root),
        total_term_count=sum(frequency.values()),
        term_frequency=MappingProxyType(dict(frequency)),
        extractor=extractor,
        location=Path(path).absolute(),
    )


class Indexer:
    """Builds an in-memory inverted index from a directory tree."""

    def __init__(
        self,
        *,
        workers: Optional[int] = None,
        stem: bool = True,
        include_hidden: bool = False,
        skip_dirs: Iterable[str] = DEFAULT_SKIP_DIRS,
        lock_timeout: Optional[float] = None,
    ) -> None:
        self.workers = workers
        self.stem = stem
        self.include_hidden = include_hidden
        self.skip_dirs = frozenset(skip_dirs)
        self.lock_timeout = lock_timeout
        self.stats = IndexStats()

    def index(self, root: Path) -> InvertedIndex:
        """Index every candidate file found under root."""
        root = Path(root)
        paths = iter_candidate_paths(
            root, include_hidden=self.include_hidden, skip_dirs=self.skip_dirs
        )
        return self.index_paths(root, paths)

    def index_paths(self, root: Path, paths: Iterable[Path]) -> InvertedIndex:
        """Index the given files concurrently, storing paths relative to root."""
        root = Path(root)
        self.stats = IndexStats()
        builder = IndexBuilder(lock_timeout=self.lock_timeout)

        with ThreadPoolExecutor(max_workers=self.workers) as executor:
            futures = {
                executor.submit(self._index_single, builder, root, path): path for path in paths
            }
            for future, path in futures.items():
                try:
                    status = future.result()
                except Exception as exc:
                    LOGGER.error("Failed to process %s: %s", path, exc)
                    status = "failed"
                self.stats.increment(status, path)

        index = builder.freeze(stemmed=self.stem, root=root)
        LOGGER.info(
            "Indexed %d documents (%d terms), skipped %d, failed %d",
            index.document_count,
            index.vocabulary_size,
            self.stats.skipped,
            self.stats.failed,
        )
        return index

    def _index_single(self, builder: IndexBuilder, root: Path, path: Path) -> str:
        kind = extractor_for(path)
        content = extract(kind, path)
        if content is None:
            LOGGER.debug("No content extracted from %s", path)
            return "skipped"

        document = build_document(path, content, root=root, extractor=kind, stem=self.stem)
        outcome = builder.add(document)
        LOGGER.debug("Indexed %s (%d terms)", document.path, document.total_term_count)
        return "indexed" if outcome.complete else "failed"
