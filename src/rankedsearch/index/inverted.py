"""Inverted index and the builder that fills it during indexing."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Dict, FrozenSet, Mapping, Optional, Set

from rankedsearch.models import Document

LOGGER = logging.getLogger(__name__)

# Document frequency assumed for terms the corpus has never seen.
DEFAULT_DOCUMENT_FREQUENCY = 1


@dataclass(frozen=True, slots=True)
class InvertedIndex:
    """Read-only term to documents index with corpus statistics."""

    document_count: int
    postings: Mapping[str, FrozenSet[Document]]
    document_frequency: Mapping[str, int]
    stemmed: bool = True
    root: Optional[Path] = None

    @classmethod
    def empty(cls, *, stemmed: bool = True, root: Optional[Path] = None) -> "InvertedIndex":
        return cls(0, MappingProxyType({}), MappingProxyType({}), stemmed=stemmed, root=root)

    def documents(self, term: str) -> FrozenSet[Document]:
        return self.postings.get(term, frozenset())

    def frequency(self, term: str) -> int:
        """Number of documents containing term, 1 when the term is unknown."""
        return self.document_frequency.get(term, DEFAULT_DOCUMENT_FREQUENCY)

    @property
    def vocabulary_size(self) -> int:
        return len(self.postings)


class _AtomicCounter:
    def __init__(self) -> None:
        self._value = 0
        self._lock = threading.Lock()

    def increment(self) -> int:
        with self._lock:
            self._value += 1
            return self._value

    @property
    def value(self) -> int:
        with self._lock:
            return self._value


@dataclass
class MergeOutcome:
    """Which shared structures accepted a document's contribution."""

    frequency_merged: bool = True
    postings_merged: bool = True

    @property
    def complete(self) -> bool:
        return self.frequency_merged and self.postings_merged


@dataclass
class IndexBuilder:
    """Shared mutable state filled concurrently by indexing workers.

    Postings and document frequencies sit behind separate locks and the
    document counter has its own, so workers only contend for the map updates.
    ``lock_timeout`` of None waits indefinitely. When a lock cannot be taken
    the document's contribution to that structure is dropped and logged.
    """

    lock_timeout: Optional[float] = None
    postings: Dict[str, Set[Document]] = field(default_factory=dict)
    document_frequency: Dict[str, int] = field(default_factory=dict)
    _postings_lock: threading.Lock = field(default_factory=threading.Lock, repr=False)
    _frequency_lock: threading.Lock = field(default_factory=threading.Lock, repr=False)
    _counter: _AtomicCounter = field(default_factory=_AtomicCounter, repr=False)

    @property
    def document_count(self) -> int:
        return self._counter.value

    def _acquire(self, lock: threading.Lock, name: str, document: Document) -> bool:
        timeout = -1 if self.lock_timeout is None else self.lock_timeout
        if lock.acquire(timeout=timeout):
            return True
        LOGGER.error("Could not acquire %s lock, dropping %s from it", name, document.path)
        return False

    def add(self, document: Document) -> MergeOutcome:
        """Merge one document's statistics into the shared structures."""
        self._counter.increment()
        outcome = MergeOutcome()
        terms = list(document.term_frequency)
        if not terms:
            return outcome

        if self._acquire(self._frequency_lock, "document frequency", document):
            try:
                for term in terms:
                    self.document_frequency[term] = self.document_frequency.get(term, 0) + 1
            finally:
                self._frequency_lock.release()
        else:
            outcome.frequency_merged = False

        if self._acquire(self._postings_lock, "postings", document):
            try:
                for term in terms:
                    bucket = self.postings.get(term)
                    if bucket is None:
                        self.postings[term] = {document}
                    else:
                        bucket.add(document)
            finally:
                self._postings_lock.release()
        else:
            outcome.postings_merged = False

        return outcome

    def freeze(self, *, stemmed: bool = True, root: Optional[Path] = None) -> InvertedIndex:
        """Produce the immutable index once every worker is done."""
        with self._postings_lock, self._frequency_lock:
            postings = {term: frozenset(docs) for term, docs in self.postings.items()}
            frequency = dict(self.document_frequency)
        return InvertedIndex(
            document_count=self.document_count,
            postings=MappingProxyType(postings),
            document_frequency=MappingProxyType(frequency),
            stemmed=stemmed,
            root=root,
        )
