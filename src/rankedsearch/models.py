"""Core rankedsearch data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Mapping, Tuple


class ExtractorKind(str, Enum):
    """Content extraction routine used for a file."""

    PLAIN_TEXT = "plain_text"
    DOCX = "docx"
    ODT = "odt"
    PDF = "pdf"
    UNSUPPORTED = "unsupported"


@dataclass(frozen=True, slots=True)
class Document:
    """A successfully extracted file and its term statistics.

    Equality and hashing only consider ``path``: the same file seen twice is the
    same document regardless of the remaining fields.
    """

    path: Path
    total_term_count: int = field(compare=False)
    term_frequency: Mapping[str, int] = field(compare=False, repr=False)
    extractor: ExtractorKind = field(default=ExtractorKind.PLAIN_TEXT, compare=False)
    location: Path | None = field(default=None, compare=False, repr=False)

    def term_count(self, term: str) -> int:
        return self.term_frequency.get(term, 0)

    @property
    def source(self) -> Path:
        """Path used to re-open the file."""
        return self.location if self.location is not None else self.path


@dataclass(frozen=True, slots=True)
class TermStat:
    """Per query term values used when ranking one document."""

    term: str
    term_frequency: int
    document_frequency: int
    rank: float = 0.0


@dataclass(frozen=True, slots=True)
class SearchResult:
    rank: float
    document_count: int
    document: Document
    stats: Tuple[TermStat, ...] = ()

    @property
    def path(self) -> Path:
        return self.document.path


@dataclass(frozen=True, slots=True)
class HighlightedLine:
    """A matching line with the offsets of every match."""

    number: int
    text: str
    spans: Tuple[Tuple[int, int], ...]
