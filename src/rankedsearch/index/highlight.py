"""Locate and mark query term matches in document content."""

from __future__ import annotations

import logging
import re
from typing import Iterable, Iterator, List

from rankedsearch.ingestion.extractors import extract
from rankedsearch.models import Document, HighlightedLine

LOGGER = logging.getLogger(__name__)


class HighlightError(Exception):
    """Raised when a document's matching lines cannot be produced."""


def build_pattern(terms: Iterable[str], *, whole_word: bool = False) -> re.Pattern[str]:
    """Compile one case-insensitive alternation matching any of the terms literally."""
    words = sorted({term for term in terms if term}, key=lambda term: (-len(term), term))
    if not words:
        raise HighlightError("no terms to highlight")
    alternation = "|".join(re.escape(word) for word in words)
    if whole_word:
        alternation = rf"\b(?:{alternation})\b"
    try:
        return re.compile(alternation, re.IGNORECASE)
    except re.error as exc:
        raise HighlightError(f"invalid highlight pattern: {exc}") from exc


def iter_highlighted_lines(text: str, pattern: re.Pattern[str]) -> Iterator[HighlightedLine]:
    # Only "\n" ends a line, other separators such as form feeds stay in the text.
    for number, line in enumerate(text.split("\n"), start=1):
        line = line.removesuffix("\r")
        spans = tuple(match.span() for match in pattern.finditer(line) if match.end() > match.start())
        if spans:
            yield HighlightedLine(number=number, text=line, spans=spans)


class Highlighter:
    """Re-reads documents and reports the lines matching the query terms."""

    def __init__(self, terms: Iterable[str], *, whole_word: bool = False) -> None:
        self.terms = frozenset(terms)
        self.whole_word = whole_word
        self._pattern = build_pattern(self.terms, whole_word=whole_word) if self.terms else None

    def highlight(self, document: Document) -> List[HighlightedLine]:
        if self._pattern is None:
            return []
        content = extract(document.extractor, document.source)
        if content is None:
            raise HighlightError(f"could not re-read {document.path}")
        lines = list(iter_highlighted_lines(content, self._pattern))
        LOGGER.debug("%d matching lines in %s", len(lines), document.path)
        return lines
