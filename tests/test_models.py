"""Tests for core data models."""

from __future__ import annotations

import dataclasses
from pathlib import Path
from types import MappingProxyType

import pytest

from rankedsearch.models import Document, ExtractorKind, HighlightedLine, SearchResult, TermStat


def _document(path: str, total: int = 3, **frequency: int) -> Document:
    return Document(
        path=Path(path),
        total_term_count=total,
        term_frequency=MappingProxyType(frequency),
    )


class TestDocument:
    """Test Document identity and accessors."""

    def test_equality_by_path(self) -> None:
        """Documents with the same path are equal whatever their statistics."""
        first = _document("a.txt", total=3, cat=1, dog=2)
        second = Document(
            path=Path("a.txt"),
            total_term_count=99,
            term_frequency=MappingProxyType({"bird": 99}),
            extractor=ExtractorKind.PDF,
            location=Path("/elsewhere/a.txt"),
        )

        assert first == second
        assert hash(first) == hash(second)

    def test_set_deduplicates_by_path(self) -> None:
        """A posting set keeps one entry per path."""
        postings = {_document("a.txt", dog=2), _document("a.txt", dog=2), _document("b.txt", dog=1)}

        assert {doc.path for doc in postings} == {Path("a.txt"), Path("b.txt")}
        assert len(postings) == 2

    def test_different_paths_differ(self) -> None:
        """Documents with different paths are distinct."""
        assert _document("a.txt", dog=1) != _document("b.txt", dog=1)

    def test_term_count(self) -> None:
        """Should report occurrences and zero for absent terms."""
        doc = _document("a.txt", cat=1, dog=2)

        assert doc.term_count("dog") == 2
        assert doc.term_count("bird") == 0

    def test_immutable(self) -> None:
        """Documents cannot be mutated after construction."""
        doc = _document("a.txt", dog=1)

        with pytest.raises(dataclasses.FrozenInstanceError):
            doc.total_term_count = 5  # type: ignore[misc]

    def test_source_prefers_location(self) -> None:
        """Should re-open from the absolute location when known."""
        relative = _document("a.txt")
        located = Document(
            path=Path("a.txt"),
            total_term_count=0,
            term_frequency=MappingProxyType({}),
            location=Path("/root/a.txt"),
        )

        assert relative.source == Path("a.txt")
        assert located.source == Path("/root/a.txt")

    def test_default_extractor(self) -> None:
        """Should default to plain text extraction."""
        assert _document("a.txt").extractor is ExtractorKind.PLAIN_TEXT


class TestSearchResult:
    """Test SearchResult dataclass."""

    def test_create_search_result(self) -> None:
        """Should expose the document path."""
        doc = _document("notes/a.txt", dog=2)
        stat = TermStat(term="dog", term_frequency=2, document_frequency=1)
        result = SearchResult(rank=0.5, document_count=2, document=doc, stats=(stat,))

        assert result.path == Path("notes/a.txt")
        assert result.stats[0].term == "dog"
        assert result.document_count == 2


class TestHighlightedLine:
    """Test HighlightedLine dataclass."""

    def test_create_line(self) -> None:
        """Should keep every span."""
        line = HighlightedLine(number=3, text="dog dog", spans=((0, 3), (4, 7)))

        assert line.number == 3
        assert len(line.spans) == 2
