"""TF-IDF ranked search over an inverted index."""

from __future__ import annotations

import math
from typing import Iterable, List, Optional, Set

from rankedsearch.index.inverted import InvertedIndex
from rankedsearch.models import Document, SearchResult, TermStat
from rankedsearch.utils.text import iter_terms


def term_frequency(count: int, total_term_count: int) -> float:
    return count / total_term_count if total_term_count else 0.0


def inverse_document_frequency(document_count: int, document_frequency: int) -> float:
    return math.log10(document_count / document_frequency)


class RankedSearcher:
    """Scores documents of a finished index against a set of query terms.

    The index is only read, so one searcher may serve concurrent queries.
    """

    def __init__(self, index: InvertedIndex) -> None:
        self.index = index

    def query_terms(self, query: str) -> Set[str]:
        """Tokenize query text the same way the indexed content was."""
        return set(iter_terms(query, stem=self.index.stemmed))

    def search_text(self, query: str, *, limit: Optional[int] = None) -> List[SearchResult]:
        return self.search(self.query_terms(query), limit=limit)

    def search(self, terms: Iterable[str], *, limit: Optional[int] = None) -> List[SearchResult]:
        """Rank every document containing at least one of the terms.

        Results are ordered by rank, highest first, with the document path as
        tie-breaker.
        """
        query = sorted(set(terms))
        candidates: Set[Document] = set()
        for term in query:
            candidates.update(self.index.documents(term))
        if not candidates:
            return []

        results = [self._score(document, query) for document in candidates]
        results.sort(key=lambda result: (-result.rank, str(result.document.path)))
        if limit is not None:
            results = results[:limit]
        return results

    def _score(self, document: Document, query: List[str]) -> SearchResult:
        document_count = self.index.document_count
        rank = 0.0
        stats = []
        for term in query:
            count = document.term_count(term)
            frequency = self.index.frequency(term)
            contribution = term_frequency(count, document.total_term_count) * inverse_document_frequency(
                document_count, frequency
            )
            rank += contribution
            stats.append(
                TermStat(
                    term=term,
                    term_frequency=count,
                    document_frequency=frequency,
                    rank=contribution,
                )
            )
        return SearchResult(
            rank=rank,
            document_count=document_count,
            document=document,
            stats=tuple(stats),
        )
