"""Text helpers: term tokenization and whitespace normalisation."""

from __future__ import annotations

import re
from functools import lru_cache
from typing import Iterable, Iterator, List

from nltk.stem.snowball import SnowballStemmer

# A run of decimal digits, or a letter followed by letters and digits.
_TERM_PATTERN = re.compile(r"\d+|[^\W\d_][^\W_]*")

_STEMMER = SnowballStemmer("english")


@lru_cache(maxsize=65536)
def stem_term(term: str) -> str:
    """Reduce a lowercased term to its English Snowball stem."""
    return _STEMMER.stem(term)


def _iter_raw_terms(text: str) -> Iterator[str]:
    position = 0
    while True:
        match = _TERM_PATTERN.search(text, position)
        if match is None:
            return
        term = match.group()
        # Numeric characters such as "\u00b2" are word characters but not letters.
        if term[0].isdecimal() or term[0].isalpha():
            yield term
            position = match.end()
        else:
            position = match.start() + 1


def iter_terms(text: str, *, stem: bool = True) -> Iterator[str]:
    """Yield normalized terms from text lazily.

    Numeric runs and alphanumeric words starting with a letter are terms,
    everything else separates them. Terms are lowercased and, when ``stem`` is
    set, stemmed, so the same flag must be used for documents and queries.
    """
    if not text:
        return
    for raw in _iter_raw_terms(text):
        term = raw.lower()
        yield stem_term(term) if stem else term


def tokenize(text: str, *, stem: bool = True) -> List[str]:
    return list(iter_terms(text, stem=stem))


def normalize_whitespace(lines: Iterable[str]) -> str:
    """Collapse whitespace and join lines."""
    return "\n".join(line.strip() for line in lines if line.strip())
