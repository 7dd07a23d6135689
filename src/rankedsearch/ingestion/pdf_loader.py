"""PDF text extraction.

Uses PyMuPDF (fitz) for text extraction, one page at a time.
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Iterator, Optional

import fitz  # PyMuPDF

from rankedsearch.utils.text import normalize_whitespace

LOGGER = logging.getLogger(__name__)

# PyMuPDF is not thread-safe, indexing workers read PDFs one at a time.
_FITZ_LOCK = threading.Lock()


def iter_text_parts(path: Path) -> Iterator[str]:
    """Yield the normalised text of a PDF file page by page.

    Errors propagate to the caller, a partially read PDF is not usable.
    """
    doc = fitz.open(path)
    try:
        for index in range(len(doc)):
            text = doc[index].get_text() or ""
            normalized = normalize_whitespace(text.splitlines())
            if normalized:
                yield normalized
    finally:
        doc.close()


def extract_pdf_text(path: Path) -> Optional[str]:
    """Return the text of every page joined by newlines, or None on failure."""
    try:
        with _FITZ_LOCK:
            return "\n".join(iter_text_parts(path))
    except Exception as exc:
        LOGGER.debug("Failed to read PDF %s: %s", path, exc)
        return None
