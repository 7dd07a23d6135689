"""File extension to content extractor dispatch."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Dict, Mapping, Optional

from rankedsearch.ingestion.containers import extract_docx_text, extract_odt_text
from rankedsearch.ingestion.pdf_loader import extract_pdf_text
from rankedsearch.models import ExtractorKind

LOGGER = logging.getLogger(__name__)

Extractor = Callable[[Path], Optional[str]]

# Matched case-sensitively against Path.suffix, anything else is plain text.
EXTENSION_EXTRACTORS: Mapping[str, ExtractorKind] = {
    ".docx": ExtractorKind.DOCX,
    ".odt": ExtractorKind.ODT,
    ".pdf": ExtractorKind.PDF,
    ".doc": ExtractorKind.UNSUPPORTED,
    ".ppt": ExtractorKind.UNSUPPORTED,
    ".xls": ExtractorKind.UNSUPPORTED,
}


def extract_plain_text(path: Path) -> Optional[str]:
    try:
        return Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        LOGGER.debug("Skipping %s: %s", path, exc)
        return None


def extract_unsupported(path: Path) -> Optional[str]:
    """Declared formats without an extraction routine contribute nothing."""
    return None


_EXTRACTORS: Dict[ExtractorKind, Extractor] = {
    ExtractorKind.PLAIN_TEXT: extract_plain_text,
    ExtractorKind.DOCX: extract_docx_text,
    ExtractorKind.ODT: extract_odt_text,
    ExtractorKind.PDF: extract_pdf_text,
    ExtractorKind.UNSUPPORTED: extract_unsupported,
}


def extractor_for(path: Path) -> ExtractorKind:
    """Choose the extraction routine for a path from its extension."""
    return EXTENSION_EXTRACTORS.get(Path(path).suffix, ExtractorKind.PLAIN_TEXT)


def extract(kind: ExtractorKind, path: Path) -> Optional[str]:
    """Run the extraction routine registered for ``kind`` on ``path``."""
    return _EXTRACTORS[kind](path)
