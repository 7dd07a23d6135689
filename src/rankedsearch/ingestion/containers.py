"""Text extraction for office documents.

DOCX files are read with python-docx, ODT files by parsing content.xml.
"""

from __future__ import annotations

import logging
import zipfile
import zlib
from pathlib import Path
from typing import Iterator, Optional
from xml.etree import ElementTree as ET

from docx import Document as DocxDocument

LOGGER = logging.getLogger(__name__)

ODF_TEXT_NS = "urn:oasis:names:tc:opendocument:xmlns:text:1.0"

_ODT_ERRORS = (OSError, RuntimeError, KeyError, zipfile.BadZipFile, zlib.error, ET.ParseError)

_ODF_BLOCKS = (f"{{{ODF_TEXT_NS}}}p", f"{{{ODF_TEXT_NS}}}h")
_ODF_TAB = f"{{{ODF_TEXT_NS}}}tab"
_ODF_SPACE = f"{{{ODF_TEXT_NS}}}s"
_ODF_BREAK = f"{{{ODF_TEXT_NS}}}line-break"


def _odf_inline_text(node: ET.Element) -> str:
    pieces = [node.text or ""]
    for child in node:
        if child.tag == _ODF_TAB:
            pieces.append("\t")
        elif child.tag in (_ODF_SPACE, _ODF_BREAK):
            pieces.append(" ")
        elif child.tag not in _ODF_BLOCKS:
            pieces.append(_odf_inline_text(child))
        pieces.append(child.tail or "")
    return "".join(pieces)


def _iter_odt_paragraphs(root: ET.Element) -> Iterator[str]:
    for node in root.iter():
        if node.tag in _ODF_BLOCKS:
            yield _odf_inline_text(node)


def _iter_docx_paragraphs(doc) -> Iterator[str]:
    """Body paragraphs, then table cells, then section headers and footers."""
    for paragraph in doc.paragraphs:
        yield paragraph.text
    for table in doc.tables:
        for row in table.rows:
            for cell in row.cells:
                for paragraph in cell.paragraphs:
                    yield paragraph.text
    for section in doc.sections:
        for part in (section.header, section.footer):
            if part.is_linked_to_previous:
                continue
            for paragraph in part.paragraphs:
                yield paragraph.text


def extract_docx_text(path: Path) -> Optional[str]:
    """Concatenate the paragraphs of a Word document, one per line."""
    try:
        doc = DocxDocument(str(path))
        return "\n".join(_iter_docx_paragraphs(doc))
    except Exception as exc:
        LOGGER.debug("Failed to read DOCX %s: %s", path, exc)
        return None


def extract_odt_text(path: Path) -> Optional[str]:
    """Concatenate the paragraphs and headings of an OpenDocument text file."""
    try:
        with zipfile.ZipFile(path) as archive:
            root = ET.fromstring(archive.read("content.xml"))
    except _ODT_ERRORS as exc:
        LOGGER.debug("Failed to read ODT %s: %s", path, exc)
        return None
    return "\n".join(_iter_odt_paragraphs(root))
