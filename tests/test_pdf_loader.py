"""Tests for PDF text extraction."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock, patch

from rankedsearch.ingestion.pdf_loader import _FITZ_LOCK, extract_pdf_text, iter_text_parts


def _mock_document(*texts: str) -> MagicMock:
    pages = []
    for text in texts:
        page = MagicMock()
        page.get_text.return_value = text
        pages.append(page)

    doc = MagicMock()
    doc.__len__ = MagicMock(return_value=len(pages))
    doc.__getitem__ = MagicMock(side_effect=lambda i: pages[i])
    return doc


class TestIterTextParts:
    """Test iter_text_parts function."""

    @patch("rankedsearch.ingestion.pdf_loader.fitz")
    def test_iter_text_parts_multiple_pages(self, mock_fitz: MagicMock, tmp_path: Path) -> None:
        """Should extract text from multiple pages."""
        mock_fitz.open.return_value = _mock_document("Page 1", "Page 2", "Page 3")

        pdf_path = tmp_path / "multi.pdf"
        pdf_path.write_bytes(b"dummy")

        parts = list(iter_text_parts(pdf_path))

        assert parts == ["Page 1", "Page 2", "Page 3"]

    @patch("rankedsearch.ingestion.pdf_loader.fitz")
    def test_iter_text_parts_normalizes_whitespace(
        self, mock_fitz: MagicMock, tmp_path: Path
    ) -> None:
        """Should strip lines and drop blank ones within a page."""
        mock_fitz.open.return_value = _mock_document("  first  \n\n   second\n", "   ")

        parts = list(iter_text_parts(tmp_path / "a.pdf"))

        assert parts == ["first\nsecond"]

    @patch("rankedsearch.ingestion.pdf_loader.fitz")
    def test_iter_text_parts_closes_document(self, mock_fitz: MagicMock, tmp_path: Path) -> None:
        """Should close the document after reading."""
        doc = _mock_document("text")
        mock_fitz.open.return_value = doc

        list(iter_text_parts(tmp_path / "a.pdf"))

        doc.close.assert_called_once()


class TestExtractPdfText:
    """Test extract_pdf_text function."""

    @patch("rankedsearch.ingestion.pdf_loader.fitz")
    def test_extract_joins_pages(self, mock_fitz: MagicMock, tmp_path: Path) -> None:
        """Should join pages with newlines."""
        mock_fitz.open.return_value = _mock_document("cat dog", "dog bird")

        assert extract_pdf_text(tmp_path / "a.pdf") == "cat dog\ndog bird"

    @patch("rankedsearch.ingestion.pdf_loader.fitz")
    def test_extract_open_error(self, mock_fitz: MagicMock, tmp_path: Path) -> None:
        """Should return None when the file cannot be opened."""
        mock_fitz.open.side_effect = Exception("Cannot open file")

        assert extract_pdf_text(tmp_path / "broken.pdf") is None

    @patch("rankedsearch.ingestion.pdf_loader.fitz")
    def test_extract_page_error_discards_whole_file(
        self, mock_fitz: MagicMock, tmp_path: Path
    ) -> None:
        """Should not return partial content when one page fails."""
        good = MagicMock()
        good.get_text.return_value = "Page 1"
        bad = MagicMock()
        bad.get_text.side_effect = Exception("Extraction failed")
        doc = MagicMock()
        doc.__len__ = MagicMock(return_value=2)
        doc.__getitem__ = MagicMock(side_effect=lambda i: [good, bad][i])
        mock_fitz.open.return_value = doc

        assert extract_pdf_text(tmp_path / "error.pdf") is None
        assert not _FITZ_LOCK.locked()

    @patch("rankedsearch.ingestion.pdf_loader.fitz")
    def test_extract_serializes_pymupdf_access(
        self, mock_fitz: MagicMock, tmp_path: Path
    ) -> None:
        """Should hold the module lock while PyMuPDF reads pages."""
        held = []
        page = MagicMock()
        page.get_text.side_effect = lambda: held.append(_FITZ_LOCK.locked()) or "text"
        doc = MagicMock()
        doc.__len__ = MagicMock(return_value=1)
        doc.__getitem__ = MagicMock(return_value=page)
        mock_fitz.open.return_value = doc

        assert extract_pdf_text(tmp_path / "a.pdf") == "text"
        assert held == [True]
        assert not _FITZ_LOCK.locked()
