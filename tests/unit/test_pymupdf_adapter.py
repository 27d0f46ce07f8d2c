import pytest

from docscan.pdf.exceptions import PdfExtractionError
from docscan.pdf.pymupdf_adapter import PyMuPdfAdapter


class TestParse:
    def test_returns_page_count_and_text(self, multi_page_pdf_bytes: bytes) -> None:
        parsed = PyMuPdfAdapter().parse(multi_page_pdf_bytes)
        assert parsed.num_pages == 2
        assert "Page one content" in parsed.text
        assert "\f" in parsed.text

    def test_maps_info_keys_to_pdf_names(self, sample_pdf_bytes: bytes) -> None:
        parsed = PyMuPdfAdapter().parse(sample_pdf_bytes)
        assert "CreationDate" in parsed.info
        assert "creationDate" not in parsed.info

    def test_raises_on_invalid_bytes(self) -> None:
        with pytest.raises(PdfExtractionError, match="pymupdf"):
            PyMuPdfAdapter().parse(b"not a pdf")


class TestExtractPageText:
    def test_joins_words_of_requested_page(self, multi_page_pdf_bytes: bytes) -> None:
        assert PyMuPdfAdapter().extract_page_text(multi_page_pdf_bytes, 1) == "Page one content"

    def test_raises_for_out_of_range_page(self, sample_pdf_bytes: bytes) -> None:
        with pytest.raises(PdfExtractionError, match="out of range"):
            PyMuPdfAdapter().extract_page_text(sample_pdf_bytes, 0)


class TestExtractPageTexts:
    def test_returns_one_entry_per_page(self, multi_page_pdf_bytes: bytes) -> None:
        texts = PyMuPdfAdapter().extract_page_texts(multi_page_pdf_bytes)
        assert texts == ["Page one content", "Page two content"]

    def test_blank_page_is_empty(self, empty_pdf_bytes: bytes) -> None:
        assert PyMuPdfAdapter().extract_page_texts(empty_pdf_bytes) == [""]

    def test_raises_on_invalid_bytes(self) -> None:
        with pytest.raises(PdfExtractionError, match="page walk"):
            PyMuPdfAdapter().extract_page_texts(b"not a pdf")
