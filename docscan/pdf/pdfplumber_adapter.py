import io

import pdfplumber

from docscan.pdf.base import PAGE_SEPARATOR, BasePdfBackend
from docscan.pdf.exceptions import PdfExtractionError
from docscan.pdf.models import ParsedPdf

_INFO_KEYS = ("Producer", "Creator", "CreationDate", "ModDate")


class PdfPlumberAdapter(BasePdfBackend):
    """Parses PDFs using pdfplumber (pdfminer.six underneath)."""

    def parse(self, pdf_bytes: bytes) -> ParsedPdf:
        try:
            with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
                info = {
                    key: value
                    for key, value in pdf.metadata.items()
                    if key in _INFO_KEYS and isinstance(value, str)
                }
                pages = [page.extract_text() or "" for page in pdf.pages]
            return ParsedPdf(
                num_pages=len(pages),
                info=info,
                text=PAGE_SEPARATOR.join(pages),
            )
        except PdfExtractionError:
            raise
        except Exception as exc:
            raise PdfExtractionError(f"pdfplumber parse failed: {exc}") from exc

    def extract_page_text(self, pdf_bytes: bytes, page_number: int) -> str:
        try:
            with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
                page = pdf.pages[page_number - 1]
                words = [word["text"] for word in page.extract_words()]
            return " ".join(words).strip()
        except Exception as exc:
            raise PdfExtractionError(
                f"pdfplumber failed on page {page_number}: {exc}"
            ) from exc

    def extract_page_texts(self, pdf_bytes: bytes) -> list[str]:
        try:
            with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
                return [
                    " ".join(word["text"] for word in page.extract_words()).strip()
                    for page in pdf.pages
                ]
        except Exception as exc:
            raise PdfExtractionError(f"pdfplumber page walk failed: {exc}") from exc
