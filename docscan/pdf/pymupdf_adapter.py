import pymupdf

from docscan.pdf.base import PAGE_SEPARATOR, BasePdfBackend
from docscan.pdf.exceptions import PdfExtractionError
from docscan.pdf.models import ParsedPdf

# PyMuPDF exposes the info dictionary under its own key names.
_INFO_KEYS = {
    "producer": "Producer",
    "creator": "Creator",
    "creationDate": "CreationDate",
    "modDate": "ModDate",
}


class PyMuPdfAdapter(BasePdfBackend):
    """Parses PDFs using PyMuPDF."""

    def parse(self, pdf_bytes: bytes) -> ParsedPdf:
        try:
            with pymupdf.open(stream=pdf_bytes, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
                metadata = doc.metadata or {}
                info = {
                    pdf_key: metadata[key]
                    for key, pdf_key in _INFO_KEYS.items()
                    if metadata.get(key)
                }
                pages = [page.get_text() for page in doc]
            return ParsedPdf(
                num_pages=len(pages),
                info=info,
                text=PAGE_SEPARATOR.join(pages),
            )
        except PdfExtractionError:
            raise
        except Exception as exc:
            raise PdfExtractionError(f"pymupdf parse failed: {exc}") from exc

    def extract_page_text(self, pdf_bytes: bytes, page_number: int) -> str:
        try:
            with pymupdf.open(stream=pdf_bytes, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
                if not 1 <= page_number <= doc.page_count:
                    raise PdfExtractionError(
                        f"page {page_number} out of range (1..{doc.page_count})"
                    )
                words = [word[4] for word in doc[page_number - 1].get_text("words")]
            return " ".join(words).strip()
        except PdfExtractionError:
            raise
        except Exception as exc:
            raise PdfExtractionError(
                f"pymupdf failed on page {page_number}: {exc}"
            ) from exc

    def extract_page_texts(self, pdf_bytes: bytes) -> list[str]:
        try:
            with pymupdf.open(stream=pdf_bytes, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
                return [
                    " ".join(word[4] for word in page.get_text("words")).strip()
                    for page in doc
                ]
        except Exception as exc:
            raise PdfExtractionError(f"pymupdf page walk failed: {exc}") from exc
