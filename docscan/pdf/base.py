from abc import ABC, abstractmethod

from docscan.pdf.models import ParsedPdf

PAGE_SEPARATOR = "\f"


class BasePdfBackend(ABC):
    """Contract for all PDF parsing adapters."""

    @abstractmethod
    def parse(self, pdf_bytes: bytes) -> ParsedPdf:
        """Parse page count, info dictionary and full text from PDF bytes.

        Args:
            pdf_bytes: Raw PDF file content.

        Returns:
            ParsedPdf with page texts joined by PAGE_SEPARATOR.

        Raises:
            PdfExtractionError: if the document cannot be parsed.
        """

    @abstractmethod
    def extract_page_text(self, pdf_bytes: bytes, page_number: int) -> str:
        """Extract the text items of a single page, joined by single spaces.

        Args:
            pdf_bytes: Raw PDF file content.
            page_number: 1-based page index.

        Raises:
            PdfExtractionError: if the page cannot be read.
        """

    @abstractmethod
    def extract_page_texts(self, pdf_bytes: bytes) -> list[str]:
        """Extract the text items of every page from a single open of the document.

        Each entry matches ``extract_page_text`` for the same page.

        Raises:
            PdfExtractionError: if the document or any page cannot be read.
        """
