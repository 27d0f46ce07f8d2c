from datetime import datetime

from docscan.analysis.models import DocumentMetadata, RawDocument, StructuralExtraction
from docscan.logging.logger import Log
from docscan.pdf.base import BasePdfBackend
from docscan.pdf.dates import parse_pdf_date

PDF_HEADER_TOKEN = "%PDF-"
LINEARIZED_MARKER = "/Linearized"
XFA_MARKER = "/XFA"


class StructuralExtractor:
    """Recovers metadata and low-level container markers from raw PDF bytes.

    Backend failures propagate unchanged: there is no partial-metadata result.
    """

    def __init__(self, backend: BasePdfBackend) -> None:
        self._backend = backend

    def extract(self, document: RawDocument) -> StructuralExtraction:
        parsed = self._backend.parse(document.data)
        # latin-1 maps every byte to exactly one character
        raw_text = document.data.decode("latin-1")

        metadata = DocumentMetadata(
            num_pages=parsed.num_pages,
            producer=parsed.info.get("Producer") or None,
            creator=parsed.info.get("Creator") or None,
            creation_date=self._parse_date(parsed.info, "CreationDate"),
            modification_date=self._parse_date(parsed.info, "ModDate"),
            is_linearized=LINEARIZED_MARKER in raw_text,
            has_xfa=XFA_MARKER in raw_text,
        )
        revision_count = raw_text.count(PDF_HEADER_TOKEN)
        Log.debug(
            f"Structure: {metadata.num_pages} pages, {revision_count} header(s), "
            f"linearized={metadata.is_linearized}, xfa={metadata.has_xfa}"
        )
        return StructuralExtraction(
            metadata=metadata,
            text=parsed.text,
            revision_count=revision_count,
        )

    @staticmethod
    def _parse_date(info: dict[str, str], key: str) -> datetime | None:
        raw = info.get(key)
        parsed = parse_pdf_date(raw)
        if raw and parsed is None:
            Log.debug(f"Ignoring unparseable {key}: {raw!r}")
        return parsed
