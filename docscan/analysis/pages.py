from abc import ABC, abstractmethod

from docscan.analysis.models import PageDetail, RawDocument
from docscan.logging.logger import Log
from docscan.pdf.base import PAGE_SEPARATOR, BasePdfBackend


class PageExtractor(ABC):
    """Produces one PageDetail per declared page."""

    @abstractmethod
    def extract(
        self, document: RawDocument, num_pages: int, full_text: str
    ) -> list[PageDetail]:
        raise NotImplementedError


def _page_detail(page_num: int, text: str) -> PageDetail:
    trimmed = text.strip()
    return PageDetail(
        page_num=page_num,
        has_content=len(trimmed) > 0,
        text_length=len(trimmed),
    )


class PrimaryPageExtractor(PageExtractor):
    """Walks the page tree through the backend in a single open of the document."""

    def __init__(self, backend: BasePdfBackend) -> None:
        self._backend = backend

    def extract(
        self, document: RawDocument, num_pages: int, full_text: str
    ) -> list[PageDetail]:
        texts = self._backend.extract_page_texts(document.data)
        return [_page_detail(page_num, text) for page_num, text in enumerate(texts, start=1)]


class FallbackPageExtractor(PageExtractor):
    """Splits the whole-document text on form feeds. Never raises."""

    def extract(
        self, document: RawDocument, num_pages: int, full_text: str
    ) -> list[PageDetail]:
        segments = (full_text or "").split(PAGE_SEPARATOR)
        return [
            _page_detail(page_num, segments[page_num - 1] if page_num <= len(segments) else "")
            for page_num in range(1, num_pages + 1)
        ]


class PageContentReconciler:
    """Chooses between the page-tree walk and the form-feed heuristic."""

    def __init__(
        self,
        primary: PageExtractor,
        fallback: PageExtractor | None = None,
    ) -> None:
        self._primary = primary
        self._fallback = fallback if fallback is not None else FallbackPageExtractor()

    def reconcile(
        self, document: RawDocument, num_pages: int, full_text: str
    ) -> list[PageDetail]:
        """Return exactly ``num_pages`` page details.

        A failing primary strategy is a recovered condition: it is logged and
        the fallback result is returned in its place.
        """
        try:
            details = self._primary.extract(document, num_pages, full_text)
        except Exception as exc:
            Log.warning(f"Per-page extraction failed, using form-feed fallback: {exc}")
            return self._fallback.extract(document, num_pages, full_text)

        if len(details) != num_pages:
            Log.warning(
                f"Per-page extraction returned {len(details)} of {num_pages} pages, "
                "using form-feed fallback"
            )
            return self._fallback.extract(document, num_pages, full_text)
        return details


def has_hidden_pages(page_details: list[PageDetail]) -> bool:
    return any(not page.has_content for page in page_details)
