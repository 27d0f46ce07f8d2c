from docscan.analysis.models import (
    DocumentMetadata,
    FeatureTag,
    PageDetail,
    SuspiciousFeature,
)

DEFAULT_MIN_BYTES_PER_PAGE = 1000


class SuspiciousFeatureDetector:
    """Evaluates the tampering heuristics over the structural and page outputs.

    Heuristics are independent: each one fires on its own evidence and the
    result lists them in evaluation order.
    """

    def __init__(self, min_bytes_per_page: int = DEFAULT_MIN_BYTES_PER_PAGE) -> None:
        self._min_bytes_per_page = min_bytes_per_page

    def detect(
        self,
        metadata: DocumentMetadata,
        raw_size: int,
        revision_count: int,
        page_details: list[PageDetail],
    ) -> list[SuspiciousFeature]:
        checks = (
            self._modification_after_creation(metadata),
            self._multiple_versions(revision_count),
            self._abnormal_compression(raw_size, metadata.num_pages),
            self._hidden_pages(page_details),
        )
        return [feature for feature in checks if feature is not None]

    def _modification_after_creation(
        self, metadata: DocumentMetadata
    ) -> SuspiciousFeature | None:
        created, modified = metadata.creation_date, metadata.modification_date
        if created is None or modified is None:
            return None
        created_ms = int(created.timestamp() * 1000)
        modified_ms = int(modified.timestamp() * 1000)
        if created_ms == modified_ms:
            return None
        return SuspiciousFeature(
            tag=FeatureTag.MODIFICATION_AFTER_CREATION,
            description=(
                f"Modification date {modified.isoformat()} differs from "
                f"creation date {created.isoformat()}"
            ),
        )

    def _multiple_versions(self, revision_count: int) -> SuspiciousFeature | None:
        if revision_count <= 1:
            return None
        return SuspiciousFeature(
            tag=FeatureTag.MULTIPLE_PDF_VERSIONS,
            description=f"{revision_count} PDF headers found (incremental edits)",
        )

    def _abnormal_compression(
        self, raw_size: int, num_pages: int
    ) -> SuspiciousFeature | None:
        if num_pages <= 0:
            return None
        bytes_per_page = raw_size / num_pages
        if bytes_per_page >= self._min_bytes_per_page:
            return None
        return SuspiciousFeature(
            tag=FeatureTag.ABNORMAL_COMPRESSION,
            description=(
                f"{bytes_per_page:.0f} bytes per page, below the "
                f"{self._min_bytes_per_page} bytes floor"
            ),
        )

    def _hidden_pages(self, page_details: list[PageDetail]) -> SuspiciousFeature | None:
        empty = [page.page_num for page in page_details if not page.has_content]
        if not empty:
            return None
        return SuspiciousFeature(
            tag=FeatureTag.HIDDEN_PAGES_DETECTED,
            description=f"No extractable text on page(s) {', '.join(map(str, empty))}",
        )


_JUSTIFICATIONS: dict[FeatureTag, str] = {
    FeatureTag.MODIFICATION_AFTER_CREATION: "The document was modified after it was created.",
    FeatureTag.MULTIPLE_PDF_VERSIONS: (
        "The file carries several incremental revisions, a sign of post-creation editing."
    ),
    FeatureTag.ABNORMAL_COMPRESSION: (
        "The file is unusually small for its page count, suggesting recompression "
        "or stripped content."
    ),
    FeatureTag.HIDDEN_PAGES_DETECTED: "Some declared pages have no extractable text.",
}


def build_justification(
    features: list[SuspiciousFeature], metadata: DocumentMetadata
) -> str:
    """Describe which heuristics fired and why."""
    parts = [
        f"{_JUSTIFICATIONS[feature.tag]} ({feature.description})"
        if feature.description
        else _JUSTIFICATIONS[feature.tag]
        for feature in features
    ]
    if metadata.has_xfa:
        parts.append("The document contains XFA forms, which can hide dynamic content.")
    if not parts:
        return "No structural signs of tampering were found."
    return " ".join(parts)
