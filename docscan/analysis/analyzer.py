from docscan.analysis.detector import SuspiciousFeatureDetector, build_justification
from docscan.analysis.models import AnalysisResult, RawDocument
from docscan.analysis.pages import (
    PageContentReconciler,
    PrimaryPageExtractor,
    has_hidden_pages,
)
from docscan.analysis.structure import StructuralExtractor
from docscan.config.settings import Settings
from docscan.logging.logger import Log
from docscan.pdf.factory import PdfBackendFactory


class DocumentAnalyzer:
    """Runs structure extraction, page reconciliation and feature detection in sequence."""

    def __init__(
        self,
        extractor: StructuralExtractor,
        reconciler: PageContentReconciler,
        detector: SuspiciousFeatureDetector,
    ) -> None:
        self._extractor = extractor
        self._reconciler = reconciler
        self._detector = detector

    def analyze(self, document: RawDocument) -> AnalysisResult:
        structure = self._extractor.extract(document)
        metadata = structure.metadata

        page_details = self._reconciler.reconcile(
            document, metadata.num_pages, structure.text
        )
        features = self._detector.detect(
            metadata,
            raw_size=document.size,
            revision_count=structure.revision_count,
            page_details=page_details,
        )
        Log.info(
            f"Analyzed {metadata.num_pages} page(s), {document.size} bytes: "
            f"{[feature.tag.value for feature in features] or 'no'} suspicious features"
        )
        return AnalysisResult(
            metadata=metadata,
            text_content=structure.text,
            has_hidden_pages=has_hidden_pages(page_details),
            suspicious_features=features,
            page_details=page_details,
            justification=build_justification(features, metadata),
        )


def build_analyzer(settings: Settings) -> DocumentAnalyzer:
    """Build a DocumentAnalyzer on the configured PDF backend."""
    backend = PdfBackendFactory.create(settings)
    return DocumentAnalyzer(
        extractor=StructuralExtractor(backend),
        reconciler=PageContentReconciler(PrimaryPageExtractor(backend)),
        detector=SuspiciousFeatureDetector(
            min_bytes_per_page=settings.abnormal_compression_min_bytes_per_page
        ),
    )
