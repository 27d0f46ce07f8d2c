from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum


@dataclass(frozen=True)
class RawDocument:
    """Immutable byte buffer of one submitted document."""

    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)


@dataclass(frozen=True)
class DocumentMetadata:
    """Metadata and container markers recovered from a document."""

    num_pages: int
    producer: str | None = None
    creator: str | None = None
    creation_date: datetime | None = None
    modification_date: datetime | None = None
    is_linearized: bool = False
    has_xfa: bool = False


@dataclass(frozen=True)
class PageDetail:
    """Extractable-content summary for one declared page (1-based)."""

    page_num: int
    has_content: bool
    text_length: int = 0


class FeatureTag(StrEnum):
    MODIFICATION_AFTER_CREATION = "modification_after_creation"
    MULTIPLE_PDF_VERSIONS = "multiple_pdf_versions"
    ABNORMAL_COMPRESSION = "abnormal_compression"
    HIDDEN_PAGES_DETECTED = "hidden_pages_detected"


@dataclass(frozen=True)
class SuspiciousFeature:
    """A fired tampering heuristic."""

    tag: FeatureTag
    description: str = ""

    def to_dict(self) -> dict[str, str]:
        return {"type": self.tag.value, "description": self.description}


@dataclass(frozen=True)
class StructuralExtraction:
    """Output of the structural stage: metadata, full text and header count."""

    metadata: DocumentMetadata
    text: str
    revision_count: int


@dataclass(frozen=True)
class AnalysisResult:
    """Outcome of structural extraction, page reconciliation and feature detection."""

    metadata: DocumentMetadata
    text_content: str
    has_hidden_pages: bool
    suspicious_features: list[SuspiciousFeature] = field(default_factory=list)
    page_details: list[PageDetail] = field(default_factory=list)
    justification: str = ""

    @property
    def feature_tags(self) -> list[FeatureTag]:
        return [feature.tag for feature in self.suspicious_features]
