from dataclasses import dataclass, field
from enum import StrEnum


class ContentRiskType(StrEnum):
    FORGED_SIGNATURE = "forged_signature"
    ALTERED_TEXT = "altered_text"
    CONTENT_INCONSISTENCY = "content_inconsistency"
    SUSPICIOUS_STRUCTURE = "suspicious_structure"
    EDITED_IMAGE = "edited_image"
    FAKE_STAMP = "fake_stamp"


@dataclass(frozen=True)
class ContentRisk:
    """A risk the content pass found in the document text."""

    type: ContentRiskType
    confidence: float
    justification: str = ""


@dataclass(frozen=True)
class ContentAssessment:
    """Output of the content heuristics pass. ``score`` is 0-100, higher is riskier."""

    score: float
    risks: list[ContentRisk] = field(default_factory=list)
    recommendation: str = ""
    analysis: str = ""
