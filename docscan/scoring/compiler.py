"""Combines the structural analysis and the content assessment into a risk verdict.

Scores run from 0 to 100 and grow with risk. The technical score adds a fixed
weight per fired signal, the total is a weighted mean of the technical and
content scores, and the risk level is read from the total. Every step is
monotonic: an extra or stronger signal never lowers a score.
"""

from dataclasses import dataclass, field
from enum import StrEnum
from typing import ClassVar

from docscan.analysis.models import AnalysisResult, FeatureTag, SuspiciousFeature
from docscan.content.models import ContentAssessment


class RiskLevel(StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass(frozen=True)
class ScoreCard:
    technical_score: float
    ia_score: float
    score_total: float
    risk_level: RiskLevel
    recommendation: str
    flags: list[SuspiciousFeature] = field(default_factory=list)
    justification: str = ""


class ScoreCompiler:
    FEATURE_WEIGHTS: ClassVar[dict[FeatureTag, int]] = {
        FeatureTag.MULTIPLE_PDF_VERSIONS: 30,
        FeatureTag.HIDDEN_PAGES_DETECTED: 25,
        FeatureTag.MODIFICATION_AFTER_CREATION: 15,
        FeatureTag.ABNORMAL_COMPRESSION: 8,
    }
    XFA_WEIGHT: ClassVar[int] = 10

    TECHNICAL_WEIGHT: ClassVar[float] = 0.6
    CONTENT_WEIGHT: ClassVar[float] = 0.4

    HIGH_RISK_THRESHOLD: ClassVar[float] = 60
    MEDIUM_RISK_THRESHOLD: ClassVar[float] = 30
    HIGH_CONFIDENCE: ClassVar[float] = 0.7

    RECOMMENDATIONS: ClassVar[dict[RiskLevel, str]] = {
        RiskLevel.HIGH: "reject",
        RiskLevel.MEDIUM: "request_additional_validation",
        RiskLevel.LOW: "accept",
    }
    RISK_MESSAGES: ClassVar[dict[RiskLevel, str]] = {
        RiskLevel.HIGH: "The document shows a high risk of tampering.",
        RiskLevel.MEDIUM: "The document shows warning signs; additional validation is recommended.",
        RiskLevel.LOW: "The document shows a low risk of tampering.",
    }

    def compile(self, analysis: AnalysisResult, content: ContentAssessment) -> ScoreCard:
        technical = self.technical_score(analysis)
        ia_score = min(100.0, max(0.0, content.score))
        total = self.total_score(technical, ia_score)
        risk_level = self.risk_level(total)
        return ScoreCard(
            technical_score=technical,
            ia_score=ia_score,
            score_total=total,
            risk_level=risk_level,
            recommendation=self.RECOMMENDATIONS[risk_level],
            flags=list(analysis.suspicious_features),
            justification=self._justification(analysis, content, risk_level),
        )

    def technical_score(self, analysis: AnalysisResult) -> float:
        score = sum(self.FEATURE_WEIGHTS[tag] for tag in set(analysis.feature_tags))
        if analysis.metadata.has_xfa:
            score += self.XFA_WEIGHT
        return float(min(100, score))

    def total_score(self, technical: float, ia_score: float) -> float:
        return float(round(technical * self.TECHNICAL_WEIGHT + ia_score * self.CONTENT_WEIGHT))

    def risk_level(self, total: float) -> RiskLevel:
        if total >= self.HIGH_RISK_THRESHOLD:
            return RiskLevel.HIGH
        if total >= self.MEDIUM_RISK_THRESHOLD:
            return RiskLevel.MEDIUM
        return RiskLevel.LOW

    def _justification(
        self,
        analysis: AnalysisResult,
        content: ContentAssessment,
        risk_level: RiskLevel,
    ) -> str:
        parts = [f"Technical: {analysis.justification}"]
        confident = [
            f"{risk.type.value} ({risk.confidence * 100:.0f}%)"
            for risk in content.risks
            if risk.confidence >= self.HIGH_CONFIDENCE
        ]
        if confident:
            parts.append(f"Content: {', '.join(confident)} identified.")
        parts.append(self.RISK_MESSAGES[risk_level])
        return " ".join(parts)
