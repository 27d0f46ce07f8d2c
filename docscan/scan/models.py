from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from typing import Any

from docscan.analysis.models import FeatureTag, SuspiciousFeature
from docscan.scoring.compiler import RiskLevel


class ScanStatus(StrEnum):
    QUEUED = "queued"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (ScanStatus.COMPLETED, ScanStatus.FAILED)


@dataclass(frozen=True)
class ScanJob:
    """One submitted document and where it is in its lifecycle."""

    id: str
    file_name: str
    status: ScanStatus
    created_at: datetime
    mime_type: str = "application/pdf"
    file_size_bytes: int = 0
    error_message: str | None = None


@dataclass(frozen=True)
class ScanResult:
    """Final verdict attached to a completed job. Written once, never updated."""

    id: str
    file_name: str
    score_total: float
    technical_score: float
    ia_score: float
    risk_level: RiskLevel
    recommendation: str
    created_at: datetime
    flags: list[SuspiciousFeature] = field(default_factory=list)
    justification: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the JSON shape returned by the poll endpoint."""
        return {
            "id": self.id,
            "fileName": self.file_name,
            "scoreTotal": self.score_total,
            "technicalScore": self.technical_score,
            "iaScore": self.ia_score,
            "riskLevel": self.risk_level.value,
            "recommendation": self.recommendation,
            "flags": [flag.to_dict() for flag in self.flags],
            "justification": self.justification,
            "createdAt": self.created_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ScanResult":
        """Parse the poll endpoint JSON shape.

        Raises:
            KeyError, ValueError: if a required field is missing or malformed.
        """
        return cls(
            id=data["id"],
            file_name=data["fileName"],
            score_total=float(data["scoreTotal"]),
            technical_score=float(data["technicalScore"]),
            ia_score=float(data["iaScore"]),
            risk_level=RiskLevel(data["riskLevel"]),
            recommendation=data["recommendation"],
            created_at=datetime.fromisoformat(data["createdAt"]),
            flags=[
                SuspiciousFeature(
                    tag=FeatureTag(flag["type"]),
                    description=flag.get("description", ""),
                )
                for flag in data.get("flags", [])
            ],
            justification=data.get("justification", ""),
        )
