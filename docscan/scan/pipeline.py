from abc import ABC, abstractmethod
from dataclasses import dataclass

from docscan.analysis.models import AnalysisResult, RawDocument
from docscan.content.models import ContentAssessment
from docscan.scan.models import ScanResult
from docscan.scoring.compiler import ScoreCard


@dataclass(slots=True)
class ScanContext:
    job_id: str
    file_name: str
    document: RawDocument | None = None
    analysis: AnalysisResult | None = None
    content: ContentAssessment | None = None
    score_card: ScoreCard | None = None
    result: ScanResult | None = None
    error_message: str = ""


class PipelineStep(ABC):
    @abstractmethod
    def run(self, context: ScanContext) -> ScanContext:
        raise NotImplementedError
