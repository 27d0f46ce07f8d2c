from datetime import datetime, timezone

from docscan.analysis.analyzer import DocumentAnalyzer
from docscan.analysis.models import RawDocument
from docscan.content.base import BaseContentScorer
from docscan.database.repositories.scan_job_repository import ScanJobRepository
from docscan.logging.logger import Log
from docscan.scan.file_store import FileStore
from docscan.scan.models import ScanResult
from docscan.scan.pipeline import PipelineStep, ScanContext
from docscan.scoring.compiler import ScoreCompiler


class MarkProcessingStep(PipelineStep):
    def __init__(self, job_repo: ScanJobRepository) -> None:
        self._job_repo = job_repo

    def run(self, context: ScanContext) -> ScanContext:
        self._job_repo.mark_processing(context.job_id)
        Log.info(f"Scan {context.job_id} marked as processing")
        return context


class MarkFailedStep(PipelineStep):
    def __init__(self, job_repo: ScanJobRepository) -> None:
        self._job_repo = job_repo

    def run(self, context: ScanContext) -> ScanContext:
        self._job_repo.mark_failed(context.job_id, context.error_message)
        Log.error(f"Scan {context.job_id} marked as failed: {context.error_message}")
        return context


class LoadDocumentStep(PipelineStep):
    def __init__(self, file_store: FileStore) -> None:
        self._file_store = file_store

    def run(self, context: ScanContext) -> ScanContext:
        context.document = RawDocument(self._file_store.load(context.job_id))
        Log.info(f"Loaded {context.document.size} bytes for scan {context.job_id}")
        return context


class AnalyzeDocumentStep(PipelineStep):
    def __init__(self, analyzer: DocumentAnalyzer) -> None:
        self._analyzer = analyzer

    def run(self, context: ScanContext) -> ScanContext:
        if context.document is None:
            raise ValueError("ScanContext.document must be set before analysis")
        context.analysis = self._analyzer.analyze(context.document)
        return context


class AssessContentStep(PipelineStep):
    def __init__(self, content_scorer: BaseContentScorer) -> None:
        self._content_scorer = content_scorer

    def run(self, context: ScanContext) -> ScanContext:
        if context.analysis is None:
            raise ValueError("ScanContext.analysis must be set before content assessment")
        context.content = self._content_scorer.assess(context.analysis.text_content)
        return context


class CompileScoreStep(PipelineStep):
    def __init__(self, compiler: ScoreCompiler) -> None:
        self._compiler = compiler

    def run(self, context: ScanContext) -> ScanContext:
        if context.analysis is None or context.content is None:
            raise ValueError("ScanContext.analysis and content must be set before scoring")
        card = self._compiler.compile(context.analysis, context.content)
        context.score_card = card
        context.result = ScanResult(
            id=context.job_id,
            file_name=context.file_name,
            score_total=card.score_total,
            technical_score=card.technical_score,
            ia_score=card.ia_score,
            risk_level=card.risk_level,
            recommendation=card.recommendation,
            flags=card.flags,
            justification=card.justification,
            created_at=datetime.now(timezone.utc),
        )
        Log.info(
            f"Scan {context.job_id} scored {card.score_total:.0f} "
            f"(technical {card.technical_score:.0f}, content {card.ia_score:.0f}): "
            f"{card.risk_level.value} risk"
        )
        return context


class PersistResultStep(PipelineStep):
    def __init__(self, job_repo: ScanJobRepository) -> None:
        self._job_repo = job_repo

    def run(self, context: ScanContext) -> ScanContext:
        if context.result is None:
            raise ValueError("ScanContext.result must be set before persist")
        self._job_repo.mark_completed(context.job_id, context.result)
        Log.info(f"Scan {context.job_id} completed")
        return context


class DiscardFileStep(PipelineStep):
    def __init__(self, file_store: FileStore) -> None:
        self._file_store = file_store

    def run(self, context: ScanContext) -> ScanContext:
        try:
            self._file_store.delete(context.job_id)
        except OSError as exc:
            Log.warning(f"Could not remove upload for scan {context.job_id}: {exc}")
        return context
