from pathlib import Path

from docscan.analysis.analyzer import build_analyzer
from docscan.config.settings import Settings
from docscan.content.factory import ContentScorerFactory
from docscan.database.repositories.scan_job_repository import ScanJobRepository
from docscan.logging.logger import Log
from docscan.scan.file_store import FileStore
from docscan.scan.models import ScanResult
from docscan.scan.pipeline import PipelineStep, ScanContext
from docscan.scan.steps import (
    AnalyzeDocumentStep,
    AssessContentStep,
    CompileScoreStep,
    DiscardFileStep,
    LoadDocumentStep,
    MarkFailedStep,
    MarkProcessingStep,
    PersistResultStep,
)
from docscan.scoring.compiler import ScoreCompiler


class Processor:
    """Runs the scan pipeline for one job.

    Pipeline: mark processing -> load -> analyze -> assess content -> score -> persist.
    Any step error marks the job failed and is re-raised. The cleanup step
    runs whatever the outcome.
    """

    def __init__(
        self,
        steps: list[PipelineStep],
        failed_step: PipelineStep,
        cleanup_step: PipelineStep | None = None,
    ) -> None:
        self._steps = steps
        self._failed_step = failed_step
        self._cleanup_step = cleanup_step

    def process(self, job_id: str, file_name: str) -> ScanResult:
        Log.info(f"Processing scan {job_id} ({file_name})")
        context = ScanContext(job_id=job_id, file_name=file_name)
        try:
            for step in self._steps:
                context = step.run(context)
        except Exception as exc:
            context.error_message = str(exc) or type(exc).__name__
            self._failed_step.run(context)
            raise
        finally:
            if self._cleanup_step is not None:
                self._cleanup_step.run(context)

        if context.result is None:
            raise RuntimeError(f"Pipeline finished without a result for scan {job_id}")
        return context.result


def build_processor(
    settings: Settings,
    job_repo: ScanJobRepository,
    files_root: Path | None = None,
) -> Processor:
    """Build a Processor with all required adapters."""
    file_store = FileStore(files_root if files_root is not None else Path(settings.files_root))
    steps: list[PipelineStep] = [
        MarkProcessingStep(job_repo),
        LoadDocumentStep(file_store),
        AnalyzeDocumentStep(build_analyzer(settings)),
        AssessContentStep(ContentScorerFactory.create(settings)),
        CompileScoreStep(ScoreCompiler()),
        PersistResultStep(job_repo),
    ]
    return Processor(
        steps=steps,
        failed_step=MarkFailedStep(job_repo),
        cleanup_step=DiscardFileStep(file_store),
    )
