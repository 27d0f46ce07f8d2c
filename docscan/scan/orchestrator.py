import uuid
from datetime import datetime, timezone
from pathlib import Path

from docscan.config.settings import Settings
from docscan.database.repositories.scan_job_repository import ScanJobRepository
from docscan.logging.logger import Log
from docscan.scan.exceptions import (
    ScanFailedError,
    ScanNotFoundError,
    ScanNotReadyError,
    UploadValidationError,
)
from docscan.scan.file_store import FileStore
from docscan.scan.models import ScanJob, ScanResult, ScanStatus

# A PDF header may be preceded by junk bytes; readers accept it within the first KiB.
_PDF_HEADER_WINDOW = 1024


def new_job_id() -> str:
    return f"scan-{uuid.uuid4().hex}"


class UploadValidator:
    """Checks an upload before any analysis is queued."""

    def __init__(self, max_size_bytes: int, allowed_mime_types: list[str]) -> None:
        self._max_size_bytes = max_size_bytes
        self._allowed_mime_types = frozenset(allowed_mime_types)

    def validate(self, file_bytes: bytes, file_name: str, mime_type: str) -> None:
        """Raises:
        UploadValidationError: if the upload is empty, too large, or not a supported type.
        """
        if not file_bytes:
            raise UploadValidationError("No file provided")
        if not file_name:
            raise UploadValidationError("File name is required")
        if len(file_bytes) > self._max_size_bytes:
            raise UploadValidationError(
                f"File is {len(file_bytes)} bytes, above the {self._max_size_bytes} bytes limit"
            )
        if mime_type not in self._allowed_mime_types:
            raise UploadValidationError(
                f"Unsupported file type '{mime_type}'. "
                f"Use: {', '.join(sorted(self._allowed_mime_types))}"
            )
        if mime_type == "application/pdf" and b"%PDF-" not in file_bytes[:_PDF_HEADER_WINDOW]:
            raise UploadValidationError("File declared as PDF has no PDF header")


class ScanOrchestrator:
    """Accepts uploads as queued scan jobs and hands out their results.

    Analysis itself runs in the worker; this class only writes the job row and
    the upload, and reads job state back.
    """

    def __init__(
        self,
        job_repo: ScanJobRepository,
        file_store: FileStore,
        validator: UploadValidator,
    ) -> None:
        self._job_repo = job_repo
        self._file_store = file_store
        self._validator = validator

    def submit(self, file_bytes: bytes, file_name: str, mime_type: str) -> ScanJob:
        self._validator.validate(file_bytes, file_name, mime_type)
        job = ScanJob(
            id=new_job_id(),
            file_name=file_name,
            status=ScanStatus.QUEUED,
            created_at=datetime.now(timezone.utc),
            mime_type=mime_type,
            file_size_bytes=len(file_bytes),
        )
        self._file_store.save(job.id, file_bytes)
        try:
            self._job_repo.create_job(job)
        except Exception:
            self._file_store.delete(job.id)
            raise
        Log.info(f"Scan {job.id} queued for {file_name} ({len(file_bytes)} bytes)")
        return job

    def get_result(self, job_id: str) -> ScanResult:
        """Return the result of a completed job.

        Raises:
            ScanNotFoundError: if the job id is unknown.
            ScanNotReadyError: while the job is queued or processing.
            ScanFailedError: if the job failed.
        """
        job = self._job_repo.find_by_id(job_id)
        if job is None:
            raise ScanNotFoundError(f"Scan {job_id} not found")
        if job.status == ScanStatus.FAILED:
            raise ScanFailedError(job_id, job.error_message)
        if job.status != ScanStatus.COMPLETED:
            raise ScanNotReadyError(job_id, job.status.value)

        result = self._job_repo.find_result(job_id)
        if result is None:
            raise ScanNotReadyError(job_id, job.status.value)
        return result

    def list_recent(self, limit: int = 20) -> list[ScanResult]:
        return self._job_repo.list_recent_results(limit)


def build_orchestrator(settings: Settings, job_repo: ScanJobRepository) -> ScanOrchestrator:
    return ScanOrchestrator(
        job_repo=job_repo,
        file_store=FileStore(Path(settings.files_root)),
        validator=UploadValidator(
            max_size_bytes=settings.max_upload_size_bytes,
            allowed_mime_types=settings.allowed_mime_types,
        ),
    )
