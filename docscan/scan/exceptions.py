class ScanError(Exception):
    """Base exception for all scan-job errors."""


class UploadValidationError(ScanError):
    """Raised when an upload is missing, too large, or of an unsupported type."""


class ScanNotFoundError(ScanError):
    """Raised when no scan job exists for the given id."""


class ScanNotReadyError(ScanError):
    """Raised when a scan job has not produced its result yet."""

    def __init__(self, job_id: str, status: str) -> None:
        super().__init__(f"Scan {job_id} is still {status}")
        self.job_id = job_id
        self.status = status


class ScanFailedError(ScanError):
    """Raised when a scan job ended in the failed state."""

    def __init__(self, job_id: str, reason: str | None) -> None:
        super().__init__(f"Scan {job_id} failed: {reason or 'unknown error'}")
        self.job_id = job_id
        self.reason = reason


class InvalidTransitionError(ScanError):
    """Raised when a job update would leave a terminal state."""


class FileReadError(ScanError):
    """Raised when a stored upload cannot be read from disk."""
