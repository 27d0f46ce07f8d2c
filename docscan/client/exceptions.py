POLL_TIMEOUT_MESSAGE = "Timeout ao processar documento (processamento demorado)"


class ScanClientError(Exception):
    """Raised when the scan API answers with an unexpected status or payload."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ScanUploadError(ScanClientError):
    """Raised when the scan API rejects an upload."""
