from pathlib import Path

from docscan.scan.exceptions import FileReadError


def upload_file_path(files_root: Path, job_id: str) -> Path:
    """Build path to an uploaded file: {files_root}/{job_id}.pdf"""
    return files_root / f"{job_id}.pdf"


class FileStore:
    """Keeps uploaded bytes on local disk between submission and analysis."""

    def __init__(self, files_root: Path) -> None:
        self._files_root = files_root

    def save(self, job_id: str, data: bytes) -> Path:
        path = upload_file_path(self._files_root, job_id)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
        return path

    def load(self, job_id: str) -> bytes:
        """Read the stored upload.

        Raises:
            FileReadError: if the file is missing or unreadable.
        """
        path = upload_file_path(self._files_root, job_id)
        try:
            return path.read_bytes()
        except OSError as exc:
            raise FileReadError(f"Cannot read upload for {job_id} at {path}: {exc}") from exc

    def delete(self, job_id: str) -> None:
        upload_file_path(self._files_root, job_id).unlink(missing_ok=True)
