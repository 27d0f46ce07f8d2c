from typing import Any

import httpx

from docscan.client.exceptions import ScanClientError, ScanUploadError
from docscan.scan.models import ScanResult


class ScanClient:
    """Async HTTP client for the submit and poll endpoints."""

    def __init__(self, http: httpx.AsyncClient) -> None:
        self._http = http

    async def submit(
        self, file_bytes: bytes, file_name: str, mime_type: str = "application/pdf"
    ) -> str:
        """Upload a document and return its scan job id.

        Raises:
            ScanUploadError: if the API does not accept the upload.
            httpx.HTTPError: on transport failures.
        """
        response = await self._http.post(
            "/scan",
            files={"file": (file_name, file_bytes, mime_type)},
        )
        if response.status_code not in (200, 201, 202):
            raise ScanUploadError(
                f"Upload failed ({response.status_code}): {_error_message(response)}",
                status_code=response.status_code,
            )
        job_id = response.json().get("id")
        if not job_id:
            raise ScanUploadError("Upload response carries no scan id", response.status_code)
        return str(job_id)

    async def fetch_result(self, job_id: str) -> ScanResult | None:
        """Fetch the result once. Returns None while the scan is not ready.

        A 404 whose body carries an ``error`` means the id is unknown, not pending.

        Raises:
            ScanClientError: on an unknown id, any other status or an unreadable payload.
            httpx.HTTPError: on transport failures.
        """
        response = await self._http.get("/scan", params={"id": job_id})
        if response.status_code == 404:
            error = _body_error(response)
            if error is None:
                return None
            raise ScanClientError(f"Scan {job_id} not found: {error}", status_code=404)
        if response.status_code != 200:
            raise ScanClientError(
                f"Error fetching scan ({response.status_code}): {_error_message(response)}",
                status_code=response.status_code,
            )
        try:
            return ScanResult.from_dict(response.json())
        except (KeyError, TypeError, ValueError) as exc:
            raise ScanClientError(f"Malformed scan result: {exc}", status_code=200) from exc


def _body_error(response: httpx.Response) -> str | None:
    try:
        body: Any = response.json()
    except ValueError:
        return None
    if isinstance(body, dict) and "error" in body:
        return str(body["error"])
    return None


def _error_message(response: httpx.Response) -> str:
    error = _body_error(response)
    return error if error is not None else response.reason_phrase
