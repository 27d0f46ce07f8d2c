"""HTTP surface of the scan service: submit a document, poll for its result."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, File, Query, Request, UploadFile
from fastapi.responses import JSONResponse

from docscan.config.settings import Settings
from docscan.database.connection import close_pool, init_pool
from docscan.database.migrations import apply_schema
from docscan.database.repositories.scan_job_repository import ScanJobRepository
from docscan.logging.logger import Log
from docscan.scan.exceptions import (
    ScanFailedError,
    ScanNotFoundError,
    ScanNotReadyError,
    UploadValidationError,
)
from docscan.scan.orchestrator import ScanOrchestrator, build_orchestrator


def create_app(
    settings: Settings | None = None,
    orchestrator: ScanOrchestrator | None = None,
) -> FastAPI:
    """Build the FastAPI app.

    Without an injected orchestrator the app opens the database pool on
    startup and closes it on shutdown.
    """
    settings = settings or Settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if orchestrator is not None:
            yield
            return
        Log.configure(settings.log_level)
        init_pool(settings)
        try:
            apply_schema()
            app.state.orchestrator = build_orchestrator(settings, ScanJobRepository())
            yield
        finally:
            close_pool()

    app = FastAPI(title="Document Integrity Scanner", version="1.0.0", lifespan=lifespan)
    if orchestrator is not None:
        app.state.orchestrator = orchestrator

    @app.exception_handler(Exception)
    async def unexpected_error(_request: Request, exc: Exception) -> JSONResponse:
        Log.error(f"Unhandled API error: {exc}")
        return JSONResponse(status_code=500, content={"error": "Internal server error"})

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.post("/scan", status_code=202)
    def submit_scan(request: Request, file: UploadFile = File(...)) -> JSONResponse:
        file_bytes = file.file.read()
        try:
            job = _orchestrator(request).submit(
                file_bytes,
                file.filename or "",
                file.content_type or "",
            )
        except UploadValidationError as exc:
            return JSONResponse(status_code=400, content={"error": str(exc)})
        return JSONResponse(
            status_code=202,
            content={
                "id": job.id,
                "fileName": job.file_name,
                "fileSize": job.file_size_bytes,
                "mimeType": job.mime_type,
                "status": job.status.value,
                "message": "Document accepted. Scan in progress.",
            },
        )

    @app.get("/scan")
    def poll_scan(request: Request, id: str = Query(...)) -> JSONResponse:  # noqa: A002
        return _result_response(_orchestrator(request), id)

    @app.get("/scans/{scan_id}")
    def get_scan(request: Request, scan_id: str) -> JSONResponse:
        return _result_response(_orchestrator(request), scan_id)

    @app.get("/scans")
    def list_scans(request: Request, limit: int = Query(20, ge=1, le=100)) -> list[dict[str, object]]:
        return [result.to_dict() for result in _orchestrator(request).list_recent(limit)]

    return app


def _orchestrator(request: Request) -> ScanOrchestrator:
    return request.app.state.orchestrator  # type: ignore[no-any-return]


def _result_response(orchestrator: ScanOrchestrator, scan_id: str) -> JSONResponse:
    try:
        result = orchestrator.get_result(scan_id)
    except ScanNotReadyError as exc:
        return JSONResponse(status_code=404, content={"id": exc.job_id, "status": exc.status})
    except ScanNotFoundError:
        return JSONResponse(status_code=404, content={"error": "Scan not found"})
    except ScanFailedError as exc:
        return JSONResponse(
            status_code=500,
            content={"error": exc.reason or "Scan failed", "status": "failed"},
        )
    return JSONResponse(status_code=200, content=result.to_dict())
