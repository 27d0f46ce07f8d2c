import time

from docscan.config.settings import Settings
from docscan.database.connection import get_connection
from docscan.database.repositories.scan_job_repository import ScanJobRepository
from docscan.logging.logger import Log
from docscan.scan.models import ScanJob
from docscan.worker.job_runner import JobRunner

STALE_JOB_ERROR = "Scan abandoned: worker stopped before it finished"


class Worker:
    """Poll loop: claim -> dispatch, or sweep stale jobs and sleep when the queue is empty."""

    def __init__(
        self,
        job_repo: ScanJobRepository,
        job_runner: JobRunner,
        settings: Settings,
    ) -> None:
        self._job_repo = job_repo
        self._job_runner = job_runner
        self._settings = settings

    def run(self, max_jobs: int | None = None) -> None:
        """Main poll loop. Runs forever until interrupted.

        If max_jobs is set, stop after processing that many jobs (for testing).
        """
        Log.info("Worker started, polling for scan jobs")
        jobs_done = 0
        try:
            self._sweep_stale_jobs()
            while max_jobs is None or jobs_done < max_jobs:
                job = self._try_claim_job()
                if job is None:
                    self._sweep_stale_jobs()
                    Log.debug("No scan jobs queued, sleeping")
                    time.sleep(self._settings.job_poll_interval_seconds)
                    continue
                self._job_runner.run(job)
                jobs_done += 1
        except KeyboardInterrupt:
            Log.info("Worker shutting down gracefully")

    def _try_claim_job(self) -> ScanJob | None:
        """Attempt to claim the next queued job. Database errors are retried next tick."""
        try:
            with get_connection() as conn:
                return self._job_repo.claim_next_job(conn)
        except Exception as exc:
            Log.warning(f"Database error, will retry: {exc}")
            return None

    def _sweep_stale_jobs(self) -> None:
        """Fail jobs a dead worker left in processing. Errors are retried next tick."""
        try:
            swept = self._job_repo.fail_stale_jobs(
                self._settings.stale_job_timeout_seconds, STALE_JOB_ERROR
            )
        except Exception as exc:
            Log.warning(f"Stale job sweep failed, will retry: {exc}")
            return
        if swept:
            Log.warning(f"Failed {swept} stale processing job(s)")
