from docscan.config.settings import Settings
from docscan.database.connection import close_pool, init_pool
from docscan.database.migrations import apply_schema
from docscan.database.repositories.scan_job_repository import ScanJobRepository
from docscan.logging.logger import Log
from docscan.scan.processor import build_processor
from docscan.worker.job_runner import JobRunner
from docscan.worker.worker import Worker


def main() -> None:
    """Entry point: initialize pool -> ensure schema -> build dependencies -> start worker loop."""
    settings = Settings()
    Log.configure(settings.log_level)
    init_pool(settings)

    try:
        apply_schema()
        job_repo = ScanJobRepository()
        processor = build_processor(settings, job_repo)
        worker = Worker(job_repo, JobRunner(processor), settings)
        worker.run()
    finally:
        close_pool()


if __name__ == "__main__":
    main()
