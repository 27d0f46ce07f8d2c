from docscan.logging.logger import Log
from docscan.scan.models import ScanJob
from docscan.scan.processor import Processor


class JobRunner:
    """Run one claimed scan job and keep its failure from reaching the poll loop.

    The processor marks failed jobs itself; a failed analysis is not retried,
    the document has to be submitted again.
    """

    def __init__(self, processor: Processor) -> None:
        self._processor = processor

    def run(self, job: ScanJob) -> bool:
        """Execute a single job. Returns True when the job completed."""
        Log.info(f"Running scan {job.id}")
        try:
            self._processor.process(job.id, job.file_name)
        except Exception as exc:
            Log.error(f"Scan {job.id} failed: {exc}")
            return False
        Log.info(f"Scan {job.id} completed successfully")
        return True
