from datetime import datetime, timezone
from unittest.mock import MagicMock, patch

from docscan.scan.models import ScanJob, ScanStatus
from docscan.worker.worker import STALE_JOB_ERROR, Worker


def _make_worker() -> tuple[Worker, MagicMock, MagicMock]:
    """Create a Worker with mocked dependencies."""
    mock_repo = MagicMock()
    mock_runner = MagicMock()
    mock_repo.fail_stale_jobs.return_value = 0
    settings = MagicMock(job_poll_interval_seconds=1, stale_job_timeout_seconds=900)
    worker = Worker(mock_repo, mock_runner, settings)
    return worker, mock_repo, mock_runner


def _make_job(job_id: str = "scan-1") -> ScanJob:
    return ScanJob(
        id=job_id,
        file_name="doc.pdf",
        status=ScanStatus.PROCESSING,
        created_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
    )


class TestWorkerDispatch:
    def test_dispatches_job_to_runner(self) -> None:
        worker, _repo, mock_runner = _make_worker()
        job = _make_job()

        with patch.object(worker, "_try_claim_job", side_effect=[job, KeyboardInterrupt]):
            worker.run()

        mock_runner.run.assert_called_once_with(job)

    def test_dispatches_multiple_jobs(self) -> None:
        worker, _repo, mock_runner = _make_worker()

        with patch.object(
            worker,
            "_try_claim_job",
            side_effect=[_make_job("scan-1"), _make_job("scan-2"), KeyboardInterrupt],
        ):
            worker.run()

        assert mock_runner.run.call_count == 2

    def test_stops_after_max_jobs(self) -> None:
        worker, _repo, mock_runner = _make_worker()

        with patch.object(worker, "_try_claim_job", return_value=_make_job()):
            worker.run(max_jobs=3)

        assert mock_runner.run.call_count == 3


class TestWorkerSleep:
    def test_sleeps_when_no_job(self) -> None:
        worker, _repo, _runner = _make_worker()

        with (
            patch.object(worker, "_try_claim_job", side_effect=[None, KeyboardInterrupt]),
            patch("docscan.worker.worker.time.sleep") as mock_sleep,
        ):
            worker.run()

        mock_sleep.assert_called_once_with(1)


class TestClaim:
    def test_database_error_yields_no_job(self) -> None:
        worker, mock_repo, _runner = _make_worker()
        mock_repo.claim_next_job.side_effect = Exception("connection refused")

        with patch("docscan.worker.worker.get_connection"):
            assert worker._try_claim_job() is None

    def test_returns_claimed_job(self) -> None:
        worker, mock_repo, _runner = _make_worker()
        job = _make_job()
        mock_repo.claim_next_job.return_value = job

        with patch("docscan.worker.worker.get_connection"):
            assert worker._try_claim_job() is job


class TestWorkerShutdown:
    def test_handles_keyboard_interrupt(self) -> None:
        worker, _repo, _runner = _make_worker()

        with patch.object(worker, "_try_claim_job", side_effect=KeyboardInterrupt):
            worker.run()  # Should not raise


class TestStaleJobSweep:
    def test_sweeps_on_startup_and_when_idle(self) -> None:
        worker, mock_repo, _runner = _make_worker()

        with (
            patch.object(worker, "_try_claim_job", side_effect=[None, KeyboardInterrupt]),
            patch("docscan.worker.worker.time.sleep"),
        ):
            worker.run()

        assert mock_repo.fail_stale_jobs.call_count == 2
        mock_repo.fail_stale_jobs.assert_called_with(900, STALE_JOB_ERROR)

    def test_busy_loop_does_not_sweep_between_jobs(self) -> None:
        worker, mock_repo, _runner = _make_worker()

        with patch.object(worker, "_try_claim_job", return_value=_make_job()):
            worker.run(max_jobs=3)

        mock_repo.fail_stale_jobs.assert_called_once()

    def test_database_error_does_not_stop_worker(self) -> None:
        worker, mock_repo, mock_runner = _make_worker()
        mock_repo.fail_stale_jobs.side_effect = Exception("connection refused")
        job = _make_job()

        with patch.object(worker, "_try_claim_job", side_effect=[job, KeyboardInterrupt]):
            worker.run()

        mock_runner.run.assert_called_once_with(job)
