"""Client-side retrieval of scan results: bounded fixed-interval polling with cancellation."""

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import StrEnum

from docscan.client.exceptions import POLL_TIMEOUT_MESSAGE
from docscan.client.scan_client import ScanClient
from docscan.config.settings import Settings
from docscan.logging.logger import Log
from docscan.scan.models import ScanResult

DEFAULT_MAX_ATTEMPTS = 15
DEFAULT_INTERVAL_SECONDS = 2.0

SleepFn = Callable[[float], Awaitable[None]]
ResultCallback = Callable[[ScanResult], None]
ErrorCallback = Callable[[str], None]


class PollState(StrEnum):
    IDLE = "idle"
    POLLING = "polling"
    DELIVERED = "delivered"
    TIMED_OUT = "timed_out"
    CANCELLED = "cancelled"
    FAILED = "failed"


@dataclass(frozen=True)
class PollOutcome:
    state: PollState
    result: ScanResult | None = None
    error: str | None = None
    attempts: int = 0


class PollController:
    """Polls for one job's result at a fixed interval until it arrives or the attempts run out.

    The first attempt runs immediately; each later attempt waits one interval.
    Not-ready answers and request errors both just use up an attempt. The
    controller runs a single loop; cancelling the task that awaits ``poll``
    aborts the in-flight request or the pending wait.
    """

    def __init__(
        self,
        client: ScanClient,
        *,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        interval_seconds: float = DEFAULT_INTERVAL_SECONDS,
        sleep: SleepFn = asyncio.sleep,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self._client = client
        self._max_attempts = max_attempts
        self._interval_seconds = interval_seconds
        self._sleep = sleep
        self._state = PollState.IDLE
        self._attempts = 0

    @property
    def state(self) -> PollState:
        return self._state

    @property
    def attempts(self) -> int:
        return self._attempts

    async def poll(self, job_id: str) -> PollOutcome:
        if self._state is not PollState.IDLE:
            raise RuntimeError(f"Poll controller already used (state {self._state.value})")
        self._state = PollState.POLLING
        try:
            for attempt in range(1, self._max_attempts + 1):
                if attempt > 1:
                    await self._sleep(self._interval_seconds)
                self._attempts = attempt
                result = await self._attempt(job_id, attempt)
                if result is not None:
                    self._state = PollState.DELIVERED
                    Log.info(f"Scan {job_id} result received on attempt {attempt}")
                    return PollOutcome(PollState.DELIVERED, result=result, attempts=attempt)
        except asyncio.CancelledError:
            self._state = PollState.CANCELLED
            Log.debug(f"Polling for scan {job_id} cancelled after {self._attempts} attempt(s)")
            raise

        self._state = PollState.TIMED_OUT
        Log.warning(f"Scan {job_id}: no result after {self._max_attempts} attempts")
        return PollOutcome(
            PollState.TIMED_OUT, error=POLL_TIMEOUT_MESSAGE, attempts=self._max_attempts
        )

    async def _attempt(self, job_id: str, attempt: int) -> ScanResult | None:
        try:
            return await self._client.fetch_result(job_id)
        except Exception as exc:
            Log.warning(f"Error fetching scan {job_id} (attempt {attempt}): {exc}")
            return None


class ScanSession:
    """Upload plus polling for one document, bound to a single cancellation handle.

    ``on_result`` and ``on_error`` fire at most once, and never after
    ``cancel``. ``cancel`` is safe to call any number of times, before the
    session starts or after it finished.
    """

    def __init__(
        self,
        client: ScanClient,
        controller: PollController,
        *,
        on_result: ResultCallback | None = None,
        on_error: ErrorCallback | None = None,
    ) -> None:
        self._client = client
        self._controller = controller
        self._on_result = on_result
        self._on_error = on_error
        self._task: asyncio.Task[PollOutcome] | None = None
        self._cancelled = False

    @property
    def state(self) -> PollState:
        if self._cancelled:
            return PollState.CANCELLED
        return self._controller.state

    def start(self, file_bytes: bytes, file_name: str, mime_type: str = "application/pdf") -> None:
        """Schedule the upload and polling on the running event loop."""
        if self._task is not None:
            raise RuntimeError("Scan session already started")
        if self._cancelled:
            return
        self._task = asyncio.get_running_loop().create_task(
            self._run(file_bytes, file_name, mime_type)
        )

    def cancel(self) -> None:
        if self._task is not None and self._task.done():
            return
        self._cancelled = True
        if self._task is not None:
            self._task.cancel()

    async def wait(self) -> PollOutcome:
        """Wait for the session to finish. A cancelled session yields a CANCELLED outcome."""
        if self._task is None:
            if self._cancelled:
                return PollOutcome(PollState.CANCELLED)
            raise RuntimeError("Scan session not started")
        await asyncio.wait({self._task})
        if self._task.cancelled():
            return PollOutcome(PollState.CANCELLED, attempts=self._controller.attempts)
        return self._task.result()

    async def run(
        self, file_bytes: bytes, file_name: str, mime_type: str = "application/pdf"
    ) -> PollOutcome:
        self.start(file_bytes, file_name, mime_type)
        return await self.wait()

    async def _run(self, file_bytes: bytes, file_name: str, mime_type: str) -> PollOutcome:
        try:
            job_id = await self._client.submit(file_bytes, file_name, mime_type)
        except asyncio.CancelledError:
            raise
        except Exception as exc:
            Log.error(f"Upload of {file_name} failed: {exc}")
            self._deliver_error(str(exc) or "Unknown error")
            return PollOutcome(PollState.FAILED, error=str(exc))

        outcome = await self._controller.poll(job_id)
        if outcome.result is not None:
            self._deliver_result(outcome.result)
        elif outcome.error is not None:
            self._deliver_error(outcome.error)
        return outcome

    def _deliver_result(self, result: ScanResult) -> None:
        if self._on_result is not None and not self._cancelled:
            self._on_result(result)

    def _deliver_error(self, message: str) -> None:
        if self._on_error is not None and not self._cancelled:
            self._on_error(message)


def build_poll_controller(settings: Settings, client: ScanClient) -> PollController:
    return PollController(
        client,
        max_attempts=settings.poll_max_attempts,
        interval_seconds=settings.poll_interval_ms / 1000,
    )
