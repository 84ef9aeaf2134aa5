"""Fire-and-forget outbox for persistence writes."""

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass, field

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OutboxJob:
    """A pending write; ``run`` is a blocking call into a repository."""

    action: str
    run: Callable[[], object]


FailureSink = Callable[[OutboxJob, Exception], None]


@dataclass
class PersistenceOutbox:
    """Queue of writes drained independently of session transitions.

    ``enqueue`` never blocks or awaits. Failed writes are retried, then
    reported to the log and the failure sink; they never raise to the caller.
    """

    retry_attempts: int = 1
    retry_delay_seconds: float = 0.3
    on_failure: FailureSink | None = None
    _queue: asyncio.Queue = field(default_factory=asyncio.Queue, init=False)
    _task: asyncio.Task | None = field(default=None, init=False)
    failures: list[tuple[str, str]] = field(default_factory=list, init=False)

    @property
    def pending(self) -> int:
        return self._queue.qsize()

    def enqueue(self, action: str, run: Callable[[], object]) -> None:
        """Schedule a write without waiting for it."""
        self._queue.put_nowait(OutboxJob(action=action, run=run))

    async def drain(self) -> int:
        """Process every job currently queued and return how many ran."""
        processed = 0
        while True:
            try:
                job = self._queue.get_nowait()
            except asyncio.QueueEmpty:
                return processed
            try:
                await self._process(job)
            finally:
                self._queue.task_done()
            processed += 1

    async def run(self) -> None:
        """Drain jobs as they arrive until cancelled."""
        while True:
            job = await self._queue.get()
            try:
                await self._process(job)
            finally:
                self._queue.task_done()

    def start(self) -> None:
        """Start the background drain task on the running loop."""
        if self._task is None or self._task.done():
            self._task = asyncio.create_task(self.run())

    async def stop(self) -> None:
        """Stop the background task and flush whatever is left."""
        if self._task is not None:
            if not self._task.done():
                await self._queue.join()
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None
        await self.drain()

    async def _process(self, job: OutboxJob) -> None:
        attempt = 0
        while True:
            try:
                await asyncio.to_thread(job.run)
                return
            except Exception as exc:
                attempt += 1
                if attempt > self.retry_attempts:
                    self._report(job, exc)
                    return
                _logger.info(
                    "Outbox %s failed (attempt %s/%s): %s",
                    job.action,
                    attempt,
                    self.retry_attempts + 1,
                    exc,
                )
                await asyncio.sleep(self.retry_delay_seconds)

    def _report(self, job: OutboxJob, exc: Exception) -> None:
        _logger.warning("Background write %s failed: %s", job.action, exc)
        self.failures.append((job.action, str(exc)))
        if self.on_failure is not None:
            try:
                self.on_failure(job, exc)
            except Exception:
                _logger.exception("Outbox failure sink raised")
