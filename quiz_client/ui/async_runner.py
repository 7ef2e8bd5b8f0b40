"""Run attempt coroutines off the Qt thread and report back through signals.

Each job gets its own short-lived event loop on a worker thread, so the
window never blocks on network I/O. The job object lives on the Qt thread;
its signals are emitted from the worker and delivered through queued
connections to the job's own slots, which then invoke the callbacks.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
import logging
from threading import Thread
from typing import Any

from PySide6.QtCore import QObject, Signal, Slot

logger = logging.getLogger(__name__)


class AsyncJob(QObject):
    """A single background coroutine with success and failure signals."""

    succeeded = Signal(object)
    failed = Signal(object)
    finished = Signal()

    def __init__(
        self,
        factory: Callable[[], Awaitable[Any]],
        on_success: Callable[[Any], None],
        on_failure: Callable[[Exception], None],
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._factory = factory
        self._on_success = on_success
        self._on_failure = on_failure
        self.succeeded.connect(self._deliver_success)
        self.failed.connect(self._deliver_failure)

    def start(self) -> None:
        Thread(target=self._run, name="quiz-client-job", daemon=True).start()

    def _run(self) -> None:
        try:
            result = asyncio.run(self._run_coroutine())
        except Exception as exc:  # handed to the UI callback
            logger.debug("Background job failed: %r", exc)
            self.failed.emit(exc)
            return
        self.succeeded.emit(result)

    async def _run_coroutine(self) -> Any:
        return await self._factory()

    @Slot(object)
    def _deliver_success(self, result: Any) -> None:
        try:
            self._on_success(result)
        finally:
            self.finished.emit()

    @Slot(object)
    def _deliver_failure(self, exc: Exception) -> None:
        try:
            self._on_failure(exc)
        finally:
            self.finished.emit()


class AsyncRunner(QObject):
    """Keeps running jobs alive until they report back."""

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._jobs: set[AsyncJob] = set()

    @property
    def busy(self) -> bool:
        return bool(self._jobs)

    def run(
        self,
        factory: Callable[[], Awaitable[Any]],
        on_success: Callable[[Any], None],
        on_failure: Callable[[Exception], None],
    ) -> AsyncJob:
        job = AsyncJob(factory, on_success, on_failure, self)
        self._jobs.add(job)
        job.finished.connect(lambda: self._forget(job))
        job.start()
        return job

    def _forget(self, job: AsyncJob) -> None:
        self._jobs.discard(job)
        job.deleteLater()
