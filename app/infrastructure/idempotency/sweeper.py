"""Cancellable repeating expiry sweep for the in-process store."""

import threading
from typing import Callable, Optional

import schedule

from infrastructure.logging import get_module_logger

logger = get_module_logger()


class ExpirySweeper:
    """Run a sweep callable every interval_seconds on a daemon thread.

    Each sweeper owns a private schedule.Scheduler, so several stores in one
    process never share jobs. stop() cancels the loop; a sweep in progress is
    allowed to finish.

    Usage:
        sweeper = ExpirySweeper(store.sweep_expired, interval_seconds=60)
        sweeper.start()
        ...
        sweeper.stop()
    """

    def __init__(
        self,
        sweep: Callable[[], int],
        interval_seconds: int,
        poll_interval_seconds: float = 1.0,
    ):
        self._sweep = sweep
        self.interval_seconds = interval_seconds
        self._poll_interval = min(poll_interval_seconds, interval_seconds)
        self._scheduler = schedule.Scheduler()
        self._scheduler.every(interval_seconds).seconds.do(self.run_once)
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.is_running:
            return
        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._run_continuously,
            daemon=True,
            name="idempotency-sweeper",
        )
        self._thread.start()
        logger.info("idempotency_sweeper_started", interval_seconds=self.interval_seconds)

    def stop(self, timeout: Optional[float] = 5.0) -> None:
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout)
            if self._thread.is_alive():
                # Keep the handle so start() cannot launch a second loop.
                logger.warning("idempotency_sweeper_stop_timed_out", timeout=timeout)
                return
            self._thread = None
        logger.info("idempotency_sweeper_stopped")

    def run_once(self) -> int:
        """Run one sweep, logging instead of raising on failure."""
        try:
            removed = self._sweep()
        except Exception as e:  # pylint: disable=broad-except
            logger.error("idempotency_sweep_failed", error=str(e), exc_info=True)
            return 0
        if removed:
            logger.info("idempotency_sweep_completed", removed_count=removed)
        return removed

    def _run_continuously(self) -> None:
        while not self._stop_event.is_set():
            self._scheduler.run_pending()
            self._stop_event.wait(self._poll_interval)
