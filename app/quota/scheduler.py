"""
Background scheduler that sweeps stale quota records once a day.
"""

import logging
import threading
from datetime import datetime, time, timedelta, timezone
from typing import Optional

from config_manager import ConfigurationError

from app.utils import timed_operation
from .manager import QuotaTracker

logger = logging.getLogger(__name__)


def parse_run_time(value: str) -> time:
    """Parse an ``HH:MM`` string into a time of day."""
    try:
        hour, minute = (int(part) for part in value.split(":"))
        return time(hour=hour, minute=minute)
    except (ValueError, TypeError, AttributeError):
        raise ConfigurationError(f"cleanup_time must be HH:MM, got {value!r}")


class DailySweepScheduler:
    """Runs ``QuotaTracker.sweep`` every day at a fixed time of day."""

    def __init__(self, tracker: QuotaTracker, run_at: str = "00:05"):
        self.tracker = tracker
        self.run_at = parse_run_time(run_at)
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def seconds_until_next_run(self, now: datetime) -> float:
        """Seconds from ``now`` until the next scheduled run.

        The run time is a wall-clock time in ``now``'s zone (naive means
        process-local). Elapsed time is measured in UTC so a DST change
        between ``now`` and the run shortens or lengthens the wait.
        """
        utc_now = now.astimezone(timezone.utc)
        next_run = now.replace(
            hour=self.run_at.hour, minute=self.run_at.minute, second=0, microsecond=0
        )
        if next_run.astimezone(timezone.utc) <= utc_now:
            next_run += timedelta(days=1)
        return (next_run.astimezone(timezone.utc) - utc_now).total_seconds()

    def run_once(self) -> int:
        """Sweep records older than the tracker's current day."""
        with timed_operation(logger, "Scheduled quota sweep"):
            removed = self.tracker.sweep(self.tracker.today())
        logger.info(f"Scheduled quota sweep removed {removed} entries")
        return removed

    def _run(self) -> None:
        while True:
            delay = self.seconds_until_next_run(self.tracker.now())
            if self._stop_event.wait(delay):
                break
            try:
                self.run_once()
            except Exception as e:
                logger.error(f"Scheduled quota sweep failed: {e}", exc_info=True)

    def start(self) -> None:
        """Start the background thread; no-op if already running."""
        if self.is_running:
            return
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._run, daemon=True, name="QuotaSweep")
        self._thread.start()
        logger.info(f"Started daily quota sweep at {self.run_at.strftime('%H:%M')}")

    def stop(self, timeout: Optional[float] = 5.0) -> None:
        """Signal the background thread to exit and wait for it."""
        self._stop_event.set()
        if self._thread:
            self._thread.join(timeout)
            self._thread = None
            logger.info("Stopped daily quota sweep")

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()
