"""
Quota tracker enforcing a per-caller daily scan ceiling.
"""

import logging
from datetime import date, datetime
from typing import Callable, Dict, Hashable, Optional
from zoneinfo import ZoneInfo

from .models import QuotaConfig, QuotaRecord, QuotaResult

logger = logging.getLogger(__name__)


class QuotaTracker:
    """
    Tracks how many scans each caller key has been admitted today.

    Day comparison is by calendar date, so every ceiling resets at midnight
    (in the configured time zone) rather than on a rolling 24h window.
    Stale records are rolled over lazily on the next admission check;
    ``sweep`` only bounds memory.

    Locking is per record: the rollover/compare/increment sequence for one
    key runs under that record's lock, and callers working on different
    keys never wait on each other.
    """

    def __init__(
        self,
        config: QuotaConfig,
        today_provider: Optional[Callable[[], date]] = None,
    ):
        """
        Initialize QuotaTracker.

        Args:
            config: QuotaConfig with the daily ceiling and time zone
            today_provider: Callable returning the current date; defaults to
                today's date in the configured time zone
        """
        self.config = config
        self._tz = ZoneInfo(config.timezone) if config.timezone else None
        self._today_provider = today_provider or self._local_today
        self._records: Dict[Hashable, QuotaRecord] = {}

    @property
    def daily_limit(self) -> int:
        return self.config.daily_ceiling

    def today(self) -> date:
        """Current calendar date as seen by this tracker."""
        return self._today_provider()

    def now(self) -> datetime:
        """Current wall-clock time in the configured time zone."""
        return datetime.now(self._tz)

    def _local_today(self) -> date:
        return self.now().date()

    def _get_or_create(self, key: Hashable, today: date) -> QuotaRecord:
        record = self._records.get(key)
        if record is None:
            # setdefault is atomic on a dict, so concurrent first checks share one record
            record = self._records.setdefault(key, QuotaRecord(key=key, day=today))
        return record

    def try_admit(self, key: Hashable) -> bool:
        """
        Admit one operation for ``key`` if today's ceiling is not reached.

        Returns:
            True and the count incremented, or False with the count unchanged
        """
        while True:
            today = self.today()
            record = self._get_or_create(key, today)
            with record.lock:
                if record.removed:
                    # Reset or swept between lookup and lock; start over on a fresh record
                    continue

                if record.day != today:
                    logger.info(
                        f"New day detected for {key}. Resetting counter from {record.count} to 0"
                    )
                    record.day = today
                    record.count = 0

                if record.count >= self.config.daily_ceiling:
                    logger.warning(f"Daily scan limit exceeded for {key} (Date: {today})")
                    return False

                record.count += 1
                logger.info(
                    f"Scan count for {key} on {today}: {record.count}/{self.config.daily_ceiling}"
                )
                return True

    def used(self, key: Hashable) -> int:
        """Scans admitted today for ``key``; 0 for unknown or stale keys."""
        record = self._records.get(key)
        if record is None:
            return 0
        with record.lock:
            if record.removed:
                return 0
            return record.effective_count(self.today())

    def remaining(self, key: Hashable) -> int:
        """Scans still available today for ``key``."""
        return max(0, self.config.daily_ceiling - self.used(key))

    def check_and_consume(self, key: Hashable) -> QuotaResult:
        """Admit one operation and describe the outcome for display."""
        allowed = self.try_admit(key)
        result = self.check_only(key)
        result.allowed = allowed
        if not allowed:
            result.message = (
                f"Daily limit of {self.config.daily_ceiling} scans reached. Please try again tomorrow."
            )
        return result

    def check_only(self, key: Hashable) -> QuotaResult:
        """Describe the caller's usage without consuming anything."""
        used = self.used(key)
        remaining = max(0, self.config.daily_ceiling - used)
        return QuotaResult(
            allowed=remaining > 0,
            key=str(key),
            used_today=used,
            remaining=remaining,
            daily_limit=self.config.daily_ceiling,
            message=f"{remaining}/{self.config.daily_ceiling} scans remaining today"
        )

    def reset(self, key: Hashable) -> bool:
        """
        Drop the record for ``key`` (admin use).

        Returns:
            True if a record was removed
        """
        record = self._records.get(key)
        if record is None:
            logger.info(f"No daily scan record to reset for {key}")
            return False
        with record.lock:
            if record.removed:
                return False
            record.removed = True
            self._records.pop(key, None)
        logger.info(f"Daily scan limit reset for {key}")
        return True

    def sweep(self, reference_day: Optional[date] = None) -> int:
        """
        Remove every record whose day is strictly before ``reference_day``.

        Args:
            reference_day: Cut-off date, defaults to today

        Returns:
            Number of records removed
        """
        reference_day = reference_day or self.today()
        removed_count = 0

        for key, record in list(self._records.items()):
            with record.lock:
                if record.removed or record.day >= reference_day:
                    continue
                record.removed = True
                self._records.pop(key, None)
                removed_count += 1

        if removed_count > 0:
            logger.info(f"Daily cleanup: Removed {removed_count} old entries from before {reference_day}")
        else:
            logger.debug("Daily cleanup: No old entries to remove")
        return removed_count

    def tracked_key_count(self) -> int:
        """Number of records held, including stale ones not yet swept."""
        return len(self._records)

    def get_quota_info(self, key: Hashable) -> dict:
        """
        Get quota information for display.

        Returns dict with:
        - daily_limit: Configured ceiling
        - used_today: Count used today
        - remaining: Remaining scans today
        - message: Human readable summary
        """
        result = self.check_only(key)
        return {
            "daily_limit": result.daily_limit,
            "used_today": result.used_today,
            "remaining": result.remaining,
            "message": result.message
        }

    def get_usage_stats(self) -> dict:
        """Get usage statistics for the admin endpoint."""
        today = self.today()
        return {
            "date": today.isoformat(),
            "daily_limit": self.config.daily_ceiling,
            "tracked_keys": self.tracked_key_count(),
            "active_today": sum(1 for r in list(self._records.values()) if r.day == today),
        }
