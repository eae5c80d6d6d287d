"""
Tests for the per-client daily quota tracker.
"""

import threading
from datetime import date, timedelta

import pytest

from config_manager import ConfigurationError
from app.quota import QuotaConfig, QuotaTracker


class FakeClock:
    """Settable date source standing in for the calendar."""

    def __init__(self, day: date):
        self.day = day

    def __call__(self) -> date:
        return self.day

    def advance(self, days: int = 1) -> None:
        self.day += timedelta(days=days)


class TestQuotaTracker:
    """Test admission, usage reporting and rollover."""

    def setup_method(self):
        self.clock = FakeClock(date(2024, 5, 1))
        self.tracker = QuotaTracker(QuotaConfig(daily_ceiling=10), today_provider=self.clock)

    def test_allows_ceiling_requests_and_blocks_next(self):
        for i in range(10):
            assert self.tracker.try_admit("10.0.0.1") is True, f"Request {i + 1} should be allowed"
        assert self.tracker.try_admit("10.0.0.1") is False, "11th request must be blocked"
        assert self.tracker.used("10.0.0.1") == 10

    def test_remaining_and_used_reflect_usage(self):
        assert self.tracker.remaining("10.0.0.2") == 10
        assert self.tracker.used("10.0.0.2") == 0

        for _ in range(3):
            self.tracker.try_admit("10.0.0.2")

        assert self.tracker.remaining("10.0.0.2") == 7
        assert self.tracker.used("10.0.0.2") == 3

    def test_refused_request_does_not_change_count(self):
        tracker = QuotaTracker(QuotaConfig(daily_ceiling=2), today_provider=self.clock)
        tracker.try_admit("k")
        tracker.try_admit("k")
        assert tracker.try_admit("k") is False
        assert tracker.try_admit("k") is False
        assert tracker.used("k") == 2
        assert tracker.remaining("k") == 0

    def test_keys_are_independent(self):
        for _ in range(10):
            self.tracker.try_admit("key-b")

        assert self.tracker.try_admit("key-b") is False
        assert self.tracker.used("key-a") == 0
        assert self.tracker.try_admit("key-a") is True
        assert self.tracker.remaining("key-a") == 9

    def test_counter_resets_when_new_day_starts(self):
        for _ in range(10):
            assert self.tracker.try_admit("ip")
        assert self.tracker.try_admit("ip") is False

        self.clock.advance()

        assert self.tracker.try_admit("ip") is True
        assert self.tracker.used("ip") == 1
        assert self.tracker.remaining("ip") == 9

    def test_stale_record_reads_as_unused_without_mutation(self):
        self.tracker.try_admit("ip")
        self.tracker.try_admit("ip")
        self.clock.advance()

        assert self.tracker.used("ip") == 0
        assert self.tracker.remaining("ip") == 10
        # Stored record still belongs to yesterday until the next admission
        record = self.tracker._records["ip"]
        assert record.day == date(2024, 5, 1)
        assert record.count == 2

    def test_zero_ceiling_admits_nothing(self):
        tracker = QuotaTracker(QuotaConfig(daily_ceiling=0), today_provider=self.clock)
        assert tracker.try_admit("ip") is False
        assert tracker.used("ip") == 0
        assert tracker.remaining("ip") == 0

    def test_negative_ceiling_rejected(self):
        with pytest.raises(ConfigurationError):
            QuotaConfig(daily_ceiling=-1)

    @pytest.mark.parametrize("ceiling", ["5", 2.5, None, True])
    def test_non_integer_ceiling_rejected(self, ceiling):
        with pytest.raises(ConfigurationError):
            QuotaConfig(daily_ceiling=ceiling)

    def test_unknown_timezone_rejected(self):
        with pytest.raises(ConfigurationError):
            QuotaConfig(daily_ceiling=3, timezone="Not/AZone")

    def test_timezone_controls_day_boundary(self):
        tracker = QuotaTracker(QuotaConfig(daily_ceiling=1, timezone="UTC"))
        assert tracker.now().tzinfo is not None
        assert tracker.today() == tracker.now().date()

    def test_reset_removes_record(self):
        for _ in range(10):
            self.tracker.try_admit("ip")

        assert self.tracker.reset("ip") is True
        assert self.tracker.tracked_key_count() == 0
        assert self.tracker.used("ip") == 0
        assert self.tracker.try_admit("ip") is True
        assert self.tracker.reset("missing") is False

    def test_sweep_removes_only_stale_records(self):
        self.tracker.try_admit("old-1")
        self.tracker.try_admit("old-2")
        self.clock.advance()
        self.tracker.try_admit("fresh")

        assert self.tracker.tracked_key_count() == 3
        assert self.tracker.sweep(self.clock()) == 2
        assert self.tracker.tracked_key_count() == 1
        assert self.tracker.used("fresh") == 1

    def test_sweep_is_idempotent(self):
        self.tracker.try_admit("a")
        self.clock.advance()

        assert self.tracker.sweep(self.clock()) == 1
        assert self.tracker.sweep(self.clock()) == 0

    def test_sweep_defaults_to_today(self):
        self.tracker.try_admit("a")
        assert self.tracker.sweep() == 0
        self.clock.advance()
        assert self.tracker.sweep() == 1

    def test_check_and_consume_reports_outcome(self):
        tracker = QuotaTracker(QuotaConfig(daily_ceiling=1), today_provider=self.clock)

        first = tracker.check_and_consume("ip")
        assert first.allowed is True
        assert first.used_today == 1
        assert first.remaining == 0

        second = tracker.check_and_consume("ip")
        assert second.allowed is False
        assert "Daily limit" in second.message
        assert second.to_dict()["daily_limit"] == 1

    def test_quota_info_and_stats(self):
        self.tracker.try_admit("ip")
        info = self.tracker.get_quota_info("ip")
        assert info["used_today"] == 1
        assert info["remaining"] == 9
        assert info["daily_limit"] == 10

        stats = self.tracker.get_usage_stats()
        assert stats["date"] == "2024-05-01"
        assert stats["tracked_keys"] == 1
        assert stats["active_today"] == 1


class TestQuotaTrackerEndToEnd:
    """Ceiling of three, exhausted, then released by the next day."""

    def test_daily_cycle(self):
        clock = FakeClock(date(2024, 1, 31))
        tracker = QuotaTracker(QuotaConfig(daily_ceiling=3), today_provider=clock)

        assert [tracker.try_admit("ip1") for _ in range(3)] == [True, True, True]
        assert tracker.try_admit("ip1") is False
        assert tracker.used("ip1") == 3
        assert tracker.remaining("ip1") == 0

        clock.advance()

        assert tracker.try_admit("ip1") is True
        assert tracker.used("ip1") == 1


class TestQuotaTrackerConcurrency:
    """Parallel admissions must neither lose increments nor overshoot."""

    def test_same_key_never_exceeds_ceiling(self):
        tracker = QuotaTracker(QuotaConfig(daily_ceiling=50), today_provider=lambda: date(2024, 1, 1))
        results = []
        results_lock = threading.Lock()

        def worker():
            admitted = [tracker.try_admit("shared") for _ in range(20)]
            with results_lock:
                results.extend(admitted)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert results.count(True) == 50
        assert tracker.used("shared") == 50

    def test_different_keys_counted_separately(self):
        tracker = QuotaTracker(QuotaConfig(daily_ceiling=100), today_provider=lambda: date(2024, 1, 1))

        def worker(key):
            for _ in range(25):
                tracker.try_admit(key)

        threads = [threading.Thread(target=worker, args=(f"ip-{i}",)) for i in range(6)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert all(tracker.used(f"ip-{i}") == 25 for i in range(6))
        assert tracker.tracked_key_count() == 6

    def test_sweep_during_admissions_keeps_counts_consistent(self):
        clock = FakeClock(date(2024, 1, 1))
        tracker = QuotaTracker(QuotaConfig(daily_ceiling=1000), today_provider=clock)
        for i in range(20):
            tracker.try_admit(f"old-{i}")
        clock.advance()

        def admit():
            for _ in range(100):
                tracker.try_admit("live")

        threads = [threading.Thread(target=admit) for _ in range(4)]
        for thread in threads:
            thread.start()
        removed = tracker.sweep(clock())
        for thread in threads:
            thread.join()

        assert removed == 20
        assert tracker.used("live") == 400
