"""
Factory for creating quota management components.
"""

from datetime import date
from typing import Callable, List, Optional

from .models import QuotaConfig
from .manager import QuotaTracker
from .routes import create_quota_blueprint
from .scheduler import DailySweepScheduler


def create_quota_module(
    daily_limit: int = 10,
    timezone: Optional[str] = None,
    cleanup_time: str = "00:05",
    admin_users: List[str] = None,
    today_provider: Optional[Callable[[], date]] = None,
) -> dict:
    """
    Create quota management module.

    Args:
        daily_limit: Daily scan ceiling per client
        timezone: IANA time zone for the day boundary, None for local time
        cleanup_time: HH:MM at which stale records are swept
        admin_users: List of admin user IDs
        today_provider: Optional clock override

    Returns:
        Dictionary with:
        - tracker: QuotaTracker instance
        - scheduler: DailySweepScheduler (not started)
        - blueprint: Flask blueprint
        - config: QuotaConfig instance
    """
    config = QuotaConfig(daily_ceiling=daily_limit, timezone=timezone)
    tracker = QuotaTracker(config=config, today_provider=today_provider)
    scheduler = DailySweepScheduler(tracker, run_at=cleanup_time)
    blueprint = create_quota_blueprint(tracker, admin_user_ids=admin_users or [])

    return {
        "tracker": tracker,
        "scheduler": scheduler,
        "blueprint": blueprint,
        "config": config
    }
