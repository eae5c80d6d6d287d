"""
Quota module for per-client daily scan limits.
Counters reset at midnight; stale entries are swept once a day.
"""

from .models import QuotaConfig, QuotaRecord, QuotaResult
from .manager import QuotaTracker
from .scheduler import DailySweepScheduler

__all__ = ["QuotaConfig", "QuotaRecord", "QuotaResult", "QuotaTracker", "DailySweepScheduler"]
