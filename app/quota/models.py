"""
Data models for the daily scan quota system.
"""

import threading
from dataclasses import dataclass, field
from datetime import date
from typing import Hashable, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from config_manager import ConfigurationError, require_int


@dataclass
class QuotaConfig:
    """Configuration for the per-caller daily ceiling."""
    daily_ceiling: int = 10
    timezone: Optional[str] = None  # IANA name; None uses the process-local date

    def __post_init__(self):
        require_int("daily_ceiling", self.daily_ceiling)
        if self.daily_ceiling < 0:
            raise ConfigurationError(
                f"daily_ceiling must be >= 0, got {self.daily_ceiling}"
            )
        if self.timezone:
            try:
                ZoneInfo(self.timezone)
            except (ZoneInfoNotFoundError, ValueError):
                raise ConfigurationError(f"Unknown time zone: {self.timezone!r}")

    @classmethod
    def from_dict(cls, data: dict) -> "QuotaConfig":
        """Create QuotaConfig from a ``rate_limit`` config section."""
        return cls(
            daily_ceiling=data.get("max_daily_scans", 10),
            timezone=data.get("timezone")
        )


@dataclass(eq=False)
class QuotaRecord:
    """Usage of one caller key on one calendar day.

    ``lock`` guards ``day``/``count``/``removed``; a record flagged as
    removed has been dropped from the tracker and must not be updated.
    """
    key: Hashable
    day: date
    count: int = 0
    removed: bool = False
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def effective_count(self, today: date) -> int:
        """Count as seen on ``today``; a stale record counts as zero."""
        return self.count if self.day == today else 0

    def to_dict(self) -> dict:
        return {"key": str(self.key), "day": self.day.isoformat(), "count": self.count}


@dataclass
class QuotaResult:
    """Result of a quota check operation."""
    allowed: bool
    key: str
    used_today: int
    remaining: int
    daily_limit: int
    message: Optional[str] = None  # User-facing message

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "allowed": self.allowed,
            "key": self.key,
            "used_today": self.used_today,
            "remaining": self.remaining,
            "daily_limit": self.daily_limit,
            "message": self.message
        }
