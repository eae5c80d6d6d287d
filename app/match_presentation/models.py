"""
Data models for score classification.
"""

import logging
import warnings
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Tuple

from config_manager import ConfigurationError, require_int

logger = logging.getLogger(__name__)


class DegenerateRangeWarning(UserWarning):
    """An availability range whose lower bound is not below its upper bound."""


class MatchTier(Enum):
    """Score tiers, highest first."""
    EXCELLENT = "excellent"
    GOOD = "good"
    PARTIAL = "partial"
    WEAK = "weak"

    @property
    def label(self) -> str:
        return f"{self.name} MATCH"

    @property
    def css_class(self) -> str:
        return f"match-badge-{self.value}"

    @property
    def theme(self) -> str:
        return f"match-theme-{self.value}"

    @property
    def recommendation(self) -> str:
        return RECOMMENDATION_TEXT[self]


RECOMMENDATION_TEXT = {
    MatchTier.EXCELLENT: "Apply Now",
    MatchTier.GOOD: "Consider Applying",
    MatchTier.PARTIAL: "Not Ready Yet",
    MatchTier.WEAK: "Not Recommended",
}


@dataclass(frozen=True)
class ScoreTierConfig:
    """Threshold boundaries used to classify a match score.

    Tier thresholds must satisfy ``excellent > good > partial``; a
    violation raises ConfigurationError. The improve and upgrade ranges are
    tolerated when degenerate (``lower >= upper``): the matching flag is then
    always off and a DegenerateRangeWarning is issued.
    """
    excellent_threshold: int = 90
    good_threshold: int = 70
    partial_threshold: int = 50
    suggestions_threshold: int = 40
    improve_lower: int = 40
    improve_upper: int = 74
    upgrade_lower: int = 75
    upgrade_upper: int = 85
    interview_prep_threshold: int = 85
    degenerate_ranges: Tuple[str, ...] = field(init=False, default=())

    def __post_init__(self):
        for name in self.__dataclass_fields__:
            if name != "degenerate_ranges":
                require_int(name, getattr(self, name))

        if not self.excellent_threshold > self.good_threshold > self.partial_threshold:
            raise ConfigurationError(
                "Score thresholds must satisfy excellent > good > partial, got "
                f"excellent={self.excellent_threshold} good={self.good_threshold} "
                f"partial={self.partial_threshold}"
            )

        degenerate = []
        for name, lower, upper in (
            ("improve", self.improve_lower, self.improve_upper),
            ("upgrade", self.upgrade_lower, self.upgrade_upper),
        ):
            if lower >= upper:
                message = f"Invalid {name} score bounds configured: lower={lower} upper={upper}"
                logger.warning(message)
                warnings.warn(message, DegenerateRangeWarning, stacklevel=3)
                degenerate.append(name)
        object.__setattr__(self, "degenerate_ranges", tuple(degenerate))

    @classmethod
    def from_dict(cls, data: dict) -> "ScoreTierConfig":
        """Create ScoreTierConfig from a ``score`` config section."""
        known = {k: v for k, v in data.items() if k in cls.__dataclass_fields__ and k != "degenerate_ranges"}
        return cls(**known)

    def tiers(self) -> List[Tuple[int, MatchTier]]:
        """Ordered ``(lower_bound, tier)`` pairs, highest bound first."""
        return [
            (self.excellent_threshold, MatchTier.EXCELLENT),
            (self.good_threshold, MatchTier.GOOD),
            (self.partial_threshold, MatchTier.PARTIAL),
        ]


@dataclass(frozen=True)
class AvailabilityFlags:
    """Which follow-up features are offered for a score."""
    suggestions: bool
    improve: bool
    upgrade: bool
    interview_prep: bool

    def to_dict(self) -> dict:
        return {
            "suggestions": self.suggestions,
            "improve": self.improve,
            "upgrade": self.upgrade,
            "interview_prep": self.interview_prep
        }


@dataclass(frozen=True)
class MatchPresentation:
    """Everything the UI needs to render a score."""
    score: int
    tier: MatchTier
    label: str
    css_class: str
    theme: str
    recommendation: str
    flags: AvailabilityFlags

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "score": self.score,
            "tier": self.tier.value,
            "label": self.label,
            "css_class": self.css_class,
            "theme": self.theme,
            "recommendation": self.recommendation,
            "flags": self.flags.to_dict()
        }
