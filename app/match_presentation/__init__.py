"""
Match presentation module: turns a match score into tier labels and
follow-up availability flags.
"""

from .models import (
    AvailabilityFlags,
    DegenerateRangeWarning,
    MatchPresentation,
    MatchTier,
    ScoreTierConfig,
)
from .classifier import ScoreClassifier

__all__ = [
    "AvailabilityFlags",
    "DegenerateRangeWarning",
    "MatchPresentation",
    "MatchTier",
    "ScoreTierConfig",
    "ScoreClassifier",
]
