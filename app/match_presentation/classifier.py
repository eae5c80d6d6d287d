"""
Score classification into display tiers and follow-up availability flags.
"""

from .models import AvailabilityFlags, MatchPresentation, MatchTier, ScoreTierConfig


class ScoreClassifier:
    """Pure mapping from a match score to labels and flags.

    Holds no mutable state and is safe to share between threads. Scores are
    not clamped; out-of-range values follow the same inequalities.
    """

    def __init__(self, config: ScoreTierConfig = None):
        self.config = config or ScoreTierConfig()

    def tier(self, score: int) -> MatchTier:
        for lower_bound, tier in self.config.tiers():
            if score >= lower_bound:
                return tier
        return MatchTier.WEAK

    def label(self, score: int) -> str:
        """e.g. ``"GOOD MATCH"``."""
        return self.tier(score).label

    def presentation_class(self, score: int) -> str:
        return self.tier(score).css_class

    def presentation_theme(self, score: int) -> str:
        return self.tier(score).theme

    def recommendation_text(self, score: int) -> str:
        """Stored recommendation, one of Apply Now / Consider Applying / Not Ready Yet / Not Recommended."""
        return self.tier(score).recommendation

    def show_suggestions(self, score: int) -> bool:
        return score < self.config.suggestions_threshold

    def show_improve(self, score: int) -> bool:
        if "improve" in self.config.degenerate_ranges:
            return False
        return self.config.improve_lower <= score <= self.config.improve_upper

    def show_upgrade(self, score: int) -> bool:
        if "upgrade" in self.config.degenerate_ranges:
            return False
        return self.config.upgrade_lower <= score <= self.config.upgrade_upper

    def show_interview_prep(self, score: int) -> bool:
        return score > self.config.interview_prep_threshold

    def availability_flags(self, score: int) -> AvailabilityFlags:
        """Evaluate each flag against its own range; flags may overlap."""
        return AvailabilityFlags(
            suggestions=self.show_suggestions(score),
            improve=self.show_improve(score),
            upgrade=self.show_upgrade(score),
            interview_prep=self.show_interview_prep(score),
        )

    def present(self, score: int) -> MatchPresentation:
        tier = self.tier(score)
        return MatchPresentation(
            score=score,
            tier=tier,
            label=tier.label,
            css_class=tier.css_class,
            theme=tier.theme,
            recommendation=tier.recommendation,
            flags=self.availability_flags(score),
        )
