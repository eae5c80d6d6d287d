"""
Tests for score tier labels and availability flags.
"""

import pytest

from config_manager import ConfigurationError
from app.match_presentation import (
    DegenerateRangeWarning,
    MatchTier,
    ScoreClassifier,
    ScoreTierConfig,
)


@pytest.fixture()
def classifier():
    return ScoreClassifier(ScoreTierConfig(
        excellent_threshold=90,
        good_threshold=70,
        partial_threshold=50,
        suggestions_threshold=40,
        improve_lower=40,
        improve_upper=74,
        upgrade_lower=75,
        upgrade_upper=85,
        interview_prep_threshold=85,
    ))


class TestTierLabels:

    @pytest.mark.parametrize("score,expected", [
        (90, "EXCELLENT MATCH"),
        (89, "GOOD MATCH"),
        (70, "GOOD MATCH"),
        (69, "PARTIAL MATCH"),
        (50, "PARTIAL MATCH"),
        (49, "WEAK MATCH"),
    ])
    def test_label_boundaries(self, classifier, score, expected):
        assert classifier.label(score) == expected

    def test_out_of_range_scores_use_same_rules(self, classifier):
        assert classifier.label(150) == "EXCELLENT MATCH"
        assert classifier.label(-5) == "WEAK MATCH"

    def test_class_and_theme_follow_tiers(self, classifier):
        assert classifier.presentation_class(95) == "match-badge-excellent"
        assert classifier.presentation_class(75) == "match-badge-good"
        assert classifier.presentation_class(55) == "match-badge-partial"
        assert classifier.presentation_class(10) == "match-badge-weak"
        assert classifier.presentation_theme(95) == "match-theme-excellent"
        assert classifier.presentation_theme(10) == "match-theme-weak"

    @pytest.mark.parametrize("score,expected", [
        (92, "Apply Now"),
        (70, "Consider Applying"),
        (50, "Not Ready Yet"),
        (49, "Not Recommended"),
    ])
    def test_recommendation_text(self, classifier, score, expected):
        assert classifier.recommendation_text(score) == expected

    def test_custom_thresholds(self):
        classifier = ScoreClassifier(ScoreTierConfig(
            excellent_threshold=80, good_threshold=60, partial_threshold=30
        ))
        assert classifier.tier(80) is MatchTier.EXCELLENT
        assert classifier.tier(59) is MatchTier.PARTIAL
        assert classifier.tier(29) is MatchTier.WEAK


class TestAvailabilityFlags:

    @pytest.mark.parametrize("score,expected", [
        (39, "suggestions"),
        (40, "improve"),
        (74, "improve"),
        (75, "upgrade"),
        (85, "upgrade"),
        (86, "interview_prep"),
    ])
    def test_reference_bands_are_disjoint(self, classifier, score, expected):
        flags = classifier.availability_flags(score).to_dict()
        assert [name for name, on in flags.items() if on] == [expected]

    def test_overlapping_ranges_evaluated_independently(self):
        classifier = ScoreClassifier(ScoreTierConfig(
            suggestions_threshold=60, improve_lower=50, improve_upper=80,
            upgrade_lower=70, upgrade_upper=90, interview_prep_threshold=75,
        ))
        flags = classifier.availability_flags(55)
        assert flags.suggestions and flags.improve
        assert not flags.upgrade and not flags.interview_prep

        flags = classifier.availability_flags(78)
        assert flags.improve and flags.upgrade and flags.interview_prep
        assert not flags.suggestions

    def test_degenerate_upgrade_range_disables_flag(self):
        with pytest.warns(DegenerateRangeWarning):
            config = ScoreTierConfig(upgrade_lower=90, upgrade_upper=80)
        classifier = ScoreClassifier(config)

        assert config.degenerate_ranges == ("upgrade",)
        assert not any(classifier.show_upgrade(score) for score in range(0, 101))
        # Other flags keep working
        assert classifier.availability_flags(20).suggestions is True
        assert classifier.availability_flags(95).interview_prep is True

    def test_degenerate_improve_range_disables_flag(self):
        with pytest.warns(DegenerateRangeWarning):
            config = ScoreTierConfig(improve_lower=74, improve_upper=74)
        classifier = ScoreClassifier(config)

        assert not any(classifier.show_improve(score) for score in range(0, 101))


class TestScoreTierConfig:

    @pytest.mark.parametrize("excellent,good,partial", [
        (70, 70, 50),
        (90, 50, 50),
        (60, 70, 50),
        (90, 40, 50),
    ])
    def test_tier_ordering_validated(self, excellent, good, partial):
        with pytest.raises(ConfigurationError):
            ScoreTierConfig(
                excellent_threshold=excellent,
                good_threshold=good,
                partial_threshold=partial,
            )

    @pytest.mark.parametrize("overrides", [
        {"excellent_threshold": "95"},
        {"good_threshold": 70.5},
        {"improve_upper": None},
        {"interview_prep_threshold": True},
    ])
    def test_non_integer_thresholds_rejected(self, overrides):
        with pytest.raises(ConfigurationError):
            ScoreTierConfig(**overrides)

    def test_string_thresholds_from_dict_rejected(self):
        with pytest.raises(ConfigurationError):
            ScoreTierConfig.from_dict({"excellent_threshold": "90", "good_threshold": "70"})

    def test_from_dict_ignores_unknown_keys(self):
        config = ScoreTierConfig.from_dict({"excellent_threshold": 95, "unrelated": True})
        assert config.excellent_threshold == 95
        assert config.good_threshold == 70

    def test_tiers_ordered_highest_first(self):
        bounds = [bound for bound, _ in ScoreTierConfig().tiers()]
        assert bounds == sorted(bounds, reverse=True)


class TestMatchPresentation:

    def test_present_combines_everything(self, classifier):
        data = classifier.present(80).to_dict()
        assert data == {
            "score": 80,
            "tier": "good",
            "label": "GOOD MATCH",
            "css_class": "match-badge-good",
            "theme": "match-theme-good",
            "recommendation": "Consider Applying",
            "flags": {
                "suggestions": False,
                "improve": False,
                "upgrade": True,
                "interview_prep": False
            }
        }
