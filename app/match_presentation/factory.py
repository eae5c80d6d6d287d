"""
Factory for creating the match presentation module.
"""

from typing import Any, Dict

from .classifier import ScoreClassifier
from .models import ScoreTierConfig
from .routes import create_match_presentation_blueprint


def create_match_presentation_module(score_config) -> Dict[str, Any]:
    """Create classifier and routes.

    Args:
        score_config: ScoreConfig from the config manager, or a mapping of
            the same threshold options

    Returns:
        Dictionary containing the classifier, its config and blueprint
    """
    if isinstance(score_config, ScoreTierConfig):
        config = score_config
    elif isinstance(score_config, dict):
        config = ScoreTierConfig.from_dict(score_config)
    else:
        config = ScoreTierConfig.from_dict(vars(score_config))

    classifier = ScoreClassifier(config)
    blueprint = create_match_presentation_blueprint(classifier)

    return {
        "classifier": classifier,
        "config": config,
        "blueprint": blueprint
    }
