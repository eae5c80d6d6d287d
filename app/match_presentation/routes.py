from flask import Blueprint, jsonify

from .classifier import ScoreClassifier


def create_match_presentation_blueprint(classifier: ScoreClassifier) -> Blueprint:
    """Create Flask routes for score classification."""

    blueprint = Blueprint('match_presentation', __name__, url_prefix='/match')

    @blueprint.route('/<int(signed=True):score>', methods=['GET'])
    def present_score(score):
        """Labels and follow-up flags for a match score."""
        return jsonify({
            "success": True,
            "presentation": classifier.present(score).to_dict()
        })

    return blueprint
