"""
Dashboard Routes

Flask routes for saving and browsing match results.
"""

from flask import Blueprint, request, jsonify

from app.utils import get_owner_key
from .services import DashboardService


def create_dashboard_blueprint(dashboard_service: DashboardService) -> Blueprint:
    """Create dashboard blueprint with routes.

    Args:
        dashboard_service: The dashboard service instance

    Returns:
        Flask blueprint with dashboard routes
    """
    blueprint = Blueprint('dashboard', __name__, url_prefix='/dashboard')

    @blueprint.route('/', methods=['GET'])
    def list_entries():
        """Saved results with summary numbers."""
        owner = get_owner_key()
        entries = dashboard_service.get_all_entries(owner)
        return jsonify({
            "success": True,
            "entries": [entry.to_dict() for entry in entries],
            "summary": dashboard_service.get_summary(entries).to_dict(),
            "can_add": len(entries) < dashboard_service.max_entries
        })

    @blueprint.route('/entries', methods=['POST'])
    def save_entry():
        """Save a match result to the caller's dashboard."""
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            data = {}
        missing = [name for name in ("role", "company", "score") if data.get(name) in (None, "")]
        if missing:
            return jsonify({
                "error": "Missing fields",
                "message": f"Required: {', '.join(missing)}"
            }), 400

        if not all(isinstance(data.get(name), str) for name in ("role", "company")) or \
                not isinstance(data.get("job_description", ""), str):
            return jsonify({"error": "Invalid fields", "message": "Text fields must be strings."}), 400

        try:
            score = int(data["score"])
        except (TypeError, ValueError):
            score = None
        if score is None or isinstance(data["score"], bool):
            return jsonify({"error": "Invalid score", "message": "Score must be an integer."}), 400

        entry = dashboard_service.save_entry(
            owner=get_owner_key(),
            role=data["role"],
            company=data["company"],
            job_description=data.get("job_description", ""),
            score=score
        )
        if entry is None:
            return jsonify({
                "error": "Dashboard full",
                "message": f"You can save up to {dashboard_service.max_entries} results. Delete one first."
            }), 409

        return jsonify({"success": True, "entry": entry.to_dict()}), 201

    @blueprint.route('/entries/<int:entry_id>', methods=['GET'])
    def get_entry(entry_id):
        entry = dashboard_service.get_entry(get_owner_key(), entry_id)
        if entry is None:
            return jsonify({"error": "Not found"}), 404
        return jsonify({"success": True, "entry": entry.to_dict()})

    @blueprint.route('/entries/<int:entry_id>', methods=['DELETE'])
    def delete_entry(entry_id):
        if not dashboard_service.delete_entry(get_owner_key(), entry_id):
            return jsonify({"error": "Not found"}), 404
        return jsonify({"success": True})

    return blueprint
