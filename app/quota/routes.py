"""
Quota Routes

Flask routes exposing the caller's daily scan usage.
"""

import logging
from typing import Iterable

from flask import Blueprint, request, jsonify

from app.utils import get_client_ip, admin_required
from .manager import QuotaTracker

logger = logging.getLogger(__name__)


def create_quota_blueprint(tracker: QuotaTracker, admin_user_ids: Iterable[str] = ()) -> Blueprint:
    """Create quota blueprint with routes.

    Args:
        tracker: The QuotaTracker instance
        admin_user_ids: uids allowed to use the admin endpoints

    Returns:
        Flask blueprint with quota routes
    """
    blueprint = Blueprint('quota', __name__, url_prefix='/quota')
    require_admin = admin_required(admin_user_ids)

    @blueprint.route('/', methods=['GET'])
    def quota_info():
        """Current usage for the calling client."""
        client_ip = get_client_ip()
        return jsonify({
            "success": True,
            "quota": tracker.get_quota_info(client_ip)
        })

    @blueprint.route('/consume', methods=['POST'])
    def consume():
        """Admit one scan for the calling client."""
        client_ip = get_client_ip()
        result = tracker.check_and_consume(client_ip)
        if not result.allowed:
            return jsonify({
                "error": "Daily limit exceeded",
                "message": result.message,
                "quota": result.to_dict()
            }), 429
        return jsonify({"success": True, "quota": result.to_dict()})

    @blueprint.route('/stats', methods=['GET'])
    @require_admin
    def stats():
        """Tracker statistics for admins."""
        return jsonify({"success": True, "stats": tracker.get_usage_stats()})

    @blueprint.route('/reset', methods=['POST'])
    @require_admin
    def reset():
        """Clear the daily counter of one key."""
        data = request.get_json(silent=True)
        key = data.get("key") if isinstance(data, dict) else None
        if not isinstance(key, str) or not key.strip():
            return jsonify({"error": "Missing key", "message": "Provide the key to reset."}), 400

        removed = tracker.reset(key)
        return jsonify({"success": True, "key": key, "removed": removed})

    @blueprint.route('/sweep', methods=['POST'])
    @require_admin
    def sweep():
        """Drop records from previous days."""
        removed = tracker.sweep(tracker.today())
        return jsonify({"success": True, "removed": removed})

    return blueprint
