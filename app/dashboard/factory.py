"""
Factory for creating the dashboard module.
"""
from pathlib import Path

from app.match_presentation import ScoreClassifier
from .services import DashboardService
from .routes import create_dashboard_blueprint


def create_dashboard_module(
    data_dir: Path,
    classifier: ScoreClassifier,
    max_entries: int = 20
) -> dict:
    """Create dashboard module with service and routes.

    Args:
        data_dir: Directory holding dashboard_entries.json
        classifier: ScoreClassifier shared with the match presentation module
        max_entries: Maximum saved results per owner

    Returns:
        Dictionary containing the service and blueprint
    """
    dashboard_service = DashboardService(
        entries_file=data_dir / "dashboard_entries.json",
        classifier=classifier,
        max_entries=max_entries
    )

    blueprint = create_dashboard_blueprint(dashboard_service)

    return {
        "service": dashboard_service,
        "blueprint": blueprint
    }
