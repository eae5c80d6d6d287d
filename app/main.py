import logging
from pathlib import Path
from typing import Optional

from flask import Flask, jsonify
from werkzeug.middleware.proxy_fix import ProxyFix

from config_manager import ConfigManager, ConfigurationError, require_int
from app.quota.factory import create_quota_module
from app.match_presentation.factory import create_match_presentation_module
from app.dashboard.factory import create_dashboard_module

logger = logging.getLogger(__name__)

BASE_DIR = Path(__file__).parent.parent


def create_app(
    config_manager: Optional[ConfigManager] = None,
    start_scheduler: Optional[bool] = None,
    data_dir: Optional[Path] = None,
) -> Flask:
    """Build the Flask application.

    Args:
        config_manager: Configuration source, defaults to jobfit_config.json + env
        start_scheduler: Start the daily quota sweep; defaults to the
            ``rate_limit.cleanup_enabled`` setting
        data_dir: Override for the data directory (dashboard storage)

    Returns:
        Configured Flask app; subsystem objects are under ``app.extensions["jobfit"]``
    """
    config_manager = config_manager or ConfigManager()
    app_config = config_manager.get_app_config()
    rate_limit_config = config_manager.get_rate_limit_config()
    dashboard_config = config_manager.get_dashboard_config()
    paths_config = config_manager.get_paths_config()

    data_dir = data_dir or BASE_DIR / paths_config.data_dir
    data_dir.mkdir(parents=True, exist_ok=True)

    proxy_hops = require_int("proxy_hops", app_config.proxy_hops)
    if proxy_hops < 0:
        raise ConfigurationError(f"proxy_hops must be >= 0, got {proxy_hops}")

    app = Flask(__name__)
    # remote_addr is the only client identity. ProxyFix rewrites it from the
    # last proxy_hops X-Forwarded-For entries and ignores the rest.
    app.wsgi_app = ProxyFix(
        app.wsgi_app,
        x_for=proxy_hops,
        x_proto=1,   # trust 1 hop for X-Forwarded-Proto
        x_host=1)    # trust 1 hop for X-Forwarded-Host

    # -----------------------------------------------------------------------------
    # Subsystems
    # -----------------------------------------------------------------------------

    quota_module = create_quota_module(
        daily_limit=rate_limit_config.max_daily_scans,
        timezone=rate_limit_config.timezone,
        cleanup_time=rate_limit_config.cleanup_time,
        admin_users=app_config.admin_user_ids
    )

    match_module = create_match_presentation_module(config_manager.get_score_config())

    dashboard_module = create_dashboard_module(
        data_dir=data_dir,
        classifier=match_module["classifier"],
        max_entries=dashboard_config.max_entries
    )

    app.register_blueprint(quota_module["blueprint"])
    app.register_blueprint(match_module["blueprint"])
    app.register_blueprint(dashboard_module["blueprint"])

    app.extensions["jobfit"] = {
        "quota_tracker": quota_module["tracker"],
        "quota_scheduler": quota_module["scheduler"],
        "classifier": match_module["classifier"],
        "dashboard_service": dashboard_module["service"],
    }

    @app.route("/health", methods=["GET"])
    def health():
        return jsonify({"status": "ok"})

    if start_scheduler is None:
        start_scheduler = rate_limit_config.cleanup_enabled
    if start_scheduler:
        quota_module["scheduler"].start()

    logger.info(
        f"JobFit app ready: {rate_limit_config.max_daily_scans} scans/day, "
        f"dashboard capped at {dashboard_config.max_entries} entries"
    )
    return app
