#!/usr/bin/env python3
"""
Simple runner script for the Flask application.
This script ensures the correct Python path is set and runs the app.
"""

import sys
from pathlib import Path

# Add the current directory to Python path
current_dir = Path(__file__).parent
sys.path.insert(0, str(current_dir))

from config_manager import config_manager
from app.logging_config import setup_logging, stop_logging
from app.main import create_app

if __name__ == "__main__":
    app_config = config_manager.get_app_config()
    setup_logging(debug=app_config.debug)

    app = create_app(config_manager)
    try:
        app.run(
            host=app_config.host,
            port=app_config.port,
            debug=app_config.debug,
            use_reloader=False
        )
    finally:
        app.extensions["jobfit"]["quota_scheduler"].stop()
        stop_logging()
