"""
Configuration management for the JobFit matching service.
Handles loading, validating, and providing access to application settings.
"""

import os
import json
from pathlib import Path
from typing import Dict, Any, Optional
from dataclasses import dataclass


class ConfigurationError(ValueError):
    """Raised when configuration values cannot produce a valid component."""


def require_int(name: str, value: Any) -> int:
    """Return ``value`` if it is a plain integer, else raise ConfigurationError."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"{name} must be an integer, got {value!r}")
    return value


@dataclass
class AppConfig:
    """Application configuration settings."""
    host: str
    port: int
    debug: bool
    admin_user_ids: list[str]
    proxy_hops: int = 1  # reverse proxies trusted to append X-Forwarded-For


@dataclass
class RateLimitConfig:
    """Daily scan limit configuration settings."""
    max_daily_scans: int
    timezone: Optional[str]
    cleanup_enabled: bool
    cleanup_time: str


@dataclass
class ScoreConfig:
    """Score threshold configuration settings."""
    excellent_threshold: int
    good_threshold: int
    partial_threshold: int
    suggestions_threshold: int
    improve_lower: int
    improve_upper: int
    upgrade_lower: int
    upgrade_upper: int
    interview_prep_threshold: int


@dataclass
class DashboardConfig:
    """Dashboard configuration settings."""
    max_entries: int


@dataclass
class PathsConfig:
    """Path configuration settings."""
    data_dir: str


SCORE_OPTIONS = (
    "excellent_threshold",
    "good_threshold",
    "partial_threshold",
    "suggestions_threshold",
    "improve_lower",
    "improve_upper",
    "upgrade_lower",
    "upgrade_upper",
    "interview_prep_threshold",
)


def _env_int(name: str) -> Optional[int]:
    """Read an integer environment variable, None when unset."""
    value = os.getenv(name)
    if not value:
        return None
    try:
        return int(value)
    except ValueError:
        raise ConfigurationError(f"Environment variable {name} must be an integer, got {value!r}")


class ConfigManager:
    """Manages application configuration loading and access."""

    def __init__(self, config_file: str = "jobfit_config.json"):
        self.config_file = Path(config_file)
        self._config: Optional[Dict[str, Any]] = None
        self._load_config()

    def _load_config(self) -> None:
        """Load configuration from file and environment variables."""
        self._config = self._get_default_config()

        if self.config_file.exists():
            try:
                with open(self.config_file, 'r', encoding='utf-8') as f:
                    file_config = json.load(f)
                    self._merge_config(file_config)
            except (json.JSONDecodeError, FileNotFoundError):
                # Keep default config if file is invalid or not found
                pass

        self._override_with_env()

    def _get_default_config(self) -> Dict[str, Any]:
        """Get default configuration."""
        return {
            "app": {
                "host": "0.0.0.0",
                "port": 8080,
                "debug": False,
                "admin_user_ids": [],
                "proxy_hops": 1
            },
            "rate_limit": {
                "max_daily_scans": 10,
                "timezone": None,
                "cleanup_enabled": True,
                "cleanup_time": "00:05"
            },
            "score": {
                "excellent_threshold": 90,
                "good_threshold": 70,
                "partial_threshold": 50,
                "suggestions_threshold": 40,
                "improve_lower": 40,
                "improve_upper": 74,
                "upgrade_lower": 75,
                "upgrade_upper": 85,
                "interview_prep_threshold": 85
            },
            "dashboard": {
                "max_entries": 20
            },
            "paths": {
                "data_dir": "data"
            }
        }

    def _merge_config(self, file_config: Dict[str, Any]) -> None:
        """Merge file configuration with current config."""
        for section, values in file_config.items():
            if section in self._config and isinstance(values, dict):
                self._config[section].update(values)
            else:
                self._config[section] = values

    def _override_with_env(self) -> None:
        """Override configuration with environment variables."""
        # App settings
        if os.getenv("APP_HOST"):
            self._config["app"]["host"] = os.getenv("APP_HOST")

        if _env_int("APP_PORT") is not None:
            self._config["app"]["port"] = _env_int("APP_PORT")

        if os.getenv("APP_DEBUG"):
            self._config["app"]["debug"] = os.getenv("APP_DEBUG").lower() == "true"

        if os.getenv("ADMIN_USER_IDS"):
            self._config["app"]["admin_user_ids"] = [
                uid.strip() for uid in os.getenv("ADMIN_USER_IDS").split(",") if uid.strip()
            ]

        if _env_int("PROXY_HOPS") is not None:
            self._config["app"]["proxy_hops"] = _env_int("PROXY_HOPS")

        # Rate limit settings
        if _env_int("MAX_DAILY_SCANS") is not None:
            self._config["rate_limit"]["max_daily_scans"] = _env_int("MAX_DAILY_SCANS")

        if os.getenv("RATE_LIMIT_TIMEZONE"):
            self._config["rate_limit"]["timezone"] = os.getenv("RATE_LIMIT_TIMEZONE")

        if os.getenv("RATE_LIMIT_CLEANUP_ENABLED"):
            self._config["rate_limit"]["cleanup_enabled"] = (
                os.getenv("RATE_LIMIT_CLEANUP_ENABLED").lower() == "true"
            )

        if os.getenv("RATE_LIMIT_CLEANUP_TIME"):
            self._config["rate_limit"]["cleanup_time"] = os.getenv("RATE_LIMIT_CLEANUP_TIME")

        # Score thresholds, e.g. SCORE_EXCELLENT_THRESHOLD
        for option in SCORE_OPTIONS:
            value = _env_int(f"SCORE_{option.upper()}")
            if value is not None:
                self._config["score"][option] = value

        # Dashboard settings
        if _env_int("DASHBOARD_MAX_ENTRIES") is not None:
            self._config["dashboard"]["max_entries"] = _env_int("DASHBOARD_MAX_ENTRIES")

    def get_app_config(self) -> AppConfig:
        """Get application configuration."""
        app_config = self._config["app"]
        return AppConfig(
            host=app_config["host"],
            port=app_config["port"],
            debug=app_config["debug"],
            admin_user_ids=app_config["admin_user_ids"],
            proxy_hops=app_config["proxy_hops"]
        )

    def get_rate_limit_config(self) -> RateLimitConfig:
        """Get daily scan limit configuration."""
        rl_config = self._config["rate_limit"]
        return RateLimitConfig(
            max_daily_scans=rl_config["max_daily_scans"],
            timezone=rl_config["timezone"],
            cleanup_enabled=rl_config["cleanup_enabled"],
            cleanup_time=rl_config["cleanup_time"]
        )

    def get_score_config(self) -> ScoreConfig:
        """Get score threshold configuration."""
        score_config = self._config["score"]
        return ScoreConfig(**{option: score_config[option] for option in SCORE_OPTIONS})

    def get_dashboard_config(self) -> DashboardConfig:
        """Get dashboard configuration."""
        return DashboardConfig(max_entries=self._config["dashboard"]["max_entries"])

    def get_paths_config(self) -> PathsConfig:
        """Get paths configuration."""
        return PathsConfig(data_dir=self._config["paths"]["data_dir"])

    def get_config(self) -> Dict[str, Any]:
        """Get raw configuration dictionary."""
        return self._config.copy()

    def reload(self) -> None:
        """Reload configuration from file."""
        self._load_config()

    def save_config(self) -> None:
        """Save current configuration to file."""
        with open(self.config_file, 'w', encoding='utf-8') as f:
            json.dump(self._config, f, indent=2, ensure_ascii=False)


# Global configuration instance
config_manager = ConfigManager()


def get_app_config() -> AppConfig:
    """Get application configuration."""
    return config_manager.get_app_config()


def get_rate_limit_config() -> RateLimitConfig:
    """Get daily scan limit configuration."""
    return config_manager.get_rate_limit_config()


def get_score_config() -> ScoreConfig:
    """Get score threshold configuration."""
    return config_manager.get_score_config()


def get_dashboard_config() -> DashboardConfig:
    """Get dashboard configuration."""
    return config_manager.get_dashboard_config()


def get_paths_config() -> PathsConfig:
    """Get paths configuration."""
    return config_manager.get_paths_config()


def reload_config() -> None:
    """Reload configuration."""
    config_manager.reload()


def save_config() -> None:
    """Save configuration to file."""
    config_manager.save_config()
