"""
Configuration management for the page view stats generator.
Handles loading, validating, and providing access to generator settings.
"""

import os
import json
from pathlib import Path
from typing import Dict, Any, Optional, Union
from dataclasses import dataclass


ROOT_DIR = Path(__file__).resolve().parent
DEFAULT_CONFIG_FILE = ROOT_DIR / "stats_page_config.json"


@dataclass
class PathsConfig:
    """Path configuration settings (resolved to absolute paths)."""
    root_dir: Path
    logs_file: Path
    output_file: Path


@dataclass
class ReportConfig:
    """Report rendering settings."""
    tz_offset_hours: int
    update_interval_minutes: int
    escape_html: bool


@dataclass
class AppConfig:
    """Application configuration settings."""
    debug: bool


def _env_flag(value: str) -> bool:
    return value.strip().lower() == "true"


def _env_int(name: str) -> Optional[int]:
    """Read an integer environment variable; unset or invalid values give None."""
    value = os.getenv(name)
    if not value:
        return None
    try:
        return int(value.strip())
    except ValueError:
        return None


class ConfigManager:
    """Manages generator configuration loading and access."""

    def __init__(self, config_file: Union[str, Path, None] = None):
        self.config_file = Path(config_file) if config_file else DEFAULT_CONFIG_FILE
        self._config: Optional[Dict[str, Any]] = None
        self._load_config()

    def _load_config(self) -> None:
        """Load configuration from file and environment variables."""
        # Start with default config
        self._config = self._get_default_config()

        # Load base config from file
        if self.config_file.exists():
            try:
                with open(self.config_file, 'r', encoding='utf-8') as f:
                    file_config = json.load(f)
                if isinstance(file_config, dict):
                    self._merge_config(file_config)
            except (json.JSONDecodeError, OSError):
                # Keep default config if file is invalid or unreadable
                pass

        # Override with environment variables
        self._override_with_env()

    def _get_default_config(self) -> Dict[str, Any]:
        """Get default configuration."""
        return {
            "paths": {
                "root_dir": str(ROOT_DIR),
                "logs_file": "stats-data/access-logs.json",
                "output_file": "stats-page.html"
            },
            "report": {
                "tz_offset_hours": 8,
                "update_interval_minutes": 15,
                "escape_html": False
            },
            "app": {
                "debug": False
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
        # Path settings
        if os.getenv("STATS_ROOT_DIR"):
            self._config["paths"]["root_dir"] = os.getenv("STATS_ROOT_DIR")

        if os.getenv("STATS_LOGS_FILE"):
            self._config["paths"]["logs_file"] = os.getenv("STATS_LOGS_FILE")

        if os.getenv("STATS_OUTPUT_FILE"):
            self._config["paths"]["output_file"] = os.getenv("STATS_OUTPUT_FILE")

        # Report settings (invalid integers keep the current value)
        tz_offset_hours = _env_int("STATS_TZ_OFFSET_HOURS")
        if tz_offset_hours is not None:
            self._config["report"]["tz_offset_hours"] = tz_offset_hours

        update_interval_minutes = _env_int("STATS_UPDATE_INTERVAL_MINUTES")
        if update_interval_minutes is not None:
            self._config["report"]["update_interval_minutes"] = update_interval_minutes

        if os.getenv("STATS_ESCAPE_HTML"):
            self._config["report"]["escape_html"] = _env_flag(os.getenv("STATS_ESCAPE_HTML"))

        # App settings
        if os.getenv("STATS_DEBUG"):
            self._config["app"]["debug"] = _env_flag(os.getenv("STATS_DEBUG"))

    def get_paths_config(self) -> PathsConfig:
        """Get paths configuration with relative paths resolved against root_dir."""
        paths_config = self._config["paths"]
        root_dir = Path(paths_config["root_dir"])
        return PathsConfig(
            root_dir=root_dir,
            logs_file=root_dir / paths_config["logs_file"],
            output_file=root_dir / paths_config["output_file"]
        )

    def get_report_config(self) -> ReportConfig:
        """Get report configuration."""
        report_config = self._config["report"]
        return ReportConfig(
            tz_offset_hours=int(report_config["tz_offset_hours"]),
            update_interval_minutes=int(report_config["update_interval_minutes"]),
            escape_html=bool(report_config["escape_html"])
        )

    def get_app_config(self) -> AppConfig:
        """Get application configuration."""
        return AppConfig(debug=bool(self._config["app"]["debug"]))

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


def get_paths_config() -> PathsConfig:
    """Get paths configuration."""
    return config_manager.get_paths_config()


def get_report_config() -> ReportConfig:
    """Get report configuration."""
    return config_manager.get_report_config()


def get_app_config() -> AppConfig:
    """Get application configuration."""
    return config_manager.get_app_config()


def reload_config() -> None:
    """Reload configuration."""
    config_manager.reload()


def save_config() -> None:
    """Save configuration to file."""
    config_manager.save_config()
