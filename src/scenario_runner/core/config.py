import os
import yaml
import json
from pathlib import Path
from typing import Any, Dict, Optional

from .exceptions import ConfigurationError


class ConfigManager:
    """Manages configuration for Scenario Runner"""

    def __init__(self, config_path: Optional[Path] = None):
        self.config_path = config_path or self._get_default_config_path()
        self._config = self._load_config()

    def _get_default_config_path(self) -> Path:
        """Get default configuration path"""
        # Check environment variable first
        if env_path := os.getenv("SCENARIO_RUNNER_CONFIG"):
            return Path(env_path)

        # Check common locations
        locations = [
            Path.cwd() / "scenario-runner.yaml",
            Path.cwd() / ".scenario-runner" / "config.yaml",
            Path.home() / ".scenario-runner" / "config.yaml",
        ]

        for location in locations:
            if location.exists():
                return location

        # Return default location
        return Path.home() / ".scenario-runner" / "config.yaml"

    def _load_config(self) -> Dict[str, Any]:
        """Load configuration from file, layered over the defaults"""
        config = self._get_default_config()
        if not self.config_path.exists():
            return config

        with open(self.config_path, 'r') as f:
            if self.config_path.suffix in ('.yaml', '.yml'):
                loaded = yaml.safe_load(f)
            elif self.config_path.suffix == '.json':
                loaded = json.load(f)
            else:
                raise ConfigurationError(f"Unsupported config format: {self.config_path.suffix}")

        if loaded is None:
            return config
        if not isinstance(loaded, dict):
            raise ConfigurationError(f"Configuration root must be a mapping: {self.config_path}")

        return _merge(config, loaded)

    @staticmethod
    def _get_default_config() -> Dict[str, Any]:
        """Get default configuration"""
        return {
            "general": {
                "log_level": "INFO",
                "screenshot_on_failure": True,
                "screenshot_dir": "screenshots",
            },
            "session": {
                "browser": "chromium",
                "headless": True,
                "slow_mo": 0,
                "viewport": {"width": 1280, "height": 720},
                "locale": "en-GB",
                "timeout": 30000,
                "navigation_timeout": 45000,
                "trace_dir": None,
            },
            "storefront": {
                "bo_url": "http://localhost:8001/admin-dev/",
                "admin_email": "demo@prestashop.com",
                "admin_password": "Correct Horse Battery Staple",
                "theme": "hummingbird",
                "default_theme": "classic",
                "default_products_per_page": 12,
                "language": "en",
            },
            "reporter": {
                "formats": ["html", "json"],
                "output_dir": "test-results",
            },
        }

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value using dot notation"""
        keys = key.split('.')
        value = self._config

        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value

    def set(self, key: str, value: Any) -> None:
        """Set configuration value using dot notation"""
        keys = key.split('.')
        config = self._config

        for k in keys[:-1]:
            if k not in config:
                config[k] = {}
            config = config[k]

        config[keys[-1]] = value

    def save(self, path: Optional[Path] = None) -> Path:
        """Save configuration to file"""
        path = Path(path) if path else self.config_path
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, 'w') as f:
            if path.suffix == '.json':
                json.dump(self._config, f, indent=2)
            else:
                yaml.dump(self._config, f, default_flow_style=False)

        return path

    def get_section(self, name: str) -> Dict[str, Any]:
        """Get configuration for a specific section"""
        return dict(self.get(name, {}) or {})


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged
