"""
User configuration management for dtool.

Supports configuration from multiple sources (in order of priority):
1. Command-line arguments (highest priority, applied by the CLI)
2. Environment variables
3. User config file (~/.dtool/config.json)
4. Default values from config.py (lowest priority)

Example config.json:
{
    "default_jobs": 4,
    "viewer": "feh -F",
    "max_image_pixels": 500000000
}
"""

import json
import os
from pathlib import Path
from typing import Any, Optional
import logging

from .config import DEFAULT_PARALLEL, DEFAULT_MAX_IMAGE_PIXELS

logger = logging.getLogger(__name__)


class UserConfig:
    """
    Manages user configuration from file and environment variables.

    The config file is read lazily and cached until reload() is called.
    """

    _instance: Optional['UserConfig'] = None
    _config_data: Optional[dict] = None

    def __new__(cls):
        """Singleton pattern to ensure one config instance."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    @property
    def config_dir(self) -> Path:
        """Get the configuration directory path."""
        env_dir = os.getenv('DTOOL_CONFIG_DIR')
        if env_dir:
            return Path(env_dir)
        return Path.home() / '.dtool'

    @property
    def config_file_path(self) -> Path:
        """Get the configuration file path."""
        return self.config_dir / 'config.json'

    def _load_config_file(self) -> dict:
        """Load configuration from JSON file."""
        if not self.config_file_path.exists():
            return {}

        try:
            with open(self.config_file_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Failed to load config file {self.config_file_path}: {e}")
            return {}

        if not isinstance(data, dict):
            logger.warning(f"Ignoring config file {self.config_file_path}: not a JSON object")
            return {}

        logger.debug(f"Loaded configuration from {self.config_file_path}")
        return data

    def _get_config_data(self) -> dict:
        """Get cached config data (lazy loading)."""
        if self._config_data is None:
            self._config_data = self._load_config_file()
        return self._config_data

    def reload(self):
        """Reload configuration from file."""
        self._config_data = None

    def get(self, key: str, default: Any = None, env_var: Optional[str] = None) -> Any:
        """
        Get a configuration value with priority:
        1. Environment variable (if env_var specified)
        2. Config file
        3. Default value

        Args:
            key: Configuration key
            default: Default value if not found
            env_var: Optional environment variable name to check

        Returns:
            Configuration value
        """
        if env_var:
            env_value = os.getenv(env_var)
            if env_value is not None:
                # Try to parse as JSON for numbers and booleans
                try:
                    return json.loads(env_value)
                except (json.JSONDecodeError, TypeError):
                    return env_value

        config_data = self._get_config_data()
        if key in config_data:
            return config_data[key]

        return default

    @property
    def default_jobs(self) -> int:
        """Number of parallel fingerprint jobs when -j is not given."""
        value = self.get('default_jobs', default=DEFAULT_PARALLEL, env_var='DTOOL_JOBS')
        try:
            value = int(value)
        except (TypeError, ValueError):
            logger.warning(f"Invalid default_jobs value {value!r}, using {DEFAULT_PARALLEL}")
            return DEFAULT_PARALLEL
        return value if value >= 1 else DEFAULT_PARALLEL

    @property
    def viewer(self) -> Optional[str]:
        """External image comparison command for visual mode."""
        value = self.get('viewer', env_var='DTOOL_VIEWER')
        if value is None:
            return None
        return str(value).strip() or None

    @property
    def max_image_pixels(self) -> int:
        """Maximum image size in pixels (decompression bomb limit)."""
        value = self.get(
            'max_image_pixels',
            default=DEFAULT_MAX_IMAGE_PIXELS,
            env_var='DTOOL_MAX_PIXELS'
        )
        try:
            value = int(value)
        except (TypeError, ValueError):
            value = 0
        if value < 1:
            logger.warning(
                f"Invalid max_image_pixels value, using {DEFAULT_MAX_IMAGE_PIXELS:,}"
            )
            return DEFAULT_MAX_IMAGE_PIXELS
        return value


# Global instance
_user_config = UserConfig()


def get_user_config() -> UserConfig:
    """Get the global UserConfig instance."""
    return _user_config
