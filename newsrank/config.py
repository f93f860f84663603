"""
Configuration management for NewsRank.
"""
import copy
import os
import json
import logging
import yaml
from pathlib import Path
from typing import Any, Dict, Optional
from dotenv import load_dotenv

from newsrank.exceptions import ConfigError

# Load environment variables from .env file
load_dotenv()

logger = logging.getLogger(__name__)

# Default configuration
DEFAULT_CONFIG = {
    "store": {
        "url": "",
        "key": "",
        "articles_table": "news",
        "views_table": "news_views",
        "page_size": 500,
        "timeout_seconds": 30
    },
    "cache": {
        "enabled": True,
        "directory": "cache",
        "duration_minutes": 10
    },
    "history": {
        "limit": 100
    },
    "recommendations": {
        "limit": 10
    },
    "similar": {
        "limit": 5
    },
    "output": {
        "format": "markdown"
    },
    "logging": {
        "level": "INFO"
    }
}

class Config:
    """
    Configuration manager for NewsRank.
    """
    def __init__(self, config_path: Optional[str] = None, env: Optional[Dict[str, str]] = None):
        """
        Initialize the Config.

        Args:
            config_path: Path to a YAML or JSON configuration file
            env: Environment mapping to read overrides from (defaults to os.environ)
        """
        self.config_path = config_path
        self.env = os.environ if env is None else env
        self.config = self._load_config()

    def _load_config(self) -> Dict:
        """
        Load configuration from file or use defaults.

        Returns:
            Configuration dictionary
        """
        config = copy.deepcopy(DEFAULT_CONFIG)

        if self.config_path:
            try:
                user_config = self._read_file(Path(self.config_path))
                if user_config:
                    self._update_dict(config, user_config)
            except (OSError, ValueError, yaml.YAMLError, ConfigError) as e:
                logger.error(f"Error loading config from {self.config_path}: {e}")
                logger.warning("Using default configuration")

        # Override with environment variables
        self._override_from_env(config)

        return config

    def _read_file(self, path: Path) -> Optional[Dict]:
        if not path.exists():
            logger.warning(f"Config file {path} not found")
            return None
        if path.suffix.lower() in ['.yaml', '.yml']:
            with open(path, 'r') as f:
                return yaml.safe_load(f)
        if path.suffix.lower() == '.json':
            with open(path, 'r') as f:
                return json.load(f)
        raise ConfigError(f"Unsupported config file format: {path.suffix}")

    def _update_dict(self, target: Dict, source: Dict) -> None:
        """
        Recursively update a dictionary.

        Args:
            target: Target dictionary to update
            source: Source dictionary with new values
        """
        for key, value in source.items():
            if key in target and isinstance(target[key], dict) and isinstance(value, dict):
                self._update_dict(target[key], value)
            else:
                target[key] = value

    def _override_from_env(self, config: Dict, prefix: str = 'NEWSRANK_') -> None:
        """
        Override configuration with environment variables.

        NEWSRANK_STORE_URL sets store.url. The first underscore after the
        prefix separates section from key, so NEWSRANK_STORE_PAGE_SIZE sets
        store.page_size.

        Args:
            config: Configuration dictionary to update
            prefix: Prefix for environment variables
        """
        for key, value in self.env.items():
            if not key.startswith(prefix) or key == f'{prefix}CONFIG_PATH':
                continue

            parts = key[len(prefix):].lower().split('_', 1)
            if len(parts) == 1:
                config[parts[0]] = self._parse_value(value)
                continue

            section, name = parts
            current = config.setdefault(section, {})
            if not isinstance(current, dict):
                continue
            current[name] = self._parse_value(value)

    @staticmethod
    def _parse_value(value: str) -> Any:
        try:
            # Try to parse as JSON
            return json.loads(value)
        except json.JSONDecodeError:
            # If not valid JSON, use as string
            return value

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value.

        Args:
            key: Dot-separated key path (e.g., 'store.url')
            default: Default value if key not found

        Returns:
            Configuration value
        """
        parts = key.split('.')
        current = self.config

        for part in parts:
            if not isinstance(current, dict) or part not in current:
                return default
            current = current[part]

        return current


# Global configuration instance
config = Config(os.getenv('NEWSRANK_CONFIG_PATH'))

def get_config(key: str, default: Any = None) -> Any:
    """
    Get a configuration value.

    Args:
        key: Dot-separated key path (e.g., 'store.url')
        default: Default value if key not found

    Returns:
        Configuration value
    """
    return config.get(key, default)
