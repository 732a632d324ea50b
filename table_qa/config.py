"""
Configuration for table-qa: YAML defaults plus environment overrides.
"""

import os
from pathlib import Path
from typing import Dict, Any, Optional, Union
from dotenv import load_dotenv

from .utils.file_utils import load_config as load_yaml_config
from .utils.logging_utils import get_logger

logger = get_logger(__name__)

DEFAULT_CONFIG_FILE = Path(__file__).parent.parent / 'config' / 'pipeline_config.yaml'


class Config:
    """Pipeline settings from a YAML file, overridden by environment variables."""

    def __init__(self, config_file: Optional[Union[str, Path]] = None):
        env_path = Path(__file__).parent.parent / '.env'
        if env_path.exists():
            load_dotenv(env_path)
            logger.info(f"Loaded environment variables from: {env_path}")

        explicit = config_file is not None
        if not explicit:
            config_file = DEFAULT_CONFIG_FILE

        self.config = {}
        if Path(config_file).exists():
            self.config = load_yaml_config(config_file)
            logger.info(f"Loaded config from: {config_file}")
        elif explicit:
            logger.warning(f"Config file not found: {config_file}")
        else:
            # Installed without the repository's config/ directory
            logger.info(f"No config file at {config_file}, using built-in defaults")

        self._apply_env_overrides()

    def _apply_env_overrides(self):
        """Apply environment variable overrides to config."""
        if os.getenv('CSV_DELIMITER'):
            self.set('data.delimiter', os.getenv('CSV_DELIMITER'))

        if os.getenv('CSV_ENCODING'):
            self.set('data.encoding', os.getenv('CSV_ENCODING'))

        if os.getenv('FALLBACK_COLUMN_NAME'):
            self.set('synthesizer.fallback_column_name', os.getenv('FALLBACK_COLUMN_NAME'))

        if os.getenv('LOG_LEVEL'):
            self.set('logging.level', os.getenv('LOG_LEVEL'))

    def get(self, key: str, default: Any = None) -> Any:
        """Get a value by dotted key, e.g. ``config.get('data.encoding')``."""
        keys = key.split('.')
        value = self.config

        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value

    def set(self, key: str, value: Any):
        """Set a value by dotted key, creating intermediate sections."""
        keys = key.split('.')
        config = self.config

        for k in keys[:-1]:
            if not isinstance(config.get(k), dict):
                config[k] = {}
            config = config[k]

        config[keys[-1]] = value

    def get_stage_config(self, stage: str) -> Dict[str, Any]:
        """Section dict for 'data', 'synthesizer', 'pipeline' or 'logging'."""
        return self.config.get(stage) or {}

    def get_verification_config(self, verification: str) -> Dict[str, Any]:
        return (self.config.get('verification') or {}).get(verification) or {}

    def to_dict(self) -> Dict[str, Any]:
        return self.config.copy()


_global_config = None


def get_config(config_file: Optional[Union[str, Path]] = None) -> Config:
    """Get or create the process-wide Config; config_file only counts on the first call."""
    global _global_config

    if _global_config is None:
        _global_config = Config(config_file)

    return _global_config


def reset_config() -> None:
    """Drop the global configuration so the next get_config() reloads it."""
    global _global_config
    _global_config = None
