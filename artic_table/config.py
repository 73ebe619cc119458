"""
Configuration settings for the artworks table
"""

import copy
import os
import json
from typing import Dict, Any, Optional

from artic_table.errors import ConfigError


DEFAULT_CONFIG = {
    "api": {
        "url": "https://api.artic.edu/api/v1/artworks",
        "timeout": 30,
        "impersonate": "chrome110",
        "limit": None,
        "fields": None
    },
    "ui": {
        "default_selection": 12,
        "start_page": 0
    },
    "logging": {
        "path": "logs/artic_table.log",
        "level": "INFO"
    }
}

CONFIG_FILE = os.path.expanduser("~/.artic_table_config.json")

# env var -> (section, key, converter)
ENV_OVERRIDES = {
    "ARTIC_API_URL": ("api", "url", str),
    "ARTIC_API_TIMEOUT": ("api", "timeout", float),
    "ARTIC_PAGE_LIMIT": ("api", "limit", int),
    "ARTIC_LOG_FILE": ("logging", "path", str),
    "ARTIC_LOG_LEVEL": ("logging", "level", str),
}


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            _deep_merge(base[key], value)
        else:
            base[key] = value
    return base


def load_config(config_file: Optional[str] = None) -> Dict[str, Any]:
    """
    Load configuration from file or environment variables

    The file (``config_file`` or ``~/.artic_table_config.json``) is merged
    over `DEFAULT_CONFIG`; environment variables win over both.
    """
    config = copy.deepcopy(DEFAULT_CONFIG)
    path = config_file or CONFIG_FILE

    if config_file and not os.path.exists(config_file):
        raise ConfigError(f"Config file not found: {config_file}")

    if os.path.exists(path):
        try:
            with open(path, 'r', encoding='utf-8') as f:
                file_config = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            raise ConfigError(f"Error loading config file {path}: {e}") from e
        if not isinstance(file_config, dict):
            raise ConfigError(f"Config file {path} must contain a JSON object")
        _deep_merge(config, file_config)

    for env_name, (section, key, convert) in ENV_OVERRIDES.items():
        raw = os.environ.get(env_name)
        if not raw:
            continue
        try:
            config[section][key] = convert(raw)
        except ValueError as e:
            raise ConfigError(f"Invalid value for {env_name}: {raw!r}") from e

    return config


def save_config(config: Dict[str, Any], config_file: Optional[str] = None) -> None:
    """
    Save configuration to file
    """
    path = config_file or CONFIG_FILE
    try:
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(config, f, indent=2)
    except OSError as e:
        raise ConfigError(f"Error saving config file {path}: {e}") from e
