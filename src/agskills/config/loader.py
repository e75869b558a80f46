"""
Configuration loader for agskills.

Loads and merges configuration from multiple sources:
1. Default values
2. Global config (~/.agskills/config.yaml)
3. Environment variables (AGSKILLS_*)
"""

import os
import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from agskills.config.merger import deep_merge, set_nested_value
from agskills.config.schema import Config
from agskills.exceptions import ConfigurationError
from agskills.storage.paths import get_global_config_path

ENV_PREFIX = "AGSKILLS_"


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a YAML configuration file.

    Args:
        path: Path to the YAML file.

    Returns:
        Parsed configuration dictionary.

    Raises:
        ConfigurationError: If the file cannot be read or parsed.
    """
    try:
        with open(path, encoding="utf-8") as f:
            content = yaml.safe_load(f)
    except FileNotFoundError:
        return {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e
    except OSError as e:
        raise ConfigurationError(f"Cannot read {path}: {e}") from e

    if content is None:
        return {}
    if not isinstance(content, dict):
        raise ConfigurationError(f"Configuration in {path} must be a YAML mapping")
    return content


def apply_env_overrides(config: dict[str, Any]) -> dict[str, Any]:
    """
    Apply environment variable overrides to configuration.

    Environment variables follow the pattern AGSKILLS_<SECTION>_<KEY>=<value>,
    e.g. AGSKILLS_LOGGING_LEVEL=DEBUG or AGSKILLS_PATHS_SKILL_FILE=README.md.

    Args:
        config: Configuration dictionary to modify.

    Returns:
        Configuration with environment overrides applied.
    """
    for key, value in os.environ.items():
        if not key.startswith(ENV_PREFIX):
            continue

        # AGSKILLS_HOME picks the config directory itself
        if key == "AGSKILLS_HOME":
            continue

        section, _, name = key[len(ENV_PREFIX) :].lower().partition("_")
        if not section or not name:
            continue

        config = set_nested_value(config, [section, name], _parse_env_value(value))

    return config


def _parse_env_value(value: str) -> Any:
    """
    Parse an environment variable value to the appropriate type.

    Args:
        value: String value from environment.

    Returns:
        Parsed value (bool, int, float, or string).
    """
    if value.lower() in ("true", "yes", "on"):
        return True
    if value.lower() in ("false", "no", "off"):
        return False

    if re.match(r"^-?\d+$", value):
        return int(value)

    if re.match(r"^-?\d+\.\d+$", value):
        return float(value)

    return value


def load_config(config_path: Path | None = None, skip_env: bool = False) -> Config:
    """
    Load and merge configuration from all sources.

    Args:
        config_path: Config file to read. Defaults to ~/.agskills/config.yaml.
        skip_env: Skip environment variable overrides.

    Returns:
        Merged and validated Config object.

    Raises:
        ConfigurationError: If configuration is invalid.
    """
    config_dict = Config().model_dump()

    path = config_path or get_global_config_path()
    if path.exists():
        config_dict = deep_merge(config_dict, load_yaml_file(path))

    if not skip_env:
        config_dict = apply_env_overrides(config_dict)

    try:
        return Config.model_validate(config_dict)
    except ValidationError as e:
        raise ConfigurationError(f"Configuration validation failed: {e}") from e


# Singleton for cached config
_cached_config: Config | None = None


def get_config(reload: bool = False) -> Config:
    """
    Get the global configuration instance.

    Uses a cached instance. Use reload=True to force refresh.

    Args:
        reload: Force reload configuration from disk.

    Returns:
        Config instance.
    """
    global _cached_config

    if _cached_config is None or reload:
        _cached_config = load_config()

    return _cached_config


def clear_config_cache() -> None:
    """Clear the cached configuration."""
    global _cached_config
    _cached_config = None
