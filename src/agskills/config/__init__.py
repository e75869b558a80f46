"""Configuration for agskills."""

from agskills.config.loader import (
    clear_config_cache,
    get_config,
    load_config,
    load_yaml_file,
)
from agskills.config.schema import (
    AgentConfig,
    Config,
    LoggingConfig,
    PathsConfig,
    UIConfig,
    default_agents,
)

__all__ = [
    "AgentConfig",
    "Config",
    "LoggingConfig",
    "PathsConfig",
    "UIConfig",
    "clear_config_cache",
    "default_agents",
    "get_config",
    "load_config",
    "load_yaml_file",
]
