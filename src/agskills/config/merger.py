"""
Configuration merger for agskills.
"""

from typing import Any


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """
    Deep merge two dictionaries.

    Merge rules:
    - Scalar values and lists: override replaces base
    - Dicts: recursive deep merge
    - null/None value: remove key from result

    Args:
        base: Base configuration dictionary.
        override: Override configuration dictionary.

    Returns:
        Merged configuration dictionary.

    Examples:
        >>> base = {"agents": {"claude": {"skills_dir": ".claude/skills"}}}
        >>> override = {"agents": {"cursor": {"skills_dir": ".cursor/skills"}}}
        >>> sorted(deep_merge(base, override)["agents"])
        ['claude', 'cursor']
    """
    result = base.copy()

    for key, value in override.items():
        if value is None:
            result.pop(key, None)
        elif isinstance(value, dict) and isinstance(result.get(key), dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def set_nested_value(config: dict[str, Any], keys: list[str], value: Any) -> dict[str, Any]:
    """
    Set a nested value in a configuration dictionary.

    Creates intermediate dictionaries as needed.

    Args:
        config: Configuration dictionary.
        keys: Key path, outermost first (e.g., ["logging", "level"]).
        value: Value to set.

    Returns:
        Modified configuration dictionary.
    """
    current = config

    for key in keys[:-1]:
        if key not in current or not isinstance(current[key], dict):
            current[key] = {}
        current = current[key]

    current[keys[-1]] = value
    return config
