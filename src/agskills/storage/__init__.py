"""Storage utilities for agskills."""

from agskills.storage.paths import (
    ensure_agent_target,
    ensure_directory,
    expand_path,
    find_repo_root,
    get_agskills_home,
    get_bundles_path,
    get_custom_bundles_path,
    get_global_config_path,
    get_skills_root,
    is_repo_root,
    resolve_project_root,
)

__all__ = [
    "ensure_agent_target",
    "ensure_directory",
    "expand_path",
    "find_repo_root",
    "get_agskills_home",
    "get_bundles_path",
    "get_custom_bundles_path",
    "get_global_config_path",
    "get_skills_root",
    "is_repo_root",
    "resolve_project_root",
]
