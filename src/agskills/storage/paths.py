"""
Path utilities for agskills.

Provides consistent path resolution for configuration, the skills repository
and agent target directories.
"""

import os
from pathlib import Path

from agskills.exceptions import InvalidPathError, SkillsRootNotFoundError

SKILLS_DIRNAME = "skills"
DATA_DIRNAME = "data"


def get_agskills_home() -> Path:
    """
    Get the agskills home directory.

    Resolution order:
    1. AGSKILLS_HOME environment variable
    2. Default: ~/.agskills

    Returns:
        Path to the agskills home directory.
    """
    env_home = os.environ.get("AGSKILLS_HOME")
    if env_home:
        return Path(env_home).expanduser().resolve()
    return Path.home() / ".agskills"


def get_global_config_path() -> Path:
    """
    Get the path to the global configuration file.

    Returns:
        Path to ~/.agskills/config.yaml
    """
    return get_agskills_home() / "config.yaml"


def expand_path(path: str | Path) -> Path:
    """
    Expand a path string, handling ~ and environment variables.

    Args:
        path: Path string or Path object.

    Returns:
        Expanded absolute Path.
    """
    if isinstance(path, str):
        path = os.path.expandvars(path)
        path = os.path.expanduser(path)
    return Path(os.path.abspath(path))


def is_repo_root(candidate: Path | None) -> bool:
    """Check whether a directory holds a skills/ subdirectory."""
    if candidate is None:
        return False
    return (candidate / SKILLS_DIRNAME).is_dir()


def find_repo_root(explicit: str | Path | None = None) -> Path:
    """
    Locate the skills repository root.

    Resolution order:
    1. Explicit path (--repo or the configured paths.repo)
    2. Current working directory
    3. The directory above the installed package

    Args:
        explicit: Optional explicit repository path.

    Returns:
        Absolute path to the repository root.

    Raises:
        SkillsRootNotFoundError: If no candidate contains a skills/ directory.
    """
    if explicit:
        candidates = [expand_path(explicit)]
    else:
        candidates = [Path.cwd(), Path(__file__).resolve().parents[3]]

    for candidate in candidates:
        if is_repo_root(candidate):
            return candidate

    raise SkillsRootNotFoundError(candidates)


def get_skills_root(repo_root: Path) -> Path:
    """
    Get the source skills directory of a repository.

    Returns:
        Path to <repo>/skills
    """
    return repo_root / SKILLS_DIRNAME


def get_bundles_path(repo_root: Path) -> Path:
    """
    Get the default bundles file.

    Returns:
        Path to <repo>/data/bundles.json
    """
    return repo_root / DATA_DIRNAME / "bundles.json"


def get_custom_bundles_path(repo_root: Path) -> Path:
    """
    Get the custom bundles file.

    Returns:
        Path to <repo>/data/custom-bundles.json
    """
    return repo_root / DATA_DIRNAME / "custom-bundles.json"


def resolve_project_root(path: str | Path | None, option: str = "--path") -> Path:
    """
    Resolve and create a project root passed on the command line.

    Args:
        path: Raw path argument.
        option: Option name used in error messages.

    Returns:
        Absolute, existing project directory.

    Raises:
        InvalidPathError: If the path is missing or cannot be created.
    """
    if not path or not str(path).strip():
        raise InvalidPathError(f"Pass project root via {option} <project-dir>.")

    project_root = expand_path(path)
    if project_root.exists() and not project_root.is_dir():
        raise InvalidPathError(f"Invalid {option} value: not a directory", project_root)

    try:
        ensure_directory(project_root)
    except OSError as e:
        raise InvalidPathError(f"Cannot create project directory: {e}", project_root) from e
    return project_root


def ensure_directory(path: Path, mode: int = 0o755) -> Path:
    """
    Ensure a directory exists, creating it if necessary.

    Args:
        path: Directory path.
        mode: Permission mode for created directories.

    Returns:
        The path (for chaining).
    """
    path.mkdir(parents=True, exist_ok=True, mode=mode)
    return path


def ensure_agent_target(target: Path) -> Path:
    """
    Create an agent's skills directory inside a project.

    Raises:
        InvalidPathError: If the directory cannot be created (for example a
            regular file sits where .claude should be).
    """
    try:
        return ensure_directory(target)
    except OSError as e:
        raise InvalidPathError(f"Cannot create agent skills directory: {e}", target) from e
