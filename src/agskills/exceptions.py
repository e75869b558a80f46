"""
Exceptions for agskills.

Every precondition failure derives from AgSkillsError so the CLI can report it
and exit with status 1 before anything on disk is touched.
"""

from pathlib import Path


class AgSkillsError(Exception):
    """Base exception for agskills errors."""

    pass


class ConfigurationError(AgSkillsError):
    """Raised when configuration loading or validation fails."""

    pass


class NotATerminalError(AgSkillsError):
    """Interactive selection was requested without a TTY on stdin and stdout."""

    def __init__(self, message: str = "Interactive mode requires a TTY terminal."):
        super().__init__(message)


class SkillsRootNotFoundError(AgSkillsError):
    """The skills repository root could not be located."""

    def __init__(self, searched_paths: list[Path] | None = None):
        self.searched_paths = searched_paths or []
        paths_str = ", ".join(str(p) for p in self.searched_paths)
        super().__init__(
            'Could not locate repository root with "skills/" directory'
            + (f" (searched: {paths_str})" if paths_str else "")
        )


class NoSkillsFoundError(AgSkillsError):
    """The skills root exists but holds no skills."""

    def __init__(self, skills_root: Path):
        self.skills_root = skills_root
        super().__init__(f"No skills found in repository: {skills_root}")


class InvalidPathError(AgSkillsError):
    """A --path argument is missing or cannot be used as a project root."""

    def __init__(self, message: str, path: Path | None = None):
        self.path = path
        super().__init__(f"{message}" + (f" ({path})" if path else ""))


class UnknownAgentError(AgSkillsError):
    """Requested agent is not configured."""

    def __init__(self, name: str, available: list[str] | None = None):
        self.name = name
        self.available = available or []
        super().__init__(
            f"Unsupported agent: {name}"
            + (f" (available: {', '.join(self.available)})" if self.available else "")
        )


class BundleError(AgSkillsError):
    """Base exception for bundle store errors."""

    pass


class InvalidBundleNameError(BundleError):
    """Bundle name is empty after normalization."""

    def __init__(self, raw_name: str):
        self.raw_name = raw_name
        super().__init__("Invalid bundle name. Use letters, numbers, dashes.")


class BundleNotFoundError(BundleError):
    """Bundle not found in default or custom bundles."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f'Bundle "{name}" not found.')
