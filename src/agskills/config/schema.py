"""
Pydantic configuration schema for agskills.

This module defines all configuration models with validation.
"""

from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from agskills.exceptions import UnknownAgentError

# =============================================================================
# Paths Configuration
# =============================================================================


class PathsConfig(BaseModel):
    """Where the skills repository lives and how skills are recognized."""

    model_config = ConfigDict(extra="allow")

    # Repository root holding skills/ and data/ (None: cwd, then package parent)
    repo: str | None = None
    skill_file: str = "SKILL.md"


# =============================================================================
# Agent Configuration
# =============================================================================


class AgentConfig(BaseModel):
    """Target directory for one AI assistant, relative to a project root."""

    skills_dir: str
    description: str = ""


def default_agents() -> dict[str, AgentConfig]:
    """Agents known out of the box, in picker order."""
    return {
        "gemini": AgentConfig(
            skills_dir=".gemini/skills",
            description="Creates symlinks in <path>/.gemini/skills",
        ),
        "codex": AgentConfig(
            skills_dir=".codex/skills",
            description="Creates symlinks in <path>/.codex/skills",
        ),
        "claude": AgentConfig(
            skills_dir=".claude/skills",
            description="Creates symlinks in <path>/.claude/skills",
        ),
    }


# =============================================================================
# UI Configuration
# =============================================================================


class UIConfig(BaseModel):
    """Selection list configuration."""

    model_config = ConfigDict(extra="allow")

    # Seconds to wait after a lone ESC before treating it as the Escape key
    escape_timeout: float = Field(default=0.05, ge=0.0, le=2.0)


# =============================================================================
# Logging Configuration
# =============================================================================


class LoggingConfig(BaseModel):
    """Diagnostic logging configuration."""

    model_config = ConfigDict(extra="allow")

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"
    file: str | None = None

    @field_validator("level", mode="before")
    @classmethod
    def upper_level(cls, v: Any) -> Any:
        """Accept level names in any case."""
        return v.upper() if isinstance(v, str) else v


# =============================================================================
# Root Configuration
# =============================================================================


class Config(BaseModel):
    """
    Root configuration model for agskills.

    Loaded from ~/.agskills/config.yaml and AGSKILLS_* environment variables,
    merged over these defaults.
    """

    model_config = ConfigDict(extra="allow")

    paths: PathsConfig = Field(default_factory=PathsConfig)
    agents: dict[str, AgentConfig] = Field(default_factory=default_agents)
    ui: UIConfig = Field(default_factory=UIConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    def agent_skills_dir(self, project_root: Path, agent: str) -> Path:
        """
        Resolve an agent's skills directory inside a project.

        Args:
            project_root: Project directory passed via --path.
            agent: Agent name (e.g. "claude").

        Returns:
            Absolute path such as <project>/.claude/skills.

        Raises:
            UnknownAgentError: If the agent is not configured.
        """
        if agent not in self.agents:
            raise UnknownAgentError(agent, list(self.agents))
        return project_root / self.agents[agent].skills_dir
