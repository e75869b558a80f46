"""
Skill models for agskills.

Defines the data structures for skills, bundles, discovered links and
reconciliation outcomes.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_DESCRIPTION = "No description available."


class Skill(BaseModel):
    """A skill discovered under a skills root.

    Read once per invocation and never modified afterwards.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Forward-slash path relative to the skills root")
    path: Path = Field(..., description="Absolute path to the skill directory")
    description: str = Field(default=DEFAULT_DESCRIPTION, description="One-line description")


class BundleSource(str, Enum):
    """Where a bundle comes from."""

    DEFAULT = "default"
    CUSTOM = "custom"


class Bundle(BaseModel):
    """A named collection of skill identifiers.

    Default bundles ship with the skills repository and are read-only.
    Custom bundles are written by the bundle store.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Bundle name")
    description: str = Field(default="", description="Free text description")
    skills: list[str] = Field(default_factory=list, description="Skill identifiers")
    source: BundleSource = Field(default=BundleSource.CUSTOM, description="Provenance tag")

    @property
    def is_custom(self) -> bool:
        """Whether the bundle may be edited or deleted."""
        return self.source is BundleSource.CUSTOM

    def summary(self, with_source: bool = True) -> str:
        """One-line summary used as the picker description."""
        if with_source:
            return f"{self.description} [{self.source.value}] - {len(self.skills)} skills"
        return f"{self.description} - {len(self.skills)} skills"


class LinkRecord(BaseModel):
    """A symlink under a target directory that resolves into the skills root."""

    model_config = ConfigDict(frozen=True)

    skill_id: str = Field(..., description="Identifier relative to the skills root")
    link_path: Path = Field(..., description="Absolute path of the symlink itself")


@dataclass
class ReconcileResult:
    """Counters reported after applying a desired skill set."""

    added: int = 0
    removed: int = 0
    skipped: int = 0
    skip_reasons: list[tuple[str, str]] = field(default_factory=list)

    def skip(self, skill_id: str, reason: str) -> None:
        """Record a skipped skill."""
        self.skipped += 1
        self.skip_reasons.append((skill_id, reason))

    @property
    def changed(self) -> bool:
        """Whether anything on disk was modified."""
        return bool(self.added or self.removed)
