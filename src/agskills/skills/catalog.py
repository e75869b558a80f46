"""
Skill catalog for agskills.

Discovers skills under a skills root. A skill is any directory that directly
contains the skill document (SKILL.md); skills may be nested in categories.
"""

import os
from pathlib import Path

from agskills.skills.models import Skill
from agskills.skills.parser import read_skill_description

SKILL_FILENAME = "SKILL.md"


def list_skill_ids(skills_root: Path, skill_file: str = SKILL_FILENAME) -> list[str]:
    """List skill identifiers under a skills root.

    Directories whose name starts with "." are not traversed at all.
    Symlinked directories are not followed.

    Args:
        skills_root: Root directory of the skills tree.
        skill_file: Name of the document marking a skill directory.

    Returns:
        Sorted forward-slash identifiers relative to skills_root.
    """
    if not skills_root.is_dir():
        return []

    ids: list[str] = []
    for dirpath, dirnames, filenames in os.walk(skills_root):
        dirnames[:] = [d for d in dirnames if not d.startswith(".")]

        current = Path(dirpath)
        if current == skills_root:
            continue
        if skill_file in filenames:
            ids.append(current.relative_to(skills_root).as_posix())

    return sorted(ids)


class SkillCatalog:
    """Ordered skill identifiers with lazily read descriptions."""

    def __init__(self, skills_root: Path, skill_file: str = SKILL_FILENAME):
        """Initialize the catalog.

        Args:
            skills_root: Root directory of the skills tree.
            skill_file: Name of the document marking a skill directory.
        """
        self.skills_root = skills_root
        self.skill_file = skill_file
        self._ids: list[str] | None = None
        self._descriptions: dict[str, str] = {}

    @property
    def ids(self) -> list[str]:
        """Skill identifiers in display order (scanned once)."""
        if self._ids is None:
            self._ids = list_skill_ids(self.skills_root, self.skill_file)
        return self._ids

    def __len__(self) -> int:
        return len(self.ids)

    def __contains__(self, skill_id: object) -> bool:
        return skill_id in self.ids

    def path_of(self, skill_id: str) -> Path:
        """Absolute source path of a skill."""
        return self.skills_root.joinpath(*skill_id.split("/"))

    def description(self, skill_id: str) -> str:
        """Description of a skill, read on first use."""
        if skill_id not in self._descriptions:
            self._descriptions[skill_id] = read_skill_description(
                self.path_of(skill_id) / self.skill_file
            )
        return self._descriptions[skill_id]

    def skills(self) -> list[Skill]:
        """All skills as models."""
        return [
            Skill(id=skill_id, path=self.path_of(skill_id), description=self.description(skill_id))
            for skill_id in self.ids
        ]
