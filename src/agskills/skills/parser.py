"""
SKILL.md parsing for agskills.

Extracts the one-line description shown next to a skill in the selection list.
"""

import logging
import re
from pathlib import Path
from typing import Any

import yaml

from agskills.skills.models import DEFAULT_DESCRIPTION

logger = logging.getLogger(__name__)

MAX_DESCRIPTION_LENGTH = 200

_DESCRIPTION_LINE_RE = re.compile(r"^\s*description\s*:\s*(.*?)\s*$")


def split_frontmatter(content: str) -> tuple[str | None, str]:
    """Split YAML frontmatter from a markdown document.

    Frontmatter is delimited by --- at the start and end.

    Args:
        content: The full markdown content.

    Returns:
        Tuple of (frontmatter text or None, remaining content).
    """
    if not content.startswith("---"):
        return None, content

    lines = content.splitlines()
    if lines[0].strip() != "---":
        return None, content

    for i, line in enumerate(lines[1:], start=1):
        if line.strip() == "---":
            return "\n".join(lines[1:i]), "\n".join(lines[i + 1 :]).strip()

    # No closing delimiter found
    return None, content


def parse_frontmatter(text: str) -> dict[str, Any] | None:
    """Parse frontmatter text as a YAML mapping.

    Returns:
        The mapping, or None if the text is not valid YAML or not a mapping.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError:
        return None
    return data if isinstance(data, dict) else None


def _clean(value: str) -> str:
    return " ".join(value.split()).strip("'\"").strip()


def _frontmatter_description(text: str) -> str | None:
    data = parse_frontmatter(text)
    if data is not None:
        value = data.get("description")
        if value is None:
            return None
        cleaned = _clean(str(value))
        return cleaned or None

    # Not valid YAML (unquoted colons are common); match the line directly
    for line in text.splitlines():
        match = _DESCRIPTION_LINE_RE.match(line)
        if match:
            cleaned = _clean(match.group(1))
            if cleaned:
                return cleaned
    return None


def extract_description(content: str) -> str:
    """Extract a one-line description from SKILL.md content.

    The frontmatter `description` field wins; otherwise the first non-empty
    line of the body that is not a heading.

    Args:
        content: SKILL.md content.

    Returns:
        Description truncated to 200 characters, or the default text.
    """
    if not content:
        return DEFAULT_DESCRIPTION

    frontmatter, body = split_frontmatter(content)
    if frontmatter is not None:
        description = _frontmatter_description(frontmatter)
        if description:
            return description[:MAX_DESCRIPTION_LENGTH]

    for line in body.splitlines():
        clean = line.strip()
        if not clean or clean.startswith("#"):
            continue
        return clean[:MAX_DESCRIPTION_LENGTH]

    return DEFAULT_DESCRIPTION


def read_skill_description(skill_file: Path) -> str:
    """Read the description of a skill from its document file.

    Args:
        skill_file: Path to the skill's SKILL.md.

    Returns:
        The description, or the default text when missing or unreadable.
    """
    try:
        content = skill_file.read_text(encoding="utf-8")
    except FileNotFoundError:
        return DEFAULT_DESCRIPTION
    except (OSError, UnicodeDecodeError) as e:
        logger.debug(f"Cannot read {skill_file}: {e}")
        return DEFAULT_DESCRIPTION

    return extract_description(content)
