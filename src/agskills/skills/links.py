"""
Link state inspection for agskills.

Reports which skills are currently installed in a target directory, i.e. which
entries under it are symlinks resolving into the source skills root.
"""

import logging
import os
from collections.abc import Iterator
from pathlib import Path

from agskills.skills.models import LinkRecord

logger = logging.getLogger(__name__)


def resolve_link(link_path: str | Path) -> Path | None:
    """Resolve a symlink's target relative to the link's own directory.

    Only the link itself is dereferenced; intermediate symlinks in the target
    path are kept as written.

    Args:
        link_path: Path of the symlink.

    Returns:
        Absolute normalized target, or None if unreadable.
    """
    try:
        target = os.readlink(link_path)
    except OSError:
        return None
    return Path(os.path.normpath(os.path.join(os.path.dirname(os.path.abspath(link_path)), target)))


def points_to(link_path: str | Path, target: str | Path) -> bool:
    """Whether link_path is a symlink resolving exactly to target."""
    if not os.path.islink(link_path):
        return False
    return resolve_link(link_path) == Path(os.path.abspath(target))


def iter_link_records(target_root: Path, source_root: Path) -> Iterator[LinkRecord]:
    """Walk target_root and yield symlinks resolving inside source_root.

    Symlinked directories are reported, never descended into. Broken or
    unreadable entries are skipped. A missing target_root yields nothing.

    Args:
        target_root: Directory holding installed links.
        source_root: Skills root the links must resolve into.

    Yields:
        LinkRecord for every matching symlink.
    """
    target = Path(os.path.abspath(target_root))
    source = Path(os.path.abspath(source_root))
    prefix = f"{source}{os.sep}"

    if not target.is_dir():
        return

    pending = [target]
    while pending:
        current = pending.pop()
        try:
            with os.scandir(current) as it:
                entries = list(it)
        except OSError as e:
            logger.debug(f"Skipping unreadable directory {current}: {e}")
            continue

        for entry in entries:
            if entry.is_symlink():
                resolved = resolve_link(entry.path)
                if resolved is None or not str(resolved).startswith(prefix):
                    continue
                if not resolved.exists():
                    logger.debug(f"Skipping broken link {entry.path} -> {resolved}")
                    continue
                yield LinkRecord(
                    skill_id=resolved.relative_to(source).as_posix(),
                    link_path=Path(entry.path),
                )
            elif entry.is_dir(follow_symlinks=False):
                pending.append(Path(entry.path))


def list_link_records(target_root: Path, source_root: Path) -> list[LinkRecord]:
    """All link records under target_root, sorted by skill then link path."""
    return sorted(
        iter_link_records(target_root, source_root),
        key=lambda record: (record.skill_id, str(record.link_path)),
    )


def list_linked_skills(target_root: Path, source_root: Path) -> list[str]:
    """Skill identifiers currently installed under target_root.

    Args:
        target_root: Directory holding installed links.
        source_root: Skills root the links must resolve into.

    Returns:
        Sorted, de-duplicated identifiers relative to source_root.
    """
    return sorted({record.skill_id for record in iter_link_records(target_root, source_root)})
