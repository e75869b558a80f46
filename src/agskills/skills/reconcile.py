"""
Symlink reconciliation for agskills.

Turns a desired skill selection into the minimal set of symlink creations and
removals under a target directory, then prunes directories left empty.

Only symlinks are ever deleted. Real files or directories found where a link
is expected are reported as skipped and left alone.
"""

import logging
import os
from collections.abc import Iterable
from enum import Enum
from pathlib import Path

from agskills.skills.links import list_linked_skills, points_to
from agskills.skills.models import ReconcileResult

logger = logging.getLogger(__name__)


class LinkOutcome(Enum):
    """Result of ensuring a single symlink."""

    CREATED = "created"
    REPLACED = "replaced"
    UNCHANGED = "unchanged"
    BLOCKED = "blocked"


def ensure_symlink(link_path: Path, target: Path) -> LinkOutcome:
    """Make link_path a directory symlink to target.

    Args:
        link_path: Where the symlink should live.
        target: Absolute path the symlink should point at.

    Returns:
        What was done. BLOCKED means a non-symlink entry occupies link_path.

    Raises:
        OSError: If the filesystem refuses the change.
    """
    outcome = LinkOutcome.CREATED
    if link_path.is_symlink():
        if points_to(link_path, target):
            return LinkOutcome.UNCHANGED
        link_path.unlink()
        outcome = LinkOutcome.REPLACED
    elif os.path.lexists(link_path):
        return LinkOutcome.BLOCKED

    link_path.symlink_to(target, target_is_directory=True)
    return outcome


def remove_empty_parents(start_dir: Path, stop_dir: Path) -> list[Path]:
    """Remove empty directories from start_dir upward, never stop_dir itself.

    Stops at the first directory that is non-empty, unreadable, or outside
    stop_dir.

    Args:
        start_dir: First directory to consider.
        stop_dir: Boundary directory that is never removed.

    Returns:
        Directories removed, innermost first.
    """
    current = Path(os.path.abspath(start_dir))
    stop = Path(os.path.abspath(stop_dir))
    removed: list[Path] = []

    while current != stop and stop in current.parents:
        try:
            if any(current.iterdir()):
                break
            current.rmdir()
        except OSError as e:
            logger.debug(f"Stopped pruning at {current}: {e}")
            break
        removed.append(current)
        current = current.parent

    return removed


def _destination(target_root: Path, skill_id: str) -> Path | None:
    destination = Path(os.path.normpath(target_root.joinpath(*skill_id.split("/"))))
    if target_root not in destination.parents:
        return None
    return destination


def _add(skill_id: str, source_root: Path, target_root: Path, result: ReconcileResult) -> None:
    source = source_root.joinpath(*skill_id.split("/"))
    destination = _destination(target_root, skill_id)
    if destination is None:
        logger.warning(f"Invalid skill id, skipped: {skill_id}")
        result.skip(skill_id, "invalid skill id")
        return

    if not source.exists():
        logger.warning(f"Missing source skill: {skill_id}")
        result.skip(skill_id, "missing source")
        return

    try:
        destination.parent.mkdir(parents=True, exist_ok=True)
        outcome = ensure_symlink(destination, source)
    except OSError as e:
        logger.warning(f"Failed linking {skill_id}: {e}")
        result.skip(skill_id, f"failed linking: {e}")
        return

    if outcome is LinkOutcome.BLOCKED:
        logger.warning(f"Exists and is not a symlink, skipped: {destination}")
        result.skip(skill_id, "exists and is not a symlink")
    elif outcome is not LinkOutcome.UNCHANGED:
        logger.debug(f"Linked {destination} -> {source} ({outcome.value})")
        result.added += 1


def _remove(skill_id: str, target_root: Path, result: ReconcileResult) -> None:
    destination = _destination(target_root, skill_id)
    if destination is None or not destination.is_symlink():
        logger.warning(f"Not a symlink, left untouched: {destination or skill_id}")
        result.skip(skill_id, "not a symlink")
        return

    try:
        destination.unlink()
    except OSError as e:
        logger.warning(f"Failed removing {skill_id}: {e}")
        result.skip(skill_id, f"failed removing: {e}")
        return

    logger.debug(f"Removed link {destination}")
    remove_empty_parents(destination.parent, target_root)
    result.removed += 1


def reconcile(
    desired: Iterable[str],
    installed: Iterable[str],
    source_root: Path,
    target_root: Path,
) -> ReconcileResult:
    """Apply the difference between desired and installed skills.

    Removes links for installed skills that are no longer desired, then adds
    links for desired skills that are not installed. Failures are isolated per
    skill and reported as skipped.

    Args:
        desired: Skill identifiers that should be linked.
        installed: Skill identifiers observed as linked (see list_linked_skills).
        source_root: Skills root the links point into.
        target_root: Directory holding the links.

    Returns:
        Added, removed and skipped counters.
    """
    source = Path(os.path.abspath(source_root))
    target = Path(os.path.abspath(target_root))
    desired_set = set(desired)
    installed_set = set(installed)

    # Removes run before adds so b/c is never created through a stale link to b
    result = ReconcileResult()
    for skill_id in sorted(installed_set - desired_set):
        _remove(skill_id, target, result)
    for skill_id in sorted(desired_set - installed_set):
        _add(skill_id, source, target, result)

    logger.info(
        f"Reconciled {target}: added={result.added} "
        f"removed={result.removed} skipped={result.skipped}"
    )
    return result


def sync_links(desired: Iterable[str], source_root: Path, target_root: Path) -> ReconcileResult:
    """Inspect target_root and reconcile it to exactly the desired skills."""
    installed = list_linked_skills(target_root, source_root)
    return reconcile(desired, installed, source_root, target_root)


def install_skills(
    skill_ids: Iterable[str], source_root: Path, target_root: Path
) -> ReconcileResult:
    """Link skill_ids into target_root without removing anything already linked."""
    installed = list_linked_skills(target_root, source_root)
    return reconcile(set(installed) | set(skill_ids), installed, source_root, target_root)
