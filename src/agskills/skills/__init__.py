"""
agskills Skills System.

A skill is a directory containing a SKILL.md document. Skills live under the
skills/ directory of a skills repository and are installed into an AI
assistant's skills directory as symlinks.

Usage:
    from agskills.skills import SkillCatalog, list_linked_skills, reconcile

    catalog = SkillCatalog(repo_root / "skills")
    installed = list_linked_skills(target_dir, catalog.skills_root)
    result = reconcile(wanted, installed, catalog.skills_root, target_dir)
"""

# Models
from agskills.skills.models import (
    DEFAULT_DESCRIPTION,
    Bundle,
    BundleSource,
    LinkRecord,
    ReconcileResult,
    Skill,
)

# Parser
from agskills.skills.parser import (
    extract_description,
    parse_frontmatter,
    read_skill_description,
    split_frontmatter,
)

# Catalog
from agskills.skills.catalog import (
    SKILL_FILENAME,
    SkillCatalog,
    list_skill_ids,
)

# Links
from agskills.skills.links import (
    iter_link_records,
    list_link_records,
    list_linked_skills,
    points_to,
    resolve_link,
)

# Reconciliation
from agskills.skills.reconcile import (
    LinkOutcome,
    ensure_symlink,
    install_skills,
    reconcile,
    remove_empty_parents,
    sync_links,
)

# Bundles
from agskills.skills.bundles import (
    BundleStore,
    default_description,
    normalize_bundle_name,
)

__all__ = [
    # Models
    "DEFAULT_DESCRIPTION",
    "Bundle",
    "BundleSource",
    "LinkRecord",
    "ReconcileResult",
    "Skill",
    # Parser
    "extract_description",
    "parse_frontmatter",
    "read_skill_description",
    "split_frontmatter",
    # Catalog
    "SKILL_FILENAME",
    "SkillCatalog",
    "list_skill_ids",
    # Links
    "iter_link_records",
    "list_link_records",
    "list_linked_skills",
    "points_to",
    "resolve_link",
    # Reconciliation
    "LinkOutcome",
    "ensure_symlink",
    "install_skills",
    "reconcile",
    "remove_empty_parents",
    "sync_links",
    # Bundles
    "BundleStore",
    "default_description",
    "normalize_bundle_name",
]
