"""
Bundle store for agskills.

Default bundles ship with the skills repository in data/bundles.json and are
never written. Custom bundles live in data/custom-bundles.json:

    {
      "generatedAt": "2026-01-01T00:00:00.000Z",
      "bundles": {
        "<name>": {"description": "...", "skills": ["a", "b/c"]}
      }
    }
"""

import json
import logging
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from agskills.exceptions import BundleNotFoundError, InvalidBundleNameError
from agskills.skills.models import Bundle, BundleSource
from agskills.storage.paths import get_bundles_path, get_custom_bundles_path

logger = logging.getLogger(__name__)

MAX_BUNDLE_NAME_LENGTH = 80

_NON_ALNUM_RE = re.compile(r"[^a-z0-9]+")


def normalize_bundle_name(raw_name: str | None) -> str:
    """Normalize a user-entered bundle name.

    Lower-cases, collapses every run of non-alphanumerics into one dash, trims
    leading/trailing dashes and caps the length.

    Examples:
        >>> normalize_bundle_name("  My Web Bundle! ")
        'my-web-bundle'
    """
    name = _NON_ALNUM_RE.sub("-", str(raw_name or "").strip().lower())
    return name.strip("-")[:MAX_BUNDLE_NAME_LENGTH]


def default_description(name: str) -> str:
    """Description used when a custom bundle is saved without one."""
    return f'Custom bundle "{name}"'


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _load_json(path: Path, fallback: dict[str, Any]) -> dict[str, Any]:
    if not path.exists():
        return fallback
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.warning(f"Ignoring unreadable bundle file {path}: {e}")
        return fallback
    if not isinstance(data, dict):
        logger.warning(f"Ignoring bundle file {path}: top level is not an object")
        return fallback
    return data


def _bundles_section(payload: dict[str, Any]) -> dict[str, Any]:
    bundles = payload.get("bundles")
    return bundles if isinstance(bundles, dict) else {}


def _to_bundle(name: str, data: Any, source: BundleSource) -> Bundle:
    data = data if isinstance(data, dict) else {}
    description = data.get("description")
    skills = data.get("skills")
    return Bundle(
        name=name,
        description=description if isinstance(description, str) else "",
        skills=[s for s in skills if isinstance(s, str)] if isinstance(skills, list) else [],
        source=source,
    )


class BundleStore:
    """Reads default and custom bundles, writes custom ones."""

    def __init__(self, bundles_path: Path, custom_path: Path):
        """Initialize the store.

        Args:
            bundles_path: Read-only default bundles file.
            custom_path: Custom bundles file (created on first save).
        """
        self.bundles_path = bundles_path
        self.custom_path = custom_path

    @classmethod
    def for_repo(cls, repo_root: Path) -> "BundleStore":
        """Store for the data/ directory of a skills repository."""
        return cls(get_bundles_path(repo_root), get_custom_bundles_path(repo_root))

    def load(self) -> list[Bundle]:
        """Load all bundles, default ones first.

        Missing or malformed files count as empty.
        """
        default_raw = _load_json(self.bundles_path, {"bundles": {}})
        custom_raw = _load_json(self.custom_path, {"bundles": {}})

        bundles = [
            _to_bundle(name, data, BundleSource.DEFAULT)
            for name, data in _bundles_section(default_raw).items()
        ]
        bundles.extend(
            _to_bundle(name, data, BundleSource.CUSTOM)
            for name, data in _bundles_section(custom_raw).items()
        )
        return bundles

    def by_name(self, custom_only: bool = False) -> dict[str, Bundle]:
        """Bundles keyed by name; a custom bundle shadows a default one."""
        return {
            bundle.name: bundle
            for bundle in self.load()
            if bundle.is_custom or not custom_only
        }

    def names(self, custom_only: bool = False) -> list[str]:
        """Sorted bundle names."""
        return sorted(self.by_name(custom_only))

    def custom(self) -> list[Bundle]:
        """Custom bundles only, sorted by name."""
        bundles = self.by_name(custom_only=True)
        return [bundles[name] for name in sorted(bundles)]

    def get(self, name: str) -> Bundle:
        """Look up a bundle by name.

        Raises:
            BundleNotFoundError: If no bundle has that name.
        """
        try:
            return self.by_name()[name]
        except KeyError:
            raise BundleNotFoundError(name) from None

    def _read_custom_payload(self) -> dict[str, Any]:
        payload = _load_json(self.custom_path, {"generatedAt": None, "bundles": {}})
        if not isinstance(payload.get("bundles"), dict):
            payload["bundles"] = {}
        return payload

    def _write_custom_payload(self, payload: dict[str, Any]) -> None:
        payload["generatedAt"] = _now_iso()
        self.custom_path.parent.mkdir(parents=True, exist_ok=True)
        self.custom_path.write_text(
            f"{json.dumps(payload, indent=2, ensure_ascii=False)}\n", encoding="utf-8"
        )

    def save_custom(self, name: str, description: str, skills: list[str]) -> Path:
        """Create or replace a custom bundle.

        Args:
            name: Bundle name (normalized before saving).
            description: Free text; empty means the default description.
            skills: Skill identifiers; stored sorted and de-duplicated.

        Returns:
            Path of the custom bundles file.

        Raises:
            InvalidBundleNameError: If the name is empty after normalization.
        """
        bundle_name = normalize_bundle_name(name)
        if not bundle_name:
            raise InvalidBundleNameError(name)

        payload = self._read_custom_payload()
        payload["bundles"][bundle_name] = {
            "description": description.strip() or default_description(bundle_name),
            "skills": sorted(set(skills)),
        }
        self._write_custom_payload(payload)
        logger.info(f"Saved custom bundle {bundle_name} ({len(set(skills))} skills)")
        return self.custom_path

    def delete_custom(self, name: str) -> bool:
        """Delete a custom bundle.

        Returns:
            True if the bundle existed and was removed.
        """
        payload = self._read_custom_payload()
        if name not in payload["bundles"]:
            return False

        del payload["bundles"][name]
        self._write_custom_payload(payload)
        logger.info(f"Deleted custom bundle {name}")
        return True
