"""
Unit tests for the bundle store.
"""

import json
import re

import pytest

from agskills.exceptions import BundleNotFoundError, InvalidBundleNameError
from agskills.skills import Bundle, BundleSource, BundleStore, default_description, normalize_bundle_name
from agskills.skills.bundles import MAX_BUNDLE_NAME_LENGTH


@pytest.fixture
def store(skills_repo) -> BundleStore:
    return BundleStore.for_repo(skills_repo)


class TestNormalizeBundleName:
    """Tests for normalize_bundle_name."""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("  My Web Bundle! ", "my-web-bundle"),
            ("a__b--c", "a-b-c"),
            ("---x---", "x"),
            ("!!!", ""),
            ("", ""),
            (None, ""),
        ],
    )
    def test_normalization(self, raw, expected):
        assert normalize_bundle_name(raw) == expected

    def test_length_capped(self):
        assert len(normalize_bundle_name("a" * 200)) == MAX_BUNDLE_NAME_LENGTH


class TestBundleModel:
    """Tests for the Bundle model."""

    def test_summary(self):
        bundle = Bundle(name="web", description="Web", skills=["a", "b"], source=BundleSource.DEFAULT)
        assert bundle.summary() == "Web [default] - 2 skills"
        assert bundle.summary(with_source=False) == "Web - 2 skills"
        assert not bundle.is_custom


class TestBundleStore:
    """Tests for BundleStore."""

    def test_load_defaults(self, store):
        bundles = store.load()
        assert [b.name for b in bundles] == ["web"]
        assert bundles[0].source is BundleSource.DEFAULT
        assert bundles[0].skills == ["a", "b/c"]

    def test_missing_files_are_empty(self, temp_dir):
        store = BundleStore.for_repo(temp_dir)
        assert store.load() == []
        assert store.names() == []

    def test_malformed_files_are_empty(self, store):
        store.bundles_path.write_text("{not json")
        assert store.load() == []

    def test_save_custom(self, store):
        path = store.save_custom("My Set", "", ["b/c", "a", "a"])
        assert path == store.custom_path

        payload = json.loads(path.read_text())
        assert payload["bundles"]["my-set"] == {
            "description": default_description("my-set"),
            "skills": ["a", "b/c"],
        }
        assert re.match(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z$", payload["generatedAt"])

    def test_saved_file_format(self, store):
        store.save_custom("x", "desc", ["a"])
        text = store.custom_path.read_text()
        assert text.endswith("}\n")
        assert '\n  "bundles": {' in text

    def test_save_creates_data_directory(self, temp_dir):
        store = BundleStore.for_repo(temp_dir / "fresh")
        store.save_custom("x", "d", ["a"])
        assert store.custom_path.exists()

    def test_invalid_name(self, store):
        with pytest.raises(InvalidBundleNameError, match="Invalid bundle name"):
            store.save_custom("!!!", "", ["a"])
        assert not store.custom_path.exists()

    def test_custom_listed_after_defaults(self, store):
        store.save_custom("mine", "Mine", ["a"])
        bundles = store.load()
        assert [(b.name, b.source) for b in bundles] == [
            ("web", BundleSource.DEFAULT),
            ("mine", BundleSource.CUSTOM),
        ]
        assert store.names() == ["mine", "web"]
        assert [b.name for b in store.custom()] == ["mine"]

    def test_custom_shadows_default(self, store):
        store.save_custom("web", "My web", ["a"])
        assert store.get("web").is_custom
        assert store.get("web").skills == ["a"]

    def test_get_unknown(self, store):
        with pytest.raises(BundleNotFoundError):
            store.get("nope")

    def test_update_keeps_other_bundles(self, store):
        store.save_custom("one", "1", ["a"])
        store.save_custom("two", "2", ["b/c"])
        store.save_custom("one", "uno", ["a", "b/c"])
        bundles = store.by_name(custom_only=True)
        assert sorted(bundles) == ["one", "two"]
        assert bundles["one"].description == "uno"

    def test_delete_custom(self, store):
        store.save_custom("gone", "", ["a"])
        assert store.delete_custom("gone") is True
        assert store.delete_custom("gone") is False
        assert store.names(custom_only=True) == []

    def test_default_bundles_cannot_be_deleted(self, store):
        assert store.delete_custom("web") is False
        assert store.names() == ["web"]
