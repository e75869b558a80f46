"""
Unit tests for link state inspection.
"""

import os

from agskills.skills import (
    list_link_records,
    list_linked_skills,
    points_to,
    resolve_link,
)


def link(path, target):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.symlink_to(target, target_is_directory=True)
    return path


class TestResolveLink:
    """Tests for resolve_link and points_to."""

    def test_relative_target_resolved_from_link_directory(self, temp_dir):
        (temp_dir / "src" / "a").mkdir(parents=True)
        link_path = link(temp_dir / "dst" / "a", os.path.join("..", "src", "a"))
        assert resolve_link(link_path) == temp_dir / "src" / "a"

    def test_not_a_link(self, temp_dir):
        assert resolve_link(temp_dir) is None

    def test_points_to(self, temp_dir):
        (temp_dir / "src").mkdir()
        link_path = link(temp_dir / "l", temp_dir / "src")
        assert points_to(link_path, temp_dir / "src")
        assert not points_to(link_path, temp_dir / "other")
        assert not points_to(temp_dir / "src", temp_dir / "src")


class TestListLinkedSkills:
    """Tests for list_linked_skills and list_link_records."""

    def test_missing_target(self, skills_root, temp_dir):
        assert list_linked_skills(temp_dir / "nope", skills_root) == []

    def test_finds_nested_links(self, skills_root, project_dir):
        target = project_dir / ".claude" / "skills"
        link(target / "a", skills_root / "a")
        link(target / "b" / "c", skills_root / "b" / "c")
        assert list_linked_skills(target, skills_root) == ["a", "b/c"]

    def test_relative_links(self, skills_root, project_dir):
        target = project_dir / "skills"
        link(target / "a", os.path.relpath(skills_root / "a", target))
        assert list_linked_skills(target, skills_root) == ["a"]

    def test_ignores_links_outside_source(self, skills_root, project_dir, temp_dir):
        outside = temp_dir / "elsewhere"
        outside.mkdir()
        target = project_dir / "skills"
        link(target / "x", outside)
        assert list_linked_skills(target, skills_root) == []

    def test_prefix_match_needs_separator(self, skills_root, project_dir, temp_dir):
        sibling = temp_dir / "repo" / "skills-extra"
        sibling.mkdir()
        target = project_dir / "skills"
        link(target / "x", sibling)
        assert list_linked_skills(target, skills_root) == []

    def test_ignores_plain_files_and_directories(self, skills_root, project_dir):
        target = project_dir / "skills"
        (target / "real").mkdir(parents=True)
        (target / "real" / "notes.txt").write_text("mine")
        assert list_linked_skills(target, skills_root) == []

    def test_broken_links_skipped(self, skills_root, project_dir):
        target = project_dir / "skills"
        link(target / "gone", skills_root / "gone")
        assert list_linked_skills(target, skills_root) == []

    def test_does_not_descend_into_linked_directories(self, skills_root, project_dir):
        target = project_dir / "skills"
        # b is a category; linking it must not surface b/c through traversal
        link(target / "b", skills_root / "b")
        assert list_linked_skills(target, skills_root) == ["b"]

    def test_deduplicates(self, skills_root, project_dir):
        target = project_dir / "skills"
        link(target / "a", skills_root / "a")
        link(target / "alias" / "a", skills_root / "a")
        assert list_linked_skills(target, skills_root) == ["a"]

    def test_link_records(self, skills_root, project_dir):
        target = project_dir / "skills"
        link(target / "a", skills_root / "a")
        link(target / "alias", skills_root / "a")
        records = list_link_records(target, skills_root)
        assert [(r.skill_id, r.link_path.name) for r in records] == [("a", "a"), ("a", "alias")]
