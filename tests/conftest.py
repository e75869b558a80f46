"""
Pytest configuration and fixtures for agskills tests.
"""

import json
import logging
import os
import tempfile
from collections import deque
from collections.abc import Generator, Iterable, Iterator
from contextlib import contextmanager
from pathlib import Path

import pytest
from typer.testing import CliRunner

from agskills.config import Config, clear_config_cache
from agskills.exceptions import NotATerminalError
from agskills.logging_config import LOGGER_NAME
from agskills.ui import Frame, Terminal
from agskills.ui.terminal import KEY_CTRL_C


class ScriptedTerminal(Terminal):
    """Terminal fake that replays a fixed key sequence and records frames."""

    def __init__(
        self,
        keys: Iterable[str] = (),
        width: int = 80,
        height: int = 24,
        interactive: bool = True,
    ):
        self.keys = deque(keys)
        self.width = width
        self.height = height
        self.interactive = interactive
        self.frames: list[Frame] = []
        self.sessions = 0
        self.active = False

    def feed(self, *keys: str) -> None:
        self.keys.extend(keys)

    def check(self) -> None:
        if not self.interactive:
            raise NotATerminalError()

    def size(self) -> tuple[int, int]:
        return self.width, self.height

    def draw(self, frame: Frame) -> None:
        self.frames.append(frame)

    def read_key(self) -> str:
        # An exhausted script behaves like closed input
        return self.keys.popleft() if self.keys else KEY_CTRL_C

    @contextmanager
    def session(self) -> Iterator[None]:
        self.sessions += 1
        self.active = True
        try:
            yield
        finally:
            self.active = False

    @property
    def last_frame(self) -> Frame:
        return self.frames[-1]


class ScriptedPrompt:
    """Prompt fake returning canned answers and recording the questions."""

    def __init__(self, *answers: str):
        self.answers = deque(answers)
        self.questions: list[str] = []

    def __call__(self, text: str) -> str:
        self.questions.append(text)
        return self.answers.popleft() if self.answers else ""


def write_skill(skills_root: Path, skill_id: str, content: str) -> Path:
    """Create <skills_root>/<skill_id>/SKILL.md."""
    skill_dir = skills_root / skill_id
    skill_dir.mkdir(parents=True, exist_ok=True)
    (skill_dir / "SKILL.md").write_text(content, encoding="utf-8")
    return skill_dir


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Keep the user's config, env and logger state out of every test."""
    for key in list(os.environ):
        if key.startswith("AGSKILLS_"):
            monkeypatch.delenv(key)
    monkeypatch.setenv("AGSKILLS_HOME", str(tmp_path / ".agskills-home"))
    clear_config_cache()

    yield

    clear_config_cache()
    logger = logging.getLogger(LOGGER_NAME)
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Typer CLI test runner."""
    return CliRunner()


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Provide a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def skills_repo(temp_dir: Path) -> Path:
    """Provide a skills repository with two skills and one default bundle.

    Layout:
        skills/a/SKILL.md      (front matter description)
        skills/b/c/SKILL.md    (description from the body)
        skills/.hidden/x/SKILL.md
        data/bundles.json      ("web": a, b/c)
    """
    repo = temp_dir / "repo"
    skills_root = repo / "skills"

    write_skill(
        skills_root,
        "a",
        "---\nname: a\ndescription: Skill A does things\n---\n\n# A\n\nBody of A.\n",
    )
    write_skill(skills_root, "b/c", "# Skill C\n\nNested skill under category b.\n")
    write_skill(skills_root, ".hidden/x", "# Hidden\n\nNever listed.\n")

    data = repo / "data"
    data.mkdir()
    (data / "bundles.json").write_text(
        json.dumps(
            {
                "bundles": {
                    "web": {"description": "Web development", "skills": ["a", "b/c"]},
                }
            }
        ),
        encoding="utf-8",
    )
    return repo


@pytest.fixture
def skills_root(skills_repo: Path) -> Path:
    """Provide the skills/ directory of the sample repository."""
    return skills_repo / "skills"


@pytest.fixture
def project_dir(temp_dir: Path) -> Path:
    """Provide an empty project directory."""
    project = temp_dir / "project"
    project.mkdir()
    return project


@pytest.fixture
def terminal() -> ScriptedTerminal:
    """Provide a scripted terminal with no keys queued."""
    return ScriptedTerminal()


@pytest.fixture
def make_terminal() -> type[ScriptedTerminal]:
    """Provide the scripted terminal class for custom sizes or keys."""
    return ScriptedTerminal


@pytest.fixture
def make_prompt() -> type[ScriptedPrompt]:
    """Provide the scripted prompt class."""
    return ScriptedPrompt


@pytest.fixture
def config() -> Config:
    """Provide a default configuration."""
    return Config()


@pytest.fixture
def sample_skill_md() -> str:
    """Provide sample SKILL.md content."""
    return """---
name: test-skill
description: A test skill for unit tests
---

# Test Skill

This is a test skill for unit testing.

## Instructions

1. Do something
2. Do something else
"""
