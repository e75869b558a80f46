"""
Unit tests for CLI commands.
"""

from typer.testing import CliRunner

from agskills import __version__
from agskills.cli.app import app
from agskills.skills import BundleStore, list_linked_skills


def invoke(cli_runner: CliRunner, repo, *args: str):
    return cli_runner.invoke(app, ["--repo", str(repo), *args])


def test_version(cli_runner: CliRunner) -> None:
    """Test --version flag."""
    result = cli_runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.stdout


def test_help(cli_runner: CliRunner) -> None:
    """Test --help flag."""
    result = cli_runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    assert "skills" in result.stdout
    assert "bundle" in result.stdout
    assert "links" in result.stdout


def test_skills_list(cli_runner: CliRunner, skills_repo) -> None:
    """Test skills list shows every skill."""
    result = invoke(cli_runner, skills_repo, "skills", "list")
    assert result.exit_code == 0
    assert "b/c" in result.stdout
    assert "Skill A does things" in result.stdout
    assert "Total: 2 skill(s)" in result.stdout


def test_skills_list_without_repo(cli_runner: CliRunner, temp_dir) -> None:
    """Test a missing skills root is a precondition failure."""
    result = invoke(cli_runner, temp_dir, "skills", "list")
    assert result.exit_code == 1
    assert "Could not locate repository root" in result.stdout


def test_repo_from_config(cli_runner: CliRunner, skills_repo, monkeypatch) -> None:
    """Test paths.repo is used when --repo is not given."""
    monkeypatch.setenv("AGSKILLS_PATHS_REPO", str(skills_repo))
    result = cli_runner.invoke(app, ["skills", "list"])
    assert result.exit_code == 0
    assert "Total: 2 skill(s)" in result.stdout


def test_invalid_config(cli_runner: CliRunner, monkeypatch) -> None:
    """Test a broken config file exits with status 1."""
    monkeypatch.setenv("AGSKILLS_LOGGING_LEVEL", "LOUD")
    result = cli_runner.invoke(app, ["skills", "list"])
    assert result.exit_code == 1
    assert "validation failed" in result.stdout


def test_bundle_list(cli_runner: CliRunner, skills_repo) -> None:
    """Test bundle list shows default and custom bundles."""
    BundleStore.for_repo(skills_repo).save_custom("mine", "Mine", ["a"])
    result = invoke(cli_runner, skills_repo, "bundle", "list")
    assert result.exit_code == 0
    assert "web" in result.stdout
    assert "default" in result.stdout
    assert "mine" in result.stdout
    assert "custom" in result.stdout


def test_bundle_manage_requires_tty(cli_runner: CliRunner, skills_repo) -> None:
    """Test interactive commands refuse to run without a terminal."""
    result = invoke(cli_runner, skills_repo, "bundle", "manage")
    assert result.exit_code == 1
    assert "Interactive mode requires a TTY terminal." in result.stdout


def test_bundle_install_requires_path(cli_runner: CliRunner, skills_repo) -> None:
    """Test bundle install without --path."""
    result = invoke(cli_runner, skills_repo, "bundle", "install")
    assert result.exit_code == 1
    assert "--path" in result.stdout


def test_links_manage_rejects_file_path(cli_runner: CliRunner, skills_repo, temp_dir) -> None:
    """Test --path pointing at a file."""
    not_a_dir = temp_dir / "file.txt"
    not_a_dir.write_text("x")
    result = invoke(cli_runner, skills_repo, "links", "manage", "--path", str(not_a_dir))
    assert result.exit_code == 1
    assert "not a directory" in result.stdout


def test_links_sync(cli_runner: CliRunner, skills_repo, skills_root, temp_dir) -> None:
    """Test non-interactive sync against a bundle."""
    project = temp_dir / "new-project"
    result = invoke(
        cli_runner, skills_repo, "links", "sync", "--path", str(project), "--agent", "claude", "--bundle", "web"
    )
    assert result.exit_code == 0
    assert "Added: 2, Removed: 0, Skipped: 0" in result.stdout
    assert list_linked_skills(project / ".claude" / "skills", skills_root) == ["a", "b/c"]


def test_links_sync_prune(cli_runner: CliRunner, skills_repo, skills_root, project_dir) -> None:
    """Test --prune removes links outside the bundle."""
    BundleStore.for_repo(skills_repo).save_custom("only-a", "", ["a"])
    args = ["links", "sync", "--path", str(project_dir), "--agent", "codex"]

    invoke(cli_runner, skills_repo, *args, "--bundle", "web")
    kept = invoke(cli_runner, skills_repo, *args, "--bundle", "only-a")
    assert "Added: 0, Removed: 0" in kept.stdout

    pruned = invoke(cli_runner, skills_repo, *args, "--bundle", "only-a", "--prune")
    assert pruned.exit_code == 0
    assert "Removed: 1" in pruned.stdout
    target = project_dir / ".codex" / "skills"
    assert list_linked_skills(target, skills_root) == ["a"]
    assert not (target / "b").exists()


def test_links_sync_unknown_agent(cli_runner: CliRunner, skills_repo, project_dir) -> None:
    """Test an unknown agent is rejected."""
    result = invoke(
        cli_runner, skills_repo, "links", "sync", "--path", str(project_dir), "--agent", "vim", "--bundle", "web"
    )
    assert result.exit_code == 1
    assert "Unsupported agent: vim" in result.stdout


def test_links_sync_unknown_bundle(cli_runner: CliRunner, skills_repo, project_dir) -> None:
    """Test an unknown bundle is rejected."""
    result = invoke(cli_runner, skills_repo, "links", "sync", "--path", str(project_dir), "--bundle", "nope")
    assert result.exit_code == 1
    assert 'Bundle "nope" not found.' in result.stdout


def test_links_status(cli_runner: CliRunner, skills_repo, skills_root, project_dir) -> None:
    """Test links status lists linked skills per agent."""
    target = project_dir / ".gemini" / "skills"
    target.mkdir(parents=True)
    (target / "a").symlink_to(skills_root / "a")

    result = invoke(cli_runner, skills_repo, "links", "status", "--path", str(project_dir))
    assert result.exit_code == 0
    assert "gemini" in result.stdout
    assert "Total: 1 link(s)" in result.stdout


def test_links_status_empty(cli_runner: CliRunner, skills_repo, project_dir) -> None:
    """Test links status with nothing linked."""
    result = invoke(cli_runner, skills_repo, "links", "status", "--path", str(project_dir), "--agent", "claude")
    assert result.exit_code == 0
    assert "No linked skills." in result.stdout


def test_links_status_unknown_agent(cli_runner: CliRunner, skills_repo, project_dir) -> None:
    """Test links status with an unknown agent."""
    result = invoke(cli_runner, skills_repo, "links", "status", "--path", str(project_dir), "--agent", "vim")
    assert result.exit_code == 1


def test_links_sync_agent_dir_blocked(cli_runner: CliRunner, skills_repo, project_dir) -> None:
    """Test a file where the agent directory belongs fails cleanly."""
    (project_dir / ".claude").write_text("not a directory")
    result = invoke(
        cli_runner, skills_repo, "links", "sync", "--path", str(project_dir), "--agent", "claude", "--bundle", "web"
    )
    assert result.exit_code == 1
    assert "Cannot create agent skills directory" in result.stdout
    assert not isinstance(result.exception, OSError)
