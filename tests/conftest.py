"""Pytest fixtures for git-branch-steward tests"""
import io
import tempfile
from pathlib import Path

import pytest
import git
from rich.console import Console

from git_branch_steward.config import Config
from git_branch_steward.core.working_copy import WorkingCopy
from git_branch_steward.services.display_service import DisplayService


def _configure_user(repo):
    writer = repo.config_writer()
    writer.set_value("user", "name", "Test User")
    writer.set_value("user", "email", "test@example.com")
    writer.set_value("commit", "gpgsign", "false")
    writer.release()


def commit_file(repo, name, content, message=None):
    """Write a file, stage it and commit it."""
    path = Path(repo.working_dir) / name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    repo.index.add([name])
    return repo.index.commit(message or f"Update {name}")


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def mock_config():
    """Create a configuration that never prompts on its own."""
    return Config(
        protected_branches=["main", "master"],
        interactive=True,
        sequential=True,
    )


@pytest.fixture
def bare_remote(temp_dir):
    """Create a bare repository acting as origin."""
    remote_path = temp_dir / "remote.git"
    remote = git.Repo.init(remote_path, bare=True)
    remote.git.symbolic_ref("HEAD", "refs/heads/main")
    yield remote
    remote.close()


@pytest.fixture
def git_repo(temp_dir, bare_remote):
    """Create a real Git repository whose main branch tracks origin/main."""
    repo_path = temp_dir / "test_repo"
    repo_path.mkdir()

    repo = git.Repo.init(repo_path)
    _configure_user(repo)

    commit_file(repo, "README.md", "# Test Repository\n", "Initial commit")
    repo.git.branch("-M", "main")

    repo.create_remote("origin", str(bare_remote.git_dir))
    repo.git.push("-u", "origin", "main")

    yield repo

    repo.close()


@pytest.fixture
def local_only_repo(temp_dir):
    """Create a repository with no remote at all."""
    repo_path = temp_dir / "local_repo"
    repo_path.mkdir()

    repo = git.Repo.init(repo_path)
    _configure_user(repo)
    commit_file(repo, "README.md", "# Local\n", "Initial commit")
    repo.git.branch("-M", "main")

    yield repo

    repo.close()


@pytest.fixture
def other_clone(temp_dir, bare_remote, git_repo):
    """A second clone of origin, used to push changes the test repo has not seen."""
    clone = git.Repo.clone_from(str(bare_remote.git_dir), temp_dir / "other_clone")
    _configure_user(clone)
    yield clone
    clone.close()


@pytest.fixture
def git_repo_with_branches(git_repo):
    """Repository with feature-a and feature-b pushed and tracking origin."""
    repo = git_repo

    for name in ("feature-a", "feature-b"):
        repo.git.checkout("-b", name, "main")
        commit_file(repo, f"{name}.txt", f"{name}\n", f"Add {name}")
        repo.git.push("-u", "origin", name)

    repo.git.checkout("main")
    yield repo


@pytest.fixture
def output():
    """Buffer capturing everything the display service prints."""
    return io.StringIO()


@pytest.fixture
def display(output):
    """Display service writing to the output buffer."""
    return DisplayService(console=Console(file=output, width=200))


@pytest.fixture
def working_copy(git_repo, mock_config):
    """Working copy handle on the test repository."""
    return WorkingCopy(git_repo.working_dir, mock_config)
