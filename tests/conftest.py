"""Pytest configuration and shared fixtures."""

import shutil
import subprocess
import tempfile
from pathlib import Path

import pytest

from springclean.core.git_utils import GitQueryError


class FakeGitRunner:
    """GitRunner that answers from a table of canned outputs.

    Keys are argument tuples such as ``("branch", "-r")``. A value that is
    an exception instance is raised instead of returned.
    """

    def __init__(self, responses=None):
        self.responses = dict(responses or {})
        self.calls = []

    def run(self, args, cwd):
        key = tuple(args)
        self.calls.append((key, cwd))
        response = self.responses.get(key, "")
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    path = Path(tempfile.mkdtemp())
    yield path
    shutil.rmtree(path, ignore_errors=True)


@pytest.fixture
def make_runner():
    """Factory for FakeGitRunner instances."""
    return FakeGitRunner


@pytest.fixture
def failing_status_runner():
    """Runner whose status query fails like git does outside a work tree."""
    return FakeGitRunner({
        ("status", "--porcelain"): GitQueryError("fatal: not a git repository"),
    })


def _git(path, *args):
    subprocess.run(["git", *args], cwd=path, check=True, capture_output=True)


def init_repo(path: Path, branches=("main",)) -> Path:
    """Create a git repository with one commit and the given local branches."""
    path.mkdir(parents=True, exist_ok=True)
    _git(path, "init")
    _git(path, "checkout", "-B", branches[0])
    _git(path, "config", "user.email", "test@example.com")
    _git(path, "config", "user.name", "Test User")
    _git(path, "config", "commit.gpgsign", "false")
    (path / "README.md").write_text("# Repo\n")
    _git(path, "add", "README.md")
    _git(path, "commit", "-m", "init")
    for branch in branches[1:]:
        _git(path, "branch", branch)
    return path


@pytest.fixture
def make_repo():
    """Factory that builds real git repositories."""
    if shutil.which("git") is None:
        pytest.skip("git is not installed")
    return init_repo


@pytest.fixture
def git_repo(temp_dir, make_repo):
    """A committed repository with `main` and `feature` and no remote."""
    return make_repo(temp_dir / "repo", branches=("main", "feature"))


def push_to_remote(path: Path, remote_dir: Path, branches=("main",), name="origin") -> None:
    """Create a bare remote for ``path`` and push the given branches to it."""
    subprocess.run(["git", "init", "--bare", str(remote_dir)], check=True, capture_output=True)
    _git(path, "remote", "add", name, str(remote_dir))
    for branch in branches:
        _git(path, "push", name, branch)


@pytest.fixture
def make_remote():
    """Factory that attaches a bare remote and pushes branches to it."""
    return push_to_remote
