"""Read-only git queries used by the repository checks."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Protocol, Sequence

logger = logging.getLogger(__name__)

GIT_METADATA_NAME = ".git"

# Characters stripped from both ends of every `git branch` output line.
BRANCH_TRIM_CHARS = " \r\t*"


class SpringCleanError(Exception):
    """Base error for git-springclean."""


class GitQueryError(SpringCleanError):
    """A git query ran but did not produce usable output.

    Scoped to a single check on a single repository.
    """

    def __init__(self, diagnostic: str):
        super().__init__(diagnostic)
        self.diagnostic = diagnostic


class GitUnavailableError(SpringCleanError):
    """The git executable could not be started at all."""


def is_git_repo(path: Path) -> bool:
    """Check if a path is a git repository root.

    Args:
        path: Path to check

    Returns:
        True if the path directly contains a .git entry. A marker that
        cannot be stat'ed counts as absent.
    """
    try:
        return (path / GIT_METADATA_NAME).exists()
    except OSError:
        return False


def parse_branch_list(output: str) -> list[str]:
    """Parse `git branch` output into bare branch names.

    Current-branch markers and surrounding whitespace are stripped,
    detached HEAD placeholders such as ``(HEAD detached at 1a2b3c)`` are
    dropped and only the first token of each line is kept, so
    ``origin/HEAD -> origin/main`` becomes ``origin/HEAD``.
    """
    branches = []
    for line in output.splitlines():
        line = line.strip(BRANCH_TRIM_CHARS)
        if not line or line.startswith("("):
            continue
        branches.append(line.split()[0])
    return branches


class GitRunner(Protocol):
    """Runs a git command inside a working copy and returns its stdout."""

    def run(self, args: Sequence[str], cwd: Path) -> str:
        ...


class SubprocessGitRunner:
    """GitRunner backed by the git executable."""

    def __init__(self, executable: str = "git", timeout: float | None = None):
        self.executable = executable
        self.timeout = timeout

    def run(self, args: Sequence[str], cwd: Path) -> str:
        """Run git and return stdout; raise GitQueryError on failure."""
        cmd = [self.executable, *args]
        logger.debug("Running %s in %s", " ".join(cmd), cwd)
        try:
            result = subprocess.run(
                cmd,
                cwd=cwd,
                capture_output=True,
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired:
            raise GitQueryError(
                f"git {' '.join(args)} timed out after {self.timeout}s"
            ) from None
        except OSError as exc:
            if not Path(cwd).is_dir():
                # The working copy vanished, git itself is fine.
                raise GitQueryError(f"Cannot enter {cwd}: {exc}") from exc
            raise GitUnavailableError(f"Error running {self.executable}: {exc}") from exc

        if result.returncode != 0:
            stderr = result.stderr.decode("utf-8", errors="replace")
            logger.debug("git %s exited with %d in %s", args[0], result.returncode, cwd)
            raise GitQueryError(stderr.rstrip("\n"))

        try:
            return result.stdout.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise GitQueryError(f"Unreadable output from git {' '.join(args)}: {exc}") from exc


class GitQueries:
    """The queries the checks need, bound to one working copy."""

    def __init__(self, runner: GitRunner, path: Path):
        self.runner = runner
        self.path = path

    def status_lines(self) -> list[str]:
        """Lines of `git status --porcelain`, one per changed path."""
        return self.runner.run(["status", "--porcelain"], self.path).splitlines()

    def local_branches(self) -> list[str]:
        return parse_branch_list(self.runner.run(["branch"], self.path))

    def remote_branches(self) -> list[str]:
        return parse_branch_list(self.runner.run(["branch", "-r"], self.path))

    def merged_branches(self, remote: str) -> list[str]:
        """Local branches whose tip is reachable from ``remote``."""
        return parse_branch_list(self.runner.run(["branch", "--merged", remote], self.path))
