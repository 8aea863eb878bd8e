"""Core scanning logic for git-springclean."""

from .checks import ALL_CHECKS, CheckOutcome, UnpushedBranchesCheck, UntrackedModifiedCheck
from .config import CheckOptions
from .git_utils import (
    GitQueries,
    GitQueryError,
    GitRunner,
    GitUnavailableError,
    SpringCleanError,
    SubprocessGitRunner,
    is_git_repo,
    parse_branch_list,
)
from .report import RepoReport, check_repo, emit_report, git_repo_ok, scan
from .walker import find_repo_roots, for_all_git_repos

__all__ = [
    "ALL_CHECKS",
    "CheckOptions",
    "CheckOutcome",
    "GitQueries",
    "GitQueryError",
    "GitRunner",
    "GitUnavailableError",
    "RepoReport",
    "SpringCleanError",
    "SubprocessGitRunner",
    "UnpushedBranchesCheck",
    "UntrackedModifiedCheck",
    "check_repo",
    "emit_report",
    "find_repo_roots",
    "for_all_git_repos",
    "git_repo_ok",
    "is_git_repo",
    "parse_branch_list",
    "scan",
]
