"""Per-repository aggregation and reporting."""

from __future__ import annotations

import json
import logging
import sys
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import TextIO

from .checks import ALL_CHECKS, RepoCheck
from .config import CheckOptions
from .git_utils import (
    GitQueries,
    GitQueryError,
    GitRunner,
    GitUnavailableError,
    SubprocessGitRunner,
)
from .walker import find_repo_roots, for_all_git_repos

logger = logging.getLogger(__name__)

ERROR_CODE = "E"


@dataclass
class RepoReport:
    """Combined result of all checks on one repository."""

    path: Path
    summary: str = ""
    messages: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @property
    def is_clean(self) -> bool:
        return not self.summary

    def to_dict(self) -> dict:
        return {
            "path": str(self.path),
            "summary": self.summary,
            "messages": list(self.messages),
            "errors": list(self.errors),
        }


def runner_for(options: CheckOptions) -> SubprocessGitRunner:
    """Build the default git runner for a scan."""
    return SubprocessGitRunner(executable=options.git_executable, timeout=options.timeout)


def check_repo(
    path: Path,
    options: CheckOptions,
    runner: GitRunner,
    checks: tuple[RepoCheck, ...] = ALL_CHECKS,
) -> RepoReport:
    """Run every check on ``path`` and merge the outcomes.

    A failed check contributes its diagnostic to ``errors`` and forces an
    ``E`` at the end of the summary, so a repository with failures is
    never clean.
    """
    queries = GitQueries(runner, path)
    report = RepoReport(path=path)

    for check in checks:
        try:
            outcome = check.run(queries, options)
        except GitQueryError as exc:
            logger.debug("Check %s failed for %s: %s", check.name, path, exc.diagnostic)
            report.errors.append(exc.diagnostic)
            continue
        report.summary += outcome.code
        if outcome.message:
            report.messages.append(outcome.message)

    if report.errors:
        report.summary += ERROR_CODE
    return report


def emit_report(
    report: RepoReport,
    options: CheckOptions,
    out: TextIO | None = None,
    err: TextIO | None = None,
) -> None:
    """Print a report if it has findings or ``show_all`` is set."""
    out = out or sys.stdout
    err = err or sys.stderr

    if report.is_clean and not options.show_all:
        return

    if options.json_output:
        print(json.dumps(report.to_dict()), file=out)
    else:
        print(f"{report.summary:<4} {report.path}", file=out)
        if options.verbose:
            for message in report.messages:
                print(message, file=out)

    for index, error in enumerate(report.errors):
        print(f"[Error{index}]:{error}", file=err)


def git_repo_ok(
    path: Path,
    options: CheckOptions,
    runner: GitRunner | None = None,
    out: TextIO | None = None,
    err: TextIO | None = None,
) -> bool:
    """Check a repository, print the results and return True if all is well."""
    report = check_repo(path, options, runner or runner_for(options))
    emit_report(report, options, out=out, err=err)
    return report.is_clean


def scan(
    options: CheckOptions,
    runner: GitRunner | None = None,
    out: TextIO | None = None,
    err: TextIO | None = None,
) -> int:
    """Scan ``options.path`` and return the number of repositories needing attention."""
    runner = runner or runner_for(options)

    if options.jobs <= 1:
        def callback(path: Path, opts: CheckOptions) -> bool:
            return git_repo_ok(path, opts, runner=runner, out=out, err=err)

        return for_all_git_repos(options.path, callback, options)

    roots = list(find_repo_roots(options.path))
    logger.debug("Found %d repositories under %s", len(roots), options.path)

    failing = 0
    pool = ThreadPoolExecutor(max_workers=options.jobs, thread_name_prefix="git")
    try:
        for report in pool.map(lambda root: check_repo(root, options, runner), roots):
            emit_report(report, options, out=out, err=err)
            if not report.is_clean:
                failing += 1
    except BaseException:
        # GitUnavailableError or an interrupt aborts the scan; drop queued repositories.
        pool.shutdown(wait=False, cancel_futures=True)
        raise
    pool.shutdown()
    return failing
