"""Repository hygiene checks.

Each check returns a CheckOutcome whose code is made of single letters:
U (untracked files), M (modified or staged files) and P (unpushed
branches). A check that cannot run raises GitQueryError instead.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from .config import CheckOptions
from .git_utils import GitQueries

UNPUSHED_MESSAGE = "(P) The following branches were not pushed to any remote: "


@dataclass(frozen=True)
class CheckOutcome:
    """Result of one check on one repository."""

    code: str = ""
    message: str = ""


class RepoCheck(Protocol):
    """A single check run against a working copy."""

    name: str

    def run(self, queries: GitQueries, options: CheckOptions) -> CheckOutcome:
        ...


class UntrackedModifiedCheck:
    """Untracked (U) or modified (M) files, i.e. `git status`."""

    name = "untracked-modified"

    def run(self, queries: GitQueries, options: CheckOptions) -> CheckOutcome:
        untracked = False
        modified = False
        for line in queries.status_lines():
            line = line.strip()
            if not line:
                continue
            if line.startswith("??"):
                untracked = True
            else:
                modified = True

        code = ""
        if untracked and not options.no_untracked:
            code += "U"
        if modified and not options.no_modified:
            code += "M"
        # No verbose detail for this check; the code says it all.
        return CheckOutcome(code)


class UnpushedBranchesCheck:
    """Local branches not merged into any remote branch (P)."""

    name = "unpushed-branches"

    def run(self, queries: GitQueries, options: CheckOptions) -> CheckOutcome:
        if options.no_unpushed:
            return CheckOutcome()

        unpushed = queries.local_branches()
        remotes = queries.remote_branches()

        for remote in remotes:
            if not unpushed:
                break
            merged = set(queries.merged_branches(remote))
            unpushed = [branch for branch in unpushed if branch not in merged]

        if not unpushed:
            return CheckOutcome()
        return CheckOutcome("P", UNPUSHED_MESSAGE + ", ".join(unpushed))


# Order matters: the summary code is built by concatenating outcomes in
# this sequence.
ALL_CHECKS: tuple[RepoCheck, ...] = (
    UntrackedModifiedCheck(),
    UnpushedBranchesCheck(),
)
