"""Scan configuration."""

from __future__ import annotations

import argparse
import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


def _default_git_executable() -> str:
    return os.environ.get("SPRINGCLEAN_GIT") or "git"


class CheckOptions(BaseModel):
    """Options shared by every check during one scan.

    Built once from the command line and never modified afterwards.
    """

    model_config = ConfigDict(frozen=True)

    path: Path = Field(default_factory=Path.cwd)
    show_all: bool = False
    no_untracked: bool = False
    no_modified: bool = False
    no_unpushed: bool = False
    verbose: bool = False
    json_output: bool = False
    jobs: int = Field(default=1, ge=1)
    timeout: Optional[float] = Field(default=None, gt=0)
    git_executable: str = Field(default_factory=_default_git_executable)

    @classmethod
    def from_args(cls, args: argparse.Namespace, cwd: Path | None = None) -> CheckOptions:
        """Build options from parsed CLI arguments.

        The positional path is joined onto ``cwd`` (the current directory
        by default), so absolute paths are used as given.
        """
        base = cwd or Path.cwd()
        return cls(
            path=base / args.path,
            show_all=args.all,
            no_untracked=args.no_untracked,
            no_modified=args.no_modified,
            no_unpushed=args.no_unpushed,
            verbose=args.verbose,
            json_output=args.json,
            jobs=args.jobs,
            timeout=args.timeout,
        )
