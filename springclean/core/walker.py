"""Repository discovery."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Callable, Iterator

from .config import CheckOptions
from .git_utils import is_git_repo

logger = logging.getLogger(__name__)

RepoCallback = Callable[[Path, CheckOptions], bool]


def _subdirectories(path: Path) -> list[Path]:
    """Immediate subdirectories of ``path``, sorted by name.

    Symlinks are not followed. Entries whose type cannot be read are
    skipped; a directory that cannot be listed yields nothing.
    """
    try:
        with os.scandir(path) as entries:
            children = []
            for entry in entries:
                try:
                    if entry.is_dir(follow_symlinks=False):
                        children.append(Path(entry.path))
                except OSError:
                    continue
    except OSError as exc:
        logger.warning("Cannot list %s: %s", path, exc)
        return []
    return sorted(children, key=lambda p: p.name)


def for_all_git_repos(path: Path, callback: RepoCallback, options: CheckOptions) -> int:
    """Call ``callback`` on every git repository under ``path``.

    A directory holding a .git entry is a repository root and is not
    descended into.

    Returns:
        Number of repositories for which the callback returned False
    """
    if is_git_repo(path):
        return 0 if callback(path, options) else 1

    return sum(for_all_git_repos(child, callback, options) for child in _subdirectories(path))


def find_repo_roots(path: Path) -> Iterator[Path]:
    """Yield repository roots under ``path`` in depth-first order."""
    if is_git_repo(path):
        yield path
        return
    for child in _subdirectories(path):
        yield from find_repo_roots(child)
