"""
Git history lookups for Tiddlyroam.

This module resolves when a document was created and last modified by
asking Git for the commits that touched it, falling back to the file's
modification time when there is no history to ask.
"""

import logging
import os
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Union

from git import Git  # type: ignore
from git.exc import GitError  # type: ignore

from ..config import ConfigManager


PathLike = Union[str, Path]


def format_timestamp(millis: int) -> str:
    """
    Format milliseconds since the epoch as a 17-digit UTC timestamp.

    Args:
        millis: Milliseconds since the Unix epoch

    Returns:
        The timestamp as YYYYMMDDhhmmssSSS

    Examples:
        format_timestamp(0)  # Returns "19700101000000000"
    """
    moment = datetime.fromtimestamp(millis // 1000, tz=timezone.utc)
    return f"{moment.strftime('%Y%m%d%H%M%S')}{millis % 1000:03d}"


def parse_epoch_seconds(output: str) -> int:
    """Read the first line of git output as epoch seconds; anything else is zero."""
    lines = output.strip().splitlines()
    if not lines:
        return 0
    try:
        return max(int(lines[0].strip()), 0)
    except ValueError:
        return 0


class VersionHistoryResolver(ABC):
    """
    Resolves a document's earliest and latest revision timestamps.

    Subclasses only answer the history query. The fallback to filesystem
    time and the formatting live here so every implementation degrades
    the same way.
    """

    def __init__(self, repo_root: PathLike = "."):
        self.repo_root = Path(repo_root)

    @abstractmethod
    def query_history(self, path: PathLike, repo_root: Path, latest: bool) -> int:
        """
        Look up a commit time for a path.

        Args:
            path: Document path
            repo_root: Repository to search
            latest: True for the newest commit, False for the oldest

        Returns:
            Milliseconds since the epoch, or 0 when there is no history
        """
        pass

    def earliest(self, path: PathLike, repo_root: Optional[PathLike] = None) -> str:
        """Timestamp of the first commit touching path."""
        return self._resolve(path, repo_root, latest=False)

    def latest(self, path: PathLike, repo_root: Optional[PathLike] = None) -> str:
        """Timestamp of the last commit touching path."""
        return self._resolve(path, repo_root, latest=True)

    def _resolve(self, path: PathLike, repo_root: Optional[PathLike], latest: bool) -> str:
        root = Path(repo_root) if repo_root is not None else self.repo_root
        millis = self.query_history(path, root, latest)
        if millis == 0:
            logging.warning(f"No history for {path}, using filesystem modification time")
            millis = self.modification_time(path, root)
        return format_timestamp(millis)

    def modification_time(self, path: PathLike, repo_root: Path) -> int:
        """
        Get a file's modification time in milliseconds.

        Relative paths are taken relative to the repository root. A file
        that cannot be read yields 0.
        """
        file_path = Path(path).expanduser()
        if not file_path.is_absolute():
            file_path = repo_root / file_path

        try:
            return os.stat(file_path).st_mtime_ns // 1_000_000
        except OSError as e:
            logging.warning(f"Cannot read modification time of {file_path}: {e}")
            return 0


class GitHistoryResolver(VersionHistoryResolver):
    """
    Answers history queries by running git log through GitPython.
    """

    def __init__(self, repo_root: PathLike = ".", timeout: Optional[float] = 10.0):
        """
        Initialize the resolver.

        Args:
            repo_root: Repository the queries run against
            timeout: Seconds before a git invocation is killed (None to wait forever)
        """
        super().__init__(repo_root)
        self.timeout = timeout

    @classmethod
    def from_config(cls, config: ConfigManager) -> 'GitHistoryResolver':
        """Build a resolver from the git section of a configuration."""
        return cls(config.repository_root, config.git_timeout)

    def query_history(self, path: PathLike, repo_root: Path, latest: bool) -> int:
        args = ["--format=%ct"]
        if latest:
            args.insert(0, "-1")
        else:
            args.insert(0, "--reverse")
        args.extend(["--", str(path)])

        try:
            output = Git(str(repo_root)).log(*args, kill_after_timeout=self.timeout)
        except (GitError, OSError, ValueError) as e:
            logging.warning(f"Git history query failed for {path} in {repo_root}: {e}")
            return 0

        return parse_epoch_seconds(output) * 1000
